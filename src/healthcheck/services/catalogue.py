from pathlib import Path
import yaml as yaml
from ..schemas.form import FormCatalogue
from ..schemas.inputs import HealthCheckInputs

BASE_DIR = Path(__file__).parent.parent  # services -> healthcheck
DEFAULT_YAML = BASE_DIR / "assets" / "form_fields.yaml"


def load_form_catalogue(path: str | None = None) -> FormCatalogue:
    p = Path(path) if path else DEFAULT_YAML
    if not p.exists():
        raise FileNotFoundError(f"Form catalogue not found: {p}")
    data = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    catalogue = FormCatalogue(**data)

    declared = set(catalogue.index())
    expected = set(HealthCheckInputs.wire_names())
    if declared != expected:
        missing = sorted(expected - declared)
        unknown = sorted(declared - expected)
        raise ValueError(f"Form catalogue {p} does not match inputs (missing: {missing}, unknown: {unknown})")
    for spec in catalogue.fields():
        if spec.kind != HealthCheckInputs.field_kind(spec.name):
            raise ValueError(f"Form catalogue {p}: field {spec.name!r} must be of kind {HealthCheckInputs.field_kind(spec.name)!r}")
    return catalogue
