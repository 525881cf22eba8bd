import pytest
import yaml
from pydantic import ValidationError

from healthcheck.schemas.inputs import HealthCheckInputs, LoginFrequency
from healthcheck.services.catalogue import DEFAULT_YAML, load_form_catalogue


def test_default_catalogue_covers_every_input():
    catalogue = load_form_catalogue()
    assert set(catalogue.index()) == set(HealthCheckInputs.wire_names())
    assert [s.id for s in catalogue.sections] == ["general", "work_orders", "performance", "adoption"]


def test_login_frequency_options_match_enum():
    spec = load_form_catalogue().index()["avgLoginFrequency"]
    assert spec.kind == "select"
    assert spec.options == [f.value for f in LoginFrequency]


def test_units():
    index = load_form_catalogue().index()
    assert index["mttr"].unit == "h"
    assert index["slaCompliance"].unit == "%"
    assert index["backlog"].unit is None


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_form_catalogue(str(tmp_path / "nope.yaml"))


def test_catalogue_must_match_inputs(tmp_path):
    data = yaml.safe_load(DEFAULT_YAML.read_text(encoding="utf-8"))
    data["sections"][0]["fields"].pop(0)
    data["sections"][0]["fields"].append({"name": "uptime", "label": "Uptime"})
    path = tmp_path / "fields.yaml"
    path.write_text(yaml.safe_dump(data, allow_unicode=True), encoding="utf-8")

    with pytest.raises(ValueError) as exc_info:
        load_form_catalogue(str(path))
    assert "activeAssets" in str(exc_info.value)
    assert "uptime" in str(exc_info.value)


def test_field_kind_must_match_inputs(tmp_path):
    data = yaml.safe_load(DEFAULT_YAML.read_text(encoding="utf-8"))
    data["sections"][0]["fields"][0].update(kind="select", options=["a", "b"])
    path = tmp_path / "fields.yaml"
    path.write_text(yaml.safe_dump(data, allow_unicode=True), encoding="utf-8")

    with pytest.raises(ValueError):
        load_form_catalogue(str(path))


def test_select_needs_options(tmp_path):
    data = yaml.safe_load(DEFAULT_YAML.read_text(encoding="utf-8"))
    data["sections"][3]["fields"][-1]["options"] = []
    path = tmp_path / "fields.yaml"
    path.write_text(yaml.safe_dump(data, allow_unicode=True), encoding="utf-8")

    with pytest.raises(ValidationError):
        load_form_catalogue(str(path))
