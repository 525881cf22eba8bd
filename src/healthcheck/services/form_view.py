from __future__ import annotations
from typing import Any, Dict, Optional

from markupsafe import escape

from ..schemas.form import FieldSpec, FormCatalogue
from .report_view import PAGE_STYLES

FORM_STYLES = """
      .form-grid { display:grid; grid-template-columns:1fr; gap:16px; }
      @media (min-width: 700px) { .form-grid { grid-template-columns:1fr 1fr; } }
      .form-label { font-weight:600; display:block; }
      .form-description { font-size:12px; color:var(--muted); margin:4px 0 6px; }
      .form-input, .form-select { width:100%; padding:8px 10px; border:1px solid var(--line); border-radius:8px; box-sizing:border-box; }
      .input-wrapper { display:flex; align-items:center; gap:6px; }
      .error-banner { background:#fef2f2; color:#b91c1c; border:1px solid #fca5a5; padding:12px 16px; border-radius:8px; margin-bottom:16px; }
      .btn-primary { width:100%; padding:14px; border:none; border-radius:10px; background:var(--ink); color:#fff; font-size:18px; font-weight:700; cursor:pointer; }
      .tag { display:inline-block; background:#f7f7f7; border:1px solid #ddd; border-radius:8px; padding:2px 10px; margin:2px; font-size:12px; }
"""


def _display(value: Any) -> str:
    return "" if value is None else str(value)


def _render_field(spec: FieldSpec, value: Any) -> str:
    description = f'<p class="form-description">{escape(spec.description)}</p>' if spec.description else ""
    if spec.kind == "select":
        options = "".join(
            f'<option value="{escape(opt)}"{" selected" if opt == value else ""}>{escape(opt)}</option>'
            for opt in spec.options
        )
        control = (
            f'<select class="form-select" name="{escape(spec.name)}" id="{escape(spec.name)}">'
            f'<option value="">Seleziona...</option>{options}</select>'
        )
    else:
        unit = f"<span>{escape(spec.unit)}</span>" if spec.unit else ""
        control = (
            f'<div class="input-wrapper"><input class="form-input" type="number" step="any" '
            f'name="{escape(spec.name)}" id="{escape(spec.name)}" value="{escape(_display(value))}" '
            f'placeholder="{escape(spec.placeholder or "")}"/>{unit}</div>'
        )
    return f"""          <div class="form-group">
            <label class="form-label" for="{escape(spec.name)}">{escape(spec.label)}</label>
            {description}
            {control}
          </div>"""


def render_form(
    catalogue: FormCatalogue,
    values: Dict[str, Any],
    error: Optional[str] = None,
    generate_url: str = "generate",
) -> str:
    """Render the KPI form. ``values`` is keyed by wire name (``HealthCheckInputs.to_wire()``)."""

    sections = "\n".join(
        f"""      <div class="card">
        <div class="section-title">{escape(section.title)}</div>
        <div class="form-grid">
{chr(10).join(_render_field(f, values.get(f.name)) for f in section.fields)}
        </div>
      </div>"""
        for section in catalogue.sections
    )
    error_banner = f'<div class="error-banner" role="alert">{escape(error)}</div>' if error else ""
    steps = "\n".join(f"          <li>{escape(s)}</li>" for s in catalogue.steps)
    tags = "".join(f'<span class="tag">{escape(t)}</span>' for t in catalogue.focus_areas)

    return f"""<!doctype html>
    <html lang="it">
    <head>
      <meta charset="utf-8"/>
      <meta name="viewport" content="width=device-width,initial-scale=1"/>
      <title>{escape(catalogue.title)}</title>
      <style>{PAGE_STYLES}{FORM_STYLES}</style>
    </head>
    <body>
    <div class="wrap">
      <div class="header">
        <div class="title">{escape(catalogue.title)}</div>
        <div class="muted">{escape(catalogue.subtitle)}</div>
      </div>
      {error_banner}
      <div class="grid">
        <form method="post" action="{escape(generate_url)}">
          <p class="muted">{escape(catalogue.intro)}</p>
{sections}
          <button type="submit" class="btn-primary">Avvia Health Check</button>
        </form>
        <div class="card">
          <div class="section-title">Come funziona?</div>
          <ol>
{steps}
          </ol>
          <div class="small muted">Analizziamo</div>
          <div>{tags}</div>
        </div>
      </div>
    </div>
    </body>
    </html>"""
