from __future__ import annotations
from datetime import datetime
from typing import Optional

from markupsafe import escape

from ..schemas.report import Evaluation, HealthCheckReport

EVALUATION_CLASS = {
    Evaluation.EXCELLENT: "eval-excellent",
    Evaluation.GOOD: "eval-good",
    Evaluation.WARNING: "eval-warning",
    Evaluation.CRITICAL: "eval-critical",
}

PAGE_STYLES = """
      :root {
        --ink:#3f4142; --muted:#6b7280; --line:#e5e7eb; --card:#ffffff; --bg:#f7f7f7;
        --ok:#16a34a; --good:#2563eb; --warn:#ca8a04; --bad:#dc2626;
      }
      body { margin:0; font-family: ui-sans-serif, system-ui, -apple-system, Segoe UI, Roboto, Arial; background:var(--bg); color:var(--ink); }
      .wrap { max-width:1100px; margin:32px auto; padding:0 16px; }
      .header { display:flex; align-items:center; justify-content:space-between; gap:16px; margin-bottom:24px; }
      .title { font-size:24px; font-weight:700; }
      .card { background:var(--card); border:1px solid var(--line); border-radius:12px; padding:20px; margin-bottom:16px; }
      .hero { background:var(--ink); color:#fff; }
      .hero .muted { color:#d1d5db; }
      .muted { color:var(--muted); }
      .small { font-size:12px; }
      .section-title { font-size:18px; font-weight:700; margin:0 0 12px; }
      .score { font-size:40px; font-weight:800; }
      .grid { display:grid; grid-template-columns:1fr; gap:16px; }
      @media (min-width: 900px) { .grid { grid-template-columns:1fr 1fr; } }
      table { width:100%; border-collapse:collapse; }
      th, td { padding:10px 12px; border-bottom:1px solid var(--line); text-align:left; font-size:14px; vertical-align:top; }
      .badge { display:inline-block; padding:2px 10px; border-radius:6px; border:1px solid currentColor; font-size:12px; font-weight:700; }
      .score-1, .score-2 { color:var(--bad); }
      .score-3 { color:var(--warn); }
      .score-4 { color:var(--good); }
      .score-5 { color:var(--ok); }
      .eval-excellent { color:var(--ok); }
      .eval-good { color:var(--good); }
      .eval-warning { color:var(--warn); }
      .eval-critical { color:var(--bad); }
      .phase { border-left:4px solid var(--ink); padding:8px 16px; margin-bottom:12px; }
      .actions { display:flex; justify-content:space-between; align-items:center; }
      .actions button { cursor:pointer; border-radius:8px; padding:8px 20px; font-weight:700; }
      .btn-link { background:none; border:none; text-decoration:underline; color:var(--muted); }
      .btn-dark { background:var(--ink); color:#fff; border:none; }
      @media print { .no-print { display:none; } }
"""


def _score_badge(score: int) -> str:
    return f'<span class="badge score-{int(score)}">{int(score)}/5</span>'


def render_report(report: HealthCheckReport, title: Optional[str] = None, reset_url: str = "reset") -> str:
    """
    Render a validated report as a standalone HTML page.

    Lists keep the order the provider returned them in; only the first four
    recommendations are shown.
    """

    page_title = escape(title or "mainsim CMMS HealthCheck")
    build_tag = datetime.now().strftime("%Y-%m-%d %H:%M:%S")

    kpi_rows = "\n".join(
        f"""          <tr>
            <td>{escape(k.kpi)}</td>
            <td>{escape(k.value)}</td>
            <td><span class="{EVALUATION_CLASS[k.evaluation]}">{escape(k.evaluation.value)}</span></td>
            <td>{_score_badge(k.score)}</td>
            <td class="muted">{escape(k.notes)}</td>
          </tr>"""
        for k in report.kpi_analyses
    )

    recommendations = "\n".join(
        f"""        <div class="recommendation">
          <div class="small muted">{escape(r.category)}</div>
          <div>{escape(r.suggestion)}</div>
        </div>"""
        for r in report.top_recommendations(4)
    )

    quick_wins = "\n".join(f"          <li>{escape(w)}</li>" for w in report.quick_wins)

    phases = "\n".join(
        f"""      <div class="phase">
        <div class="small muted">{escape(s.phase)}</div>
        <div><strong>{escape(s.action)}</strong></div>
        <div class="muted">{escape(s.details)}</div>
      </div>"""
        for s in report.strategy_90_days
    )

    html = f"""<!doctype html>
    <html lang="it">
    <head>
      <meta charset="utf-8"/>
      <meta name="viewport" content="width=device-width,initial-scale=1"/>
      <title>{page_title}</title>
      <style>{PAGE_STYLES}</style>
    </head>
    <body>
    <div class="wrap">
      <!-- BUILD:{build_tag} -->
      <div class="actions no-print">
        <form method="post" action="{escape(reset_url)}"><button type="submit" class="btn-link">&larr; Nuova Analisi</button></form>
        <button type="button" class="btn-dark" onclick="window.print()">Esporta PDF</button>
      </div>

      <div class="card hero">
        <div class="header">
          <div>
            <div class="title">Executive Summary</div>
            <div class="muted small">{page_title}</div>
          </div>
          <div>
            <div class="small muted">Livello di maturità</div>
            <div class="maturity-level">{escape(report.overall_maturity_level.value)}</div>
          </div>
          <div class="score" title="Punteggio complessivo">{report.overall_score}<span class="small">/100</span></div>
        </div>
        <p>{escape(report.executive_summary)}</p>
      </div>

      <div class="card">
        <div class="section-title">Analisi KPI</div>
        <table id="kpiTable">
          <thead>
            <tr><th>KPI</th><th>Valore</th><th>Valutazione</th><th>Punteggio</th><th>Note</th></tr>
          </thead>
          <tbody>
{kpi_rows}
          </tbody>
        </table>
      </div>

      <div class="grid">
        <div class="card">
          <div class="section-title">Raccomandazioni</div>
{recommendations}
        </div>
        <div class="card">
          <div class="section-title">Quick Wins</div>
          <ul id="quickWins">
{quick_wins}
          </ul>
        </div>
      </div>

      <div class="card">
        <div class="section-title">Strategia 30/60/90 giorni</div>
{phases}
      </div>
    </div>
    </body>
    </html>"""

    return html
