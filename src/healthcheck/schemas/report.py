"""Structured health check report.

The pydantic models below are the single definition of the report shape:
:func:`response_schema` derives the JSON schema sent to the provider from
them, and :func:`parse_report` validates the provider's answer against them.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field


class MaturityLevel(str, Enum):
    BASE = "Livello 1 – Base"
    INTERMEDIATE = "Livello 2 – Intermedio"
    ADVANCED = "Livello 3 – Avanzato"
    BEST_IN_CLASS = "Livello 4 – Best in class"

    @property
    def rank(self) -> int:
        return list(type(self)).index(self) + 1


class Evaluation(str, Enum):
    EXCELLENT = "Eccellente"
    GOOD = "Buono"
    WARNING = "Attenzione"
    CRITICAL = "Critico"


class _ReportPart(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class KpiAnalysis(_ReportPart):
    kpi: str
    value: str
    evaluation: Evaluation
    score: int = Field(ge=1, le=5, description="Score from 1 to 5")
    notes: str


class Recommendation(_ReportPart):
    category: str
    suggestion: str


class StrategyStep(_ReportPart):
    phase: str
    action: str
    details: str


class HealthCheckReport(_ReportPart):
    executive_summary: str = Field(
        alias="executiveSummary",
        description="A professional executive summary of the CMMS health state.",
    )
    overall_maturity_level: MaturityLevel = Field(alias="overallMaturityLevel")
    overall_score: int = Field(
        alias="overallScore",
        ge=0,
        le=100,
        description="A calculated maturity score out of 100 based on the inputs.",
    )
    kpi_analyses: List[KpiAnalysis] = Field(alias="kpiAnalyses")
    recommendations: List[Recommendation]
    quick_wins: List[str] = Field(alias="quickWins")
    strategy_90_days: List[StrategyStep] = Field(
        alias="strategy90Days",
        min_length=3,
        max_length=3,
        description="30, 60 and 90 day phases, in order.",
    )

    def top_recommendations(self, limit: int = 4) -> List[Recommendation]:
        return list(self.recommendations[:limit])

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")


def parse_report(text: str) -> HealthCheckReport:
    """Validate raw provider text. Raises ``pydantic.ValidationError`` on any mismatch."""
    return HealthCheckReport.model_validate_json(text)


def response_schema() -> Dict[str, Any]:
    """Self-contained JSON schema of :class:`HealthCheckReport` for structured output."""
    raw = HealthCheckReport.model_json_schema(by_alias=True)
    defs = raw.pop("$defs", {})
    return _close_objects(_inline_refs(raw, defs))


def _inline_refs(node: Any, defs: Dict[str, Any]) -> Any:
    # Providers reject $ref/$defs; titles are noise for the model.
    if isinstance(node, dict):
        if "$ref" in node:
            target = _inline_refs(defs[node["$ref"].rsplit("/", 1)[-1]], defs)
            extra = {k: _inline_refs(v, defs) for k, v in node.items() if k not in ("$ref", "title")}
            return {**target, **extra}
        out = {}
        for key, value in node.items():
            if key == "title":
                continue
            if key == "properties":
                out[key] = {name: _inline_refs(prop, defs) for name, prop in value.items()}
            else:
                out[key] = _inline_refs(value, defs)
        return out
    if isinstance(node, list):
        return [_inline_refs(v, defs) for v in node]
    return node


def _close_objects(node: Any) -> Any:
    if isinstance(node, dict):
        for value in node.values():
            _close_objects(value)
        if node.get("type") == "object" and "properties" in node:
            node["required"] = list(node["properties"])
            node["additionalProperties"] = False
    elif isinstance(node, list):
        for value in node:
            _close_objects(value)
    return node
