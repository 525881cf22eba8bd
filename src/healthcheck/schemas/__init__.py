from .inputs import HealthCheckInputs, LoginFrequency
from .report import (
    Evaluation,
    HealthCheckReport,
    KpiAnalysis,
    MaturityLevel,
    Recommendation,
    StrategyStep,
    parse_report,
    response_schema,
)

__all__ = [
    "Evaluation",
    "HealthCheckInputs",
    "HealthCheckReport",
    "KpiAnalysis",
    "LoginFrequency",
    "MaturityLevel",
    "Recommendation",
    "StrategyStep",
    "parse_report",
    "response_schema",
]
