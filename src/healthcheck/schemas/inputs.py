from __future__ import annotations

import math
from enum import Enum
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..errors import InvalidFieldValueError, UnknownFieldError


class LoginFrequency(str, Enum):
    DAILY = "Giornaliera"
    WEEKLY = "Settimanale"
    MONTHLY = "Mensile"
    OCCASIONAL = "Saltuaria"


Number = Union[int, float]

NUMERIC_FIELDS = (
    "active_assets",
    "technicians",
    "backlog",
    "wo_created_30_days",
    "wo_closed_30_days",
    "mttr",
    "preventive_percentage",
    "sla_compliance",
    "data_completeness",
    "checklist_usage",
    "automation_count",
)
CHOICE_FIELDS = ("avg_login_frequency",)


class HealthCheckInputs(BaseModel):
    """KPIs of one facility. ``None`` means the caller does not know the metric."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    # General
    active_assets: Optional[Number] = Field(None, alias="activeAssets")
    technicians: Optional[Number] = Field(None, alias="technicians")

    # Work orders
    backlog: Optional[Number] = Field(None, alias="backlog")
    wo_created_30_days: Optional[Number] = Field(None, alias="woCreated30Days")
    wo_closed_30_days: Optional[Number] = Field(None, alias="woClosed30Days")

    # Performance
    mttr: Optional[Number] = Field(None, alias="mttr", description="Hours")
    preventive_percentage: Optional[Number] = Field(None, alias="preventivePercentage")
    sla_compliance: Optional[Number] = Field(None, alias="slaCompliance")

    # Adoption & quality
    data_completeness: Optional[Number] = Field(None, alias="dataCompleteness")
    checklist_usage: Optional[Number] = Field(None, alias="checklistUsage")
    automation_count: Optional[Number] = Field(None, alias="automationCount")
    avg_login_frequency: Optional[LoginFrequency] = Field(None, alias="avgLoginFrequency")

    @field_validator(*NUMERIC_FIELDS, mode="before")
    @classmethod
    def _parse_number(cls, v: Any):
        if v is None:
            return None
        if isinstance(v, bool):
            raise ValueError("expected a number")
        if isinstance(v, str):
            s = v.strip()
            if not s:
                return None
            try:
                v = float(s)
            except ValueError:
                raise ValueError("expected a number") from None
        if isinstance(v, float):
            if not math.isfinite(v):
                raise ValueError("expected a finite number")
            if v.is_integer():
                return int(v)
        return v

    @field_validator(*CHOICE_FIELDS, mode="before")
    @classmethod
    def _blank_choice(cls, v: Any):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    # ------------------------------------------------------------------
    @classmethod
    def wire_names(cls) -> Dict[str, str]:
        """Map wire (camelCase) names to attribute names."""
        return {f.alias or name: name for name, f in cls.model_fields.items()}

    @classmethod
    def resolve_field(cls, name: str) -> str:
        if name in cls.model_fields:
            return name
        try:
            return cls.wire_names()[name]
        except KeyError:
            raise UnknownFieldError(name) from None

    @classmethod
    def field_kind(cls, name: str) -> str:
        return "select" if cls.resolve_field(name) in CHOICE_FIELDS else "number"

    def with_field(self, name: str, value: Any) -> "HealthCheckInputs":
        """Return a copy with one field replaced; the instance itself never changes."""
        return self.with_fields({name: value})

    def with_fields(self, values: Dict[str, Any]) -> "HealthCheckInputs":
        """Return a copy with several fields replaced.

        Every value is validated before any is applied: on error nothing changes
        and the first offending field is reported by wire name.
        """
        fields = type(self).model_fields
        data = self.to_wire()
        for name, value in values.items():
            attr = self.resolve_field(name)
            data[fields[attr].alias or attr] = value
        try:
            return type(self).model_validate(data)
        except ValidationError as exc:
            errors = exc.errors()
            loc = errors[0].get("loc") if errors else ()
            alias = str(loc[0]) if loc else ""
            reason = errors[0].get("msg", "") if errors else ""
            raise InvalidFieldValueError(alias, data.get(alias), reason) from exc

    def to_wire(self) -> Dict[str, Any]:
        """JSON-ready mapping keyed by wire name; unset fields stay ``None``."""
        return self.model_dump(by_alias=True, mode="json")

    def is_empty(self) -> bool:
        return all(v is None for v in self.to_wire().values())
