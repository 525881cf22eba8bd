from typing import Dict, List, Literal, Optional
from pydantic import BaseModel, Field, model_validator


class FieldSpec(BaseModel):
    name: str  # wire name of the input
    label: str
    description: Optional[str] = None
    placeholder: Optional[str] = None
    unit: Optional[str] = None
    kind: Literal["number", "select"] = "number"
    options: List[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_options(self):
        if self.kind == "select" and not self.options:
            raise ValueError(f"select field {self.name!r} needs options")
        return self


class FormSection(BaseModel):
    id: str
    title: str
    fields: List[FieldSpec]


class FormCatalogue(BaseModel):
    title: str
    subtitle: str = ""
    intro: str = ""
    sections: List[FormSection]
    steps: List[str] = Field(default_factory=list)
    focus_areas: List[str] = Field(default_factory=list)

    def fields(self) -> List[FieldSpec]:
        return [f for s in self.sections for f in s.fields]

    def index(self) -> Dict[str, FieldSpec]:
        return {f.name: f for f in self.fields()}
