from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pagecraft.schemas.personalization import PersonalizationData
from pagecraft.schemas.sections import Section

# Fields written on every save, in persistence order.
TEMPLATE_FIELDS: tuple[str, ...] = ("name", "slug", "sections", "accentColor", "personalizationConfig")


class Template(BaseModel):
    model_config = ConfigDict(validate_assignment=True, extra="ignore")

    id: str = Field(min_length=1)
    slug: str = Field(min_length=1)
    name: str
    sections: list[Section] = Field(default_factory=list)
    accentColor: Optional[str] = None
    personalizationConfig: dict[str, bool] = Field(default_factory=dict)

    @field_validator("sections")
    @classmethod
    def _unique_section_ids(cls, value: list[Any]) -> list[Any]:
        seen: set[str] = set()
        for section in value:
            if section.id in seen:
                raise ValueError(f"Duplicate section id: {section.id!r}")
            seen.add(section.id)
        return value

    def is_enabled(self, capability: str) -> bool:
        # Absent means enabled; only an explicit false disables.
        return self.personalizationConfig.get(capability) is not False

    def section_by_id(self, section_id: str) -> Optional[Section]:
        for section in self.sections:
            if section.id == section_id:
                return section
        return None

    def persisted_fields(self) -> dict[str, Any]:
        dumped = self.model_dump(mode="json")
        return {name: dumped[name] for name in TEMPLATE_FIELDS}


class TemplateUpdateRequest(BaseModel):
    name: Optional[str] = None
    slug: Optional[str] = None
    sections: Optional[list[dict[str, Any]]] = None
    accentColor: Optional[str] = None
    personalizationConfig: Optional[dict[str, bool]] = None


class SectionsValidateRequest(BaseModel):
    sections: list[Any]


class SectionErrorOut(BaseModel):
    index: Optional[int] = None
    id: Optional[str] = None
    errors: list[str]


class SectionsValidateResponse(BaseModel):
    sections: list[Section]
    errors: list[SectionErrorOut] = Field(default_factory=list)


class PaletteEntry(BaseModel):
    type: str
    label: str
    icon: str
    category: str


class RenderRequest(BaseModel):
    data: PersonalizationData = Field(default_factory=PersonalizationData)
    variables: dict[str, str] = Field(default_factory=dict)


class GenerateRequest(BaseModel):
    prompt: str = Field(min_length=1)
    model: Optional[str] = None
