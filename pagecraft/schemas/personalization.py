from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PersonalizationData(BaseModel):
    model_config = ConfigDict(extra="ignore")

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    company: Optional[str] = None
    full_name: Optional[str] = None
    landing_page: Optional[str] = None
    custom_field: Optional[str] = None

    def resolved_full_name(self) -> str:
        if self.full_name:
            return self.full_name
        return f"{self.first_name or ''} {self.last_name or ''}".strip()


def normalize_token(token: str) -> str:
    cleaned = token.strip()
    if cleaned.startswith("{{") and cleaned.endswith("}}"):
        return cleaned
    cleaned = cleaned.strip("{}").strip()
    return f"{{{{{cleaned}}}}}"


class CustomVariable(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: Optional[str] = None
    name: str = Field(min_length=1)
    token: str = Field(min_length=1)
    fallback_value: str = ""

    @field_validator("token")
    @classmethod
    def _normalize_token(cls, value: str) -> str:
        return normalize_token(value)

    @property
    def token_name(self) -> str:
        return self.token[2:-2].strip()


class CustomVariableUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    token: Optional[str] = Field(default=None, min_length=1)
    fallback_value: Optional[str] = None

    @field_validator("token")
    @classmethod
    def _normalize_token(cls, value: Optional[str]) -> Optional[str]:
        return normalize_token(value) if value is not None else None
