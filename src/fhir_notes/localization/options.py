"""Caller-supplied localization parameters."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Union

from pydantic import BaseModel, Field, field_validator

from ..errors import TemplateDataError


class RawContained(BaseModel):
    """A contained resource given as JSON text (CLI input)."""

    text: str

    def resolve(self) -> dict[str, Any]:
        try:
            resource = json.loads(self.text)
        except json.JSONDecodeError as exc:
            raise TemplateDataError(
                f"Invalid JSON in --encounter-contained: {exc.msg} ({self.text!r})"
            ) from exc
        if not isinstance(resource, dict):
            raise TemplateDataError(
                f"--encounter-contained must be a JSON object, got {self.text!r}"
            )
        return resource


class ParsedContained(BaseModel):
    """A contained resource given as an already-parsed object (library input)."""

    resource: dict[str, Any]

    def resolve(self) -> dict[str, Any]:
        return self.resource


ContainedResource = Union[RawContained, ParsedContained]


class LocalizationOptions(BaseModel):
    """Parameters for one localization. Optional fields fall back to fixed literals."""

    type: str = Field(..., description="Key into TEMPLATE_MAPPINGS")
    patient_id: str = Field(..., description="FHIR Patient logical id")
    server: str = Field(..., description="Server name; names the default output directory")
    patient_name: str | None = None
    author_reference: str | None = None
    author_display: str | None = None
    encounter_reference: str | None = Field(
        default=None, description="'Encounter/<id>' or '#<id>' for a contained encounter"
    )
    encounter_display: str | None = None
    encounter_contained: ContainedResource | None = None
    identifier_system: str | None = None
    output_dir: Path | None = None
    write_to_file: bool = True

    @field_validator("type", "patient_id", "server")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("must not be empty")
        return v

    @field_validator("encounter_contained", mode="before")
    @classmethod
    def _tag_contained(cls, v: Any) -> Any:
        if v == "" or v == {}:
            return None
        if isinstance(v, str):
            return RawContained(text=v)
        if isinstance(v, dict):
            return ParsedContained(resource=v)
        return v

    def resolved_contained(self) -> dict[str, Any] | None:
        if self.encounter_contained is None:
            return None
        return self.encounter_contained.resolve()
