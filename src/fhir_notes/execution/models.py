"""Pydantic models for FHIR server configs, request specs, and results."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

OPEN_MODE = "open"


class FHIRConfig(BaseModel):
    """One saved server configuration (``.fhir-configs/<name>.json``).

    Field names follow the on-disk camelCase; unknown fields written by the
    setup form (patientId, clientId, ...) are kept.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    name: str
    fhir_base_url: str = Field(..., alias="fhirBaseUrl")
    access_token: str | None = Field(default=None, alias="accessToken")
    mode: str = Field(default="manual", description="'open' disables the Authorization header")
    saved_at: str | None = Field(default=None, alias="savedAt")

    @property
    def sends_token(self) -> bool:
        return bool(self.access_token) and self.mode != OPEN_MODE


class RequestSpec(BaseModel):
    """One HTTP call to the configured FHIR server."""

    method: str = Field(..., description="HTTP method, e.g. 'POST'")
    path: str = Field(..., description="Path appended to fhirBaseUrl, e.g. '/DocumentReference'")
    body_file: Path | None = Field(default=None, description="JSON body; relative to the project root")
    headers: dict[str, str] = Field(default_factory=dict)
    purpose: str = Field(default="", description="Free-text note logged with the request")
    config_name: str | None = None
    caller_dir: Path | None = Field(default=None, description="Where response artifacts are written")


class ExecutionResult(BaseModel):
    """What came back, and where it was written."""

    status: int
    status_text: str = ""
    duration_ms: int
    metadata_path: Path
    body_path: Path
    resource_id: str | None = None
    location: str | None = None

    @property
    def ok(self) -> bool:
        return self.status < 400
