"""Shared pytest fixtures, factories, and test markers.

Test tiers
----------
  unit        Fast, fully offline, zero external dependencies.
              Always run.

  integration Mock external services. Always run. Validates the
              localize -> write -> execute flow without real network calls.

  quality     Deep validation: FHIR R4 structure for every document type,
              property-based (Hypothesis). Always run offline.

  live        Real FHIR server calls. Skipped unless FHIR_NOTES_LIVE_BASE_URL
              is set. See tests/live/conftest.py for guards.

Run specific tiers:
  pytest tests/unit tests/integration tests/quality   # offline only
  pytest tests/live -m live                           # live only
  pytest tests/ -v                                    # everything
"""

from __future__ import annotations

import json
from collections.abc import Callable
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import pytest

from fhir_notes.localization import LocalizationOptions


# ---------------------------------------------------------------------------
# Pytest markers
# ---------------------------------------------------------------------------

def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast offline unit tests")
    config.addinivalue_line("markers", "integration: mock-based integration tests")
    config.addinivalue_line("markers", "quality: schema, deep-validation, property-based")
    config.addinivalue_line("markers", "live: requires a real FHIR server (skipped by default)")


# ---------------------------------------------------------------------------
# Clock / options fixtures
# ---------------------------------------------------------------------------

FIXED_NOW = datetime(2025, 1, 15, 14, 30, 5, tzinfo=timezone.utc)

SAMPLE_CONTAINED_ENCOUNTER: dict[str, Any] = {
    "resourceType": "Encounter",
    "id": "e1",
    "status": "finished",
    "class": {
        "system": "http://terminology.hl7.org/CodeSystem/v3-ActCode",
        "code": "AMB",
    },
    "subject": {"reference": "Patient/patient-123"},
    "period": {"start": "2025-01-15T10:00:00Z", "end": "2025-01-15T11:00:00Z"},
}


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def make_options() -> Callable[..., LocalizationOptions]:
    """Factory for in-memory (write_to_file=False) localization options."""
    def _make(doc_type: str = "consultation", **overrides: Any) -> LocalizationOptions:
        fields: dict[str, Any] = {
            "type": doc_type,
            "patient_id": "patient-123",
            "server": "smart",
            "write_to_file": False,
        }
        fields.update(overrides)
        return LocalizationOptions(**fields)

    return _make


# ---------------------------------------------------------------------------
# Project / config fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """A project directory with an empty .fhir-configs directory."""
    root = tmp_path / "project"
    (root / ".fhir-configs").mkdir(parents=True)
    return root


@pytest.fixture
def config_dir(project_root: Path) -> Path:
    return project_root / ".fhir-configs"


@pytest.fixture
def write_config(config_dir: Path) -> Callable[..., Path]:
    """Write ``.fhir-configs/<name>.json`` and return its path."""
    def _write(
        name: str = "smart",
        base_url: str = "https://fhir.example.com/r4",
        access_token: str | None = "test-token",
        mode: str = "manual",
        **extra: Any,
    ) -> Path:
        config: dict[str, Any] = {"name": name, "fhirBaseUrl": base_url, "mode": mode, **extra}
        if access_token is not None:
            config["accessToken"] = access_token
        path = config_dir / f"{name}.json"
        path.write_text(json.dumps(config, indent=2))
        return path

    return _write


@pytest.fixture
def body_file(project_root: Path) -> Path:
    """A DocumentReference body at <project>/bodies/doc.json."""
    path = project_root / "bodies" / "doc.json"
    path.parent.mkdir()
    path.write_text(json.dumps({"resourceType": "DocumentReference", "status": "current"}))
    return path
