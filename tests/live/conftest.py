"""Skip guards for live tests.

Every live test that needs a real FHIR server is guarded by an environment
variable. Tests silently skip when it is absent; they never fail due to
missing config.

Environment variables:
  FHIR_NOTES_LIVE_BASE_URL   FHIR R4 base URL accepting DocumentReference writes
                             (e.g. https://hapi.fhir.org/baseR4)
  FHIR_NOTES_LIVE_TOKEN      Optional bearer token for that server
  FHIR_NOTES_LIVE_PATIENT_ID Patient id that exists on the server (for create tests)

Set them in your shell before running:
  export FHIR_NOTES_LIVE_BASE_URL=https://hapi.fhir.org/baseR4
  pytest tests/live -v -m live
"""

from __future__ import annotations

import json
import os
from pathlib import Path

import pytest


def _skip_unless(env_var: str, reason: str | None = None):
    """Return a pytest.mark.skipif that skips when env_var is not set."""
    msg = reason or f"Set {env_var} to run this test"
    return pytest.mark.skipif(not os.environ.get(env_var), reason=msg)


skip_no_server  = _skip_unless("FHIR_NOTES_LIVE_BASE_URL", "Set FHIR_NOTES_LIVE_BASE_URL to run live FHIR tests")
skip_no_patient = _skip_unless("FHIR_NOTES_LIVE_PATIENT_ID", "Set FHIR_NOTES_LIVE_PATIENT_ID to run create tests")


@pytest.fixture(scope="session")
def live_base_url() -> str:
    url = os.environ.get("FHIR_NOTES_LIVE_BASE_URL", "")
    if not url:
        pytest.skip("FHIR_NOTES_LIVE_BASE_URL not set")
    return url.rstrip("/")


@pytest.fixture
def live_project(tmp_path: Path, live_base_url: str) -> Path:
    """A project whose only config points at the live server."""
    config_dir = tmp_path / ".fhir-configs"
    config_dir.mkdir()
    token = os.environ.get("FHIR_NOTES_LIVE_TOKEN")
    config = {
        "name": "live",
        "fhirBaseUrl": live_base_url,
        "mode": "manual" if token else "open",
    }
    if token:
        config["accessToken"] = token
    (config_dir / "live.json").write_text(json.dumps(config))
    return tmp_path
