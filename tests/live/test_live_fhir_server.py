"""Live FHIR R4 checks against a real server.

$validate is a FHIR operation that returns an OperationOutcome with real
schema errors; HAPI's public R4 server supports it without credentials.

What is validated:
  - every localized document type passes the server's $validate operation
    (warnings are acceptable)
  - a localized consultation note can be created and read back through the
    executor, with artifacts written for both calls

Run:
  FHIR_NOTES_LIVE_BASE_URL=https://hapi.fhir.org/baseR4 pytest tests/live -v -m live
"""

from __future__ import annotations

import json
import os
from pathlib import Path

import pytest
import requests

from fhir_notes.execution import RequestSpec, execute
from fhir_notes.localization import TEMPLATE_MAPPINGS, LocalizationOptions, localize
from tests.live.conftest import skip_no_patient, skip_no_server

pytestmark = [pytest.mark.live, skip_no_server]

TIMEOUT_S = 60


def _post_validate(base_url: str, doc_ref: dict) -> requests.Response:
    return requests.post(
        f"{base_url}/DocumentReference/$validate",
        json=doc_ref,
        headers={"Content-Type": "application/fhir+json", "Accept": "application/fhir+json"},
        timeout=TIMEOUT_S,
    )


def _has_errors(operation_outcome: dict) -> list[str]:
    """Error messages from an OperationOutcome, empty if none.

    Reference-resolution failures are excluded: synthetic ids such as
    Patient/patient-live-001 never resolve on a shared server.
    """
    errors = []
    for issue in operation_outcome.get("issue", []):
        if issue.get("severity") in ("error", "fatal"):
            diagnostics = issue.get("diagnostics", issue.get("details", {}).get("text", str(issue)))
            if isinstance(diagnostics, str) and diagnostics.startswith(
                "Unable to resolve resource with reference "
            ):
                continue
            errors.append(diagnostics)
    return errors


def _localized(doc_type: str, patient_id: str = "patient-live-001") -> dict:
    options = LocalizationOptions(
        type=doc_type,
        patient_id=patient_id,
        server="live",
        encounter_reference="Encounter/encounter-live-001",
        write_to_file=False,
    )
    return localize(options).document


class TestValidateOperation:

    @pytest.mark.parametrize("doc_type", sorted(set(TEMPLATE_MAPPINGS) - {"large"}))
    def test_document_passes_server_validation(self, live_base_url: str, doc_type: str) -> None:
        response = _post_validate(live_base_url, _localized(doc_type))
        assert response.status_code in (200, 201, 400, 412, 422), (
            f"$validate returned unexpected status {response.status_code}"
        )
        outcome = response.json()
        assert outcome["resourceType"] == "OperationOutcome"
        errors = _has_errors(outcome)
        assert not errors, f"{doc_type} failed server validation:\n" + "\n".join(errors)


@skip_no_patient
class TestCreateAndRead:

    def test_create_then_read(self, live_project: Path, tmp_path: Path) -> None:
        patient_id = os.environ["FHIR_NOTES_LIVE_PATIENT_ID"]
        body = live_project / "body.json"
        body.write_text(json.dumps(_localized("consultation", patient_id)))

        created = execute(
            RequestSpec(method="POST", path="/DocumentReference", body_file=body,
                        purpose="live create", caller_dir=tmp_path / "create"),
            start_dir=live_project,
        )
        assert created.status == 201
        assert created.resource_id

        read = execute(
            RequestSpec(method="GET", path=f"/DocumentReference/{created.resource_id}",
                        caller_dir=tmp_path / "read"),
            start_dir=live_project,
        )
        stored = json.loads(read.body_path.read_text())
        assert stored["subject"]["reference"] == f"Patient/{patient_id}"
