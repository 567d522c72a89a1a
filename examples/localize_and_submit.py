"""Example: localize every document type and (mock-)submit one to a FHIR server.

Usage:
    python examples/localize_and_submit.py
"""

from __future__ import annotations

import json
import sys
import tempfile
from pathlib import Path
from unittest.mock import MagicMock

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from fhir_notes.execution import RequestSpec, execute
from fhir_notes.execution.config_store import save_config
from fhir_notes.fhir import DocumentReferenceValidator
from fhir_notes.localization import TEMPLATE_MAPPINGS, LocalizationOptions, localize
from fhir_notes.log_config import configure_logging


def main() -> None:
    configure_logging()
    print("=== FHIR DocumentReference Localize + Submit Demo ===\n")

    with tempfile.TemporaryDirectory() as tmp:
        project = Path(tmp)

        # 1. Save a server config the way the setup form would
        save_config(
            project / ".fhir-configs",
            {"name": "demo", "fhirBaseUrl": "https://fhir.example.org/r4", "accessToken": "demo-token"},
        )

        # 2. Localize every document type
        for doc_type in TEMPLATE_MAPPINGS:
            result = localize(
                LocalizationOptions(
                    type=doc_type,
                    patient_id="patient-123",
                    server="demo",
                    patient_name="Jane Doe",
                    encounter_reference="Encounter/visit-789",
                ),
                project_root=project,
            )
            DocumentReferenceValidator.validate_r4_schema(result.document)
            print(f"{doc_type:18} {result.mapping.content_type:28} {result.content_size:>9} bytes")
        print()

        consult = project / "localized" / "demo" / "consultation-note.json"
        print("Decoded consultation note:")
        print(DocumentReferenceValidator.decode_content(json.loads(consult.read_text())))

        # 3. Mock the FHIR server and POST the consultation note
        mock_response = MagicMock()
        mock_response.status_code = 201
        mock_response.reason = "Created"
        mock_response.text = json.dumps({"resourceType": "DocumentReference", "id": "dr-created-001"})
        mock_response.headers = {"Location": "https://fhir.example.org/r4/DocumentReference/dr-created-001"}

        mock_session = MagicMock()
        mock_session.request.return_value = mock_response

        outcome = execute(
            RequestSpec(
                method="POST",
                path="/DocumentReference",
                body_file=consult.relative_to(project),
                purpose="create consultation note",
                caller_dir=project / "artifacts",
            ),
            session=mock_session,
            start_dir=project,
        )

        print(f"\nCreated DocumentReference: {outcome.resource_id}")
        print("Response metadata:")
        print(outcome.metadata_path.read_text())


if __name__ == "__main__":
    main()
