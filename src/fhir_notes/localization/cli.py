"""fhir-localize: write a localized DocumentReference for one document type.

Examples:
  # No encounter reference
  fhir-localize -t consultation -p patient-123 -s smart

  # Resolvable encounter reference
  fhir-localize -t pdf -p patient-123 -s smart \\
    --encounter-reference "Encounter/visit-789" --encounter-display "Office Visit"

  # Contained encounter
  fhir-localize -t html -p patient-123 -s epic --encounter-reference "#e1" \\
    --encounter-contained '{"resourceType":"Encounter","id":"e1","status":"finished"}'
"""

from __future__ import annotations

import argparse
import logging
import sys

from pydantic import ValidationError

from ..errors import HarnessError
from ..fhir.document_reference import DocumentReferenceValidator, FHIRValidationError
from ..log_config import configure_logging
from .localizer import localize
from .mappings import TEMPLATE_MAPPINGS
from .options import LocalizationOptions

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fhir-localize",
        description="Localize a DocumentReference template with patient-specific data.",
        epilog=__doc__.split("\n", 2)[2],
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-t", "--type", help=f"Document type (required): {', '.join(TEMPLATE_MAPPINGS)}")
    parser.add_argument("-p", "--patient-id", help="Patient ID (required)")
    parser.add_argument("-s", "--server", help="Server name for the output directory (required)")
    parser.add_argument("--patient-name", help='Patient display name (default: "Test Patient")')
    parser.add_argument("--author-reference", help='Author reference (default: "Practitioner/example")')
    parser.add_argument("--author-display", help='Author display name (default: "Dr. Example Provider")')
    parser.add_argument("--encounter-reference", help="Encounter reference; omit to exclude the encounter")
    parser.add_argument("--encounter-display", help="Encounter display text (only with --encounter-reference)")
    parser.add_argument(
        "--encounter-contained",
        help='JSON of a contained Encounter (use with --encounter-reference="#id")',
    )
    parser.add_argument("--identifier-system", help="Identifier system (default from settings)")
    parser.add_argument("-o", "--output-dir", help="Output directory (default: localized/<server>)")
    parser.add_argument(
        "--validate",
        action="store_true",
        help="Run offline FHIR R4 structural checks on the result",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    configure_logging()
    try:
        args = build_parser().parse_args(argv)
    except SystemExit as exc:
        # --help exits 0; usage errors map onto the validation exit code
        return 0 if exc.code in (0, None) else 1

    if not (args.type and args.patient_id and args.server):
        logger.error("Error: --type, --patient-id, and --server are required")
        logger.error("Run with --help for usage information")
        return 1

    if args.type not in TEMPLATE_MAPPINGS:
        logger.error('Error: Unknown type "%s"', args.type)
        logger.error("Available types: %s", ", ".join(TEMPLATE_MAPPINGS))
        return 1

    try:
        options = LocalizationOptions(
            type=args.type,
            patient_id=args.patient_id,
            server=args.server,
            patient_name=args.patient_name,
            author_reference=args.author_reference,
            author_display=args.author_display,
            encounter_reference=args.encounter_reference,
            encounter_display=args.encounter_display,
            encounter_contained=args.encounter_contained,
            identifier_system=args.identifier_system,
            output_dir=args.output_dir,
        )
        result = localize(options)
        if args.validate:
            DocumentReferenceValidator.validate_r4_schema(result.document)
    except (HarnessError, ValidationError, FHIRValidationError, OSError) as exc:
        logger.error("\nError: %s", exc)
        return 1

    mapping = result.mapping
    logger.info("\n✓ Localized DocumentReference saved to:")
    logger.info("  %s", result.output_path)
    logger.info("\n  Document details:")
    logger.info("    Type: %s", mapping.note_type)
    logger.info("    Content-Type: %s", mapping.content_type)
    logger.info("    Patient: %s", options.patient_id)
    if options.encounter_reference:
        logger.info("    Encounter: %s", options.encounter_reference)
        if options.encounter_contained is not None:
            logger.info("    Contained Encounter: Yes")
    else:
        logger.info("    Encounter: Not included")
    logger.info("    Size: %d bytes (%.2f KB)", result.content_size, result.content_size / 1024)
    logger.info("    Base64 length: %d chars", result.base64_length)
    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
