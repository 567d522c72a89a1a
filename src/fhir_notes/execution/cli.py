"""fhir-request: send one request to the configured FHIR server.

Examples:
  fhir-request -X POST --path /DocumentReference \\
    --body-file localized/smart/consultation-note.json --purpose "create consult note"

  fhir-request -X GET --path "/DocumentReference?patient=123" --config smart
"""

from __future__ import annotations

import argparse
import logging
import sys

from pydantic import ValidationError

from ..errors import HarnessError
from ..log_config import configure_logging
from .executor import execute
from .models import RequestSpec

logger = logging.getLogger(__name__)


def parse_header(value: str) -> tuple[str, str]:
    name, sep, header_value = value.partition(":")
    if not sep or not name.strip():
        raise argparse.ArgumentTypeError(f"header must look like 'Name: value', got {value!r}")
    return name.strip(), header_value.strip()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fhir-request",
        description="Execute a FHIR request and save response-metadata.json / response-body.*",
        epilog=__doc__.split("\n", 2)[2],
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-X", "--method", default="GET", help="HTTP method (default: GET)")
    parser.add_argument("--path", required=True, help="Path appended to the FHIR base URL")
    parser.add_argument("--body-file", help="JSON request body, relative to the project root")
    parser.add_argument(
        "-H", "--header",
        action="append",
        type=parse_header,
        default=[],
        help="Extra header 'Name: value' (repeatable)",
    )
    parser.add_argument("--purpose", default="", help="Why this request is being made")
    parser.add_argument("--config", dest="config_name", help="Named config in .fhir-configs")
    parser.add_argument("--output-dir", help="Directory for response artifacts (default: cwd)")
    return parser


def main(argv: list[str] | None = None) -> int:
    configure_logging()
    try:
        args = build_parser().parse_args(argv)
    except SystemExit as exc:
        return 0 if exc.code in (0, None) else 1

    try:
        spec = RequestSpec(
            method=args.method,
            path=args.path,
            body_file=args.body_file,
            headers=dict(args.header),
            purpose=args.purpose,
            config_name=args.config_name,
            caller_dir=args.output_dir,
        )
        execute(spec)
    except (HarnessError, ValidationError, ValueError, OSError) as exc:
        logger.error("Error: %s", exc)
        return 1
    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
