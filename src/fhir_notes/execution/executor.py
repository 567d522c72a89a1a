"""Execute one FHIR request against the selected config and log it to disk.

Every call writes two artifacts into the caller's directory:
  - response-metadata.json : status, headers, and timing
  - response-body.json     : the body, pretty-printed (``.txt`` when not JSON)

A status >= 400 raises RequestFailedError only after both files exist, so a
rejected request can still be inspected.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import requests

from ..errors import RequestFailedError, TemplateDataError
from ..fhir.fhir_client import FHIRClient
from ..project import config_dir, find_project_root
from .config_store import select_config
from .models import ExecutionResult, FHIRConfig, RequestSpec

logger = logging.getLogger(__name__)

METADATA_FILENAME = "response-metadata.json"
BODY_STEM = "response-body"


def execute(
    spec: RequestSpec,
    *,
    session: requests.Session | None = None,
    start_dir: Path | None = None,
) -> ExecutionResult:
    """Send ``spec`` to the configured FHIR server and persist the response.

    Args:
        spec: The request to make.
        session: Optional requests session (tests pass a mocked one).
        start_dir: Where project-root discovery starts; defaults to cwd.

    Returns:
        ExecutionResult for a response with status < 400.

    Raises:
        ProjectRootNotFoundError / NoConfigError / AmbiguousConfigError /
        ConfigNotFoundError: the config could not be resolved.
        TemplateDataError: the body file is not valid JSON.
        RequestFailedError: the server answered with status >= 400.
    """
    project_root = find_project_root(start_dir)
    config = select_config(config_dir(project_root), spec.config_name)
    logger.info("Using config: %s", config.name)
    if spec.purpose:
        logger.info("Purpose: %s", spec.purpose)

    body = load_body(spec.body_file, project_root) if spec.body_file else None
    client = build_client(config, session)

    logger.info("%s %s", spec.method.upper(), client.url_for(spec.path))
    sent_at = datetime.now(timezone.utc)
    response = client.request(spec.method, spec.path, body=body, headers=spec.headers)
    received_at = datetime.now(timezone.utc)

    output_dir = Path(spec.caller_dir) if spec.caller_dir else Path.cwd()
    result = write_artifacts(response, sent_at, received_at, output_dir)
    _log_summary(result)

    if not result.ok:
        logger.error("\nError response received")
        raise RequestFailedError(result)
    return result


def build_client(config: FHIRConfig, session: requests.Session | None = None) -> FHIRClient:
    token = config.access_token if config.sends_token else None
    return FHIRClient(config.fhir_base_url, access_token=token, session=session)


def load_body(body_file: Path, project_root: Path) -> Any:
    path = body_file if body_file.is_absolute() else project_root / body_file
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise TemplateDataError(f"Request body {path} is not valid JSON: {exc}") from exc


def write_artifacts(
    response: requests.Response,
    sent_at: datetime,
    received_at: datetime,
    output_dir: Path,
) -> ExecutionResult:
    duration_ms = int((received_at - sent_at).total_seconds() * 1000)
    text = response.text

    try:
        parsed = json.loads(text)
    except ValueError:
        parsed = None
        is_json = False
    else:
        is_json = True

    metadata = {
        "timestamp": _iso(received_at),
        "httpStatus": response.status_code,
        "statusText": response.reason or "",
        "headers": dict(response.headers),
        "timing": {
            "requestSentAt": _iso(sent_at),
            "responseReceivedAt": _iso(received_at),
            "durationMs": duration_ms,
        },
    }

    output_dir.mkdir(parents=True, exist_ok=True)
    metadata_path = output_dir / METADATA_FILENAME
    metadata_path.write_text(json.dumps(metadata, indent=2), encoding="utf-8")

    body_path = output_dir / f"{BODY_STEM}.{'json' if is_json else 'txt'}"
    body_path.write_text(json.dumps(parsed, indent=2) if is_json else text, encoding="utf-8")

    return ExecutionResult(
        status=response.status_code,
        status_text=response.reason or "",
        duration_ms=duration_ms,
        metadata_path=metadata_path,
        body_path=body_path,
        resource_id=_resource_id(parsed),
        location=response.headers.get("Location"),
    )


# ------------------------------------------------------------------
# Private helpers
# ------------------------------------------------------------------

def _iso(moment: datetime) -> str:
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _log_summary(result: ExecutionResult) -> None:
    logger.info("\n✓ Response saved")
    logger.info("  Status: %d %s", result.status, result.status_text)
    logger.info("  Duration: %dms", result.duration_ms)
    logger.info("  Files: %s, %s", result.metadata_path.name, result.body_path.name)
    if result.resource_id:
        logger.info("  Resource ID: %s", result.resource_id)
    if result.location:
        logger.info("  Location: %s", result.location)


def _resource_id(parsed: Any) -> str | None:
    if not isinstance(parsed, dict) or parsed.get("id") is None:
        return None
    return str(parsed["id"])
