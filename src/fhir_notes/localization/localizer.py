"""Localize a DocumentReference template with patient-specific data.

Pipeline for one document type:
  1. look up the TemplateMapping (fails before any I/O on an unknown type)
  2. read the static sample file or run the in-process generator
  3. substitute content placeholders, then base64-encode the bytes
  4. substitute template placeholders and parse the result as JSON
  5. drop an empty context.encounter, append any contained encounter
  6. optionally write <output dir>/<type>-note.json
"""

from __future__ import annotations

import base64
import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict

from ..content import run_generator
from ..errors import ContentSourceError, TemplateDataError
from ..project import find_project_root
from ..settings import get_settings
from .mappings import TemplateMapping, get_mapping
from .options import LocalizationOptions
from .placeholders import content_values, replace_tokens, template_values

logger = logging.getLogger(__name__)

ASSET_DIR = Path(__file__).resolve().parent.parent / "assets"


class LocalizedDocument(BaseModel):
    """Outcome of one localization."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    document: dict[str, Any]
    mapping: TemplateMapping
    content_size: int
    base64_length: int
    output_path: Path | None = None


def localize(
    options: LocalizationOptions,
    *,
    now: datetime | None = None,
    asset_dir: Path | None = None,
    project_root: Path | None = None,
) -> LocalizedDocument:
    """Run the full localization pipeline and return the document plus details.

    Args:
        options: Validated localization parameters.
        now: Clock override; every timestamp in the document derives from it.
        asset_dir: Directory holding ``templates/`` and ``sample-content/``.
        project_root: Used for the default output directory; discovered from
            the working directory when needed and not given.

    Raises:
        UnknownDocumentTypeError: ``options.type`` has no mapping.
        ContentSourceError: template or content file missing.
        TemplateDataError: localized template or contained resource is not valid JSON.
        ProjectRootNotFoundError: writing without ``output_dir`` outside a project.
    """
    settings = get_settings()
    mapping = get_mapping(options.type)
    contained = options.resolved_contained()
    now = now or datetime.now(timezone.utc)
    asset_dir = asset_dir or ASSET_DIR

    logger.info("Localizing %s (%s)...", mapping.note_type, mapping.content_type)

    raw = _load_content(mapping, asset_dir)
    text = replace_tokens(raw.decode("utf-8"), content_values(options, now, settings.app_name))
    content = text.encode("utf-8")
    base64_content = base64.b64encode(content).decode("ascii")
    logger.info("  Content: %.2f KB", len(content) / 1024)

    template_text = _read_asset(asset_dir / "templates" / mapping.template, "Template")
    localized_text = replace_tokens(
        template_text,
        template_values(
            options,
            now,
            base64_content=base64_content,
            content_size=len(content),
            content_type=mapping.content_type,
            identifier_system=settings.identifier_system,
            app_name=settings.app_name,
        ),
    )
    try:
        document = json.loads(localized_text)
    except json.JSONDecodeError as exc:
        raise TemplateDataError(
            f"Localized template {mapping.template} is not valid JSON: {exc}"
        ) from exc

    if not options.encounter_reference:
        _strip_empty_encounter(document)
    if contained is not None:
        document.setdefault("contained", []).append(contained)

    output_path = None
    if options.write_to_file:
        output_dir = options.output_dir or (
            (project_root or find_project_root()) / settings.localized_dir_name / options.server
        )
        output_path = write_document(document, Path(output_dir), options.type)

    return LocalizedDocument(
        document=document,
        mapping=mapping,
        content_size=len(content),
        base64_length=len(base64_content),
        output_path=output_path,
    )


def localize_document_reference(options: LocalizationOptions | dict[str, Any], **kwargs: Any) -> dict:
    """High-level API: return the localized DocumentReference dict.

    Example::

        doc_ref = localize_document_reference({
            "type": "consultation",
            "patient_id": "patient-123",
            "server": "smart",
            "encounter_reference": "Encounter/visit-789",
            "write_to_file": False,
        })
    """
    if not isinstance(options, LocalizationOptions):
        options = LocalizationOptions.model_validate(options)
    return localize(options, **kwargs).document


def render_document(document: dict) -> str:
    return json.dumps(document, indent=2, ensure_ascii=False)


def write_document(document: dict, output_dir: Path, doc_type: str) -> Path:
    output_dir.mkdir(parents=True, exist_ok=True)
    output_path = output_dir / f"{doc_type}-note.json"
    output_path.write_text(render_document(document), encoding="utf-8")
    return output_path


# ------------------------------------------------------------------
# Private helpers
# ------------------------------------------------------------------

def _load_content(mapping: TemplateMapping, asset_dir: Path) -> bytes:
    if mapping.content_generator:
        logger.info("  Generating content using %s...", mapping.content_generator)
        return run_generator(mapping.content_generator).data

    logger.info("  Reading content from %s...", mapping.content_file)
    path = asset_dir / "sample-content" / mapping.content_file
    if not path.is_file():
        raise ContentSourceError(f"Content file not found: {path}")
    return path.read_bytes()


def _read_asset(path: Path, label: str) -> str:
    if not path.is_file():
        raise ContentSourceError(f"{label} not found: {path}")
    return path.read_text(encoding="utf-8")


def _strip_empty_encounter(document: dict) -> None:
    context = document.get("context")
    if not isinstance(context, dict) or "encounter" not in context:
        return
    has_reference = any(
        isinstance(enc, dict) and str(enc.get("reference", "")).strip()
        for enc in context["encounter"] or []
    )
    if not has_reference:
        del context["encounter"]
        if not context:
            del document["context"]
