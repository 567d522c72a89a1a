"""Offline FHIR R4 checks for localized DocumentReference resources.

The localizer only guarantees well-formed JSON. These checks go further and
confirm that a localized document is structurally something a FHIR R4 server
would accept:

  - validate_r4_schema() : required fields, codes, references, base64, size
  - decode_content()     : recover the embedded attachment for inspection
"""

from __future__ import annotations

import base64
import binascii
import re
from typing import Any


LOINC_CONSULT_NOTE       = "11488-4"
LOINC_PROGRESS_NOTE      = "11506-3"
LOINC_DISCHARGE_SUMMARY  = "18842-5"
LOINC_SUMMARY_OF_EPISODE = "34133-9"

NOTE_TYPE_LOINC: dict[str, str] = {
    "Consultation note":       LOINC_CONSULT_NOTE,
    "Progress note":           LOINC_PROGRESS_NOTE,
    "Discharge summary":       LOINC_DISCHARGE_SUMMARY,
    "Summary of episode note": LOINC_SUMMARY_OF_EPISODE,
}

_VALID_STATUSES     = {"current", "superseded", "entered-in-error"}
_VALID_DOC_STATUSES = {"preliminary", "final", "amended", "entered-in-error"}
_LOINC_SYSTEM       = "http://loinc.org"
_FHIR_DATETIME_RE   = re.compile(
    r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d+)?(Z|[+-]\d{2}:\d{2})$"
)
_FHIR_REFERENCE_RE  = re.compile(r"^[A-Z][A-Za-z]+/.+$")  # resource type must start uppercase
_CONTAINED_REF_RE   = re.compile(r"^#.+$")


class FHIRValidationError(ValueError):
    """Raised when a DocumentReference dict fails FHIR R4 structural validation."""


class DocumentReferenceValidator:
    """Validate and inspect localized FHIR R4 DocumentReference dicts."""

    @staticmethod
    def validate_r4_schema(doc_ref: dict) -> None:
        """Validate a DocumentReference dict against FHIR R4 rules.

        Checks enforced (all offline, no network required):
          - resourceType is 'DocumentReference'
          - status is present and a valid R4 code
          - docStatus, if present, is a valid R4 code
          - type.coding[0] has system='http://loinc.org' and a non-empty code
          - subject.reference matches 'ResourceType/id'
          - date, if present, is a FHIR instant
          - content[0].attachment has a contentType and valid base64 data
          - content[0].attachment.size, if present, equals the decoded length
          - context.encounter[].reference is 'ResourceType/id' or '#id';
            a '#id' reference must match a resource in 'contained'
          - author references match 'ResourceType/id'

        Raises:
            FHIRValidationError: with a descriptive message listing every error.
        """
        errors: list[str] = []

        if doc_ref.get("resourceType") != "DocumentReference":
            errors.append(
                f"resourceType must be 'DocumentReference', got {doc_ref.get('resourceType')!r}"
            )

        status = doc_ref.get("status")
        if not status:
            errors.append("status is required")
        elif status not in _VALID_STATUSES:
            errors.append(f"status {status!r} is not a valid R4 code: {_VALID_STATUSES}")

        doc_status = doc_ref.get("docStatus")
        if doc_status and doc_status not in _VALID_DOC_STATUSES:
            errors.append(f"docStatus {doc_status!r} is not a valid R4 code: {_VALID_DOC_STATUSES}")

        codings = doc_ref.get("type", {}).get("coding") or []
        if not codings:
            errors.append("type.coding must have at least one entry")
        else:
            coding = codings[0]
            if coding.get("system") != _LOINC_SYSTEM:
                errors.append(
                    f"type.coding[0].system must be {_LOINC_SYSTEM!r}, got {coding.get('system')!r}"
                )
            if not coding.get("code"):
                errors.append("type.coding[0].code is required")

        subject_ref = doc_ref.get("subject", {}).get("reference", "")
        if not subject_ref:
            errors.append("subject.reference is required")
        elif not _FHIR_REFERENCE_RE.match(subject_ref):
            errors.append(f"subject.reference {subject_ref!r} must match 'ResourceType/id'")

        date_val = doc_ref.get("date", "")
        if date_val and not _FHIR_DATETIME_RE.match(date_val):
            errors.append(f"date {date_val!r} must be a FHIR instant (YYYY-MM-DDTHH:MM:SSZ)")

        errors.extend(_attachment_errors(doc_ref.get("content", [])))
        errors.extend(_encounter_errors(doc_ref))

        for i, author in enumerate(doc_ref.get("author", [])):
            ref = author.get("reference", "")
            if not _FHIR_REFERENCE_RE.match(ref):
                errors.append(f"author[{i}].reference {ref!r} must match 'ResourceType/id'")

        if errors:
            bullet_list = "\n  - ".join(errors)
            raise FHIRValidationError(
                f"FHIR R4 DocumentReference validation failed ({len(errors)} error(s)):\n  - {bullet_list}"
            )

    @staticmethod
    def decode_bytes(doc_ref: dict) -> bytes:
        """Decode content[0].attachment.data to raw bytes."""
        try:
            data = doc_ref["content"][0]["attachment"]["data"]
            return base64.b64decode(data, validate=True)
        except (KeyError, IndexError, TypeError, binascii.Error) as exc:
            raise ValueError(f"Cannot decode DocumentReference content: {exc}") from exc

    @staticmethod
    def decode_content(doc_ref: dict) -> str:
        """Decode the base64 attachment as UTF-8 text."""
        raw = DocumentReferenceValidator.decode_bytes(doc_ref)
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ValueError(f"Cannot decode DocumentReference content: {exc}") from exc


# ------------------------------------------------------------------
# Private helpers
# ------------------------------------------------------------------

def _attachment_errors(content: list[dict[str, Any]]) -> list[str]:
    if not content:
        return ["content must have at least one entry"]

    errors: list[str] = []
    attachment = content[0].get("attachment", {})
    if not attachment.get("contentType"):
        errors.append("content[0].attachment.contentType is required")

    b64_data = attachment.get("data", "")
    if not b64_data:
        return errors
    try:
        decoded = base64.b64decode(b64_data, validate=True)
    except binascii.Error:
        errors.append("content[0].attachment.data is not valid base64")
        return errors

    size = attachment.get("size")
    if size is not None and size != len(decoded):
        errors.append(
            f"content[0].attachment.size {size!r} does not match decoded length {len(decoded)}"
        )
    return errors


def _encounter_errors(doc_ref: dict) -> list[str]:
    context = doc_ref.get("context")
    if not isinstance(context, dict):
        return []

    contained_ids = {r.get("id") for r in doc_ref.get("contained", []) if isinstance(r, dict)}
    errors: list[str] = []
    for i, enc in enumerate(context.get("encounter", [])):
        ref = enc.get("reference", "")
        if _CONTAINED_REF_RE.match(ref):
            if ref[1:] not in contained_ids:
                errors.append(
                    f"context.encounter[{i}].reference {ref!r} has no matching contained resource"
                )
        elif not _FHIR_REFERENCE_RE.match(ref):
            errors.append(
                f"context.encounter[{i}].reference {ref!r} must match 'ResourceType/id' or '#id'"
            )
    return errors
