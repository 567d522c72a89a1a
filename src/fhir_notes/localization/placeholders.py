"""{{TOKEN}} substitution for sample content and DocumentReference templates.

Two passes use this module:
  - content_values()  : names, dates, and app name for the clinical document
  - template_values() : identifiers, references, and the encoded attachment

Substitution is a single regex pass, so a substituted value that itself looks
like a token is never expanded again. Unknown tokens are left untouched.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import NamedTuple

from .options import LocalizationOptions

DEFAULT_PATIENT_NAME      = "Test Patient"
DEFAULT_AUTHOR_DISPLAY    = "Dr. Example Provider"
DEFAULT_AUTHOR_REFERENCE  = "Practitioner/example"
DEFAULT_ENCOUNTER_DISPLAY = "Encounter"

_TOKEN_RE     = re.compile(r"\{\{([A-Z0-9_]+)\}\}")
_DR_PREFIX_RE = re.compile(r"^Dr\.\s*")


class PersonName(NamedTuple):
    given: str
    family: str
    suffix: str = ""

    @property
    def title(self) -> str:
        return self.suffix or "MD"


def replace_tokens(text: str, values: dict[str, str]) -> str:
    """Replace every ``{{KEY}}`` whose KEY is in ``values``."""
    def _sub(match: re.Match[str]) -> str:
        key = match.group(1)
        return values[key] if key in values else match.group(0)

    return _TOKEN_RE.sub(_sub, text)


def split_display_name(display: str, default_given: str, default_family: str) -> tuple[str, str]:
    """First whitespace token is the given name, last token is the family name."""
    tokens = display.split()
    if not tokens:
        return default_given, default_family
    return tokens[0], tokens[-1]


def patient_name_parts(patient_name: str) -> PersonName:
    given, family = split_display_name(patient_name, "Test", "Patient")
    return PersonName(given, family)


def author_name_parts(author_display: str) -> PersonName:
    """Strip a leading 'Dr. ' then split; 'MD' anywhere in the display sets the suffix."""
    given, family = split_display_name(
        _DR_PREFIX_RE.sub("", author_display), "Example", "Provider"
    )
    suffix = "MD" if "MD" in author_display else ""
    return PersonName(given, family, suffix)


def fhir_instant(now: datetime) -> str:
    return now.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def cda_timestamp(now: datetime) -> str:
    return now.astimezone(timezone.utc).strftime("%Y%m%d%H%M%S+0000")


def content_values(options: LocalizationOptions, now: datetime, app_name: str) -> dict[str, str]:
    patient_name = options.patient_name or DEFAULT_PATIENT_NAME
    author_display = options.author_display or DEFAULT_AUTHOR_DISPLAY
    patient = patient_name_parts(patient_name)
    author = author_name_parts(author_display)
    utc = now.astimezone(timezone.utc)

    return {
        "PATIENT_NAME":          patient_name,
        "PATIENT_ID":            options.patient_id,
        "PATIENT_GIVEN_NAME":    patient.given,
        "PATIENT_FAMILY_NAME":   patient.family,
        "AUTHOR_NAME":           author_display,
        "AUTHOR_GIVEN_NAME":     author.given,
        "AUTHOR_FAMILY_NAME":    author.family,
        "AUTHOR_SUFFIX":         author.suffix,
        "AUTHOR_TITLE":          author.title,
        "APP_NAME":              app_name,
        "CURRENT_DATE":          utc.strftime("%Y-%m-%d"),
        "CURRENT_TIME":          utc.strftime("%H:%M"),
        "CURRENT_TIMESTAMP":     fhir_instant(now),
        "CURRENT_TIMESTAMP_CDA": cda_timestamp(now),
    }


def identifier_value(doc_type: str, now: datetime) -> str:
    """``<type>-<epoch ms>``; unique only to timestamp granularity."""
    return f"{doc_type}-{int(now.timestamp() * 1000)}"


def template_values(
    options: LocalizationOptions,
    now: datetime,
    *,
    base64_content: str,
    content_size: int,
    content_type: str,
    identifier_system: str,
    app_name: str,
) -> dict[str, str]:
    timestamp = fhir_instant(now)
    values = {
        "IDENTIFIER_SYSTEM": options.identifier_system or identifier_system,
        "IDENTIFIER_VALUE":  identifier_value(options.type, now),
        "PATIENT_ID":        options.patient_id,
        "PATIENT_NAME":      options.patient_name or DEFAULT_PATIENT_NAME,
        "AUTHOR_REFERENCE":  options.author_reference or DEFAULT_AUTHOR_REFERENCE,
        "AUTHOR_DISPLAY":    options.author_display or DEFAULT_AUTHOR_DISPLAY,
        "CURRENT_TIMESTAMP": timestamp,
        "PERIOD_START":      timestamp,
        "PERIOD_END":        timestamp,
        "CONTENT_TYPE":      content_type,
        "BASE64_CONTENT":    base64_content,
        "CONTENT_SIZE":      str(content_size),
        "APP_NAME":          app_name,
    }
    if options.encounter_reference:
        values["ENCOUNTER_REFERENCE"] = options.encounter_reference
        values["ENCOUNTER_DISPLAY"] = options.encounter_display or DEFAULT_ENCOUNTER_DISPLAY
    else:
        values["ENCOUNTER_REFERENCE"] = ""
        values["ENCOUNTER_DISPLAY"] = ""
    return values
