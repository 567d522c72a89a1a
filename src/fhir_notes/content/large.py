"""Plain-text note padded past 5 MiB for server size-limit testing.

Servers are expected to accept inline attachments of at least 5 MiB.
"""

from __future__ import annotations

import math

from .base import GeneratedContent

FILENAME = "large-note.txt"
TARGET_SIZE = 5 * 1024 * 1024

SAMPLE_PARAGRAPH = (
    "This is a sample clinical note paragraph that will be repeated many times to create "
    "a large file for testing purposes. Servers SHALL accept inline attachments up to at "
    "least 5 MiB. This generated file helps verify compliance with that requirement. "
)

HEADER = """LARGE CLINICAL NOTE - SIZE LIMIT TEST

This document is generated to test the 5 MiB inline content requirement.

Patient: {{PATIENT_NAME}}
Date: {{CURRENT_TIMESTAMP}}
Purpose: Verify server accepts attachments >= 5 MiB

CONTENT:
"""


def build_large_text(target_size: int = TARGET_SIZE) -> str:
    header_size = len(HEADER.encode("utf-8"))
    paragraph_size = len(SAMPLE_PARAGRAPH.encode("utf-8"))
    needed = max(0, math.ceil((target_size - header_size) / paragraph_size))

    parts = [HEADER]
    parts.extend(f"\nParagraph {i + 1}:\n{SAMPLE_PARAGRAPH}" for i in range(needed))
    parts.append(f"\n\nEND OF DOCUMENT\nTarget size: {target_size} bytes\n")
    return "".join(parts)


def generate() -> GeneratedContent:
    return GeneratedContent(data=build_large_text().encode("utf-8"), filename=FILENAME)
