"""Static document type table: template, content source, MIME type, note label."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..errors import UnknownDocumentTypeError
from ..fhir.document_reference import NOTE_TYPE_LOINC

TEXT_PLAIN = "text/plain; charset=utf-8"


class TemplateMapping(BaseModel):
    """One document type. Exactly one of content_file / content_generator is set."""

    model_config = ConfigDict(frozen=True)

    template: str = Field(..., description="Template filename under assets/templates")
    content_file: str | None = Field(default=None, description="Static file under assets/sample-content")
    content_generator: str | None = Field(default=None, description="Key into content.GENERATORS")
    content_type: str = Field(..., description="MIME type embedded in attachment.contentType")
    note_type: str = Field(..., description="Human-readable note type label")

    @model_validator(mode="after")
    def _exactly_one_source(self) -> "TemplateMapping":
        if (self.content_file is None) == (self.content_generator is None):
            raise ValueError("exactly one of content_file or content_generator must be set")
        return self

    @property
    def loinc_code(self) -> str:
        return NOTE_TYPE_LOINC[self.note_type]


TEMPLATE_MAPPINGS: dict[str, TemplateMapping] = {
    "consultation": TemplateMapping(
        template="consultation-note.json",
        content_file="consultation-note.txt",
        content_type=TEXT_PLAIN,
        note_type="Consultation note",
    ),
    "progress": TemplateMapping(
        template="progress-note.json",
        content_file="progress-note.txt",
        content_type=TEXT_PLAIN,
        note_type="Progress note",
    ),
    "pdf": TemplateMapping(
        template="consultation-note-pdf.json",
        content_generator="pdf",
        content_type="application/pdf",
        note_type="Consultation note",
    ),
    "cda": TemplateMapping(
        template="discharge-summary-cda-xml.json",
        content_generator="cda",
        content_type="application/cda+xml",
        note_type="Discharge summary",
    ),
    "xhtml": TemplateMapping(
        template="discharge-summary-xhtml.json",
        content_generator="xhtml",
        content_type="application/xhtml+xml",
        note_type="Discharge summary",
    ),
    "html": TemplateMapping(
        template="progress-note-html.json",
        content_generator="html",
        content_type="text/html; charset=utf-8",
        note_type="Progress note",
    ),
    "large": TemplateMapping(
        template="large-note.json",
        content_generator="large",
        content_type=TEXT_PLAIN,
        note_type="Summary of episode note",
    ),
    "patient-asserted": TemplateMapping(
        template="patient-asserted-note.json",
        content_file="patient-log.txt",
        content_type=TEXT_PLAIN,
        note_type="Progress note",
    ),
}


def get_mapping(doc_type: str) -> TemplateMapping:
    """Return the mapping for ``doc_type`` or raise listing every valid key."""
    try:
        return TEMPLATE_MAPPINGS[doc_type]
    except KeyError:
        raise UnknownDocumentTypeError(doc_type, list(TEMPLATE_MAPPINGS)) from None
