"""Unit tests for LocalizationOptions, contained-resource tagging, and the mapping table."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from fhir_notes.content import GENERATORS
from fhir_notes.errors import TemplateDataError, UnknownDocumentTypeError
from fhir_notes.fhir.document_reference import NOTE_TYPE_LOINC
from fhir_notes.localization import (
    TEMPLATE_MAPPINGS,
    LocalizationOptions,
    ParsedContained,
    RawContained,
    TemplateMapping,
    get_mapping,
)
from fhir_notes.localization.localizer import ASSET_DIR


class TestRequiredOptions:
    @pytest.mark.parametrize("missing", ["type", "patient_id", "server"])
    def test_missing_required_field_raises(self, missing: str) -> None:
        fields = {"type": "consultation", "patient_id": "p-1", "server": "smart"}
        del fields[missing]
        with pytest.raises(ValidationError):
            LocalizationOptions(**fields)

    def test_blank_patient_id_raises(self) -> None:
        with pytest.raises(ValidationError, match="must not be empty"):
            LocalizationOptions(type="consultation", patient_id="   ", server="smart")

    def test_write_to_file_defaults_true(self) -> None:
        options = LocalizationOptions(type="consultation", patient_id="p-1", server="smart")
        assert options.write_to_file is True


class TestContainedUnion:
    def test_string_becomes_raw(self, make_options) -> None:
        options = make_options(encounter_contained='{"resourceType": "Encounter", "id": "e1"}')
        assert isinstance(options.encounter_contained, RawContained)
        assert options.resolved_contained() == {"resourceType": "Encounter", "id": "e1"}

    def test_dict_becomes_parsed(self, make_options) -> None:
        options = make_options(encounter_contained={"resourceType": "Encounter", "id": "e1"})
        assert isinstance(options.encounter_contained, ParsedContained)
        assert options.resolved_contained()["id"] == "e1"

    def test_empty_string_is_none(self, make_options) -> None:
        assert make_options(encounter_contained="").encounter_contained is None

    def test_invalid_json_names_content(self, make_options) -> None:
        options = make_options(encounter_contained="{not json")
        with pytest.raises(TemplateDataError, match="encounter-contained.*not json"):
            options.resolved_contained()

    def test_json_array_rejected(self, make_options) -> None:
        options = make_options(encounter_contained="[1, 2]")
        with pytest.raises(TemplateDataError, match="JSON object"):
            options.resolved_contained()


class TestTemplateMappings:
    def test_all_expected_types_present(self) -> None:
        assert set(TEMPLATE_MAPPINGS) == {
            "consultation", "progress", "pdf", "cda", "xhtml", "html", "large", "patient-asserted",
        }

    @pytest.mark.parametrize("doc_type", sorted(TEMPLATE_MAPPINGS))
    def test_exactly_one_content_source(self, doc_type: str) -> None:
        mapping = TEMPLATE_MAPPINGS[doc_type]
        assert (mapping.content_file is None) != (mapping.content_generator is None)

    @pytest.mark.parametrize("doc_type", sorted(TEMPLATE_MAPPINGS))
    def test_sources_exist(self, doc_type: str) -> None:
        mapping = TEMPLATE_MAPPINGS[doc_type]
        assert (ASSET_DIR / "templates" / mapping.template).is_file()
        if mapping.content_file:
            assert (ASSET_DIR / "sample-content" / mapping.content_file).is_file()
        else:
            assert mapping.content_generator in GENERATORS

    @pytest.mark.parametrize("doc_type", sorted(TEMPLATE_MAPPINGS))
    def test_note_type_has_loinc_code(self, doc_type: str) -> None:
        mapping = TEMPLATE_MAPPINGS[doc_type]
        assert mapping.loinc_code == NOTE_TYPE_LOINC[mapping.note_type]

    def test_both_sources_rejected(self) -> None:
        with pytest.raises(ValidationError, match="exactly one"):
            TemplateMapping(
                template="x.json",
                content_file="x.txt",
                content_generator="pdf",
                content_type="text/plain",
                note_type="Progress note",
            )

    def test_no_source_rejected(self) -> None:
        with pytest.raises(ValidationError, match="exactly one"):
            TemplateMapping(template="x.json", content_type="text/plain", note_type="Progress note")

    def test_unknown_type_lists_valid_keys(self) -> None:
        with pytest.raises(UnknownDocumentTypeError) as exc_info:
            get_mapping("unknown-format")
        message = str(exc_info.value)
        for key in TEMPLATE_MAPPINGS:
            assert key in message
