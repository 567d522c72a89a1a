from .localizer import LocalizedDocument, localize, localize_document_reference
from .mappings import TEMPLATE_MAPPINGS, TemplateMapping, get_mapping
from .options import LocalizationOptions, ParsedContained, RawContained

__all__ = [
    "LocalizationOptions",
    "LocalizedDocument",
    "ParsedContained",
    "RawContained",
    "TEMPLATE_MAPPINGS",
    "TemplateMapping",
    "get_mapping",
    "localize",
    "localize_document_reference",
]
