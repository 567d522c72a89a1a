"""Connectathon harness for FHIR DocumentReference write APIs."""

from .execution import RequestSpec, execute
from .localization import LocalizationOptions, localize_document_reference

__all__ = ["LocalizationOptions", "RequestSpec", "execute", "localize_document_reference"]
