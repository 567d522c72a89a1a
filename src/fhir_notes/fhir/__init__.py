from .document_reference import DocumentReferenceValidator, FHIRValidationError
from .fhir_client import FHIRClient

__all__ = ["DocumentReferenceValidator", "FHIRClient", "FHIRValidationError"]
