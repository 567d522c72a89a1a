"""Exception hierarchy shared by the localizer, executor, and setup server.

Library functions raise these; the CLIs catch ``HarnessError``, log the
message, and exit with status 1.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .execution.models import ExecutionResult


class HarnessError(Exception):
    """Base class for every error this package raises on purpose."""


# ------------------------------------------------------------------
# Configuration errors
# ------------------------------------------------------------------

class ConfigurationError(HarnessError):
    """Project root or FHIR server configuration could not be resolved."""


class ProjectRootNotFoundError(ConfigurationError):
    """No ancestor directory contains the config directory."""


class NoConfigError(ConfigurationError):
    """The config directory holds no configuration files."""


class ConfigNotFoundError(ConfigurationError):
    """A configuration was requested by name but does not exist."""


class AmbiguousConfigError(ConfigurationError):
    """More than one configuration exists and none was named."""

    def __init__(self, candidates: list[str]) -> None:
        self.candidates = candidates
        super().__init__(
            f"Multiple FHIR configs found ({', '.join(candidates)}). "
            "Pass a config name to choose one."
        )


# ------------------------------------------------------------------
# Validation / data / I/O errors
# ------------------------------------------------------------------

class UnknownDocumentTypeError(HarnessError, ValueError):
    """The requested document type has no template mapping."""

    def __init__(self, doc_type: str, available: list[str]) -> None:
        self.doc_type = doc_type
        self.available = available
        super().__init__(
            f"Unknown document type: {doc_type}. Available: {', '.join(available)}"
        )


class TemplateDataError(HarnessError, ValueError):
    """Malformed JSON in a template, request body, or contained resource."""


class ContentSourceError(HarnessError, FileNotFoundError):
    """A template, sample content file, or generator is missing."""


# ------------------------------------------------------------------
# Remote errors
# ------------------------------------------------------------------

class RequestFailedError(HarnessError):
    """The FHIR server answered with HTTP status >= 400.

    Response artifacts have already been written when this is raised.
    """

    def __init__(self, result: "ExecutionResult") -> None:
        self.result = result
        super().__init__(
            f"FHIR server returned {result.status} {result.status_text}".rstrip()
        )
