"""
StudyBuilderError hierarchy for the ResearchStudy builder.

Provides typed exceptions so callers can tell reference-integrity problems
apart from configuration and import failures without parsing message strings.

Hierarchy:
    StudyBuilderError                   (base — all builder errors)
    ├── ConfigurationError              (bad environment / .env values)
    ├── ReferenceIntegrityError         (contained-resource references)
    │   └── MissingIdError              (reference target has no id)
    └── SitesImportError                (site list could not be loaded)

JSON decode errors raised while parsing bracketed condition strings are not
part of this hierarchy; they propagate as ``json.JSONDecodeError``.
"""

from typing import Optional


class StudyBuilderError(Exception):
    """Base exception for all ResearchStudy builder errors."""

    def __init__(self, message: str, *, study_id: Optional[str] = None,
                 cause: Optional[Exception] = None):
        self.study_id = study_id
        self.cause = cause
        super().__init__(message)
        if cause and not self.__cause__:
            self.__cause__ = cause

    def to_dict(self) -> dict:
        """Structured representation for logging."""
        d = {
            "error_type": type(self).__name__,
            "message": str(self),
        }
        if self.study_id:
            d["study_id"] = self.study_id
        if self.cause:
            d["cause"] = f"{type(self.cause).__name__}: {self.cause}"
        return d


# ── Configuration ────────────────────────────────────────────────────

class ConfigurationError(StudyBuilderError):
    """Invalid environment variable or .env value."""
    pass


# ── References ───────────────────────────────────────────────────────

class ReferenceIntegrityError(StudyBuilderError):
    """Base for errors creating references into the contained set."""
    pass


class MissingIdError(ReferenceIntegrityError):
    """The resource a reference should point to has no id."""

    def __init__(self, resource_type: Optional[str] = None, **kwargs):
        self.resource_type = resource_type
        message = "no ID to create reference"
        if resource_type:
            message += " to " + resource_type
        super().__init__(message, **kwargs)

    def to_dict(self) -> dict:
        d = super().to_dict()
        if self.resource_type:
            d["resource_type"] = self.resource_type
        return d


# ── Import ───────────────────────────────────────────────────────────

class SitesImportError(StudyBuilderError):
    """Site list file missing, unreadable or in an unsupported format."""

    def __init__(self, message: str, *, source_file: Optional[str] = None, **kwargs):
        self.source_file = source_file
        super().__init__(message, **kwargs)

    def to_dict(self) -> dict:
        d = super().to_dict()
        if self.source_file:
            d["source_file"] = self.source_file
        return d
