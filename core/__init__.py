"""
Core utilities for the ResearchStudy builder.

- Error hierarchy
- Logging configuration
- Environment settings
- Constants
"""

from .constants import (
    FHIR_VERSION,
    SYSTEM_NAME,
    SYSTEM_VERSION,
    DEFAULT_STUDY_STATUS,
)
from .errors import (
    StudyBuilderError,
    ConfigurationError,
    ReferenceIntegrityError,
    MissingIdError,
    SitesImportError,
)
from .logging_config import configure_logging, StudyLoggerAdapter
from .config import BuilderSettings, load_settings

__all__ = [
    # Constants
    "FHIR_VERSION",
    "SYSTEM_NAME",
    "SYSTEM_VERSION",
    "DEFAULT_STUDY_STATUS",
    # Errors
    "StudyBuilderError",
    "ConfigurationError",
    "ReferenceIntegrityError",
    "MissingIdError",
    "SitesImportError",
    # Logging
    "configure_logging",
    "StudyLoggerAdapter",
    # Settings
    "BuilderSettings",
    "load_settings",
]
