"""Centralised constants used across the ResearchStudy builder."""

# FHIR release the emitted resources follow
FHIR_VERSION: str = "4.0.1"

# System metadata
SYSTEM_NAME: str = "ResearchStudyBuilder"
SYSTEM_VERSION: str = "0.1.0"

# ResearchStudy defaults
DEFAULT_STUDY_STATUS: str = "active"
STUDY_ID_PREFIX: str = "study"

# Prefixes for generated contained-resource ids
DEFAULT_ID_PREFIX: str = "resource"
LOCATION_ID_PREFIX: str = "location"

# ContactPoint.use for telecoms built from bare phone/email values
DEFAULT_TELECOM_USE: str = "work"
