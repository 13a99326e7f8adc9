"""
FHIR R4 record shapes used by the ResearchStudy builder.

Records are plain FHIR JSON dicts; these TypedDicts only document the keys
the builder reads and writes. No schema validation is done here.
"""

from typing import Any, Dict, List, TypedDict


# Any FHIR resource: optional "id" and "resourceType" plus arbitrary fields
Resource = Dict[str, Any]


class CodeableConcept(TypedDict, total=False):
    """Concept carrying only free text (conditions, keywords)."""
    text: str


class ContactPoint(TypedDict, total=False):
    system: str  # phone | email | ...
    value: str
    use: str  # work | home | ...


class ContactDetail(TypedDict, total=False):
    name: str
    telecom: List[ContactPoint]


class Location(TypedDict, total=False):
    resourceType: str
    id: str
    name: str
    telecom: List[ContactPoint]


class Reference(TypedDict, total=False):
    """Pointer to a contained resource as ``#<id>``."""
    reference: str
    type: str
