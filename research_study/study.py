"""
ResearchStudy aggregate.

A FHIR R4 ResearchStudy that owns its contained resources (sites, and any
other resource a caller embeds) and hands out ``#id`` references into them.

Usage:
    from research_study import ResearchStudy

    study = ResearchStudy("NCT01234567")
    study.add_conditions("Breast Cancer, HER2+")
    study.add_contact("Trial Office", "555-0100", "trials@example.org")
    study.add_site("Foo Clinic", "555-1234")
    bundle_entry = study.to_dict()
"""

import copy
import logging
import re
from typing import Any, Dict, List, Optional, Sequence, Union

from core.constants import (
    DEFAULT_ID_PREFIX,
    DEFAULT_STUDY_STATUS,
    DEFAULT_TELECOM_USE,
    LOCATION_ID_PREFIX,
    STUDY_ID_PREFIX,
)
from core.logging_config import StudyLoggerAdapter

from . import references
from .conditions import parse_conditions
from .containers import add_to_container
from .ids import ReferenceIdGenerator
from .types import CodeableConcept, ContactDetail, ContactPoint, Location, Reference, Resource

logger = logging.getLogger(__name__)

# Python attribute -> FHIR JSON key, in output order (after resourceType/id)
FHIR_FIELDS: Dict[str, str] = {
    "identifier": "identifier",
    "title": "title",
    "protocol": "protocol",
    "status": "status",
    "phase": "phase",
    "category": "category",
    "condition": "condition",
    "contact": "contact",
    "keyword": "keyword",
    "location": "location",
    "description": "description",
    "arm": "arm",
    "objective": "objective",
    "enrollment": "enrollment",
    "sponsor": "sponsor",
    "principal_investigator": "principalInvestigator",
    "site": "site",
    "contained": "contained",
}

_GENERATED_NUMBER = re.compile(r"^(\d+)$")


def _generated_number(resource: Resource) -> Optional[int]:
    """Counter value of an id this builder could have generated, else None."""
    resource_id = str(resource.get("id", ""))
    prefixes = {DEFAULT_ID_PREFIX, LOCATION_ID_PREFIX, resource.get("resourceType")}
    for prefix in prefixes:
        if prefix and resource_id.startswith(prefix + "-"):
            match = _GENERATED_NUMBER.match(resource_id[len(prefix) + 1:])
            if match:
                return int(match.group(1))
    return None


def _build_telecom(phone: Optional[str], email: Optional[str]) -> List[ContactPoint]:
    telecom: List[ContactPoint] = []
    if phone:
        telecom.append({"system": "phone", "value": phone, "use": DEFAULT_TELECOM_USE})
    if email:
        telecom.append({"system": "email", "value": email, "use": DEFAULT_TELECOM_USE})
    return telecom


class ResearchStudy:
    """
    A FHIR ResearchStudy with helpers for contacts, sites and contained resources.

    The id is fixed at construction. List fields start as None and are
    created on first append. Generated contained-resource ids come from a
    per-instance ReferenceIdGenerator that is never serialised.
    """

    resource_type = "ResearchStudy"

    def __init__(self, study_id: Union[str, int], *, status: str = DEFAULT_STUDY_STATUS):
        if isinstance(study_id, int) and not isinstance(study_id, bool):
            # Convenience for using list indices as ids
            self._id = f"{STUDY_ID_PREFIX}-{study_id}"
        else:
            self._id = str(study_id)
        self.status = status

        self.identifier: Optional[List[Dict[str, Any]]] = None
        self.title: Optional[str] = None
        self.protocol: Optional[List[Reference]] = None
        self.phase: Optional[CodeableConcept] = None
        self.category: Optional[List[CodeableConcept]] = None
        self.condition: Optional[List[CodeableConcept]] = None
        self.contact: Optional[List[ContactDetail]] = None
        self.keyword: Optional[List[CodeableConcept]] = None
        self.location: Optional[List[CodeableConcept]] = None
        self.description: Optional[str] = None
        self.arm: Optional[List[Dict[str, Any]]] = None
        self.objective: Optional[List[Dict[str, Any]]] = None
        self.enrollment: Optional[List[Reference]] = None
        self.sponsor: Optional[Reference] = None
        self.principal_investigator: Optional[Reference] = None
        self.site: Optional[List[Reference]] = None
        self.contained: Optional[List[Resource]] = None

        self._id_generator = ReferenceIdGenerator()
        self._log = StudyLoggerAdapter(logger, {"study_id": self._id})

    @property
    def id(self) -> str:
        return self._id

    def __repr__(self) -> str:
        return f"ResearchStudy(id={self._id!r}, status={self.status!r})"

    # ── Contained resources ─────────────────────────────────────────

    def create_reference_id(self, prefix: str = DEFAULT_ID_PREFIX) -> str:
        """Create a new id for a contained resource, unique within this study."""
        return self._id_generator.generate(prefix)

    def _unused_reference_id(self, prefix: str) -> str:
        taken = set(references.index_contained(self))
        new_id = self.create_reference_id(prefix)
        while new_id in taken:
            self._log.debug("Generated id %s already contained, regenerating", new_id)
            new_id = self.create_reference_id(prefix)
        return new_id

    def add_contained_resource(self, resource: Resource) -> Reference:
        """
        Add a contained resource, returning a reference to it.

        If the resource has no id, one is generated from its resourceType and
        written onto the resource in place. Generated ids skip ids already in
        the contained list. Caller-supplied ids are kept as given; a duplicate
        is logged but not rejected.

        Args:
            resource: The resource to embed. Ownership passes to the study.

        Returns:
            A ``{"reference": "#<id>", "type": <resourceType>}`` Reference.
        """
        if not resource.get("id"):
            resource["id"] = self._unused_reference_id(
                resource.get("resourceType") or DEFAULT_ID_PREFIX
            )
        elif references.get_contained_resource(self, resource["id"]) is not None:
            self._log.warning("Contained resource id %s is already in use", resource["id"],
                              extra={"resource_id": resource["id"]})
        reference = references.add_contained_resource(self, resource)
        self._log.debug("Added contained %s", reference.get("type", "resource"),
                        extra={"resource_id": resource["id"]})
        return reference

    def get_contained_resource(self, resource_id: str) -> Optional[Resource]:
        """Find a contained resource by id (linear scan), or None."""
        return references.get_contained_resource(self, resource_id)

    # ── Contacts ────────────────────────────────────────────────────

    def add_contact_detail(self, contact: ContactDetail) -> ContactDetail:
        """Append an existing ContactDetail as-is and return it."""
        add_to_container(self, "contact", contact)
        return contact

    def add_contact(self, name: str, phone: Optional[str] = None,
                    email: Optional[str] = None) -> ContactDetail:
        """
        Build and append a contact.

        Args:
            name: The name of the contact
            phone: Work phone number of the contact
            email: Work email of the contact

        Returns:
            The newly created contact, as stored on the study.
        """
        contact: ContactDetail = {"name": name}
        telecom = _build_telecom(phone, email)
        if telecom:
            contact["telecom"] = telecom
        return self.add_contact_detail(contact)

    # ── Sites ───────────────────────────────────────────────────────

    def add_site_location(self, location: Location) -> Location:
        """Contain an existing Location and reference it from ``site``."""
        add_to_container(self, "site", self.add_contained_resource(location))
        return location

    def add_site(self, name: str, phone: Optional[str] = None,
                 email: Optional[str] = None) -> Location:
        """
        Create a Location for a site, contain it and reference it from ``site``.

        Returns:
            The Location added, with a generated ``location-<n>`` id.
        """
        location: Location = {
            "resourceType": "Location",
            "id": self._unused_reference_id(LOCATION_ID_PREFIX),
            "name": name,
        }
        for telecom in _build_telecom(phone, email):
            add_to_container(location, "telecom", telecom)
        return self.add_site_location(location)

    # ── Passthrough list fields ─────────────────────────────────────

    def add_conditions(self, conditions: Union[str, Sequence[str]]) -> List[CodeableConcept]:
        """Parse conditions (list, JSON array or comma list) and append them."""
        concepts = parse_conditions(conditions)
        for concept in concepts:
            add_to_container(self, "condition", concept)
        return concepts

    def add_keywords(self, keywords: Union[str, Sequence[str]]) -> List[CodeableConcept]:
        """Parse keywords the same way as conditions and append them."""
        concepts = parse_conditions(keywords)
        for concept in concepts:
            add_to_container(self, "keyword", concept)
        return concepts

    def add_identifier(self, identifier: Dict[str, Any]) -> Dict[str, Any]:
        add_to_container(self, "identifier", identifier)
        return identifier

    def add_category(self, category: CodeableConcept) -> CodeableConcept:
        add_to_container(self, "category", category)
        return category

    def add_arm(self, arm: Dict[str, Any]) -> Dict[str, Any]:
        add_to_container(self, "arm", arm)
        return arm

    def add_objective(self, objective: Dict[str, Any]) -> Dict[str, Any]:
        add_to_container(self, "objective", objective)
        return objective

    # ── Serialization ───────────────────────────────────────────────

    def to_dict(self) -> Dict[str, Any]:
        """FHIR JSON for this study. Unset fields are omitted."""
        result: Dict[str, Any] = {
            "resourceType": self.resource_type,
            "id": self._id,
        }
        for attr, key in FHIR_FIELDS.items():
            value = getattr(self, attr)
            if value is not None:
                result[key] = copy.deepcopy(value)
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ResearchStudy':
        """
        Rebuild a study from FHIR JSON.

        The id generator is moved past the highest contained id of the form
        ``<prefix>-<n>``, where prefix is one the builder generates with
        (``resource``, ``location`` or the resource's own resourceType).
        Other caller ids ending in digits do not move it.
        """
        if data.get("resourceType", cls.resource_type) != cls.resource_type:
            raise ValueError(f"Expected a ResearchStudy, got {data.get('resourceType')}")
        if not data.get("id"):
            raise ValueError("ResearchStudy JSON has no id")
        study = cls(data["id"], status=data.get("status", DEFAULT_STUDY_STATUS))
        for attr, key in FHIR_FIELDS.items():
            if attr != "status" and key in data:
                setattr(study, attr, copy.deepcopy(data[key]))

        highest = -1
        for resource in study.contained or []:
            number = _generated_number(resource)
            if number is not None:
                highest = max(highest, number)
        if highest >= 0:
            study._id_generator.advance_past(highest)
        return study
