"""
Contained-resource references.

FHIR resources embedded in a ResearchStudy's ``contained`` list are only
addressable through local references of the form ``#<id>``. These helpers
build such references and manage the contained list.
"""

from typing import Dict, Optional

from core.errors import MissingIdError

from .containers import add_to_container
from .types import Reference, Resource


def create_reference_to(resource: Resource) -> Reference:
    """
    Create a Reference to a resource, assuming it is (or will be) contained.

    Args:
        resource: The resource to point at. Must have an ``id``.

    Raises:
        MissingIdError: If the resource has no id. The message names the
            resourceType when it is known.
    """
    resource_id = resource.get("id")
    resource_type = resource.get("resourceType")
    if not resource_id:
        raise MissingIdError(resource_type)
    reference: Reference = {"reference": "#" + resource_id}
    if resource_type:
        reference["type"] = resource_type
    return reference


def add_contained_resource(study, resource: Resource) -> Reference:
    """
    Append ``resource`` to ``study.contained`` and return a reference to it.

    Raises:
        MissingIdError: If the resource has no id. Nothing is appended.
    """
    reference = create_reference_to(resource)
    add_to_container(study, "contained", resource)
    return reference


def get_contained_resource(study, resource_id: str) -> Optional[Resource]:
    """
    Look up a contained resource by id.

    This scans every contained resource, so it is O(n). Callers doing repeated
    lookups should build a map once with index_contained() instead.

    Returns:
        The first contained resource with a matching id, or None.
    """
    for contained in study.contained or []:
        if contained.get("id") == resource_id:
            return contained
    return None


def index_contained(study) -> Dict[str, Resource]:
    """Map contained resource ids to resources (first occurrence wins)."""
    index: Dict[str, Resource] = {}
    for contained in study.contained or []:
        resource_id = contained.get("id")
        if resource_id and resource_id not in index:
            index[resource_id] = contained
    return index
