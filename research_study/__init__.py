"""
FHIR ResearchStudy builder.

Builds ResearchStudy resources with contained sites and contacts and keeps
their ``#id`` references consistent.
"""

from .conditions import parse_conditions, parse_condition_string, concepts_from_list
from .containers import add_to_container
from .ids import ReferenceIdGenerator
from .references import (
    create_reference_to,
    add_contained_resource,
    get_contained_resource,
    index_contained,
)
from .study import ResearchStudy
from .searchset import SearchSet
from .sites_import import load_sites, SiteRow, SitesImportResult

__all__ = [
    # Conditions
    "parse_conditions",
    "parse_condition_string",
    "concepts_from_list",
    # Containers
    "add_to_container",
    # Ids / references
    "ReferenceIdGenerator",
    "create_reference_to",
    "add_contained_resource",
    "get_contained_resource",
    "index_contained",
    # Aggregate
    "ResearchStudy",
    "SearchSet",
    # Import
    "load_sites",
    "SiteRow",
    "SitesImportResult",
]
