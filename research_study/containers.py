"""Helpers for growing optional list-valued fields."""

from typing import Any, List, MutableMapping


def add_to_container(container: Any, field_key: str, item: Any) -> List[Any]:
    """
    Append ``item`` to the list stored under ``field_key``.

    The list is created when the field is missing or None. ``container`` may
    be a FHIR JSON dict or an object with the field as an attribute (such as
    ResearchStudy). Returns the list that now holds ``item``.
    """
    if isinstance(container, MutableMapping):
        items = container.get(field_key)
        if items is None:
            items = container[field_key] = []
    else:
        items = getattr(container, field_key, None)
        if items is None:
            items = []
            setattr(container, field_key, items)
    items.append(item)
    return items
