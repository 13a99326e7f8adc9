"""
Condition / keyword list parsing.

Upstream population steps hand over condition and keyword fields either as a
list of strings or as a single string. A single string may be a JSON array
(``'["Breast Cancer", "HER2+"]'``) or a comma-separated list
(``"Breast Cancer, HER2+"``).
"""

import json
from typing import List, Sequence, Union

from .types import CodeableConcept


def concepts_from_list(items: Sequence[str]) -> List[CodeableConcept]:
    """Map each string to a text-only CodeableConcept, preserving order."""
    return [{"text": item} for item in items]


def parse_condition_string(text: str) -> List[CodeableConcept]:
    """
    Parse a single condition string.

    A string that starts with '[' and ends with ']' is decoded as JSON; a
    decode failure raises json.JSONDecodeError rather than falling back to
    comma splitting. Anything else is split on commas and each token is
    stripped. Empty tokens are kept.
    """
    if text.startswith("[") and text.endswith("]"):
        return concepts_from_list(json.loads(text))
    return concepts_from_list([token.strip() for token in text.split(",")])


def parse_conditions(conditions: Union[str, Sequence[str]]) -> List[CodeableConcept]:
    """
    Convert conditions into a list of CodeableConcepts.

    Args:
        conditions: A list of strings, or a single JSON-array / comma-separated string.

    Returns:
        One ``{"text": ...}`` concept per entry, in input order.

    Raises:
        json.JSONDecodeError: If a bracketed string is not valid JSON.
    """
    if isinstance(conditions, str):
        return parse_condition_string(conditions)
    return concepts_from_list(conditions)
