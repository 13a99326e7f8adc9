"""Per-study generator for contained-resource ids."""

import itertools

from core.constants import DEFAULT_ID_PREFIX


class ReferenceIdGenerator:
    """
    Produces ``<prefix>-<n>`` ids from a private counter starting at 0.

    The counter is shared by all prefixes, so ids from one generator are
    pairwise distinct even when a prefix repeats. Separate generators count
    independently.
    """

    __slots__ = ("_counter",)

    def __init__(self):
        self._counter = itertools.count()

    def generate(self, prefix: str = DEFAULT_ID_PREFIX) -> str:
        return f"{prefix}-{next(self._counter)}"

    def advance_past(self, value: int) -> None:
        """Make sure the next generated number is greater than ``value``."""
        probe = next(self._counter)
        start = max(probe, value + 1)
        self._counter = itertools.count(start)

    def __repr__(self) -> str:
        return "ReferenceIdGenerator()"
