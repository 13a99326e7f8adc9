"""
Search-result bundle.

Wraps matched ResearchStudy resources in a FHIR ``Bundle`` of type
``searchset``, one entry per study with a match score.
"""

import logging
import math
from typing import Any, Dict, Iterable, List, Optional

from .study import ResearchStudy

logger = logging.getLogger(__name__)


class SearchSet:
    """FHIR searchset Bundle of ResearchStudy matches."""

    resource_type = "Bundle"
    bundle_type = "searchset"

    def __init__(self, studies: Optional[Iterable[ResearchStudy]] = None):
        self.total = 0
        self.entry: List[Dict[str, Any]] = []
        for study in studies or []:
            self.add_entry(study)

    def add_entry(self, study: ResearchStudy, score: float = 1.0) -> Dict[str, Any]:
        """
        Add a study with a match score.

        Scores outside [0, 1] are clamped to the nearest bound; NaN counts as 0.
        """
        if math.isnan(score):
            logger.debug(f"NaN search score for {study.id}, using 0")
            score = 0.0
        elif score < 0 or score > 1:
            logger.debug(f"Clamping search score {score} for {study.id}")
            score = min(max(score, 0.0), 1.0)
        entry = {
            "resource": study.to_dict(),
            "search": {"mode": "match", "score": score},
        }
        self.entry.append(entry)
        self.total += 1
        return entry

    def to_dict(self) -> Dict[str, Any]:
        return {
            "resourceType": self.resource_type,
            "type": self.bundle_type,
            "total": self.total,
            "entry": list(self.entry),
        }
