"""
Duplicate individual detection.

Individuals are grouped by normalized surname and only compared within a
group, so the cost is the sum of squared group sizes instead of the square
of the whole population.
"""

import logging
from typing import Dict, List, Optional

from ..config import DuplicateConfig
from ..core.document import Document
from ..core.person import Person
from ..validation.issue import Issue
from .scorer import DuplicatePair, DuplicateScorer

logger = logging.getLogger(__name__)


class DuplicateDetector:
    """Finds pairs of individuals that may be the same person."""

    def __init__(self, config: Optional[DuplicateConfig] = None):
        self.config = config or DuplicateConfig()
        self.scorer = DuplicateScorer(self.config)

    def find_duplicates(self, document: Optional[Document]) -> List[DuplicatePair]:
        """
        Find potential duplicates.

        Args:
            document: Document to search

        Returns:
            Pairs in document order within each surname group
        """
        if document is None:
            return []

        individuals = document.individuals()
        if len(individuals) < 2:
            return []

        duplicates: List[DuplicatePair] = []
        comparisons = 0
        for group in self.surname_groups(individuals).values():
            for i, person1 in enumerate(group):
                for person2 in group[i + 1:]:
                    comparisons += 1
                    pair = self.scorer.score(person1, person2)
                    if pair is not None:
                        duplicates.append(pair)

        logger.debug(f"Duplicates: {len(duplicates)} pairs from {comparisons} comparisons")
        return duplicates

    def find_duplicate_issues(self, document: Optional[Document]) -> List[Issue]:
        return [pair.to_issue() for pair in self.find_duplicates(document)]

    def surname_groups(self, individuals: List[Person]) -> Dict[str, List[Person]]:
        """Group individuals by surname key; individuals without a surname are left out."""
        groups: Dict[str, List[Person]] = {}
        for person in individuals:
            key = self.scorer.surname_key(person)
            if not key:
                continue
            groups.setdefault(key, []).append(person)
        return groups
