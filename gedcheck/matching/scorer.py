"""
Duplicate scoring for pairs of individuals.

Confidence is built additively from independent pieces of evidence; nothing
is ever subtracted:

- same surname: +0.3
- given name similarity: +0.3 x similarity (pairs below the minimum similarity are rejected)
- birth year: +0.2 when equal, +0.1 when within the allowed difference
- same recorded sex: +0.1
"""

import unicodedata
from dataclasses import dataclass, field
from typing import List, Optional

from rapidfuzz.distance import Levenshtein

from ..config import DuplicateConfig
from ..core.person import Person
from ..validation.issue import Issue, Severity, POTENTIAL_DUPLICATE

SURNAME_WEIGHT = 0.3
GIVEN_NAME_WEIGHT = 0.3
SAME_BIRTH_YEAR_WEIGHT = 0.2
CLOSE_BIRTH_YEAR_WEIGHT = 0.1
SEX_WEIGHT = 0.1

UNSPECIFIED_SEX = {'', 'U'}


def normalize_name(name: Optional[str]) -> str:
    """Trim, lowercase and strip diacritics ("José" -> "jose")."""
    if not name:
        return ''
    decomposed = unicodedata.normalize('NFD', name.strip().lower())
    stripped = ''.join(char for char in decomposed if unicodedata.category(char) != 'Mn')
    return unicodedata.normalize('NFC', stripped)


def string_similarity(first: str, second: str) -> float:
    """1 - (Levenshtein distance / longer length), over code points."""
    if first == second:
        return 1.0
    if not first or not second:
        return 0.0
    distance = Levenshtein.distance(first, second)
    return 1.0 - distance / max(len(first), len(second))


def extract_surname(person: Person) -> str:
    """Structured surname, else the text between the outer slashes of the primary name."""
    if person.surname:
        return person.surname

    full_name = person.get_primary_name() or ''
    start = full_name.find('/')
    end = full_name.rfind('/')
    if start == -1 or end <= start:
        return ''
    return full_name[start + 1:end]


def extract_given_name(person: Person) -> str:
    """Structured given name, else the text before the first slash."""
    if person.given_name:
        return person.given_name

    full_name = person.get_primary_name() or ''
    return full_name.split('/', 1)[0].strip()


def display_name(person: Person) -> str:
    full_name = person.get_primary_name()
    if full_name:
        return ' '.join(full_name.replace('/', ' ').split())
    if person.given_name or person.surname:
        return f"{person.given_name or ''} {person.surname or ''}".strip()
    return person.id


@dataclass
class DuplicatePair:
    """Two individuals that may describe the same person.

    Attributes:
        individual1: First individual
        individual2: Second individual
        confidence: Additive evidence score in [0, 1]
        reasons: Human-readable evidence, in scoring order
    """
    individual1: Person
    individual2: Person
    confidence: float = 0.0
    reasons: List[str] = field(default_factory=list)

    def __str__(self) -> str:
        return (f"{display_name(self.individual1)} ({self.individual1.id}) <-> "
                f"{display_name(self.individual2)} ({self.individual2.id}): "
                f"{self.confidence:.0%} [{'; '.join(self.reasons)}]")

    def to_issue(self) -> Issue:
        """Convert to an INFO issue on the first individual."""
        issue = Issue.create(
            Severity.INFO,
            POTENTIAL_DUPLICATE,
            f"Potential duplicate: {display_name(self.individual1)} may be the same as "
            f"{display_name(self.individual2)} ({self.confidence * 100:.0f}% confidence)",
            self.individual1.id,
        ).with_related(self.individual2.id).with_detail('confidence', f"{self.confidence:.2f}")

        for number, reason in enumerate(self.reasons, start=1):
            issue = issue.with_detail(f"reason_{number}", reason)
        return issue


class DuplicateScorer:
    """Scores one pair of individuals under a DuplicateConfig."""

    def __init__(self, config: Optional[DuplicateConfig] = None):
        self.config = config or DuplicateConfig()

    def _normalize(self, name: str) -> str:
        if self.config.normalize_names:
            return normalize_name(name)
        return name

    def surname_key(self, person: Person) -> str:
        """Grouping key: the (normalized) surname, empty when unknown."""
        return self._normalize(extract_surname(person))

    def score(self, first: Person, second: Person) -> Optional[DuplicatePair]:
        """Score a pair; None when the pair is rejected or scores too low."""
        confidence = 0.0
        reasons: List[str] = []

        surname1 = self.surname_key(first)
        surname2 = self.surname_key(second)
        # Non-exact surname mode currently compares exactly as well
        if not surname1 or not surname2 or surname1 != surname2:
            return None
        confidence += SURNAME_WEIGHT
        reasons.append("exact surname match")

        given1 = self._normalize(extract_given_name(first))
        given2 = self._normalize(extract_given_name(second))
        similarity = string_similarity(given1, given2) if given1 and given2 else 0.0
        if similarity < self.config.min_name_similarity:
            return None
        confidence += GIVEN_NAME_WEIGHT * similarity
        if similarity == 1.0:
            reasons.append("exact given name match")
        else:
            reasons.append(f"similar given name ({similarity * 100:.0f}%)")

        birth1 = first.birth_date()
        birth2 = second.birth_date()
        if self.config.require_birth_date and (birth1 is None or birth2 is None):
            return None

        if birth1 is not None and birth2 is not None and birth1.has_year and birth2.has_year:
            difference = abs(birth1.year - birth2.year)
            if difference == 0:
                confidence += SAME_BIRTH_YEAR_WEIGHT
                reasons.append("same birth year")
            elif difference <= self.config.max_birth_year_diff:
                confidence += CLOSE_BIRTH_YEAR_WEIGHT
                reasons.append(f"birth year within {difference} years")

        if (first.sex not in UNSPECIFIED_SEX and second.sex not in UNSPECIFIED_SEX
                and first.sex == second.sex):
            confidence += SEX_WEIGHT
            reasons.append("same sex")

        if confidence < self.config.min_confidence:
            return None

        return DuplicatePair(first, second, confidence, reasons)
