"""
Chronological plausibility checks for individuals and their relatives.

Impossibilities (death before birth, child born before a parent, marriage
before one's own birth) are errors. Implausibilities (very long lifespans,
very young or old parents) are warnings. Checks needing a date that is missing
or has no year are skipped.
"""

import logging
from typing import List, Optional

from ..config import DateLogicConfig
from ..core.date import GedcomDate, InsufficientDateError, years_between
from ..core.document import Document
from ..core.person import Person
from .issue import (
    Issue,
    Severity,
    CHILD_BEFORE_PARENT,
    DEATH_BEFORE_BIRTH,
    IMPOSSIBLE_AGE,
    MARRIAGE_BEFORE_BIRTH,
    UNREASONABLE_PARENT_AGE,
)

logger = logging.getLogger(__name__)


def _usable(date: Optional[GedcomDate]) -> bool:
    return date is not None and date.has_year


class DateLogicValidator:
    """Validates chronological relationships between dates."""

    def __init__(self, config: Optional[DateLogicConfig] = None):
        self.config = config or DateLogicConfig()

    def validate(self, document: Optional[Document]) -> List[Issue]:
        """Run every date check over all individuals in the document."""
        if document is None:
            return []

        issues: List[Issue] = []
        individuals = document.individuals()
        for person in individuals:
            issues.extend(self.validate_individual(document, person))

        logger.debug(f"Date logic: {len(issues)} issues across {len(individuals)} individuals")
        return issues

    def validate_individual(self, document: Document, person: Person) -> List[Issue]:
        """All date checks for one individual, including checks against relatives."""
        issues: List[Issue] = []

        death_issue = self.check_death_before_birth(person)
        if death_issue:
            issues.append(death_issue)

        age_issue = self.check_lifespan(person)
        if age_issue:
            issues.append(age_issue)

        issues.extend(self.check_child_before_parents(document, person))
        issues.extend(self.check_marriage_before_birth(document, person))
        issues.extend(self.check_parent_ages(document, person))
        return issues

    def check_death_before_birth(self, person: Person) -> Optional[Issue]:
        """Context-free check that death is not before birth."""
        birth = person.birth_date()
        death = person.death_date()
        if not _usable(birth) or not _usable(death):
            return None

        if death.is_before(birth):
            return Issue.create(
                Severity.ERROR,
                DEATH_BEFORE_BIRTH,
                f"death date ({death}) is before birth date ({birth})",
                person.id,
            ).with_details(birth_date=birth, death_date=death)
        return None

    def check_lifespan(self, person: Person) -> Optional[Issue]:
        birth = person.birth_date()
        death = person.death_date()
        try:
            age = years_between(birth, death)
        except InsufficientDateError:
            return None

        max_age = self.config.max_lifespan
        if age > max_age:
            return Issue.create(
                Severity.WARNING,
                IMPOSSIBLE_AGE,
                f"age of {age} years exceeds maximum reasonable age of {max_age}",
                person.id,
            ).with_details(age=age, max_age=max_age, birth_date=birth, death_date=death)
        return None

    def check_child_before_parents(self, document: Document, person: Person) -> List[Issue]:
        """One error per distinct parent born after this individual."""
        birth = person.birth_date()
        if not _usable(birth):
            return []

        issues = []
        for parent in document.parents_of(person):
            parent_birth = parent.birth_date()
            if not _usable(parent_birth):
                continue
            if birth.is_before(parent_birth):
                issues.append(
                    Issue.create(
                        Severity.ERROR,
                        CHILD_BEFORE_PARENT,
                        f"child born ({birth}) before parent born ({parent_birth})",
                        person.id,
                    )
                    .with_related(parent.id)
                    .with_details(child_birth=birth, parent_birth=parent_birth)
                )
        return issues

    def check_marriage_before_birth(self, document: Document, person: Person) -> List[Issue]:
        birth = person.birth_date()
        if not _usable(birth):
            return []

        issues = []
        for family in document.spouse_families(person):
            marriage = family.marriage_date()
            if not _usable(marriage):
                continue
            if marriage.is_before(birth):
                issues.append(
                    Issue.create(
                        Severity.ERROR,
                        MARRIAGE_BEFORE_BIRTH,
                        f"marriage date ({marriage}) is before birth date ({birth})",
                        person.id,
                    )
                    .with_related(family.id)
                    .with_details(birth_date=birth, marriage_date=marriage)
                )
        return issues

    def check_parent_ages(self, document: Document, child: Person) -> List[Issue]:
        """Warn about parents who were implausibly young or old at this birth.

        Issues are reported on the parent with the child as related record.
        """
        child_birth = child.birth_date()
        if not _usable(child_birth):
            return []

        issues = []
        for parent in document.parents_of(child):
            parent_birth = parent.birth_date()
            try:
                age = years_between(parent_birth, child_birth)
            except InsufficientDateError:
                continue

            if age < self.config.min_parent_age:
                issues.append(
                    Issue.create(
                        Severity.WARNING,
                        UNREASONABLE_PARENT_AGE,
                        f"parent was {age} years old at child's birth "
                        f"(minimum: {self.config.min_parent_age})",
                        parent.id,
                    )
                    .with_related(child.id)
                    .with_details(
                        parent_age=age,
                        min_age=self.config.min_parent_age,
                        parent_birth=parent_birth,
                        child_birth=child_birth,
                    )
                )

            if parent.sex == 'F':
                role, max_age = 'mother', self.config.max_mother_age
            else:
                role, max_age = 'father', self.config.max_father_age

            if age > max_age:
                issues.append(
                    Issue.create(
                        Severity.WARNING,
                        UNREASONABLE_PARENT_AGE,
                        f"{role} was {age} years old at child's birth (maximum: {max_age})",
                        parent.id,
                    )
                    .with_related(child.id)
                    .with_details(
                        parent_age=age,
                        max_age=max_age,
                        parent_birth=parent_birth,
                        child_birth=child_birth,
                    )
                )
        return issues
