"""
Data quality analysis.

Runs every validator over a document, adds completeness checks and merges
the findings into a single QualityReport.
"""

import json
import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..config import DateLogicConfig, DuplicateConfig
from ..core.document import Document
from ..core.person import Person
from ..matching.matcher import DuplicateDetector
from .compliance import EncodingValidator, HeaderValidator, XRefValidator
from .date_logic import DateLogicValidator
from .issue import (
    Issue,
    Severity,
    MISSING_BIRTH_DATE,
    MISSING_DEATH_DATE,
    MISSING_NAME,
    NO_SOURCES,
    sort_by_severity,
)
from .references import ReferenceValidator
from .tag_registry import TagRegistry
from .tag_validator import TagValidator

logger = logging.getLogger(__name__)

TOP_ISSUE_COUNT = 5

CATEGORIES = ('date_logic', 'references', 'duplicates', 'completeness', 'tags', 'compliance')


def _ratio(count: int, total: int) -> float:
    if total == 0:
        return 0.0
    return count / total


@dataclass
class QualityReport:
    """Counts, completeness metrics and every issue found in a document."""

    total_individuals: int = 0
    total_families: int = 0
    total_sources: int = 0

    individuals_with_birth_date: int = 0
    individuals_with_death_date: int = 0
    individuals_with_sources: int = 0
    individuals_with_places: int = 0

    errors: List[Issue] = field(default_factory=list)
    warnings: List[Issue] = field(default_factory=list)
    info: List[Issue] = field(default_factory=list)

    # Issues per originating check, keyed by CATEGORIES
    by_category: Dict[str, List[Issue]] = field(
        default_factory=lambda: {category: [] for category in CATEGORIES})

    @property
    def birth_date_coverage(self) -> float:
        return _ratio(self.individuals_with_birth_date, self.total_individuals)

    @property
    def death_date_coverage(self) -> float:
        return _ratio(self.individuals_with_death_date, self.total_individuals)

    @property
    def source_coverage(self) -> float:
        return _ratio(self.individuals_with_sources, self.total_individuals)

    @property
    def place_coverage(self) -> float:
        return _ratio(self.individuals_with_places, self.total_individuals)

    @property
    def error_count(self) -> int:
        return len(self.errors)

    @property
    def warning_count(self) -> int:
        return len(self.warnings)

    @property
    def info_count(self) -> int:
        return len(self.info)

    @property
    def total_issues(self) -> int:
        return self.error_count + self.warning_count + self.info_count

    def all_issues(self) -> List[Issue]:
        """Every issue, errors first."""
        return self.errors + self.warnings + self.info

    def issues_for_record(self, xref: str) -> List[Issue]:
        """Issues whose primary or related record is ``xref``."""
        return [issue for issue in self.all_issues()
                if issue.record_id == xref or issue.related_id == xref]

    def issues_by_code(self, code: str) -> List[Issue]:
        return [issue for issue in self.all_issues() if issue.code == code]

    def top_issues(self, limit: int = TOP_ISSUE_COUNT) -> List[tuple]:
        """Most frequent (code, count) pairs; ties are ordered by code."""
        counts = Counter(issue.code for issue in self.all_issues())
        return sorted(counts.items(), key=lambda item: (-item[1], item[0]))[:limit]

    def __str__(self) -> str:
        lines = [
            "GEDCOM Quality Report",
            "=====================",
            f"Records: {self.total_individuals} individuals, "
            f"{self.total_families} families, {self.total_sources} sources",
            "",
            "Data Completeness:",
            f"- Birth dates: {self.birth_date_coverage * 100:.0f}% "
            f"({self.individuals_with_birth_date}/{self.total_individuals})",
            f"- Death dates: {self.death_date_coverage * 100:.0f}% "
            f"({self.individuals_with_death_date}/{self.total_individuals})",
            f"- Sources: {self.source_coverage * 100:.0f}% "
            f"({self.individuals_with_sources}/{self.total_individuals})",
            f"- Places: {self.place_coverage * 100:.0f}% "
            f"({self.individuals_with_places}/{self.total_individuals})",
            "",
            f"Issues Found: {self.total_issues} total",
            f"- Errors: {self.error_count}",
            f"- Warnings: {self.warning_count}",
            f"- Info: {self.info_count}",
        ]

        if self.total_issues:
            lines.append("")
            lines.append("Top Issues:")
            for code, count in self.top_issues():
                lines.append(f"- {code}: {count}")

        return "\n".join(lines) + "\n"

    def to_dict(self) -> Dict[str, Any]:
        """Structured form of the report."""
        return {
            'total_individuals': self.total_individuals,
            'total_families': self.total_families,
            'total_sources': self.total_sources,
            'individuals_with_birth_date': self.individuals_with_birth_date,
            'individuals_with_death_date': self.individuals_with_death_date,
            'individuals_with_sources': self.individuals_with_sources,
            'individuals_with_places': self.individuals_with_places,
            'birth_date_coverage': self.birth_date_coverage,
            'death_date_coverage': self.death_date_coverage,
            'source_coverage': self.source_coverage,
            'place_coverage': self.place_coverage,
            'errors': [issue.to_dict() for issue in self.errors],
            'warnings': [issue.to_dict() for issue in self.warnings],
            'info': [issue.to_dict() for issue in self.info],
            'issues_by_category': {
                category: [issue.to_dict() for issue in issues]
                for category, issues in self.by_category.items()
            },
            'total_issues': self.total_issues,
            'error_count': self.error_count,
            'warning_count': self.warning_count,
            'info_count': self.info_count,
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)


class QualityAnalyzer:
    """Runs all checks over a document and builds a QualityReport.

    Custom tag checks run only when a tag registry is given.
    """

    def __init__(
        self,
        date_logic_config: Optional[DateLogicConfig] = None,
        duplicate_config: Optional[DuplicateConfig] = None,
        tag_registry: Optional[TagRegistry] = None,
        validate_unknown_tags: bool = False,
    ):
        self.date_logic = DateLogicValidator(date_logic_config)
        self.references = ReferenceValidator()
        self.duplicates = DuplicateDetector(duplicate_config)
        self.tags = TagValidator(tag_registry, validate_unknown_tags) if tag_registry is not None else None
        self.header = HeaderValidator()
        self.xrefs = XRefValidator()
        self.encoding = EncodingValidator()

    def analyze(self, document: Optional[Document]) -> QualityReport:
        report = QualityReport()
        if document is None:
            return report

        individuals = document.individuals()
        report.total_individuals = len(individuals)
        report.total_families = len(document.families())
        report.total_sources = len(document.sources())

        categories = report.by_category
        categories['date_logic'] = self.date_logic.validate(document)
        categories['references'] = self.references.validate(document)
        categories['duplicates'] = self.duplicates.find_duplicate_issues(document)
        categories['completeness'] = self.check_completeness(individuals, report)
        if self.tags is not None:
            categories['tags'] = self.tags.validate(document)
        categories['compliance'] = (
            self.header.validate_header(document)
            + self.xrefs.validate_xrefs(document)
            + self.encoding.validate(document)
        )

        merged = [issue for category in CATEGORIES for issue in categories[category]]
        for issue in sort_by_severity(merged):
            if issue.severity == Severity.ERROR:
                report.errors.append(issue)
            elif issue.severity == Severity.WARNING:
                report.warnings.append(issue)
            else:
                report.info.append(issue)

        logger.debug(f"Quality report: {report.error_count} errors, "
                     f"{report.warning_count} warnings, {report.info_count} info")
        return report

    def check_completeness(self, individuals: List[Person], report: QualityReport) -> List[Issue]:
        """Count completeness facts and emit INFO issues for the gaps."""
        issues: List[Issue] = []
        for person in individuals:
            if person.birth_date() is not None:
                report.individuals_with_birth_date += 1
            else:
                issues.append(Issue.create(
                    Severity.INFO, MISSING_BIRTH_DATE,
                    "individual has no birth date recorded", person.id))

            if person.death_date() is not None:
                report.individuals_with_death_date += 1
            elif person.get_death_event() is not None:
                issues.append(Issue.create(
                    Severity.INFO, MISSING_DEATH_DATE,
                    "individual has a death event without a date", person.id))

            if person.has_sources():
                report.individuals_with_sources += 1
            else:
                issues.append(Issue.create(
                    Severity.INFO, NO_SOURCES,
                    "individual has no source citations", person.id))

            if person.has_place():
                report.individuals_with_places += 1

            if not person.names:
                issues.append(Issue.create(
                    Severity.INFO, MISSING_NAME,
                    "individual has no name recorded", person.id))
        return issues
