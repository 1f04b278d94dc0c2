"""
Validation issues with severity levels and rich context.

An Issue is an immutable finding produced by a validator. Builders such as
``with_related`` and ``with_detail`` always return a new Issue, so an issue
placed in a report can never be changed through another reference.
"""

from dataclasses import dataclass, field, replace
from enum import IntEnum
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional

from ..config import Strictness


class Severity(IntEnum):
    """Severity of a validation issue. Lower values sort first."""
    ERROR = 0    # Data integrity problem that must be fixed
    WARNING = 1  # Potential problem that should be reviewed
    INFO = 2     # Data quality suggestion

    def __str__(self) -> str:
        return self.name


# Date logic
DEATH_BEFORE_BIRTH = "DEATH_BEFORE_BIRTH"
CHILD_BEFORE_PARENT = "CHILD_BEFORE_PARENT"
MARRIAGE_BEFORE_BIRTH = "MARRIAGE_BEFORE_BIRTH"
IMPOSSIBLE_AGE = "IMPOSSIBLE_AGE"
UNREASONABLE_PARENT_AGE = "UNREASONABLE_PARENT_AGE"

# Cross-references
ORPHANED_FAMC = "ORPHANED_FAMC"
ORPHANED_FAMS = "ORPHANED_FAMS"
ORPHANED_HUSB = "ORPHANED_HUSB"
ORPHANED_WIFE = "ORPHANED_WIFE"
ORPHANED_CHIL = "ORPHANED_CHIL"
ORPHANED_SOUR = "ORPHANED_SOUR"

# Duplicates
POTENTIAL_DUPLICATE = "POTENTIAL_DUPLICATE"

# Completeness
MISSING_BIRTH_DATE = "MISSING_BIRTH_DATE"
MISSING_DEATH_DATE = "MISSING_DEATH_DATE"
MISSING_NAME = "MISSING_NAME"
NO_SOURCES = "NO_SOURCES"

# Custom tags
INVALID_TAG_PARENT = "INVALID_TAG_PARENT"
INVALID_TAG_VALUE = "INVALID_TAG_VALUE"
UNKNOWN_CUSTOM_TAG = "UNKNOWN_CUSTOM_TAG"

# Header, XRef and encoding compliance
MISSING_SUBM = "MISSING_SUBM"
XREF_TOO_LONG = "XREF_TOO_LONG"
INVALID_ENCODING_FOR_VERSION = "INVALID_ENCODING_FOR_VERSION"
BANNED_CONTROL_CHARACTER = "BANNED_CONTROL_CHARACTER"

# Legacy structural checks (ValidationError codes)
BROKEN_XREF = "BROKEN_XREF"
MISSING_REQUIRED_FIELD = "MISSING_REQUIRED_FIELD"
EMPTY_FAMILY = "EMPTY_FAMILY"


@dataclass(frozen=True)
class Issue:
    """A single validation finding.

    Attributes:
        severity: How serious the finding is
        code: Stable machine-readable identifier (e.g. 'DEATH_BEFORE_BIRTH')
        message: Human-readable description
        record_id: Identifier of the primary affected record (e.g. '@I1@')
        related_id: Identifier of a related record, if any
        details: Additional context as string key/value pairs (read-only)
    """

    severity: Severity
    code: str
    message: str
    record_id: str = ''
    related_id: str = ''
    details: Mapping[str, str] = field(default_factory=dict, hash=False)

    def __post_init__(self):
        object.__setattr__(self, 'details', MappingProxyType(dict(self.details)))

    @classmethod
    def create(cls, severity: Severity, code: str, message: str, record_id: str = '') -> 'Issue':
        """Create an issue with an empty detail map."""
        return cls(severity=severity, code=code, message=message, record_id=record_id or '')

    def with_related(self, related_id: str) -> 'Issue':
        """Return a copy with the related identifier set."""
        return replace(self, related_id=related_id or '')

    def with_detail(self, key: str, value) -> 'Issue':
        """Return a copy with one more detail entry."""
        details = dict(self.details)
        details[key] = str(value)
        return replace(self, details=details)

    def with_details(self, **details) -> 'Issue':
        """Return a copy with several detail entries added at once."""
        merged = dict(self.details)
        merged.update({key: str(value) for key, value in details.items()})
        return replace(self, details=merged)

    @property
    def triple(self) -> tuple:
        """The (code, record_id, related_id) identity of this finding."""
        return (self.code, self.record_id, self.related_id)

    def __str__(self) -> str:
        text = f"[{self.severity.name}] {self.code}: {self.message}"
        if self.record_id:
            if self.related_id:
                text += f" ({self.record_id} -> {self.related_id})"
            else:
                text += f" ({self.record_id})"
        return text

    def to_dict(self) -> Dict[str, object]:
        """Convert the issue to a JSON-ready dictionary."""
        return {
            'severity': str(self.severity),
            'code': self.code,
            'message': self.message,
            'record_id': self.record_id,
            'related_id': self.related_id,
            'details': dict(self.details),
        }


def filter_by_severity(issues: Iterable[Issue], severity: Severity) -> List[Issue]:
    """Return only the issues with the given severity."""
    return [issue for issue in issues if issue.severity == severity]


def filter_by_code(issues: Iterable[Issue], code: str) -> List[Issue]:
    """Return only the issues with the given code."""
    return [issue for issue in issues if issue.code == code]


def filter_by_strictness(issues: Iterable[Issue], strictness: Optional[Strictness]) -> List[Issue]:
    """Keep the severities a strictness level asks for.

    RELAXED keeps errors, NORMAL errors and warnings, STRICT everything.
    Anything else is treated as NORMAL.
    """
    if strictness == Strictness.RELAXED:
        allowed = {Severity.ERROR}
    elif strictness == Strictness.STRICT:
        allowed = {Severity.ERROR, Severity.WARNING, Severity.INFO}
    else:
        allowed = {Severity.ERROR, Severity.WARNING}
    return [issue for issue in issues if issue.severity in allowed]


def sort_by_severity(issues: Iterable[Issue]) -> List[Issue]:
    """Stable sort: errors first, then warnings, then info."""
    return sorted(issues, key=lambda issue: issue.severity)
