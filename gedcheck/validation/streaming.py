"""
Record-at-a-time validation with deferred reference resolution.

Records are validated as they arrive, without access to the rest of the
document. References are remembered per target identifier and resolved in
``finalize`` once every declaration has been seen. Memory grows with the
number of distinct identifiers, not with record count or reference fan-out.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Set

from ..config import StreamingOptions
from ..core.document import Record
from ..core.person import Person
from .date_logic import DateLogicValidator
from .issue import Issue, filter_by_strictness
from .references import outgoing_references, orphaned_reference_issue

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class UsageLocation:
    """Where a reference to an identifier was seen."""
    record_id: str
    context: str
    field: str
    index: int = 0


class StreamingValidator:
    """Validates records one at a time; orphaned references are reported by finalize().

    One instance per stream. Call reset() to reuse an instance.
    """

    def __init__(self, options: Optional[StreamingOptions] = None):
        self.options = options or StreamingOptions()
        self._declared: Set[str] = set()
        self._references: Dict[str, List[UsageLocation]] = {}
        self._declared_types: Dict[str, str] = {}
        self._date_logic = DateLogicValidator(self.options.date_logic)

    def validate_record(self, record: Optional[Record]) -> List[Issue]:
        """Register a record and return the issues decidable from it alone."""
        if record is None:
            return []

        if record.xref:
            self._declared.add(record.xref)
            self._declared_types[record.xref] = record.type

        issues: List[Issue] = []
        if isinstance(record.entity, Person):
            death_issue = self._date_logic.check_death_before_birth(record.entity)
            if death_issue:
                issues.append(death_issue)

        for reference in outgoing_references(record.entity):
            usage = UsageLocation(
                record_id=record.xref,
                context=str(reference.context),
                field=reference.field,
                index=reference.index,
            )
            self._references.setdefault(reference.target, []).append(usage)

        return filter_by_strictness(issues, self.options.strictness)

    def finalize(self) -> List[Issue]:
        """Report every usage of an identifier that was never declared."""
        issues: List[Issue] = []
        for target, usages in self._references.items():
            if target in self._declared:
                continue
            for usage in usages:
                issues.append(orphaned_reference_issue(
                    usage.record_id, usage.context, target, usage.field))

        logger.debug(f"Streaming finalize: {len(self._declared)} declared, "
                     f"{len(self._references)} referenced, {len(issues)} orphaned")
        return filter_by_strictness(issues, self.options.strictness)

    def reset(self) -> None:
        """Clear all state so the instance can validate another stream."""
        self._declared.clear()
        self._references.clear()
        self._declared_types.clear()

    @property
    def declared_count(self) -> int:
        return len(self._declared)

    @property
    def referenced_count(self) -> int:
        return len(self._references)

    def usage_count(self, xref: str) -> int:
        return len(self._references.get(xref, ()))

    def declared_type(self, xref: str) -> Optional[str]:
        return self._declared_types.get(xref)
