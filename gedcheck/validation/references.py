"""
Cross-reference validation over a complete document.

Every outgoing identifier on individuals, families and sources must resolve
to a declared record. Empty references are ignored.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List, Optional

from ..core.document import Document, Entity
from ..core.family import Family
from ..core.person import Person
from ..core.source import Source
from .issue import (
    Issue,
    Severity,
    ORPHANED_CHIL,
    ORPHANED_FAMC,
    ORPHANED_FAMS,
    ORPHANED_HUSB,
    ORPHANED_SOUR,
    ORPHANED_WIFE,
)

logger = logging.getLogger(__name__)


class ReferenceType(str, Enum):
    """Relation context of an outgoing reference."""
    FAMC = "FAMC"
    FAMS = "FAMS"
    HUSB = "HUSB"
    WIFE = "WIFE"
    CHIL = "CHIL"
    SOUR = "SOUR"
    NOTE = "NOTE"
    ASSO = "ASSO"
    REPO = "REPO"

    def __str__(self) -> str:
        return self.value


# (code, noun for the expected target) per relation with a dedicated code
_DEDICATED = {
    ReferenceType.FAMC: (ORPHANED_FAMC, "family"),
    ReferenceType.FAMS: (ORPHANED_FAMS, "family"),
    ReferenceType.HUSB: (ORPHANED_HUSB, "individual"),
    ReferenceType.WIFE: (ORPHANED_WIFE, "individual"),
    ReferenceType.CHIL: (ORPHANED_CHIL, "individual"),
    ReferenceType.SOUR: (ORPHANED_SOUR, "source"),
}


@dataclass(frozen=True, slots=True)
class Reference:
    """One outgoing reference: relation, target identifier and source field."""
    context: ReferenceType
    target: str
    field: str
    index: int = 0


def outgoing_references(entity: Optional[Entity]) -> Iterator[Reference]:
    """Yield every non-empty outgoing reference of an entity in field order."""
    if isinstance(entity, Person):
        yield from _indexed(ReferenceType.FAMC, 'families_as_child', entity.families_as_child)
        yield from _indexed(ReferenceType.FAMS, 'families_as_spouse', entity.families_as_spouse)
        yield from _indexed(ReferenceType.SOUR, 'sources', entity.sources)
        yield from _indexed(ReferenceType.NOTE, 'note_refs', entity.note_refs)
        yield from _indexed(ReferenceType.ASSO, 'associations', entity.associations)
    elif isinstance(entity, Family):
        if entity.husband_id:
            yield Reference(ReferenceType.HUSB, entity.husband_id, 'husband_id')
        if entity.wife_id:
            yield Reference(ReferenceType.WIFE, entity.wife_id, 'wife_id')
        yield from _indexed(ReferenceType.CHIL, 'children_ids', entity.children_ids)
        yield from _indexed(ReferenceType.SOUR, 'sources', entity.sources)
        yield from _indexed(ReferenceType.NOTE, 'note_refs', entity.note_refs)
    elif isinstance(entity, Source):
        if entity.repository_ref:
            yield Reference(ReferenceType.REPO, entity.repository_ref, 'repository_ref')
        yield from _indexed(ReferenceType.NOTE, 'note_refs', entity.note_refs)


def _indexed(context: ReferenceType, name: str, targets: List[str]) -> Iterator[Reference]:
    for index, target in enumerate(targets):
        if target:
            yield Reference(context, target, f"{name}[{index}]", index)


def orphan_code(context) -> str:
    """Issue code for an unresolved reference of the given relation."""
    dedicated = _DEDICATED.get(context)
    if dedicated:
        return dedicated[0]
    return f"ORPHANED_{context}"


def orphaned_reference_issue(record_id: str, context, target: str, field_name: str) -> Issue:
    """Build the ERROR issue for a reference whose target was never declared."""
    dedicated = _DEDICATED.get(context)
    if dedicated:
        code, noun = dedicated
        message = f"{context} reference to non-existent {noun} {target}"
    else:
        code = orphan_code(context)
        message = f"{context} reference to non-existent record {target}"

    return (
        Issue.create(Severity.ERROR, code, message, record_id)
        .with_related(target)
        .with_details(reference_type=context, field=field_name)
    )


@dataclass
class ReferenceReport:
    """Reference counts for a document, overall and per relation."""
    total_references: int = 0
    valid_references: int = 0
    orphaned_references: int = 0
    by_type: Dict[str, int] = field(default_factory=dict)
    orphaned_by_type: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, object]:
        return {
            'total_references': self.total_references,
            'valid_references': self.valid_references,
            'orphaned_references': self.orphaned_references,
            'by_type': dict(self.by_type),
            'orphaned_by_type': dict(self.orphaned_by_type),
        }


class ReferenceValidator:
    """Finds references to records that do not exist in the document."""

    def validate(self, document: Optional[Document]) -> List[Issue]:
        if document is None:
            return []

        issues: List[Issue] = []
        for record in document.records:
            for reference in outgoing_references(record.entity):
                if not document.is_declared(reference.target):
                    issues.append(orphaned_reference_issue(
                        record.xref, reference.context, reference.target, reference.field))

        logger.debug(f"References: {len(issues)} orphaned")
        return issues

    def report(self, document: Optional[Document]) -> ReferenceReport:
        """Count valid and orphaned references without producing issues."""
        report = ReferenceReport()
        if document is None:
            return report

        for record in document.records:
            for reference in outgoing_references(record.entity):
                kind = str(reference.context)
                report.total_references += 1
                report.by_type[kind] = report.by_type.get(kind, 0) + 1
                if document.is_declared(reference.target):
                    report.valid_references += 1
                else:
                    report.orphaned_references += 1
                    report.orphaned_by_type[kind] = report.orphaned_by_type.get(kind, 0) + 1
        return report
