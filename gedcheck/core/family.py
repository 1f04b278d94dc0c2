"""Family class for representing family units in GEDCOM files."""

from dataclasses import dataclass, field
from typing import Optional, List

from .date import GedcomDate
from .event import Event


@dataclass(slots=True)
class Family:
    """Represents a family unit (FAM record).

    Attributes:
        id: Unique identifier (e.g., '@F1@')
        husband_id: ID of the husband/partner (HUSB)
        wife_id: ID of the wife/partner (WIFE)
        children_ids: Child IDs in recorded order (CHIL)
        events: Family events (marriage, divorce, etc.)
        sources: Source IDs cited by the family
        note_refs: Shared note record IDs
        notes: Inline note text
    """

    id: str
    husband_id: Optional[str] = None
    wife_id: Optional[str] = None
    children_ids: List[str] = field(default_factory=list)
    events: List[Event] = field(default_factory=list)
    sources: List[str] = field(default_factory=list)
    note_refs: List[str] = field(default_factory=list)
    notes: Optional[str] = None

    def __str__(self) -> str:
        parts = [f"Family {self.id}"]
        if self.husband_id:
            parts.append(f"H:{self.husband_id}")
        if self.wife_id:
            parts.append(f"W:{self.wife_id}")
        if self.children_ids:
            parts.append(f"Children:{len(self.children_ids)}")
        return " ".join(parts)

    def __repr__(self) -> str:
        return (f"Family(id={self.id!r}, husband={self.husband_id!r}, "
                f"wife={self.wife_id!r}, children={len(self.children_ids)})")

    def get_parents(self) -> List[str]:
        """Get list of parent IDs.

        Returns:
            List containing husband_id and/or wife_id (excluding empty values)
        """
        parents = []
        if self.husband_id:
            parents.append(self.husband_id)
        if self.wife_id:
            parents.append(self.wife_id)
        return parents

    def get_event_by_type(self, event_type: str) -> Optional[Event]:
        for event in self.events:
            if event.type == event_type:
                return event
        return None

    def get_marriage_event(self) -> Optional[Event]:
        return self.get_event_by_type('MARR')

    def marriage_date(self) -> Optional[GedcomDate]:
        """Parsed marriage date, or None."""
        marriage = self.get_marriage_event()
        return marriage.parsed_date if marriage else None
