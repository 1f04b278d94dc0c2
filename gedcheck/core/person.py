"""Person class for representing individuals in GEDCOM files."""

from dataclasses import dataclass, field
from typing import Optional, List

from .date import GedcomDate
from .event import Event


@dataclass(slots=True)
class Person:
    """Represents an individual (INDI record) in a GEDCOM document.

    Attributes:
        id: Unique identifier (e.g., '@I1@')
        names: Name values in GEDCOM form ("Given /Surname/")
        given_name: Structured GIVN of the primary name, if recorded
        surname: Structured SURN of the primary name, if recorded
        sex: Gender ('M', 'F', 'U' for unknown, or '' when not recorded)
        events: Life events (birth, death, burial, etc.)
        families_as_spouse: Family IDs where this person is a spouse (FAMS)
        families_as_child: Family IDs where this person is a child (FAMC)
        sources: Source IDs cited directly by the individual (SOUR)
        note_refs: Shared note record IDs (NOTE @N1@)
        associations: Associated individual IDs (ASSO)
        notes: Inline note text
    """

    id: str
    names: List[str] = field(default_factory=list)
    given_name: Optional[str] = None
    surname: Optional[str] = None
    sex: str = 'U'
    events: List[Event] = field(default_factory=list)
    families_as_spouse: List[str] = field(default_factory=list)
    families_as_child: List[str] = field(default_factory=list)
    sources: List[str] = field(default_factory=list)
    note_refs: List[str] = field(default_factory=list)
    associations: List[str] = field(default_factory=list)
    notes: Optional[str] = None

    def __str__(self) -> str:
        name = self.get_primary_name() or "Unknown"
        birth_year = self.get_birth_year()
        death_year = self.get_death_year()

        if birth_year and death_year:
            return f"{name} ({birth_year}-{death_year})"
        elif birth_year:
            return f"{name} (b. {birth_year})"
        elif death_year:
            return f"{name} (d. {death_year})"
        else:
            return name

    def __repr__(self) -> str:
        return f"Person(id={self.id!r}, name={self.get_primary_name()!r})"

    def get_primary_name(self) -> Optional[str]:
        """Get the primary (first) name in the list.

        Returns:
            Primary name or None if no names exist
        """
        return self.names[0] if self.names else None

    def get_event_by_type(self, event_type: str) -> Optional[Event]:
        """Get the first event of a specific type.

        Args:
            event_type: Type of event (e.g., 'BIRT', 'DEAT')

        Returns:
            Event object or None if not found
        """
        for event in self.events:
            if event.type == event_type:
                return event
        return None

    def get_birth_event(self) -> Optional[Event]:
        return self.get_event_by_type('BIRT')

    def get_death_event(self) -> Optional[Event]:
        return self.get_event_by_type('DEAT')

    def birth_date(self) -> Optional[GedcomDate]:
        """Parsed birth date, or None."""
        birth = self.get_birth_event()
        return birth.parsed_date if birth else None

    def death_date(self) -> Optional[GedcomDate]:
        """Parsed death date, or None."""
        death = self.get_death_event()
        return death.parsed_date if death else None

    def get_birth_year(self) -> Optional[int]:
        birth = self.get_birth_event()
        return birth.get_year() if birth else None

    def get_death_year(self) -> Optional[int]:
        death = self.get_death_event()
        return death.get_year() if death else None

    def has_sources(self) -> bool:
        """True if the individual or any of its events cites a source."""
        if self.sources:
            return True
        return any(event.sources for event in self.events)

    def has_place(self) -> bool:
        return any(event.place for event in self.events)
