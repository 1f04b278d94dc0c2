"""Event class for representing GEDCOM events."""

from dataclasses import dataclass, field
from typing import Optional, List, Dict, Any

from .date import GedcomDate, parse_date


@dataclass(slots=True)
class Event:
    """Represents a genealogical event (birth, death, marriage, etc.).

    Attributes:
        type: The type of event (e.g., 'BIRT', 'DEAT', 'MARR', 'BURI')
        date: The date of the event in GEDCOM format
        place: The place where the event occurred
        notes: Additional notes about the event
        sources: Source record identifiers cited by this event
        attributes: Additional GEDCOM attributes (e.g., AGE, CAUS)
    """

    type: str
    date: Optional[str] = None
    place: Optional[str] = None
    notes: Optional[str] = None
    sources: List[str] = field(default_factory=list)
    attributes: Dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        parts = [self.type]
        if self.date:
            parts.append(f"on {self.date}")
        if self.place:
            parts.append(f"at {self.place}")
        return " ".join(parts)

    def __repr__(self) -> str:
        return f"Event(type={self.type!r}, date={self.date!r}, place={self.place!r})"

    @property
    def parsed_date(self) -> Optional[GedcomDate]:
        """The event date as a GedcomDate, or None when there is no date."""
        return parse_date(self.date)

    def get_year(self) -> Optional[int]:
        """Get the year of the event.

        Returns:
            Year as integer, or None if the date has no year
        """
        parsed = self.parsed_date
        if parsed is None or not parsed.has_year:
            return None
        return parsed.year
