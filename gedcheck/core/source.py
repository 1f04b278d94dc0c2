"""Source class for representing SOUR records."""

from dataclasses import dataclass, field
from typing import Optional, List


@dataclass(slots=True)
class Source:
    """A source record (SOUR).

    Attributes:
        id: Unique identifier (e.g., '@S1@')
        title: Source title (TITL)
        author: Source author (AUTH)
        publication: Publication facts (PUBL)
        repository_ref: Repository record ID (REPO), if any
        note_refs: Shared note record IDs
    """

    id: str
    title: Optional[str] = None
    author: Optional[str] = None
    publication: Optional[str] = None
    repository_ref: Optional[str] = None
    note_refs: List[str] = field(default_factory=list)

    def __str__(self) -> str:
        return self.title or self.id
