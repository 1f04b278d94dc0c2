"""In-memory GEDCOM document: records, header and the identifier index."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Union

from .family import Family
from .person import Person
from .source import Source

Entity = Union[Person, Family, Source]

INDIVIDUAL = 'INDI'
FAMILY = 'FAM'
SOURCE = 'SOUR'


@dataclass(slots=True)
class TagLine:
    """One GEDCOM line below a record's level-0 line."""
    level: int
    tag: str
    value: str = ''
    xref: str = ''
    line_number: int = 0


@dataclass(slots=True)
class Record:
    """A level-0 record with its flat tag list and typed entity.

    Attributes:
        xref: Record identifier (e.g. '@I1@'), empty for HEAD/TRLR
        type: Record tag ('INDI', 'FAM', 'SOUR', 'NOTE', ...)
        value: Value on the level-0 line
        tags: Every subordinate line in file order
        line_number: Line number of the level-0 line
        entity: Person, Family or Source for the typed record kinds
    """
    xref: str
    type: str
    value: str = ''
    tags: List[TagLine] = field(default_factory=list)
    line_number: int = 0
    entity: Optional[Entity] = None


class Vendor(Enum):
    """Software that produced a GEDCOM file."""
    UNKNOWN = 'unknown'
    ANCESTRY = 'ancestry'
    FAMILYSEARCH = 'familysearch'
    ROOTSMAGIC = 'rootsmagic'
    LEGACY = 'legacy'
    GRAMPS = 'gramps'
    MYHERITAGE = 'myheritage'


_VENDOR_MARKERS = (
    (('ancestry', 'familytreemaker'), Vendor.ANCESTRY),
    (('familysearch',), Vendor.FAMILYSEARCH),
    (('rootsmagic',), Vendor.ROOTSMAGIC),
    (('legacy',), Vendor.LEGACY),
    (('gramps',), Vendor.GRAMPS),
    (('myheritage',), Vendor.MYHERITAGE),
)


def detect_vendor(source_system: Optional[str]) -> Vendor:
    """Identify the vendor from the HEAD.SOUR value (case-insensitive substring match)."""
    if not source_system:
        return Vendor.UNKNOWN
    lower = source_system.lower()
    for markers, vendor in _VENDOR_MARKERS:
        if any(marker in lower for marker in markers):
            return vendor
    return Vendor.UNKNOWN


@dataclass(slots=True)
class Header:
    """The HEAD record.

    Attributes:
        version: GEDC.VERS value ('5.5', '5.5.1', '7.0')
        encoding: CHAR value ('UTF-8', 'ANSEL', ...)
        submitter: SUBM reference
        source_system: SOUR value (producing software)
        tags: Every subordinate line of the header
    """
    version: str = ''
    encoding: str = ''
    submitter: str = ''
    source_system: str = ''
    tags: List[TagLine] = field(default_factory=list)

    @property
    def vendor(self) -> Vendor:
        return detect_vendor(self.source_system)

    @property
    def is_v7(self) -> bool:
        return self.version.startswith('7')

    @property
    def is_v55(self) -> bool:
        return self.version in ('5.5', '5.5.1')


class Document:
    """A parsed GEDCOM document.

    Records keep file order; ``xref_map`` gives O(1) lookup by identifier.
    """

    def __init__(self, header: Optional[Header] = None, records: Optional[List[Record]] = None):
        self.header = header
        self.records: List[Record] = []
        self.xref_map: Dict[str, Record] = {}
        for record in records or []:
            self.add_record(record)

    def __repr__(self) -> str:
        return (f"Document(individuals={len(self.individuals())}, "
                f"families={len(self.families())}, records={len(self.records)})")

    def add_record(self, record: Record) -> None:
        """Append a record and index its identifier."""
        self.records.append(record)
        if record.xref:
            self.xref_map[record.xref] = record

    def _entities(self, record_type: str) -> List:
        return [record.entity for record in self.records
                if record.type == record_type and record.entity is not None]

    def individuals(self) -> List[Person]:
        return self._entities(INDIVIDUAL)

    def families(self) -> List[Family]:
        return self._entities(FAMILY)

    def sources(self) -> List[Source]:
        return self._entities(SOURCE)

    def get_record(self, xref: Optional[str]) -> Optional[Record]:
        if not xref:
            return None
        return self.xref_map.get(xref)

    def is_declared(self, xref: Optional[str]) -> bool:
        return bool(xref) and xref in self.xref_map

    def _get_entity(self, xref: Optional[str], record_type: str):
        record = self.get_record(xref)
        if record is None or record.type != record_type:
            return None
        return record.entity

    def get_individual(self, xref: Optional[str]) -> Optional[Person]:
        return self._get_entity(xref, INDIVIDUAL)

    def get_family(self, xref: Optional[str]) -> Optional[Family]:
        return self._get_entity(xref, FAMILY)

    def get_source(self, xref: Optional[str]) -> Optional[Source]:
        return self._get_entity(xref, SOURCE)

    def parents_of(self, person: Person) -> List[Person]:
        """Distinct parents across every family the person is a child of."""
        parents: List[Person] = []
        seen = set()
        for family_id in person.families_as_child:
            family = self.get_family(family_id)
            if family is None:
                continue
            for parent_id in family.get_parents():
                if parent_id in seen:
                    continue
                parent = self.get_individual(parent_id)
                if parent is not None:
                    seen.add(parent_id)
                    parents.append(parent)
        return parents

    def spouse_families(self, person: Person) -> List[Family]:
        """Distinct families where the person is a spouse."""
        families: List[Family] = []
        seen = set()
        for family_id in person.families_as_spouse:
            if family_id in seen:
                continue
            family = self.get_family(family_id)
            if family is not None:
                seen.add(family_id)
                families.append(family)
        return families
