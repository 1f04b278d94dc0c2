"""GEDCOM loader building a Document from python-gedcom elements."""

import io
import logging
from pathlib import Path
from typing import List, Optional, Tuple

from gedcom.parser import Parser, GedcomFormatViolationError

from .document import Document, Header, Record, TagLine, INDIVIDUAL, FAMILY, SOURCE
from .event import Event
from .family import Family
from .person import Person
from .source import Source

logger = logging.getLogger(__name__)

ENCODINGS = ['utf-8-sig', 'utf-8', 'latin-1', 'cp1252']

INDIVIDUAL_EVENT_TAGS = ['BIRT', 'CHR', 'BAPM', 'DEAT', 'BURI', 'CREM', 'ADOP',
                         'GRAD', 'RETI', 'EVEN', 'OCCU', 'RESI', 'EMIG', 'IMMI',
                         'NATU', 'CENS', 'PROB', 'WILL']
FAMILY_EVENT_TAGS = ['MARR', 'MARB', 'MARC', 'MARL', 'MARS', 'ENGA', 'DIV',
                     'DIVF', 'ANUL', 'CENS', 'EVEN', 'RESI']


def is_pointer(value: Optional[str]) -> bool:
    """True for values of the form '@X@'."""
    return bool(value) and len(value) > 2 and value[0] == '@' and value[-1] == '@'


class GedcomParser:
    """Loads GEDCOM 5.5, 5.5.1 and 7.0 text into a Document."""

    def __init__(self):
        self.parser: Optional[Parser] = None
        self.encoding: Optional[str] = None

    def load_gedcom(self, filepath: str) -> Document:
        """Load and parse a GEDCOM file.

        Args:
            filepath: Path to the GEDCOM file

        Returns:
            The parsed Document

        Raises:
            FileNotFoundError: If the file doesn't exist
            ValueError: If the file cannot be parsed with any supported encoding
        """
        file_path = Path(filepath)
        if not file_path.exists():
            raise FileNotFoundError(f"GEDCOM file not found: {filepath}")

        last_error = None
        for encoding in ENCODINGS:
            try:
                content = file_path.read_text(encoding=encoding)
                document = self.parse_string(content)
            except (UnicodeDecodeError, GedcomFormatViolationError) as e:
                logger.warning(f"Could not read {filepath} as {encoding}: {e}")
                last_error = e
                continue
            self.encoding = encoding
            logger.info(f"Loaded {filepath} using {encoding} "
                        f"({len(document.records)} records)")
            return document

        raise ValueError(f"Could not parse GEDCOM file with any encoding: {last_error}")

    def parse_string(self, content: str) -> Document:
        """Parse GEDCOM text that is already decoded."""
        self.parser = Parser()
        self.parser.parse(io.BytesIO(content.encode('utf-8')), strict=False)
        return self._build_document()

    def _build_document(self) -> Document:
        document = Document(header=None)
        line_number = 0

        for element in self.parser.get_root_child_elements():
            line_number += 1
            record_line = line_number
            tags, line_number = self._flatten(element, line_number)
            tag = element.get_tag()

            if tag == 'HEAD':
                document.header = self._parse_header(element, tags)
                continue
            if tag == 'TRLR':
                continue

            record = Record(
                xref=element.get_pointer() or '',
                type=tag,
                value=element.get_value() or '',
                tags=tags,
                line_number=record_line,
            )
            if tag == INDIVIDUAL:
                record.entity = self._parse_individual(element)
            elif tag == FAMILY:
                record.entity = self._parse_family(element)
            elif tag == SOURCE:
                record.entity = self._parse_source(element)
            document.add_record(record)

        logger.debug(f"Built document: {document!r}")
        return document

    def _flatten(self, element, line_number: int) -> Tuple[List[TagLine], int]:
        """Pre-order flat view of an element's descendants.

        Every element is one input line, so the walk order gives line numbers.
        """
        lines: List[TagLine] = []
        for child in element.get_child_elements():
            line_number += 1
            lines.append(TagLine(
                level=child.get_level(),
                tag=child.get_tag(),
                value=child.get_value() or '',
                xref=child.get_pointer() or '',
                line_number=line_number,
            ))
            nested, line_number = self._flatten(child, line_number)
            lines.extend(nested)
        return lines, line_number

    def _parse_header(self, element, tags: List[TagLine]) -> Header:
        header = Header(tags=tags)
        for child in element.get_child_elements():
            tag = child.get_tag()
            value = child.get_value() or ''

            if tag == 'GEDC':
                for gedc_child in child.get_child_elements():
                    if gedc_child.get_tag() == 'VERS':
                        header.version = (gedc_child.get_value() or '').strip()
            elif tag == 'CHAR':
                header.encoding = value.strip()
            elif tag == 'SUBM':
                header.submitter = value.strip()
            elif tag == 'SOUR':
                header.source_system = value.strip()
        return header

    def _parse_individual(self, element) -> Person:
        """Parse an individual element into a Person object.

        Args:
            element: INDI element from python-gedcom

        Returns:
            Person object
        """
        person = Person(id=element.get_pointer() or '', sex='')

        for child in element.get_child_elements():
            tag = child.get_tag()
            value = (child.get_value() or '').strip()

            if tag == 'NAME':
                if value:
                    person.names.append(value)
                if len(person.names) <= 1:
                    self._parse_name_parts(child, person)
            elif tag == 'SEX':
                person.sex = value
            elif tag == 'FAMS':
                person.families_as_spouse.append(value)
            elif tag == 'FAMC':
                person.families_as_child.append(value)
            elif tag == 'SOUR':
                if is_pointer(value):
                    person.sources.append(value)
            elif tag == 'NOTE':
                self._add_note(person, value)
            elif tag == 'ASSO':
                person.associations.append(value)
            elif tag in INDIVIDUAL_EVENT_TAGS:
                person.events.append(self._parse_event(child, tag))

        return person

    @staticmethod
    def _parse_name_parts(element, person: Person) -> None:
        for part in element.get_child_elements():
            value = (part.get_value() or '').strip()
            if part.get_tag() == 'GIVN' and value:
                person.given_name = value
            elif part.get_tag() == 'SURN' and value:
                person.surname = value

    def _parse_family(self, element) -> Family:
        family = Family(id=element.get_pointer() or '')

        for child in element.get_child_elements():
            tag = child.get_tag()
            value = (child.get_value() or '').strip()

            if tag == 'HUSB':
                family.husband_id = value
            elif tag == 'WIFE':
                family.wife_id = value
            elif tag == 'CHIL':
                family.children_ids.append(value)
            elif tag == 'SOUR':
                if is_pointer(value):
                    family.sources.append(value)
            elif tag == 'NOTE':
                self._add_note(family, value)
            elif tag in FAMILY_EVENT_TAGS:
                family.events.append(self._parse_event(child, tag))

        return family

    def _parse_source(self, element) -> Source:
        source = Source(id=element.get_pointer() or '')

        for child in element.get_child_elements():
            tag = child.get_tag()
            value = (child.get_value() or '').strip()

            if tag == 'TITL':
                source.title = value
            elif tag == 'AUTH':
                source.author = value
            elif tag == 'PUBL':
                source.publication = value
            elif tag == 'REPO':
                source.repository_ref = value
            elif tag == 'NOTE' and is_pointer(value):
                source.note_refs.append(value)

        return source

    @staticmethod
    def _add_note(entity, value: str) -> None:
        if is_pointer(value):
            entity.note_refs.append(value)
        elif value:
            entity.notes = value if not entity.notes else entity.notes + ' ' + value

    def _parse_event(self, element, event_type: str) -> Event:
        """Parse a single event element.

        Args:
            element: Event element
            event_type: Type of event (tag)

        Returns:
            Event object
        """
        event = Event(type=event_type)

        for child in element.get_child_elements():
            tag = child.get_tag()
            value = (child.get_value() or '').strip()

            if tag == 'DATE' and value:
                event.date = value
            elif tag == 'PLAC' and value:
                event.place = value
            elif tag == 'SOUR' and is_pointer(value):
                event.sources.append(value)
            elif tag == 'NOTE' and value and not is_pointer(value):
                event.notes = value if not event.notes else event.notes + ' ' + value
            elif tag in ('TYPE', 'AGE', 'CAUS') and value:
                event.attributes[tag] = value

        return event


# Convenience functions
def load_gedcom(filepath: str) -> Document:
    """Load a GEDCOM file and return the Document.

    Args:
        filepath: Path to the GEDCOM file

    Returns:
        Parsed Document
    """
    parser = GedcomParser()
    return parser.load_gedcom(filepath)


def parse_gedcom_string(content: str) -> Document:
    """Parse GEDCOM text into a Document."""
    parser = GedcomParser()
    return parser.parse_string(content)
