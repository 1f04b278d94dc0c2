"""
GEDCOM date values.

Parses the common GEDCOM date forms into comparable year/month/day values.
No calendar conversion is performed; a calendar escape is only recorded.
"""

import re
from dataclasses import dataclass
from typing import Optional


class InsufficientDateError(ValueError):
    """Raised when a calculation needs a year that a date does not have."""


@dataclass(frozen=True)
class GedcomDate:
    """A parsed GEDCOM date.

    A year of 0 means the year is unknown. Month and day are 0 when absent.
    """
    original: str
    year: int = 0
    month: int = 0
    day: int = 0
    modifier: str = ''  # ABT, EST, CAL, BEF, AFT, BET, FROM, INT
    calendar: str = 'GREGORIAN'
    range_end_year: int = 0

    @property
    def has_year(self) -> bool:
        return self.year != 0

    def compare(self, other: 'GedcomDate') -> int:
        """Compare by year, then month, then day. Returns -1, 0 or 1.

        A missing month or day counts as 1, so "1950" equals "1 JAN 1950".
        """
        for mine, theirs in ((self.year, other.year),
                             (self.month or 1, other.month or 1),
                             (self.day or 1, other.day or 1)):
            if mine != theirs:
                return -1 if mine < theirs else 1
        return 0

    def is_before(self, other: Optional['GedcomDate']) -> bool:
        if other is None:
            return False
        return self.compare(other) < 0

    def __str__(self) -> str:
        return self.original


MONTHS = {
    'JAN': 1, 'FEB': 2, 'MAR': 3, 'APR': 4, 'MAY': 5, 'JUN': 6,
    'JUL': 7, 'AUG': 8, 'SEP': 9, 'OCT': 10, 'NOV': 11, 'DEC': 12,
    # French republican and Hebrew months keep their position in the year
    'VEND': 1, 'BRUM': 2, 'FRIM': 3, 'NIVO': 4, 'PLUV': 5, 'VENT': 6,
    'GERM': 7, 'FLOR': 8, 'PRAI': 9, 'MESS': 10, 'THER': 11, 'FRUC': 12, 'COMP': 13,
    'TSH': 1, 'CSH': 2, 'KSL': 3, 'TVT': 4, 'SHV': 5, 'ADR': 6,
    'ADS': 7, 'NSN': 8, 'IYR': 9, 'SVN': 10, 'TMZ': 11, 'AAV': 12, 'ELL': 13,
}

MODIFIERS = ('ABT', 'EST', 'CAL', 'BEF', 'AFT', 'BET', 'FROM', 'TO', 'INT')

_CALENDAR_ESCAPE = re.compile(r'^@#D([A-Z ]+)@\s*')
_YEAR = re.compile(r'^(\d{1,4})(?:/\d{1,2})?$')


def parse_date(date_str: Optional[str]) -> Optional[GedcomDate]:
    """Parse a GEDCOM date string.

    Supports:
    - "1 JAN 1900", "JAN 1900", "1900"
    - "ABT 1900", "BEF 1900", "AFT 1900", "EST 1900", "CAL 1900"
    - "BET 1900 AND 1905", "FROM 1900 TO 1905"
    - "INT 1900 (interpreted)"
    - dual years ("1750/51") and calendar escapes ("@#DJULIAN@ 1700")

    Args:
        date_str: GEDCOM date string

    Returns:
        GedcomDate (year 0 if no year could be found) or None for empty input
    """
    if not date_str or not date_str.strip():
        return None

    original = date_str.strip()
    text = original.upper()

    calendar = 'GREGORIAN'
    escape = _CALENDAR_ESCAPE.match(text)
    if escape:
        calendar = escape.group(1).strip()
        text = text[escape.end():]

    # Interpreted dates carry a parenthesised phrase
    text = re.sub(r'\(.*\)', '', text).strip()

    modifier = ''
    first, _, rest = text.partition(' ')
    if first in MODIFIERS:
        modifier = first
        text = rest.strip()

    range_end_year = 0
    if modifier in ('BET', 'FROM'):
        parts = re.split(r'\b(?:AND|TO)\b', text, maxsplit=1)
        if len(parts) == 2:
            range_end_year = _parse_components(parts[1].strip())[0]
            text = parts[0].strip()

    year, month, day = _parse_components(text)
    return GedcomDate(
        original=original,
        year=year,
        month=month,
        day=day,
        modifier=modifier,
        calendar=calendar,
        range_end_year=range_end_year,
    )


def _parse_components(text: str):
    """Split 'D MON YYYY' style text into (year, month, day)."""
    year = month = day = 0
    bc = False
    for suffix in ('B.C.', 'BC', 'BCE'):
        if text.endswith(suffix):
            bc = True
            text = text[:-len(suffix)].strip()
            break

    fields = text.split()
    if not fields:
        return year, month, day

    year_match = _YEAR.match(fields[-1])
    if year_match:
        year = int(year_match.group(1))
        if bc:
            year = -year
        fields = fields[:-1]

    if fields and fields[-1] in MONTHS:
        month = MONTHS[fields[-1]]
        fields = fields[:-1]

    if fields and fields[-1].isdigit() and month:
        value = int(fields[-1])
        if 1 <= value <= 31:
            day = value

    return year, month, day


def years_between(earlier: Optional[GedcomDate], later: Optional[GedcomDate]) -> int:
    """Whole-year difference ``later.year - earlier.year``.

    Raises:
        InsufficientDateError: If either date is missing or has no year
    """
    if earlier is None or later is None or not earlier.has_year or not later.has_year:
        raise InsufficientDateError("insufficient date information")
    return later.year - earlier.year
