"""gedcheck - Validation and data quality analysis for GEDCOM genealogy files."""

__version__ = "0.1.0"

from .config import DateLogicConfig, DuplicateConfig, StreamingOptions, Strictness, ValidatorConfig
from .core.document import Document, Header, Record, TagLine
from .core.event import Event
from .core.family import Family
from .core.gedcom_parser import GedcomParser, load_gedcom, parse_gedcom_string
from .core.person import Person
from .core.source import Source
from .validation.issue import Issue, Severity
from .validation.quality import QualityAnalyzer, QualityReport
from .validation.validator import ValidationError, Validator

__all__ = [
    'DateLogicConfig',
    'DuplicateConfig',
    'StreamingOptions',
    'Strictness',
    'ValidatorConfig',
    'Document',
    'Header',
    'Record',
    'TagLine',
    'Event',
    'Family',
    'Person',
    'Source',
    'GedcomParser',
    'load_gedcom',
    'parse_gedcom_string',
    'Issue',
    'Severity',
    'QualityAnalyzer',
    'QualityReport',
    'ValidationError',
    'Validator',
]
