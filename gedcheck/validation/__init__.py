"""
Validation module for GEDCOM documents.

Provides the issue model, chronological checks, batch and streaming
reference validation, custom tag registries and format compliance checks.
The Validator facade and QualityAnalyzer live in ``validator`` and ``quality``.
"""

from .issue import (
    Issue,
    Severity,
    filter_by_code,
    filter_by_severity,
    filter_by_strictness,
    sort_by_severity,
)

from .date_logic import DateLogicValidator

from .references import (
    Reference,
    ReferenceReport,
    ReferenceType,
    ReferenceValidator,
    outgoing_references,
)

from .streaming import StreamingValidator, UsageLocation

from .tag_registry import (
    TagDefinition,
    TagRegistrationError,
    TagRegistry,
    XREF_PATTERN,
    YES_NO_PATTERN,
    merge_registries,
)

from .vendor_tags import (
    ancestry_registry,
    default_vendor_registry,
    familysearch_registry,
    registry_for_vendor,
    rootsmagic_registry,
)

from .tag_validator import TagValidator

from .compliance import EncodingValidator, HeaderValidator, XRefValidator


__all__ = [
    # Issues
    'Issue',
    'Severity',
    'filter_by_code',
    'filter_by_severity',
    'filter_by_strictness',
    'sort_by_severity',

    # Chronology
    'DateLogicValidator',

    # References
    'Reference',
    'ReferenceReport',
    'ReferenceType',
    'ReferenceValidator',
    'outgoing_references',
    'StreamingValidator',
    'UsageLocation',

    # Custom tags
    'TagDefinition',
    'TagRegistrationError',
    'TagRegistry',
    'XREF_PATTERN',
    'YES_NO_PATTERN',
    'merge_registries',
    'ancestry_registry',
    'default_vendor_registry',
    'familysearch_registry',
    'registry_for_vendor',
    'rootsmagic_registry',
    'TagValidator',

    # Compliance
    'EncodingValidator',
    'HeaderValidator',
    'XRefValidator',
]
