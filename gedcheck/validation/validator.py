"""
Validator facade.

Wires the individual validators together behind one configurable entry
point. Sub-validators are built on first use. Every Issue-returning entry
point applies the configured strictness, except duplicate pairs which are
returned unfiltered.
"""

import logging
from typing import List, Optional

from ..config import StreamingOptions, ValidatorConfig
from ..core.document import Document, INDIVIDUAL, FAMILY
from ..core.gedcom_parser import is_pointer
from ..matching.matcher import DuplicateDetector
from ..matching.scorer import DuplicatePair
from .compliance import EncodingValidator, HeaderValidator, XRefValidator
from .date_logic import DateLogicValidator
from .issue import Issue, filter_by_strictness, BROKEN_XREF, EMPTY_FAMILY, MISSING_REQUIRED_FIELD
from .quality import QualityAnalyzer, QualityReport
from .references import ReferenceValidator
from .streaming import StreamingValidator
from .tag_validator import TagValidator

logger = logging.getLogger(__name__)


class ValidationError(Exception):
    """A structural problem reported by the legacy ``Validator.validate`` API."""

    def __init__(self, code: str, message: str, line: int = 0, xref: str = ''):
        self.code = code
        self.message = message
        self.line = line
        self.xref = xref
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.xref:
            return f"[{self.code}] {self.message} (XRef: {self.xref})"
        if self.line > 0:
            return f"[{self.code}] line {self.line}: {self.message}"
        return f"[{self.code}] {self.message}"

    def __repr__(self) -> str:
        return f"ValidationError(code={self.code!r}, line={self.line}, xref={self.xref!r})"


class Validator:
    """Single entry point for validating a GEDCOM document.

    Not safe for concurrent use from several threads.
    """

    def __init__(self, config: Optional[ValidatorConfig] = None):
        self.config = config or ValidatorConfig()
        self._date_logic: Optional[DateLogicValidator] = None
        self._references: Optional[ReferenceValidator] = None
        self._duplicates: Optional[DuplicateDetector] = None
        self._quality: Optional[QualityAnalyzer] = None
        self._tags: Optional[TagValidator] = None

    @property
    def date_logic(self) -> DateLogicValidator:
        if self._date_logic is None:
            self._date_logic = DateLogicValidator(self.config.date_logic)
        return self._date_logic

    @property
    def references(self) -> ReferenceValidator:
        if self._references is None:
            self._references = ReferenceValidator()
        return self._references

    @property
    def duplicates(self) -> DuplicateDetector:
        if self._duplicates is None:
            self._duplicates = DuplicateDetector(self.config.duplicates)
        return self._duplicates

    @property
    def quality(self) -> QualityAnalyzer:
        if self._quality is None:
            self._quality = QualityAnalyzer(
                date_logic_config=self.config.date_logic,
                duplicate_config=self.config.duplicates,
                tag_registry=self.config.tag_registry,
                validate_unknown_tags=self.config.validate_custom_tags,
            )
        return self._quality

    @property
    def tags(self) -> TagValidator:
        if self._tags is None:
            self._tags = TagValidator(self.config.tag_registry, self.config.validate_custom_tags)
        return self._tags

    def _filter(self, issues: List[Issue]) -> List[Issue]:
        return filter_by_strictness(issues, self.config.strictness)

    def validate(self, document: Optional[Document]) -> List[ValidationError]:
        """Legacy structural validation.

        Reports pointer values that resolve to nothing, individuals without a
        NAME and families without members.
        """
        if document is None:
            return []

        errors: List[ValidationError] = []
        for record in document.records:
            for line in record.tags:
                if is_pointer(line.value) and not document.is_declared(line.value):
                    errors.append(ValidationError(
                        BROKEN_XREF,
                        f"Reference to non-existent record {line.value}",
                        line=line.line_number,
                    ))

        for record in document.records:
            if record.type == INDIVIDUAL:
                if not any(line.tag == 'NAME' for line in record.tags):
                    errors.append(ValidationError(
                        MISSING_REQUIRED_FIELD,
                        "Individual record missing required NAME tag",
                        xref=record.xref,
                    ))
            elif record.type == FAMILY:
                if not any(line.tag in ('HUSB', 'WIFE', 'CHIL') for line in record.tags):
                    errors.append(ValidationError(
                        EMPTY_FAMILY,
                        "Family record has no members (no HUSB, WIFE, or CHIL tags)",
                        xref=record.xref,
                    ))

        logger.debug(f"Legacy validation: {len(errors)} errors")
        return errors

    def validate_all(self, document: Optional[Document]) -> List[Issue]:
        """Date logic, references, duplicates and (with a registry) custom tags."""
        if document is None:
            return []

        issues: List[Issue] = []
        issues.extend(self.date_logic.validate(document))
        issues.extend(self.references.validate(document))
        issues.extend(self.duplicates.find_duplicate_issues(document))
        if self.config.tag_registry is not None:
            issues.extend(self.tags.validate(document))
        return self._filter(issues)

    def validate_date_logic(self, document: Optional[Document]) -> List[Issue]:
        return self._filter(self.date_logic.validate(document))

    def find_orphaned_references(self, document: Optional[Document]) -> List[Issue]:
        return self._filter(self.references.validate(document))

    def validate_custom_tags(self, document: Optional[Document]) -> List[Issue]:
        """Custom tag issues; always empty when no registry is configured."""
        if self.config.tag_registry is None:
            return []
        return self._filter(self.tags.validate(document))

    def find_potential_duplicates(self, document: Optional[Document]) -> List[DuplicatePair]:
        """Duplicate pairs, not filtered by strictness."""
        return self.duplicates.find_duplicates(document)

    def validate_compliance(self, document: Optional[Document]) -> List[Issue]:
        """Header, identifier length and encoding checks for the declared version."""
        issues = (
            HeaderValidator().validate_header(document)
            + XRefValidator().validate_xrefs(document)
            + EncodingValidator().validate(document)
        )
        return self._filter(issues)

    def quality_report(self, document: Optional[Document]) -> QualityReport:
        """Full QualityReport; empty for a missing document."""
        return self.quality.analyze(document)

    def streaming_validator(self) -> StreamingValidator:
        """A new StreamingValidator using this validator's date logic and strictness."""
        return StreamingValidator(StreamingOptions(
            date_logic=self.config.date_logic,
            strictness=self.config.strictness,
        ))
