"""
Format-version compliance checks: header, identifier length and encoding.

GEDCOM 5.5 and 5.5.1 require a submitter and limit identifiers to 20
characters. GEDCOM 7.0 requires UTF-8 and bans C0 control characters other
than TAB, LF and CR.
"""

import logging
from typing import List, Optional

from ..core.document import Document, TagLine
from .issue import (
    Issue,
    Severity,
    BANNED_CONTROL_CHARACTER,
    INVALID_ENCODING_FOR_VERSION,
    MISSING_SUBM,
    XREF_TOO_LONG,
)

logger = logging.getLogger(__name__)

MAX_XREF_LENGTH = 20

# Encodings GEDCOM 7.0 accepts (UNICODE and ASCII are read as UTF-8)
V7_ENCODINGS = {'', 'UTF-8', 'UTF8', 'UNICODE', 'ASCII'}

ALLOWED_CONTROL_CHARACTERS = {'\t', '\n', '\r'}


class HeaderValidator:
    """Header requirements per GEDCOM version."""

    def validate_header(self, document: Optional[Document]) -> List[Issue]:
        if document is None or document.header is None:
            return []

        header = document.header
        if header.is_v55 and not header.submitter:
            return [
                Issue.create(
                    Severity.WARNING,
                    MISSING_SUBM,
                    f"GEDCOM {header.version} requires SUBM reference in header",
                ).with_detail('version', header.version)
            ]
        return []


class XRefValidator:
    """Identifier length limit for GEDCOM 5.x."""

    def validate_xrefs(self, document: Optional[Document]) -> List[Issue]:
        if document is None or document.header is None:
            return []
        if document.header.is_v7:
            return []

        version = document.header.version
        issues = []
        for record in document.records:
            if not record.xref:
                continue
            content = record.xref.strip('@')
            if len(content) > MAX_XREF_LENGTH:
                issues.append(
                    Issue.create(
                        Severity.WARNING,
                        XREF_TOO_LONG,
                        f"XRef {record.xref} exceeds {MAX_XREF_LENGTH}-character limit "
                        f"for GEDCOM {version}",
                        record.xref,
                    ).with_details(length=len(content), version=version)
                )
        return issues


class EncodingValidator:
    """GEDCOM 7.0 encoding rules."""

    def validate(self, document: Optional[Document]) -> List[Issue]:
        """Both the declared encoding check and the control character scan."""
        return self.validate_encoding(document) + self.validate_control_characters(document)

    def validate_encoding(self, document: Optional[Document]) -> List[Issue]:
        if document is None or document.header is None:
            return []
        header = document.header
        if not header.is_v7:
            return []

        encoding = header.encoding.strip().upper()
        if encoding in V7_ENCODINGS:
            return []

        return [
            Issue.create(
                Severity.ERROR,
                INVALID_ENCODING_FOR_VERSION,
                f"GEDCOM 7.0 requires UTF-8 encoding, found {encoding}",
            ).with_details(encoding=encoding, version=header.version)
        ]

    def validate_control_characters(self, document: Optional[Document]) -> List[Issue]:
        """One issue per value containing a banned character."""
        if document is None or document.header is None:
            return []
        if not document.header.is_v7:
            return []

        issues: List[Issue] = []
        issues.extend(self._scan_tags(document.header.tags, ''))
        for record in document.records:
            issues.extend(self._scan_tags(record.tags, record.xref))
            if record.value:
                issue = check_control_characters(record.value, record.xref, record.type)
                if issue:
                    issues.append(issue)
        return issues

    @staticmethod
    def _scan_tags(tags: List[TagLine], record_id: str) -> List[Issue]:
        issues = []
        for line in tags:
            if line.value:
                issue = check_control_characters(line.value, record_id, line.tag)
                if issue:
                    issues.append(issue.with_detail('line_number', line.line_number))
        return issues


def is_banned_control_character(char: str) -> bool:
    return ord(char) <= 0x1F and char not in ALLOWED_CONTROL_CHARACTERS


def check_control_characters(value: str, record_id: str, field_name: str) -> Optional[Issue]:
    """Issue for the first banned control character in a value, or None."""
    for position, char in enumerate(value):
        if is_banned_control_character(char):
            code_point = f"U+{ord(char):04X}"
            return Issue.create(
                Severity.ERROR,
                BANNED_CONTROL_CHARACTER,
                f"banned C0 control character {code_point} in {field_name} field",
                record_id,
            ).with_details(character=code_point, field=field_name, position=position)
    return None
