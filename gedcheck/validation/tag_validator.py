"""Validation of custom tags against a TagRegistry."""

import logging
from dataclasses import replace
from typing import List, Optional

from ..core.document import Document, TagLine
from .issue import Issue, Severity, INVALID_TAG_PARENT, INVALID_TAG_VALUE, UNKNOWN_CUSTOM_TAG
from .tag_registry import TagRegistry

logger = logging.getLogger(__name__)


class TagValidator:
    """Checks every underscore-prefixed tag in a document.

    Known tags used under the wrong parent or with a malformed value are
    errors. Unknown custom tags are warnings, reported only when
    ``validate_unknown`` is set.
    """

    def __init__(self, registry: Optional[TagRegistry] = None, validate_unknown: bool = False):
        self.registry = registry
        self.validate_unknown = validate_unknown

    def validate(self, document: Optional[Document]) -> List[Issue]:
        if document is None:
            return []

        issues: List[Issue] = []
        if document.header is not None:
            issues.extend(self.scan_tags(document.header.tags, 'HEAD', ''))
        for record in document.records:
            issues.extend(self.scan_tags(record.tags, record.type, record.xref))

        logger.debug(f"Custom tags: {len(issues)} issues")
        return issues

    def scan_tags(self, tags: List[TagLine], record_type: str, record_id: str) -> List[Issue]:
        """Walk a flat tag list, tracking each tag's parent by level."""
        issues: List[Issue] = []
        # stack[n] is the most recent tag at level n; level 0 is the record itself
        stack = [record_type]

        for line in tags:
            parent = stack[line.level - 1] if 0 < line.level <= len(stack) else ''

            if line.tag.startswith('_'):
                issue = self._check_custom_tag(line, parent, record_id)
                if issue:
                    issues.append(issue)

            del stack[max(line.level, 1):]
            stack.extend([''] * (line.level - len(stack)))
            stack.append(line.tag)

        return issues

    def _check_custom_tag(self, line: TagLine, parent: str, record_id: str) -> Optional[Issue]:
        if self.registry is not None and self.registry.is_known(line.tag):
            issue = self.registry.validate_tag(line.tag, parent, line.value)
            if issue is None:
                return None
            if issue.code in (INVALID_TAG_PARENT, INVALID_TAG_VALUE):
                issue = replace(issue, severity=Severity.ERROR)
            return replace(issue, record_id=record_id).with_detail('line_number', line.line_number)

        if not self.validate_unknown:
            return None

        return Issue.create(
            Severity.WARNING,
            UNKNOWN_CUSTOM_TAG,
            f"unknown custom tag {line.tag}",
            record_id,
        ).with_details(tag=line.tag, parent=parent, line_number=line.line_number)
