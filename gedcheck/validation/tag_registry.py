"""Registry of custom (underscore-prefixed) tag definitions."""

import re
from dataclasses import dataclass, field, replace
from typing import Dict, FrozenSet, Iterable, List, Mapping, Optional, Pattern

from .issue import Issue, Severity, INVALID_TAG_PARENT, INVALID_TAG_VALUE

XREF_PATTERN = re.compile(r'^@[A-Za-z0-9_]+@$')
YES_NO_PATTERN = re.compile(r'^[YN]$')


class TagRegistrationError(ValueError):
    """Raised when a tag is registered twice."""


@dataclass(frozen=True)
class TagDefinition:
    """Rules for one custom tag.

    Attributes:
        tag: Tag name (filled in on registration)
        allowed_parents: Parent tags the tag may appear under; empty means anywhere
        value_pattern: Pattern a non-empty value must fully match
        description: Human-readable description
    """
    tag: str = ''
    allowed_parents: FrozenSet[str] = field(default_factory=frozenset)
    value_pattern: Optional[Pattern] = None
    description: str = ''

    def __post_init__(self):
        if not isinstance(self.allowed_parents, frozenset):
            object.__setattr__(self, 'allowed_parents', frozenset(self.allowed_parents))


class TagRegistry:
    """Maps tag names to definitions. Registries never share storage."""

    def __init__(self):
        self._tags: Dict[str, TagDefinition] = {}

    def __len__(self) -> int:
        return len(self._tags)

    def __contains__(self, tag: str) -> bool:
        return tag in self._tags

    def __repr__(self) -> str:
        return f"TagRegistry({self.tags()!r})"

    def register(self, tag: str, definition: Optional[TagDefinition] = None) -> None:
        """Add a definition.

        Raises:
            TagRegistrationError: If the tag is already registered
        """
        if tag in self._tags:
            raise TagRegistrationError(f"tag {tag!r} is already registered")
        self._tags[tag] = replace(definition or TagDefinition(), tag=tag)

    def register_batch(self, definitions: Mapping[str, TagDefinition]) -> None:
        """Add several definitions; nothing is added if any name is taken."""
        for tag in definitions:
            if tag in self._tags:
                raise TagRegistrationError(f"tag {tag!r} is already registered")
        for tag, definition in definitions.items():
            self._tags[tag] = replace(definition, tag=tag)

    def get(self, tag: str) -> Optional[TagDefinition]:
        return self._tags.get(tag)

    def is_known(self, tag: str) -> bool:
        return tag in self._tags

    def tags(self) -> List[str]:
        """Registered tag names, sorted."""
        return sorted(self._tags)

    def validate_tag(self, tag: str, parent: str, value: str) -> Optional[Issue]:
        """Check one occurrence of a tag against its definition.

        Returns None for unregistered tags and for valid occurrences. The
        parent rule is checked before the value rule.
        """
        definition = self._tags.get(tag)
        if definition is None:
            return None

        if definition.allowed_parents and parent not in definition.allowed_parents:
            allowed = sorted(definition.allowed_parents)
            return Issue.create(
                Severity.WARNING,
                INVALID_TAG_PARENT,
                f"tag {tag} is not allowed under {parent} (allowed: {', '.join(allowed)})",
            ).with_details(tag=tag, parent=parent, allowed_parents=', '.join(allowed))

        if definition.value_pattern is not None and value:
            if not definition.value_pattern.fullmatch(value):
                return Issue.create(
                    Severity.WARNING,
                    INVALID_TAG_VALUE,
                    f"tag {tag} value {value!r} does not match expected pattern",
                ).with_details(tag=tag, value=value, pattern=definition.value_pattern.pattern)

        return None


def merge_registries(*registries: Optional[TagRegistry]) -> TagRegistry:
    """Combine registries into a new one; the first definition of a tag wins."""
    merged = TagRegistry()
    for registry in registries:
        if registry is None:
            continue
        for tag in registry.tags():
            if not merged.is_known(tag):
                merged.register(tag, registry.get(tag))
    return merged


def definitions(tags: Iterable[TagDefinition]) -> Dict[str, TagDefinition]:
    """Key a sequence of definitions by their tag name."""
    return {definition.tag: definition for definition in tags}
