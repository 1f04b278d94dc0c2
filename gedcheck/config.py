"""Configuration for validators and the validation facade."""

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Dict, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .validation.tag_registry import TagRegistry


# Date logic defaults
DEFAULT_MAX_LIFESPAN = 120
DEFAULT_MIN_PARENT_AGE = 12
DEFAULT_MAX_MOTHER_AGE = 55
DEFAULT_MAX_FATHER_AGE = 90

# Duplicate detection defaults
DEFAULT_MIN_NAME_SIMILARITY = 0.8
DEFAULT_MAX_BIRTH_YEAR_DIFF = 2
DEFAULT_MIN_CONFIDENCE = 0.7


class Strictness(Enum):
    """Which issue severities a caller wants to see."""
    RELAXED = "relaxed"  # errors only
    NORMAL = "normal"    # errors and warnings
    STRICT = "strict"    # everything, including info

    @classmethod
    def from_name(cls, name: Optional[str]) -> "Strictness":
        """Look up a strictness level by name, defaulting to NORMAL."""
        if not name:
            return cls.NORMAL
        try:
            return cls(name.strip().lower())
        except ValueError:
            return cls.NORMAL


@dataclass
class DateLogicConfig:
    """Thresholds for chronological plausibility checks.

    Each field defaults independently: leaving one unset (None or 0) only
    falls back for that field.
    """

    max_lifespan: Optional[int] = None
    min_parent_age: Optional[int] = None
    max_mother_age: Optional[int] = None
    max_father_age: Optional[int] = None

    def __post_init__(self):
        if not self.max_lifespan:
            self.max_lifespan = DEFAULT_MAX_LIFESPAN
        if not self.min_parent_age:
            self.min_parent_age = DEFAULT_MIN_PARENT_AGE
        if not self.max_mother_age:
            self.max_mother_age = DEFAULT_MAX_MOTHER_AGE
        if not self.max_father_age:
            self.max_father_age = DEFAULT_MAX_FATHER_AGE


@dataclass
class DuplicateConfig:
    """Thresholds for duplicate individual detection."""

    require_exact_surname: bool = True
    normalize_names: bool = True
    min_name_similarity: float = DEFAULT_MIN_NAME_SIMILARITY
    max_birth_year_diff: int = DEFAULT_MAX_BIRTH_YEAR_DIFF
    require_birth_date: bool = False
    min_confidence: float = DEFAULT_MIN_CONFIDENCE


@dataclass
class StreamingOptions:
    """Options for record-at-a-time validation."""

    date_logic: Optional[DateLogicConfig] = None
    strictness: Strictness = Strictness.NORMAL


@dataclass
class ValidatorConfig:
    """Configuration for the Validator facade.

    Attributes:
        date_logic: Date logic thresholds (defaults when None)
        duplicates: Duplicate detection thresholds (defaults when None)
        strictness: Severity levels included in results
        tag_registry: Definitions for custom tags; custom tag checks are
            disabled when None
        validate_custom_tags: Report underscore tags missing from the registry
    """

    date_logic: Optional[DateLogicConfig] = None
    duplicates: Optional[DuplicateConfig] = None
    strictness: Strictness = Strictness.NORMAL
    tag_registry: Optional["TagRegistry"] = None
    validate_custom_tags: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ValidatorConfig":
        """Build a configuration from a JSON-style mapping.

        Recognised keys: ``strictness``, ``date_logic``, ``duplicates``,
        ``vendor_tags`` and ``validate_custom_tags``. Anything else is ignored.
        """
        date_logic = None
        if data.get('date_logic'):
            date_logic = DateLogicConfig(**_known_fields(DateLogicConfig, data['date_logic']))

        duplicates = None
        if data.get('duplicates'):
            duplicates = DuplicateConfig(**_known_fields(DuplicateConfig, data['duplicates']))

        tag_registry = None
        if data.get('vendor_tags'):
            from .validation.vendor_tags import default_vendor_registry
            tag_registry = default_vendor_registry()

        return cls(
            date_logic=date_logic,
            duplicates=duplicates,
            strictness=Strictness.from_name(data.get('strictness')),
            tag_registry=tag_registry,
            validate_custom_tags=bool(data.get('validate_custom_tags', False)),
        )


def _known_fields(config_cls, section: Dict[str, Any]) -> Dict[str, Any]:
    names = {f.name for f in fields(config_cls)}
    return {key: value for key, value in section.items() if key in names}
