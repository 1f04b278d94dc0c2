"""Tests for the Validator facade and configuration."""

from gedcheck import Validator, ValidatorConfig, ValidationError, parse_gedcom_string
from gedcheck.config import DateLogicConfig, DuplicateConfig, Strictness
from gedcheck.core.document import Header, Record
from gedcheck.validation.issue import (
    Severity,
    BROKEN_XREF,
    DEATH_BEFORE_BIRTH,
    EMPTY_FAMILY,
    MISSING_REQUIRED_FIELD,
    ORPHANED_HUSB,
    POTENTIAL_DUPLICATE,
    UNKNOWN_CUSTOM_TAG,
)
from gedcheck.validation.streaming import StreamingValidator
from gedcheck.validation.vendor_tags import default_vendor_registry

from factories import make_document, make_family, make_person, tag_lines


LEGACY_GEDCOM = """0 HEAD
1 GEDC
2 VERS 5.5.1
1 SUBM @U1@
0 @I1@ INDI
1 NAME John /Doe/
1 FAMS @F1@
0 @I2@ INDI
1 SEX F
0 @F1@ FAM
1 HUSB @I1@
1 WIFE @I9@
0 @F2@ FAM
1 MARR
2 DATE 1900
0 TRLR
"""


def problem_document():
    return make_document(
        make_person('@I1@', "John /Smith/", birth="1950", death="1940", sex='M'),
        make_person('@I2@', "John /Smith/", birth="1950", sex='M'),
        make_family('@F1@', husband='@I999@'),
    )


class TestValidator:
    """Test the combined entry points."""

    def test_validate_all_normal(self):
        """NORMAL strictness drops the INFO duplicate issue."""
        issues = Validator().validate_all(problem_document())

        codes = [issue.code for issue in issues]
        assert DEATH_BEFORE_BIRTH in codes
        assert ORPHANED_HUSB in codes
        assert POTENTIAL_DUPLICATE not in codes

    def test_validate_all_strict(self):
        validator = Validator(ValidatorConfig(strictness=Strictness.STRICT))

        codes = [issue.code for issue in validator.validate_all(problem_document())]

        assert POTENTIAL_DUPLICATE in codes

    def test_relaxed_only_errors(self):
        validator = Validator(ValidatorConfig(strictness=Strictness.RELAXED))

        issues = validator.validate_all(problem_document())

        assert issues
        assert all(issue.severity == Severity.ERROR for issue in issues)

    def test_idempotent(self):
        """Validating twice gives the same issues."""
        validator = Validator()
        document = problem_document()

        assert validator.validate_all(document) == validator.validate_all(document)

    def test_none_document(self):
        validator = Validator()

        assert validator.validate(None) == []
        assert validator.validate_all(None) == []
        assert validator.validate_date_logic(None) == []
        assert validator.find_orphaned_references(None) == []
        assert validator.find_potential_duplicates(None) == []
        assert validator.validate_compliance(None) == []
        assert validator.quality_report(None).total_issues == 0

    def test_individual_entry_points(self):
        validator = Validator()
        document = problem_document()

        assert [issue.code for issue in validator.validate_date_logic(document)] == [DEATH_BEFORE_BIRTH]
        assert [issue.code for issue in validator.find_orphaned_references(document)] == [ORPHANED_HUSB]
        assert len(validator.find_potential_duplicates(document)) == 1

    def test_duplicate_pairs_ignore_strictness(self):
        validator = Validator(ValidatorConfig(strictness=Strictness.RELAXED))

        assert len(validator.find_potential_duplicates(problem_document())) == 1

    def test_custom_config(self):
        config = ValidatorConfig(
            date_logic=DateLogicConfig(max_lifespan=50),
            duplicates=DuplicateConfig(min_confidence=0.95),
        )
        validator = Validator(config)
        document = make_document(
            make_person('@I1@', "Ann /Lee/", birth="1900", death="1960"),
            make_person('@I2@', "Ann /Lee/", birth="1900"),
        )

        assert [issue.code for issue in validator.validate_all(document)] == ['IMPOSSIBLE_AGE']
        assert validator.find_potential_duplicates(document) == []

    def test_custom_tags_need_registry(self):
        record = Record(xref='@I1@', type='INDI', tags=tag_lines((1, '_ODD', 'x')))
        document = make_document(extra_records=[record])

        assert Validator(ValidatorConfig(validate_custom_tags=True)).validate_custom_tags(document) == []

        validator = Validator(ValidatorConfig(tag_registry=default_vendor_registry(),
                                              validate_custom_tags=True))
        assert [issue.code for issue in validator.validate_custom_tags(document)] == [UNKNOWN_CUSTOM_TAG]
        assert UNKNOWN_CUSTOM_TAG in [issue.code for issue in validator.validate_all(document)]

    def test_compliance(self):
        document = make_document(make_person('@I1@'), header=Header(version='5.5.1'))

        issues = Validator().validate_compliance(document)

        assert [issue.code for issue in issues] == ['MISSING_SUBM']

    def test_streaming_validator_uses_strictness(self):
        validator = Validator(ValidatorConfig(strictness=Strictness.STRICT))

        streaming = validator.streaming_validator()

        assert isinstance(streaming, StreamingValidator)
        assert streaming.options.strictness == Strictness.STRICT
        assert streaming is not validator.streaming_validator()

    def test_quality_report(self):
        report = Validator().quality_report(problem_document())

        assert report.total_individuals == 2
        assert report.error_count == 2


class TestLegacyValidate:
    """Test the structural ValidationError checks."""

    def setup_method(self):
        self.errors = Validator().validate(parse_gedcom_string(LEGACY_GEDCOM))

    def test_codes(self):
        assert sorted(error.code for error in self.errors) == [
            BROKEN_XREF, EMPTY_FAMILY, MISSING_REQUIRED_FIELD,
        ]

    def test_broken_xref_has_line(self):
        error = next(error for error in self.errors if error.code == BROKEN_XREF)

        assert error.line == 12
        assert str(error) == "[BROKEN_XREF] line 12: Reference to non-existent record @I9@"

    def test_missing_name_has_xref(self):
        error = next(error for error in self.errors if error.code == MISSING_REQUIRED_FIELD)

        assert error.xref == '@I2@'
        assert str(error) == "[MISSING_REQUIRED_FIELD] Individual record missing required NAME tag (XRef: @I2@)"

    def test_empty_family(self):
        error = next(error for error in self.errors if error.code == EMPTY_FAMILY)

        assert error.xref == '@F2@'

    def test_plain_str(self):
        assert str(ValidationError('X', "message")) == "[X] message"
        assert isinstance(ValidationError('X', "message"), Exception)


class TestValidatorConfig:
    """Test building configuration from mappings."""

    def test_from_dict(self):
        config = ValidatorConfig.from_dict({
            'strictness': 'strict',
            'date_logic': {'max_lifespan': 110, 'unknown_key': 1},
            'duplicates': {'min_confidence': 0.5},
            'vendor_tags': True,
            'validate_custom_tags': True,
        })

        assert config.strictness == Strictness.STRICT
        assert config.date_logic.max_lifespan == 110
        assert config.date_logic.max_father_age == 90
        assert config.duplicates.min_confidence == 0.5
        assert config.tag_registry.is_known('_APID')
        assert config.validate_custom_tags

    def test_from_empty_dict(self):
        config = ValidatorConfig.from_dict({})

        assert config.strictness == Strictness.NORMAL
        assert config.date_logic is None
        assert config.tag_registry is None
