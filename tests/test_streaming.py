"""Tests for record-at-a-time validation."""

from collections import Counter

from gedcheck.config import StreamingOptions, Strictness
from gedcheck.validation.issue import DEATH_BEFORE_BIRTH, ORPHANED_FAMS, ORPHANED_SOUR
from gedcheck.validation.references import ReferenceValidator
from gedcheck.validation.streaming import StreamingValidator

from factories import make_document, make_family, make_person, make_record, make_source


def stream(validator, document):
    issues = []
    for record in document.records:
        issues.extend(validator.validate_record(record))
    issues.extend(validator.finalize())
    return issues


class TestStreamingValidator:
    """Test StreamingValidator behaviour."""

    def setup_method(self):
        self.validator = StreamingValidator()

    def test_forward_reference_resolves(self):
        """A reference to a record declared later is not an orphan."""
        document = make_document(
            make_person('@I1@', fams=['@F1@']),
            make_family('@F1@', husband='@I1@'),
        )

        assert stream(self.validator, document) == []

    def test_orphans_reported_at_finalize(self):
        """Nothing about references is reported before finalize."""
        assert self.validator.validate_record(make_record(make_person('@I1@', fams=['@F9@']))) == []

        issues = self.validator.finalize()

        assert len(issues) == 1
        assert issues[0].code == ORPHANED_FAMS
        assert issues[0].record_id == '@I1@'
        assert issues[0].related_id == '@F9@'
        assert issues[0].details['field'] == 'families_as_spouse[0]'

    def test_death_before_birth_reported_immediately(self):
        record = make_record(make_person('@I1@', birth="1950", death="1940"))

        issues = self.validator.validate_record(record)

        assert [issue.code for issue in issues] == [DEATH_BEFORE_BIRTH]

    def test_matches_batch_validation(self):
        """Streaming finds the same orphaned references as whole-document validation."""
        document = make_document(
            make_person('@I1@', famc=['@F2@'], fams=['@F1@'], sources=['@S1@', '@S7@']),
            make_person('@I2@', fams=['@F1@'], notes=['@N1@']),
            make_family('@F1@', husband='@I1@', wife='@I2@', children=['@I3@', '@I4@']),
            make_source('@S1@', repository='@R1@'),
            make_person('@I4@', famc=['@F1@']),
        )

        streamed = Counter(issue.triple for issue in stream(self.validator, document))
        batch = Counter(issue.triple for issue in ReferenceValidator().validate(document))

        assert streamed == batch
        assert sum(batch.values()) == 5

    def test_repeated_citation_counted_per_usage(self):
        """Citing one missing source twice gives two matching findings in both modes."""
        document = make_document(make_person('@I1@', sources=['@S9@', '@S9@']))

        streamed = Counter(issue.triple for issue in stream(self.validator, document))
        batch = Counter(issue.triple for issue in ReferenceValidator().validate(document))

        assert streamed == batch
        assert batch[(ORPHANED_SOUR, '@I1@', '@S9@')] == 2

    def test_fan_out_keeps_one_entry_per_target(self):
        """Many citations of one source share a single tracked identifier."""
        for number in range(1000):
            self.validator.validate_record(make_record(make_person(f'@I{number}@', sources=['@S1@'])))
        self.validator.validate_record(make_record(make_source('@S1@', "Census")))

        assert self.validator.referenced_count == 1
        assert self.validator.usage_count('@S1@') == 1000
        assert self.validator.declared_count == 1001
        assert self.validator.finalize() == []

    def test_fan_out_orphans_reported_per_usage(self):
        for number in range(3):
            self.validator.validate_record(make_record(make_person(f'@I{number}@', sources=['@S1@'])))

        issues = self.validator.finalize()

        assert [issue.record_id for issue in issues] == ['@I0@', '@I1@', '@I2@']
        assert all(issue.code == ORPHANED_SOUR for issue in issues)

    def test_declared_type(self):
        self.validator.validate_record(make_record(make_family('@F1@')))

        assert self.validator.declared_type('@F1@') == 'FAM'
        assert self.validator.declared_type('@F2@') is None

    def test_reset(self):
        """reset() forgets declarations and references."""
        self.validator.validate_record(make_record(make_person('@I1@', fams=['@F9@'])))
        self.validator.reset()

        assert self.validator.declared_count == 0
        assert self.validator.referenced_count == 0
        assert self.validator.finalize() == []

    def test_none_record(self):
        assert self.validator.validate_record(None) == []

    def test_relaxed_strictness_keeps_errors(self):
        validator = StreamingValidator(StreamingOptions(strictness=Strictness.RELAXED))
        validator.validate_record(make_record(make_person('@I1@', fams=['@F9@'])))

        assert len(validator.finalize()) == 1
