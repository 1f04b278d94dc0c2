"""Tests for cross-reference validation."""

from gedcheck.core.document import Record
from gedcheck.validation.issue import (
    Severity,
    ORPHANED_CHIL,
    ORPHANED_FAMC,
    ORPHANED_HUSB,
    ORPHANED_SOUR,
)
from gedcheck.validation.references import (
    Reference,
    ReferenceType,
    ReferenceValidator,
    orphan_code,
    outgoing_references,
)

from factories import make_document, make_family, make_person, make_source


class TestOutgoingReferences:
    """Test the reference walk over entities."""

    def test_person_references_in_field_order(self):
        person = make_person('@I1@', famc=['@F1@'], fams=['@F2@'], sources=['@S1@'],
                             notes=['@N1@'], associations=['@I2@'])

        references = list(outgoing_references(person))

        assert [reference.context for reference in references] == [
            ReferenceType.FAMC, ReferenceType.FAMS, ReferenceType.SOUR,
            ReferenceType.NOTE, ReferenceType.ASSO,
        ]
        assert references[0] == Reference(ReferenceType.FAMC, '@F1@', 'families_as_child[0]', 0)

    def test_family_references(self):
        family = make_family('@F1@', husband='@I1@', children=['@I2@', '@I3@'])

        fields = [reference.field for reference in outgoing_references(family)]

        assert fields == ['husband_id', 'children_ids[0]', 'children_ids[1]']

    def test_empty_references_skipped(self):
        """Empty identifiers are not references."""
        family = make_family('@F1@', husband='', children=['', '@I2@'])

        references = list(outgoing_references(family))

        assert len(references) == 1
        assert references[0].index == 1

    def test_source_repository(self):
        source = make_source('@S1@', "Parish register", repository='@R1@')

        references = list(outgoing_references(source))

        assert references == [Reference(ReferenceType.REPO, '@R1@', 'repository_ref')]

    def test_no_entity(self):
        assert list(outgoing_references(None)) == []

    def test_orphan_codes(self):
        assert orphan_code(ReferenceType.HUSB) == ORPHANED_HUSB
        assert orphan_code(ReferenceType.NOTE) == 'ORPHANED_NOTE'


class TestReferenceValidator:
    """Test orphaned reference detection on whole documents."""

    def setup_method(self):
        self.validator = ReferenceValidator()

    def test_missing_husband(self):
        """A family pointing at an undeclared husband is one ORPHANED_HUSB error."""
        document = make_document(
            make_person('@I2@', "Jane /Doe/", fams=['@F1@']),
            make_family('@F1@', husband='@I999@', wife='@I2@'),
        )

        issues = self.validator.validate(document)

        assert len(issues) == 1
        issue = issues[0]
        assert issue.code == ORPHANED_HUSB
        assert issue.severity == Severity.ERROR
        assert issue.record_id == '@F1@'
        assert issue.related_id == '@I999@'
        assert issue.details == {'reference_type': 'HUSB', 'field': 'husband_id'}
        assert issue.message == "HUSB reference to non-existent individual @I999@"

    def test_each_orphan_kind(self):
        document = make_document(
            make_person('@I1@', famc=['@F9@'], sources=['@S9@']),
            make_family('@F1@', children=['@I8@']),
        )

        codes = [issue.code for issue in self.validator.validate(document)]

        assert codes == [ORPHANED_FAMC, ORPHANED_SOUR, ORPHANED_CHIL]

    def test_child_field_index(self):
        document = make_document(
            make_person('@I1@', famc=['@F1@']),
            make_family('@F1@', children=['@I1@', '@I7@']),
        )

        issues = self.validator.validate(document)

        assert issues[0].details['field'] == 'children_ids[1]'

    def test_note_reference_resolves_to_note_record(self):
        """Any declared record satisfies a reference."""
        note = Record(xref='@N1@', type='NOTE', value='Shared note')
        document = make_document(make_person('@I1@', notes=['@N1@', '@N2@']), extra_records=[note])

        issues = self.validator.validate(document)

        assert len(issues) == 1
        assert issues[0].code == 'ORPHANED_NOTE'
        assert issues[0].related_id == '@N2@'

    def test_valid_document(self):
        document = make_document(
            make_person('@I1@', fams=['@F1@'], sources=['@S1@']),
            make_family('@F1@', husband='@I1@'),
            make_source('@S1@', "Census"),
        )

        assert self.validator.validate(document) == []

    def test_report_counts(self):
        document = make_document(
            make_person('@I1@', fams=['@F1@'], sources=['@S1@', '@S2@']),
            make_family('@F1@', husband='@I1@', wife='@I5@'),
            make_source('@S1@'),
        )

        report = self.validator.report(document)

        assert report.total_references == 5
        assert report.valid_references == 3
        assert report.orphaned_references == 2
        assert report.by_type == {'FAMS': 1, 'SOUR': 2, 'HUSB': 1, 'WIFE': 1}
        assert report.orphaned_by_type == {'SOUR': 1, 'WIFE': 1}
        assert report.to_dict()['orphaned_references'] == 2

    def test_none_document(self):
        assert self.validator.validate(None) == []
        assert self.validator.report(None).total_references == 0
