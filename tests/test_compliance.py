"""Tests for header, identifier and encoding compliance checks."""

from gedcheck.core.document import Header, Record
from gedcheck.validation.compliance import (
    EncodingValidator,
    HeaderValidator,
    XRefValidator,
    check_control_characters,
    is_banned_control_character,
)
from gedcheck.validation.issue import (
    Severity,
    BANNED_CONTROL_CHARACTER,
    INVALID_ENCODING_FOR_VERSION,
    MISSING_SUBM,
    XREF_TOO_LONG,
)

from factories import make_document, make_person, tag_lines

LONG_XREF = '@I' + '1' * 20 + '@'


class TestHeaderValidator:
    """Test header requirements."""

    def test_missing_submitter_in_551(self):
        document = make_document(header=Header(version='5.5.1'))

        issues = HeaderValidator().validate_header(document)

        assert len(issues) == 1
        assert issues[0].code == MISSING_SUBM
        assert issues[0].severity == Severity.WARNING
        assert issues[0].message == "GEDCOM 5.5.1 requires SUBM reference in header"

    def test_submitter_present(self):
        document = make_document(header=Header(version='5.5', submitter='@U1@'))

        assert HeaderValidator().validate_header(document) == []

    def test_submitter_optional_in_v7(self):
        document = make_document(header=Header(version='7.0'))

        assert HeaderValidator().validate_header(document) == []

    def test_no_header(self):
        document = make_document()
        document.header = None

        assert HeaderValidator().validate_header(document) == []
        assert HeaderValidator().validate_header(None) == []


class TestXRefValidator:
    """Test identifier length limits."""

    def test_long_xref_in_551(self):
        document = make_document(make_person(LONG_XREF), make_person('@I1@'))

        issues = XRefValidator().validate_xrefs(document)

        assert len(issues) == 1
        assert issues[0].code == XREF_TOO_LONG
        assert issues[0].record_id == LONG_XREF
        assert issues[0].details == {'length': '21', 'version': '5.5.1'}

    def test_twenty_characters_allowed(self):
        document = make_document(make_person('@I' + '1' * 19 + '@'))

        assert XRefValidator().validate_xrefs(document) == []

    def test_no_limit_in_v7(self):
        document = make_document(make_person(LONG_XREF), header=Header(version='7.0'))

        assert XRefValidator().validate_xrefs(document) == []


class TestEncodingValidator:
    """Test GEDCOM 7.0 encoding rules."""

    def test_ansel_invalid_in_v7(self):
        document = make_document(header=Header(version='7.0', encoding='ANSEL'))

        issues = EncodingValidator().validate_encoding(document)

        assert len(issues) == 1
        assert issues[0].code == INVALID_ENCODING_FOR_VERSION
        assert issues[0].severity == Severity.ERROR
        assert issues[0].message == "GEDCOM 7.0 requires UTF-8 encoding, found ANSEL"

    def test_utf8_and_missing_encoding_valid(self):
        for encoding in ('UTF-8', 'utf-8', ''):
            document = make_document(header=Header(version='7.0', encoding=encoding))
            assert EncodingValidator().validate_encoding(document) == []

    def test_ansel_allowed_in_551(self):
        document = make_document(header=Header(version='5.5.1', submitter='@U1@', encoding='ANSEL'))

        assert EncodingValidator().validate(document) == []

    def test_control_character_in_record_value(self):
        record = Record(xref='@N1@', type='NOTE', value='bad\x07value')
        document = make_document(header=Header(version='7.0'), extra_records=[record])

        issues = EncodingValidator().validate_control_characters(document)

        assert len(issues) == 1
        assert issues[0].code == BANNED_CONTROL_CHARACTER
        assert issues[0].record_id == '@N1@'
        assert issues[0].details['character'] == 'U+0007'
        assert issues[0].details['position'] == '3'

    def test_control_character_in_tag_value(self):
        record = Record(xref='@I1@', type='INDI', tags=tag_lines((1, 'NAME', 'John\x01 /Doe/')))
        document = make_document(header=Header(version='7.0'), extra_records=[record])

        issues = EncodingValidator().validate_control_characters(document)

        assert len(issues) == 1
        assert issues[0].details['field'] == 'NAME'
        assert issues[0].details['line_number'] == '2'

    def test_control_characters_ignored_before_v7(self):
        record = Record(xref='@N1@', type='NOTE', value='bad\x07value')
        document = make_document(extra_records=[record])

        assert EncodingValidator().validate_control_characters(document) == []

    def test_allowed_whitespace(self):
        assert not is_banned_control_character('\t')
        assert not is_banned_control_character('\n')
        assert not is_banned_control_character('\r')
        assert is_banned_control_character('\x00')
        assert is_banned_control_character('\x1f')
        assert not is_banned_control_character(' ')

    def test_first_banned_character_only(self):
        issue = check_control_characters('a\x02b\x03', '@I1@', 'NOTE')

        assert issue.details['character'] == 'U+0002'
        assert check_control_characters('clean text', '@I1@', 'NOTE') is None
