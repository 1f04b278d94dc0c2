"""Tests for the CLI interface."""

import json
import pytest
import tempfile
import os

from gedcheck.ui.cli import main, create_parser


SAMPLE_GEDCOM = """0 HEAD
1 SOUR TestSource
1 GEDC
2 VERS 5.5.1
1 SUBM @U1@
0 @I1@ INDI
1 NAME Test /Person/
1 SEX M
1 BIRT
2 DATE 1 JAN 1950
0 TRLR
"""

BROKEN_GEDCOM = """0 HEAD
1 SOUR Ancestry.com Family Trees
1 GEDC
2 VERS 5.5.1
1 SUBM @U1@
0 @I1@ INDI
1 NAME John /Smith/
1 SEX M
1 BIRT
2 DATE 1950
1 DEAT
2 DATE 1940
1 _ODDTAG something
0 @I2@ INDI
1 NAME John /Smith/
1 SEX M
1 BIRT
2 DATE 1950
0 @F1@ FAM
1 HUSB @I999@
1 CHIL @I2@
0 TRLR
"""


def write_temp(content):
    with tempfile.NamedTemporaryFile(mode='w', suffix='.ged', delete=False, encoding='utf-8') as f:
        f.write(content)
        return f.name


@pytest.fixture
def sample_gedcom_file():
    """Create a temporary GEDCOM file for testing."""
    temp_path = write_temp(SAMPLE_GEDCOM)

    yield temp_path

    if os.path.exists(temp_path):
        os.unlink(temp_path)


@pytest.fixture
def broken_gedcom_file():
    """A GEDCOM file with date, reference and duplicate problems."""
    temp_path = write_temp(BROKEN_GEDCOM)

    yield temp_path

    if os.path.exists(temp_path):
        os.unlink(temp_path)


def test_create_parser():
    """Test that the argument parser is created correctly."""
    parser = create_parser()

    assert parser is not None
    assert parser.prog == 'gedcheck'


def test_cli_no_arguments():
    """Test CLI with no arguments shows help."""
    exit_code = main([])
    assert exit_code == 0


def test_cli_version(capsys):
    with pytest.raises(SystemExit):
        main(['--version'])

    captured = capsys.readouterr()
    assert '0.1.0' in captured.out


def test_validate_clean_file(sample_gedcom_file, capsys):
    """A clean file exits with 0."""
    exit_code = main(['validate', sample_gedcom_file])

    assert exit_code == 0
    captured = capsys.readouterr()
    assert '0 issue(s) found' in captured.out


def test_validate_reports_errors(broken_gedcom_file, capsys):
    """Errors make the validate command exit with 1."""
    exit_code = main(['validate', broken_gedcom_file])

    assert exit_code == 1
    captured = capsys.readouterr()
    assert 'DEATH_BEFORE_BIRTH' in captured.out
    assert 'ORPHANED_HUSB' in captured.out
    assert 'POTENTIAL_DUPLICATE' not in captured.out


def test_validate_strict_json(broken_gedcom_file, capsys):
    """Strict JSON output includes info issues."""
    main(['validate', broken_gedcom_file, '--strictness', 'strict', '--json'])

    captured = capsys.readouterr()
    issues = json.loads(captured.out)
    codes = [issue['code'] for issue in issues]
    assert 'POTENTIAL_DUPLICATE' in codes
    assert issues[0]['severity'] == 'ERROR'


def test_validate_unknown_tags(broken_gedcom_file, capsys):
    main(['validate', broken_gedcom_file, '--unknown-tags'])

    captured = capsys.readouterr()
    assert 'UNKNOWN_CUSTOM_TAG' in captured.out


def test_validate_with_config_file(broken_gedcom_file, capsys):
    config_path = write_temp(json.dumps({'strictness': 'relaxed'}))
    try:
        main(['validate', broken_gedcom_file, '--config', config_path, '--json'])
    finally:
        os.unlink(config_path)

    captured = capsys.readouterr()
    issues = json.loads(captured.out)
    assert issues
    assert all(issue['severity'] == 'ERROR' for issue in issues)


def test_validate_bad_config(broken_gedcom_file, capsys):
    config_path = write_temp("{not json")
    try:
        exit_code = main(['validate', broken_gedcom_file, '--config', config_path])
    finally:
        os.unlink(config_path)

    assert exit_code == 1
    assert 'Error reading config' in capsys.readouterr().err


def test_validate_missing_file(capsys):
    exit_code = main(['validate', '/nonexistent/file.ged'])

    assert exit_code == 1
    assert 'File not found' in capsys.readouterr().err


def test_report_command(broken_gedcom_file, capsys):
    exit_code = main(['report', broken_gedcom_file])

    assert exit_code == 0
    captured = capsys.readouterr()
    assert 'GEDCOM Quality Report' in captured.out
    assert 'Records: 2 individuals, 1 families, 0 sources' in captured.out


def test_report_json(broken_gedcom_file, capsys):
    main(['report', broken_gedcom_file, '--json'])

    data = json.loads(capsys.readouterr().out)
    assert data['total_individuals'] == 2
    assert data['error_count'] >= 2


def test_duplicates_command(broken_gedcom_file, capsys):
    exit_code = main(['duplicates', broken_gedcom_file])

    assert exit_code == 0
    captured = capsys.readouterr()
    assert '@I1@' in captured.out
    assert '1 potential duplicate pair(s) found' in captured.out


def test_duplicates_min_confidence(broken_gedcom_file, capsys):
    main(['duplicates', broken_gedcom_file, '--min-confidence', '0.99'])

    assert '0 potential duplicate pair(s) found' in capsys.readouterr().out


def test_stream_command(broken_gedcom_file, capsys):
    exit_code = main(['stream', broken_gedcom_file])

    assert exit_code == 1
    captured = capsys.readouterr()
    assert 'ORPHANED_HUSB' in captured.out
    assert 'DEATH_BEFORE_BIRTH' in captured.out
