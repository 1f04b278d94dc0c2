"""Command-line interface for gedcheck."""

import argparse
import json
import logging
import sys
from typing import List, Optional

from ..config import DuplicateConfig, Strictness, ValidatorConfig
from ..core.document import Document
from ..core.gedcom_parser import load_gedcom
from ..validation.issue import Issue, Severity, sort_by_severity
from ..validation.validator import Validator
from ..validation.vendor_tags import default_vendor_registry

logger = logging.getLogger(__name__)


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def load_document(filepath: str) -> Optional[Document]:
    """Load a GEDCOM file, reporting failures on stderr."""
    try:
        return load_gedcom(filepath)
    except FileNotFoundError:
        print(f"Error: File not found: {filepath}", file=sys.stderr)
    except ValueError as e:
        print(f"Error processing file: {e}", file=sys.stderr)
    return None


def build_config(args: argparse.Namespace) -> ValidatorConfig:
    """Configuration from --config, then overridden by explicit flags.

    Raises:
        OSError: If the config file cannot be read
        ValueError: If the config file is not valid JSON
    """
    if args.config:
        with open(args.config, 'r', encoding='utf-8') as f:
            config = ValidatorConfig.from_dict(json.load(f))
    else:
        config = ValidatorConfig()

    if args.strictness:
        config.strictness = Strictness.from_name(args.strictness)
    if args.vendor_tags and config.tag_registry is None:
        config.tag_registry = default_vendor_registry()
    if args.unknown_tags:
        config.validate_custom_tags = True
        if config.tag_registry is None:
            config.tag_registry = default_vendor_registry()
    return config


def print_issues(issues: List[Issue], as_json: bool = False) -> None:
    if as_json:
        print(json.dumps([issue.to_dict() for issue in issues], indent=2, ensure_ascii=False))
        return

    for issue in issues:
        print(issue)
    print(f"\n{len(issues)} issue(s) found")


def has_errors(issues: List[Issue]) -> bool:
    return any(issue.severity == Severity.ERROR for issue in issues)


def validate_command(args: argparse.Namespace) -> int:
    """Execute the validate command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (1 when any error is reported)
    """
    try:
        config = build_config(args)
    except (OSError, ValueError) as e:
        print(f"Error reading config: {e}", file=sys.stderr)
        return 1

    document = load_document(args.file)
    if document is None:
        return 1

    validator = Validator(config)
    issues = sort_by_severity(validator.validate_all(document) + validator.validate_compliance(document))
    print_issues(issues, as_json=args.json)
    return 1 if has_errors(issues) else 0


def report_command(args: argparse.Namespace) -> int:
    document = load_document(args.file)
    if document is None:
        return 1

    report = Validator().quality_report(document)
    if args.json:
        print(report.to_json())
    else:
        print(report)
    return 0


def duplicates_command(args: argparse.Namespace) -> int:
    document = load_document(args.file)
    if document is None:
        return 1

    config = ValidatorConfig(duplicates=DuplicateConfig(min_confidence=args.min_confidence))
    pairs = Validator(config).find_potential_duplicates(document)
    pairs.sort(key=lambda pair: pair.confidence, reverse=True)

    for i, pair in enumerate(pairs, start=1):
        print(f"{i}. {pair}")
    print(f"\n{len(pairs)} potential duplicate pair(s) found")
    return 0


def stream_command(args: argparse.Namespace) -> int:
    """Validate record by record, resolving references at the end."""
    document = load_document(args.file)
    if document is None:
        return 1

    config = ValidatorConfig(strictness=Strictness.from_name(args.strictness))
    streaming = Validator(config).streaming_validator()
    issues: List[Issue] = []
    for record in document.records:
        issues.extend(streaming.validate_record(record))
    issues.extend(streaming.finalize())

    logger.info(f"Streamed {len(document.records)} records: "
                f"{streaming.declared_count} declared, {streaming.referenced_count} referenced")
    print_issues(issues)
    return 1 if has_errors(issues) else 0


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog='gedcheck',
        description='Validate GEDCOM genealogy files and report data quality.',
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument(
        '--version',
        action='version',
        version='%(prog)s 0.1.0'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable debug logging'
    )

    subparsers = parser.add_subparsers(
        dest='command',
        help='Available commands'
    )

    strictness_choices = [level.value for level in Strictness]

    validate_parser = subparsers.add_parser(
        'validate',
        help='Validate a GEDCOM file and list issues'
    )
    validate_parser.add_argument(
        'file',
        help='Path to the GEDCOM file'
    )
    validate_parser.add_argument(
        '--strictness',
        choices=strictness_choices,
        help='Severities to report (default: normal)'
    )
    validate_parser.add_argument(
        '--vendor-tags',
        action='store_true',
        help='Check custom tags against the Ancestry, FamilySearch and RootsMagic tables'
    )
    validate_parser.add_argument(
        '--unknown-tags',
        action='store_true',
        help='Also report custom tags missing from the vendor tables'
    )
    validate_parser.add_argument(
        '--config',
        help='JSON configuration file'
    )
    validate_parser.add_argument(
        '--json',
        action='store_true',
        help='Print issues as JSON'
    )

    report_parser = subparsers.add_parser(
        'report',
        help='Print a data quality report'
    )
    report_parser.add_argument(
        'file',
        help='Path to the GEDCOM file'
    )
    report_parser.add_argument(
        '--json',
        action='store_true',
        help='Print the report as JSON'
    )

    duplicates_parser = subparsers.add_parser(
        'duplicates',
        help='Find potential duplicate individuals'
    )
    duplicates_parser.add_argument(
        'file',
        help='Path to the GEDCOM file'
    )
    duplicates_parser.add_argument(
        '--min-confidence',
        type=float,
        default=DuplicateConfig().min_confidence,
        help='Minimum confidence to report, 0-1 (default: %(default)s)'
    )

    stream_parser = subparsers.add_parser(
        'stream',
        help='Validate record by record with deferred reference checks'
    )
    stream_parser.add_argument(
        'file',
        help='Path to the GEDCOM file'
    )
    stream_parser.add_argument(
        '--strictness',
        choices=strictness_choices,
        default=Strictness.NORMAL.value,
        help='Severities to report (default: %(default)s)'
    )

    return parser


def main(argv: Optional[list] = None) -> int:
    """Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = create_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    if not args.command:
        parser.print_help()
        return 0

    commands = {
        'validate': validate_command,
        'report': report_command,
        'duplicates': duplicates_command,
        'stream': stream_command,
    }
    return commands[args.command](args)


if __name__ == '__main__':
    sys.exit(main())
