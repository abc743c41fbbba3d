#!/usr/bin/env python3
"""
Document Validator - CLI Entry Point
====================================

Validates one XML, JSON or YAML document against its schema and then its
constraint rules. This file is intentionally minimal, delegating all logic
to specialized services.

Architecture:
- Services: Pipeline wiring, report rendering
- CLI: User interface (parsing, formatting)
- Core: Data model, format handling, configuration
- Validators: Validation engine

Usage:
    python Validate_CLI.py --xsd schema.xsd sample.xml
    python Validate_CLI.py --as yaml --json-schema schema.json data.yaml
    python Validate_CLI.py --json-schema schema.json data.json --report report.md
"""

import sys

from cli import CommandParser, OutputFormatter
from core.exceptions import ConfigurationError
from core.logging_utils import configure_split_stream_logging, parse_log_level
from core.results import Verdict
from core.settings import ValidatorSettings
from services import ReportService, ValidationService


def main(argv=None) -> int:
    """
    Run one validation and return the process exit code.

    Args:
        argv: Arguments to parse (default: sys.argv[1:])

    Returns:
        Exit code of the verdict
    """
    parser = CommandParser()
    formatter = OutputFormatter()

    try:
        args = parser.parse_args(argv)
        parser.validate_args(args)
        configure_split_stream_logging(level=parse_log_level(args.log_level))
        settings = ValidatorSettings.from_environment(
            xsd_files=args.xsd_files,
            json_schema_file=args.json_schema_file,
            schematron_file=args.schematron_file,
            sniff_size=args.sniff_size,
            fail_severity=args.fail_severity,
        )
        service = ValidationService(settings, quiet=args.quiet)
    except (ConfigurationError, ValueError) as e:
        formatter.print_error(str(e))
        return Verdict.CONFIGURATION_ERROR.exit_code

    outcome = service.validate(args.targets[0], args.as_format)
    formatter.print_outcome(outcome, service.get_error_summary(outcome))

    if args.report:
        try:
            path = ReportService().write(outcome, args.report)
        except OSError as e:
            formatter.print_warning(f"Could not write report to '{args.report}': {e}")
        else:
            if not args.quiet:
                formatter.print_info(f"Report saved to: {path}")

    return outcome.exit_code


if __name__ == "__main__":
    sys.exit(main())
