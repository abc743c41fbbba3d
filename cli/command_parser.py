"""
Command Parser
==============

Handles CLI argument parsing.
Follows SRP: Only handles command-line argument parsing.
"""

import argparse
from pathlib import Path
from typing import Any

from core.exceptions import ConfigurationError
from core.results import Severity


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that reports usage errors as ConfigurationError.

    argparse exits with status 2 on bad input, which would collide with the
    constraint-invalid exit code.
    """

    def error(self, message):
        raise ConfigurationError(f"{self.prog}: {message}")


class CommandParser:
    """
    Parser for command-line arguments.

    Follows SRP: Only handles argument parsing.
    """

    def __init__(self):
        """Initialize command parser."""
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """
        Create argument parser with all options.

        Returns:
            Configured ArgumentParser
        """
        parser = _ArgumentParser(
            prog="docvalidate",
            description="Validate an XML, JSON or YAML document against its schema and constraints",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Examples:
  # Detect the format from content
  docvalidate --xsd catalog.xsd --schematron rules.sch sample.xml

  # Validate YAML against a JSON Schema
  docvalidate --as yaml --json-schema catalog.schema.json data.yaml

  # Write a Markdown report
  docvalidate --json-schema catalog.schema.json data.json --report report.md

Exit codes:
  0 valid, 1 schema invalid, 2 constraint invalid,
  3 processing error, 4 configuration error
            """
        )

        parser.add_argument(
            "targets",
            nargs="*",
            metavar="TARGET",
            help="File to validate"
        )

        parser.add_argument(
            "--as",
            dest="as_format",
            metavar="FORMAT",
            help="Validate as format: xml, json, or yaml"
        )

        # Schema and rule sources
        parser.add_argument(
            "--xsd",
            dest="xsd_files",
            action="append",
            type=Path,
            metavar="PATH",
            help="XML schema source (repeatable; first is the main schema)"
        )

        parser.add_argument(
            "--json-schema",
            dest="json_schema_file",
            type=Path,
            metavar="PATH",
            help="JSON Schema used for JSON and YAML documents"
        )

        parser.add_argument(
            "--schematron",
            dest="schematron_file",
            type=Path,
            metavar="PATH",
            help="ISO Schematron constraint rules"
        )

        # Behaviour
        parser.add_argument(
            "--fail-on",
            default="error",
            metavar="SEVERITY",
            help="Lowest finding severity that fails a stage: info, warning, error, critical (default: error)"
        )

        parser.add_argument(
            "--sniff-size",
            type=int,
            metavar="BYTES",
            help="Bytes read when detecting the format (default: 8192)"
        )

        # Output
        parser.add_argument(
            "-q", "--quiet",
            action="store_true",
            help="Do not print a message when the document is valid"
        )

        parser.add_argument(
            "--report",
            metavar="FILE",
            help="Write a Markdown validation report to FILE"
        )

        parser.add_argument(
            "--log-level",
            default="info",
            help="Logging level (default: info)"
        )

        return parser

    def parse_args(self, args=None) -> Any:
        """
        Parse command-line arguments.

        Args:
            args: Arguments to parse (default: sys.argv)

        Returns:
            Parsed arguments namespace

        Raises:
            ConfigurationError: on unknown options or malformed values
        """
        return self.parser.parse_args(args)

    def validate_args(self, args: Any) -> None:
        """
        Validate parsed arguments and normalize derived values.

        Args:
            args: Parsed arguments namespace

        Raises:
            ConfigurationError: arguments cannot describe a run
        """
        if len(args.targets) != 1:
            raise ConfigurationError("The source to validate must be provided.")

        try:
            args.fail_severity = Severity.lookup(args.fail_on)
        except ValueError as e:
            raise ConfigurationError(f"Invalid '--fail-on' argument. {e}")

        if args.sniff_size is not None and args.sniff_size < 1:
            raise ConfigurationError("--sniff-size must be at least 1")
