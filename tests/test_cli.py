"""End-to-end tests for the command-line entry point."""

import logging

import pytest

import Validate_CLI
from cli import CommandParser, OutputFormatter
from conftest import MISSING_TITLE_XML, NEGATIVE_PRICE_JSON, VALID_JSON, VALID_XML, VALID_YAML
from core.exceptions import ConfigurationError
from core.results import PipelineOutcome, Severity, Verdict
from core.settings import ENV_JSON_SCHEMA, ENV_SCHEMATRON, ENV_SNIFF_SIZE, ENV_XSD


@pytest.fixture(autouse=True)
def restore_logging(monkeypatch):
    """main() reconfigures the root logger; put it back afterwards."""
    for name in (ENV_XSD, ENV_JSON_SCHEMA, ENV_SCHEMATRON, ENV_SNIFF_SIZE):
        monkeypatch.delenv(name, raising=False)
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def schema_args(schema_files):
    return [
        "--xsd", str(schema_files["xsd"]),
        "--json-schema", str(schema_files["json_schema"]),
        "--schematron", str(schema_files["schematron"]),
    ]


class TestCommandParser:
    def test_defaults(self) -> None:
        parser = CommandParser()
        args = parser.parse_args(["doc.xml"])
        parser.validate_args(args)
        assert args.targets == ["doc.xml"]
        assert args.as_format is None
        assert args.fail_severity is Severity.ERROR
        assert args.quiet is False

    def test_repeatable_xsd(self) -> None:
        args = CommandParser().parse_args(["--xsd", "a.xsd", "--xsd", "b.xsd", "doc.xml"])
        assert [p.name for p in args.xsd_files] == ["a.xsd", "b.xsd"]

    @pytest.mark.parametrize("argv", [[], ["a.xml", "b.xml"]])
    def test_exactly_one_target(self, argv) -> None:
        parser = CommandParser()
        args = parser.parse_args(argv)
        with pytest.raises(ConfigurationError, match="must be provided"):
            parser.validate_args(args)

    def test_unknown_option(self) -> None:
        with pytest.raises(ConfigurationError):
            CommandParser().parse_args(["--frobnicate", "doc.xml"])

    def test_bad_fail_on(self) -> None:
        parser = CommandParser()
        args = parser.parse_args(["--fail-on", "loud", "doc.xml"])
        with pytest.raises(ConfigurationError, match="--fail-on"):
            parser.validate_args(args)

    def test_bad_sniff_size(self) -> None:
        parser = CommandParser()
        args = parser.parse_args(["--sniff-size", "0", "doc.xml"])
        with pytest.raises(ConfigurationError, match="sniff-size"):
            parser.validate_args(args)


class TestOutputFormatter:
    def test_valid_prints_nothing(self, capsys) -> None:
        OutputFormatter().print_outcome(PipelineOutcome("a.xml", Verdict.VALID), "No errors")
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == ""

    def test_error_goes_to_stderr(self, capsys) -> None:
        OutputFormatter().print_outcome(
            PipelineOutcome("a.xml", Verdict.PROCESSING_ERROR, message="boom"), "boom"
        )
        assert capsys.readouterr().err == "ERROR: boom\n"

    def test_failure_line_uses_summary(self, capsys) -> None:
        OutputFormatter().print_outcome(
            PipelineOutcome("a.xml", Verdict.SCHEMA_INVALID), "Schema: 2 error(s)"
        )
        assert capsys.readouterr().err == "\u2717 a.xml: Schema: 2 error(s)\n"


class TestMain:
    @pytest.mark.parametrize(
        "name, content",
        [("a.xml", VALID_XML), ("a.json", VALID_JSON), ("a.yaml", VALID_YAML)],
    )
    def test_valid(self, schema_args, write_file, capsys, name, content) -> None:
        target = write_file(name, content)
        assert Validate_CLI.main(schema_args + [str(target)]) == 0
        assert "is valid." in capsys.readouterr().out

    def test_quiet(self, schema_args, write_file, capsys) -> None:
        target = write_file("a.xml", VALID_XML)
        assert Validate_CLI.main(schema_args + ["-q", str(target)]) == 0
        assert "is valid." not in capsys.readouterr().out

    def test_schema_invalid(self, schema_args, write_file, capsys) -> None:
        target = write_file("a.xml", MISSING_TITLE_XML)
        assert Validate_CLI.main(schema_args + [str(target)]) == 1
        assert f"{target}: Schema: " in capsys.readouterr().err

    def test_constraint_invalid(self, schema_args, write_file, capsys) -> None:
        target = write_file("a.json", NEGATIVE_PRICE_JSON)
        assert Validate_CLI.main(schema_args + [str(target)]) == 2
        assert f"{target}: Constraint: 1 error(s)" in capsys.readouterr().err

    def test_processing_error(self, schema_args, write_file) -> None:
        target = write_file("a.yaml", VALID_YAML)
        assert Validate_CLI.main(schema_args + ["--as", "json", str(target)]) == 3

    def test_no_target(self, capsys) -> None:
        assert Validate_CLI.main([]) == 4
        assert "The source to validate must be provided." in capsys.readouterr().err

    def test_unknown_option(self, capsys) -> None:
        assert Validate_CLI.main(["--frobnicate", "a.xml"]) == 4
        assert "ERROR:" in capsys.readouterr().err

    def test_invalid_format_hint(self, schema_args, write_file, capsys) -> None:
        target = write_file("a.xml", VALID_XML)
        assert Validate_CLI.main(schema_args + ["--as", "toml", str(target)]) == 4
        assert "xml, json, and yaml" in capsys.readouterr().err

    def test_missing_target(self, schema_args, tmp_path, capsys) -> None:
        missing = tmp_path / "gone.xml"
        assert Validate_CLI.main(schema_args + [str(missing)]) == 4
        assert str(missing) in capsys.readouterr().err

    def test_bad_log_level(self, write_file) -> None:
        target = write_file("a.xml", VALID_XML)
        assert Validate_CLI.main(["--log-level", "chatty", str(target)]) == 4

    def test_report(self, schema_args, write_file, tmp_path, capsys) -> None:
        target = write_file("a.json", NEGATIVE_PRICE_JSON)
        report = tmp_path / "out" / "report.md"
        assert Validate_CLI.main(schema_args + ["--report", str(report), str(target)]) == 2
        text = report.read_text(encoding="utf-8")
        assert "CONSTRAINT INVALID" in text
        assert "Entry price must not be negative." in text
        assert f"Report saved to: {report}" in capsys.readouterr().out

    def test_environment_configuration(self, schema_files, write_file, monkeypatch) -> None:
        monkeypatch.setenv(ENV_JSON_SCHEMA, str(schema_files["json_schema"]))
        monkeypatch.setenv(ENV_SCHEMATRON, str(schema_files["schematron"]))
        target = write_file("a.json", NEGATIVE_PRICE_JSON)
        assert Validate_CLI.main([str(target)]) == 2

    @pytest.mark.parametrize("value", ["0", "-5"])
    def test_non_positive_sniff_size_from_environment(
        self, schema_args, write_file, monkeypatch, capsys, value
    ) -> None:
        monkeypatch.setenv(ENV_SNIFF_SIZE, value)
        target = write_file("a.xml", VALID_XML)
        assert Validate_CLI.main(schema_args + [str(target)]) == 4
        assert "sniff size must be at least 1" in capsys.readouterr().err
