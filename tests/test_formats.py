"""Tests for format lookup, hint resolution and content-based detection."""

import codecs
from pathlib import Path

import pytest

from core.exceptions import (
    ConfigurationError,
    InvalidFormatArgumentError,
    UnrecognizableFormatError,
)
from core.format_detector import FormatDetector
from core.formats import Format, join_with_oxford_comma, resolve_format


class FakeDetector:
    def __init__(self, result=Format.JSON, error=None):
        self.result = result
        self.error = error
        self.calls = []

    def detect(self, target):
        self.calls.append(target)
        if self.error is not None:
            raise self.error
        return self.result


class TestFormatLookup:
    @pytest.mark.parametrize("text", ["xml", "XML", "Xml", " yaml "])
    def test_case_insensitive(self, text: str) -> None:
        assert Format.lookup(text).value == text.strip().lower()

    @pytest.mark.parametrize("text", ["toml", "", "jsonl", "xmlx"])
    def test_invalid_names_fail(self, text: str) -> None:
        with pytest.raises(InvalidFormatArgumentError) as exc:
            Format.lookup(text)
        assert "xml, json, and yaml" in str(exc.value)

    def test_invalid_hint_is_configuration_error(self) -> None:
        with pytest.raises(ConfigurationError):
            Format.lookup("csv")

    def test_oxford_comma(self) -> None:
        assert join_with_oxford_comma(["a"]) == "a"
        assert join_with_oxford_comma(["a", "b"]) == "a and b"
        assert join_with_oxford_comma(["a", "b", "c"], "or") == "a, b, or c"


class TestResolveFormat:
    def test_hint_overrides_detection(self) -> None:
        detector = FakeDetector(result=Format.XML)
        assert resolve_format("yaml", Path("x"), detector) is Format.YAML
        assert detector.calls == []

    def test_detection_without_hint(self) -> None:
        detector = FakeDetector(result=Format.XML)
        assert resolve_format(None, Path("doc"), detector) is Format.XML
        assert detector.calls == [Path("doc")]

    def test_invalid_hint_never_consults_detector(self) -> None:
        detector = FakeDetector()
        with pytest.raises(InvalidFormatArgumentError):
            resolve_format("ini", Path("x"), detector)
        assert detector.calls == []

    def test_detector_failure_propagates(self) -> None:
        detector = FakeDetector(error=UnrecognizableFormatError("nope"))
        with pytest.raises(UnrecognizableFormatError):
            resolve_format(None, Path("x"), detector)


class TestDetectText:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("<?xml version='1.0'?><a/>", Format.XML),
            ("\n\n   <root/>", Format.XML),
            ("<!-- comment --><root/>", Format.XML),
            ('{"a": 1}', Format.JSON),
            ("  [1, 2, 3]", Format.JSON),
            ("%YAML 1.2\n---\na: 1", Format.YAML),
            ("---\na: 1\n", Format.YAML),
            ("# header comment\nname: value\n", Format.YAML),
            ("- one\n- two\n", Format.YAML),
            ("'quoted key': 1\n", Format.YAML),
        ],
    )
    def test_detects(self, text: str, expected: Format) -> None:
        assert FormatDetector.detect_text(text) is expected

    @pytest.mark.parametrize("text", ["", "   \n", "just some words", "http://example.com"])
    def test_unrecognizable(self, text: str) -> None:
        assert FormatDetector.detect_text(text) is None


class TestFormatDetector:
    def test_content_wins_over_extension(self, write_file) -> None:
        path = write_file("misnamed.json", "<catalog><title>x</title></catalog>")
        assert FormatDetector().detect(path) is Format.XML

    def test_utf8_bom(self, tmp_path: Path) -> None:
        path = tmp_path / "bom.json"
        path.write_bytes(codecs.BOM_UTF8 + b'{"a": 1}')
        assert FormatDetector().detect(path) is Format.JSON

    def test_utf16_bom(self, tmp_path: Path) -> None:
        path = tmp_path / "wide.xml"
        path.write_bytes(codecs.BOM_UTF16_LE + "<a/>".encode("utf-16-le"))
        assert FormatDetector().detect(path) is Format.XML

    def test_unrecognizable_names_options(self, write_file) -> None:
        path = write_file("notes.txt", "plain text here")
        with pytest.raises(UnrecognizableFormatError) as exc:
            FormatDetector().detect(path)
        assert "Use '--as' to specify the format" in str(exc.value)

    def test_missing_file(self, tmp_path: Path) -> None:
        missing = tmp_path / "missing.xml"
        with pytest.raises(ConfigurationError) as exc:
            FormatDetector().detect(missing)
        assert str(missing) in str(exc.value)

    def test_only_head_is_read(self, write_file) -> None:
        path = write_file("long.yaml", "key: value\n" + "x" * 10000)
        assert FormatDetector(sniff_size=16).detect(path) is Format.YAML

    def test_sniff_size_must_be_positive(self) -> None:
        with pytest.raises(ValueError):
            FormatDetector(sniff_size=0)
