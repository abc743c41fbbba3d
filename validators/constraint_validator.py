"""
Constraint Validator
====================

Semantic constraint checks with ISO Schematron (lxml.isoschematron).

The same rule set applies to every serialization format. XML documents are
checked as parsed; JSON and YAML value trees are first projected into an
element tree:

- object keys become child elements
- array items become repeated elements named after their key
- scalars become element text
- a single-key top-level object becomes the root element, anything else is
  wrapped in a <document> root
"""

import logging
import re
from pathlib import Path
from typing import Any, List, Optional

from lxml import etree
from lxml.isoschematron import Schematron

from core.exceptions import ProcessingError
from core.format_detector import FormatDetector
from core.formats import Format
from core.results import Finding, Severity, SourceLocation, ValidationResult, document_uri
from core.settings import CONSTRAINT_ROOT_ELEMENT
from core.yaml_normalizer import YamlNormalizer
from .json_schema_validator import load_json_document
from .xml_schema_validator import parse_xml

logger = logging.getLogger(__name__)

SVRL_NS = {"svrl": "http://purl.oclc.org/dsdl/svrl"}

ROLE_SEVERITIES = {
    "fatal": Severity.CRITICAL,
    "critical": Severity.CRITICAL,
    "error": Severity.ERROR,
    "warning": Severity.WARNING,
    "warn": Severity.WARNING,
    "info": Severity.INFO,
    "information": Severity.INFO,
}

_INVALID_NAME_CHARS = re.compile(r"[^A-Za-z0-9_.\-]")


def _element_name(key: str) -> str:
    name = _INVALID_NAME_CHARS.sub("_", str(key))
    if not name or not (name[0].isalpha() or name[0] == "_") or name.lower().startswith("xml"):
        name = "_" + name
    return name


def _scalar_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    if value is True:
        return "true"
    if value is False:
        return "false"
    return str(value)


def _fill(element: etree._Element, value: Any) -> None:
    if isinstance(value, dict):
        for key, child in value.items():
            name = _element_name(key)
            items = child if isinstance(child, list) else [child]
            for item in items:
                sub = etree.SubElement(element, name)
                if name != key:
                    sub.set("key", str(key))
                _fill(sub, item)
    elif isinstance(value, list):
        for item in value:
            _fill(etree.SubElement(element, "item"), item)
    else:
        element.text = _scalar_text(value)


def project_value_tree(value: Any, root_name: str = CONSTRAINT_ROOT_ELEMENT) -> etree._ElementTree:
    """Project a JSON value tree into an lxml element tree."""
    if isinstance(value, dict) and len(value) == 1:
        key, child = next(iter(value.items()))
        if not isinstance(child, list):
            root = etree.Element(_element_name(key))
            _fill(root, child)
            return etree.ElementTree(root)

    root = etree.Element(root_name)
    _fill(root, value)
    return etree.ElementTree(root)


class ConstraintValidator:
    """Runs Schematron constraint rules against a document of any format."""

    def __init__(
        self,
        rules_file: Optional[Path] = None,
        fail_threshold: Severity = Severity.ERROR,
        detector: Optional[FormatDetector] = None,
    ):
        """
        Args:
            rules_file: ISO Schematron rules; None disables constraint checks
            fail_threshold: Severity at which a result stops passing
            detector: Used when validate() is called without a format
        """
        self.rules_file = Path(rules_file) if rules_file else None
        self.fail_threshold = fail_threshold
        self.detector = detector or FormatDetector()
        self._schematron: Optional[Schematron] = None

    def _load_schematron(self) -> Schematron:
        if self._schematron is not None:
            return self._schematron
        try:
            with open(self.rules_file, "rb") as stream:
                rules_doc = etree.parse(stream)
            self._schematron = Schematron(rules_doc, store_report=True)
        except OSError as e:
            raise ProcessingError(
                f"Unable to read constraint rules '{self.rules_file}': {e}"
            ) from e
        except etree.LxmlError as e:
            raise ProcessingError(
                f"Invalid constraint rules '{self.rules_file}': {e}"
            ) from e
        return self._schematron

    def load_document(self, target: Path, document_format: Format) -> etree._ElementTree:
        """
        Load target into the element tree the rules run against.

        Raises:
            ProcessingError: document could not be read, parsed or projected
        """
        if document_format is Format.XML:
            return parse_xml(target)

        if document_format is Format.JSON:
            value = load_json_document(target)
        elif document_format is Format.YAML:
            value, _ = YamlNormalizer().normalize(target)
        else:
            raise ProcessingError(f"Unsupported format: {document_format}")

        try:
            return project_value_tree(value)
        except ValueError as e:
            # lxml rejects control characters and NULs in text and attributes
            raise ProcessingError(
                f"Unable to apply constraint rules to '{target}': {e}"
            ) from e

    def validate(self, target: Path, document_format: Optional[Format] = None) -> ValidationResult:
        """
        Check target against the constraint rules.

        Args:
            target: Path to the document
            document_format: Format of target; detected when omitted

        Returns:
            ValidationResult with one finding per fired rule

        Raises:
            ProcessingError: rules or document could not be loaded
        """
        target = Path(target)
        result = ValidationResult(fail_threshold=self.fail_threshold)
        if self.rules_file is None:
            result.add(
                Finding(
                    Severity.INFO,
                    "No constraint rules configured; constraint validation skipped.",
                    SourceLocation(uri=document_uri(target)),
                    source="schematron",
                )
            )
            return result

        schematron = self._load_schematron()
        if document_format is None:
            document_format = self.detector.detect(target)
        tree = self.load_document(target, document_format)

        schematron.validate(tree)
        result.extend(self._collect_findings(schematron.validation_report, tree, target))
        logger.debug("Constraint validation of '%s' produced %d finding(s)", target, len(result))
        return result

    def _collect_findings(self, report, tree: etree._ElementTree, target: Path) -> List[Finding]:
        findings: List[Finding] = []
        if report is None:
            return findings

        uri = document_uri(target)
        fired = report.xpath("//svrl:failed-assert | //svrl:successful-report", namespaces=SVRL_NS)
        for entry in fired:
            role = (entry.get("role") or entry.get("flag") or "").strip().lower()
            severity = ROLE_SEVERITIES.get(role, Severity.ERROR)

            text_el = entry.find("svrl:text", namespaces=SVRL_NS)
            message = " ".join("".join(text_el.itertext()).split()) if text_el is not None else ""
            if not message:
                message = f"Assertion failed (test: {entry.get('test', '')})"

            findings.append(
                Finding(severity, message, self._locate(tree, entry.get("location", ""), uri), source="schematron")
            )
        return findings

    @staticmethod
    def _locate(tree: etree._ElementTree, location: str, uri: str) -> SourceLocation:
        """Resolve an SVRL location to a line number where the tree has one."""
        found = SourceLocation(uri=uri, path=location)
        if not location:
            return found
        try:
            nodes = tree.xpath(location)
        except etree.XPathError:
            return found
        if isinstance(nodes, list) and nodes and isinstance(nodes[0], etree._Element):
            node = nodes[0]
            found.path = tree.getpath(node)
            found.line = node.sourceline
        return found
