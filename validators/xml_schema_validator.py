"""
XML Schema Validator
====================

XSD validation with xmlschema (python-xmlschema). Documents are parsed with
lxml so every finding carries the source line of the offending element.
"""

import logging
from pathlib import Path
from typing import List, Optional, Sequence

import xmlschema
from lxml import etree

from core.exceptions import ConfigurationError, DocumentParseError, ProcessingError
from core.results import Finding, Severity, SourceLocation, ValidationResult, document_uri

logger = logging.getLogger(__name__)


def parse_xml(target: Path) -> etree._ElementTree:
    """
    Parse an XML document with lxml, keeping line numbers.

    Raises:
        DocumentParseError: document is not well-formed
        ProcessingError: document could not be read
    """
    parser = etree.XMLParser(resolve_entities=False, no_network=True)
    try:
        with open(target, "rb") as stream:
            return etree.parse(stream, parser)
    except etree.XMLSyntaxError as e:
        location = SourceLocation(
            uri=document_uri(target),
            line=getattr(e, "lineno", None),
            column=getattr(e, "offset", None),
        )
        raise DocumentParseError(f"XML parse error in '{target}': {e.msg}", location) from e
    except OSError as e:
        raise ProcessingError(f"Unable to read XML document '{target}': {e}") from e


class XmlSchemaValidator:
    """Validates XML documents against one or more XSD sources."""

    def __init__(
        self,
        schema_sources: Sequence[Path],
        fail_threshold: Severity = Severity.ERROR,
    ):
        """
        Args:
            schema_sources: XSD files; the first is the main schema, the
                others are added as further schema components
            fail_threshold: Severity at which a result stops passing
        """
        if not schema_sources:
            raise ConfigurationError("No XML schema configured for XML validation.")
        self.schema_sources: List[Path] = [Path(s) for s in schema_sources]
        self.fail_threshold = fail_threshold
        self._schema: Optional[xmlschema.XMLSchema] = None

    def _load_schema(self) -> xmlschema.XMLSchema:
        if self._schema is not None:
            return self._schema

        for source in self.schema_sources:
            if not source.is_file():
                raise ProcessingError(f"Unable to read XML schema '{source}'.")

        main, *extra = self.schema_sources
        logger.debug("Loading XML schema from %s", ", ".join(map(str, self.schema_sources)))
        try:
            if extra:
                schema = xmlschema.XMLSchema(str(main), build=False)
                for source in extra:
                    schema.add_schema(str(source))
                schema.build()
            else:
                schema = xmlschema.XMLSchema(str(main))
        except OSError as e:
            raise ProcessingError(f"Unable to read XML schema '{main}': {e}") from e
        except (xmlschema.XMLSchemaException, SyntaxError, ValueError) as e:
            raise ProcessingError(f"Invalid XML schema '{main}': {e}") from e

        self._schema = schema
        return schema

    def validate(self, target: Path) -> ValidationResult:
        """
        Validate target against the configured schema.

        Args:
            target: Path to XML document

        Returns:
            ValidationResult with one finding per schema violation

        Raises:
            ProcessingError: schema or document could not be loaded
        """
        target = Path(target)
        schema = self._load_schema()
        tree = parse_xml(target)
        uri = document_uri(target)

        result = ValidationResult(fail_threshold=self.fail_threshold)
        for err in schema.iter_errors(tree):
            reason = getattr(err, "reason", None) or str(err)
            location = SourceLocation(
                uri=uri,
                line=getattr(err, "sourceline", None),
                path=getattr(err, "path", None) or "",
            )
            result.add(Finding(Severity.ERROR, reason, location, source="xsd"))

        logger.debug("XSD validation of '%s' produced %d finding(s)", target, len(result))
        return result
