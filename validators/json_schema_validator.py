"""
JSON Schema Validator
=====================

JSON Schema validation with the jsonschema library. Used directly for JSON
documents and, after normalization, for YAML documents.
"""

import json
import logging
from pathlib import Path
from typing import Any, BinaryIO, Dict, Optional

import jsonschema
from jsonschema.exceptions import SchemaError
from jsonschema.validators import validator_for

from core.exceptions import DocumentParseError, ProcessingError
from core.results import Finding, Severity, SourceLocation, ValidationResult, document_uri

logger = logging.getLogger(__name__)


def json_pointer(parts) -> str:
    """Render a jsonschema error path as a JSON pointer."""
    tokens = [str(p).replace("~", "~0").replace("/", "~1") for p in parts]
    return "/" + "/".join(tokens) if tokens else ""


def load_json_document(target: Path) -> Any:
    """
    Read and parse a JSON document.

    The file is read as bytes so json.loads can pick UTF-8, UTF-16 or
    UTF-32 and skip a leading BOM.

    Raises:
        DocumentParseError: target is not well-formed JSON
        ProcessingError: target could not be read or decoded
    """
    target = Path(target)
    try:
        with open(target, "rb") as stream:
            data = stream.read()
    except OSError as e:
        raise ProcessingError(f"Unable to read JSON document '{target}': {e}") from e

    try:
        return json.loads(data)
    except json.JSONDecodeError as e:
        location = SourceLocation(uri=document_uri(target), line=e.lineno, column=e.colno)
        raise DocumentParseError(f"JSON parse error in '{target}': {e.msg}", location) from e
    except UnicodeDecodeError as e:
        raise ProcessingError(f"Unable to decode JSON document '{target}': {e}") from e


def _error_order(error: jsonschema.ValidationError):
    return (list(map(str, error.absolute_path)), error.validator or "", error.message)


class JsonSchemaValidator:
    """Validates JSON value trees against a JSON Schema document."""

    def __init__(self, schema_stream: BinaryIO, fail_threshold: Severity = Severity.ERROR):
        """
        Load the schema from a byte stream.

        Args:
            schema_stream: Open binary stream holding the JSON Schema
            fail_threshold: Severity at which a result stops passing

        Raises:
            ProcessingError: stream is unreadable or the schema is not usable
        """
        self.fail_threshold = fail_threshold
        source = getattr(schema_stream, "name", "<schema>")
        try:
            self.schema = json.load(schema_stream)
        except OSError as e:
            raise ProcessingError(f"Unable to read JSON schema '{source}': {e}") from e
        except ValueError as e:
            raise ProcessingError(f"JSON schema '{source}' is not valid JSON: {e}") from e

        validator_cls = validator_for(self.schema)
        try:
            validator_cls.check_schema(self.schema)
        except SchemaError as e:
            raise ProcessingError(f"Invalid JSON schema '{source}': {e.message}") from e
        self._validator = validator_cls(self.schema)

    def validate(self, target: Path) -> ValidationResult:
        """
        Read a JSON document from target and validate it.

        Raises:
            DocumentParseError: target is not well-formed JSON
            ProcessingError: target could not be read
        """
        instance = load_json_document(target)
        return self.validate_instance(instance, document_uri(target))

    def validate_instance(
        self,
        instance: Any,
        uri: str,
        source_map: Optional[Dict[str, Dict[str, int]]] = None,
    ) -> ValidationResult:
        """
        Validate an in-memory value tree.

        Args:
            instance: JSON value tree
            uri: Logical identity of the document, used in findings
            source_map: Optional JSON pointer -> line/column map

        Returns:
            ValidationResult with one finding per violation
        """
        result = ValidationResult(fail_threshold=self.fail_threshold)
        errors = sorted(self._validator.iter_errors(instance), key=_error_order)
        for error in errors:
            pointer = json_pointer(error.absolute_path)
            location = SourceLocation(uri=uri, path=pointer or "/")
            if source_map and pointer in source_map:
                location.line = source_map[pointer].get("line")
                location.column = source_map[pointer].get("column")
            result.add(Finding(Severity.ERROR, error.message, location, source="json-schema"))

        logger.debug("JSON schema validation of '%s' produced %d finding(s)", uri, len(result))
        return result
