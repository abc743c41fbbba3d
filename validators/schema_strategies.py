"""
Schema Validation Strategies
============================

One strategy per document format, selected through SCHEMA_STRATEGIES.
Every strategy returns a ValidationResult and re-raises low-level I/O
failures as ProcessingError. Adding a format means adding a Format member,
a strategy class and one table entry.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Type

from core.exceptions import ConfigurationError, ProcessingError, UnsupportedFormatError
from core.formats import Format
from core.results import ValidationResult, document_uri
from core.settings import ValidatorSettings
from core.yaml_normalizer import YamlNormalizer
from .json_schema_validator import JsonSchemaValidator
from .xml_schema_validator import XmlSchemaValidator

logger = logging.getLogger(__name__)


class SchemaValidationStrategy(ABC):
    """Format-specific schema validation."""

    def __init__(self, settings: ValidatorSettings):
        self.settings = settings

    @abstractmethod
    def validate(self, target: Path) -> ValidationResult:
        """Validate target against the schema for this format."""


class XmlSchemaStrategy(SchemaValidationStrategy):
    """Hands the target directly to the XSD validator."""

    def validate(self, target: Path) -> ValidationResult:
        validator = XmlSchemaValidator(
            self.settings.xsd_files, fail_threshold=self.settings.fail_severity
        )
        return validator.validate(target)


class _JsonSchemaStrategyBase(SchemaValidationStrategy):
    def _load_validator(self) -> JsonSchemaValidator:
        """Open the JSON Schema as a byte stream and build a validator from it."""
        schema_file = self.settings.json_schema_file
        if schema_file is None:
            raise ConfigurationError("No JSON schema configured for JSON/YAML validation.")
        try:
            with open(schema_file, "rb") as stream:
                validator = JsonSchemaValidator(stream, fail_threshold=self.settings.fail_severity)
        except OSError as e:
            raise ProcessingError(f"Unable to read JSON schema '{schema_file}': {e}") from e
        return validator


class JsonSchemaStrategy(_JsonSchemaStrategyBase):
    """Validates the target file as JSON text."""

    def validate(self, target: Path) -> ValidationResult:
        return self._load_validator().validate(target)


class YamlSchemaStrategy(_JsonSchemaStrategyBase):
    """Normalizes YAML to a JSON value tree and reuses the JSON validator."""

    def __init__(self, settings: ValidatorSettings, normalizer: YamlNormalizer = None):
        super().__init__(settings)
        self.normalizer = normalizer or YamlNormalizer()

    def validate(self, target: Path) -> ValidationResult:
        value, source_map = self.normalizer.normalize(target)
        uri = document_uri(target)
        return self._load_validator().validate_instance(value, uri, source_map=source_map)


SCHEMA_STRATEGIES: Dict[Format, Type[SchemaValidationStrategy]] = {
    Format.XML: XmlSchemaStrategy,
    Format.JSON: JsonSchemaStrategy,
    Format.YAML: YamlSchemaStrategy,
}


def strategy_for(document_format, settings: ValidatorSettings, table=None) -> SchemaValidationStrategy:
    """
    Build the strategy registered for document_format.

    Raises:
        UnsupportedFormatError: no strategy is registered for the format
    """
    table = SCHEMA_STRATEGIES if table is None else table
    strategy_cls = table.get(document_format)
    if strategy_cls is None:
        name = getattr(document_format, "name", str(document_format))
        raise UnsupportedFormatError(f"Unsupported format: {name}")
    logger.debug("Using %s for %s", strategy_cls.__name__, document_format)
    return strategy_cls(settings)
