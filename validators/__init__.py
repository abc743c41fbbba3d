"""
Validators Package
==================

This package contains the document validation logic:
- XSD schema validation (XML)
- JSON Schema validation (JSON, and YAML after normalization)
- Schematron constraint validation (all formats)

Modules:
- validation_pipeline.py: Main validation orchestrator
- schema_strategies.py: Per-format schema validation strategies
- xml_schema_validator.py: XSD validation implementation
- json_schema_validator.py: JSON Schema validation implementation
- constraint_validator.py: Schematron validation implementation
"""

from .constraint_validator import ConstraintValidator
from .json_schema_validator import JsonSchemaValidator
from .schema_strategies import SCHEMA_STRATEGIES, SchemaValidationStrategy, strategy_for
from .validation_pipeline import ValidationPipeline
from .xml_schema_validator import XmlSchemaValidator

__all__ = [
    'ConstraintValidator',
    'JsonSchemaValidator',
    'SCHEMA_STRATEGIES',
    'SchemaValidationStrategy',
    'ValidationPipeline',
    'XmlSchemaValidator',
    'strategy_for',
]
