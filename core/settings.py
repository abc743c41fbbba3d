import os
from pathlib import Path
from typing import List, Optional

from .exceptions import ConfigurationError
from .results import Severity

# ==============================================================================
# PROJECT PATHS
# ==============================================================================
BASE_DIR = Path(__file__).resolve().parent.parent

# Directories
SCHEMAS_DIR = BASE_DIR / "schemas"

# Default schema and rule files
XSD_SCHEMA_FILES = [SCHEMAS_DIR / "document.xsd"]
JSON_SCHEMA_FILE = SCHEMAS_DIR / "document.schema.json"
SCHEMATRON_RULES_FILE = SCHEMAS_DIR / "constraints.sch"

# ==============================================================================
# ENVIRONMENT OVERRIDES
# ==============================================================================
ENV_XSD = "DOCVALIDATE_XSD"  # os.pathsep separated list
ENV_JSON_SCHEMA = "DOCVALIDATE_JSON_SCHEMA"
ENV_SCHEMATRON = "DOCVALIDATE_SCHEMATRON"
ENV_SNIFF_SIZE = "DOCVALIDATE_SNIFF_SIZE"

# ==============================================================================
# DETECTION AND VALIDATION
# ==============================================================================
# Bytes read from the head of a target when sniffing its format
SNIFF_SIZE = 8192

DEFAULT_FAIL_SEVERITY = Severity.ERROR

# Root element used when a JSON/YAML tree is projected for constraint rules
CONSTRAINT_ROOT_ELEMENT = "document"

# ==============================================================================
# LOGGING
# ==============================================================================
LOG_FORMAT = "%(levelname)s - %(message)s"
DEBUG_LOG_FORMAT = "%(name)s - %(levelname)s - %(message)s"


class ValidatorSettings:
    """
    Resolved configuration for one validation run.

    Values come from module defaults, then environment variables, then
    explicit arguments (highest precedence).
    """

    def __init__(
        self,
        xsd_files: Optional[List[Path]] = None,
        json_schema_file: Optional[Path] = None,
        schematron_file: Optional[Path] = None,
        sniff_size: int = SNIFF_SIZE,
        fail_severity: Severity = DEFAULT_FAIL_SEVERITY,
    ):
        self.xsd_files = [Path(p) for p in (xsd_files or [])]
        self.json_schema_file = Path(json_schema_file) if json_schema_file else None
        self.schematron_file = Path(schematron_file) if schematron_file else None
        self.sniff_size = sniff_size
        self.fail_severity = fail_severity

    @classmethod
    def from_environment(cls, environ=None, **overrides) -> "ValidatorSettings":
        """
        Build settings from defaults and environment, applying overrides.

        Args:
            environ: Mapping to read variables from (default: os.environ)
            **overrides: Explicit values; None means "not given"

        Returns:
            ValidatorSettings instance

        Raises:
            ConfigurationError: the resolved sniff size is below 1
            ValueError: the sniff size variable is not an integer
        """
        environ = os.environ if environ is None else environ

        # Bundled defaults only apply when they are actually present
        xsd_files = [p for p in XSD_SCHEMA_FILES if p.exists()]
        if environ.get(ENV_XSD):
            xsd_files = [Path(p) for p in environ[ENV_XSD].split(os.pathsep) if p]

        json_schema_file = JSON_SCHEMA_FILE if JSON_SCHEMA_FILE.exists() else None
        if environ.get(ENV_JSON_SCHEMA):
            json_schema_file = Path(environ[ENV_JSON_SCHEMA])

        schematron_file = SCHEMATRON_RULES_FILE if SCHEMATRON_RULES_FILE.exists() else None
        if environ.get(ENV_SCHEMATRON):
            schematron_file = Path(environ[ENV_SCHEMATRON])

        sniff_size = SNIFF_SIZE
        if environ.get(ENV_SNIFF_SIZE):
            try:
                sniff_size = int(environ[ENV_SNIFF_SIZE])
            except ValueError:
                raise ValueError(
                    f"{ENV_SNIFF_SIZE} must be an integer, got '{environ[ENV_SNIFF_SIZE]}'"
                )

        if overrides.get("xsd_files"):
            xsd_files = list(overrides["xsd_files"])
        if overrides.get("json_schema_file"):
            json_schema_file = overrides["json_schema_file"]
        if overrides.get("schematron_file"):
            schematron_file = overrides["schematron_file"]
        if overrides.get("sniff_size"):
            sniff_size = overrides["sniff_size"]
        if sniff_size < 1:
            raise ConfigurationError(f"The sniff size must be at least 1, got {sniff_size}.")

        return cls(
            xsd_files=xsd_files,
            json_schema_file=json_schema_file,
            schematron_file=schematron_file,
            sniff_size=sniff_size,
            fail_severity=overrides.get("fail_severity") or DEFAULT_FAIL_SEVERITY,
        )

    def __repr__(self):
        return (
            f"ValidatorSettings(xsd_files={self.xsd_files}, "
            f"json_schema_file={self.json_schema_file}, "
            f"schematron_file={self.schematron_file})"
        )
