"""
Format Detector
===============

Content-based format detection. The head of the target is sniffed; the file
extension is never consulted, so an XML document saved as `data.json` is
still detected as XML.
"""

import codecs
import logging
import re
from pathlib import Path

from .exceptions import ConfigurationError, UnrecognizableFormatError
from .formats import Format
from .settings import SNIFF_SIZE

logger = logging.getLogger(__name__)

_YAML_MAPPING_LINE = re.compile(r"""^(?:"[^"]*"|'[^']*'|[^\s#:\-?][^:]*|\?)\s*:(?:\s|$)""")
_YAML_SEQUENCE_LINE = re.compile(r"^-(?:\s|$)")

_BOMS = (
    (codecs.BOM_UTF8, "utf-8"),
    (codecs.BOM_UTF16_LE, "utf-16-le"),
    (codecs.BOM_UTF16_BE, "utf-16-be"),
)


class FormatDetector:
    """Determines the serialization format of a document from its content."""

    def __init__(self, sniff_size: int = SNIFF_SIZE):
        if sniff_size < 1:
            raise ValueError("sniff_size must be positive")
        self.sniff_size = sniff_size

    def detect(self, target: Path) -> Format:
        """
        Sniff the head of target and return its format.

        Args:
            target: Path to the document

        Returns:
            Detected Format

        Raises:
            ConfigurationError: target missing or unreadable
            UnrecognizableFormatError: content matches no known format
        """
        target = Path(target)
        try:
            with open(target, "rb") as stream:
                head = stream.read(self.sniff_size)
        except FileNotFoundError:
            raise ConfigurationError(f"The provided target file '{target}' does not exist.")
        except OSError as e:
            raise ConfigurationError(
                f"Unable to read the provided target file '{target}': {e}"
            ) from e

        detected = self.detect_text(self._decode(head))
        if detected is None:
            raise UnrecognizableFormatError(
                "Target file has unrecognizable format. Use '--as' to specify the "
                f"format. The format must be one of: {Format.names()}"
            )
        logger.debug("Detected format %s for '%s'", detected.name, target)
        return detected

    @staticmethod
    def _decode(head: bytes) -> str:
        for bom, encoding in _BOMS:
            if head.startswith(bom):
                return head[len(bom):].decode(encoding, errors="replace")
        return head.decode("utf-8", errors="replace")

    @staticmethod
    def detect_text(text: str):
        """Return the Format matching the start of text, or None."""
        stripped = text.lstrip()
        if not stripped:
            return None

        first = stripped[0]
        if first == "<":
            return Format.XML
        if first in "{[":
            return Format.JSON

        for line in stripped.splitlines():
            line = line.rstrip()
            if not line or line.lstrip().startswith("#"):
                continue
            if line.startswith("%YAML") or line.startswith("---"):
                return Format.YAML
            if _YAML_SEQUENCE_LINE.match(line) or _YAML_MAPPING_LINE.match(line):
                return Format.YAML
            # Only the first significant line decides
            return None
        return None
