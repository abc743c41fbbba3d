"""
Document Formats
================

The closed set of serialization formats and the detect-or-use-hint decision.
"""

from enum import Enum
from pathlib import Path
from typing import Optional

from .exceptions import InvalidFormatArgumentError


def join_with_oxford_comma(items, conjunction: str = "and") -> str:
    """Join items as 'a, b, and c'."""
    items = [str(i) for i in items]
    if len(items) <= 1:
        return "".join(items)
    if len(items) == 2:
        return f"{items[0]} {conjunction} {items[1]}"
    return ", ".join(items[:-1]) + f", {conjunction} {items[-1]}"


class Format(Enum):
    """Serialization format of a document."""

    XML = "xml"
    JSON = "json"
    YAML = "yaml"

    @classmethod
    def names(cls) -> str:
        return join_with_oxford_comma(f.value for f in cls)

    @classmethod
    def lookup(cls, text: str) -> "Format":
        """
        Return the format named by text, case-insensitively.

        Raises:
            InvalidFormatArgumentError: text does not name a known format
        """
        if text is not None:
            try:
                return cls[text.strip().upper()]
            except KeyError:
                pass
        raise InvalidFormatArgumentError(
            f"Invalid '--as' argument. The format must be one of: {cls.names()}"
        )


def resolve_format(hint: Optional[str], target: Path, detector) -> Format:
    """
    Decide the format of a run.

    An explicit hint always wins and the detector is not consulted. Without a
    hint the detector decides.

    Args:
        hint: Format name supplied by the caller, or None
        target: Document path, handed to the detector
        detector: Object with a detect(path) -> Format method

    Returns:
        The resolved Format

    Raises:
        ConfigurationError: invalid hint, or the detector could not decide
    """
    if hint is not None:
        return Format.lookup(hint)
    return detector.detect(target)
