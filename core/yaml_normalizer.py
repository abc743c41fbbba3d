"""
YAML Normalizer
===============

Parses YAML documents and converts them into JSON-equivalent value trees so
they can be checked by a JSON Schema validator.
"""

import base64
import datetime
import logging
import math
from pathlib import Path
from typing import Any, Dict, Optional, Set, Tuple

import yaml

from .exceptions import DocumentParseError, ProcessingError
from .results import SourceLocation, document_uri

logger = logging.getLogger(__name__)

# JSON pointer -> {"line": n, "column": n}, both 1-based
SourceMap = Dict[str, Dict[str, int]]


def _json_pointer_escape(token: str) -> str:
    # JSON Pointer escaping: "~" -> "~0", "/" -> "~1"
    return token.replace("~", "~0").replace("/", "~1")


def _json_key(key: Any) -> str:
    """Stringify a mapping key the way json.dumps would."""
    if isinstance(key, str):
        return key
    if key is True:
        return "true"
    if key is False:
        return "false"
    if key is None:
        return "null"
    return str(to_json_value(key))


class RecursiveAliasError(ValueError):
    """A YAML alias refers to one of its own ancestors."""

    def __init__(self, message: str, mark=None):
        super().__init__(message)
        self.mark = mark


def to_json_value(value: Any, _ancestors: Optional[Set[int]] = None) -> Any:
    """
    Convert a YAML value tree into a JSON-equivalent tree.

    Objects, arrays, strings, numbers, booleans and null pass through
    unchanged. YAML-only scalar types are mapped to the JSON representation
    a YAML-to-JSON conversion would produce.

    Raises:
        RecursiveAliasError: the tree contains itself
    """
    if isinstance(value, (dict, list, tuple)):
        ancestors = set() if _ancestors is None else _ancestors
        if id(value) in ancestors:
            raise RecursiveAliasError("recursive alias has no JSON equivalent")
        ancestors.add(id(value))
        try:
            if isinstance(value, dict):
                return {_json_key(k): to_json_value(v, ancestors) for k, v in value.items()}
            return [to_json_value(v, ancestors) for v in value]
        finally:
            ancestors.discard(id(value))
    if isinstance(value, (set, frozenset)):
        # !!set is a mapping with null values; keep member order stable
        return sorted((to_json_value(v) for v in value), key=str)
    if isinstance(value, (datetime.datetime, datetime.date)):
        return value.isoformat()
    if isinstance(value, bytes):
        return base64.b64encode(value).decode("ascii")
    if isinstance(value, float) and (math.isnan(value) or math.isinf(value)):
        # JSON has no NaN/Infinity literals
        return str(value)
    return value


def build_source_map(content) -> SourceMap:
    """
    Map JSON pointers of a YAML document to 1-based line/column.

    Raises:
        RecursiveAliasError: an alias points back at one of its ancestors
    """
    source_map: SourceMap = {}
    root = yaml.compose(content, Loader=yaml.SafeLoader)
    if root is None:
        return source_map

    def _record(path: str, node) -> None:
        mark = getattr(node, "start_mark", None)
        if mark is None:
            return
        # PyYAML uses 0-based line/column
        source_map[path] = {"line": int(mark.line) + 1, "column": int(mark.column) + 1}

    def _walk(node, path: str, ancestors: Set[int]) -> None:
        if id(node) in ancestors:
            raise RecursiveAliasError("recursive alias has no JSON equivalent", node.start_mark)
        _record(path, node)
        if isinstance(node, yaml.nodes.MappingNode):
            children = [
                (f"{path}/{_json_pointer_escape(str(key_node.value))}", value_node)
                for key_node, value_node in node.value
                if getattr(key_node, "value", None) is not None
            ]
        elif isinstance(node, yaml.nodes.SequenceNode):
            children = [(f"{path}/{idx}", item) for idx, item in enumerate(node.value)]
        else:
            return
        ancestors.add(id(node))
        for child_path, child in children:
            _walk(child, child_path, ancestors)
        ancestors.discard(id(node))

    _walk(root, "", set())
    return source_map


class YamlNormalizer:
    """Loads a YAML file into a JSON-equivalent value tree."""

    def parse(self, target: Path) -> Any:
        """Parse target into a generic YAML value tree."""
        value, _ = self._load(Path(target), with_source_map=False)
        return value

    def normalize(self, target: Path) -> Tuple[Any, SourceMap]:
        """
        Parse target and convert it to a JSON-equivalent tree.

        Args:
            target: Path to the YAML document

        Returns:
            Tuple of (JSON value tree, source map)

        Raises:
            DocumentParseError: YAML syntax error or recursive alias, with
                its source location
            ProcessingError: target could not be read
        """
        target = Path(target)
        value, source_map = self._load(target, with_source_map=True)
        try:
            return to_json_value(value), source_map
        except (RecursiveAliasError, RecursionError) as e:
            raise DocumentParseError(
                f"Failed to parse YAML document '{target}': {e}",
                SourceLocation(uri=document_uri(target)),
            ) from e

    def _load(self, target: Path, with_source_map: bool) -> Tuple[Any, Optional[SourceMap]]:
        # Bytes let PyYAML pick the encoding from a UTF-8/UTF-16 BOM
        try:
            with open(target, "rb") as stream:
                content = stream.read()
        except OSError as e:
            raise ProcessingError(f"Unable to read YAML document '{target}': {e}") from e

        logger.debug("Parsing YAML document '%s'", target)
        try:
            value = yaml.safe_load(content)
            source_map = build_source_map(content) if with_source_map else None
        except yaml.MarkedYAMLError as e:
            mark = e.problem_mark or e.context_mark
            problem = e.problem or e.context or "invalid YAML"
            raise DocumentParseError(
                f"Failed to parse YAML document '{target}': {problem}",
                self._location(target, mark),
            ) from e
        except RecursiveAliasError as e:
            raise DocumentParseError(
                f"Failed to parse YAML document '{target}': {e}",
                self._location(target, e.mark),
            ) from e
        except yaml.YAMLError as e:
            raise DocumentParseError(
                f"Failed to parse YAML document '{target}': {e}",
                SourceLocation(uri=document_uri(target)),
            ) from e
        return value, source_map

    @staticmethod
    def _location(target: Path, mark) -> SourceLocation:
        location = SourceLocation(uri=document_uri(target))
        if mark is not None:
            location.line = mark.line + 1
            location.column = mark.column + 1
        return location
