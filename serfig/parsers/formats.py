"""TOML, JSON and YAML decoders."""

import json
import tomllib
from pathlib import Path
from typing import Final

import yaml

from serfig.errors import SourceParseError
from serfig.parsers.base import Parser
from serfig.value import EMPTY_MAPPING, Value, from_python


def _decode_text(data: bytes, format_name: str) -> str:
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise SourceParseError(
            f"Invalid UTF-8 in {format_name} document: {e}",
            format_name=format_name,
        ) from e


def _convert(document: object, format_name: str) -> Value:
    # Keys that collide once stringified (1 and "1") are rejected by Mapping
    try:
        return from_python(document)
    except (TypeError, ValueError) as e:
        raise SourceParseError(str(e), format_name=format_name) from e


class TomlParser:
    """Decodes TOML documents with the standard library reader."""

    name = "toml"

    def decode(self, data: bytes) -> Value:
        text = _decode_text(data, self.name)
        try:
            document = tomllib.loads(text)
        except tomllib.TOMLDecodeError as e:
            raise SourceParseError(
                f"Invalid TOML: {e}",
                format_name=self.name,
                line=getattr(e, "lineno", None),
                column=getattr(e, "colno", None),
            ) from e
        return _convert(document, self.name)


class JsonParser:
    """Decodes JSON documents."""

    name = "json"

    def decode(self, data: bytes) -> Value:
        text = _decode_text(data, self.name)
        try:
            document = json.loads(text)
        except json.JSONDecodeError as e:
            raise SourceParseError(
                f"Invalid JSON: {e.msg}",
                format_name=self.name,
                line=e.lineno,
                column=e.colno,
            ) from e
        return _convert(document, self.name)


class YamlParser:
    """Decodes YAML documents with ``yaml.safe_load``.

    An empty document decodes as an empty mapping.
    """

    name = "yaml"

    def decode(self, data: bytes) -> Value:
        text = _decode_text(data, self.name)
        try:
            document = yaml.safe_load(text)
        except yaml.MarkedYAMLError as e:
            mark = e.problem_mark
            raise SourceParseError(
                f"Invalid YAML: {e.problem or e}",
                format_name=self.name,
                line=mark.line + 1 if mark is not None else None,
                column=mark.column + 1 if mark is not None else None,
            ) from e
        except yaml.YAMLError as e:
            raise SourceParseError(
                f"Invalid YAML: {e}", format_name=self.name
            ) from e
        if document is None:
            return EMPTY_MAPPING
        return _convert(document, self.name)


PARSERS_BY_SUFFIX: Final[dict[str, type[TomlParser | JsonParser | YamlParser]]] = {
    ".toml": TomlParser,
    ".json": JsonParser,
    ".yaml": YamlParser,
    ".yml": YamlParser,
}


def parser_for_path(path: str | Path) -> Parser:
    """Pick a parser from a file suffix.

    Args:
        path: File path whose suffix selects the format.

    Returns:
        A parser instance for the format.

    Raises:
        ValueError: If the suffix is not a known format.
    """
    suffix = Path(path).suffix.lower()
    parser_cls = PARSERS_BY_SUFFIX.get(suffix)
    if parser_cls is None:
        known = ", ".join(sorted(PARSERS_BY_SUFFIX))
        raise ValueError(f"No parser for {suffix or 'files without suffix'!r} ({known})")
    return parser_cls()
