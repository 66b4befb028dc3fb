"""Decoders for structured configuration formats."""

from serfig.parsers.base import Parser
from serfig.parsers.formats import (
    JsonParser,
    TomlParser,
    YamlParser,
    parser_for_path,
)


__all__ = [
    "JsonParser",
    "Parser",
    "TomlParser",
    "YamlParser",
    "parser_for_path",
]
