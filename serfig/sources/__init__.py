"""Configuration sources.

Each source turns one origin into a config value:

- ``from_env``: process environment variables
- ``from_file``: a TOML/JSON/YAML file
- ``from_str``: an inline document
- ``from_reader``: an open file-like object
- ``from_self``: an already-constructed value, usually the defaults
"""

from pathlib import Path
from typing import IO, Any

from serfig.parsers.base import Parser
from serfig.sources.base import BaseSource, Source, SourceOrigin
from serfig.sources.env import DEFAULT_SEPARATOR, EnvironmentSource
from serfig.sources.file import FileSource
from serfig.sources.memory import SelfSource
from serfig.sources.text import ReaderSource, StringSource


def from_env(
    prefix: str = "",
    separator: str = DEFAULT_SEPARATOR,
    *,
    case_sensitive: bool = False,
) -> EnvironmentSource:
    """Load from the current process environment."""
    return EnvironmentSource(prefix, separator, case_sensitive=case_sensitive)


def from_file(
    path: str | Path,
    parser: Parser | None = None,
    *,
    required: bool = True,
) -> FileSource:
    """Load from a file; the format follows the suffix unless a parser is given."""
    return FileSource(path, parser, required=required)


def from_str(content: str | bytes, parser: Parser) -> StringSource:
    """Load from an inline document."""
    return StringSource(content, parser)


def from_reader(reader: IO[bytes] | IO[str], parser: Parser) -> ReaderSource:
    """Load from a readable stream."""
    return ReaderSource(reader, parser)


def from_self(value: Any) -> SelfSource:
    """Load from a value of the target type itself."""
    return SelfSource(value)


__all__ = [
    "BaseSource",
    "EnvironmentSource",
    "FileSource",
    "ReaderSource",
    "SelfSource",
    "Source",
    "SourceOrigin",
    "StringSource",
    "from_env",
    "from_file",
    "from_reader",
    "from_self",
    "from_str",
]
