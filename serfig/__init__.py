"""Layered configuration: merge environment, files and defaults into one typed value."""

from serfig.builder import Builder, SourceRecord
from serfig.errors import (
    BuildError,
    DecodeError,
    EnvAccessError,
    ErrorRecord,
    SerfigError,
    SourceEncodeError,
    SourceError,
    SourceErrorClass,
    SourceFailedError,
    SourceIoError,
    SourceParseError,
)
from serfig.merge import fold, merge
from serfig.parsers import JsonParser, Parser, TomlParser, YamlParser, parser_for_path
from serfig.sources import (
    Source,
    SourceOrigin,
    from_env,
    from_file,
    from_reader,
    from_self,
    from_str,
)
from serfig.state_machine import BuilderState, BuilderStateError
from serfig.value import NULL, Value, ValueKind, from_python


__all__ = [
    "NULL",
    "BuildError",
    "Builder",
    "BuilderState",
    "BuilderStateError",
    "DecodeError",
    "EnvAccessError",
    "ErrorRecord",
    "JsonParser",
    "Parser",
    "SerfigError",
    "Source",
    "SourceEncodeError",
    "SourceError",
    "SourceErrorClass",
    "SourceFailedError",
    "SourceIoError",
    "SourceOrigin",
    "SourceParseError",
    "SourceRecord",
    "TomlParser",
    "Value",
    "ValueKind",
    "YamlParser",
    "fold",
    "from_env",
    "from_file",
    "from_python",
    "from_reader",
    "from_self",
    "from_str",
    "merge",
    "parser_for_path",
]
