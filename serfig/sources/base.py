"""Base source interface."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Protocol, runtime_checkable

import structlog

from serfig.errors import SourceParseError
from serfig.parsers.base import Parser
from serfig.value import Value


logger = structlog.get_logger()


class SourceOrigin(str, Enum):
    """Where a source reads its data from. Used for diagnostics only."""

    ENVIRONMENT = "environment"
    FILE = "file"
    MEMORY = "memory"


@runtime_checkable
class Source(Protocol):
    """Protocol for configuration sources.

    A source turns one external origin into a config value. It is invoked
    once per build and must not cache its output.
    """

    name: str
    origin: SourceOrigin

    def produce(self) -> Value:
        """Produce this source's value.

        Returns:
            The value read from the origin.

        Raises:
            SourceError: If the origin cannot be read or decoded.
        """
        ...


class BaseSource(ABC):
    """Abstract base class for sources.

    Provides the name/origin pair and a logger bound to both.
    """

    origin: SourceOrigin

    def __init__(self, name: str) -> None:
        """Initialize the base source.

        Args:
            name: Human-readable name used in logs and errors.
        """
        self.name = name
        self._log = logger.bind(
            component="source",
            source_name=name,
            origin=self.origin.value,
        )

    @abstractmethod
    def produce(self) -> Value:
        """Produce this source's value."""

    def _decode(self, parser: Parser, data: bytes) -> Value:
        """Decode bytes with a parser, tagging parse errors with this source."""
        try:
            value = parser.decode(data)
        except SourceParseError as e:
            e.source_name = self.name
            self._log.warning(
                "source_parse_failed",
                format=parser.name,
                line=e.line,
                column=e.column,
                error=e.message,
            )
            raise
        self._log.debug("source_decoded", format=parser.name, byte_count=len(data))
        return value

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
