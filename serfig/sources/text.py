"""Sources for inline documents and open readers."""

from typing import IO

from serfig.errors import SourceIoError
from serfig.parsers.base import Parser
from serfig.sources.base import BaseSource, SourceOrigin
from serfig.value import Value


class StringSource(BaseSource):
    """Decodes an inline document, e.g. a literal TOML snippet."""

    origin = SourceOrigin.MEMORY

    def __init__(
        self,
        content: str | bytes,
        parser: Parser,
        *,
        name: str | None = None,
    ) -> None:
        """Initialize the source.

        Args:
            content: Document text or bytes.
            parser: Format parser.
            name: Source name for diagnostics.
        """
        super().__init__(name or f"str:{parser.name}")
        self._data = content.encode("utf-8") if isinstance(content, str) else content
        self._parser = parser

    def produce(self) -> Value:
        return self._decode(self._parser, self._data)


class ReaderSource(BaseSource):
    """Reads a file-like object to the end and decodes it.

    A reader can only be consumed once, so a second ``produce()`` sees
    whatever the reader returns at its current position.
    """

    origin = SourceOrigin.FILE

    def __init__(
        self,
        reader: IO[bytes] | IO[str],
        parser: Parser,
        *,
        name: str | None = None,
    ) -> None:
        """Initialize the source.

        Args:
            reader: Binary or text stream.
            parser: Format parser.
            name: Source name for diagnostics.
        """
        super().__init__(name or f"reader:{getattr(reader, 'name', parser.name)}")
        self._reader = reader
        self._parser = parser

    def produce(self) -> Value:
        try:
            content = self._reader.read()
        except OSError as e:
            raise SourceIoError(
                f"Cannot read from {self.name}: {e}", source_name=self.name
            ) from e
        data = content.encode("utf-8") if isinstance(content, str) else content
        return self._decode(self._parser, data)
