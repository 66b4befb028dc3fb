"""File source."""

from pathlib import Path

from serfig.errors import SourceIoError
from serfig.parsers.base import Parser
from serfig.parsers.formats import parser_for_path
from serfig.sources.base import BaseSource, SourceOrigin
from serfig.value import EMPTY_MAPPING, Value


class FileSource(BaseSource):
    """Reads a file and decodes it with a format parser.

    The file is opened on each ``produce()`` call, never at construction.
    """

    origin = SourceOrigin.FILE

    def __init__(
        self,
        path: str | Path,
        parser: Parser | None = None,
        *,
        required: bool = True,
        name: str | None = None,
    ) -> None:
        """Initialize the file source.

        Args:
            path: Path of the file to read.
            parser: Format parser. Chosen from the file suffix if omitted.
            required: Fail if the file is missing. Otherwise a missing file
                contributes an empty mapping.
            name: Source name for diagnostics. Defaults to the path.

        Raises:
            ValueError: If no parser is given and the suffix is unknown.
        """
        self._path = Path(path)
        super().__init__(name or str(self._path))
        self._parser = parser if parser is not None else parser_for_path(self._path)
        self._required = required

    @property
    def path(self) -> Path:
        """Get the file path."""
        return self._path

    @property
    def required(self) -> bool:
        """Check if a missing file is an error."""
        return self._required

    def produce(self) -> Value:
        try:
            data = self._path.read_bytes()
        except FileNotFoundError as e:
            if not self._required:
                self._log.info("optional_file_missing", file_path=str(self._path))
                return EMPTY_MAPPING
            raise SourceIoError(
                f"Config file not found: {self._path}",
                source_name=self.name,
                path=str(self._path),
            ) from e
        except OSError as e:
            raise SourceIoError(
                f"Cannot read config file {self._path}: {e.strerror or e}",
                source_name=self.name,
                path=str(self._path),
            ) from e

        self._log.debug("config_file_read", file_path=str(self._path))
        return self._decode(self._parser, data)
