"""Decoder contract for structured file formats."""

from typing import Protocol, runtime_checkable

from serfig.value import Value


@runtime_checkable
class Parser(Protocol):
    """Protocol for format decoders.

    Parsers turn raw bytes into a config value. They do not read files
    themselves; sources hand them the bytes.
    """

    name: str

    def decode(self, data: bytes) -> Value:
        """Decode bytes into a value.

        Args:
            data: Raw document bytes.

        Returns:
            The decoded value.

        Raises:
            SourceParseError: If the bytes are not valid in this format.
        """
        ...
