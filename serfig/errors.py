"""Error types for sources and the build pipeline.

Source errors describe why a single source could not produce a value.
Build errors wrap them with the source's registration position, or report
that the merged value does not fit the target type.
"""

from enum import Enum
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from serfig.error_hints import format_decode_error, get_error_hint


DetailValue = str | int | bool | None


class SerfigError(Exception):
    """Base exception for all serfig errors."""


class SourceErrorClass(str, Enum):
    """Classification of source errors.

    - IO: File missing (when required) or unreadable
    - PARSE: Bytes don't decode in the configured format
    - ENCODE: In-memory value fails to serialize
    - ENV_ACCESS: Process environment could not be read
    """

    IO = "IO"
    PARSE = "PARSE"
    ENCODE = "ENCODE"
    ENV_ACCESS = "ENV_ACCESS"


class SourceError(SerfigError):
    """Base exception for source errors.

    Provides structured error information for logging and reporting.
    """

    def __init__(
        self,
        error_class: SourceErrorClass,
        message: str,
        source_name: str | None = None,
        details: dict[str, DetailValue] | None = None,
    ) -> None:
        """Initialize the source error.

        Args:
            error_class: Classification of the error.
            message: Human-readable error message.
            source_name: Name of the source that failed.
            details: Additional structured error details.
        """
        super().__init__(message)
        self.error_class = error_class
        self.message = message
        self.source_name = source_name
        self.details = details or {}

    def to_dict(self) -> dict[str, str | None | dict[str, DetailValue]]:
        """Convert error to dictionary for logging/serialization."""
        return {
            "error_class": self.error_class.value,
            "message": self.message,
            "source_name": self.source_name,
            "details": self.details,
        }


class SourceIoError(SourceError):
    """A file could not be read."""

    def __init__(
        self,
        message: str,
        source_name: str | None = None,
        path: str | None = None,
    ) -> None:
        """Initialize the I/O error.

        Args:
            message: Human-readable error message.
            source_name: Name of the source that failed.
            path: Path of the file that could not be read.
        """
        details: dict[str, DetailValue] = {}
        if path is not None:
            details["path"] = path
        super().__init__(
            error_class=SourceErrorClass.IO,
            message=message,
            source_name=source_name,
            details=details,
        )
        self.path = path


class SourceParseError(SourceError):
    """Content could not be decoded in the configured format."""

    def __init__(
        self,
        message: str,
        source_name: str | None = None,
        format_name: str | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        """Initialize the parse error.

        Args:
            message: Human-readable error message.
            source_name: Name of the source that failed.
            format_name: Name of the format (toml, json, yaml).
            line: Line number where parsing failed.
            column: Column number where parsing failed.
        """
        details: dict[str, DetailValue] = {}
        if format_name is not None:
            details["format"] = format_name
        if line is not None:
            details["line"] = line
        if column is not None:
            details["column"] = column

        super().__init__(
            error_class=SourceErrorClass.PARSE,
            message=message,
            source_name=source_name,
            details=details,
        )
        self.format_name = format_name
        self.line = line
        self.column = column


class SourceEncodeError(SourceError):
    """An in-memory value could not be serialized into a config value."""

    def __init__(
        self,
        message: str,
        source_name: str | None = None,
        type_name: str | None = None,
    ) -> None:
        """Initialize the encode error.

        Args:
            message: Human-readable error message.
            source_name: Name of the source that failed.
            type_name: Name of the type that failed to serialize.
        """
        details: dict[str, DetailValue] = {}
        if type_name is not None:
            details["type"] = type_name
        super().__init__(
            error_class=SourceErrorClass.ENCODE,
            message=message,
            source_name=source_name,
            details=details,
        )
        self.type_name = type_name


class EnvAccessError(SourceError):
    """The process environment could not be read."""

    def __init__(self, message: str, source_name: str | None = None) -> None:
        """Initialize the environment access error.

        Args:
            message: Human-readable error message.
            source_name: Name of the source that failed.
        """
        super().__init__(
            error_class=SourceErrorClass.ENV_ACCESS,
            message=message,
            source_name=source_name,
        )


class BuildError(SerfigError):
    """Base exception for build failures."""


class SourceFailedError(BuildError):
    """Raised when a registered source fails to produce a value.

    The build stops at the first failing source; nothing is merged.
    """

    def __init__(
        self,
        index: int,
        source_name: str,
        origin: str,
        cause: SourceError,
    ) -> None:
        """Initialize the error.

        Args:
            index: Registration position of the failing source.
            source_name: Name of the failing source.
            origin: Origin kind of the failing source.
            cause: The underlying source error.
        """
        self.index = index
        self.source_name = source_name
        self.origin = origin
        self.cause = cause
        super().__init__(
            f"Source #{index} ({origin}: {source_name}) failed: {cause.message}"
        )

    def format(self, *, include_hint: bool = True) -> str:
        """Render the failure, optionally with a hint for the cause's class."""
        if include_hint:
            hint = get_error_hint(self.cause.error_class.value)
            return f"{self}\n    Hint: {hint}"
        return str(self)


class DecodeError(BuildError):
    """Raised when the merged value cannot be decoded into the target type."""

    def __init__(self, target: str, errors: list[dict[str, str]]) -> None:
        """Initialize the error.

        Args:
            target: Name of the target type.
            errors: Validation error records with loc, msg and type keys.
        """
        self.target = target
        self.errors = errors
        super().__init__(
            f"Decoding into {target} failed: {len(errors)} errors"
        )

    def format(self, *, include_hint: bool = True) -> str:
        """Render every error on its own line, optionally with hints."""
        lines = [str(self)]
        lines.extend(
            "  "
            + format_decode_error(
                err["loc"], err["msg"], err["type"], include_hint=include_hint
            )
            for err in self.errors
        )
        return "\n".join(lines)


class ErrorRecord(BaseModel):
    """Serializable error record for build summaries."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    error_class: SourceErrorClass = Field(description="Error classification")
    message: Annotated[str, Field(min_length=1, description="Error message")]
    source_name: str | None = Field(default=None, description="Source name")
    details: dict[str, DetailValue] = Field(
        default_factory=dict, description="Additional error details"
    )

    @classmethod
    def from_exception(cls, error: SourceError) -> "ErrorRecord":
        """Create an ErrorRecord from a SourceError exception.

        Args:
            error: The exception to convert.

        Returns:
            ErrorRecord instance.
        """
        return cls(
            error_class=error.error_class,
            message=error.message,
            source_name=error.source_name,
            details=error.details,
        )
