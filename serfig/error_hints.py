"""Error hints for build failures.

Provides user-friendly hints with actionable remediation steps for the
pydantic errors raised while decoding a merged value, and for source
error classes.
"""

from typing import Final


# Mapping of pydantic error types and source error classes to hints
ERROR_HINTS: Final[dict[str, str]] = {
    # Missing field errors
    "missing": "This field is required. Set it in a file, the environment, or the defaults.",
    # Type errors
    "enum": "Check the allowed values for this field.",
    "int_parsing": "This field must be an integer (whole number).",
    "int_type": "This field must be an integer (whole number).",
    "float_parsing": "This field must be a number.",
    "float_type": "This field must be a number.",
    "string_type": "This field must be a text string.",
    "bool_parsing": "This field must be true or false (environment values: true/false, 1/0, yes/no).",
    "bool_type": "This field must be true or false.",
    "list_type": "This field must be a list/array. Environment variables cannot provide lists.",
    "dict_type": "This field must be a table/mapping. Check that no layer sets it to a scalar.",
    "model_type": "This field must be a table/mapping. Check that no layer sets it to a scalar.",
    # Value constraint errors
    "greater_than_equal": "The value is too small. Check the minimum allowed.",
    "less_than_equal": "The value is too large. Check the maximum allowed.",
    "extra_forbidden": "Unknown key. Check for typos or a stray environment variable.",
    # Source error classes
    "IO": "The file does not exist or cannot be read. Check the path, or mark the file optional.",
    "PARSE": "The content is not valid in the configured format. Check its syntax.",
    "ENCODE": "The in-memory value cannot be serialized. Check its field types.",
    "ENV_ACCESS": "The process environment could not be read.",
}

# Field-specific hints, keyed on the last segment of the error location
FIELD_HINTS: Final[dict[str, str]] = {
    "port": "Must be an integer between 1 and 65535 (e.g., APP_SERVER__PORT=8080).",
    "host": "Must be a hostname or IP address (e.g., '127.0.0.1').",
    "url": "Must be a full URL including the scheme (e.g., 'postgresql://db/app').",
    "log_level": "Must be one of: DEBUG, INFO, WARNING, ERROR, CRITICAL.",
    "timeout": "Must be a number of seconds (e.g., 30 or 2.5).",
    "path": "Must be a filesystem path. Relative paths resolve from the working directory.",
}

DEFAULT_HINT: Final[str] = "Check the value provided by each configuration layer."


def get_error_hint(error_type: str, field_name: str | None = None) -> str:
    """Get a user-friendly hint for an error type.

    Args:
        error_type: The pydantic error type (e.g., 'missing') or a source
            error class (e.g., 'IO').
        field_name: Optional dotted field location for field-specific hints.

    Returns:
        A user-friendly hint string.
    """
    if field_name:
        # 'server.port' -> 'port'
        simple_field = field_name.split(".")[-1]
        if simple_field in FIELD_HINTS:
            return FIELD_HINTS[simple_field]

    return ERROR_HINTS.get(error_type, DEFAULT_HINT)


def format_decode_error(
    location: str,
    message: str,
    error_type: str,
    *,
    include_hint: bool = True,
) -> str:
    """Format a decode error with optional hint.

    Args:
        location: The error location (e.g., 'server.port').
        message: The original error message.
        error_type: The error type.
        include_hint: Whether to include a hint.

    Returns:
        Formatted error string.
    """
    base = f"{location}: {message}"
    if include_hint:
        return f"{base}\n    Hint: {get_error_hint(error_type, location)}"
    return base
