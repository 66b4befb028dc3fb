"""Environment variable source."""

import os
from collections.abc import Mapping as AbcMapping

from serfig.errors import EnvAccessError
from serfig.merge import merge
from serfig.sources.base import BaseSource, SourceOrigin
from serfig.value import EMPTY_MAPPING, Mapping, String, Value


DEFAULT_SEPARATOR = "__"


class EnvironmentSource(BaseSource):
    """Builds a nested mapping from process environment variables.

    With ``prefix="APP_"`` and ``separator="__"``, ``APP_DB__HOST=x`` becomes
    ``{"db": {"host": "x"}}``. Values are always strings; coercion happens
    when the merged value is decoded into the target type.
    """

    origin = SourceOrigin.ENVIRONMENT

    def __init__(
        self,
        prefix: str = "",
        separator: str = DEFAULT_SEPARATOR,
        *,
        case_sensitive: bool = False,
        environ: AbcMapping[str, str] | None = None,
        name: str | None = None,
    ) -> None:
        """Initialize the environment source.

        Args:
            prefix: Only variables starting with this prefix are read.
                The prefix is stripped from the key path.
            separator: Splits a variable name into nested keys. An empty
                separator keeps names flat.
            case_sensitive: Keep name case and match the prefix exactly.
                Otherwise names are lowercased.
            environ: Mapping to read instead of ``os.environ``.
            name: Source name for diagnostics.
        """
        super().__init__(name or f"env:{prefix or '*'}")
        self._prefix = prefix
        self._separator = separator
        self._case_sensitive = case_sensitive
        self._environ = environ

    def key_path(self, variable: str) -> list[str] | None:
        """Map a variable name to its nested key path.

        Args:
            variable: Environment variable name.

        Returns:
            List of keys, or None if the variable is filtered out.
        """
        if self._case_sensitive:
            matches = variable.startswith(self._prefix)
        else:
            matches = variable.lower().startswith(self._prefix.lower())
        if not matches:
            return None

        rest = variable[len(self._prefix) :]
        parts = rest.split(self._separator) if self._separator else [rest]
        segments = [part for part in parts if part]
        if not segments:
            return None
        if not self._case_sensitive:
            segments = [segment.lower() for segment in segments]
        return segments

    def _read_environ(self) -> dict[str, str]:
        try:
            return dict(self._environ if self._environ is not None else os.environ)
        except OSError as e:
            raise EnvAccessError(
                f"Cannot read process environment: {e}", source_name=self.name
            ) from e

    def produce(self) -> Value:
        variables = self._read_environ()

        matched = [
            (path, variable)
            for variable in variables
            if (path := self.key_path(variable)) is not None
        ]
        # Shallower paths first: a nested path always beats a scalar at its prefix
        matched.sort(key=lambda item: (len(item[0]), item[0], item[1]))

        result: Value = EMPTY_MAPPING
        for path, variable in matched:
            result = merge(result, _nest(path, String(variables[variable])))

        self._log.debug(
            "environment_collected",
            variable_count=len(matched),
            prefix=self._prefix,
        )
        return result


def _nest(path: list[str], leaf: Value) -> Value:
    value = leaf
    for key in reversed(path):
        value = Mapping(((key, value),))
    return value
