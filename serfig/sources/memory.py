"""In-memory source for already-constructed values such as defaults."""

from typing import Any

from pydantic import PydanticSchemaGenerationError, TypeAdapter
from pydantic_core import PydanticSerializationError

from serfig.errors import SourceEncodeError
from serfig.sources.base import BaseSource, SourceOrigin
from serfig.value import Value, from_python


class SelfSource(BaseSource):
    """Serializes a typed value (model, dataclass, dict) into a config value.

    The value is dumped in JSON mode, so enums, datetimes and paths become
    plain strings that decode back into the same types.
    """

    origin = SourceOrigin.MEMORY

    def __init__(self, value: Any, *, name: str | None = None) -> None:
        """Initialize the source.

        Args:
            value: The value to serialize.
            name: Source name for diagnostics. Defaults to the type name.
        """
        super().__init__(name or f"self:{type(value).__name__}")
        self._value = value

    def produce(self) -> Value:
        type_name = type(self._value).__name__
        try:
            adapter: TypeAdapter[Any] = TypeAdapter(type(self._value))
            data = adapter.dump_python(self._value, mode="json")
            return from_python(data)
        except (
            PydanticSchemaGenerationError,
            PydanticSerializationError,
            TypeError,
            ValueError,
        ) as e:
            raise SourceEncodeError(
                f"Cannot serialize {type_name}: {e}",
                source_name=self.name,
                type_name=type_name,
            ) from e
