"""Layered configuration builder."""

import json
import time
from dataclasses import asdict, dataclass
from typing import Any, TypeVar

import structlog
from pydantic import TypeAdapter, ValidationError

from serfig.errors import DecodeError, ErrorRecord, SourceError, SourceFailedError
from serfig.merge import fold
from serfig.sources.base import Source
from serfig.state_machine import BuilderState, BuilderStateMachine
from serfig.value import Value


T = TypeVar("T")

logger = structlog.get_logger()


@dataclass(frozen=True)
class SourceRecord:
    """Outcome of invoking one source during a build."""

    index: int
    name: str
    origin: str
    status: str
    duration_ms: float
    value_kind: str | None = None


class Builder:
    """Collects sources and merges them into a typed configuration.

    Sources are applied in registration order, least specific first: a
    later source overrides earlier ones field by field.

    Implements a state machine for the builder lifecycle:
    COLLECTING -> BUILT

    A builder is consumed by its first build. Sources are invoked fresh
    on every build and their output is never cached.

    Example:
        config = (
            Builder()
            .collect(from_self(AppConfig()))
            .collect(from_file("config.toml", required=False))
            .collect(from_env("APP_"))
            .build(AppConfig)
        )
    """

    def __init__(self) -> None:
        """Initialize an empty builder in COLLECTING state."""
        self._state_machine = BuilderStateMachine()
        self._sources: list[Source] = []
        self._records: list[SourceRecord] = []
        self._errors: list[dict[str, Any]] = []
        self._build_duration_ms: float = 0

    @property
    def state(self) -> BuilderState:
        """Get the current builder state."""
        return self._state_machine.state

    @property
    def sources(self) -> list[Source]:
        """Get registered sources in precedence order."""
        return self._sources.copy()

    @property
    def source_records(self) -> list[SourceRecord]:
        """Get per-source outcomes of the last build."""
        return self._records.copy()

    @property
    def build_duration_ms(self) -> float:
        """Get build duration in milliseconds."""
        return self._build_duration_ms

    def collect(self, source: Source) -> "Builder":
        """Register a source with higher precedence than all previous ones.

        The source is not invoked until the build.

        Args:
            source: The source to append.

        Returns:
            This builder, for chaining.

        Raises:
            BuilderStateError: If the builder was already built.
        """
        self._state_machine.require(BuilderState.COLLECTING, "collect")
        self._sources.append(source)
        return self

    def build_value(self) -> Value:
        """Invoke every source and merge their values.

        Returns:
            The merged value.

        Raises:
            SourceFailedError: If a source fails; later sources are not run.
            BuilderStateError: If the builder was already built.
        """
        self._state_machine.require(BuilderState.COLLECTING, "build_value")
        self._state_machine.transition(BuilderState.BUILT)
        start_time = time.perf_counter()
        try:
            return self._collect_values()
        finally:
            self._build_duration_ms = (time.perf_counter() - start_time) * 1000

    def build(self, target: type[T]) -> T:
        """Build and decode the merged configuration into ``target``.

        Args:
            target: Any type pydantic can validate (model, dataclass, dict).

        Returns:
            The decoded configuration.

        Raises:
            SourceFailedError: If a source fails.
            DecodeError: If the merged value does not fit ``target``.
            BuilderStateError: If the builder was already built.
        """
        self._state_machine.require(BuilderState.COLLECTING, "build")
        self._state_machine.transition(BuilderState.BUILT)
        start_time = time.perf_counter()
        try:
            merged = self._collect_values()
            return self._decode(merged, target)
        finally:
            self._build_duration_ms = (time.perf_counter() - start_time) * 1000

    def _collect_values(self) -> Value:
        log = logger.bind(component="builder", source_count=len(self._sources))
        log.info("build_started")

        values: list[Value] = []
        for index, source in enumerate(self._sources):
            origin = source.origin.value
            source_start = time.perf_counter()
            try:
                value = source.produce()
            except SourceError as e:
                self._record(index, source, "failed", source_start)
                self._errors.append(ErrorRecord.from_exception(e).model_dump(mode="json"))
                log.error(
                    "source_failed",
                    index=index,
                    source_name=source.name,
                    origin=origin,
                    error_class=e.error_class.value,
                    error=e.message,
                    details=e.details,
                )
                raise SourceFailedError(index, source.name, origin, e) from e

            record = self._record(index, source, "ok", source_start, value)
            log.info(
                "source_produced",
                index=index,
                source_name=source.name,
                origin=origin,
                value_kind=value.kind.value,
                duration_ms=record.duration_ms,
            )
            values.append(value)

        merged = fold(values)
        log.info("sources_merged", value_kind=merged.kind.value)
        return merged

    def _decode(self, merged: Value, target: type[T]) -> T:
        target_name = getattr(target, "__name__", repr(target))
        log = logger.bind(component="builder", target=target_name)

        # Null means nothing was provided: let the target's defaults apply
        data = {} if merged.is_null else merged.to_python(drop_nulls=True)
        try:
            result = TypeAdapter(target).validate_python(data)
        except ValidationError as e:
            errors = [
                {
                    "loc": ".".join(str(loc) for loc in err["loc"]) or "<root>",
                    "msg": err["msg"],
                    "type": err["type"],
                }
                for err in e.errors()
            ]
            self._errors.extend(errors)
            log.error(
                "decode_failed",
                decode_error_count=len(errors),
                errors=errors,
            )
            raise DecodeError(target_name, errors) from e

        log.info("build_complete")
        return result

    def _record(
        self,
        index: int,
        source: Source,
        status: str,
        start_time: float,
        value: Value | None = None,
    ) -> SourceRecord:
        record = SourceRecord(
            index=index,
            name=source.name,
            origin=source.origin.value,
            status=status,
            duration_ms=(time.perf_counter() - start_time) * 1000,
            value_kind=value.kind.value if value is not None else None,
        )
        self._records.append(record)
        return record

    def get_build_summary(self) -> dict[str, object]:
        """Get a summary of the build.

        Returns:
            Dictionary with state, per-source outcomes and errors.
        """
        return {
            "state": self._state_machine.state.name,
            "source_count": len(self._sources),
            "sources": [asdict(record) for record in self._records],
            "error_count": len(self._errors),
            "errors": self._errors.copy(),
            "build_duration_ms": self._build_duration_ms,
        }

    def get_build_summary_json(self) -> str:
        """Get build summary as JSON string with stable ordering."""
        return json.dumps(self.get_build_summary(), sort_keys=True, indent=2)
