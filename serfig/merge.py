"""Deep merge of value trees.

Precedence rules, by (base, overlay) variant pair:

- Null on either side: the other side wins.
- Mapping x Mapping: key-wise union, shared keys merged recursively.
- Anything else (sequences, scalars, shape mismatches): overlay wins.
"""

from collections.abc import Callable, Iterable
from functools import reduce
from typing import Any

from serfig.value import NULL, Mapping, Value, ValueKind


def _take_base(base: Value, overlay: Value) -> Value:
    return base


def _take_overlay(base: Value, overlay: Value) -> Value:
    return overlay


def _merge_mappings(base: Mapping, overlay: Mapping) -> Value:
    """Union two mappings, keeping base key order first."""
    entries: list[tuple[str, Value]] = []
    for key, base_value in base.items():
        overlay_value = overlay.get(key)
        if overlay_value is None:
            entries.append((key, base_value))
        else:
            entries.append((key, merge(base_value, overlay_value)))

    entries.extend(
        (key, overlay_value)
        for key, overlay_value in overlay.items()
        if key not in base
    )
    return Mapping(tuple(entries))


_Strategy = Callable[[Any, Any], Value]

# Pairs not listed fall through to overlay-wins.
_STRATEGIES: dict[tuple[ValueKind, ValueKind], _Strategy] = {
    (ValueKind.MAPPING, ValueKind.MAPPING): _merge_mappings,
    **{(kind, ValueKind.NULL): _take_base for kind in ValueKind},
    **{
        (ValueKind.NULL, kind): _take_overlay
        for kind in ValueKind
        if kind != ValueKind.NULL
    },
}


def merge(base: Value, overlay: Value) -> Value:
    """Merge overlay on top of base.

    Args:
        base: Lower precedence value.
        overlay: Higher precedence value.

    Returns:
        New merged value. Neither input is modified.
    """
    strategy = _STRATEGIES.get((base.kind, overlay.kind), _take_overlay)
    return strategy(base, overlay)


def fold(values: Iterable[Value]) -> Value:
    """Merge values left to right, later values taking precedence.

    Args:
        values: Values ordered from least to most specific.

    Returns:
        The combined value, or Null for an empty input.
    """
    return reduce(merge, values, NULL)
