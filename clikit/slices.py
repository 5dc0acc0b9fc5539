"""Multi-value flag values: a list of typed elements set from comma-separated text."""

from __future__ import annotations

import json
import time
from collections.abc import Iterable
from typing import Any

from .values import FloatValue, IntValue, StringValue, UintValue, Value

SLICE_SEPARATOR = ","
SERIALIZE_PREFIX = (
    "sl:::" + time.strftime("%a %b %d %H:%M:%S %Y", time.gmtime()) + ":::"
)


def split_multi_values(text: str) -> list[str]:
    """Split a multi-value flag argument on the slice separator."""
    return text.split(SLICE_SEPARATOR)


def _element_type_name(element: Value) -> str:
    if isinstance(element, IntValue):
        return f"int{element.bits}"
    if isinstance(element, UintValue):
        return f"uint{element.bits}"
    if isinstance(element, FloatValue):
        return f"float{element.bits}"
    if isinstance(element, StringValue):
        return "string"
    return type(element).__name__


def _decode_serialized(text: str) -> Any:
    """Decode a serialized payload, or return None when it is not valid JSON."""
    try:
        return json.loads(text[len(SERIALIZE_PREFIX):])
    except ValueError:
        return None


class SliceValue(Value):
    """A list of values parsed one by one with an element :class:`Value`.

    The first call to :meth:`set` replaces the defaults; later calls append.
    Text beginning with :data:`SERIALIZE_PREFIX` replaces the whole list with
    the JSON list that follows it.
    """

    def __init__(self, element: Value | None = None, values: Iterable[Any] | None = None) -> None:
        self.element = element if element is not None else StringValue()
        self.values: list[Any] = list(values) if values is not None else []
        self.has_been_set = False

    def set(self, text: str) -> None:
        if not self.has_been_set:
            self.values.clear()
            self.has_been_set = True

        if text.startswith(SERIALIZE_PREFIX):
            loaded = _decode_serialized(text)
            if isinstance(loaded, list):
                self.values[:] = loaded
            return

        for part in split_multi_values(text):
            self.element.set(part.strip())
            self.values.append(self.element.get())

    def get(self) -> list[Any]:
        return self.values

    def serialize(self) -> str:
        """Return the list as prefixed JSON, accepted back by :meth:`set`."""
        return SERIALIZE_PREFIX + json.dumps(self.values, separators=(",", ":"), default=str)

    def to_string(self, values: Iterable[Any]) -> str:
        return ", ".join(self.element.to_string(item) for item in values)

    def __str__(self) -> str:
        if isinstance(self.element, StringValue):
            return "[" + " ".join(self.values) + "]"
        return f"[]{_element_type_name(self.element)}{{{self.to_string(self.values)}}}"