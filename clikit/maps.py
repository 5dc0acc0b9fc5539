"""Key-value flag values: a mapping of string keys to typed values."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from .slices import SERIALIZE_PREFIX, _decode_serialized, _element_type_name, split_multi_values
from .values import StringValue, Value

KEY_VALUE_SEPARATOR = "="


class MapValue(Value):
    """A mapping of string keys to values parsed with an element :class:`Value`.

    Each item has the form ``key=value``; items are comma separated. The first
    call to :meth:`set` replaces the defaults; later calls add or overwrite
    keys. Text beginning with the serialization prefix replaces the mapping.
    """

    def __init__(self, element: Value | None = None, mapping: Mapping[str, Any] | None = None) -> None:
        self.element = element if element is not None else StringValue()
        self.mapping: dict[str, Any] = dict(mapping) if mapping is not None else {}
        self.has_been_set = False

    def set(self, text: str) -> None:
        if not self.has_been_set:
            self.mapping.clear()
            self.has_been_set = True

        if text.startswith(SERIALIZE_PREFIX):
            loaded = _decode_serialized(text)
            if isinstance(loaded, dict):
                self.mapping.clear()
                self.mapping.update(loaded)
            return

        for item in split_multi_values(text):
            key, sep, raw = item.partition(KEY_VALUE_SEPARATOR)
            if not sep:
                raise ValueError(
                    f"item {json.dumps(item, ensure_ascii=False)} is missing separator "
                    f"{json.dumps(KEY_VALUE_SEPARATOR)}"
                )
            self.element.set(raw)
            self.mapping[key] = self.element.get()

    def get(self) -> dict[str, Any]:
        return self.mapping

    def serialize(self) -> str:
        """Return the mapping as prefixed JSON, accepted back by :meth:`set`."""
        return SERIALIZE_PREFIX + json.dumps(self.mapping, separators=(",", ":"), default=str)

    def to_string(self, mapping: Mapping[str, Any]) -> str:
        return ", ".join(
            key + KEY_VALUE_SEPARATOR + self.element.to_string(mapping[key])
            for key in sorted(mapping)
        )

    def __str__(self) -> str:
        if isinstance(self.element, StringValue):
            items = " ".join(f"{key}:{self.mapping[key]}" for key in sorted(self.mapping))
            return f"map[{items}]"
        type_name = _element_type_name(self.element)
        return f"map[string]{type_name}{{{self.to_string(self.mapping)}}}"