"""Typed flag values: parsing text into numbers, strings, timestamps and wrapped values."""

from __future__ import annotations

import json
import math
import re
import struct
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone, tzinfo
from typing import Any

_SYNTAX = "invalid syntax"
_RANGE = "value out of range"
_BIT_SIZES = (8, 16, 32, 64)
_DIGIT_CHARS = "0123456789abcdefghijklmnopqrstuvwxyz"
_DIGIT_VALUES = {
    **{ch: i for i, ch in enumerate(_DIGIT_CHARS)},
    **{ch.upper(): i for i, ch in enumerate(_DIGIT_CHARS) if ch.isalpha()},
}


class NumError(ValueError):
    """Raised when text cannot be parsed as a number of the requested kind."""

    def __init__(self, func: str, text: str, reason: str) -> None:
        self.func = func
        self.text = text
        self.reason = reason
        super().__init__(f"{func}: parsing {json.dumps(text, ensure_ascii=False)}: {reason}")


def _underscore_ok(text: str) -> bool:
    """Underscores must sit between digits, or between a base prefix and a digit."""
    saw = "^"
    if text[:1] in ("+", "-"):
        text = text[1:]
    start = 0
    is_hex = False
    if len(text) >= 2 and text[0] == "0" and text[1].lower() in ("b", "o", "x"):
        start = 2
        saw = "0"
        is_hex = text[1].lower() == "x"
    for ch in text[start:]:
        if "0" <= ch <= "9" or (is_hex and "a" <= ch.lower() <= "f"):
            saw = "0"
            continue
        if ch == "_":
            if saw != "0":
                return False
            saw = "_"
            continue
        if saw == "_":
            return False
        saw = "!"
    return saw != "_"


def _parse_magnitude(text: str, base: int, func: str, original: str) -> int:
    """Parse an unsigned digit string; range is left to the caller."""
    if not text:
        raise NumError(func, original, _SYNTAX)

    base0 = base == 0
    digits = text
    if base0:
        base = 10
        if digits[0] == "0":
            marker = digits[1].lower() if len(digits) >= 3 else ""
            if marker == "b":
                base, digits = 2, digits[2:]
            elif marker == "o":
                base, digits = 8, digits[2:]
            elif marker == "x":
                base, digits = 16, digits[2:]
            else:
                base, digits = 8, digits[1:]
    elif not 2 <= base <= 36:
        raise NumError(func, original, f"invalid base {base}")

    value = 0
    underscores = False
    for ch in digits:
        if ch == "_" and base0:
            underscores = True
            continue
        digit = _DIGIT_VALUES.get(ch)
        if digit is None or digit >= base:
            raise NumError(func, original, _SYNTAX)
        value = value * base + digit

    if underscores and not _underscore_ok(text):
        raise NumError(func, original, _SYNTAX)
    return value


def _parse_uint(text: str, base: int, bits: int) -> int:
    value = _parse_magnitude(text, base, "parse_uint", text)
    if value > (1 << bits) - 1:
        raise NumError("parse_uint", text, _RANGE)
    return value


def _parse_int(text: str, base: int, bits: int) -> int:
    if not text:
        raise NumError("parse_int", text, _SYNTAX)
    negative = text[0] == "-"
    body = text[1:] if text[0] in "+-" else text
    magnitude = _parse_magnitude(body, base, "parse_int", text)
    cutoff = 1 << (bits - 1)
    if (not negative and magnitude >= cutoff) or (negative and magnitude > cutoff):
        raise NumError("parse_int", text, _RANGE)
    return -magnitude if negative else magnitude


def _format_int(value: int, base: int) -> str:
    if base == 0:
        base = 10
    if not 2 <= base <= 36:
        raise ValueError(f"invalid base {base}")
    if value == 0:
        return "0"
    sign = "-" if value < 0 else ""
    value = abs(value)
    out = []
    while value:
        value, digit = divmod(value, base)
        out.append(_DIGIT_CHARS[digit])
    return sign + "".join(reversed(out))


_DECIMAL_FLOAT = re.compile(r"[+-]?(?:[\d_]+\.?[\d_]*|\.[\d_]+)(?:[eE][+-]?\d+)?")
_HEX_FLOAT = re.compile(
    r"[+-]?0[xX](?:[0-9a-fA-F_]+\.?[0-9a-fA-F_]*|\.[0-9a-fA-F_]+)[pP][+-]?\d+"
)
_SPECIAL_FLOAT = re.compile(r"(?:[+-]?(?:inf|infinity)|nan)", re.IGNORECASE)


def _to_float32(value: float) -> float:
    return struct.unpack("f", struct.pack("f", value))[0]


def _parse_float(text: str, bits: int) -> float:
    if _SPECIAL_FLOAT.fullmatch(text):
        return float(text)

    if _HEX_FLOAT.fullmatch(text):
        mantissa_part = re.split(r"[pP]", text, maxsplit=1)[0]
        if "_" in text and not _underscore_ok(mantissa_part):
            raise NumError("parse_float", text, _SYNTAX)
        value = float.fromhex(text.replace("_", ""))
    elif _DECIMAL_FLOAT.fullmatch(text) and any(ch.isdigit() for ch in text):
        if "_" in text and not _underscore_ok(re.split(r"[eE]", text, maxsplit=1)[0]):
            raise NumError("parse_float", text, _SYNTAX)
        value = float(text.replace("_", ""))
    else:
        raise NumError("parse_float", text, _SYNTAX)

    if math.isinf(value):
        raise NumError("parse_float", text, _RANGE)
    if bits == 32:
        try:
            value = _to_float32(value)
        except OverflowError:
            raise NumError("parse_float", text, _RANGE) from None
    return value


def _shortest_digits(value: float, bits: int) -> tuple[str, int]:
    """Shortest decimal digits that round-trip, and the decimal point position."""
    for precision in range(17):
        rendered = format(value, f".{precision}e")
        candidate = float(rendered)
        if bits == 32:
            candidate = _to_float32(candidate)
        if candidate == value:
            break
    mantissa, exponent = rendered.split("e")
    digits = mantissa.replace(".", "").rstrip("0") or "0"
    return digits, int(exponent) + 1


def _format_float(value: float, bits: int) -> str:
    """Shortest general format: exponent form below 1e-4 or from 1e+06 up."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    if value == 0:
        return "-0" if math.copysign(1.0, value) < 0 else "0"

    sign = "-" if value < 0 else ""
    digits, point = _shortest_digits(abs(value), bits)
    exponent = point - 1

    if exponent < -4 or exponent >= 6:
        mantissa = digits[0] + ("." + digits[1:] if len(digits) > 1 else "")
        exp_sign = "-" if exponent < 0 else "+"
        return f"{sign}{mantissa}e{exp_sign}{abs(exponent):02d}"

    if point <= 0:
        body = "0." + "0" * (-point) + digits
    elif point >= len(digits):
        body = digits + "0" * (point - len(digits))
    else:
        body = digits[:point] + "." + digits[point:]
    return sign + body


def _check_bits(bits: int) -> int:
    if bits not in _BIT_SIZES:
        raise ValueError(f"unsupported bit size {bits}")
    return bits


class Value(ABC):
    """A flag value that can be set from text and read back."""

    @abstractmethod
    def set(self, text: str) -> None:
        """Parse ``text`` and store the result."""

    @abstractmethod
    def get(self) -> Any:
        """Return the current value."""

    @abstractmethod
    def to_string(self, value: Any) -> str:
        """Render ``value`` the way this kind of flag shows it."""

    def is_bool_flag(self) -> bool:
        """Whether the flag works without an argument."""
        return False

    def __str__(self) -> str:
        return self.to_string(self.get())


@dataclass
class IntegerConfig:
    """Configuration for integer flags; base 0 accepts 0x, 0o and 0b prefixes."""

    base: int = 0


@dataclass
class TimestampConfig:
    """Configuration for timestamp flags: a default timezone and strptime layouts."""

    timezone: tzinfo | None = None
    layouts: list[str] = field(default_factory=list)


class IntValue(Value):
    """A signed integer of a given bit size."""

    def __init__(self, value: int = 0, config: IntegerConfig | None = None, *, bits: int = 64) -> None:
        self.value = value
        self.base = (config or IntegerConfig()).base
        self.bits = _check_bits(bits)

    def set(self, text: str) -> None:
        self.value = _parse_int(text, self.base, self.bits)

    def get(self) -> int:
        return self.value

    def to_string(self, value: int) -> str:
        return _format_int(value, self.base or 10)


class UintValue(Value):
    """An unsigned integer of a given bit size."""

    def __init__(self, value: int = 0, config: IntegerConfig | None = None, *, bits: int = 64) -> None:
        self.value = value
        self.base = (config or IntegerConfig()).base
        self.bits = _check_bits(bits)

    def set(self, text: str) -> None:
        self.value = _parse_uint(text, self.base, self.bits)

    def get(self) -> int:
        return self.value

    def to_string(self, value: int) -> str:
        return _format_int(value, self.base or 10)


class FloatValue(Value):
    """A 32- or 64-bit floating point number."""

    def __init__(self, value: float = 0.0, config: Any = None, *, bits: int = 64) -> None:
        if bits not in (32, 64):
            raise ValueError(f"unsupported bit size {bits}")
        self.bits = bits
        self.value = _to_float32(float(value)) if bits == 32 else float(value)

    def set(self, text: str) -> None:
        self.value = _parse_float(text, self.bits)

    def get(self) -> float:
        return self.value

    def to_string(self, value: float) -> str:
        return _format_float(float(value), self.bits)


class StringValue(Value):
    """A plain string."""

    def __init__(self, value: str = "", config: Any = None) -> None:
        self.value = value

    def set(self, text: str) -> None:
        self.value = text

    def get(self) -> str:
        return self.value

    def to_string(self, value: str) -> str:
        return value


class GenericValue(Value):
    """Delegates to a user-supplied :class:`Value`, or does nothing without one."""

    def __init__(self, value: Value | None = None, config: Any = None) -> None:
        self.value = value

    def set(self, text: str) -> None:
        if self.value is not None:
            self.value.set(text)

    def get(self) -> Any:
        return self.value.get() if self.value is not None else None

    def to_string(self, value: Value | None) -> str:
        return str(value) if value is not None else ""

    def is_bool_flag(self) -> bool:
        if self.value is None:
            return False
        check = getattr(self.value, "is_bool_flag", None)
        return bool(check()) if callable(check) else False

    def __str__(self) -> str:
        return self.to_string(self.value)


_YEAR_DIRECTIVE = re.compile(r"(?<!%)%[YyGcx]")


class TimestampValue(Value):
    """A datetime parsed with the first matching layout.

    Without a year in the layout the current year is used; without a date at
    all the current date is used.
    """

    def __init__(self, value: datetime | None = None, config: TimestampConfig | None = None) -> None:
        config = config or TimestampConfig()
        self.value = value
        self.layouts = list(config.layouts)
        self.location = config.timezone
        self.has_been_set = False

    def set(self, text: str) -> None:
        if self.location is None:
            self.location = timezone.utc
        if not self.layouts:
            raise ValueError("got nil/empty layouts slice")

        failures = []
        for layout in self.layouts:
            try:
                parsed = datetime.strptime(text, layout)
            except ValueError as exc:
                failures.append(str(exc))
                continue
            break
        else:
            raise ValueError("\n".join(failures))

        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=self.location)

        if not _YEAR_DIRECTIVE.search(layout):
            now = datetime.now(parsed.tzinfo)
            if (parsed.month, parsed.day) == (1, 1):
                parsed = parsed.replace(year=now.year, month=now.month, day=now.day)
            else:
                parsed = parsed.replace(year=now.year, day=1) + timedelta(days=parsed.day - 1)

        self.value = parsed
        self.has_been_set = True

    def get(self) -> datetime | None:
        return self.value

    def to_string(self, value: datetime | None) -> str:
        return "" if value is None else str(value)