"""Command-line flags: a common base that binds a name and options to a typed value."""

from __future__ import annotations

import json
import os
from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, ClassVar, Optional

from .maps import MapValue
from .slices import SliceValue
from .values import (
    FloatValue,
    GenericValue,
    IntegerConfig,
    IntValue,
    StringValue,
    TimestampConfig,
    TimestampValue,
    UintValue,
    Value,
    _format_float,
)

# Callback shapes used by commands and flags. Errors are raised, not returned.
ShellCompleteFunc = Callable[[Any, Any], None]
BeforeFunc = Callable[[Any, Any], Any]
AfterFunc = Callable[[Any, Any], None]
ActionFunc = Callable[[Any, Any], None]
CommandNotFoundFunc = Callable[[Any, Any, str], None]
ConfigureShellCompletionCommand = Callable[[Any], None]
OnUsageErrorFunc = Callable[[Any, Any, Exception, bool], Optional[Exception]]
InvalidFlagAccessFunc = Callable[[Any, Any, str], None]
ExitErrHandlerFunc = Callable[[Any, Any, Exception], None]
FlagStringFunc = Callable[[Any], str]
FlagNamePrefixFunc = Callable[[list, str], str]
FlagEnvHintFunc = Callable[[list, str], str]
FlagFileHintFunc = Callable[[str, str], str]
FlagActionFunc = Callable[[Any, Any, Any], None]
Validator = Callable[[Any], None]
SourceLookup = Callable[[], Optional[tuple]]

_GENERIC_PREFIXES = ("float", "int", "uint")


def _generic_type_name(name: str) -> str:
    for prefix in _GENERIC_PREFIXES:
        if name.startswith(prefix):
            return prefix
    return name.lower()


def _format_plain(value: Any) -> str:
    """Render a flag's default value in the plain, bracketed style."""
    if value is None:
        return "<nil>"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return _format_float(value, 64)
    if isinstance(value, list):
        return "[" + " ".join(_format_plain(item) for item in value) + "]"
    if isinstance(value, Mapping):
        items = " ".join(f"{key}:{_format_plain(value[key])}" for key in sorted(value))
        return f"map[{items}]"
    return str(value)


@dataclass(eq=False, kw_only=True)
class Flag(ABC):
    """A named flag holding a default value and, once applied, a live :class:`Value`.

    Values can come from the command line through :meth:`set`, or from an
    outside source (environment variables by default) through :meth:`post_parse`.
    """

    name: str = ""
    category: str = ""
    default_text: str = ""
    hide_default: bool = False
    usage: str = ""
    env_vars: list[str] = field(default_factory=list)
    required: bool = False
    hidden: bool = False
    local: bool = False
    value: Any = None
    aliases: list[str] = field(default_factory=list)
    takes_file: bool = False
    action: Optional[FlagActionFunc] = None
    only_once: bool = False
    validator: Optional[Validator] = None
    validate_defaults: bool = False

    _count: int = field(default=0, init=False, repr=False)
    _has_been_set: bool = field(default=False, init=False, repr=False)
    _applied: bool = field(default=False, init=False, repr=False)
    _live: Optional[Value] = field(default=None, init=False, repr=False)

    _bool_kind: ClassVar[bool] = False
    _string_kind: ClassVar[bool] = False
    _multi_value: ClassVar[bool] = False

    @abstractmethod
    def _make_value(self, initial: Any, configured: bool) -> Value:
        """Build the live value from ``initial``; unconfigured values format plainly."""

    @abstractmethod
    def _type_name(self) -> str:
        """Short type name shown in help output."""

    @property
    def is_set(self) -> bool:
        """Whether the flag was set from the command line or an outside source."""
        return self._has_been_set

    @property
    def count(self) -> int:
        """How many times the flag was set."""
        return self._count

    def names(self) -> list[str]:
        """The flag's name followed by its aliases."""
        return [self.name, *self.aliases]

    def pre_parse(self) -> None:
        """Create the live value from the default and validate it if asked to."""
        self._live = self._make_value(self.value, True)
        if self.validator is not None and self.validate_defaults:
            self.validator(self._live.get())
        self._applied = True

    def _lookup_env(self) -> Optional[tuple]:
        for key in self.env_vars:
            if key in os.environ:
                return os.environ[key], f"environment variable {json.dumps(key)}"
        return None

    def post_parse(self, lookup: Optional[SourceLookup] = None) -> None:
        """Fill the flag from an outside source if the command line did not set it.

        ``lookup`` returns ``(text, source_description)`` or None; by default
        the environment variables in :attr:`env_vars` are searched in order.
        """
        if self._has_been_set:
            return
        found = (lookup or self._lookup_env)()
        if found is None:
            return
        text, source = found
        if text != "" or self._string_kind:
            try:
                self.set(text)
            except ValueError as exc:
                raise ValueError(
                    f"could not parse {json.dumps(text, ensure_ascii=False)} as "
                    f"{self.type_name()} value from {source} for flag {self.name}: {exc}"
                ) from exc
        elif self._bool_kind:
            try:
                self.set("false")
            except ValueError:
                pass
        self._has_been_set = True

    def set(self, text: str) -> None:
        """Parse ``text`` into the flag's value; raise ValueError when it does not fit."""
        if not self._applied or self.local:
            self.pre_parse()
        if self._count == 1 and self.only_once:
            raise ValueError("cant duplicate this flag")
        self._count += 1
        self._live.set(text)
        self._has_been_set = True
        if self.validator is not None:
            self.validator(self._live.get())

    def get(self) -> Any:
        """The live value once applied, otherwise the default."""
        if self._live is not None:
            return self._live.get()
        return self.value

    def get_value(self) -> str:
        """The default value as text, or ``""`` for flags that take no value."""
        if not self.takes_value():
            return ""
        return _format_plain(self.value)

    def type_name(self) -> str:
        """The short type name of the flag's value, e.g. ``int`` or ``string=string``."""
        return self._type_name()

    def takes_value(self) -> bool:
        """Whether the flag needs an argument."""
        return not self._bool_kind

    def get_default_text(self) -> str:
        """Text describing the default for help output."""
        if self.default_text:
            return self.default_text
        return self._make_value(self.value, False).to_string(self.value)

    def is_multi_value(self) -> bool:
        """Whether the flag collects several values (lists and mappings)."""
        return self._multi_value

    def is_bool_flag(self) -> bool:
        """Whether the live value works without an argument."""
        return self._live is not None and self._live.is_bool_flag()

    def run_action(self, ctx: Any, cmd: Any) -> Any:
        """Call the flag's action with the current value, if there is one."""
        if self.action is not None:
            return self.action(ctx, cmd, self.get())
        return None


@dataclass(eq=False, kw_only=True)
class IntFlag(Flag):
    """A signed integer flag of ``bits`` bits."""

    value: int = 0
    config: IntegerConfig = field(default_factory=IntegerConfig)
    bits: int = 64

    def _make_value(self, initial: int, configured: bool) -> Value:
        return IntValue(initial, self.config if configured else None, bits=self.bits)

    def _type_name(self) -> str:
        return "int"


@dataclass(eq=False, kw_only=True)
class UintFlag(Flag):
    """An unsigned integer flag of ``bits`` bits."""

    value: int = 0
    config: IntegerConfig = field(default_factory=IntegerConfig)
    bits: int = 64

    def _make_value(self, initial: int, configured: bool) -> Value:
        return UintValue(initial, self.config if configured else None, bits=self.bits)

    def _type_name(self) -> str:
        return "uint"


@dataclass(eq=False, kw_only=True)
class FloatFlag(Flag):
    """A floating point flag of 32 or 64 bits."""

    value: float = 0.0
    bits: int = 64

    def _make_value(self, initial: float, configured: bool) -> Value:
        return FloatValue(initial, bits=self.bits)

    def _type_name(self) -> str:
        return "float"


@dataclass(eq=False, kw_only=True)
class StringFlag(Flag):
    """A string flag."""

    value: str = ""
    _string_kind: ClassVar[bool] = True

    def _make_value(self, initial: str, configured: bool) -> Value:
        return StringValue(initial)

    def _type_name(self) -> str:
        return "string"


@dataclass(eq=False, kw_only=True)
class GenericFlag(Flag):
    """A flag whose value is a user-supplied :class:`Value`."""

    value: Optional[Value] = None

    def _make_value(self, initial: Optional[Value], configured: bool) -> Value:
        return GenericValue(initial)

    def _type_name(self) -> str:
        if self.value is None:
            return ""
        return _generic_type_name(type(self.value).__name__)


@dataclass(eq=False, kw_only=True)
class TimestampFlag(Flag):
    """A datetime flag parsed with the layouts in its config."""

    value: Optional[datetime] = None
    config: TimestampConfig = field(default_factory=TimestampConfig)

    def _make_value(self, initial: Optional[datetime], configured: bool) -> Value:
        return TimestampValue(initial, self.config if configured else None)

    def _type_name(self) -> str:
        return "time"


@dataclass(eq=False, kw_only=True)
class IntSliceFlag(Flag):
    """A list of signed integers."""

    value: list[int] = field(default_factory=list)
    config: IntegerConfig = field(default_factory=IntegerConfig)
    bits: int = 64
    _multi_value: ClassVar[bool] = True

    def _make_value(self, initial: list[int], configured: bool) -> Value:
        element = IntValue(0, self.config if configured else None, bits=self.bits)
        return SliceValue(element, initial)

    def _type_name(self) -> str:
        return "int"


@dataclass(eq=False, kw_only=True)
class UintSliceFlag(Flag):
    """A list of unsigned integers."""

    value: list[int] = field(default_factory=list)
    config: IntegerConfig = field(default_factory=IntegerConfig)
    bits: int = 64
    _multi_value: ClassVar[bool] = True

    def _make_value(self, initial: list[int], configured: bool) -> Value:
        element = UintValue(0, self.config if configured else None, bits=self.bits)
        return SliceValue(element, initial)

    def _type_name(self) -> str:
        return "uint"


@dataclass(eq=False, kw_only=True)
class FloatSliceFlag(Flag):
    """A list of floating point numbers."""

    value: list[float] = field(default_factory=list)
    bits: int = 64
    _multi_value: ClassVar[bool] = True

    def _make_value(self, initial: list[float], configured: bool) -> Value:
        return SliceValue(FloatValue(0.0, bits=self.bits), initial)

    def _type_name(self) -> str:
        return "float"


@dataclass(eq=False, kw_only=True)
class StringSliceFlag(Flag):
    """A list of strings."""

    value: list[str] = field(default_factory=list)
    _multi_value: ClassVar[bool] = True

    def _make_value(self, initial: list[str], configured: bool) -> Value:
        return SliceValue(StringValue(), initial)

    def _type_name(self) -> str:
        return "string"


@dataclass(eq=False, kw_only=True)
class StringMapFlag(Flag):
    """A mapping of string keys to string values, given as ``key=value`` items."""

    value: dict[str, str] = field(default_factory=dict)
    _multi_value: ClassVar[bool] = True

    def _make_value(self, initial: dict[str, str], configured: bool) -> Value:
        return MapValue(StringValue(), initial)

    def _type_name(self) -> str:
        return "string=string"