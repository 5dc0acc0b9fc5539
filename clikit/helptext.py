"""Text helpers for help output and shell completion suggestions."""

from __future__ import annotations

import os
from collections.abc import Iterable, Sequence
from typing import Any, TextIO


def subtract(a: int, b: int) -> int:
    """Return ``a - b``."""
    return a - b


def indent(spaces: int, text: str) -> str:
    """Prefix the text and every line after a newline with ``spaces`` spaces."""
    pad = " " * spaces
    return pad + text.replace("\n", "\n" + pad)


def nindent(spaces: int, text: str) -> str:
    """Like :func:`indent`, with a leading newline."""
    return "\n" + indent(spaces, text)


def wrap(text: str, offset: int, wrap_at: int) -> str:
    """Wrap each line of ``text`` at ``wrap_at`` columns, indenting continuations by ``offset``."""
    padding = " " * offset
    out = []
    for number, line in enumerate(text.split("\n")):
        if not line:
            out.append(line)
            continue
        wrapped = wrap_line(line, offset, wrap_at, padding)
        out.append(wrapped if number == 0 else padding + wrapped)
    return "\n".join(out)


def wrap_line(text: str, offset: int, wrap_at: int, padding: str) -> str:
    """Wrap a single line on word boundaries; continuation lines start with ``padding``."""
    if wrap_at <= offset or len(text) <= wrap_at - offset:
        return text

    line_width = wrap_at - offset
    words = text.split()
    if not words:
        return text

    wrapped = words[0]
    space_left = line_width - len(wrapped)
    for word in words[1:]:
        if len(word) + 1 > space_left:
            wrapped += "\n" + padding + word
            space_left = line_width - len(word)
        else:
            wrapped += " " + word
            space_left -= 1 + len(word)
    return wrapped


def offset(text: str, fixed: int) -> int:
    """Return the length of ``text`` plus ``fixed``."""
    return len(text) + fixed


def offset_commands(name_lists: Iterable[Sequence[str]], fixed: int) -> int:
    """Return the widest ``", "``-joined name list plus ``fixed``, for column alignment."""
    widest = max((len(", ".join(names)) for names in name_lists), default=0)
    return widest + fixed


def cli_arg_contains(flag_name: str, args: Sequence[str]) -> bool:
    """Return True if any comma-separated name of the flag appears, dashed, in ``args``."""
    for name in flag_name.split(","):
        name = name.strip()
        dashed = "-" * min(len(name), 2) + name
        if dashed in args:
            return True
    return False


def _is_zsh(shell: str | None) -> bool:
    if shell is None:
        shell = os.environ.get("SHELL", "")
    return shell.endswith("zsh")


def print_command_suggestions(
    commands: Iterable[Any], writer: TextIO, shell: str | None = None
) -> None:
    """Write the names of visible commands, one per line; zsh also gets the usage.

    When ``shell`` is None the ``SHELL`` environment variable is used.
    """
    zsh = _is_zsh(shell)
    for command in commands:
        if getattr(command, "hidden", False):
            continue
        if zsh:
            writer.write(f"{command.name}:{getattr(command, 'usage', '') or ''}\n")
        else:
            writer.write(f"{command.name}\n")


def _takes_value(flag: Any) -> bool:
    takes_value = getattr(flag, "takes_value", None)
    if callable(takes_value):
        return bool(takes_value())
    return True


def print_flag_suggestions(
    last_arg: str, flags: Iterable[Any], writer: TextIO, shell: str | None = None
) -> None:
    """Write completions for flags whose first name starts with ``last_arg``.

    Hidden boolean flags are skipped, and short flags are not offered after a
    ``--`` prefix. Under zsh the usage text follows the flag after a colon.
    """
    zsh = _is_zsh(shell)
    current = last_arg.lstrip("-")
    for flag in flags:
        if getattr(flag, "hidden", False) and not _takes_value(flag):
            continue

        usage = getattr(flag, "usage", "") or ""
        name = flag.names()[0].strip()
        dashes = min(len(name), 2)
        if last_arg.startswith("--") and dashes == 1:
            continue
        if name.startswith(current) and current != name:
            completion = "-" * dashes + name
            if usage and zsh:
                completion = f"{completion}:{usage}"
            writer.write(completion + "\n")