"""Building blocks for command-line tools: flag values, flags, flag groups, help layout and suggestions."""

__version__ = "0.1.0"

__all__ = [
    "flags",
    "helptext",
    "maps",
    "mutex",
    "slices",
    "sorting",
    "suggestions",
    "values",
]