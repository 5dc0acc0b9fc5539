"""Groups of flags of which at most one option path may be given."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


class MutuallyExclusiveGroupError(ValueError):
    """Two flags from different options of one group were both set."""

    def __init__(self, flag1_name: str, flag2_name: str) -> None:
        self.flag1_name = flag1_name
        self.flag2_name = flag2_name
        super().__init__(f"option {flag1_name} cannot be set along with option {flag2_name}")


class MutuallyExclusiveRequiredError(ValueError):
    """A required group had none of its flags set."""

    def __init__(self, group: MutuallyExclusiveFlags) -> None:
        self.group = group
        options = " | ".join(
            "[ " + " ".join("--" + flag.names()[0] for flag in option) + " ]"
            for option in group.flags
        )
        super().__init__(f"one of these flags needs to be provided: {options}")


@dataclass
class MutuallyExclusiveFlags:
    """Several option paths, each a list of flags; only one path may be used.

    For example ``[ --foo | [ --bar something --darth somethingelse ] ]``.
    """

    flags: list[list[Any]] = field(default_factory=list)
    required: bool = False
    category: str = ""

    def check(self) -> None:
        """Raise if flags of two option paths are set, or none is set in a required group."""
        first_name = ""
        one_set = False
        for option in self.flags:
            for flag in option:
                if flag.is_set:
                    if one_set:
                        raise MutuallyExclusiveGroupError(first_name, flag.names()[0])
                    first_name = flag.names()[0]
                    one_set = True
                    break
                if one_set:
                    break

        if not one_set and self.required:
            raise MutuallyExclusiveRequiredError(self)

    def propagate_category(self) -> None:
        """Give every flag in the group the group's category."""
        for option in self.flags:
            for flag in option:
                if hasattr(flag, "category"):
                    flag.category = self.category