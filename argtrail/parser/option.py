# Argtrail Argument Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines the `OptionSpec` dataclass used by `ArgumentParser` to represent one
declared flag and the `TypeNode` that converts its values.

Options are declared with a flag string in the familiar help-text form:

    "-a, --array <vals..>"
    "-a|--array"
    "n"                      # bare names become -n / --name

Everything from the first `<` or `[` on is a placeholder kept for help output.

Key Attributes:
- `flags`: Dashed flags as typed on the command line (`-a`, `--array`).
- `aliases`: The same names without dashes, used as keys in `argv`.
- `type_node`: Converter for this option's values.
- `required`, `default`, `help`, `hint`.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from argtrail.exceptions import SchemaError
from argtrail.parser.type_node import TypeNode

_NAME_SPLIT = re.compile(r"[,|\s]+")


def parse_flag_string(text: str) -> tuple[tuple[str, ...], str]:
    """
    Split a flag declaration into dashed flags and a placeholder hint.

    Args:
        text (str): Declaration such as `"-n, --numbers <n1 [n2 n3..]>"`.

    Returns:
        tuple[tuple[str, ...], str]: The flags and the hint (possibly empty).
    """
    if not isinstance(text, str):
        raise SchemaError(f"Flags must be declared as a string, got {text!r}")
    names_part, hint = text, ""
    match = re.search(r"[<\[]", text)
    if match:
        names_part, hint = text[: match.start()], text[match.start() :].strip()
    flags = []
    for name in _NAME_SPLIT.split(names_part.strip()):
        if not name:
            continue
        if not name.startswith("-"):
            name = f"-{name}" if len(name) == 1 else f"--{name}"
        flags.append(name)
    return tuple(flags), hint


def validate_flags(flags: tuple[str, ...]) -> None:
    """Validate the flags provided for an option."""
    if not flags:
        raise SchemaError("No flags provided")
    for flag in flags:
        if not isinstance(flag, str):
            raise SchemaError(f"Flag '{flag}' must be a string")
        if not flag.startswith("-") or flag == "--":
            raise SchemaError(f"Flag '{flag}' must start with '-' and name an option")
        if flag.startswith("---"):
            raise SchemaError(f"Flag '{flag}' cannot start with more than two dashes")
        if "=" in flag:
            raise SchemaError(f"Flag '{flag}' cannot contain '='")
        if flag.startswith("--") and len(flag) < 3:
            raise SchemaError(f"Flag '{flag}' must be at least 3 characters long")
        if not flag.startswith("--") and len(flag) != 2:
            raise SchemaError(
                f"Flag '{flag}' must be a single character or start with '--'"
            )
    if len(set(flags)) != len(flags):
        raise SchemaError(f"Duplicate flags in declaration: {', '.join(flags)}")


@dataclass
class OptionSpec:
    """
    Represents a declared command-line option.

    Attributes:
        flags (tuple[str, ...]): Short and long flags for the option.
        type_node (TypeNode): Converter for the option's values.
        required (bool): True if the option must occur (or have a default).
        default (Any): Value used when the option never occurs.
        help (str): Help text for the option.
        hint (str): Placeholder text from the declaration, e.g. `<vals..>`.
    """

    flags: tuple[str, ...]
    type_node: TypeNode
    required: bool = False
    default: Any = None
    help: str = ""
    hint: str = ""

    @property
    def aliases(self) -> tuple[str, ...]:
        return tuple(flag.lstrip("-") for flag in self.flags)

    @property
    def dest(self) -> str:
        """The primary (longest) alias."""
        return max(self.aliases, key=len)

    @property
    def cumulative(self) -> bool:
        return self.type_node.is_array and self.type_node.cumulative

    @property
    def type_tag(self) -> str:
        return self.type_node.tag

    def names_text(self) -> str:
        """Aliases joined the way failure messages name an option."""
        return " or ".join(self.aliases)

    def get_choice_text(self) -> str:
        """Get the value placeholder text for help output."""
        if self.hint:
            return self.hint
        leaf = self.type_node.leaf
        if not self.type_node.takes_values:
            return ""
        if leaf.choices:
            choice_text = f"{{{','.join(leaf.choices)}}}"
        else:
            choice_text = self.dest.upper()
        if self.type_node.is_array:
            return f"{choice_text} [{choice_text} ...]"
        return choice_text
