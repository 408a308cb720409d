# Argtrail Argument Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Result types returned by `ArgumentParser.parse()` and the assembler that builds them.

A `ParseResult` carries:
- `argv`: every alias of every option mapped to its value, plus `_` for positionals.
- `details.args`: the raw input tokens.
- `details.types`: one `ParsedValue` per option, positional entry first, then
  options in declaration order, each with the token indices and raw tokens
  that produced it.
- `errors`: internal failures (schema or programming problems).
- `code` / `output`: exit code and newline-joined user-input failure messages.

Exit codes: 0 when clean, 1 when only required options are missing, otherwise
the number of per-element failures.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from argtrail.parser.accumulator import FoldedValue
from argtrail.parser.parser_types import ParseContext
from argtrail.parser.utils import json_safe

POSITIONAL_KEY = "_"
POSITIONAL_TYPE_TAG = "array:string"


@dataclass
class ParsedValue:
    """
    A final value and the tokens it was derived from.

    Attributes:
        names (list[str]): Aliases sharing this value (`["_"]` for positionals).
        type_tag (str): The option's type tag, e.g. `array:number`.
        value (Any): The coerced value.
        origin (str): `"positional"`, `"flag"` or `"default"`.
        token_indices (list[int]): Indices of the consumed tokens.
        raw_tokens (list[str]): The consumed tokens, verbatim.
    """

    names: list[str]
    type_tag: str
    value: Any
    origin: str
    token_indices: list[int] = field(default_factory=list)
    raw_tokens: list[str] = field(default_factory=list)

    @classmethod
    def from_folded(
        cls, names: list[str], type_tag: str, folded: FoldedValue
    ) -> ParsedValue:
        return cls(
            names=names,
            type_tag=type_tag,
            value=folded.value,
            origin=folded.origin,
            token_indices=list(folded.token_indices),
            raw_tokens=list(folded.raw_tokens),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "names": self.names,
            "type": self.type_tag,
            "value": json_safe(self.value),
            "origin": self.origin,
            "token_indices": self.token_indices,
            "raw_tokens": self.raw_tokens,
        }


@dataclass
class ParseDetails:
    """Raw tokens and the ordered diagnostics trail."""

    args: list[str] = field(default_factory=list)
    types: list[ParsedValue] = field(default_factory=list)


@dataclass
class ParseResult:
    """The outcome of one parse."""

    argv: dict[str, Any] = field(default_factory=dict)
    details: ParseDetails = field(default_factory=ParseDetails)
    errors: list[str] = field(default_factory=list)
    code: int = 0
    output: str = ""

    @property
    def positionals(self) -> list[Any]:
        return self.argv.get(POSITIONAL_KEY, [])

    @property
    def values(self) -> dict[str, Any]:
        """Values keyed by every alias, without the positional entry."""
        return {key: value for key, value in self.argv.items() if key != POSITIONAL_KEY}

    @property
    def failures(self) -> list[str]:
        return self.output.splitlines()

    @property
    def ok(self) -> bool:
        return self.code == 0 and not self.errors

    def get_type(self, name: str) -> ParsedValue | None:
        """Return the diagnostics entry that `name` belongs to."""
        return next((entry for entry in self.details.types if name in entry.names), None)

    def to_dict(self) -> dict[str, Any]:
        return {
            "argv": json_safe(self.argv),
            "details": {
                "args": self.details.args,
                "types": [entry.to_dict() for entry in self.details.types],
            },
            "errors": self.errors,
            "code": self.code,
            "output": self.output,
        }


def exit_code(context: ParseContext) -> int:
    if context.errors:
        return 1
    if context.invalid:
        return len(context.invalid)
    if context.missing:
        return 1
    return 0


def assemble(
    context: ParseContext,
    positional: FoldedValue,
    folded: dict[str, FoldedValue],
) -> ParseResult:
    """
    Build the `ParseResult` for a finished parse.

    Args:
        context (ParseContext): The parse state, with failures collected.
        positional (FoldedValue): The folded `_` value.
        folded (dict[str, FoldedValue]): Folded option values keyed by dest.
            Options missing from the mapping are left out of the result.

    Returns:
        ParseResult: The assembled result.
    """
    types = [ParsedValue.from_folded([POSITIONAL_KEY], POSITIONAL_TYPE_TAG, positional)]
    argv: dict[str, Any] = {POSITIONAL_KEY: positional.value}
    for dest, state in context.states.items():
        if dest not in folded:
            continue
        spec = state.spec
        entry = ParsedValue.from_folded(list(spec.aliases), spec.type_tag, folded[dest])
        types.append(entry)
        for alias in spec.aliases:
            argv[alias] = entry.value

    return ParseResult(
        argv=argv,
        details=ParseDetails(args=context.args, types=types),
        errors=list(context.errors),
        code=exit_code(context),
        output="\n".join(context.failures),
    )
