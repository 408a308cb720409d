# Argtrail Argument Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Per-parse state models for Argtrail's argument parser.

Nothing here outlives a single call to `ArgumentParser.parse()`; the schema is
shared, these objects are not.

Contents:
- `Occurrence`: One appearance of a flag and the tokens it consumed.
- `OptionState`: All occurrences of one option, in encounter order.
- `ParseContext`: Everything a parse threads through matching, folding and
  validation: tokens, option states, positional tokens and collected failures.
"""
from __future__ import annotations

from dataclasses import dataclass, field

from argtrail.parser.option import OptionSpec
from argtrail.parser.tokenizer import Token


@dataclass
class Occurrence:
    """Tokens consumed by one flag appearance (or by the positional group)."""

    token_indices: list[int] = field(default_factory=list)
    raw_tokens: list[str] = field(default_factory=list)
    values: list[str] = field(default_factory=list)

    def add_token(self, token: Token, value: str | None = None) -> None:
        """Record `token` as consumed, optionally contributing `value`."""
        if not self.token_indices or self.token_indices[-1] != token.index:
            self.token_indices.append(token.index)
            self.raw_tokens.append(token.text)
        if value is not None:
            self.values.append(value)

    def extend(self, other: Occurrence) -> None:
        self.token_indices.extend(other.token_indices)
        self.raw_tokens.extend(other.raw_tokens)
        self.values.extend(other.values)


@dataclass
class OptionState:
    """Tracks an option and every occurrence of it."""

    spec: OptionSpec
    occurrences: list[Occurrence] = field(default_factory=list)

    @property
    def consumed(self) -> bool:
        return bool(self.occurrences)

    def start_occurrence(self) -> Occurrence:
        occurrence = Occurrence()
        self.occurrences.append(occurrence)
        return occurrence


@dataclass
class ParseContext:
    """State for a single parse invocation."""

    tokens: list[Token]
    states: dict[str, OptionState]
    positional: Occurrence = field(default_factory=Occurrence)
    missing: list[str] = field(default_factory=list)
    invalid: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def args(self) -> list[str]:
        return [token.text for token in self.tokens]

    @property
    def failures(self) -> list[str]:
        """Failure messages, required-missing first."""
        return self.missing + self.invalid
