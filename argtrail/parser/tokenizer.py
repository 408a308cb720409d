# Argtrail Argument Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Splits a command line into positioned tokens.

A command line given as a string is split on whitespace only; no shell quoting
rules are applied. A pre-split sequence is used as-is. Every token keeps the
index it had in the input so later stages can report exactly which tokens
produced a value.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

SEPARATOR = "--"


@dataclass(frozen=True)
class Token:
    """A single raw command-line token and its position in the input."""

    text: str
    index: int

    @property
    def is_separator(self) -> bool:
        return self.text == SEPARATOR


def tokenize(line: str | Sequence[str] | None) -> list[Token]:
    """
    Split a command line into an ordered list of `Token`s.

    Args:
        line (str | Sequence[str] | None): The command line or pre-split tokens.

    Returns:
        list[Token]: Tokens with monotonically increasing indices.
    """
    if line is None:
        return []
    if isinstance(line, str):
        texts = line.split()
    else:
        texts = [str(text) for text in line]
    return [Token(text=text, index=index) for index, text in enumerate(texts)]
