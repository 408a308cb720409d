# Argtrail Argument Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Classifies tokens as flag occurrences or positionals.

For each token, in order:
- an exact declared flag (`-a`, `--array`) starts an occurrence;
- `key=value` whose key is a declared flag starts an occurrence with `value`
  as its first value (the compound token is what gets recorded);
- `--` makes it and every later token positional;
- anything else is positional, except flag-looking tokens when the schema is
  closed, which are reported as unknown arguments.

After a flag matches, its type node decides how many following tokens it
takes: none for booleans, one for scalars, and for arrays everything up to the
next recognized flag, the separator, the end of input, or `nargs`.
"""
from __future__ import annotations

import re
from dataclasses import dataclass

from argtrail.logger import logger
from argtrail.parser.option import OptionSpec
from argtrail.parser.parser_types import Occurrence, ParseContext
from argtrail.parser.tokenizer import Token

_NUMBER_LIKE = re.compile(r"^-(\d+\.?\d*|\.\d+)([eE][-+]?\d+)?$")


@dataclass(frozen=True)
class FlagMatch:
    """A token resolved to a declared option."""

    spec: OptionSpec
    inline_value: str | None = None


class OptionMatcher:
    """Maps tokens to declared options for one schema."""

    def __init__(self, flag_map: dict[str, OptionSpec], allow_unknown: bool = True):
        self.flag_map = flag_map
        self.allow_unknown = allow_unknown

    def match(self, text: str) -> FlagMatch | None:
        """Return the option `text` refers to, if any."""
        if text in self.flag_map:
            return FlagMatch(self.flag_map[text])
        if text.startswith("-") and "=" in text:
            key, _, value = text.partition("=")
            if key in self.flag_map:
                return FlagMatch(self.flag_map[key], value)
        return None

    @staticmethod
    def looks_like_flag(text: str) -> bool:
        return (
            len(text) > 1
            and text.startswith("-")
            and text != "--"
            and not _NUMBER_LIKE.match(text)
        )

    def is_boundary(self, token: Token) -> bool:
        """True if `token` ends a run of values."""
        if token.is_separator or self.match(token.text) is not None:
            return True
        return not self.allow_unknown and self.looks_like_flag(token.text)

    def run(self, context: ParseContext) -> None:
        """Walk every token of `context`, recording occurrences and positionals."""
        tokens = context.tokens
        i = 0
        while i < len(tokens):
            token = tokens[i]
            if token.is_separator:
                for rest in tokens[i:]:
                    context.positional.add_token(rest, rest.text)
                logger.debug("Separator at index %d, remaining tokens are positional", i)
                break

            found = self.match(token.text)
            if found is None:
                if not self.allow_unknown and self.looks_like_flag(token.text):
                    context.invalid.append(f"Unknown argument: {token.text}")
                else:
                    context.positional.add_token(token, token.text)
                i += 1
                continue

            state = context.states[found.spec.dest]
            occurrence = state.start_occurrence()
            occurrence.add_token(token, found.inline_value)
            i = self.consume_values(tokens, i + 1, found.spec, occurrence)
        logger.debug(
            "Matched %d option occurrence(s) and %d positional token(s)",
            sum(len(state.occurrences) for state in context.states.values()),
            len(context.positional.values),
        )

    def consume_values(
        self, tokens: list[Token], start: int, spec: OptionSpec, occurrence: Occurrence
    ) -> int:
        """Consume value tokens for `occurrence` starting at `start`."""
        limit = spec.type_node.max_values
        i = start
        while i < len(tokens):
            if limit is not None and len(occurrence.values) >= limit:
                break
            if self.is_boundary(tokens[i]):
                break
            occurrence.add_token(tokens[i], tokens[i].text)
            i += 1
        return i
