# Argtrail Argument Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Folds the occurrences of each option into one value and its provenance.

- Cumulative arrays concatenate every occurrence's elements, token indices and
  raw tokens in encounter order.
- Non-cumulative arrays and scalars keep only the last occurrence.
- Options that never occurred take their default (arrays wrap a scalar default
  into a one-element list) or their type's zero value.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from argtrail.parser.parser_types import Occurrence, OptionState
from argtrail.parser.type_node import TypeNode


@dataclass
class FoldedValue:
    """An option's final value before validation."""

    value: Any
    origin: str
    token_indices: list[int] = field(default_factory=list)
    raw_tokens: list[str] = field(default_factory=list)


def fold_occurrences(type_node: TypeNode, occurrences: list[Occurrence]) -> FoldedValue:
    """
    Convert and merge occurrences with the node's accumulation policy.

    Args:
        type_node (TypeNode): The option's outermost node.
        occurrences (list[Occurrence]): Occurrences in encounter order, non-empty.

    Returns:
        FoldedValue: The merged value with origin `"flag"`.
    """
    assert occurrences, "fold_occurrences needs at least one occurrence"
    if not (type_node.is_array and type_node.cumulative):
        last = occurrences[-1]
        return FoldedValue(
            value=type_node.convert(last.values),
            origin="flag",
            token_indices=list(last.token_indices),
            raw_tokens=list(last.raw_tokens),
        )

    merged = Occurrence()
    elements: list[Any] = []
    for occurrence in occurrences:
        elements.extend(type_node.convert(occurrence.values))
        merged.extend(occurrence)
    return FoldedValue(
        value=elements,
        origin="flag",
        token_indices=merged.token_indices,
        raw_tokens=merged.raw_tokens,
    )


def fold_option(state: OptionState) -> FoldedValue:
    """Fold an option's occurrences, or fall back to its default."""
    spec = state.spec
    if state.consumed:
        return fold_occurrences(spec.type_node, state.occurrences)
    return FoldedValue(value=spec.type_node.default_value(spec.default), origin="default")


def fold_positionals(occurrence: Occurrence) -> FoldedValue:
    """Fold the positional tokens into the `_` value."""
    if not occurrence.token_indices:
        return FoldedValue(value=[], origin="default")
    return FoldedValue(
        value=list(occurrence.values),
        origin="positional",
        token_indices=list(occurrence.token_indices),
        raw_tokens=list(occurrence.raw_tokens),
    )
