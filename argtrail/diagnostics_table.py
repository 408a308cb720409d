# Argtrail Argument Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Generates a Rich table view of a parse's diagnostics trail.

Each row shows one value: the names it is bound to, its type tag, where it came
from (flag, positional or default), the value itself and the raw tokens with
their indices.

Functions:
- build_diagnostics_table(result): Returns a `rich.Table` for a `ParseResult`.
"""
from rich import box
from rich.markup import escape
from rich.table import Table

from argtrail.parser.result import ParseResult
from argtrail.parser.utils import display_value

ORIGIN_STYLES = {
    "flag": "bold cyan",
    "positional": "green",
    "default": "dim",
}


def _format_value(value) -> str:
    if isinstance(value, list):
        return "[" + ", ".join(_format_value(item) for item in value) + "]"
    return display_value(value)


def build_diagnostics_table(result: ParseResult, title: str = "Parsed values") -> Table:
    """Custom table builder that lists each value with its source tokens."""
    table = Table(title=title, box=box.SIMPLE)
    table.add_column("Names", style="bold")
    table.add_column("Type")
    table.add_column("Origin")
    table.add_column("Value")
    table.add_column("Tokens", style="yellow")

    for entry in result.details.types:
        tokens = " ".join(
            f"{index}:{escape(raw)}"
            for index, raw in zip(entry.token_indices, entry.raw_tokens)
        )
        style = ORIGIN_STYLES.get(entry.origin, "white")
        table.add_row(
            escape(", ".join(entry.names)),
            entry.type_tag,
            f"[{style}]{entry.origin}[/]",
            escape(_format_value(entry.value)),
            tokens,
        )

    return table
