# Argtrail Argument Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""Global console instance for Argtrail output."""
from rich.console import Console
from rich.theme import Theme

ARGTRAIL_THEME = Theme(
    {
        "failure": "bold red",
    }
)

console = Console(theme=ARGTRAIL_THEME)
