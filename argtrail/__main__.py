"""
Argtrail Argument Engine

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

import asyncio
import logging
import os
import sys
from argparse import REMAINDER, ArgumentParser, Namespace
from pathlib import Path
from typing import Sequence

from rich.markup import escape

from argtrail.config import loader
from argtrail.console import console
from argtrail.diagnostics_table import build_diagnostics_table
from argtrail.exceptions import ArgtrailError
from argtrail.logger import logger
from argtrail.utils import setup_logging


def find_schema(explicit: str | None) -> Path | None:
    if explicit:
        return Path(explicit)
    candidates = [
        Path(os.environ.get("ARGTRAIL_SCHEMA", "argtrail.yaml")),
        Path.cwd() / "argtrail.yaml",
        Path.cwd() / "argtrail.toml",
    ]
    return next((p for p in candidates if p.exists()), None)


def get_root_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog="argtrail",
        description="Parse command-line tokens against an Argtrail schema file.",
        epilog="Options for argtrail itself must come before the tokens to parse.",
    )
    parser.add_argument(
        "-s",
        "--schema",
        help="Schema file (YAML or TOML). Defaults to $ARGTRAIL_SCHEMA or ./argtrail.yaml",
    )
    parser.add_argument(
        "--json", action="store_true", help="Print the parse result as JSON."
    )
    parser.add_argument(
        "--usage", action="store_true", help="Render the schema's help and exit."
    )
    parser.add_argument(
        "--log-mode", choices=["cli", "json"], default=None, help="Logging output mode."
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging."
    )
    parser.add_argument("tokens", nargs=REMAINDER, help="Tokens to parse.")
    return parser


def run(args: Namespace) -> int:
    schema_path = find_schema(args.schema)
    if not schema_path:
        console.print("[failure]❌ No schema file found.[/]")
        return 2
    try:
        parser = loader(schema_path)
    except (ArgtrailError, FileNotFoundError) as error:
        logger.error("Failed to load schema '%s': %s", schema_path, error)
        console.print(f"[failure]❌ Could not load schema '{schema_path}':[/] {error}")
        return 2

    if args.usage:
        parser.render_help()
        return 0

    tokens = args.tokens
    if tokens and tokens[0] == "--":
        tokens = tokens[1:]
    result = asyncio.run(parser.parse(tokens))

    if args.json:
        console.print_json(data=result.to_dict())
    else:
        console.print(build_diagnostics_table(result))
        for line in result.failures:
            console.print(f"[failure]{escape(line)}[/]")
    for error in result.errors:
        console.print(f"[failure]❌ {error}[/]")
    return result.code


def main(argv: Sequence[str] | None = None) -> int:
    args = get_root_parser().parse_args(argv)
    setup_logging(
        mode=args.log_mode,
        console_log_level=logging.DEBUG if args.verbose else logging.WARNING,
    )
    return run(args)


if __name__ == "__main__":
    sys.exit(main())
