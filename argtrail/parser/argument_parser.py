# Argtrail Argument Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""
This module implements `ArgumentParser`, the schema holder and parse driver of
Argtrail. It turns a command line into typed values and a diagnostics trail
describing which tokens produced each value.

Key Features:
- Declarative option registration via `add_option()` and `add_array()`
- Composable type nodes (`array:array:string`), delimiter-split arrays,
  cumulative or last-wins accumulation, defaults
- Per-kind strict validation with aggregated, fixed-format failure messages
- Token-level provenance for every value
- Rich-powered help rendering

Public Interface:
- `add_option(...)`: Register an option with a type tag or a `TypeNode`.
- `add_array(...)`: Register an array option of a given element type.
- `parse(...)`: Parse a command line into a `ParseResult`.
- `render_help()`: Render a rich-styled help listing.

Example Usage:
    parser = ArgumentParser(program="deploy")
    parser.add_array("-a, --array <vals..>")
    parser.add_option("-n", type="array:number")

    result = await parser.parse("-a one two -n=1 2 3,4")

    # result.argv == {'_': [], 'a': ['one', 'two'], 'array': ['one', 'two'],
    #                 'n': [1, 2, 3, 4]}

The schema is never modified by `parse()`, so one parser can serve any number
of parses, concurrently or not.
"""
from __future__ import annotations

from typing import Any, Iterable, Sequence

from rich.console import Console
from rich.markup import escape

from argtrail.console import console
from argtrail.exceptions import ArgtrailError, SchemaError
from argtrail.logger import logger
from argtrail.parser.accumulator import FoldedValue, fold_option, fold_positionals
from argtrail.parser.matcher import OptionMatcher
from argtrail.parser.option import OptionSpec, parse_flag_string, validate_flags
from argtrail.parser.parser_types import OptionState, ParseContext
from argtrail.parser.result import POSITIONAL_KEY, ParseResult, assemble
from argtrail.parser.tokenizer import tokenize
from argtrail.parser.type_kind import TypeKind
from argtrail.parser.type_node import DEFAULT_DELIMITER, TypeNode
from argtrail.parser.validator import ExistsCheck, Validator


class ArgumentParser:
    """
    Schema of options plus the machinery to parse command lines against it.

    Features:
    - Aliased flags sharing one value (`-a, --array`).
    - `key=value` tokens (`-n=1`, `--files=g,h`).
    - `--` separator; it and everything after are positional.
    - Open (unknown flags become positionals) or closed schemas.
    - Injected path existence check, sync or async.
    """

    def __init__(
        self,
        program: str | None = None,
        description: str = "",
        epilog: str = "",
        allow_unknown: bool = True,
        exists: ExistsCheck | None = None,
    ) -> None:
        """Initialize the ArgumentParser."""
        self.console: Console = console
        self.program: str | None = program
        self.description: str = description
        self.epilog: str = epilog
        self.allow_unknown: bool = allow_unknown
        self.exists: ExistsCheck | None = exists
        self._options: list[OptionSpec] = []
        self._flag_map: dict[str, OptionSpec] = {}
        self._dest_set: set[str] = set()

    @property
    def options(self) -> list[OptionSpec]:
        return list(self._options)

    def _resolve_flags(self, flags: str | Sequence[str]) -> tuple[tuple[str, ...], str]:
        if isinstance(flags, str):
            resolved, hint = parse_flag_string(flags)
        else:
            resolved, hint = tuple(flags), ""
        validate_flags(resolved)
        return resolved, hint

    def _build_type_node(
        self,
        type: str | TypeNode,
        delimiter: str | bool | None,
        cumulative: bool,
        nargs: int | None,
        strict: bool,
        choices: Iterable[Any] | None,
        must_exist: bool | None,
    ) -> TypeNode:
        if isinstance(type, TypeNode):
            customized = (
                delimiter != DEFAULT_DELIMITER
                or not cumulative
                or nargs is not None
                or strict
                or choices is not None
                or must_exist is not None
            )
            if customized:
                raise SchemaError(
                    "Type attributes cannot be combined with a prebuilt TypeNode"
                )
            return type
        return TypeNode.from_tag(
            type,
            delimiter=delimiter,
            cumulative=cumulative,
            nargs=nargs,
            strict=strict,
            choices=choices,
            must_exist=must_exist,
        )

    def _validate_required(self, required: bool, type_node: TypeNode) -> bool:
        if required and type_node.kind == TypeKind.BOOLEAN:
            raise SchemaError("Boolean options cannot be required")
        return bool(required)

    def _validate_default(self, default: Any, type_node: TypeNode, dest: str) -> None:
        """Validate the default value against the option's type."""
        if default is None:
            return
        if type_node.kind == TypeKind.BOOLEAN and not isinstance(default, bool):
            raise SchemaError(
                f"Default value {default!r} for '{dest}' must be a boolean"
            )
        leaf = type_node.leaf
        if leaf.kind == TypeKind.ENUM:
            defaults = type_node.iter_leaves(type_node.default_value(default))
            for item in defaults:
                if item not in leaf.choices:
                    raise SchemaError(
                        f"Default value '{item}' for '{dest}' not in allowed "
                        f"choices: {leaf.choices}"
                    )

    def _register_option(self, option: OptionSpec) -> None:
        for flag in option.flags:
            if flag in self._flag_map:
                existing = self._flag_map[flag]
                raise SchemaError(
                    f"Flag '{flag}' is already used by option '{existing.dest}'"
                )
        if POSITIONAL_KEY in option.aliases:
            raise SchemaError(f"'{POSITIONAL_KEY}' is reserved for positional values")
        if option.dest in self._dest_set:
            raise SchemaError(f"Destination '{option.dest}' is already defined.")

        for flag in option.flags:
            self._flag_map[flag] = option
        self._dest_set.add(option.dest)
        self._options.append(option)
        logger.debug("Registered option %s as %s", option.flags, option.type_tag)

    def add_option(
        self,
        flags: str | Sequence[str],
        type: str | TypeNode = "string",
        *,
        default: Any = None,
        required: bool = False,
        strict: bool = False,
        choices: Iterable[Any] | None = None,
        must_exist: bool | None = None,
        delimiter: str | bool | None = DEFAULT_DELIMITER,
        cumulative: bool = True,
        nargs: int | None = None,
        help: str = "",
    ) -> OptionSpec:
        """
        Define a new option for the parser.

        Args:
            flags (str | Sequence[str]): Declaration such as `"-a, --array <vals..>"`,
                or the dashed flags themselves.
            type (str | TypeNode): A type tag (`"number"`, `"array:enum"`, ...) or a
                prebuilt `TypeNode`.
            default (Any): Value used when the option never occurs.
            required (bool): Whether the option must occur (unless defaulted).
            strict (bool): Report unparsable numbers as failures.
            choices (Iterable | None): Allowed values for enum types.
            must_exist (bool | None): Existence policy for path, file and dir types.
            delimiter (str | bool | None): Fragment separator for arrays, falsy disables.
            cumulative (bool): Concatenate repeated occurrences of an array.
            nargs (int | None): Maximum tokens per occurrence for arrays.
            help (str): Help text for rendering.

        Returns:
            OptionSpec: The registered option.

        Raises:
            SchemaError: If the declaration is invalid.
        """
        resolved_flags, hint = self._resolve_flags(flags)
        type_node = self._build_type_node(
            type, delimiter, cumulative, nargs, strict, choices, must_exist
        )
        required = self._validate_required(required, type_node)
        option = OptionSpec(
            flags=resolved_flags,
            type_node=type_node,
            required=required,
            default=default,
            help=help,
            hint=hint,
        )
        self._validate_default(default, type_node, option.dest)
        self._register_option(option)
        return option

    def add_array(
        self,
        flags: str | Sequence[str],
        of: str | TypeNode = "string",
        *,
        delimiter: str | bool | None = DEFAULT_DELIMITER,
        cumulative: bool = True,
        nargs: int | None = None,
        **kwargs: Any,
    ) -> OptionSpec:
        """
        Define an array option whose elements are of type `of`.

        `of` may be a tag (`"number"`, `"array:string"`) or a prebuilt `TypeNode`,
        which is how arrays of customized arrays are declared.
        """
        if isinstance(of, TypeNode):
            type_node = TypeNode.array_of(
                of, delimiter=delimiter, cumulative=cumulative, nargs=nargs
            )
            return self.add_option(flags, type_node, **kwargs)
        return self.add_option(
            flags,
            f"array:{of}",
            delimiter=delimiter,
            cumulative=cumulative,
            nargs=nargs,
            **kwargs,
        )

    def get_option(self, name: str) -> OptionSpec | None:
        """
        Return the option a flag or alias refers to.

        Args:
            name (str): A dashed flag (`--array`) or alias (`array`).

        Returns:
            OptionSpec or None: Matching option, if defined.
        """
        if name in self._flag_map:
            return self._flag_map[name]
        return next((spec for spec in self._options if name in spec.aliases), None)

    def to_definition_list(self) -> list[dict[str, Any]]:
        """
        Convert option metadata into a serializable list of dicts.

        Returns:
            List of definitions for use in config introspection, documentation, or export.
        """
        return [
            {
                "flags": spec.flags,
                "aliases": spec.aliases,
                "type": spec.type_tag,
                "required": spec.required,
                "default": spec.default,
                "cumulative": spec.cumulative,
                "help": spec.help,
            }
            for spec in self._options
        ]

    async def parse(
        self,
        line: str | Sequence[str] | None = None,
        exists: ExistsCheck | None = None,
    ) -> ParseResult:
        """
        Parse a command line into a `ParseResult`.

        User-input failures never raise; they are reported through `code` and
        `output`. An `ArgtrailError` raised while parsing aborts the parse and is
        reported through `errors`.

        Args:
            line (str | Sequence[str] | None): The command line or pre-split tokens.
            exists (ExistsCheck | None): Existence check overriding the parser's.

        Returns:
            ParseResult: Values, diagnostics, failures and exit code.
        """
        context = ParseContext(
            tokens=tokenize(line),
            states={spec.dest: OptionState(spec) for spec in self._options},
        )
        logger.debug("Parsing %d token(s): %s", len(context.tokens), context.args)
        positional = FoldedValue(value=[], origin="default")
        folded: dict[str, FoldedValue] = {}
        try:
            OptionMatcher(self._flag_map, self.allow_unknown).run(context)
            positional = fold_positionals(context.positional)
            for dest, state in context.states.items():
                folded[dest] = fold_option(state)
            await Validator(exists or self.exists).validate(context, folded)
        except ArgtrailError as error:
            logger.exception("Parse aborted: %s", error)
            context.errors.append(str(error))

        result = assemble(context, positional, folded)
        logger.debug("Parse finished with code %d", result.code)
        return result

    def get_options_text(self, plain_text=False) -> str:
        """
        Render all defined options as a usage-style string.

        Returns:
            str: A visual description of option flags and structure.
        """
        options_list = []
        for spec in self._options:
            choice_text = spec.get_choice_text()
            text = f"{spec.flags[0]} {choice_text}" if choice_text else spec.flags[0]
            text = text if spec.required else f"[{text}]"
            options_list.append(text if plain_text else escape(text))
        return " ".join(options_list)

    def get_usage(self, plain_text=False) -> str:
        """
        Render the usage string for this parser.

        Returns:
            str: A formatted usage line showing syntax and option structure.
        """
        program = self.program or "argtrail"
        options_text = self.get_options_text(plain_text)
        if options_text:
            return f"{program} {options_text}"
        return program

    def render_help(self) -> None:
        """
        Print formatted help text for this parser using Rich output.

        Includes usage, description, options and optional epilog.
        """
        usage = self.get_usage()
        self.console.print(f"[bold]usage: {usage}[/bold]\n")

        if self.description:
            self.console.print(self.description + "\n")

        if self._options:
            self.console.print("[bold]options:[/bold]")
            for spec in self._options:
                flags = ", ".join(spec.flags)
                flags_choice = escape(f"{flags} {spec.get_choice_text()}".strip())
                arg_line = f"  {flags_choice:<30} "
                help_text = spec.help or ""
                type_text = f"[dim]({spec.type_tag})[/dim]"
                if help_text and len(flags_choice) > 30:
                    help_text = f"\n{'':<33}{help_text}"
                self.console.print(f"{arg_line}{help_text} {type_text}")

        if self.epilog:
            self.console.print("\n" + self.epilog, style="dim")

    def __str__(self) -> str:
        """Return a human-readable summary of the parser state."""
        required = sum(spec.required for spec in self._options)
        return (
            f"ArgumentParser(options={len(self._options)}, "
            f"flags={len(self._flag_map)}, required={required}, "
            f"allow_unknown={self.allow_unknown})"
        )

    def __repr__(self) -> str:
        return str(self)
