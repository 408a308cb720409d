# Argtrail Argument Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Validates folded option values and collects user-input failures.

Validation never raises for bad input. Every option is checked, in schema order,
and each failure becomes one fixed-format message:

- `Missing required argument: a or array`
- `Value "NaN" is invalid for argument n. Please specify a number.`
- `Value "ruby" is invalid for argument e. Choices are: node, java, rust`
- `The path does not exist: blerg_dne`
- `The path already exists: out.txt`

Required-missing failures are collected before any per-element check. Which
elements are checked depends on the leaf kind: numbers when `strict`, enums
always, path-like kinds when `must_exist` is a boolean.

Path existence goes through an injected `exists(path)` callable, sync or async.
Without one, `os.path.exists`, `os.path.isfile` or `os.path.isdir` is used
depending on the kind.
"""
from __future__ import annotations

import os
from typing import Any, Awaitable, Callable

from argtrail.exceptions import ExistenceCheckError
from argtrail.logger import logger
from argtrail.parser.accumulator import FoldedValue
from argtrail.parser.option import OptionSpec
from argtrail.parser.parser_types import ParseContext
from argtrail.parser.type_kind import TypeKind
from argtrail.parser.type_node import TypeNode
from argtrail.parser.utils import display_value, is_nan
from argtrail.utils import ensure_async

ExistsCheck = Callable[[str], bool | Awaitable[bool]]

DEFAULT_EXISTS_CHECKS: dict[TypeKind, Callable[[str], bool]] = {
    TypeKind.PATH: os.path.exists,
    TypeKind.FILE: os.path.isfile,
    TypeKind.DIR: os.path.isdir,
}


class Validator:
    """Runs required and strict checks over folded values."""

    def __init__(self, exists: ExistsCheck | None = None) -> None:
        self.exists = ensure_async(exists) if exists else None
        self._element_checks = {
            TypeKind.NUMBER: self._check_number,
            TypeKind.ENUM: self._check_enum,
            TypeKind.PATH: self._check_path,
            TypeKind.FILE: self._check_path,
            TypeKind.DIR: self._check_path,
        }

    async def validate(
        self, context: ParseContext, folded: dict[str, FoldedValue]
    ) -> None:
        """
        Record failures for every option of `context` into `context.missing`
        and `context.invalid`.

        Args:
            context (ParseContext): The current parse.
            folded (dict[str, FoldedValue]): Folded values keyed by option dest.
        """
        missing = set()
        for dest, state in context.states.items():
            spec = state.spec
            if spec.required and not state.consumed and spec.default is None:
                context.missing.append(
                    f"Missing required argument: {spec.names_text()}"
                )
                missing.add(dest)

        for dest, state in context.states.items():
            if dest in missing or folded[dest].origin != "flag":
                continue
            await self.check_value(state.spec, folded[dest].value, context.invalid)

        logger.debug(
            "Validation finished: %d missing, %d invalid",
            len(context.missing),
            len(context.invalid),
        )

    async def check_value(
        self, spec: OptionSpec, value: Any, failures: list[str]
    ) -> None:
        leaf = spec.type_node.leaf
        if not leaf.is_strict:
            return
        check = self._element_checks.get(leaf.kind)
        if check is None:
            return
        for element in spec.type_node.iter_leaves(value):
            message = await check(spec, leaf, element)
            if message:
                failures.append(message)

    async def _check_number(
        self, spec: OptionSpec, leaf: TypeNode, element: Any
    ) -> str | None:
        if is_nan(element):
            return (
                f'Value "{display_value(element)}" is invalid for argument '
                f"{spec.names_text()}. Please specify a number."
            )
        return None

    async def _check_enum(
        self, spec: OptionSpec, leaf: TypeNode, element: Any
    ) -> str | None:
        if element not in leaf.choices:
            return (
                f'Value "{display_value(element)}" is invalid for argument '
                f"{spec.names_text()}. Choices are: {', '.join(leaf.choices)}"
            )
        return None

    async def _check_path(
        self, spec: OptionSpec, leaf: TypeNode, element: Any
    ) -> str | None:
        path = str(element)
        found = await self.path_exists(path, leaf.kind)
        if leaf.must_exist and not found:
            return f"The path does not exist: {path}"
        if leaf.must_exist is False and found:
            return f"The path already exists: {path}"
        return None

    async def path_exists(self, path: str, kind: TypeKind) -> bool:
        """Run the injected (or default) existence check for `path`."""
        check = self.exists or ensure_async(DEFAULT_EXISTS_CHECKS[kind])
        try:
            return bool(await check(path))
        except Exception as error:
            raise ExistenceCheckError(
                f"Existence check failed for '{path}': {error}"
            ) from error
