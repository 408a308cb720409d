# Argtrail Argument Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `TypeKind`, the discriminant of every `TypeNode`.

Scalar kinds convert exactly one token. `ARRAY` is the only composite kind; it
owns a child node of any kind except `BOOLEAN`.

Supports alias coercion for shorthand or config-friendly values.

Example:
    TypeKind("number") → TypeKind.NUMBER
    TypeKind("str")    → TypeKind.STRING (via alias)
    TypeKind("bool")   → TypeKind.BOOLEAN (via alias)
"""
from __future__ import annotations

from enum import Enum


class TypeKind(Enum):
    """
    Kinds of value a `TypeNode` can produce.

    Members:
        STRING: Keep the token text.
        NUMBER: Parse an int or float, NaN on failure.
        ENUM: Token text restricted to a set of choices.
        PATH: A filesystem path string.
        FILE: A filesystem path expected to name a file.
        DIR: A filesystem path expected to name a directory.
        BOOLEAN: A presence flag, optionally `--flag=false`.
        ARRAY: A sequence of values produced by a child node.
    """

    STRING = "string"
    NUMBER = "number"
    ENUM = "enum"
    PATH = "path"
    FILE = "file"
    DIR = "dir"
    BOOLEAN = "boolean"
    ARRAY = "array"

    @classmethod
    def choices(cls) -> list[TypeKind]:
        """Return a list of all type kinds."""
        return list(cls)

    @classmethod
    def _get_alias(cls, value: str) -> str:
        aliases = {
            "str": "string",
            "num": "number",
            "bool": "boolean",
            "flag": "boolean",
            "list": "array",
        }
        return aliases.get(value, value)

    @classmethod
    def _missing_(cls, value: object) -> TypeKind:
        if not isinstance(value, str):
            raise ValueError(f"Invalid {cls.__name__}: {value!r}")
        normalized = value.strip().lower()
        alias = cls._get_alias(normalized)
        for member in cls:
            if member.value == alias:
                return member
        valid = ", ".join(member.value for member in cls)
        raise ValueError(f"Invalid {cls.__name__}: '{value}'. Must be one of: {valid}")

    @property
    def is_path_like(self) -> bool:
        return self in (TypeKind.PATH, TypeKind.FILE, TypeKind.DIR)

    def __str__(self) -> str:
        """Return the string representation of the type kind."""
        return self.value
