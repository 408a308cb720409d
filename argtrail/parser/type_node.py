# Argtrail Argument Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `TypeNode`, the composable value converter bound to every option.

A `TypeNode` is a flat tagged variant: a `TypeKind` discriminant plus the
attributes that kind uses. The `ARRAY` kind owns one `child` node, which may
itself be an array, so `array:array:string` is three nodes deep.

Key Attributes:
- `kind`: What the node produces (`TypeKind`).
- `child`: Element node for arrays.
- `delimiter`: Splits each consumed token of an array of scalars (`None` disables).
- `cumulative`: Whether repeated occurrences of an array concatenate.
- `nargs`: Optional cap on tokens consumed per array occurrence.
- `strict`: Numbers only, report NaN elements as failures.
- `choices`: Allowed values for enums (always strict).
- `must_exist`: Path-like only. `None` skips the check, `True` requires the path,
  `False` forbids it.

Example:
    node = TypeNode.from_tag("array:number", strict=True)
    node.tag                      # "array:number"
    node.convert(["1,2", "x"])    # [1, 2, nan]
"""
from __future__ import annotations

from copy import deepcopy
from dataclasses import dataclass, field
from typing import Any, Iterable

from argtrail.exceptions import SchemaError, TypeNodeError
from argtrail.parser.type_kind import TypeKind
from argtrail.parser.utils import coerce_bool, coerce_scalar

DEFAULT_DELIMITER = ","


@dataclass
class TypeNode:
    """
    A possibly nested value converter.

    Attributes:
        kind (TypeKind): The node discriminant.
        child (TypeNode | None): Element node, required for arrays only.
        delimiter (str | None): Fragment separator for array tokens.
        cumulative (bool): Concatenate repeated occurrences (arrays).
        nargs (int | None): Maximum tokens consumed per occurrence (arrays).
        strict (bool): Report NaN numbers as failures.
        choices (list[str]): Allowed enum values.
        must_exist (bool | None): Path existence policy.
    """

    kind: TypeKind
    child: TypeNode | None = None
    delimiter: str | None = DEFAULT_DELIMITER
    cumulative: bool = True
    nargs: int | None = None
    strict: bool = False
    choices: list[str] = field(default_factory=list)
    must_exist: bool | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.kind, TypeKind):
            try:
                self.kind = TypeKind(self.kind)
            except ValueError as error:
                raise SchemaError(str(error)) from error
        if self.delimiter is False or self.delimiter == "":
            self.delimiter = None
        self.choices = [str(choice) for choice in self.choices or []]
        self.validate()

    @classmethod
    def from_tag(
        cls,
        tag: str,
        *,
        delimiter: str | bool | None = DEFAULT_DELIMITER,
        cumulative: bool = True,
        nargs: int | None = None,
        strict: bool = False,
        choices: Iterable[Any] | None = None,
        must_exist: bool | None = None,
    ) -> TypeNode:
        """
        Build a node chain from a colon separated type tag.

        `array` alone means `array:string`. Array attributes (`delimiter`,
        `cumulative`, `nargs`) go to the outermost node, scalar attributes
        (`strict`, `choices`, `must_exist`) go to the innermost node.

        Args:
            tag (str): A tag such as `"number"` or `"array:array:path"`.

        Returns:
            TypeNode: The outermost node.

        Raises:
            SchemaError: If the tag names an unknown kind or an invalid composition.
        """
        if not isinstance(tag, str) or not tag.strip():
            raise SchemaError(f"Type tag must be a non-empty string, got {tag!r}")
        parts = [part.strip() for part in tag.split(":")]
        kinds: list[TypeKind] = []
        for part in parts:
            try:
                kinds.append(TypeKind(part))
            except ValueError as error:
                raise SchemaError(f"Unknown type tag '{tag}': {error}") from error
        if kinds[-1] == TypeKind.ARRAY:
            kinds.append(TypeKind.STRING)
        for kind in kinds[:-1]:
            if kind != TypeKind.ARRAY:
                raise SchemaError(
                    f"Invalid type tag '{tag}': only arrays can wrap another type"
                )
        if nargs is not None and len(kinds) == 1:
            raise SchemaError(f"nargs cannot be specified for type '{kinds[0]}'")

        node = cls(
            kind=kinds[-1],
            strict=strict,
            choices=list(choices or []),
            must_exist=must_exist,
        )
        for depth, _ in enumerate(kinds[:-1]):
            outermost = depth == len(kinds) - 2
            node = cls(
                kind=TypeKind.ARRAY,
                child=node,
                delimiter=delimiter if outermost else DEFAULT_DELIMITER,  # type: ignore[arg-type]
                cumulative=cumulative if outermost else True,
                nargs=nargs if outermost else None,
            )
        return node

    @classmethod
    def array_of(cls, child: TypeNode | str = "string", **kwargs: Any) -> TypeNode:
        """Wrap `child` (a node or tag) in an array node."""
        if isinstance(child, str):
            child = cls.from_tag(child)
        return cls(kind=TypeKind.ARRAY, child=child, **kwargs)

    def validate(self) -> None:
        """Check the node's attributes against its kind."""
        if self.kind == TypeKind.ARRAY:
            if self.child is None:
                raise SchemaError("Array type nodes must have a child node")
            if self.child.kind == TypeKind.BOOLEAN:
                raise SchemaError("Arrays of booleans are not supported")
            if self.nargs is not None and (
                not isinstance(self.nargs, int) or self.nargs <= 0
            ):
                raise SchemaError("nargs must be a positive integer")
            if self.delimiter is not None and not isinstance(self.delimiter, str):
                raise SchemaError("delimiter must be a string or disabled")
        else:
            if self.child is not None:
                raise SchemaError(f"Type '{self.kind}' cannot have a child node")
            if self.nargs is not None:
                raise SchemaError(f"nargs cannot be specified for type '{self.kind}'")
        if self.kind == TypeKind.ENUM and not self.choices:
            raise SchemaError("Enum types require at least one choice")
        if self.kind != TypeKind.ENUM and self.choices:
            raise SchemaError(f"choices cannot be specified for type '{self.kind}'")
        if self.must_exist is not None:
            if not self.kind.is_path_like:
                raise SchemaError(
                    f"must_exist cannot be specified for type '{self.kind}'"
                )
            if not isinstance(self.must_exist, bool):
                raise SchemaError("must_exist must be a boolean or None")
        if self.strict and self.kind not in (TypeKind.NUMBER, TypeKind.ENUM):
            raise SchemaError(f"strict cannot be specified for type '{self.kind}'")

    @property
    def tag(self) -> str:
        if self.kind == TypeKind.ARRAY:
            assert self.child is not None, "array node without child"
            return f"{self.kind}:{self.child.tag}"
        return str(self.kind)

    @property
    def is_array(self) -> bool:
        return self.kind == TypeKind.ARRAY

    @property
    def leaf(self) -> TypeNode:
        """Return the innermost scalar node."""
        node = self
        while node.child is not None:
            node = node.child
        return node

    @property
    def takes_values(self) -> bool:
        return self.kind != TypeKind.BOOLEAN

    @property
    def max_values(self) -> int | None:
        """Number of tokens one occurrence may consume, `None` for unbounded."""
        if self.kind == TypeKind.BOOLEAN:
            return 0
        if self.kind == TypeKind.ARRAY:
            return self.nargs
        return 1

    @property
    def is_strict(self) -> bool:
        if self.kind == TypeKind.NUMBER:
            return self.strict
        if self.kind == TypeKind.ENUM:
            return True
        if self.kind.is_path_like:
            return self.must_exist is not None
        return False

    def convert(self, values: list[str]) -> Any:
        """
        Convert the value tokens of a single occurrence.

        Scalars use the first value (or the empty string when there is none).
        Arrays of scalars split every value on the delimiter. Arrays of arrays
        hand the whole occurrence to the child and produce one element.

        Args:
            values (list[str]): Value texts consumed by one occurrence.

        Returns:
            Any: A scalar, or the list of elements this occurrence contributes.
        """
        if self.kind == TypeKind.BOOLEAN:
            return coerce_bool(values[0]) if values else True
        if self.kind != TypeKind.ARRAY:
            return coerce_scalar(values[0] if values else "", self.kind)

        if self.child is None:
            raise TypeNodeError("Array type node has no child node")
        if self.child.is_array:
            return [self.child.convert(values)]
        if not values:
            values = [""]
        elements = []
        for value in values:
            fragments = value.split(self.delimiter) if self.delimiter else [value]
            elements.extend(self.child.convert([fragment]) for fragment in fragments)
        return elements

    def zero_value(self) -> Any:
        if self.kind == TypeKind.ARRAY:
            return []
        if self.kind == TypeKind.BOOLEAN:
            return False
        return None

    def default_value(self, default: Any) -> Any:
        """
        Return the value used when the option never occurs.

        A scalar default for an array is wrapped once per array level, so
        `array:array:string` turns `"x"` into `[["x"]]`.
        """
        if default is None:
            return self.zero_value()
        if self.kind == TypeKind.ARRAY:
            assert self.child is not None, "array node without child"
            if isinstance(default, (list, tuple)):
                return deepcopy(list(default))
            return [self.child.default_value(default)]
        return deepcopy(default)

    def iter_leaves(self, value: Any) -> list[Any]:
        """Flatten a converted value into its scalar elements."""
        if self.kind != TypeKind.ARRAY:
            return [value]
        assert self.child is not None, "array node without child"
        leaves = []
        for element in value or []:
            leaves.extend(self.child.iter_leaves(element))
        return leaves

    def __str__(self) -> str:
        return self.tag
