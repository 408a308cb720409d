# Argtrail Argument Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""config.py
Declarative schema loader for Argtrail parsers."""
from __future__ import annotations

from pathlib import Path
from typing import Any

import toml
import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from argtrail.exceptions import SchemaError
from argtrail.logger import logger
from argtrail.parser.argument_parser import ArgumentParser
from argtrail.parser.type_kind import TypeKind
from argtrail.parser.type_node import DEFAULT_DELIMITER


class RawOption(BaseModel):
    """Raw option model for Argtrail schema files."""

    flags: str
    type: str = "string"
    help: str = ""
    required: bool = False
    default: Any = None

    strict: bool = False
    choices: list[str] | None = None
    must_exist: bool | None = None

    delimiter: str | bool | None = DEFAULT_DELIMITER
    cumulative: bool = True
    nargs: int | None = None

    @field_validator("type")
    @classmethod
    def validate_type(cls, value: str) -> str:
        for part in value.split(":"):
            TypeKind(part)
        return value

    @field_validator("choices", mode="before")
    @classmethod
    def validate_choices(cls, value: Any) -> Any:
        if isinstance(value, list):
            return [str(choice) for choice in value]
        return value

    @field_validator("delimiter")
    @classmethod
    def validate_delimiter(cls, value: str | bool | None) -> str | bool | None:
        if value is True:
            return DEFAULT_DELIMITER
        return value


class ParserConfig(BaseModel):
    """Argtrail schema file model."""

    program: str | None = None
    description: str = ""
    epilog: str = ""
    allow_unknown: bool = True
    options: list[RawOption] = Field(default_factory=list)

    def to_parser(self) -> ArgumentParser:
        parser = ArgumentParser(
            program=self.program,
            description=self.description,
            epilog=self.epilog,
            allow_unknown=self.allow_unknown,
        )
        for option in self.options:
            parser.add_option(
                option.flags,
                option.type,
                default=option.default,
                required=option.required,
                strict=option.strict,
                choices=option.choices,
                must_exist=option.must_exist,
                delimiter=option.delimiter,
                cumulative=option.cumulative,
                nargs=option.nargs,
                help=option.help,
            )
        return parser


def build_parser(raw_config: dict[str, Any]) -> ArgumentParser:
    """
    Build an `ArgumentParser` from an already loaded schema mapping.

    Raises:
        SchemaError: If the mapping does not describe a valid schema.
    """
    if not isinstance(raw_config, dict):
        raise SchemaError(
            "Schema must be a dictionary with a list of options.\n"
            "Example:\n"
            "program: 'deploy'\n"
            "options:\n"
            "  - flags: '-a, --array <vals..>'\n"
            "    type: 'array:string'"
        )
    try:
        config = ParserConfig.model_validate(raw_config)
    except ValidationError as error:
        raise SchemaError(f"Invalid schema: {error}") from error
    return config.to_parser()


def loader(file_path: Path | str) -> ArgumentParser:
    """
    Load an Argtrail schema from a YAML or TOML file.

    Each option should be defined as a dictionary with at least:
    - flags: the flag declaration, e.g. "-n, --numbers <n..>"

    and optionally `type`, `required`, `default`, `strict`, `choices`,
    `must_exist`, `delimiter`, `cumulative`, `nargs` and `help`.

    Args:
        file_path (str): Path to the schema file (YAML or TOML).

    Returns:
        ArgumentParser: A parser with the declared options.

    Raises:
        FileNotFoundError: If the file does not exist.
        SchemaError: If the format is unsupported or the schema is invalid.
    """
    if isinstance(file_path, (str, Path)):
        path = Path(file_path)
    else:
        raise TypeError("file_path must be a string or Path object.")

    if not path.is_file():
        raise FileNotFoundError(f"No such schema file: {file_path}")

    suffix = path.suffix
    with path.open("r", encoding="UTF-8") as schema_file:
        if suffix in (".yaml", ".yml"):
            raw_config = yaml.safe_load(schema_file)
        elif suffix == ".toml":
            raw_config = toml.load(schema_file)
        else:
            raise SchemaError(f"Unsupported schema format: {suffix}")

    logger.debug("Loaded schema from %s", path)
    return build_parser(raw_config)
