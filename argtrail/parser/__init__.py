"""
Argtrail Argument Engine

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

from .argument_parser import ArgumentParser
from .option import OptionSpec
from .result import ParsedValue, ParseResult
from .tokenizer import Token, tokenize
from .type_kind import TypeKind
from .type_node import TypeNode

__all__ = [
    "ArgumentParser",
    "OptionSpec",
    "ParsedValue",
    "ParseResult",
    "Token",
    "tokenize",
    "TypeKind",
    "TypeNode",
]
