"""
Argtrail Argument Engine

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

from .logger import logger
from .parser import ArgumentParser, ParseResult, TypeNode

__all__ = [
    "ArgumentParser",
    "ParseResult",
    "TypeNode",
    "logger",
]
