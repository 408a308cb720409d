# Argtrail Argument Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines all custom exception classes used by Argtrail.

Two classes of problems exist while parsing a command line. User-input failures
(a bad number, an unknown enum value, a missing required option) are expected:
they are collected into the `ParseResult` and never raised. Everything in this
module signals the other class: a schema or programming problem that stops
processing.

Exception Hierarchy:
- ArgtrailError
    ├── SchemaError
    ├── TypeNodeError
    └── ExistenceCheckError
"""


class ArgtrailError(Exception):
    """Base exception for the Argtrail engine."""


class SchemaError(ArgtrailError):
    """Exception raised when an option or type node is declared incorrectly."""


class TypeNodeError(ArgtrailError):
    """Exception raised when a type node cannot convert an occurrence."""


class ExistenceCheckError(ArgtrailError):
    """Exception raised when the injected path existence check fails to run."""
