"""Exception hierarchy for git-ignore.

All exceptions inherit from :class:`GitIgnoreError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`git_ignore.exit_codes`.
The stores and the resolver only raise; the top-level handler in
:func:`git_ignore.app.main` reports the message and exits with the code.

Subclass hierarchy::

    GitIgnoreError (exit 1)
    +-- InvalidUsageError      (exit 2)
    +-- UnknownTemplateError   (exit 3)
    +-- ConfigError            (exit 4)
    |   +-- NameCollisionError
    |   +-- CyclicAliasError
    +-- FetchError             (exit 5)
    +-- StorageError           (exit 6)
"""

from __future__ import annotations

from typing import Iterable, Sequence

from git_ignore.exit_codes import (
    EXIT_CONFIG_INVALID,
    EXIT_FETCH_FAILURE,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_IO_FAILURE,
    EXIT_UNKNOWN_TEMPLATE,
)


class GitIgnoreError(Exception):
    """Base exception for all git-ignore errors.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(GitIgnoreError):
    """Raised for invalid CLI arguments."""

    exit_code = EXIT_INVALID_USAGE


class UnknownTemplateError(GitIgnoreError):
    """Raised when a name requested in get mode has no exact match.

    Attributes:
        names: The offending names, in the order they were requested.
    """

    exit_code = EXIT_UNKNOWN_TEMPLATE

    def __init__(self, names: Iterable[str]):
        self.names = list(names)
        listed = ", ".join(repr(n) for n in self.names)
        super().__init__(f"Unknown template(s): {listed}")


class ConfigError(GitIgnoreError):
    """Raised when the user configuration is invalid or a change is rejected."""

    exit_code = EXIT_CONFIG_INVALID


class NameCollisionError(ConfigError):
    """Raised when a name is already taken by an alias or custom template."""

    def __init__(self, name: str, taken_by: str):
        self.name = name
        self.taken_by = taken_by
        super().__init__(f"'{name}' already exists as {taken_by}")


class CyclicAliasError(ConfigError):
    """Raised when an alias would expand, directly or transitively, to itself.

    Attributes:
        path: The chain of alias names forming the cycle, starting and
            ending with the same name.
    """

    def __init__(self, path: Sequence[str]):
        self.path = list(path)
        super().__init__("Cyclic alias: " + " -> ".join(self.path))


class FetchError(GitIgnoreError):
    """Raised on remote catalog failures (network, HTTP status, bad payload).

    Always retryable; persisted state is never touched when this is raised.
    """

    exit_code = EXIT_FETCH_FAILURE


class StorageError(GitIgnoreError):
    """Raised when a persisted file cannot be read or written."""

    exit_code = EXIT_IO_FAILURE
