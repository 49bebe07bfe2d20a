"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~git_ignore.exceptions.GitIgnoreError` subclass, so
shell wrappers can tell an unknown template apart from a network outage
without parsing stderr.

Example::

    $ git-ignore get rsut
    $ echo $?
    3   # EXIT_UNKNOWN_TEMPLATE
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments."""

EXIT_UNKNOWN_TEMPLATE = 3
"""A requested template name does not exist in the catalog."""

EXIT_CONFIG_INVALID = 4
"""The user configuration is invalid or a change to it was rejected."""

EXIT_FETCH_FAILURE = 5
"""The remote catalog could not be reached or returned garbage."""

EXIT_IO_FAILURE = 6
"""A persisted file could not be read or written."""
