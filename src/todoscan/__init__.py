"""todoscan — find marker comments (TODO, FIXME, ...) in a directory tree."""

__version__ = "0.1.0"


class TodosError(Exception):
    """User-facing CLI error.

    Raised for invalid arguments, missing directories, unreadable trees and
    broken output templates. The message is printed to stderr and the
    process exits with code 1.
    """
