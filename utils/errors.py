"""
utils/errors.py
---------------
Exception taxonomy shared by the repository and service layers.

Repositories raise these; services catch them and turn them into
`Outcome` values (see models/outcome.py). Nothing above the service
layer should need to catch them, except StorageError on read paths,
which the HTTP layer maps to a 500.
"""


class SchoolRecordsError(Exception):
    """Base class for all application errors."""

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


class ValidationError(SchoolRecordsError):
    """One or more field-level violations, reported together."""

    def __init__(self, errors: list[str], message: str = "Invalid input data."):
        super().__init__(message)
        self.errors = list(errors)


class ConflictError(SchoolRecordsError):
    """A natural key (student number, employee number, course code) is taken."""


class NotFoundError(SchoolRecordsError):
    """An id does not resolve to a row."""


class StorageError(SchoolRecordsError):
    """Unexpected failure from the database driver; message is passed through."""
