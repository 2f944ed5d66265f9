# errors.py


class MigrationError(Exception):
    """Base class for every condition that aborts a migration run."""


class ValidationError(MigrationError):
    """Required input is missing or malformed. Raised before any network call."""


class TransportError(MigrationError):
    """The document store could not be reached or rejected a request."""


class SourceNotFound(MigrationError):
    pass


class SchemaFetchFailed(MigrationError):
    pass


class IndexCreationFailed(MigrationError):
    pass


class TransferFailed(MigrationError):
    """The bulk copy itself failed (not a single document)."""


class MappingConflict(MigrationError):
    """An explicit mapping was given for a target index that already exists."""


class ConfirmationError(MigrationError):
    """The operator's answer could not be read."""
