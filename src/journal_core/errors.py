"""Error taxonomy for the mood journal core."""


class JournalError(Exception):
    """Base class for all journal core errors."""


class StorageError(JournalError):
    """Persistence failure: backend I/O, missing record, or serialization."""


class ClassificationError(JournalError):
    """The external mood classifier could not produce a usable analysis."""


class ValidationError(JournalError, ValueError):
    """A value lies outside its declared range."""
