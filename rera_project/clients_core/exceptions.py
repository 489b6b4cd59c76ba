class TrackerError(Exception):
    """Base class for every error the record-keeping core raises."""
    pass

class NotFound(TrackerError):
    """Raised when an entity (or its relation to the owner) is absent."""
    pass

class Conflict(TrackerError):
    """Raised on duplicates and on deleting a payment that is not settled."""
    pass

class InvalidInput(TrackerError):
    """Raised when a required field is missing or a value is malformed."""
    pass

class InvalidAmount(InvalidInput):
    """Raised when a recorded payment would exceed the remaining balance."""
    pass

class StorageError(TrackerError):
    """Raised when the database itself fails (connectivity, constraints)."""
    pass
