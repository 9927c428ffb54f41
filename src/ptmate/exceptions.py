"""Exceptions raised by ptmate models, services and repositories."""


class ValidationError(ValueError):
    """Input rejected before it reaches scoring or storage.

    ``field`` names the offending attribute so API and CLI callers can
    point the trainer at the right form input.
    """

    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


class NotFoundError(LookupError):
    """A referenced record does not exist."""

    def __init__(self, kind: str, record_id: int):
        super().__init__(f"{kind} {record_id} not found")
        self.kind = kind
        self.record_id = record_id


class ConflictError(Exception):
    """The operation would duplicate a record that must be unique."""
