"""Errors raised by IAM aggregates when a state transition is not allowed."""


class NotDeletedError(Exception):
    """Raised when attempting to restore an entity that is not soft deleted.

    Restoring an active entity is rejected instead of silently succeeding,
    so no Restored event is ever emitted for it.
    """

    pass
