from abc import ABC


class UserError(ABC, Exception):
    """Base class for user-related errors.

    All errors that inherit from UserError will have their messages
    displayed to the user. These errors should not contain any
    sensitive information.
    """


class NotFoundError(UserError):
    """Raised when a requested todo is not found."""

    def __init__(self, message: str = "Todo not found") -> None:
        super().__init__(message)


class StoreError(Exception):
    """Base class for failures of the file-backed store itself."""


class CorruptStateError(StoreError):
    """Raised when the counter file or a todo file holds unparseable content."""


class StorageIOError(StoreError):
    """Raised when reading, writing or removing a file fails for reasons other than absence."""


class CollisionError(StoreError):
    """Raised when a freshly allocated id already has a todo file."""
