"""Service-layer error types; routers translate them to HTTP status codes."""

from typing import Optional


class LibraryError(Exception):
    """Base error for prompt library operations."""

    def __init__(self, message: str, cause: Optional[Exception] = None):
        self.message = message
        self.cause = cause
        super().__init__(message)


class DuplicateNameError(LibraryError):
    """A folder or tag with this name already exists."""


class InvalidReferenceError(LibraryError):
    """A prompt body references a folder or tag that does not exist."""
