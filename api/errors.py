"""
Typed errors raised by the Book Directory API.

Each error carries the HTTP status code it is rendered with, so the
exception handlers in ``api.main`` never have to guess.
"""

from typing import Any, Dict, Sequence

from fastapi import status


class BookDirectoryError(Exception):
    """Base class for errors with a known HTTP status."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BookValidationError(BookDirectoryError):
    """The request payload does not satisfy the book schema."""

    status_code = status.HTTP_400_BAD_REQUEST

    @classmethod
    def from_errors(cls, errors: Sequence[Dict[str, Any]]) -> "BookValidationError":
        """
        Build a single readable message from pydantic error dicts.

        The leading ``body`` location segment is dropped so messages read
        ``name: Field required`` rather than ``body.name: Field required``.
        """
        parts = []
        for error in errors:
            loc = [str(part) for part in error.get("loc", ()) if part != "body"]
            field = ".".join(loc)
            msg = error.get("msg", "Invalid value")
            parts.append(f"{field}: {msg}" if field else msg)
        return cls("; ".join(parts) or "Invalid request body")


class BookNotFoundError(BookDirectoryError):
    """No book exists with the requested id."""

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, book_id: str):
        super().__init__(f"Book with ID '{book_id}' not found")
        self.book_id = book_id


class StoreError(BookDirectoryError):
    """The document store failed or could not be reached."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
