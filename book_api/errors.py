"""
Faults raised by the catalog.

Each fault knows the HTTP status it maps to and the message returned to
the client. The application installs a single handler for
``BookAPIError`` that turns any of them into the error envelope.
"""

from typing import Union


class BookAPIError(Exception):
    status_code = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidInputError(BookAPIError):
    """Required fields are missing or empty."""

    status_code = 400


class BookNotFoundError(BookAPIError):
    """No record with the requested id exists."""

    status_code = 404

    def __init__(self, book_id: Union[int, str]) -> None:
        super().__init__(f"Book with id {book_id} not found")
        self.book_id = book_id
