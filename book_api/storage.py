# book_api/storage.py
"""
In-memory book collection.

``BookCatalog`` owns an ordered list of ``Book`` records and the counter
used to assign ids. Sync FastAPI endpoints run in a thread pool, so every
operation, reads included, is serialised with a single lock. Records
handed out are copies: callers never hold a reference into the list.
"""

from __future__ import annotations

import logging
import threading
from typing import Dict, Iterable, List, Optional

from .errors import BookNotFoundError, InvalidInputError
from .models import Book

logger = logging.getLogger(__name__)


SEED_BOOKS: List[Dict[str, str]] = [
    {"title": "To Kill a Mockingbird", "author": "Harper Lee"},
    {"title": "1984", "author": "George Orwell"},
    {"title": "The Great Gatsby", "author": "F. Scott Fitzgerald"},
]


class BookCatalog:
    def __init__(self, seed: Optional[Iterable[Dict[str, str]]] = None) -> None:
        self._books: List[Book] = []
        self._next_id = 1
        self._lock = threading.Lock()
        for entry in seed or ():
            self.create_book(entry.get("title"), entry.get("author"))

    @classmethod
    def with_sample_books(cls) -> "BookCatalog":
        return cls(SEED_BOOKS)

    @property
    def count(self) -> int:
        with self._lock:
            return len(self._books)

    @property
    def next_id(self) -> int:
        with self._lock:
            return self._next_id

    def _index_of(self, book_id: int) -> int:
        for index, book in enumerate(self._books):
            if book.id == book_id:
                return index
        raise BookNotFoundError(book_id)

    def list_books(self) -> List[Book]:
        with self._lock:
            return [b.model_copy() for b in self._books]

    def get_book(self, book_id: int) -> Book:
        with self._lock:
            return self._books[self._index_of(book_id)].model_copy()

    def create_book(self, title: Optional[str], author: Optional[str]) -> Book:
        """Append a new record and return it.

        Parameters
        ----------
        title, author : Optional[str]
            Both must be non-empty. Nothing is assigned or stored when
            either is missing.

        Raises
        ------
        InvalidInputError
            If ``title`` or ``author`` is missing or empty.
        """
        if not title or not author:
            raise InvalidInputError("Title and author are required")

        with self._lock:
            book = Book(id=self._next_id, title=title, author=author)
            self._next_id += 1
            self._books.append(book)
            logger.info("Created book %s (%r by %r)", book.id, title, author)
            return book.model_copy()

    def update_book(
        self,
        book_id: int,
        title: Optional[str] = None,
        author: Optional[str] = None,
    ) -> Book:
        """Overwrite the supplied fields of an existing record.

        The record is looked up before the fields are checked, so an
        unknown id is reported even when the body is empty. Empty strings
        count as "not supplied": a field can be replaced but never cleared.

        Raises
        ------
        BookNotFoundError
            If no record has ``book_id``.
        InvalidInputError
            If neither ``title`` nor ``author`` is supplied.
        """
        with self._lock:
            book = self._books[self._index_of(book_id)]
            if not title and not author:
                raise InvalidInputError("Title or author must be provided")

            if title:
                book.title = title
            if author:
                book.author = author
            logger.info("Updated book %s", book_id)
            return book.model_copy()

    def delete_book(self, book_id: int) -> Book:
        with self._lock:
            book = self._books.pop(self._index_of(book_id))
            logger.info("Deleted book %s", book_id)
            return book
