"""
Route definitions for the book collection.

Endpoints:
- GET    /books       : list every book
- GET    /books/{id}  : get one book
- POST   /books       : create a book
- PUT    /books/{id}  : update title and/or author
- DELETE /books/{id}  : delete a book

Faults raised by the catalog propagate to the application's exception
handlers, which build the error envelope.
"""

from __future__ import annotations

import re
from typing import Optional

from fastapi import APIRouter, Depends, Request, status

from ..errors import BookNotFoundError
from ..models import (
    BookEnvelope,
    BookListEnvelope,
    CreateBookRequest,
    ErrorEnvelope,
    UpdateBookRequest,
)
from ..storage import BookCatalog

router = APIRouter(prefix="/books", tags=["books"])

_NOT_FOUND = {status.HTTP_404_NOT_FOUND: {"model": ErrorEnvelope}}
_INVALID = {status.HTTP_400_BAD_REQUEST: {"model": ErrorEnvelope}}

_BOOK_ID = re.compile(r"-?[0-9]+")


def get_catalog(request: Request) -> BookCatalog:
    return request.app.state.catalog


def _parse_book_id(raw: str) -> int:
    """Parse the ``{book_id}`` path segment.

    Only plain decimal digits are accepted. Anything else (padding,
    underscores, a leading "+") cannot name a record and is reported as
    not found using the segment as given.
    """
    if not _BOOK_ID.fullmatch(raw):
        raise BookNotFoundError(raw)
    return int(raw)


@router.get("", response_model=BookListEnvelope)
def list_books(catalog: BookCatalog = Depends(get_catalog)) -> BookListEnvelope:
    books = catalog.list_books()
    return BookListEnvelope(count=len(books), data=books)


@router.get(
    "/{book_id}",
    response_model=BookEnvelope,
    response_model_exclude_none=True,
    responses=_NOT_FOUND,
)
def get_book(book_id: str, catalog: BookCatalog = Depends(get_catalog)) -> BookEnvelope:
    return BookEnvelope(data=catalog.get_book(_parse_book_id(book_id)))


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=BookEnvelope,
    responses=_INVALID,
)
def create_book(
    payload: Optional[CreateBookRequest] = None,
    catalog: BookCatalog = Depends(get_catalog),
) -> BookEnvelope:
    payload = payload or CreateBookRequest()
    book = catalog.create_book(payload.title, payload.author)
    return BookEnvelope(message="Book created successfully", data=book)


@router.put(
    "/{book_id}",
    response_model=BookEnvelope,
    responses={**_NOT_FOUND, **_INVALID},
)
def update_book(
    book_id: str,
    payload: Optional[UpdateBookRequest] = None,
    catalog: BookCatalog = Depends(get_catalog),
) -> BookEnvelope:
    payload = payload or UpdateBookRequest()
    book = catalog.update_book(_parse_book_id(book_id), payload.title, payload.author)
    return BookEnvelope(message="Book updated successfully", data=book)


@router.delete("/{book_id}", response_model=BookEnvelope, responses=_NOT_FOUND)
def delete_book(book_id: str, catalog: BookCatalog = Depends(get_catalog)) -> BookEnvelope:
    book = catalog.delete_book(_parse_book_id(book_id))
    return BookEnvelope(message="Book deleted successfully", data=book)
