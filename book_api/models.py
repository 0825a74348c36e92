# book_api/models.py
from typing import Dict, List, Optional

from pydantic import BaseModel


class Book(BaseModel):
    id: int
    title: str
    author: str


class CreateBookRequest(BaseModel):
    # Presence is checked by the catalog so that a missing field yields the
    # catalog's own message instead of a validation error.
    title: Optional[str] = None
    author: Optional[str] = None


class UpdateBookRequest(BaseModel):
    title: Optional[str] = None
    author: Optional[str] = None


class BookEnvelope(BaseModel):
    success: bool = True
    message: Optional[str] = None
    data: Book


class BookListEnvelope(BaseModel):
    success: bool = True
    count: int
    data: List[Book]


class ErrorEnvelope(BaseModel):
    success: bool = False
    message: str


class ApiIndex(BaseModel):
    message: str
    endpoints: Dict[str, str]
