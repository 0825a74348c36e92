import threading

import pytest

from book_api.errors import BookNotFoundError, InvalidInputError
from book_api.storage import SEED_BOOKS, BookCatalog


def test_seeded_catalog_starts_with_three_books(catalog):
    books = catalog.list_books()
    assert [b.id for b in books] == [1, 2, 3]
    assert books[0].title == "To Kill a Mockingbird"
    assert books[2].author == "F. Scott Fitzgerald"
    assert catalog.next_id == 4


def test_empty_catalog():
    empty = BookCatalog()
    assert empty.list_books() == []
    assert empty.count == 0
    assert empty.create_book("Dune", "Frank Herbert").id == 1


def test_create_then_get_returns_submitted_fields(catalog):
    created = catalog.create_book("A", "B")
    fetched = catalog.get_book(created.id)
    assert fetched.model_dump() == {"id": 4, "title": "A", "author": "B"}


@pytest.mark.parametrize(
    "title, author",
    [(None, "B"), ("A", None), (None, None), ("", "B"), ("A", "")],
)
def test_create_requires_title_and_author(catalog, title, author):
    with pytest.raises(InvalidInputError) as excinfo:
        catalog.create_book(title, author)
    assert excinfo.value.message == "Title and author are required"
    assert catalog.count == 3
    assert catalog.next_id == 4


def test_ids_are_never_reused(catalog):
    catalog.delete_book(3)
    new = catalog.create_book("X", "Y")
    assert new.id == 4
    catalog.delete_book(4)
    assert catalog.create_book("Z", "W").id == 5


def test_delete_then_create_keeps_insertion_order(catalog):
    catalog.delete_book(2)
    catalog.create_book("X", "Y")
    assert [b.id for b in catalog.list_books()] == [1, 3, 4]


@pytest.mark.parametrize("operation", ["get_book", "delete_book"])
def test_unknown_id_is_not_found(catalog, operation):
    with pytest.raises(BookNotFoundError) as excinfo:
        getattr(catalog, operation)(99)
    assert excinfo.value.message == "Book with id 99 not found"
    assert excinfo.value.book_id == 99


def test_update_unknown_id_checked_before_fields(catalog):
    with pytest.raises(BookNotFoundError):
        catalog.update_book(99)


def test_update_without_fields_leaves_record_unchanged(catalog):
    before = catalog.get_book(1)
    with pytest.raises(InvalidInputError) as excinfo:
        catalog.update_book(1, title="", author=None)
    assert excinfo.value.message == "Title or author must be provided"
    assert catalog.get_book(1) == before


def test_update_title_only(catalog):
    updated = catalog.update_book(2, title="Nineteen Eighty-Four")
    assert updated.title == "Nineteen Eighty-Four"
    assert updated.author == "George Orwell"
    assert updated.id == 2


def test_update_author_only_ignores_empty_title(catalog):
    updated = catalog.update_book(1, title="", author="Nelle Harper Lee")
    assert updated.title == "To Kill a Mockingbird"
    assert updated.author == "Nelle Harper Lee"


def test_delete_returns_removed_record(catalog):
    deleted = catalog.delete_book(2)
    assert deleted.title == "1984"
    assert catalog.count == 2
    with pytest.raises(BookNotFoundError):
        catalog.get_book(2)


def test_returned_books_are_copies(catalog):
    book = catalog.get_book(1)
    book.title = "changed"
    assert catalog.get_book(1).title == SEED_BOOKS[0]["title"]


def test_concurrent_creates_assign_unique_sequential_ids():
    catalog = BookCatalog()
    workers, per_worker = 8, 200

    def create_many(worker):
        for n in range(per_worker):
            catalog.create_book(f"Book {worker}-{n}", f"Author {worker}")

    threads = [threading.Thread(target=create_many, args=(w,)) for w in range(workers)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert [b.id for b in catalog.list_books()] == list(range(1, workers * per_worker + 1))
    assert catalog.next_id == workers * per_worker + 1


def test_concurrent_deletes_and_reads_stay_consistent():
    total = 400
    catalog = BookCatalog({"title": f"T{n}", "author": "A"} for n in range(total))
    snapshots = []

    def delete_range(ids):
        for book_id in ids:
            catalog.delete_book(book_id)

    def read_many():
        for _ in range(200):
            books = catalog.list_books()
            snapshots.append([b.id for b in books])

    deleters = [threading.Thread(target=delete_range, args=(range(start, total + 1, 4),)) for start in range(1, 5)]
    readers = [threading.Thread(target=read_many) for _ in range(2)]
    for t in deleters + readers:
        t.start()
    for t in deleters + readers:
        t.join()

    assert catalog.count == 0
    assert catalog.list_books() == []
    for ids in snapshots:
        assert ids == sorted(set(ids))
