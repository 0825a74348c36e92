import pytest
from fastapi.testclient import TestClient

from book_api.config import Settings
from book_api.main import create_app
from book_api.storage import BookCatalog


@pytest.fixture
def settings():
    return Settings(_env_file=None, SEED_BOOKS=True, LOG_LEVEL="DEBUG")


@pytest.fixture
def catalog():
    return BookCatalog.with_sample_books()


@pytest.fixture
def app(settings, catalog):
    return create_app(settings=settings, catalog=catalog)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c
