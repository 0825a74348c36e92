"""
Routes for the book collection.

The router is mounted by ``book_api.main.create_app`` and reads the
``BookCatalog`` from ``app.state`` through the ``get_catalog``
dependency, so each application instance works on its own collection.
"""

from .router import get_catalog, router as catalog_router  # noqa: F401
