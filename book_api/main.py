# book_api/main.py
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import __version__
from .catalog import catalog_router, get_catalog
from .config import Settings, settings as default_settings
from .errors import BookAPIError
from .logging_config import setup_logging
from .models import ApiIndex
from .storage import BookCatalog

logger = logging.getLogger(__name__)

ENDPOINTS = {
    "GET /books": "Get all books",
    "GET /books/:id": "Get a specific book",
    "POST /books": "Create a new book",
    "PUT /books/:id": "Update a book",
    "DELETE /books/:id": "Delete a book",
}


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "message": message})


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(BookAPIError)
    async def book_api_error_handler(request: Request, exc: BookAPIError):
        logger.warning("%s %s -> %s: %s", request.method, request.url.path, exc.status_code, exc.message)
        return _error(exc.status_code, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        # An unsupported method on a known path is reported like an unknown path.
        if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
            return _error(status.HTTP_404_NOT_FOUND, "Endpoint not found")
        return _error(exc.status_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.warning("Rejected body for %s %s: %s", request.method, request.url.path, exc.errors())
        return _error(status.HTTP_400_BAD_REQUEST, "Invalid request body")


def create_app(settings: Optional[Settings] = None, catalog: Optional[BookCatalog] = None) -> FastAPI:
    """Build the application around its own ``BookCatalog``.

    When ``catalog`` is not given, one is created, seeded with the sample
    books unless ``SEED_BOOKS`` is off.
    """
    settings = settings or default_settings
    setup_logging(settings.LOG_LEVEL)

    if catalog is None:
        catalog = BookCatalog.with_sample_books() if settings.SEED_BOOKS else BookCatalog()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Server is running on http://localhost:%s", settings.PORT)
        logger.info("Try visiting http://localhost:%s/books", settings.PORT)
        yield
        logger.info("Shutting down book API...")

    app = FastAPI(
        title="Book API",
        description="In-memory REST API for managing a list of books.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.catalog = catalog
    app.state.settings = settings

    # Registered before CORS so the 500 envelope still carries CORS headers.
    @app.middleware("http")
    async def internal_error_middleware(request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
            return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/", response_model=ApiIndex, tags=["System"])
    def index():
        return ApiIndex(message="Welcome to Book API", endpoints=ENDPOINTS)

    @app.get("/health", tags=["System"])
    def health_check(request: Request):
        return {"status": "ok", "count": get_catalog(request).count}

    app.include_router(catalog_router)
    _register_exception_handlers(app)
    return app


app = create_app()


def run() -> None:
    import uvicorn

    uvicorn.run(
        app,
        host=default_settings.HOST,
        port=default_settings.PORT,
        log_level=default_settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    run()
