from contextlib import asynccontextmanager
from typing import Optional
import time
import uuid

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from chatbot.api.error_handlers import configure_exception_handlers
from chatbot.api.routers import health, message, training_data
from chatbot.config import Settings, get_settings
from chatbot.domain.interfaces.document_store import DocumentStore
from chatbot.infrastructure.database.factory import create_document_store
from chatbot.utils.exceptions import DocumentStoreError
from chatbot.utils.logger import configure_logging, get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler for startup and shutdown events.

    Connects the configured document store once for the whole process,
    unless a store was injected into create_application().

    Args:
        app: FastAPI application instance
    """
    settings: Settings = app.state.settings
    logger.info(f"Starting {settings.SERVICE_NAME} service on port {settings.PORT}")

    owns_store = app.state.document_store is None
    if owns_store:
        app.state.document_store = create_document_store(settings)
        try:
            app.state.document_store.ping()
        except DocumentStoreError as e:
            # Requests keep failing with 500 until the store comes back.
            logger.error(f"Document store is not reachable at startup: {str(e)}")

    yield

    logger.info(f"Shutting down {settings.SERVICE_NAME} service")
    if owns_store:
        app.state.document_store.close()


def create_application(
    document_store: Optional[DocumentStore] = None,
    settings: Optional[Settings] = None
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        document_store: Store to use instead of the configured one
        settings: Settings to use instead of the cached environment settings

    Returns:
        FastAPI: Configured application instance
    """
    settings = settings or get_settings()
    app = FastAPI(
        title="Intent Chat Service API",
        description="Training data management and message classification",
        version=settings.VERSION,
        lifespan=lifespan,
        debug=settings.DEBUG
    )
    app.state.settings = settings
    app.state.document_store = document_store

    configure_middleware(app)
    register_routers(app)
    configure_exception_handlers(app)

    return app


def configure_middleware(app: FastAPI) -> None:
    """
    Configure middleware for the application.

    Args:
        app: FastAPI application instance
    """
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    # Request timing middleware
    @app.middleware("http")
    async def add_process_time_header(request: Request, call_next):
        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time
        response.headers["X-Process-Time"] = str(process_time)
        return response

    # Correlation ID middleware
    @app.middleware("http")
    async def add_correlation_id(request: Request, call_next):
        correlation_id = request.headers.get("X-Correlation-ID") or str(uuid.uuid4())
        request.state.correlation_id = correlation_id

        response = await call_next(request)
        response.headers["X-Correlation-ID"] = correlation_id
        return response


def register_routers(app: FastAPI) -> None:
    """
    Register API routers with the application.

    Args:
        app: FastAPI application instance
    """
    app.include_router(health.router, tags=["Health"])
    app.include_router(training_data.router, prefix="/training-data", tags=["Training data"])
    app.include_router(message.router, prefix="/message", tags=["Messages"])


def run() -> None:
    """Run the service with uvicorn."""
    import uvicorn

    configure_logging()
    settings = get_settings()
    uvicorn.run(
        "chatbot.main:create_application",
        factory=True,
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG
    )


if __name__ == "__main__":
    run()
