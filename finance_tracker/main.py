# main.py

import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from finance_tracker.core.config import Settings, settings as default_settings
from finance_tracker.core.logging_config import setup_logging
from finance_tracker.db.mongodb import connect_to_mongo, close_mongo_connection, get_database
from finance_tracker.repositories.transaction_repository import (
    InMemoryTransactionRepository,
    MongoTransactionRepository,
    TransactionRepository,
)
from finance_tracker.services.transaction_service import TransactionService
from finance_tracker.api.v1.routes.transaction_route import router as transaction_router

logger = logging.getLogger(__name__)


def format_validation_errors(exc: RequestValidationError) -> str:
    messages = []
    for err in exc.errors():
        field = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        messages.append(f"{field}: {err.get('msg')}" if field else err.get("msg", "Invalid request"))
    return "; ".join(messages) or "Invalid request"


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": format_validation_errors(exc)},
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"},
    )


def create_app(
    settings: Optional[Settings] = None,
    repository: Optional[TransactionRepository] = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    When ``repository`` is given it is used as-is and no Mongo
    connection is opened; otherwise the store is chosen from
    ``settings.STORAGE_BACKEND`` at startup.
    """
    settings = settings or default_settings
    setup_logging(settings.LOG_LEVEL, settings.LOG_FILE)

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        description="REST API for tracking income and expense transactions",
    )

    # -----------------------------
    # CORS MIDDLEWARE
    # -----------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # -----------------------------
    # ROUTERS
    # -----------------------------
    app.include_router(transaction_router, prefix="/api")

    if repository is not None:
        app.state.transaction_service = TransactionService(repository)

    # -----------------------------
    # STARTUP EVENT
    # -----------------------------
    @app.on_event("startup")
    async def startup_event():
        if getattr(app.state, "transaction_service", None) is not None:
            return

        if settings.STORAGE_BACKEND == "memory":
            logger.warning("Using in-memory storage; data is lost on restart")
            app.state.transaction_service = TransactionService(InMemoryTransactionRepository())
            return

        await connect_to_mongo(settings)
        collection = get_database(settings)[settings.MONGO_COLLECTION]
        mongo_repository = MongoTransactionRepository(collection)
        await mongo_repository.ensure_indexes()
        logger.info("Indexes ensured on %s.%s", settings.MONGO_DB_NAME, settings.MONGO_COLLECTION)
        app.state.transaction_service = TransactionService(mongo_repository)

    # -----------------------------
    # SHUTDOWN EVENT
    # -----------------------------
    @app.on_event("shutdown")
    async def shutdown_event():
        await close_mongo_connection()

    # -----------------------------
    # ROOT ENDPOINT
    # -----------------------------
    @app.get("/", tags=["Health"])
    def root():
        return {
            "message": "Finance Tracker Backend Running",
            "version": settings.VERSION,
            "docs": "/docs",
        }

    return app


app = create_app()
