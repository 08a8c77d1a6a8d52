"""
main.py
-------
Entry point for the School Records API.

Responsibilities:
    - Create the database schema on startup (when AUTO_CREATE_SCHEMA is set).
    - Build the FastAPI application with CORS, routers and error handlers.
    - Serve it with uvicorn.
"""

from contextlib import asynccontextmanager

import psycopg2
import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import API_HOST, API_PORT, AUTO_CREATE_SCHEMA, CORS_ORIGINS
from db.connection import check_connection
from db.init_db import create_tables
from handlers import course_handler, student_handler, teacher_handler
from utils.errors import StorageError
from utils.logger import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if AUTO_CREATE_SCHEMA:
        logger.info("Initializing database schema...")
        create_tables()
    logger.info("School Records API is ready.")
    yield
    logger.info("School Records API stopped.")


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed JSON or wrongly typed fields: 400 with every problem listed."""
    errors = []
    for err in exc.errors():
        field = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        errors.append(f"{field}: {err.get('msg')}" if field else str(err.get("msg")))
    return JSONResponse(
        status_code=400,
        content={"success": False, "message": "Invalid input data.", "errors": errors},
    )


async def storage_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Database failures that escaped the services (read paths): generic 500."""
    logger.error(f"Storage failure on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content={"success": False, "message": "Internal server error.", "details": str(exc)},
    )


def create_app() -> FastAPI:
    """Build the FastAPI application."""
    app = FastAPI(title="School Records API", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(student_handler.router)
    app.include_router(teacher_handler.router)
    app.include_router(course_handler.router)

    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StorageError, storage_error_handler)
    app.add_exception_handler(psycopg2.Error, storage_error_handler)

    @app.get("/health", tags=["Health"])
    def health():
        ok = check_connection()
        return JSONResponse(
            status_code=200 if ok else 503,
            content={"status": "ok" if ok else "unavailable", "database": ok},
        )

    return app


app = create_app()


def main() -> None:
    """Run the API with uvicorn."""
    logger.info(f"Starting School Records API on {API_HOST}:{API_PORT}")
    # log_config=None keeps uvicorn on the handler set up in utils/logger.py
    uvicorn.run(app, host=API_HOST, port=API_PORT, log_config=None)


if __name__ == "__main__":
    main()
