"""
Exception handlers mapping service errors to HTTP responses.

Every error body has an "error" field. Server-side failures are logged with
their traceback but the client only ever sees a generic message.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from recipe_api.services.exceptions import (
    ConstraintViolation,
    IngredientRaceError,
    NotFoundError,
    StorageError,
)

logger = logging.getLogger(__name__)


async def validation_error_handler(request: Request, exc: RequestValidationError):
    details = [
        {"loc": list(err["loc"]), "msg": err["msg"], "type": err["type"]}
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content={"error": "Validation failed", "details": details},
    )


async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"error": str(exc)})


async def ingredient_race_handler(request: Request, exc: IngredientRaceError):
    logger.error(f"{request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


async def constraint_violation_handler(request: Request, exc: ConstraintViolation):
    logger.warning(f"{request.method} {request.url.path}: {exc} ({exc.original_error})")
    return JSONResponse(
        status_code=409,
        content={"error": "Request conflicts with existing data"},
    )


async def storage_error_handler(request: Request, exc: StorageError):
    logger.error(f"{request.method} {request.url.path}: {exc}", exc_info=exc.original_error)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled exception on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(IngredientRaceError, ingredient_race_handler)
    app.add_exception_handler(ConstraintViolation, constraint_violation_handler)
    app.add_exception_handler(StorageError, storage_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
