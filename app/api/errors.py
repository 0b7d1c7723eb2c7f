"""Exception handlers: every failure leaves the API in the uniform result shape."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core.errors import WorkoutLogError
from app.schemas.result import ActionResult
from app.services.validators import first_error_message

logger = logging.getLogger(__name__)


def _failure(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ActionResult.fail(message).model_dump())


async def workout_log_error_handler(request: Request, exc: WorkoutLogError) -> JSONResponse:
    logger.debug("%s %s -> %s: %s", request.method, request.url.path, type(exc).__name__, exc.message)
    return _failure(exc.status_code, exc.message)


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return _failure(422, first_error_message(exc.errors()))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(WorkoutLogError, workout_log_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
