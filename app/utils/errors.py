# app/utils/errors.py
"""
Error taxonomy shared by middlewares and controllers.

ApiError subclasses carry the exact JSON payload the client expects, so
the registered exception handler only has to pick the status code. Anything
that is not an ApiError is an unexpected failure: handle_errors logs it with
the stack trace and answers with the controller's generic 500 message.
"""

import functools
from typing import Optional

from fastapi import Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError as PydanticValidationError

from app.utils.logger import get_logger

logger = get_logger(__name__)

INVALID_ID_MESSAGE = "El ID proporcionado no es un número válido."


class ApiError(Exception):
    status_code = 500

    def __init__(self, payload: dict, status_code: Optional[int] = None):
        super().__init__(payload)
        self.payload = payload
        if status_code is not None:
            self.status_code = status_code


class AuthenticationError(ApiError):
    """Missing or invalid token. Terminal for the request."""
    status_code = 401


class ValidationError(ApiError):
    """Missing required field, malformed/future date, bad id format."""
    status_code = 400


class NotFoundError(ApiError):
    status_code = 404


class ConflictError(ApiError):
    """Duplicate email, chronologically inverted dates."""
    status_code = 400


async def api_error_handler(request: Request, exc: ApiError):
    return JSONResponse(status_code=exc.status_code, content=exc.payload)


def handle_errors(message: str, key: str = "mensaje"):
    """
    Wrap a controller so unexpected exceptions become a 500 with `message`.
    `key` is the field the resource family uses for messages ("mensaje" or "msg").
    """
    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except ApiError:
                raise
            except Exception as e:
                logger.error(f"{func.__name__} failed: {e}", exc_info=True)
                return JSONResponse(status_code=500, content={"ok": False, key: message})
        return wrapper
    return decorator


def parse_id(raw: str) -> int:
    """Path ids must be plain integers."""
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise ValidationError({"ok": False, "mensaje": INVALID_ID_MESSAGE})


def parse_body(schema: type[BaseModel], payload: dict):
    """Build a request model from the raw JSON body, 400 on type errors."""
    try:
        return schema.model_validate(payload)
    except PydanticValidationError as e:
        errors = [
            {"campo": ".".join(str(part) for part in err["loc"]), "msg": err["msg"]}
            for err in e.errors()
        ]
        raise ValidationError({"ok": False, "mensaje": "Datos enviados inválidos", "errors": errors})
