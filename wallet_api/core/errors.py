from typing import Dict, List
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException


class FieldValidationError(Exception):
    """
    Raised by services when input passes schema validation but breaks a rule
    that needs the database (unique email, referenced row exists, ...).

    Rendered exactly like a request validation failure (422).
    """

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(message)


def _validation_response(errors: Dict[str, List[str]]) -> JSONResponse:
    first_field = next(iter(errors), None)
    message = errors[first_field][0] if first_field else "The given data was invalid."

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"message": message, "errors": errors},
    )


def _field_name(loc) -> str:
    """
    Turn a pydantic error location like ("body", "email") into "email".
    """
    parts = [str(part) for part in loc if part not in ("body", "query", "path", "header")]
    if parts:
        return ".".join(parts)
    return str(loc[0]) if loc else "request"


async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
    errors: Dict[str, List[str]] = {}
    for error in exc.errors():
        message = error.get("msg", "Invalid value")
        # Strip the "Value error, " prefix pydantic adds to custom validator messages
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        errors.setdefault(_field_name(error.get("loc", ())), []).append(message)

    return _validation_response(errors)


async def field_validation_exception_handler(request: Request, exc: FieldValidationError):
    return _validation_response({exc.field: [exc.message]})


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": jsonable_encoder(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Render every handled error as JSON with a `message` key.
    """
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(FieldValidationError, field_validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
