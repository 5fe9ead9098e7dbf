"""Translation of service outcomes and validation errors into HTTP responses."""

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from taskapi.services.results import NotFound, Result, StorageFailed, Success, ValidationFailed

VALIDATION_FAILED = "Validation failed"


class FieldValidationError(Exception):
    """Raised at the HTTP boundary for a field -> messages error map."""

    def __init__(self, errors: dict[str, list[str]]):
        super().__init__(VALIDATION_FAILED)
        self.errors = errors


def unwrap(result: Result):
    """Return the value of a successful result or raise the matching HTTP error."""
    if isinstance(result, Success):
        return result.value
    if isinstance(result, ValidationFailed):
        raise FieldValidationError(result.errors)
    if isinstance(result, NotFound):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=result.message)
    if isinstance(result, StorageFailed):
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=result.message
        )
    raise TypeError(f"Unexpected result: {result!r}")


def _error_message(error: dict) -> str:
    # field_validator messages carry their own text; pydantic prefixes it otherwise
    if error.get("type") == "value_error" and "error" in error.get("ctx", {}):
        return str(error["ctx"]["error"])
    return error["msg"]


def _error_field(error: dict) -> str:
    location = [str(part) for part in error.get("loc", ())]
    if len(location) > 1 and location[0] in ("body", "query", "path"):
        location = location[1:]
    return ".".join(location) or "body"


def validation_errors_by_field(errors: list[dict]) -> dict[str, list[str]]:
    """Group pydantic errors into a field -> messages map."""
    by_field: dict[str, list[str]] = {}
    for error in errors:
        by_field.setdefault(_error_field(error), []).append(_error_message(error))
    return by_field


def _validation_response(errors: dict[str, list[str]]) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": VALIDATION_FAILED, "errors": errors},
    )


async def request_validation_handler(request: Request, exc: RequestValidationError):
    return _validation_response(validation_errors_by_field(exc.errors()))


async def field_validation_handler(request: Request, exc: FieldValidationError):
    return _validation_response(exc.errors)


def register_error_handlers(app: FastAPI) -> None:
    """Install the validation error handlers on the application."""
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(FieldValidationError, field_validation_handler)
