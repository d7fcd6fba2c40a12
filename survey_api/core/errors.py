import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Disk I/O failed while reading or writing participant data."""


class ParticipantNotFound(StorageError):
    def __init__(self, participant_id: str) -> None:
        super().__init__(f"No record for participant {participant_id}")
        self.participant_id = participant_id


class RecordParseError(StorageError):
    """A stored participant document is not a valid JSON object."""


class InvalidParticipantId(ValueError):
    pass


class TooManyFiles(ValueError):
    def __init__(self, count: int, limit: int) -> None:
        super().__init__(f"Received {count} files, at most {limit} allowed")
        self.count = count
        self.limit = limit


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = exc.errors()
        if any(err.get("type") == "json_invalid" for err in errors):
            logger.warning("invalid_json_body", extra={"path": request.url.path})
            return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": "Invalid JSON body"})
        return JSONResponse(
            status_code=422,
            content={"error": "Invalid request", "detail": jsonable_errors(errors)},
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("unhandled_error", extra={"path": request.url.path}, exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": "Internal server error"}
        )


def jsonable_errors(errors) -> list[dict]:
    return [{"loc": list(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")} for err in errors]
