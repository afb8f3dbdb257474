from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from loguru import logger
from starlette import status
from starlette.exceptions import HTTPException
from starlette.responses import JSONResponse

from faceswap.config import AppSettings

MSG_INTERNAL_ERROR = "Internal server error"
MSG_INVALID_REQUEST = "Invalid request"


class ApiError(Exception):
    """ Error which is reported to the client as it is """
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ApiError):
    """ Client sent malformed or incomplete upload """
    status_code = status.HTTP_400_BAD_REQUEST


class UploadTooLargeError(ApiError):
    """ Uploaded file exceeds the configured size limit """
    status_code = status.HTTP_413_REQUEST_ENTITY_TOO_LARGE


def error_response(status_code: int, message: str, headers: dict[str, str] | None = None,
                   **extra) -> JSONResponse:
    content = {'error': True, 'message': message}
    content.update(extra)
    return JSONResponse(status_code=status_code, content=content, headers=headers)


def register_exception_handlers(app: FastAPI, app_settings: AppSettings) -> None:
    l = logger.bind(source="errors")

    async def _api_error_handler(_: Request, exc: ApiError) -> JSONResponse:
        l.info(f"Request rejected with {exc.status_code}: {exc.message}")
        return error_response(exc.status_code, exc.message)

    async def _http_error_handler(_: Request, exc: HTTPException) -> JSONResponse:
        return error_response(exc.status_code, str(exc.detail), headers=exc.headers)

    async def _request_validation_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
        l.debug(f"Request validation failed: {exc.errors()}")
        return error_response(status.HTTP_400_BAD_REQUEST, MSG_INVALID_REQUEST)

    async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        l.opt(exception=exc).error(f"Server error on {request.method} {request.url.path}")
        if app_settings.is_development:
            return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, MSG_INTERNAL_ERROR, details=str(exc))
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, MSG_INTERNAL_ERROR)

    app.add_exception_handler(ApiError, _api_error_handler)
    app.add_exception_handler(HTTPException, _http_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)
