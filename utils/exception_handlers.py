import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException

from utils.exceptions import ServiceError
from utils.response_wrapper import error_response

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ServiceError)
    async def service_error(request: Request, exc: ServiceError):
        if exc.status_code >= 500:
            logger.error('%s %s failed: %s', request.method, request.url.path, exc.message)
        else:
            logger.info('%s %s rejected (%d): %s', request.method, request.url.path, exc.status_code, exc.message)
        return error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def request_validation_error(request: Request, exc: RequestValidationError):
        logger.info('%s %s rejected: %s', request.method, request.url.path, exc.errors())
        return error_response(400, 'Invalid request body')

    # malformed multipart bodies, unknown routes, wrong methods
    @app.exception_handler(HTTPException)
    async def http_error(request: Request, exc: HTTPException):
        logger.info('%s %s rejected (%d): %s', request.method, request.url.path, exc.status_code, exc.detail)
        return error_response(exc.status_code, str(exc.detail), headers=getattr(exc, 'headers', None))
