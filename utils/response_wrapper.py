import logging
from functools import wraps

from starlette.exceptions import HTTPException
from fastapi.responses import JSONResponse
from starlette.responses import Response

from utils.exceptions import ServiceError

logger = logging.getLogger(__name__)


def error_response(status_code: int, message: str, headers: dict | None = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={'success': False, 'message': message}, headers=headers)


def response_wrapper(func):
    """Wrap a view so dict results become ``{success: true, ...}`` and failures become
    ``{success: false, message}`` with the status code of the error.
    """

    @wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            result = await func(*args, **kwargs)
        except (ServiceError, HTTPException):
            raise
        except Exception as exc:
            logger.exception('Unhandled error in %s', func.__name__)
            return error_response(500, str(exc) or exc.__class__.__name__)
        if isinstance(result, Response):
            return result
        return JSONResponse(content={'success': True, **result})

    return wrapper
