# middleware.py
import logging
import math
import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

logger = logging.getLogger(__name__)

# room for multipart framing or the JSON envelope around the file content
BODY_OVERHEAD = 64 * 1024


def body_allowance(max_size: int) -> int:
    """Largest request body that can still carry ``max_size`` bytes of file content.

    The content itself is limited by the store, so the same upload is accepted or
    rejected whether or not the client declares a Content-Length.
    """
    return math.ceil(max_size * 4 / 3) + BODY_OVERHEAD


class RequestLimitMiddleware(BaseHTTPMiddleware):
    """Reject bodies that declare a size no upload of ``max_size`` could need, and log every request."""

    def __init__(self, app, max_size: int):
        super().__init__(app)
        self.max_body = body_allowance(max_size)

    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        declared = request.headers.get('content-length')
        if declared and declared.isdigit() and int(declared) > self.max_body:
            logger.warning('Rejected %s %s: body of %s bytes exceeds %d',
                           request.method, request.url.path, declared, self.max_body)
            return JSONResponse(status_code=413, content={'success': False, 'message': 'Payload too large'})

        response: Response = await call_next(request)
        elapsed = (time.perf_counter() - started) * 1000
        logger.info('%s %s -> %d (%.1f ms)', request.method, request.url.path, response.status_code, elapsed)
        return response
