import logging
import time
from uuid import uuid4

from .config_log import request_id_ctx

logger = logging.getLogger(__name__)


class RequestIDMiddleware:
    """
    Tags each request with an id and writes one access-log line per request.

    - Takes X-Request-ID from the client, or generates one.
    - Stores it in a ContextVar so RequestIDFilter stamps it on every record.
    - Echoes it back in the X-Request-ID response header.
    """
    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        rid = request.headers.get("X-Request-ID") or uuid4().hex[:12]
        token = request_id_ctx.set(rid)
        started = time.monotonic()
        try:
            response = self.get_response(request)
            elapsed_ms = (time.monotonic() - started) * 1000
            logger.info("%s %s %s %.1fms", request.method, request.path, response.status_code, elapsed_ms)
        finally:
            request_id_ctx.reset(token)
        response["X-Request-ID"] = rid
        return response
