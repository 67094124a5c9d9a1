"""Request logging middleware.

Logs method, path, status code and duration of every request. Request
bodies are never logged since contact form payloads carry personal data.
"""

import time
import logging

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from app.core.config import settings
from app.utils.helper_functions import get_client_address

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware that writes one log line per request."""

    async def dispatch(self, request: Request, call_next):
        """Process the request and log its outcome.

        Args:
            request: The incoming HTTP request
            call_next: The next middleware or endpoint in the chain

        Returns:
            HTTP response
        """
        start_time = time.time()
        client = get_client_address(request, settings.TRUST_PROXY_HEADERS)

        try:
            response = await call_next(request)
        except Exception as e:
            process_time = time.time() - start_time
            logger.error(
                f"{request.method} {request.url.path} from {client} - ERROR: {str(e)} - {process_time:.3f}s"
            )
            raise

        process_time = time.time() - start_time
        log = logger.warning if response.status_code >= 400 else logger.info
        log(f"{request.method} {request.url.path} from {client} - {response.status_code} - {process_time:.3f}s")
        return response
