import logging
import time
import uuid
from contextvars import ContextVar

logger = logging.getLogger(__name__)

CORRELATION_ID_HEADER = "X-Correlation-ID"
SLOW_REQUEST_MS = 1000

correlation_id_var: ContextVar[str] = ContextVar("correlation_id", default="-")


class CorrelationIdFilter(logging.Filter):
    """Puts the current request's correlation id on every log record."""

    def filter(self, record):
        record.correlation_id = correlation_id_var.get()
        return True


def get_client_ip(request) -> str:
    forwarded = request.META.get("HTTP_X_FORWARDED_FOR")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.META.get("HTTP_X_REAL_IP") or request.META.get("REMOTE_ADDR", "")


class RequestLoggingMiddleware:
    """
    Logs each request and its outcome under a correlation id.

    The id is taken from the X-Correlation-ID header or generated, and is
    sent back on the response.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        correlation_id = request.headers.get(CORRELATION_ID_HEADER, "").strip()
        if not correlation_id:
            correlation_id = str(uuid.uuid4())
        token = correlation_id_var.set(correlation_id)
        request.correlation_id = correlation_id
        started = time.monotonic()

        try:
            logger.info(
                "HTTP Request - Method: %s, URI: %s, RemoteAddr: %s, UserAgent: %s",
                request.method,
                request.path,
                get_client_ip(request),
                request.headers.get("User-Agent", ""),
            )
            response = self.get_response(request)
            duration = int((time.monotonic() - started) * 1000)

            if response.status_code >= 500:
                level = logging.ERROR
            elif response.status_code >= 400:
                level = logging.WARNING
            else:
                level = logging.INFO
            logger.log(
                level,
                "HTTP Response - Method: %s, URI: %s, Status: %s, Duration: %sms",
                request.method,
                request.path,
                response.status_code,
                duration,
            )
            if duration > SLOW_REQUEST_MS:
                logger.warning(
                    "Slow Request Detected - Method: %s, URI: %s, Duration: %sms",
                    request.method,
                    request.path,
                    duration,
                )

            response[CORRELATION_ID_HEADER] = correlation_id
            return response
        finally:
            correlation_id_var.reset(token)
