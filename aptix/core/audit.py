"""
Audit Middleware - Request/response logging for monitoring.

This middleware logs all API requests including:
- Request method and path
- Response status code
- Request duration
- Client IP

Logs are written through the application logging handlers.
The security header and per-IP rate limit middleware live here too.
"""
import math
import time
from datetime import datetime, timezone
from typing import Callable, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from aptix.core.exceptions import RateLimitExceeded
from aptix.core.logging_config import get_logger
from aptix.core.rate_limiter import RateLimiter

logger = get_logger(__name__)


class AuditMiddleware(BaseHTTPMiddleware):
    """Middleware for logging all requests and responses with timing."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Process request and log audit information."""
        start_time = time.time()

        method = request.method
        path = request.url.path
        client_ip = request.client.host if request.client else "unknown"

        try:
            response = await call_next(request)
        except Exception as e:
            duration = time.time() - start_time
            logger.error(
                f"REQUEST FAILED: {method} {path} "
                f"client={client_ip} duration={duration:.3f}s error={str(e)}"
            )
            raise

        duration = time.time() - start_time
        self._log_request(
            method=method,
            path=path,
            status_code=response.status_code,
            duration=duration,
            client_ip=client_ip,
        )
        response.headers["X-Response-Time"] = f"{duration:.3f}s"
        return response

    def _log_request(
        self,
        method: str,
        path: str,
        status_code: int,
        duration: float,
        client_ip: str,
    ) -> None:
        """Log request details."""
        if path == "/health":
            logger.debug(f"HEALTH: status={status_code} duration={duration:.3f}s")
            return

        if status_code >= 500:
            log_fn = logger.error
        elif status_code >= 400:
            log_fn = logger.warning
        else:
            log_fn = logger.info

        log_fn(
            f"REQUEST: {method} {path} status={status_code} duration={duration:.3f}s",
            extra={"client_ip": client_ip, "duration_ms": round(duration * 1000, 1)},
        )


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """
    Middleware to add security headers to all responses.

    Headers added:
    - X-Content-Type-Options: nosniff
    - X-Frame-Options: SAMEORIGIN
    - X-XSS-Protection: 0
    - Referrer-Policy: no-referrer
    - Strict-Transport-Security
    - Cross-Origin-Resource-Policy: same-origin
    - X-DNS-Prefetch-Control: off
    """

    HEADERS = {
        "X-Content-Type-Options": "nosniff",
        "X-Frame-Options": "SAMEORIGIN",
        "X-XSS-Protection": "0",
        "Referrer-Policy": "no-referrer",
        "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
        "Cross-Origin-Resource-Policy": "same-origin",
        "X-DNS-Prefetch-Control": "off",
    }

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Add security headers to response."""
        response = await call_next(request)
        for name, value in self.HEADERS.items():
            response.headers[name] = value
        return response


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    Per-IP rate limit over every path under ``prefix``.

    Unmatched paths under the prefix count too. The limiter is read from
    ``app.state.rate_limiter``; when it is None nothing is limited.
    Allowed responses advertise RateLimit-Limit, RateLimit-Remaining and
    RateLimit-Reset (seconds).
    """

    def __init__(self, app, prefix: str = "/api"):
        super().__init__(app)
        self.prefix = prefix.rstrip("/")

    def _applies_to(self, path: str) -> bool:
        return path == self.prefix or path.startswith(self.prefix + "/")

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        limiter: Optional[RateLimiter] = getattr(request.app.state, "rate_limiter", None)
        if limiter is None or not self._applies_to(request.url.path):
            return await call_next(request)

        identifier = request.client.host if request.client else "unknown"
        is_allowed, remaining = limiter.is_allowed(identifier)
        reset_in = limiter.get_reset_time(identifier) - datetime.now(timezone.utc)
        reset_seconds = max(1, math.ceil(reset_in.total_seconds()))

        if not is_allowed:
            error = RateLimitExceeded(
                retry_after=reset_seconds,
                window_minutes=limiter.window_minutes,
                limit=limiter.limit,
            )
            return JSONResponse(
                status_code=error.status_code,
                content=error.to_dict(),
                headers=error.headers(),
            )

        response = await call_next(request)
        response.headers["RateLimit-Limit"] = str(limiter.limit)
        response.headers["RateLimit-Remaining"] = str(remaining)
        response.headers["RateLimit-Reset"] = str(reset_seconds)
        return response
