"""
Rate Limiter - Control request frequency per client.

This module provides simple in-memory rate limiting for /api routes to:
- Prevent abuse
- Control generation provider costs

For deployments with multiple instances, put a shared limiter in
front of the service instead (e.g. at the gateway).
"""
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional, Tuple
import threading

from aptix.core.logging_config import get_logger

logger = get_logger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


class RateLimiter:
    """
    Simple sliding window rate limiter.

    Tracks requests per identifier (client IP) within a time window.

    Example:
        >>> limiter = RateLimiter(max_requests=100, window_minutes=15)
        >>> limiter.is_allowed("203.0.113.7")  # (True, 99)
    """

    def __init__(
        self,
        max_requests: int = 100,
        window_minutes: int = 15,
        cleanup_interval_minutes: int = 5
    ):
        """
        Initialize the rate limiter.

        Args:
            max_requests: Maximum requests allowed per window
            window_minutes: Window length in minutes
            cleanup_interval_minutes: How often to clean old entries
        """
        self.limit = max_requests
        self.window_minutes = window_minutes
        self.window = timedelta(minutes=window_minutes)
        self.cleanup_interval = timedelta(minutes=cleanup_interval_minutes)

        self._requests: Dict[str, List[datetime]] = {}
        self._lock = threading.RLock()
        self._last_cleanup = _now()

        logger.info(f"RateLimiter initialized: {max_requests} requests/{window_minutes} min")

    def is_allowed(self, identifier: str, now: Optional[datetime] = None) -> Tuple[bool, int]:
        """
        Check if a request is allowed for the given identifier.

        Allowed requests are recorded against the window.

        Args:
            identifier: Client IP address
            now: Override for the current time

        Returns:
            Tuple of (is_allowed, remaining_requests)
        """
        now = now or _now()
        with self._lock:
            self._maybe_cleanup(now)

            cutoff = now - self.window
            recent = [t for t in self._requests.get(identifier, []) if t > cutoff]
            self._requests[identifier] = recent

            if len(recent) >= self.limit:
                logger.warning(f"Rate limit exceeded for: {identifier}")
                return False, 0

            recent.append(now)
            return True, self.limit - len(recent)

    def get_reset_time(self, identifier: str) -> datetime:
        """
        Get when the oldest request in the window expires.

        Args:
            identifier: Client IP address

        Returns:
            Datetime when the window frees a slot
        """
        with self._lock:
            if not self._requests.get(identifier):
                return _now()
            return min(self._requests[identifier]) + self.window

    def reset(self) -> None:
        """Forget all recorded requests."""
        with self._lock:
            self._requests.clear()

    def _maybe_cleanup(self, now: datetime) -> None:
        """Remove old entries periodically."""
        if now - self._last_cleanup < self.cleanup_interval:
            return

        cutoff = now - self.window
        for identifier in list(self._requests.keys()):
            self._requests[identifier] = [
                t for t in self._requests[identifier] if t > cutoff
            ]
            if not self._requests[identifier]:
                del self._requests[identifier]

        self._last_cleanup = now
        logger.debug(f"Rate limiter cleanup: {len(self._requests)} active clients")
