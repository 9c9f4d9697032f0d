"""
FixedWindowRateLimiter - per-client request throttling held in process memory.

Each client gets a fixed window that starts at its first request. Inside the
window every request is counted, including rejected ones; once the count passes
the maximum the client is limited until the window expires. A window boundary
can let a client through at up to twice the nominal rate, which is accepted.

Records live in a bounded cachetools.TTLCache so the map cannot grow without
limit: records are dropped once they are well past their window, and the least
recently used record is evicted when the cache is full.
"""

import logging
import threading
import time
from typing import Callable, Optional

from cachetools import TTLCache

from ..core.config import Config
from ..core.models import ClientWindow

logger = logging.getLogger(__name__)

UNKNOWN_CLIENT = "unknown"


def client_id_from(forwarded_for: Optional[str], remote_addr: Optional[str]) -> str:
    """
    Derive the rate-limit key for a request.

    Uses the X-Forwarded-For header value as-is, then the socket peer address,
    then the literal "unknown".
    """
    return forwarded_for or remote_addr or UNKNOWN_CLIENT


class FixedWindowRateLimiter:
    """
    Fixed-window request counter keyed by client identifier.

    Example:
        >>> limiter = FixedWindowRateLimiter(max_requests=2, window_seconds=60)
        >>> limiter.check_and_record("1.2.3.4")
        False
        >>> limiter.check_and_record("1.2.3.4")
        False
        >>> limiter.check_and_record("1.2.3.4")
        True
    """

    def __init__(
        self,
        max_requests: Optional[int] = None,
        window_seconds: Optional[float] = None,
        max_clients: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic
    ):
        """
        Args:
            max_requests: Accepted requests per client per window (default: Config)
            window_seconds: Window length in seconds (default: Config)
            max_clients: Upper bound on tracked clients (default: Config)
            clock: Returns the current time in seconds; inject a fake in tests
        """
        self.max_requests = Config.RATE_LIMIT_MAX_REQUESTS if max_requests is None else max_requests
        self.window_seconds = Config.RATE_LIMIT_WINDOW_SECONDS if window_seconds is None else window_seconds
        self.max_clients = Config.RATE_LIMIT_MAX_CLIENTS if max_clients is None else max_clients
        if self.max_clients < 1:
            raise ValueError(f"max_clients must be at least 1, got {self.max_clients}")
        self._clock = clock
        self._lock = threading.Lock()
        # Records outlive their window so the window check below, not cache
        # expiry, decides when a client resets.
        self._windows: TTLCache = TTLCache(
            maxsize=self.max_clients,
            ttl=self.window_seconds * 2,
            timer=clock
        )

        logger.info(
            f"FixedWindowRateLimiter initialized: {self.max_requests} req / "
            f"{self.window_seconds:g}s, max {self.max_clients} clients"
        )

    def check_and_record(self, client_id: str) -> bool:
        """
        Record one request for a client and report whether it is limited.

        Args:
            client_id: Client identifier (see client_id_from)

        Returns:
            True if the request must be rejected, False if it may proceed
        """
        with self._lock:
            now = self._clock()
            window = self._windows.get(client_id)

            if window is None or now - window.window_start > self.window_seconds:
                window = ClientWindow(window_start=now, count=1)
                self._windows[client_id] = window
            else:
                window.count += 1
            count = window.count

        limited = count > self.max_requests
        if limited:
            logger.warning(f"Rate limit exceeded for client {client_id} ({count} requests in window)")
        return limited

    def get_window(self, client_id: str) -> Optional[ClientWindow]:
        """Current window record for a client, if one is tracked."""
        with self._lock:
            return self._windows.get(client_id)

    def clear(self) -> None:
        """Forget every client."""
        with self._lock:
            self._windows.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._windows)
