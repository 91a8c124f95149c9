from fastapi import Request
from typing import Callable, Dict, List
import asyncio
import logging
import time

from signup_backend.core.config import settings
from signup_backend.core.errors import RateLimitError

logger = logging.getLogger(__name__)

UNKNOWN_CLIENT = "unknown"


def _now_ms() -> float:
    return time.time() * 1000


class SlidingWindowRateLimiter:
    """
    Per-key sliding window counter kept in process memory.

    Each key maps to the timestamps of its accepted requests inside the
    trailing window. State is lost on restart and is not shared between
    processes; for a multi-instance deployment it should move to a shared
    store with TTLs.
    """

    def __init__(
        self,
        window_ms: int = 60000,
        max_requests: int = 5,
        clock: Callable[[], float] = _now_ms,
    ):
        if window_ms < 1:
            raise ValueError("window_ms must be >= 1")
        if max_requests < 1:
            raise ValueError("max_requests must be >= 1")

        self.window_ms = window_ms
        self.max_requests = max_requests
        self._clock = clock
        # Storage: {key: [accepted request timestamps in ms, oldest first]}
        self._storage: Dict[str, List[float]] = {}
        self._lock = asyncio.Lock()

    def _prune(self, timestamps: List[float], now: float) -> List[float]:
        return [ts for ts in timestamps if now - ts < self.window_ms]

    async def is_allowed(self, key: str) -> bool:
        """
        Check and record a request for key.

        Args:
            key: Unique identifier for the caller (client IP)

        Returns:
            True if the request is accepted, False if the window is full.
            Rejected requests are not recorded.
        """
        async with self._lock:
            now = self._clock()
            timestamps = self._prune(self._storage.get(key, []), now)

            if len(timestamps) >= self.max_requests:
                self._storage[key] = timestamps
                return False

            timestamps.append(now)
            self._storage[key] = timestamps
            return True

    async def get_current_usage(self, key: str) -> int:
        """Number of accepted requests for key inside the current window."""
        async with self._lock:
            return len(self._prune(self._storage.get(key, []), self._clock()))

    async def cleanup_expired(self) -> int:
        """Drop keys whose timestamps have all left the window."""
        async with self._lock:
            now = self._clock()
            expired_keys = [
                key
                for key, timestamps in self._storage.items()
                if not self._prune(timestamps, now)
            ]
            for key in expired_keys:
                del self._storage[key]
            return len(expired_keys)

    async def reset(self) -> None:
        async with self._lock:
            self._storage.clear()


def build_rate_limiter() -> SlidingWindowRateLimiter:
    return SlidingWindowRateLimiter(
        window_ms=settings.RATE_LIMIT_WINDOW_MS,
        max_requests=settings.RATE_LIMIT_MAX_REQUESTS,
    )


def get_rate_limiter(request: Request) -> SlidingWindowRateLimiter:
    return request.app.state.rate_limiter


def get_client_ip(request: Request) -> str:
    """Caller IP as reported by the trusted proxy header."""
    return request.headers.get(settings.CLIENT_IP_HEADER) or UNKNOWN_CLIENT


async def enforce_signup_rate_limit(request: Request) -> None:
    """
    Dependency applying the signup rate limit before any other processing.

    Raises:
        RateLimitError: If the caller exceeded the window budget
    """
    limiter = get_rate_limiter(request)
    client_ip = get_client_ip(request)

    if not await limiter.is_allowed(client_ip):
        logger.warning(
            f"Signup rate limit exceeded for {client_ip} "
            f"({limiter.max_requests} per {limiter.window_ms}ms)"
        )
        raise RateLimitError("Too many requests. Please try again later.")


# Background task to clean up idle rate limit entries
async def run_cleanup_loop(limiter: SlidingWindowRateLimiter, interval_seconds: int):
    """Periodically drop idle keys so the map does not grow without bound."""
    while True:
        try:
            await asyncio.sleep(interval_seconds)
            removed = await limiter.cleanup_expired()
            if removed:
                logger.debug(f"Rate limiter cleanup removed {removed} idle keys")
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.error(f"Error in rate limiter cleanup: {e}")
