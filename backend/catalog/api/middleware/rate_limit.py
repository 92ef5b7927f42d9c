"""
Per-client rate limiting middleware using a token bucket.
"""

import hashlib
import logging
import time
from collections.abc import Callable

from fastapi import Request, Response, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

logger = logging.getLogger(__name__)


class RateLimiter:
    """Token bucket rate limiter implementation."""

    def __init__(self, rate: float, capacity: int):
        """
        Args:
            rate: Rate at which tokens are refilled (tokens per second)
            capacity: Maximum number of tokens in the bucket

        """
        self.rate = rate
        self.capacity = capacity
        self.tokens: float = float(capacity)
        self.last_refill = time.monotonic()

    def can_consume(self, tokens: int = 1) -> bool:
        """Take `tokens` from the bucket if enough are available."""
        self._refill()
        if self.tokens >= tokens:
            self.tokens -= tokens
            return True
        return False

    def _refill(self) -> None:
        now = time.monotonic()
        new_tokens = (now - self.last_refill) * self.rate

        if new_tokens > 0:
            self.tokens = min(self.capacity, self.tokens + new_tokens)
            self.last_refill = now


class RateLimiters:
    """Rate limiters keyed by client identifier."""

    def __init__(self, rate: float = 30.0, capacity: int = 50, cleanup_interval: int = 300):
        self.rate = rate
        self.capacity = capacity
        self.cleanup_interval = cleanup_interval

        # client id -> (limiter, last access)
        self.limiters: dict[str, tuple[RateLimiter, float]] = {}
        self.last_cleanup = time.monotonic()

    def get_limiter(self, client_id: str) -> RateLimiter:
        """Get or create the limiter for a client."""
        now = time.monotonic()
        if now - self.last_cleanup > self.cleanup_interval:
            self._cleanup()
            self.last_cleanup = now

        if client_id not in self.limiters:
            self.limiters[client_id] = (RateLimiter(self.rate, self.capacity), now)
            return self.limiters[client_id][0]

        limiter, _ = self.limiters[client_id]
        self.limiters[client_id] = (limiter, now)
        return limiter

    def _cleanup(self) -> None:
        """Remove limiters that haven't been accessed recently."""
        stale_time = time.monotonic() - (self.cleanup_interval * 2)

        to_remove = [
            client_id
            for client_id, (_, last_access) in self.limiters.items()
            if last_access < stale_time
        ]
        for client_id in to_remove:
            del self.limiters[client_id]

        if to_remove:
            logger.debug(f"Cleaned up {len(to_remove)} stale rate limiters")


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Middleware for rate limiting API requests."""

    def __init__(
        self,
        app: ASGIApp,
        rate: float = 30.0,
        capacity: int = 50,
        exempt_paths: list[str] | None = None,
    ):
        super().__init__(app)
        self.rate_limiters = RateLimiters(rate=rate, capacity=capacity)
        self.exempt_paths = exempt_paths or [
            "/health",
            "/metrics",
            "/docs",
            "/redoc",
            "/openapi.json",
        ]

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        path = request.url.path
        if any(path.startswith(exempt) for exempt in self.exempt_paths):
            return await call_next(request)

        client_id = self._get_client_id(request)
        limiter = self.rate_limiters.get_limiter(client_id)

        if not limiter.can_consume():
            logger.warning(f"Rate limit exceeded for client {client_id}")
            return JSONResponse(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                content={"detail": "Too many requests. Please try again later."},
            )

        response = await call_next(request)
        remaining = max(0, limiter.tokens)
        limit = limiter.capacity

        response.headers["X-RateLimit-Limit"] = str(limit)
        response.headers["X-RateLimit-Remaining"] = str(int(remaining))
        response.headers["X-RateLimit-Reset"] = str(
            int(
                time.time() + (limit - remaining) / limiter.rate
                if remaining < limit
                else 0
            )
        )

        return response

    def _get_client_id(self, request: Request) -> str:
        """Identify the client by forwarded IP, falling back to the peer address."""
        forwarded_for = request.headers.get("X-Forwarded-For")
        if forwarded_for:
            client_ip = forwarded_for.split(",")[0].strip()
        else:
            client_ip = request.client.host if request.client else "unknown"
        return f"ip:{hashlib.md5(client_ip.encode(), usedforsecurity=False).hexdigest()}"
