"""HTTP middleware: per-client rate limiting and security headers."""

from __future__ import annotations

import logging
import math
import threading
import time
from dataclasses import dataclass
from typing import Awaitable, Callable

from fastapi import Request, Response, status
from fastapi.responses import JSONResponse

from astra.models import ErrorResponse

logger = logging.getLogger(__name__)

RATE_LIMIT_MESSAGE = "Too many requests, please try again later."

SECURITY_HEADERS: dict[str, str] = {
    "Content-Security-Policy": (
        "default-src 'self';base-uri 'self';font-src 'self' https: data:;"
        "form-action 'self';frame-ancestors 'self';img-src 'self' data:;"
        "object-src 'none';script-src 'self';script-src-attr 'none';"
        "style-src 'self' https: 'unsafe-inline';upgrade-insecure-requests"
    ),
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
    "Origin-Agent-Cluster": "?1",
    "Referrer-Policy": "no-referrer",
    "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
    "X-Content-Type-Options": "nosniff",
    "X-DNS-Prefetch-Control": "off",
    "X-Download-Options": "noopen",
    "X-Frame-Options": "SAMEORIGIN",
    "X-Permitted-Cross-Domain-Policies": "none",
    "X-XSS-Protection": "0",
}

CallNext = Callable[[Request], Awaitable[Response]]


@dataclass(frozen=True)
class RateLimitResult:
    allowed: bool
    limit: int
    remaining: int
    reset_after: float


class FixedWindowRateLimiter:
    """Count hits per key inside fixed time windows."""

    def __init__(
        self,
        max_requests: int,
        window_s: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.max_requests = max(1, int(max_requests))
        self.window_s = max(1.0, float(window_s))
        self._clock = clock
        self._windows: dict[str, tuple[float, int]] = {}
        self._lock = threading.Lock()

    def hit(self, key: str) -> RateLimitResult:
        now = self._clock()
        with self._lock:
            entry = self._windows.get(key)
            if entry is None or entry[0] <= now:
                self._purge(now)
                entry = (now + self.window_s, 0)
            reset_at, count = entry
            count += 1
            self._windows[key] = (reset_at, count)

        return RateLimitResult(
            allowed=count <= self.max_requests,
            limit=self.max_requests,
            remaining=max(0, self.max_requests - count),
            reset_after=max(0.0, reset_at - now),
        )

    def _purge(self, now: float) -> None:
        expired = [key for key, (reset_at, _) in self._windows.items() if reset_at <= now]
        for key in expired:
            del self._windows[key]


def client_key(request: Request) -> str:
    client = request.client
    if client is None:
        return "unknown"
    return client.host


def _rate_limit_headers(result: RateLimitResult) -> dict[str, str]:
    return {
        "RateLimit-Limit": str(result.limit),
        "RateLimit-Remaining": str(result.remaining),
        "RateLimit-Reset": str(math.ceil(result.reset_after)),
    }


async def rate_limit_middleware(request: Request, call_next: CallNext) -> Response:
    """Reject requests from clients that exhausted their quota."""

    limiter: FixedWindowRateLimiter = request.app.state.rate_limiter
    key = client_key(request)
    result = limiter.hit(key)
    headers = _rate_limit_headers(result)

    if not result.allowed:
        logger.warning("Rate limit exceeded", extra={"client": key})
        headers["Retry-After"] = headers["RateLimit-Reset"]
        return JSONResponse(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            content=ErrorResponse(error=RATE_LIMIT_MESSAGE).model_dump(),
            headers=headers,
        )

    response = await call_next(request)
    response.headers.update(headers)
    return response


async def security_headers_middleware(request: Request, call_next: CallNext) -> Response:
    response = await call_next(request)
    for name, value in SECURITY_HEADERS.items():
        response.headers.setdefault(name, value)
    return response
