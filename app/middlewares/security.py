# app/middlewares/security.py
"""
Cross-cutting HTTP middleware: hardening headers, CORS allow-list,
request logging and per-client rate limiting.

apply_security_middleware() wires them in this order (outermost first):
    security headers → origin guard → CORS → request log → rate limiter
"""

import math
import threading
import time
from collections import defaultdict, deque
from typing import Callable, Optional

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from app.utils.logger import get_logger

logger = get_logger(__name__)

HEALTH_PATH = "/api/ping"
RATE_LIMIT_MESSAGE = "Demasiadas solicitudes, intente más tarde."
CORS_MESSAGE = "CORS no permitido para este origen."

# Inline scripts are needed by the bundled docs page
CONTENT_SECURITY_POLICY = "; ".join([
    "default-src 'self'",
    "base-uri 'self'",
    "font-src 'self' https: data:",
    "form-action 'self'",
    "frame-ancestors 'self'",
    "img-src 'self' data:",
    "object-src 'none'",
    "script-src 'self' 'unsafe-inline' 'unsafe-eval'",
    "script-src-attr 'none'",
    "style-src 'self' https: 'unsafe-inline'",
])

SECURITY_HEADERS = {
    "Content-Security-Policy": CONTENT_SECURITY_POLICY,
    "Cross-Origin-Opener-Policy": "same-origin",
    "Origin-Agent-Cluster": "?1",
    "Referrer-Policy": "no-referrer",
    "X-Content-Type-Options": "nosniff",
    "X-DNS-Prefetch-Control": "off",
    "X-Download-Options": "noopen",
    "X-Frame-Options": "SAMEORIGIN",
    "X-Permitted-Cross-Domain-Policies": "none",
    "X-XSS-Protection": "0",
}


class SlidingWindowRateLimiter:
    """
    Keeps the timestamps of each client's requests inside the last `window`
    seconds. A request is allowed while fewer than `max_requests` remain.
    Clients with no request inside the window are forgotten, at most one
    sweep per window.
    """

    def __init__(self, max_requests: int, window: float, clock: Callable[[], float] = time.monotonic):
        self.max_requests = max_requests
        self.window = window
        self.clock = clock
        self._hits = defaultdict(deque)
        self._lock = threading.Lock()
        self._last_sweep = clock()

    def _expire(self, hits: deque, now: float):
        while hits and hits[0] <= now - self.window:
            hits.popleft()

    def _sweep(self, now: float):
        for key in list(self._hits):
            self._expire(self._hits[key], now)
            if not self._hits[key]:
                del self._hits[key]
        self._last_sweep = now

    def hit(self, key: str) -> tuple[bool, int, int]:
        """Register a request. Returns (allowed, remaining, seconds until a slot frees up)."""
        now = self.clock()
        with self._lock:
            if now - self._last_sweep >= self.window:
                self._sweep(now)

            hits = self._hits[key]
            self._expire(hits, now)

            allowed = len(hits) < self.max_requests
            if allowed:
                hits.append(now)

            remaining = max(0, self.max_requests - len(hits))
            reset = math.ceil(hits[0] + self.window - now) if hits else 0
            return allowed, remaining, reset

    def tracked_clients(self) -> int:
        with self._lock:
            return len(self._hits)

    def reset(self):
        with self._lock:
            self._hits.clear()


class RateLimitMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, limiter: SlidingWindowRateLimiter):
        super().__init__(app)
        self.limiter = limiter

    async def dispatch(self, request: Request, call_next):
        client = request.client.host if request.client else "unknown"
        allowed, remaining, reset = self.limiter.hit(client)
        headers = {
            "RateLimit-Limit": str(self.limiter.max_requests),
            "RateLimit-Remaining": str(remaining),
            "RateLimit-Reset": str(reset),
        }
        if not allowed:
            logger.warning(f"Rate limit exceeded for {client} on {request.url.path}")
            return JSONResponse(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                content={"ok": False, "mensaje": RATE_LIMIT_MESSAGE},
                headers=headers,
            )
        response = await call_next(request)
        response.headers.update(headers)
        return response


class RequestLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        if request.url.path == HEALTH_PATH:
            return await call_next(request)
        start = time.time()
        response = await call_next(request)
        duration = round((time.time() - start) * 1000, 2)
        logger.info(f"HTTP {response.status_code} {request.method} {request.url.path} ({duration}ms)")
        return response


class OriginGuardMiddleware(BaseHTTPMiddleware):
    """Rejects browser requests from origins outside the allow-list."""

    def __init__(self, app, allowed_origins: list[str]):
        super().__init__(app)
        self.allowed_origins = set(allowed_origins)

    async def dispatch(self, request: Request, call_next):
        origin = request.headers.get("origin")
        if origin and origin not in self.allowed_origins:
            logger.warning(f"CORS origin rejected: {origin}")
            return JSONResponse(
                status_code=status.HTTP_403_FORBIDDEN,
                content={"ok": False, "mensaje": CORS_MESSAGE},
            )
        return await call_next(request)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response


def apply_security_middleware(
    app: FastAPI,
    cors_origins: list[str],
    rate_limit_max: int,
    rate_limit_window_ms: int,
    limiter: Optional[SlidingWindowRateLimiter] = None,
) -> SlidingWindowRateLimiter:
    """Install the middleware chain on `app` and return its rate limiter."""
    limiter = limiter or SlidingWindowRateLimiter(rate_limit_max, rate_limit_window_ms / 1000)

    # Starlette runs the last added middleware first
    app.add_middleware(RateLimitMiddleware, limiter=limiter)
    app.add_middleware(RequestLogMiddleware)
    if cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )
        app.add_middleware(OriginGuardMiddleware, allowed_origins=cors_origins)
    else:
        # No allow-list: reflect any origin
        app.add_middleware(
            CORSMiddleware,
            allow_origin_regex=".*",
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )
    app.add_middleware(SecurityHeadersMiddleware)
    return limiter
