"""
Fixed-window rate limiting for everything under /api/.

Scopes:
- auth: POSTs under the auth routes, per client IP
- chat: assistant chat turns, per user (hourly)
- api: any other /api/ request, per user when a bearer token decodes, else per IP
"""

import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

from fastapi import Request, Response, status
from jose import JWTError, jwt
from starlette.middleware.base import BaseHTTPMiddleware

from tsea.config import Settings, get_settings

API_PREFIX = "/api/"
TOO_MANY_REQUESTS_BODY = '{"detail":"Too many requests. Please try again later."}'


def _client_ip(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def _user_id_from_token(request: Request, settings: Settings) -> Optional[str]:
    """Subject of the bearer token, if any. Expired or forged tokens give None."""
    auth = request.headers.get("authorization")
    if not auth or not auth.lower().startswith("bearer "):
        return None
    token = auth[7:].strip()
    if not token:
        return None
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError:
        return None
    sub = payload.get("sub")
    return str(sub) if sub else None


@dataclass(frozen=True)
class Limit:
    scope: str
    identifier: str
    limit: int
    window_seconds: int


class InMemoryRateLimitStore:
    """Fixed-window counters keyed by scope and identifier."""

    def __init__(self):
        # key -> (count, window_start, window_seconds)
        self._windows: Dict[str, Tuple[int, float, int]] = {}

    def check_and_incr(self, limit: Limit) -> bool:
        """True and counted when under the limit; False (not counted) otherwise."""
        key = f"{limit.scope}:{limit.identifier}"
        now = time.monotonic()
        entry = self._windows.get(key)
        if entry is None or now - entry[1] >= entry[2]:
            self._windows[key] = (1, now, limit.window_seconds)
            return True
        count, start, window = entry
        if count >= limit.limit:
            return False
        self._windows[key] = (count + 1, start, window)
        return True

    def cleanup_expired(self) -> None:
        now = time.monotonic()
        expired = [k for k, (_, start, window) in self._windows.items() if now - start >= window]
        for key in expired:
            del self._windows[key]

    def reset(self) -> None:
        self._windows.clear()

    def __len__(self) -> int:
        return len(self._windows)


_store: Optional[InMemoryRateLimitStore] = None


def get_store() -> InMemoryRateLimitStore:
    global _store
    if _store is None:
        _store = InMemoryRateLimitStore()
    return _store


def resolve_limit(request: Request, settings: Settings) -> Optional[Limit]:
    """Pick the limit that applies to this request, or None for non-API paths."""
    path = request.url.path or ""
    if not path.startswith(API_PREFIX):
        return None

    prefix = settings.api_v1_prefix
    if path.startswith(f"{prefix}/auth") and request.method == "POST":
        return Limit("auth", _client_ip(request), settings.rate_limit_auth_per_minute, 60)

    user_id = _user_id_from_token(request, settings)
    if path == f"{prefix}/assistant/chat" and request.method == "POST" and user_id:
        return Limit("chat", user_id, settings.rate_limit_chat_per_hour, 3600)

    return Limit("api", user_id or _client_ip(request), settings.rate_limit_api_per_minute, 60)


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Reject requests over their scope's window with a JSON 429."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        settings = get_settings()
        if not settings.rate_limit_enabled:
            return await call_next(request)

        limit = resolve_limit(request, settings)
        if limit is None:
            return await call_next(request)

        store = get_store()
        store.cleanup_expired()
        if not store.check_and_incr(limit):
            return Response(
                content=TOO_MANY_REQUESTS_BODY,
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                media_type="application/json",
                headers={"Retry-After": str(limit.window_seconds)},
            )
        return await call_next(request)
