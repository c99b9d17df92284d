"""
Security headers applied to every response.
"""

from typing import Callable, Dict

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

CSP_DIRECTIVES: Dict[str, str] = {
    "default-src": "'self'",
    "base-uri": "'self'",
    "img-src": "'self' data:",
    "font-src": "'self' data:",
    "script-src": "'self'",
    "style-src": "'self' 'unsafe-inline'",
    "object-src": "'none'",
    "frame-ancestors": "'none'",
    "form-action": "'self'",
}


def build_csp(directives: Dict[str, str]) -> str:
    return "; ".join(f"{name} {value}" for name, value in directives.items())


SECURITY_HEADERS: Dict[str, str] = {
    "Content-Security-Policy": build_csp(CSP_DIRECTIVES),
    "Referrer-Policy": "no-referrer",
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
}


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Set the security headers unless a handler already chose its own value."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response
