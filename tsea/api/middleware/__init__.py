"""
ASGI middleware: rate limiting, request correlation and security headers.
"""

from tsea.api.middleware.rate_limit import RateLimitMiddleware
from tsea.api.middleware.request_id import RequestIdMiddleware
from tsea.api.middleware.security_headers import SecurityHeadersMiddleware

__all__ = ["RateLimitMiddleware", "RequestIdMiddleware", "SecurityHeadersMiddleware"]
