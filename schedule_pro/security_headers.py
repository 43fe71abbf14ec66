"""
Security Headers Middleware for FastAPI

Adds security headers to every JSON API response:
- X-Frame-Options: Prevents clickjacking attacks
- X-Content-Type-Options: Prevents MIME type sniffing
- Referrer-Policy: Controls referrer information leakage
- Cache-Control: Prevents caching of tokens and personal data
- Strict-Transport-Security: Enforces HTTPS (production only)
"""

import logging
from typing import Callable, Optional

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from .config import IS_PRODUCTION

logger = logging.getLogger(__name__)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Middleware that adds security headers to all responses"""

    def __init__(self, app, exclude_paths: Optional[list[str]] = None, enable_hsts: bool = IS_PRODUCTION):
        super().__init__(app)
        self.exclude_paths = exclude_paths or []
        self.enable_hsts = enable_hsts

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)

        if any(request.url.path.startswith(path) for path in self.exclude_paths):
            return response

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        response.headers["Cache-Control"] = "no-store"
        if self.enable_hsts:
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"

        return response
