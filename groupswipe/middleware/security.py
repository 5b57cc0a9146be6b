"""
Security middleware for the GroupSwipe API
Adds response security headers; posters and trailers are the only
third-party content the clients embed.
"""
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
import os


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers (XSS, CSP, HSTS, etc.)"""

    # Swagger UI assets load from jsdelivr
    CSP_DIRECTIVES = [
        "default-src 'self'",
        "script-src 'self' 'unsafe-inline' https://www.youtube.com https://cdn.jsdelivr.net",
        "style-src 'self' 'unsafe-inline' https://cdn.jsdelivr.net",
        "img-src 'self' https://image.tmdb.org https://fastapi.tiangolo.com data:",
        "frame-src https://www.youtube.com",
    ]

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Content-Security-Policy"] = "; ".join(self.CSP_DIRECTIVES)
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"

        if os.getenv("ENVIRONMENT") == "production":
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"

        return response
