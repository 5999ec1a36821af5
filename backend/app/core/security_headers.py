"""
Security headers middleware

The storefront API only serves JSON (plus the interactive docs), so the
policy is locked down to same-origin everywhere except the docs pages.
"""
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from app.core.config import settings

DOCS_PATHS = ("/docs", "/redoc", "/openapi.json")


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add CSP, framing, sniffing and referrer headers to every response."""

    API_CSP = {
        "default-src": "'none'",
        "frame-ancestors": "'none'",
        "base-uri": "'none'",
        "form-action": "'none'",
    }

    # Swagger UI / ReDoc load their bundles from jsdelivr
    DOCS_CSP = {
        "default-src": "'self'",
        "script-src": "'self' 'unsafe-inline' https://cdn.jsdelivr.net",
        "style-src": "'self' 'unsafe-inline' https://cdn.jsdelivr.net",
        "img-src": "'self' data: https:",
        "font-src": "'self' https://cdn.jsdelivr.net",
        "frame-ancestors": "'self'",
        "object-src": "'none'",
    }

    @staticmethod
    def build_csp(directives: dict) -> str:
        return "; ".join(f"{key} {value}" for key, value in directives.items())

    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)

        if request.url.path in DOCS_PATHS:
            response.headers["Content-Security-Policy"] = self.build_csp(self.DOCS_CSP)
        else:
            response.headers["Content-Security-Policy"] = self.build_csp(self.API_CSP)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        response.headers["Permissions-Policy"] = "camera=(), microphone=(), geolocation=()"

        if settings.is_production and not settings.DEBUG:
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"

        return response
