"""Security middleware."""

from collections.abc import Awaitable, Callable

from fastapi import Request
from fastapi.responses import Response
from slowapi import Limiter
from slowapi.util import get_remote_address
from starlette.middleware.base import BaseHTTPMiddleware

from codetutor.config import get_settings


# In-memory rate limiter keyed by client address
limiter = Limiter(key_func=get_remote_address, enabled=get_settings().RATE_LIMIT_ENABLED)


class SimpleSecurityMiddleware(BaseHTTPMiddleware):
    """
    Ultra-simple security middleware.

    Adds essential headers to every response.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Handle request with security headers."""
        response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"

        return response


# Rate limiting decorators (use on endpoints)
code_run_rate_limit = limiter.limit("60/minute")  # Learner code runs
ai_rate_limit = limiter.limit("50/minute")  # AI-powered operations
api_rate_limit = limiter.limit("100/minute")  # General API calls


def create_rate_limit_dependency(
    limit_decorator: Callable[[Callable], Callable],
) -> Callable[[Request], Awaitable[None]]:
    """Create rate limit dependencies from decorators.

    This allows applying rate limits at router level without modifying functions.
    """

    @limit_decorator
    async def rate_limited_dependency(request: Request) -> None:
        """Apply rate limiting to protect router endpoints."""

    return rate_limited_dependency


# Pre-configured dependencies for router-level use
api_route_limit = create_rate_limit_dependency(api_rate_limit)
ai_route_limit = create_rate_limit_dependency(ai_rate_limit)
code_run_route_limit = create_rate_limit_dependency(code_run_rate_limit)
