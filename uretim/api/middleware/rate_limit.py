"""Rate limiting middleware setup."""

from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from uretim.config import get_config

# The limiter owns its own storage; tests reset it between cases.
limiter = Limiter(key_func=get_remote_address)


def reports_rate_limit() -> str:
    """Limit string for report endpoints, read from configuration."""
    return get_config().api.reports_rate_limit


async def custom_rate_limit_handler(request, exc):
    """Return the standard envelope for rate limit exceeded."""
    return JSONResponse(
        status_code=429,
        content={
            "success": False,
            "message": "Rate limit exceeded. Please try again later.",
            "data": None,
            "errors": ["rate_limited"],
        },
    )


def setup_rate_limiting(app):
    """Configure rate limiting for FastAPI app."""
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, custom_rate_limit_handler)
    return limiter
