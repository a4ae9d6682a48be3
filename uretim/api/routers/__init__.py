"""Router module exports."""
from uretim.api.routers import cache, reports

__all__ = ["cache", "reports"]
