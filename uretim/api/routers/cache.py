"""Report cache management endpoints."""

from fastapi import APIRouter, Request

from uretim.api.middleware.rate_limit import limiter

router = APIRouter(prefix="/api/cache", tags=["cache"])


@router.get("/stats")
async def get_cache_stats(api_request: Request):
    """Report cache hit rates and per-namespace sizes."""
    cache = api_request.app.state.reporting_service.cache
    if cache is None:
        return {"enabled": False}
    return {"enabled": True, **cache.stats()}


@router.post("/clear")
@limiter.limit("10/minute")
async def clear_report_cache(request: Request):
    """Clear every cached report.

    Use this after bulk corrections in the production-tracking system.
    """
    cleared = request.app.state.reporting_service.invalidate_cache()
    return {"status": "cleared", "entries_cleared": cleared}


@router.delete("/{namespace}")
async def invalidate_namespace(namespace: str, api_request: Request):
    """Invalidate one report namespace (``production``, ``daily``, ``total_produced``)."""
    removed = api_request.app.state.reporting_service.invalidate_cache(namespace)
    return {"status": "invalidated", "namespace": namespace, "entries_cleared": removed}
