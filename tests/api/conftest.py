"""Shared fixtures for API endpoint tests."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import FastAPI

from uretim.api.middleware.rate_limit import limiter, setup_rate_limiting
from uretim.api.routers import cache, reports


@pytest.fixture(autouse=True)
def _reset_rate_limiter():
    """Reset rate limiter storage between tests to avoid 429s."""
    limiter.reset()
    yield
    limiter.reset()


@pytest.fixture
def mock_reporting_service():
    """ReportingService double; tests set return values per case."""
    service = MagicMock()
    service.get_production_report = AsyncMock()
    service.get_daily_report = AsyncMock()
    service.get_total_produced = AsyncMock(return_value=0)
    service.invalidate_cache = MagicMock(return_value=0)
    service.cache = None
    return service


@pytest.fixture
def app_with_reports(mock_reporting_service):
    """App with report and cache routers and mocked state."""
    from uretim.main import register_exception_handlers

    app = FastAPI()
    setup_rate_limiting(app)
    register_exception_handlers(app)
    app.state.reporting_service = mock_reporting_service
    app.include_router(reports.router)
    app.include_router(cache.router)
    return app
