"""Tests for /api/reports/* endpoints."""

from datetime import date, datetime

import httpx
import pytest

from uretim.exceptions import AggregationError, ReportValidationError
from uretim.models.reports import (
    CarryoverByType,
    CarryoverCount,
    DailyReport,
    ProductReport,
    ProductionReport,
    ProductionTotals,
    ShipmentItem,
    ShipmentTotals,
    ShipmentTypeTotals,
    TypeGroup,
)


@pytest.fixture
def sample_production_report():
    return ProductionReport(
        start_date=date(2024, 1, 5),
        end_date=date(2024, 1, 5),
        type_groups=[
            TypeGroup(
                type_name="Disk",
                total_quantity=150,
                products=[
                    ProductReport(product_code="P1", product_name="Disk 300", quantity=100),
                    ProductReport(product_code="P2", product_name="Disk 320", quantity=50),
                ],
                average_operator_efficiency=0.7333,
                average_machine_efficiency=0.9,
            )
        ],
        total_quantity=150,
        average_operator_efficiency=0.7333,
        average_machine_efficiency=0.9,
    )


@pytest.fixture
def sample_daily_report(sample_production_report):
    return DailyReport(
        date=date(2024, 1, 5),
        production=sample_production_report,
        production_totals=ProductionTotals(disk_total=150, combined_total=150),
        shipments=[
            ShipmentItem(id=1, date=datetime(2024, 1, 5, 9), disk=5, kampana=2, domestic=True),
        ],
        shipment_totals=ShipmentTotals(
            domestic=ShipmentTypeTotals(disk_total=5, kampana_total=2, combined_total=7),
        ),
        carryover_counts=[
            CarryoverByType(
                product_type="Disk",
                buckets=[
                    CarryoverCount(carryover_value=v, count=2 if v == 3 else 0)
                    for v in range(1, 16)
                ],
            )
        ],
    )


def _client(app):
    return httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test")


class TestProductionEndpoint:
    """Tests for GET /api/reports/production."""

    @pytest.mark.asyncio
    async def test_success_envelope(self, app_with_reports, mock_reporting_service, sample_production_report):
        mock_reporting_service.get_production_report.return_value = sample_production_report

        async with _client(app_with_reports) as client:
            response = await client.get(
                "/api/reports/production",
                params={"startDate": "2024-01-05", "endDate": "2024-01-05"},
            )

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["errors"] == []
        assert data["data"]["totalQuantity"] == 150
        assert data["data"]["typeGroups"][0]["typeName"] == "Disk"
        assert data["data"]["typeGroups"][0]["products"][0]["productCode"] == "P1"
        mock_reporting_service.get_production_report.assert_awaited_once_with(
            date(2024, 1, 5), date(2024, 1, 5)
        )

    @pytest.mark.asyncio
    async def test_inverted_range_is_rejected_before_aggregation(self, app_with_reports, mock_reporting_service):
        async with _client(app_with_reports) as client:
            response = await client.get(
                "/api/reports/production",
                params={"startDate": "2024-01-06", "endDate": "2024-01-05"},
            )

        assert response.status_code == 400
        data = response.json()
        assert data["success"] is False
        assert data["data"] is None
        assert data["message"] == "startDate cannot be after endDate"
        mock_reporting_service.get_production_report.assert_not_called()

    @pytest.mark.asyncio
    async def test_validation_error_from_service(self, app_with_reports, mock_reporting_service):
        mock_reporting_service.get_production_report.side_effect = ReportValidationError("bad range")

        async with _client(app_with_reports) as client:
            response = await client.get(
                "/api/reports/production",
                params={"startDate": "2024-01-05", "endDate": "2024-01-05"},
            )

        assert response.status_code == 400
        assert response.json()["errors"] == ["bad range"]

    @pytest.mark.asyncio
    async def test_aggregation_failure_returns_diagnostics(self, app_with_reports, mock_reporting_service):
        try:
            raise ConnectionError("database is locked")
        except ConnectionError as cause:
            failure = AggregationError("production aggregator", str(cause), date(2024, 1, 5))
            failure.__cause__ = cause
        mock_reporting_service.get_production_report.side_effect = failure

        async with _client(app_with_reports) as client:
            response = await client.get(
                "/api/reports/production",
                params={"startDate": "2024-01-05", "endDate": "2024-01-05"},
            )

        assert response.status_code == 500
        data = response.json()
        assert data["success"] is False
        assert data["message"] == "Internal server error"
        assert data["errors"] == [
            "production aggregator failed for 2024-01-05: database is locked",
            "database is locked",
        ]

    @pytest.mark.asyncio
    async def test_missing_parameter_returns_envelope(self, app_with_reports):
        async with _client(app_with_reports) as client:
            response = await client.get("/api/reports/production", params={"startDate": "2024-01-05"})

        assert response.status_code == 400
        data = response.json()
        assert data["success"] is False
        assert data["message"] == "Invalid request parameters"
        assert any("endDate" in error for error in data["errors"])

    @pytest.mark.asyncio
    async def test_malformed_date(self, app_with_reports, mock_reporting_service):
        async with _client(app_with_reports) as client:
            response = await client.get(
                "/api/reports/production",
                params={"startDate": "05/01/2024", "endDate": "2024-01-05"},
            )

        assert response.status_code == 400
        mock_reporting_service.get_production_report.assert_not_called()


class TestDailyEndpoint:
    """Tests for GET /api/reports/daily."""

    @pytest.mark.asyncio
    async def test_success_camel_case(self, app_with_reports, mock_reporting_service, sample_daily_report):
        mock_reporting_service.get_daily_report.return_value = sample_daily_report

        async with _client(app_with_reports) as client:
            response = await client.get("/api/reports/daily", params={"date": "2024-01-05"})

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["date"] == "2024-01-05"
        assert data["productionTotals"]["diskTotal"] == 150
        assert data["shipments"][0]["isActive"] is True
        assert data["shipmentTotals"]["domestic"]["combinedTotal"] == 7
        assert data["shipmentTotals"]["combined"]["kampanaTotal"] == 2
        assert len(data["carryoverCounts"][0]["buckets"]) == 15
        assert data["carryoverCounts"][0]["buckets"][2] == {"carryoverValue": 3, "count": 2}
        mock_reporting_service.get_daily_report.assert_awaited_once_with(date(2024, 1, 5))

    @pytest.mark.asyncio
    async def test_failure_means_no_partial_report(self, app_with_reports, mock_reporting_service):
        mock_reporting_service.get_daily_report.side_effect = AggregationError(
            "shipment aggregator", "boom", date(2024, 1, 5)
        )

        async with _client(app_with_reports) as client:
            response = await client.get("/api/reports/daily", params={"date": "2024-01-05"})

        assert response.status_code == 500
        data = response.json()
        assert data["data"] is None
        assert data["errors"][0] == "shipment aggregator failed for 2024-01-05: boom"


class TestTotalProducedEndpoint:
    """Tests for GET /api/reports/total-produced."""

    @pytest.mark.asyncio
    async def test_returns_integer(self, app_with_reports, mock_reporting_service):
        mock_reporting_service.get_total_produced.return_value = 270

        async with _client(app_with_reports) as client:
            response = await client.get(
                "/api/reports/total-produced",
                params={"startDate": "2024-01-05", "endDate": "2024-01-06"},
            )

        assert response.status_code == 200
        assert response.json()["data"] == 270

    @pytest.mark.asyncio
    async def test_inverted_range(self, app_with_reports, mock_reporting_service):
        async with _client(app_with_reports) as client:
            response = await client.get(
                "/api/reports/total-produced",
                params={"startDate": "2024-02-01", "endDate": "2024-01-01"},
            )

        assert response.status_code == 400
        mock_reporting_service.get_total_produced.assert_not_called()
