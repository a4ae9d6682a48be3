"""Report composer: the single entry point used by the HTTP layer."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable
from typing import Any, Optional

from uretim.exceptions import ReportValidationError
from uretim.models.reports import (
    CarryoverByType,
    DailyReport,
    ProductionReport,
    ProductionTotals,
    ShipmentItem,
    ShipmentTotals,
)
from uretim.reporting.cache import ReportCache
from uretim.reporting.carryover import CarryoverBucketer
from uretim.reporting.dates import DateLike, as_day
from uretim.reporting.production import ProductionAggregator
from uretim.reporting.shipments import ShipmentAggregator
from uretim.store.entity_store import EntityStore

logger = logging.getLogger(__name__)

PRODUCTION_NAMESPACE = "production"
DAILY_NAMESPACE = "daily"
TOTAL_PRODUCED_NAMESPACE = "total_produced"


async def gather_fail_fast(*aws: Awaitable[Any]) -> list[Any]:
    """Run awaitables concurrently; on the first failure cancel the rest and re-raise it."""
    tasks = [asyncio.ensure_future(aw) for aw in aws]
    try:
        return await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            if not task.done():
                task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


def validate_range(start_date: DateLike, end_date: DateLike) -> None:
    if as_day(start_date) > as_day(end_date):
        raise ReportValidationError("startDate cannot be after endDate")


class ReportingService:
    """Composes production, shipment and carryover aggregates.

    The service holds no state between requests apart from the optional
    report cache.
    """

    def __init__(
        self,
        store: EntityStore,
        cache: Optional[ReportCache] = None,
        production: Optional[ProductionAggregator] = None,
        shipments: Optional[ShipmentAggregator] = None,
        carryover: Optional[CarryoverBucketer] = None,
    ):
        self.store = store
        self.cache = cache
        self.production = production or ProductionAggregator(store)
        self.shipments = shipments or ShipmentAggregator(store)
        self.carryover = carryover or CarryoverBucketer(store)

    async def get_production_report(self, start_date: DateLike, end_date: DateLike) -> ProductionReport:
        validate_range(start_date, end_date)
        key = (as_day(start_date), as_day(end_date))
        if self.cache is not None:
            cached = self.cache.get(PRODUCTION_NAMESPACE, key)
            if cached is not None:
                return cached
        report = await self.production.get_production_report(*key)
        if self.cache is not None:
            self.cache.set(PRODUCTION_NAMESPACE, key, report)
        return report

    async def get_production_totals_for_date(self, day: DateLike) -> ProductionTotals:
        return await self.production.get_production_totals_for_date(as_day(day))

    async def get_total_produced(self, start_date: DateLike, end_date: DateLike) -> int:
        validate_range(start_date, end_date)
        key = (as_day(start_date), as_day(end_date))
        if self.cache is not None:
            cached = self.cache.get(TOTAL_PRODUCED_NAMESPACE, key)
            if cached is not None:
                return cached
        total = await self.production.get_total_produced(*key)
        if self.cache is not None:
            self.cache.set(TOTAL_PRODUCED_NAMESPACE, key, total)
        return total

    async def get_shipments_for_date(self, day: DateLike) -> list[ShipmentItem]:
        return await self.shipments.get_shipments_for_date(as_day(day))

    async def get_shipment_totals_for_date(self, day: DateLike) -> ShipmentTotals:
        return await self.shipments.get_shipment_totals_for_date(as_day(day))

    async def get_carryover_counts_for_date(self, day: DateLike) -> list[CarryoverByType]:
        return await self.carryover.get_carryover_counts_for_date(as_day(day))

    async def get_daily_report(self, day: DateLike) -> DailyReport:
        """Everything for one calendar day in one document.

        The five sub-reports run concurrently. Any failure fails the whole
        report; no partial document is ever returned.
        """
        d = as_day(day)
        if self.cache is not None:
            cached = self.cache.get(DAILY_NAMESPACE, d)
            if cached is not None:
                return cached

        (
            production,
            production_totals,
            shipments,
            shipment_totals,
            carryover_counts,
        ) = await gather_fail_fast(
            self.production.get_production_report(d, d),
            self.production.get_production_totals_for_date(d),
            self.shipments.get_shipments_for_date(d),
            self.shipments.get_shipment_totals_for_date(d),
            self.carryover.get_carryover_counts_for_date(d),
        )

        report = DailyReport(
            date=d,
            production=production,
            production_totals=production_totals,
            shipments=shipments,
            shipment_totals=shipment_totals,
            carryover_counts=carryover_counts,
        )
        logger.info(
            "Daily report for %s: production=%d shipments=%d carryover_types=%d",
            d, production.total_quantity, len(shipments), len(carryover_counts),
        )
        if self.cache is not None:
            self.cache.set(DAILY_NAMESPACE, d, report)
        return report

    def invalidate_cache(self, namespace: Optional[str] = None) -> int:
        if self.cache is None:
            return 0
        if namespace is None:
            return self.cache.clear()
        return self.cache.invalidate(namespace)
