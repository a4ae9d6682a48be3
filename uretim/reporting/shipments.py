"""Shipment aggregation for a single calendar day."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from uretim.exceptions import AggregationError
from uretim.models.entities import Shipment
from uretim.models.reports import ShipmentItem, ShipmentTotals, ShipmentTypeTotals
from uretim.reporting.dates import DateLike, DateRange
from uretim.store.entity_store import EntityStore

logger = logging.getLogger(__name__)


def sum_shipments(shipments: Iterable[Shipment]) -> ShipmentTypeTotals:
    """Sum disk/kampana/poyra counts, treating missing counts as zero."""
    disk = kampana = poyra = 0
    for shipment in shipments:
        disk += shipment.disk or 0
        kampana += shipment.kampana or 0
        poyra += shipment.poyra or 0
    return ShipmentTypeTotals(
        disk_total=disk,
        kampana_total=kampana,
        poyra_total=poyra,
        combined_total=disk + kampana + poyra,
    )


def to_shipment_item(shipment: Shipment) -> ShipmentItem:
    return ShipmentItem(
        id=shipment.id,
        date=shipment.date,
        disk=shipment.disk,
        kampana=shipment.kampana,
        poyra=shipment.poyra,
        abroad=shipment.abroad,
        domestic=shipment.domestic,
        added_date_time=shipment.added_date_time,
        is_active=shipment.is_active,
    )


class ShipmentAggregator:
    """Daily shipment listing and domestic/abroad totals."""

    name = "shipment aggregator"

    def __init__(self, store: EntityStore):
        self.store = store

    async def _load(self, day: DateLike) -> list[Shipment]:
        date_range = DateRange.for_day(day)
        try:
            shipments = await self.store.find_active_shipments(date_range)
        except Exception as exc:
            logger.exception("Error while fetching shipments for date %s", date_range.first_day)
            raise AggregationError(self.name, str(exc), date_range.first_day) from exc
        return [s for s in shipments if s.is_active and date_range.contains(s.date)]

    async def get_shipments_for_date(self, day: DateLike) -> list[ShipmentItem]:
        return [to_shipment_item(shipment) for shipment in await self._load(day)]

    async def get_shipment_totals_for_date(self, day: DateLike) -> ShipmentTotals:
        """Domestic and abroad totals.

        The flags are independent: a shipment marked both domestic and abroad
        is counted in full on both sides, one marked neither is not counted.
        """
        shipments = await self._load(day)
        flagged_both = sum(1 for s in shipments if s.domestic and s.abroad)
        if flagged_both:
            logger.warning(
                "%d shipment(s) on %s are flagged both domestic and abroad",
                flagged_both, DateRange.for_day(day).first_day,
            )
        return ShipmentTotals(
            domestic=sum_shipments(s for s in shipments if s.domestic),
            abroad=sum_shipments(s for s in shipments if s.abroad),
        )
