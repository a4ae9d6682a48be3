"""Carryover histogram of active orders per product type."""

from __future__ import annotations

import logging
from collections import Counter

from uretim.exceptions import AggregationError
from uretim.models.reports import CarryoverByType, CarryoverCount
from uretim.reporting.dates import DateLike, as_day
from uretim.store.entity_store import EntityStore

logger = logging.getLogger(__name__)

# Buckets 1..14 are exact carryover values; 15 collects "15 or more".
MAX_BUCKET = 15
BUCKET_VALUES = range(1, MAX_BUCKET + 1)
UNKNOWN_TYPE = "Unknown"


def bucket_for(carryover: int) -> int:
    """Bucket value for a raw carryover; 0 means the order is not counted."""
    carry = max(0, carryover)
    return min(carry, MAX_BUCKET)


class CarryoverBucketer:
    """Counts active orders per (product type, carryover bucket)."""

    name = "carryover bucketer"

    def __init__(self, store: EntityStore):
        self.store = store

    async def get_carryover_counts_for_date(self, day: DateLike) -> list[CarryoverByType]:
        """Dense 15-bucket carryover histograms, one per product type.

        ``day`` is accepted for interface symmetry with the other daily
        aggregates but does not filter: carryover is a snapshot of all
        active orders.
        """
        try:
            orders = await self.store.find_active_orders()
            if not orders:
                return []
            codes = {order.product_code for order in orders}
            products = await self.store.find_active_products(codes)
        except Exception as exc:
            logger.exception("Error while computing carryover counts for date %s", as_day(day))
            raise AggregationError(self.name, str(exc), as_day(day)) from exc

        type_by_code: dict[str, str] = {}
        for product in products:
            type_by_code.setdefault(product.product_code.casefold(), product.type)

        counts: dict[str, Counter] = {}
        for order in orders:
            if not order.is_active:
                continue
            if order.carryover < 0:
                logger.debug(
                    "Negative carryover %d on order id=%s treated as 0",
                    order.carryover, order.id,
                )
            bucket = bucket_for(order.carryover)
            if bucket == 0:
                continue
            product_type = type_by_code.get(order.product_code.casefold())
            if product_type is None:
                logger.debug(
                    "No active product for order id=%s code=%s; bucketed as %s",
                    order.id, order.product_code, UNKNOWN_TYPE,
                )
                product_type = UNKNOWN_TYPE
            counts.setdefault(product_type, Counter())[bucket] += 1

        return [
            CarryoverByType(
                product_type=product_type,
                buckets=[
                    CarryoverCount(carryover_value=value, count=bucket_counts[value])
                    for value in BUCKET_VALUES
                ],
            )
            for product_type, bucket_counts in sorted(counts.items())
        ]
