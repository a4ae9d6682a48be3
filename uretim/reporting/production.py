"""Production aggregation: finished quantities and efficiencies per product type.

Only production tracking forms recorded at a product's *last* operation count
as finished production. Forms are matched to products on the composite key
``(product_code, operation_id) == (product_code, last_operation_id)``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from uretim.exceptions import AggregationError
from uretim.models.entities import Product, ProductionTrackingForm
from uretim.models.reports import (
    ProductReport,
    ProductionReport,
    ProductionTotals,
    TypeGroup,
)
from uretim.reporting.categories import ProductCategory
from uretim.reporting.dates import DateLike, DateRange, as_day
from uretim.store.entity_store import EntityStore

logger = logging.getLogger(__name__)


@dataclass
class WeightedAverage:
    """Quantity-weighted running average that ignores missing samples."""

    weighted_sum: float = 0.0
    weight: float = 0.0

    def add(self, value: Optional[float], quantity: int) -> None:
        if value is None:
            return
        self.weighted_sum += value * quantity
        self.weight += quantity

    def merge(self, other: "WeightedAverage") -> None:
        self.weighted_sum += other.weighted_sum
        self.weight += other.weight

    @property
    def value(self) -> float:
        return self.weighted_sum / self.weight if self.weight > 0 else 0.0


@dataclass
class _TypeAccumulator:
    type_name: str
    # (product_code, name) -> quantity, insertion ordered
    products: dict[tuple[str, str], int] = field(default_factory=dict)
    total_quantity: int = 0
    operator: WeightedAverage = field(default_factory=WeightedAverage)
    machine: WeightedAverage = field(default_factory=WeightedAverage)

    def add(self, product: Product, form: ProductionTrackingForm) -> None:
        key = (product.product_code, product.name)
        self.products[key] = self.products.get(key, 0) + form.quantity
        self.total_quantity += form.quantity
        self.operator.add(form.operator_efficiency, form.quantity)
        self.machine.add(form.machine_efficiency, form.quantity)

    def to_type_group(self) -> TypeGroup:
        return TypeGroup(
            type_name=self.type_name,
            total_quantity=self.total_quantity,
            products=[
                ProductReport(product_code=code, product_name=name, quantity=quantity)
                for (code, name), quantity in sorted(self.products.items())
            ],
            average_operator_efficiency=self.operator.value,
            average_machine_efficiency=self.machine.value,
        )


def join_finished_production(
    products: list[Product],
    forms: list[ProductionTrackingForm],
    date_range: DateRange,
) -> list[tuple[Product, ProductionTrackingForm]]:
    """Pair each active form with the active product whose last operation it records."""
    by_key: dict[tuple[str, int], Product] = {}
    for product in products:
        if not product.is_active:
            continue
        key = (product.product_code, product.last_operation_id)
        if key in by_key:
            logger.warning(
                "Duplicate active product for code=%s operation=%s; keeping id=%s",
                product.product_code, product.last_operation_id, by_key[key].id,
            )
            continue
        by_key[key] = product

    joined = []
    for form in forms:
        if not form.is_active or not date_range.contains(form.date):
            continue
        product = by_key.get((form.product_code, form.operation_id))
        if product is not None:
            joined.append((product, form))
    return joined


def group_by_type(
    joined: list[tuple[Product, ProductionTrackingForm]],
) -> list[_TypeAccumulator]:
    groups: dict[str, _TypeAccumulator] = {}
    for product, form in joined:
        group = groups.get(product.type)
        if group is None:
            group = groups[product.type] = _TypeAccumulator(type_name=product.type)
        group.add(product, form)
    return [groups[name] for name in sorted(groups)]


class ProductionAggregator:
    """Builds production reports and per-category totals from the entity store."""

    name = "production aggregator"

    def __init__(self, store: EntityStore):
        self.store = store

    async def _load_joined(
        self, date_range: DateRange
    ) -> tuple[list[tuple[Product, ProductionTrackingForm]], int, int]:
        products = await self.store.find_active_products()
        forms = await self.store.find_active_ptf(date_range)
        joined = join_finished_production(products, forms, date_range)
        return joined, len(products), len(forms)

    async def get_production_report(self, start_date: DateLike, end_date: DateLike) -> ProductionReport:
        """Finished production grouped by product type, then by product."""
        date_range = DateRange.for_days(start_date, end_date)
        try:
            joined, _, _ = await self._load_joined(date_range)
        except Exception as exc:
            logger.exception(
                "Error while generating production report for range %s - %s",
                date_range.first_day, date_range.last_day,
            )
            raise AggregationError(
                self.name, str(exc), date_range.first_day, date_range.last_day
            ) from exc

        groups = group_by_type(joined)
        operator = WeightedAverage()
        machine = WeightedAverage()
        for group in groups:
            operator.merge(group.operator)
            machine.merge(group.machine)

        type_groups = [group.to_type_group() for group in groups]
        return ProductionReport(
            start_date=as_day(start_date),
            end_date=as_day(end_date),
            type_groups=type_groups,
            total_quantity=sum(group.total_quantity for group in type_groups),
            average_operator_efficiency=operator.value,
            average_machine_efficiency=machine.value,
        )

    async def get_production_totals_for_date(self, day: DateLike) -> ProductionTotals:
        """Disk / kampana / poyra totals for one day.

        Types that match none of the three categories are logged and left
        out of every named total (and so of ``combined_total``), but their
        rows still count toward the efficiency averages.
        """
        date_range = DateRange.for_day(day)
        try:
            joined, product_count, ptf_count = await self._load_joined(date_range)
        except Exception as exc:
            logger.exception("Failed to compute production totals for date %s", date_range.first_day)
            raise AggregationError(self.name, str(exc), date_range.first_day) from exc

        logger.info(
            "PTF diagnostics for %s: ptfCount=%d, productCount=%d, joinedCount=%d",
            date_range.first_day, ptf_count, product_count, len(joined),
        )

        totals = {category: 0 for category in ProductCategory}
        operator = WeightedAverage()
        machine = WeightedAverage()
        for group in group_by_type(joined):
            category = ProductCategory.from_type_label(group.type_name)
            if category is ProductCategory.OTHER:
                logger.debug("Unknown product type encountered in production totals: %s", group.type_name)
            totals[category] += group.total_quantity
            operator.merge(group.operator)
            machine.merge(group.machine)

        disk = totals[ProductCategory.DISK]
        kampana = totals[ProductCategory.KAMPANA]
        poyra = totals[ProductCategory.POYRA]
        result = ProductionTotals(
            disk_total=disk,
            kampana_total=kampana,
            poyra_total=poyra,
            combined_total=disk + kampana + poyra,
            average_operator_efficiency=operator.value,
            average_machine_efficiency=machine.value,
        )
        logger.debug(
            "Production totals for %s: disk=%d kampana=%d poyra=%d combined=%d avgOp=%.4f avgMc=%.4f",
            date_range.first_day, disk, kampana, poyra, result.combined_total,
            result.average_operator_efficiency, result.average_machine_efficiency,
        )
        return result

    async def get_total_produced(self, start_date: DateLike, end_date: DateLike) -> int:
        """Total finished quantity over the range, across all product types."""
        date_range = DateRange.for_days(start_date, end_date)
        try:
            joined, _, _ = await self._load_joined(date_range)
        except Exception as exc:
            logger.exception(
                "Error while computing total produced for range %s - %s",
                date_range.first_day, date_range.last_day,
            )
            raise AggregationError(
                self.name, str(exc), date_range.first_day, date_range.last_day
            ) from exc
        return sum(form.quantity for product, form in joined if product.last_operation_id > 0)
