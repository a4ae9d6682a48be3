"""Entity store for the reporting engine.

Read-only queries over the tables maintained by the production-tracking
CRUD system. Every query filters on ``is_active`` (soft delete).
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable, Optional

from uretim.database.connection import Database
from uretim.models.entities import Order, Product, ProductionTrackingForm, Shipment
from uretim.reporting.dates import DateRange

logger = logging.getLogger(__name__)

# Keeps IN (...) lists under SQLite's bound-parameter limit.
_IN_CHUNK_SIZE = 500


class EntityStore:
    """Fetch active entities from SQLite."""

    def __init__(self, db: Database):
        self.db = db

    async def find_active_products(
        self, product_codes: Optional[Iterable[str]] = None
    ) -> list[Product]:
        """Active products, optionally restricted to codes (case-insensitive)."""
        base_query = """
            SELECT id, product_code, name, description, type,
                   last_operation_id, is_active
            FROM products
            WHERE is_active = 1
        """
        if product_codes is None:
            rows = await self.db.execute_read(base_query + " ORDER BY id")
            return [self._row_to_product(row) for row in rows]

        codes = sorted({code for code in product_codes if code})
        products: list[Product] = []
        for offset in range(0, len(codes), _IN_CHUNK_SIZE):
            chunk = codes[offset:offset + _IN_CHUNK_SIZE]
            placeholders = ",".join(["?"] * len(chunk))
            rows = await self.db.execute_read(
                f"{base_query} AND product_code COLLATE NOCASE IN ({placeholders}) ORDER BY id",
                chunk,
            )
            products.extend(self._row_to_product(row) for row in rows)
        return products

    async def find_active_ptf(self, date_range: DateRange) -> list[ProductionTrackingForm]:
        """Active production tracking forms dated within the range."""
        lower, upper = date_range.query_bounds()
        rows = await self.db.execute_read(
            """
            SELECT id, date, shift, product_code, operation_id, quantity,
                   operator_efficiency, machine_efficiency, is_active
            FROM production_tracking_forms
            WHERE is_active = 1 AND date >= ? AND date < ?
            ORDER BY date, id
            """,
            [lower, upper],
        )
        return [self._row_to_ptf(row) for row in rows]

    async def find_active_orders(self) -> list[Order]:
        """All active orders, regardless of date."""
        rows = await self.db.execute_read(
            """
            SELECT id, document_no, customer, product_code, order_count,
                   carryover, completed_quantity, is_active
            FROM orders
            WHERE is_active = 1
            ORDER BY id
            """
        )
        return [self._row_to_order(row) for row in rows]

    async def find_active_shipments(self, date_range: DateRange) -> list[Shipment]:
        """Active shipments dated within the range."""
        lower, upper = date_range.query_bounds()
        rows = await self.db.execute_read(
            """
            SELECT id, date, disk, kampana, poyra, abroad, domestic,
                   added_date_time, is_active
            FROM shipments
            WHERE is_active = 1 AND date >= ? AND date < ?
            ORDER BY date, id
            """,
            [lower, upper],
        )
        return [self._row_to_shipment(row) for row in rows]

    @staticmethod
    def _parse_timestamp(value) -> Optional[datetime]:
        """Parse SQLite timestamp text to a naive datetime.

        An offset (``+03:00``, ``Z``) is dropped and the recorded wall-clock
        time kept, matching the text comparison used by the range filters.
        """
        if not value:
            return None
        if isinstance(value, datetime):
            parsed = value
        else:
            text = str(value)
            if text.endswith(("Z", "z")):
                text = text[:-1] + "+00:00"
            try:
                parsed = datetime.fromisoformat(text)
            except (ValueError, TypeError):
                logger.warning("Unparseable timestamp in entity store: %r", value)
                return None
        return parsed.replace(tzinfo=None)

    def _row_to_product(self, row: tuple) -> Product:
        """Row columns: 0 id, 1 product_code, 2 name, 3 description, 4 type,
        5 last_operation_id, 6 is_active."""
        return Product(
            id=row[0],
            product_code=row[1] or "",
            name=row[2] or "",
            description=row[3] or "",
            type=row[4] or "",
            last_operation_id=row[5] or 0,
            is_active=bool(row[6]),
        )

    def _row_to_ptf(self, row: tuple) -> ProductionTrackingForm:
        return ProductionTrackingForm(
            id=row[0],
            date=self._parse_timestamp(row[1]),
            shift=row[2] or "",
            product_code=row[3] or "",
            operation_id=row[4] or 0,
            quantity=row[5] or 0,
            operator_efficiency=row[6],
            machine_efficiency=row[7],
            is_active=bool(row[8]),
        )

    def _row_to_order(self, row: tuple) -> Order:
        return Order(
            id=row[0],
            document_no=row[1] or "",
            customer=row[2] or "",
            product_code=row[3] or "",
            order_count=row[4] or 0,
            carryover=row[5] or 0,
            completed_quantity=row[6] or 0,
            is_active=bool(row[7]),
        )

    def _row_to_shipment(self, row: tuple) -> Shipment:
        return Shipment(
            id=row[0],
            date=self._parse_timestamp(row[1]),
            disk=row[2],
            kampana=row[3],
            poyra=row[4],
            abroad=bool(row[5]),
            domestic=bool(row[6]),
            added_date_time=self._parse_timestamp(row[7]),
            is_active=bool(row[8]),
        )
