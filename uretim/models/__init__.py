"""Pydantic models for entities, report documents and API envelopes."""

from uretim.models.entities import Order, Product, ProductionTrackingForm, Shipment
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
from uretim.models.responses import ApiResponse

__all__ = [
    "ApiResponse",
    "CarryoverByType",
    "CarryoverCount",
    "DailyReport",
    "Order",
    "Product",
    "ProductReport",
    "ProductionReport",
    "ProductionTotals",
    "ProductionTrackingForm",
    "Shipment",
    "ShipmentItem",
    "ShipmentTotals",
    "ShipmentTypeTotals",
    "TypeGroup",
]
