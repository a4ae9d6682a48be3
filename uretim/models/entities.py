"""Pydantic models for the entities read by the reporting engine."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class Product(BaseModel):
    """Product master row. ``type`` is a free-text category label."""

    id: int = 0
    product_code: str
    name: str = ""
    description: str = ""
    type: str = ""
    last_operation_id: int = 0
    is_active: bool = True


class ProductionTrackingForm(BaseModel):
    """One shift's recorded output for a product at an operation."""

    id: int = 0
    date: datetime
    shift: str = ""
    product_code: str
    operation_id: int
    quantity: int = 0
    operator_efficiency: Optional[float] = None
    machine_efficiency: Optional[float] = None
    is_active: bool = True


class Order(BaseModel):
    """Customer order line. ``carryover`` is the quantity rolled from a prior period."""

    id: int = 0
    document_no: str = ""
    customer: str = ""
    product_code: str
    order_count: int = 0
    carryover: int = 0
    completed_quantity: int = 0
    is_active: bool = True


class Shipment(BaseModel):
    """Daily shipment counts per category. ``domestic`` and ``abroad`` are independent."""

    id: int = 0
    date: datetime
    disk: Optional[int] = None
    kampana: Optional[int] = None
    poyra: Optional[int] = None
    abroad: bool = False
    domestic: bool = False
    added_date_time: Optional[datetime] = None
    is_active: bool = True
