"""Pydantic models for report documents.

Field names serialize in camelCase (``typeGroups``, ``diskTotal``) so the
existing front-ends can consume them unchanged. Collections always default
to empty lists, never ``None``.
"""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel


class ReportModel(BaseModel):
    """Base for report documents: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ProductReport(ReportModel):
    product_code: str
    product_name: str = ""
    quantity: int = 0


class TypeGroup(ReportModel):
    """Finished production of one product type."""

    type_name: str
    total_quantity: int = 0
    products: list[ProductReport] = Field(default_factory=list)
    average_operator_efficiency: float = 0.0
    average_machine_efficiency: float = 0.0


class ProductionReport(ReportModel):
    start_date: date
    end_date: date
    type_groups: list[TypeGroup] = Field(default_factory=list)
    total_quantity: int = 0
    average_operator_efficiency: float = 0.0
    average_machine_efficiency: float = 0.0


class ProductionTotals(ReportModel):
    """Finished production split into the three known categories."""

    disk_total: int = 0
    kampana_total: int = 0
    poyra_total: int = 0
    combined_total: int = 0
    average_operator_efficiency: float = 0.0
    average_machine_efficiency: float = 0.0


class ShipmentItem(ReportModel):
    id: int
    date: datetime
    disk: Optional[int] = None
    kampana: Optional[int] = None
    poyra: Optional[int] = None
    abroad: bool = False
    domestic: bool = False
    added_date_time: Optional[datetime] = None
    is_active: bool = True


class ShipmentTypeTotals(ReportModel):
    disk_total: int = 0
    kampana_total: int = 0
    poyra_total: int = 0
    combined_total: int = 0

    def __add__(self, other: "ShipmentTypeTotals") -> "ShipmentTypeTotals":
        return ShipmentTypeTotals(
            disk_total=self.disk_total + other.disk_total,
            kampana_total=self.kampana_total + other.kampana_total,
            poyra_total=self.poyra_total + other.poyra_total,
            combined_total=self.combined_total + other.combined_total,
        )


class ShipmentTotals(ReportModel):
    domestic: ShipmentTypeTotals = Field(default_factory=ShipmentTypeTotals)
    abroad: ShipmentTypeTotals = Field(default_factory=ShipmentTypeTotals)

    @computed_field
    @property
    def combined(self) -> ShipmentTypeTotals:
        """Domestic and abroad summed field by field."""
        return self.domestic + self.abroad


class CarryoverCount(ReportModel):
    # 1..14 exact, 15 means "15 or more"
    carryover_value: int
    count: int = 0


class CarryoverByType(ReportModel):
    product_type: str
    buckets: list[CarryoverCount] = Field(default_factory=list)

    def count_for(self, carryover_value: int) -> int:
        for bucket in self.buckets:
            if bucket.carryover_value == carryover_value:
                return bucket.count
        return 0


class DailyReport(ReportModel):
    date: date
    production: ProductionReport
    production_totals: ProductionTotals
    shipments: list[ShipmentItem] = Field(default_factory=list)
    shipment_totals: ShipmentTotals = Field(default_factory=ShipmentTotals)
    carryover_counts: list[CarryoverByType] = Field(default_factory=list)
