"""Custom exceptions for the Uretim reporting API."""

from __future__ import annotations

from datetime import date
from typing import Optional


class UretimError(Exception):
    """Base exception for all Uretim errors."""


class ConfigError(UretimError):
    """Configuration-related errors."""


class DatabaseError(UretimError):
    """Database operation errors."""


class ReportValidationError(UretimError):
    """Report request rejected before any aggregation runs."""


class AggregationError(UretimError):
    """An aggregator failed while reading from the entity store."""

    def __init__(
        self,
        aggregator: str,
        message: str,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ):
        self.aggregator = aggregator
        self.start = start
        self.end = end
        if start is None:
            scope = ""
        elif end is None or end == start:
            scope = f" for {start.isoformat()}"
        else:
            scope = f" for {start.isoformat()} - {end.isoformat()}"
        super().__init__(f"{aggregator} failed{scope}: {message}")
