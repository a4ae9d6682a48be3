"""Tests for uretim/exceptions.py"""

from datetime import date

import pytest

from uretim.exceptions import (
    AggregationError,
    ConfigError,
    DatabaseError,
    ReportValidationError,
    UretimError,
)


class TestExceptionHierarchy:
    def test_all_inherit_from_uretim_error(self):
        assert issubclass(ConfigError, UretimError)
        assert issubclass(DatabaseError, UretimError)
        assert issubclass(ReportValidationError, UretimError)
        assert issubclass(AggregationError, UretimError)

    def test_uretim_error_is_exception(self):
        assert issubclass(UretimError, Exception)


class TestAggregationError:
    def test_message_with_range(self):
        exc = AggregationError("production aggregator", "boom", date(2024, 1, 5), date(2024, 1, 7))
        assert str(exc) == "production aggregator failed for 2024-01-05 - 2024-01-07: boom"
        assert exc.aggregator == "production aggregator"

    def test_message_with_single_day(self):
        exc = AggregationError("shipment aggregator", "boom", date(2024, 1, 5))
        assert str(exc) == "shipment aggregator failed for 2024-01-05: boom"

    def test_message_without_dates(self):
        assert str(AggregationError("carryover bucketer", "boom")) == "carryover bucketer failed: boom"

    def test_catchable_as_uretim_error(self):
        with pytest.raises(UretimError):
            raise AggregationError("production aggregator", "boom")
