"""Tests for import chains and module integrity.

Ensures all public modules can be imported without errors and
that re-exports from __init__.py files work correctly.
"""

import logging

from detailing.logging_context import (
    NO_DETAILER,
    DetailerIdFilter,
    detailer_context,
    get_detailer_id,
    get_detailer_logger,
)


class TestSchemaImports:
    def test_import_availability_schema(self):
        from detailing.schemas.availability_schema import (
            AppointmentStatus, RejectionReason, WeeklyAvailability,
        )
        assert RejectionReason.OUTSIDE_HOURS == "outside_hours"
        assert AppointmentStatus.PENDING == "pending"
        assert len(WeeklyAvailability.default().days) == 7


class TestSchedulingImports:
    def test_package_reexports(self):
        from detailing.scheduling import (
            SLOT_GRANULARITY_MINUTES, enumerate_available_slots, validate_booking,
        )
        assert SLOT_GRANULARITY_MINUTES == 30
        assert callable(enumerate_available_slots)
        assert callable(validate_booking)


class TestToolImports:
    def test_import_tools(self):
        from detailing.tools.appointments import book_appointment
        from detailing.tools.availability import check_availability, get_available_dates
        from detailing.tools.detailers import get_timing_settings
        from detailing.tools.services import get_all_services
        assert callable(book_appointment)
        assert callable(check_availability)
        assert callable(get_available_dates)
        assert callable(get_timing_settings)
        assert callable(get_all_services)


class TestLoggingContext:
    def test_no_detailer_outside_context(self):
        assert get_detailer_id() == NO_DETAILER

    def test_context_sets_and_restores(self):
        with detailer_context("det-42") as detailer_id:
            assert detailer_id == "det-42"
            assert get_detailer_id() == "det-42"
        assert get_detailer_id() == NO_DETAILER

    def test_nested_context_restores_outer(self):
        with detailer_context("det-1"):
            with detailer_context("det-2"):
                assert get_detailer_id() == "det-2"
            assert get_detailer_id() == "det-1"
        assert get_detailer_id() == NO_DETAILER

    def test_context_restored_after_error(self):
        try:
            with detailer_context("det-3"):
                raise RuntimeError("boom")
        except RuntimeError:
            pass
        assert get_detailer_id() == NO_DETAILER

    def test_filter_attached_once(self):
        logger = get_detailer_logger("detailing.tests.sample")
        get_detailer_logger("detailing.tests.sample")
        assert sum(isinstance(f, DetailerIdFilter) for f in logger.filters) == 1

    def test_filter_sets_record_attribute(self):
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)
        with detailer_context("det-7"):
            assert DetailerIdFilter().filter(record) is True
        assert record.detailer_id == "det-7"
