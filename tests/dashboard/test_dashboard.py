"""Tests for the dashboard's schedule view helper."""

from decimal import Decimal

from amortization.dashboard.app import schedule_view


class TestScheduleView:
    def test_records_and_header(self):
        view = schedule_view(1200, 0, 0, 12, None, "Month", "2026-01-01")
        assert view["error"] is None
        assert view["header"] == "Month (Date)"
        assert len(view["records"]) == 12
        assert view["records"][0]["label"] == "1 (Jan 01, 2026)"
        assert view["records"][0]["payment"] == 100.0
        assert view["schedule"].periodic_payment == Decimal("100.00")

    def test_figure_traces(self):
        view = schedule_view(250000, 50000, 6, 360, None, "Month")
        assert len(view["figure"].data) == 2
        assert len(view["figure"].data[0].x) == 360

    def test_payment_only(self):
        view = schedule_view(1000, None, 0, None, 300, "Month")
        assert view["error"] is None
        assert len(view["records"]) == 4

    def test_missing_inputs(self):
        assert "required" in schedule_view(None, 0, 5, 12, None, "Month")["error"]

    def test_engine_error_surfaced(self):
        view = schedule_view(100000, 0, 12, None, 500, "Month")
        assert "too low to cover interest" in view["error"]

    def test_both_term_and_payment(self):
        view = schedule_view(1000, 0, 5, 12, 100, "Month")
        assert "not both" in view["error"]
