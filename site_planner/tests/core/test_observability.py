"""Tests for run context binding and operation metrics."""

import json
import logging

import pytest
import structlog
from prometheus_client import REGISTRY

from site_planner.core.observability import (
    RunContextProcessor,
    get_correlation_id,
    get_logger,
    monitor_performance,
    planning_run_context,
    setup_structured_logging,
)


def operation_count(operation_type: str, status: str) -> float:
    value = REGISTRY.get_sample_value(
        "site_planner_operations_total",
        {"operation_type": operation_type, "status": status},
    )
    return value or 0.0


class TestPlanningRunContext:
    def test_ids_are_bound_and_reset(self):
        with planning_run_context("2614", "run-1") as run_id:
            assert run_id == "run-1"
            assert get_correlation_id() == "run-1"
            event = RunContextProcessor()(None, "info", {"event": "x"})

        assert event["correlation_id"] == "run-1"
        assert event["project_id"] == "2614"
        assert get_correlation_id() == ""

    def test_generated_id(self):
        with planning_run_context() as run_id:
            assert len(run_id) == 36

    def test_processor_leaves_events_alone_outside_a_run(self):
        assert RunContextProcessor()(None, "info", {"event": "x"}) == {"event": "x"}


class TestMonitorPerformance:
    def test_success_is_counted(self):
        @monitor_performance("test_success")
        def plan(value):
            return value * 2

        before = operation_count("test_success", "success")

        assert plan(21) == 42
        assert operation_count("test_success", "success") == before + 1

    def test_errors_are_counted_and_reraised(self):
        @monitor_performance("test_error")
        def plan():
            raise KeyError("boom")

        before = operation_count("test_error", "error")

        with pytest.raises(KeyError):
            plan()
        assert operation_count("test_error", "error") == before + 1


class TestSetupStructuredLogging:
    @pytest.fixture(autouse=True)
    def restore_structlog(self):
        yield
        structlog.reset_defaults()

    def test_json_lines_carry_logger_name_and_run_ids(self, caplog):
        setup_structured_logging(log_level="INFO", log_format="json")

        with caplog.at_level(logging.INFO):
            with planning_run_context("2614", "run-7"):
                get_logger("site_planner.tests").info("Schedule computed", items=3)

        event = json.loads(caplog.records[-1].getMessage())
        assert event["event"] == "Schedule computed"
        assert event["logger"] == "site_planner.tests"
        assert event["level"] == "info"
        assert event["correlation_id"] == "run-7"
        assert event["items"] == 3

    def test_console_format(self, caplog):
        setup_structured_logging(log_level="DEBUG", log_format="console")

        with caplog.at_level(logging.DEBUG):
            get_logger("site_planner.tests").debug("Skipping unnamed work item")

        assert "Skipping unnamed work item" in caplog.records[-1].getMessage()
