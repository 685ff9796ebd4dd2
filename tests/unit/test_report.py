"""
Unit tests for statuses, phase timers and report formatting.
"""

import re

import pytest

from cql_node_check.core.report import CheckReport, ErrorLog, PhaseTimer, Status


def _timers(connect_completed=True, execute_completed=True):
    connect, execute, total = PhaseTimer("connect"), PhaseTimer("execute"), PhaseTimer("total")
    total.start()
    connect.start()
    connect.stop(completed=connect_completed)
    execute.start()
    execute.stop(completed=execute_completed)
    total.stop()
    return connect, execute, total


class TestStatus:
    """Test the plugin status taxonomy."""

    def test_values_match_exit_codes(self):
        assert Status.OK == 0
        assert Status.WARNING == 1
        assert Status.CRITICAL == 2
        assert Status.UNKNOWN == 3


class TestPhaseTimer:
    """Test phase timing."""

    def test_completed_phase_reports_elapsed(self):
        timer = PhaseTimer("connect")
        timer.start()
        timer.stop()
        assert timer.completed is True
        assert timer.elapsed_ms >= 0
        assert timer.reported_ms() == timer.elapsed_ms

    def test_failed_phase_is_frozen_but_not_reported(self):
        timer = PhaseTimer("connect")
        timer.start()
        timer.stop(completed=False)
        assert timer.elapsed_ms is not None
        assert timer.reported_ms() is None

    def test_never_started(self):
        timer = PhaseTimer("execute")
        assert timer.elapsed_ms is None
        assert timer.reported_ms() is None
        with pytest.raises(RuntimeError):
            timer.stop()

    def test_start_only_once(self):
        timer = PhaseTimer("connect")
        timer.start()
        with pytest.raises(RuntimeError):
            timer.start()

    def test_frozen_after_first_stop(self):
        timer = PhaseTimer("connect")
        timer.start()
        timer.stop()
        frozen = timer.elapsed_ms
        timer.stop(completed=False)
        assert timer.elapsed_ms == frozen
        assert timer.completed is True


class TestErrorLog:
    """Test the diagnostic log."""

    def test_keeps_order(self):
        log = ErrorLog()
        log.append("first")
        log.append("second")
        assert list(log) == ["first", "second"]
        assert len(log) == 2

    def test_messages_is_a_copy(self):
        log = ErrorLog()
        log.append("first")
        log.messages.append("tampered")
        assert log.messages == ["first"]


class TestCheckReport:
    """Test the rendered plugin output."""

    def test_ok_line(self):
        connect, execute, total = _timers()
        report = CheckReport(Status.OK, connect, execute, total)
        line = report.status_line()
        assert re.fullmatch(r"OK \| connect=\d+\.\d{3}; execute=\d+\.\d{3};", line)
        assert report.render() == line
        assert report.exit_code == 0

    def test_failed_phases_render_nan(self):
        connect, execute, total = PhaseTimer("connect"), PhaseTimer("execute"), PhaseTimer("total")
        total.start()
        connect.start()
        connect.stop(completed=False)
        total.stop()
        errors = ErrorLog()
        errors.append("connect(): unreachable")

        report = CheckReport(Status.CRITICAL, connect, execute, total, errors)
        assert report.render() == (
            "CRITICAL | connect=NaN; execute=NaN;\n"
            "connect(): unreachable"
        )
        assert report.exit_code == 2

    def test_execute_failure_keeps_connect_time(self):
        connect, execute, total = _timers(execute_completed=False)
        report = CheckReport(Status.CRITICAL, connect, execute, total)
        assert re.fullmatch(r"CRITICAL \| connect=\d+\.\d{3}; execute=NaN;", report.status_line())

    def test_to_dict(self):
        connect, execute, total = _timers(execute_completed=False)
        data = CheckReport(Status.CRITICAL, connect, execute, total).to_dict()
        assert data["status"] == "CRITICAL"
        assert data["exit_code"] == 2
        assert data["execute_ms"] is None
        assert data["errors"] == []
