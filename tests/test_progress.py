"""Tests for ProgressTracker."""

from __future__ import annotations

import time

from cbom_scanner.progress import ProgressTracker


class TestProgressTracker:
    def test_basic_flow(self):
        tracker = ProgressTracker()
        tracker.start("index:java")
        tracker.complete("index:java", detail="units=12")

        summary = tracker.get_summary()
        assert len(summary["phases"]) == 1
        assert summary["phases"][0]["status"] == "completed"
        assert summary["phases"][0]["detail"] == "units=12"

    def test_fail(self):
        tracker = ProgressTracker()
        tracker.start("scan:java")
        tracker.fail("scan:java", "no compiled classes")

        summary = tracker.get_summary()
        assert summary["phases"][0]["status"] == "failed"
        assert summary["phases"][0]["error"] == "no compiled classes"

    def test_unknown_phase_ignored(self):
        tracker = ProgressTracker()
        tracker.complete("never-started")
        assert tracker.phases == []

    def test_duration(self):
        tracker = ProgressTracker()
        tracker.start("scan:go")
        time.sleep(0.01)
        tracker.complete("scan:go")

        p = tracker.get("scan:go")
        assert p.duration is not None
        assert p.duration >= 0.01

    def test_running_phase_has_no_duration(self):
        tracker = ProgressTracker()
        tracker.start("index:go")
        assert tracker.get("index:go").duration is None
        assert tracker.get_summary()["total_duration"] == 0

    def test_callback(self):
        events = []
        tracker = ProgressTracker()
        tracker.callbacks.append(lambda p: events.append((p.phase, p.status)))
        tracker.start("index:python")
        tracker.complete("index:python")
        assert events == [("index:python", "running"), ("index:python", "completed")]

    def test_callback_error_does_not_break_tracking(self):
        tracker = ProgressTracker()

        def bad_callback(p):
            raise RuntimeError("boom")

        tracker.callbacks.append(bad_callback)
        tracker.start("scan:python")
        tracker.complete("scan:python")
        assert tracker.get("scan:python").status == "completed"
