"""Per-language phase tracking for a scan run."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import Any, Callable

import structlog

log = structlog.get_logger(__name__)


@dataclass
class PhaseProgress:
    phase: str  # "index:java", "scan:python", ...
    status: str = "pending"  # "pending" | "running" | "completed" | "failed"
    start_time: float | None = None
    end_time: float | None = None
    detail: str = ""
    error: str | None = None

    @property
    def duration(self) -> float | None:
        if self.start_time is not None and self.end_time is not None:
            return round(self.end_time - self.start_time, 3)
        return None


class ProgressTracker:
    """Records the index and scan phase of every language, in the order they run."""

    def __init__(self) -> None:
        self.phases: list[PhaseProgress] = []
        self._by_name: dict[str, PhaseProgress] = {}
        self.callbacks: list[Callable[[PhaseProgress], None]] = []
        self._lock = threading.Lock()

    def start(self, phase: str) -> None:
        p = PhaseProgress(phase=phase, status="running", start_time=time.monotonic())
        with self._lock:
            self.phases.append(p)
            self._by_name[phase] = p
        self._notify(p)

    def complete(self, phase: str, detail: str = "") -> None:
        self._finish(phase, "completed", detail=detail)

    def fail(self, phase: str, error: str) -> None:
        self._finish(phase, "failed", error=error)

    def get(self, phase: str) -> PhaseProgress | None:
        return self._by_name.get(phase)

    def get_summary(self) -> dict[str, Any]:
        return {
            "phases": [
                {
                    "phase": p.phase,
                    "status": p.status,
                    "duration": p.duration,
                    "detail": p.detail,
                    "error": p.error,
                }
                for p in self.phases
            ],
            "total_duration": round(sum(p.duration or 0 for p in self.phases), 3),
        }

    def _finish(self, phase: str, status: str, detail: str = "", error: str | None = None) -> None:
        with self._lock:
            p = self._by_name.get(phase)
            if p is None:
                return
            p.status = status
            p.end_time = time.monotonic()
            p.detail = detail
            p.error = error
        self._notify(p)

    def _notify(self, p: PhaseProgress) -> None:
        for cb in self.callbacks:
            try:
                cb(p)
            except Exception:
                log.debug("progress.callback_error", phase=p.phase, exc_info=True)
