"""Plugin status taxonomy, phase timing and report formatting."""

import time
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Dict, Iterator, List, Optional

from ..utils.helpers import format_millis


class Status(IntEnum):
    """
    Monitoring plugin states; the value doubles as the process exit code.

    | code | service state | host state
    +------+---------------+-----------------------
    |    0 | OK            | UP
    |    1 | WARNING       | UP or DOWN/UNREACHABLE
    |    2 | CRITICAL      | DOWN/UNREACHABLE
    |    3 | UNKNOWN       | DOWN/UNREACHABLE
    """
    OK = 0
    WARNING = 1
    CRITICAL = 2
    UNKNOWN = 3


class PhaseTimer:
    """Measures one phase; started once, frozen once."""

    def __init__(self, name: str):
        self.name = name
        self.completed = False
        self._started: Optional[float] = None
        self._stopped: Optional[float] = None

    def start(self) -> None:
        if self._started is not None:
            raise RuntimeError(f"Timer {self.name} already started")
        self._started = time.perf_counter()

    def stop(self, completed: bool = True) -> None:
        """Freeze the timer; ``completed`` marks whether the phase succeeded."""
        if self._started is None:
            raise RuntimeError(f"Timer {self.name} was never started")
        if self._stopped is not None:
            return
        self._stopped = time.perf_counter()
        self.completed = completed

    @property
    def elapsed_ms(self) -> Optional[float]:
        if self._started is None or self._stopped is None:
            return None
        return (self._stopped - self._started) * 1000.0

    def reported_ms(self) -> Optional[float]:
        """Elapsed time, but only for a phase that actually completed."""
        return self.elapsed_ms if self.completed else None


class ErrorLog:
    """Append-only list of diagnostics for one check run."""

    def __init__(self):
        self._messages: List[str] = []

    def append(self, message: str) -> None:
        self._messages.append(message)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._messages))

    def __len__(self) -> int:
        return len(self._messages)

    @property
    def messages(self) -> List[str]:
        return list(self._messages)


@dataclass
class CheckReport:
    """Outcome of one check run."""
    status: Status
    connect: PhaseTimer
    execute: PhaseTimer
    total: PhaseTimer
    errors: ErrorLog = field(default_factory=ErrorLog)

    @property
    def exit_code(self) -> int:
        return int(self.status)

    def status_line(self) -> str:
        """Format ``<STATUS> | connect=<ms>; execute=<ms>;``."""
        return (
            f"{self.status.name} | "
            f"connect={format_millis(self.connect.reported_ms())}; "
            f"execute={format_millis(self.execute.reported_ms())};"
        )

    def render(self) -> str:
        """Status line followed by any diagnostics, one per line."""
        lines = [self.status_line()]
        lines.extend(self.errors)
        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for structured logging."""
        return {
            "status": self.status.name,
            "exit_code": self.exit_code,
            "connect_ms": self.connect.reported_ms(),
            "execute_ms": self.execute.reported_ms(),
            "total_ms": self.total.elapsed_ms,
            "errors": self.errors.messages,
        }
