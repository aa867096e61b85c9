"""Optional hook wrapped around every processor run."""

import threading
from abc import ABC, abstractmethod
from typing import Optional

from schedulerx_worker.jobcontext import JobContext
from schedulerx_worker.processor import ProcessResult

_tracer: Optional["Tracer"] = None
_initialized = False
_lock = threading.Lock()


class Tracer(ABC):
    """Sees a job context before processing and the result after it."""

    @abstractmethod
    def start(self, ctx: JobContext) -> JobContext:
        """Return the context the processor should receive."""

    @abstractmethod
    def end(self, ctx: JobContext, result: Optional[ProcessResult]) -> Optional[ProcessResult]:
        """Return the result to report."""


def init_tracer(tracer: Optional[Tracer]) -> None:
    """Install the process-wide tracer; only the first call has any effect."""
    global _tracer, _initialized
    with _lock:
        if not _initialized:
            _tracer = tracer
            _initialized = True


def get_tracer() -> Optional[Tracer]:
    """Return the installed tracer, or None."""
    return _tracer