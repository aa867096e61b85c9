"""Registry of processors by the name configured on the server."""

import threading
from typing import Dict, Optional

from schedulerx_worker.processor import Processor

_task_map: Optional["TaskMap"] = None
_task_map_lock = threading.Lock()


class TaskMap:
    """Thread-safe map from task name to processor."""

    def __init__(self) -> None:
        self._tasks: Dict[str, Processor] = {}
        self._lock = threading.Lock()

    def register(self, name: str, task: Processor) -> None:
        """Register ``task`` under ``name``, replacing any earlier one."""
        with self._lock:
            self._tasks[name] = task

    def find(self, name: str) -> Optional[Processor]:
        """Return the processor registered under ``name``, or None."""
        with self._lock:
            return self._tasks.get(name)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._tasks

    def __len__(self) -> int:
        with self._lock:
            return len(self._tasks)


def get_task_map() -> TaskMap:
    """Return the process-wide task map."""
    global _task_map
    with _task_map_lock:
        if _task_map is None:
            _task_map = TaskMap()
        return _task_map