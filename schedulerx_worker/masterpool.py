"""Registry of running task masters keyed by job instance id."""

import threading
from typing import Any, Dict, List, Optional

try:
    from typing import Protocol
except ImportError:  # pragma: no cover
    Protocol = object  # type: ignore[assignment]

_pool: Optional["TaskMasterPool"] = None
_pool_lock = threading.Lock()


class TaskMaster(Protocol):
    """What the pool needs of a task master."""

    job_instance_info: Any

    def stop(self) -> None: ...


class TaskMasterPool:
    """Thread-safe map from job instance id to its task master."""

    def __init__(self) -> None:
        self._masters: Dict[int, Any] = {}
        self._lock = threading.Lock()

    def get(self, job_instance_id: int) -> Optional[Any]:
        """Return the master of an instance, or None."""
        with self._lock:
            return self._masters.get(job_instance_id)

    def put(self, job_instance_id: int, master: Any) -> None:
        with self._lock:
            self._masters[job_instance_id] = master

    def remove(self, job_instance_id: int) -> None:
        """Forget an instance's master if present."""
        with self._lock:
            self._masters.pop(job_instance_id, None)

    def __contains__(self, job_instance_id: object) -> bool:
        with self._lock:
            return job_instance_id in self._masters

    def instance_ids(self, app_group_id: int) -> List[int]:
        """Return the distinct instance ids whose masters belong to ``app_group_id``."""
        with self._lock:
            masters = list(self._masters.values())
        found: Dict[int, None] = {}
        for master in masters:
            info = getattr(master, "job_instance_info", None)
            if info is not None and info.app_group_id == app_group_id:
                found[info.job_instance_id] = None
        return list(found)


def get_task_master_pool() -> TaskMasterPool:
    """Return the process-wide task master pool."""
    global _pool
    with _pool_lock:
        if _pool is None:
            _pool = TaskMasterPool()
        return _pool