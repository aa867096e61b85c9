"""Process-wide worker configuration, set once."""

import threading
from dataclasses import dataclass
from typing import Any, Optional

from schedulerx_worker import constants


@dataclass(frozen=True)
class WorkerConfig:
    """Tunable settings of the worker."""

    debug_mode: bool = False
    share_container_pool: bool = False
    map_master_failover: bool = True
    second_delay_interval_ms: bool = False
    dispatch_second_delay_standalone: bool = False
    map_master_page_size: int = constants.MAP_MASTER_PAGE_SIZE_DEFAULT
    map_master_queue_size: int = constants.MAP_MASTER_QUEUE_SIZE_DEFAULT
    map_master_dispatcher_size: int = constants.MAP_MASTER_DISPATCHER_SIZE_DEFAULT
    share_pool_size: int = constants.SHARED_POOL_SIZE_DEFAULT
    worker_parallel_task_max_size: int = constants.PARALLEL_TASK_LIST_SIZE_MAX
    worker_map_page_size: int = constants.WORKER_MAP_PAGE_SIZE_DEFAULT
    task_body_size_max: int = constants.TASK_BODY_SIZE_MAX_DEFAULT
    worker_label: str = ""


_worker_config: Optional[WorkerConfig] = None
_initialized = False
_lock = threading.Lock()


def init_worker_config(cfg: Optional[WorkerConfig]) -> None:
    """Install ``cfg`` as the worker configuration unless one was already set."""
    global _worker_config, _initialized
    with _lock:
        if not _initialized:
            _worker_config = cfg
            _initialized = True


def get_worker_config() -> WorkerConfig:
    """Return the installed configuration, or the defaults if none is set."""
    if _worker_config is not None:
        return _worker_config
    return WorkerConfig()


def new_worker_config(**kwargs: Any) -> Optional[WorkerConfig]:
    """Build and install a configuration from keyword overrides, once.

    Later calls return the configuration installed first.
    """
    global _worker_config, _initialized
    with _lock:
        if not _initialized:
            _worker_config = WorkerConfig(**kwargs)
            _initialized = True
        return _worker_config