"""Plain data records describing job instances, workers and map-task settings."""

import json
from dataclasses import dataclass, field, fields
from datetime import timedelta
from typing import Any, List, Optional, Union

from schedulerx_worker import constants
from schedulerx_worker.statuses import TaskDispatchMode, WorkerBusyStatus

_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1


@dataclass
class JobInstanceData:
    """Output of an upstream job handed to a workflow successor."""

    job_name: str = ""
    data: str = ""


@dataclass
class Metrics:
    """Runtime load figures of a worker machine."""

    cpu_load1: float = 0.0
    cpu_load5: float = 0.0
    cpu_processors: int = 0
    # Usage values are fractions such as 0.375; sizes are in megabytes.
    heap1_usage: float = 0.0
    heap5_usage: float = 0.0
    heap1_used: int = 0
    heap_max: int = 0
    disk_usage: float = 0.0
    disk_used: int = 0
    disk_max: int = 0


@dataclass
class WorkerInfo:
    """Identity and state of a worker."""

    ip: str = ""
    port: int = 0
    worker_id: str = ""
    worker_addr: str = ""
    akka_path: str = ""
    metrics: Metrics = field(default_factory=Metrics)
    version: str = ""
    starter: str = ""
    label: str = ""
    busy_status: WorkerBusyStatus = WorkerBusyStatus.FREE


@dataclass
class JobInstanceInfo:
    """Everything a master needs to run one job instance."""

    job_id: int = 0
    job_instance_id: int = 0
    wf_instance_id: int = 0
    region_id: int = 0
    app_group_id: int = 0
    group_id: str = ""
    job_name: str = ""
    schedule_time: timedelta = timedelta(0)
    data_time: timedelta = timedelta(0)
    job_type: str = ""
    execute_mode: str = ""
    content: str = ""
    user: str = ""
    time_type: int = 0
    time_expression: str = ""
    priority: int = 0
    status: int = 0
    alive_timestamp: int = 0
    # Formatted as {workerId}@{ip}:{port}.
    worker_id_addr: str = ""
    trigger_type: int = 0
    parameters: str = ""
    xattrs: str = ""
    all_workers: List[str] = field(default_factory=list)
    job_concurrency: int = 0
    max_attempt: int = 0
    attempt: int = 0
    instance_parameters: str = ""
    is_retry: bool = False
    upstream_data: List[JobInstanceData] = field(default_factory=list)
    # The particular machine chosen to run the instance.
    worker_info: Optional[WorkerInfo] = field(default_factory=WorkerInfo)


_XATTRS_STRING_FIELDS = frozenset({"task_dispatch_mode"})


@dataclass
class MapTaskXAttrs:
    """Extended attributes of map, grid and parallel jobs."""

    consumer_size: int = constants.DEFAULT_XATTRS_CONSUMER_SIZE
    dispatcher_size: int = constants.DEFAULT_XATTRS_DISPATCHER_SIZE
    task_max_attempt: int = 0
    task_attempt_interval: int = 0
    task_dispatch_mode: str = TaskDispatchMode.PUSH.value
    # The following apply to the pull model only.
    page_size: int = constants.DEFAULT_XATTRS_PAGE_SIZE
    queue_size: int = constants.DEFAULT_XATTRS_QUEUE_SIZE
    global_consumer_size: int = constants.DEFAULT_XATTRS_GLOBAL_CONSUMER_SIZE

    @classmethod
    def from_json(cls, text: Union[str, bytes]) -> "MapTaskXAttrs":
        """Parse a JSON object over the defaults; unknown keys are ignored.

        Keys match field names without regard to case. Raises ValueError on
        malformed JSON or on a value of the wrong type.
        """
        attrs = cls()
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ValueError(f"invalid xattrs json: {exc}") from exc
        if data is None:
            return attrs
        if not isinstance(data, dict):
            raise ValueError(f"xattrs json must be an object, got {type(data).__name__}")
        names = {f.name: f.name for f in fields(cls)}
        for key, value in data.items():
            name = names.get(key.lower())
            if name is None or value is None:
                continue
            setattr(attrs, name, _checked_value(name, value))
        return attrs


def _checked_value(name: str, value: Any) -> Any:
    if name in _XATTRS_STRING_FIELDS:
        if not isinstance(value, str):
            raise ValueError(f"xattrs field {name} expects a string, got {value!r}")
        return value
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"xattrs field {name} expects an integer, got {value!r}")
    if not _INT32_MIN <= value <= _INT32_MAX:
        raise ValueError(f"xattrs field {name} value {value} out of range")
    return value