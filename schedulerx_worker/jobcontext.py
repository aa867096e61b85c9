"""Context handed to a processor when a job runs."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from schedulerx_worker.models import JobInstanceData
from schedulerx_worker.statuses import TaskStatus


@dataclass
class JobContext:
    """Everything a processor may want to know about the run it serves."""

    job_id: int = 0
    job_instance_id: int = 0
    wf_instance_id: int = 0
    task_id: int = 0
    app_group_id: str = ""
    trace_id: str = ""
    job_name: str = ""
    schedule_time: Optional[datetime] = None
    data_time: Optional[datetime] = None
    execute_mode: str = ""
    job_type: str = ""
    instance_master_actor_path: str = ""
    task_name: str = ""
    task: Any = None
    group_id: str = ""
    content: str = ""
    user: str = ""
    # Retry limit and current retry count of the job instance.
    max_attempt: int = 0
    attempt: int = 0
    job_parameters: str = ""
    # Only API triggers can pass these, once per trigger.
    instance_parameters: str = ""
    upstream_data: List[JobInstanceData] = field(default_factory=list)
    task_results: Dict[int, str] = field(default_factory=dict)
    task_statuses: Dict[int, TaskStatus] = field(default_factory=dict)
    task_max_attempt: int = 0
    task_attempt: int = 0
    # Seconds between task retries.
    task_attempt_interval: int = 0
    # Loop count of second-level jobs.
    serial_num: int = 0
    sharding_id: int = 0
    sharding_parameter: str = ""
    sharding_num: int = 0
    all_worker_addrs: List[str] = field(default_factory=list)
    worker_addr: str = ""
    time_type: int = 0
    time_expression: str = ""