"""Job configurations and the job management calls of the management API."""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from schedulerx_worker.openapi import constants as c
from schedulerx_worker.openapi.client import OpenApiClient, OpenApiError
from schedulerx_worker.openapi.request import BaseRequest


def _class_content(class_name: str) -> str:
    return json.dumps({"className": class_name}, separators=(",", ":"))


@dataclass
class XAttrsConfig:
    """Advanced settings of grid and parallel jobs."""

    consumer_size: int = c.DEFAULT_XATTRS_CONSUMER_SIZE
    dispatcher_size: int = c.DEFAULT_XATTRS_DISPATCHER_SIZE
    task_max_attempt: int = 0
    task_attempt_interval: int = 0
    # push or pull
    task_dispatch_mode: str = ""
    # The following apply to the pull model only.
    page_size: int = c.DEFAULT_XATTRS_PAGE_SIZE
    queue_size: int = c.DEFAULT_XATTRS_QUEUE_SIZE
    global_consumer_size: int = c.DEFAULT_XATTRS_GLOBAL_CONSUMER_SIZE


@dataclass
class TimeConfig:
    """When a job runs."""

    time_type: int = c.CRON_TYPE
    # Cron expression, fixed period in seconds, or empty for API jobs.
    time_expression: str = ""
    calendar: str = ""
    # Seconds.
    data_offset: int = 0
    timezone: str = ""
    params: Dict[str, Any] = field(default_factory=dict)

    def is_required(self) -> bool:
        """Tell whether a time type is set and, unless API-triggered, an expression."""
        if self.time_type == 0:
            return False
        if self.time_type != c.API_TYPE and not self.time_expression:
            return False
        return True


@dataclass
class MonitorConfig:
    """Alarm settings of a job."""

    timeout_enable: bool = True
    fail_enable: bool = True
    fail_limit_times: int = 1
    fail_rate: int = 0
    miss_worker_enable: bool = False
    timeout: int = 0
    timeout_kill_enable: bool = False
    # Hour and minute.
    deadline: str = ""
    days_of_deadline: int = 0
    # sms, mail, phone or ding.
    send_channel: str = "ding"


_EMPTY_MONITOR_CONFIG = MonitorConfig(
    timeout_enable=False, fail_enable=False, fail_limit_times=0, send_channel=""
)


@dataclass
class ContactInfo:
    """A person alarms are sent to."""

    emp_id: str = ""
    user_name: str = ""
    user_phone: str = ""
    user_mail: str = ""
    # Robot webhook.
    ding: str = ""


@dataclass
class JobMonitorInfo:
    """Alarm configuration and contacts of a job."""

    monitor_config: MonitorConfig = field(default_factory=MonitorConfig)
    contact_info: List[ContactInfo] = field(default_factory=list)
    params: Dict[str, Any] = field(default_factory=dict)

    def is_required(self) -> bool:
        """Tell whether anything at all is configured."""
        return not (
            self.monitor_config == _EMPTY_MONITOR_CONFIG
            and not self.contact_info
            and not self.params
        )


@dataclass
class JobBaseConfig:
    """Settings common to every job type."""

    job_id: int = 0
    workflow_id: int = 0
    name: str = ""
    description: str = ""
    # standalone, broadcast, parallel, grid or batch.
    execute_mode: str = ""
    parameters: str = ""
    max_concurrency: int = 1
    max_attempt: int = 0
    # Seconds.
    attempt_interval: int = 30
    # 0 disabled, 1 enabled.
    status: int = 1
    time_config: TimeConfig = field(default_factory=TimeConfig)
    job_monitor_info: JobMonitorInfo = field(default_factory=JobMonitorInfo)
    priority: int = 0
    params: Dict[str, Any] = field(default_factory=dict)

    def is_required(self) -> bool:
        """Tell whether the fields the console insists on are filled in."""
        return bool(
            self.name
            and self.execute_mode
            and self.time_config.is_required()
            and self.job_monitor_info.is_required()
        )


@dataclass
class JavaJobConfig(JobBaseConfig):
    """A job run by a named processor class."""

    class_name: str = ""
    jar_url: str = ""
    map_task_xattrs: XAttrsConfig = field(default_factory=XAttrsConfig)

    @classmethod
    def for_class(cls, class_name: str) -> "JavaJobConfig":
        """Build the default configuration for a processor class."""
        return cls(
            class_name=class_name,
            params={
                "jobType": "java",
                "content": _class_content(class_name),
                "contentType": "text",
            },
        )

    def is_required(self) -> bool:
        return bool(self.class_name) and super().is_required()


@dataclass
class HttpAttribute:
    """How an HTTP job calls its target and reads the answer."""

    url: str = ""
    method: str = c.HTTP_GET_METHOD
    cookie: str = ""
    resp_key: str = ""
    resp_value: str = ""
    # Seconds, at most 15.
    timeout: int = 0

    def is_required(self) -> bool:
        return bool(
            self.url and self.method and self.resp_key and self.resp_value and self.timeout > 0
        )


@dataclass
class HttpJobConfig(JobBaseConfig):
    """A job that calls an HTTP endpoint."""

    http_attribute: HttpAttribute = field(default_factory=HttpAttribute)

    @classmethod
    def for_class(cls, class_name: str) -> "HttpJobConfig":
        """Build the default standalone HTTP job configuration."""
        return cls(
            execute_mode=c.EXEC_MODE_STANDALONE,
            params={
                "jobType": "http",
                "content": _class_content(class_name),
                "contentType": "text",
            },
        )

    def is_required(self) -> bool:
        return super().is_required() and self.http_attribute.is_required()


@dataclass
class JobConfigInfo(JobBaseConfig):
    """Changes to an existing job."""

    # Cannot be changed after creation.
    job_type: str = ""
    content: str = ""
    content_type: int = 0
    class_name: str = ""
    jar_url: str = ""
    map_task_xattrs: XAttrsConfig = field(default_factory=XAttrsConfig)

    def is_required(self) -> bool:
        return super().is_required()


class JobApi:
    """Job management calls made through a management API client."""

    def __init__(self, client: OpenApiClient) -> None:
        self.client = client

    def _url(self, path: str) -> str:
        return f"http://{self.client.domain}{path}"

    def _send(self, path: str, params: Dict[str, Any]) -> bytes:
        request = BaseRequest()
        for key, value in params.items():
            request.set_param(key, value)
        return self.client.send_request(self._url(path), request)

    @staticmethod
    def _job_id_of(payload: bytes) -> int:
        try:
            data = json.loads(payload)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise OpenApiError(f"invalid response body: {exc}") from exc
        if not isinstance(data, dict):
            raise OpenApiError(f"invalid response body: {payload!r}")
        job_id = data.get("job_id", 0)
        if job_id is None:
            return 0
        if isinstance(job_id, bool) or not isinstance(job_id, int):
            raise OpenApiError(f"invalid job_id in response: {job_id!r}")
        return job_id

    def create_job(self, config: JavaJobConfig) -> int:
        """Create a processor-class job and return its id."""
        if not config.is_required():
            raise ValueError("Required fields of CreateJavaJobRequest is empty. ")
        return self._job_id_of(self._send("/openapi/v1/job/create", dict(config.params)))

    def create_http_job(self, config: HttpJobConfig) -> int:
        """Create an HTTP job and return its id."""
        if not config.is_required():
            raise ValueError("Required fields of CreateHTTPJob is empty. ")
        return self._job_id_of(self._send("/openapi/v1/job/create", dict(config.params)))

    def update_job(self, config: JobConfigInfo) -> int:
        """Update a job and return its id."""
        if not config.is_required():
            raise ValueError("Required fields of UpdateJob is empty. ")
        params = dict(config.params)
        if config.job_id:
            params["jobId"] = config.job_id
        return self._job_id_of(self._send("/openapi/v1/job/update", params))

    def delete_job(self, job_id: int) -> None:
        if job_id <= 0:
            raise ValueError("Required fields of UpdateJob is empty. ")
        self._send("/openapi/v1/job/delete", {"jobId": job_id})

    def exec_job(self, job_id: int) -> None:
        if job_id <= 0:
            raise ValueError("Required fields of ExecJob is empty. ")
        self._send("/openapi/v1/job/execute", {"jobId": job_id})

    def enable_job(self, job_id: int) -> None:
        if job_id <= 0:
            raise ValueError("Required fields of EnableJob is empty. ")
        self._send("/openapi/v1/job/enable", {"jobId": job_id})

    def disable_job(self, job_id: int) -> None:
        if job_id <= 0:
            raise ValueError("Required fields of DisableJob is empty. ")
        self._send("/openapi/v1/job/disable", {"jobId": job_id})

    def get_job_instance(self, job_id: int, job_instance_id: int) -> bytes:
        """Fetch one job instance and return the raw response body."""
        if job_id <= 0 or job_instance_id <= 0:
            raise ValueError("Required fields of GetJobInstance is empty. ")
        return self._send(
            "/openapi/v1/instance/get", {"jobId": job_id, "jobInstanceId": job_instance_id}
        )

    def get_job_instance_list(self, job_id: int) -> bytes:
        """Fetch the instances of a job and return the raw response body."""
        if job_id <= 0:
            raise ValueError("Required fields of GetJobInstanceList is empty. ")
        return self._send("/openapi/v1/instance/get", {"jobId": job_id})

    def kill_job_instance(self, job_id: int, instance_id: int) -> None:
        if job_id <= 0 or instance_id <= 0:
            raise ValueError("Required fields of KillJobInstance is empty. ")
        self._send("/openapi/v1/instance/kill", {"jobId": job_id, "instanceId": instance_id})


def _optional(value: Optional[Any]) -> Any:
    return value