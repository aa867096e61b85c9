"""Status and mode enumerations shared by the worker and the server."""

from enum import Enum, IntEnum


class TaskStatus(IntEnum):
    """State of a single task; construct from an int to validate it."""

    UNKNOWN = 0
    INIT = 1
    PULLED = 2
    RUNNING = 3
    SUCCEED = 4
    FAILED = 5

    def descriptor(self) -> str:
        return _TASK_STATUS_DESC.get(self, "")

    def is_finished(self) -> bool:
        return self in (TaskStatus.SUCCEED, TaskStatus.FAILED)


_TASK_STATUS_DESC = {
    TaskStatus.UNKNOWN: "未知",
    TaskStatus.INIT: "初始化",
    TaskStatus.PULLED: "已拉取",
    TaskStatus.RUNNING: "运行",
    TaskStatus.SUCCEED: "成功",
    TaskStatus.FAILED: "失败",
}


class TimeType(IntEnum):
    """How a job's schedule is expressed."""

    NONE = -1
    CRON = 1
    FIXED_RATE = 3
    SECOND_DELAY = 4
    ONE_TIME = 5
    API = 100
    TEMP = 101

    def descriptor(self) -> str:
        return _TIME_TYPE_DESC.get(self, "")

    def class_name(self) -> str:
        """Name of the server-side parser for this schedule type, or empty."""
        return _TIME_TYPE_CLASS_NAME.get(self, "")

    def auto_next(self) -> bool:
        """Tell whether the schedule triggers itself again."""
        return self in (TimeType.CRON, TimeType.FIXED_RATE, TimeType.SECOND_DELAY)


_TIME_TYPE_DESC = {
    TimeType.NONE: "none",
    TimeType.CRON: "cron",
    TimeType.FIXED_RATE: "fixed_rate",
    TimeType.SECOND_DELAY: "second_delay",
    TimeType.ONE_TIME: "one_time",
    TimeType.API: "api",
    TimeType.TEMP: "temp",
}

_TIME_TYPE_CLASS_NAME = {
    TimeType.NONE: "",
    TimeType.CRON: "com.alibaba.schedulerx.core.time.CronParser",
    TimeType.FIXED_RATE: "com.alibaba.schedulerx.core.time.FixedRateParser",
    TimeType.SECOND_DELAY: "com.alibaba.schedulerx.core.time.FixedDelayParser",
    TimeType.ONE_TIME: "com.alibaba.schedulerx.core.time.OneTimeParser",
    TimeType.API: "",
    TimeType.TEMP: "",
}


class TaskDispatchMode(str, Enum):
    """How child tasks reach workers."""

    PUSH = "push"
    PULL = "pull"

    def description(self) -> str:
        return _TASK_DISPATCH_MODE_DESC.get(self, "")


_TASK_DISPATCH_MODE_DESC = {
    TaskDispatchMode.PUSH: "推模型",
    TaskDispatchMode.PULL: "拉模型",
}


class InstanceStatus(IntEnum):
    """State of a job instance."""

    UNKNOWN = 0
    WAITING = 1
    READY = 2
    RUNNING = 3
    SUCCEED = 4
    FAILED = 5
    KILLED = 6
    PAUSED = 7
    SUBMITTED = 8
    REJECTED = 9
    ACCEPTED = 10
    PARTIAL_FAILED = 11
    REMOVED = 99

    def descriptor(self) -> str:
        return _INSTANCE_STATUS_DESC.get(self, "")

    def en_descriptor(self) -> str:
        return _INSTANCE_STATUS_EN_DESC.get(self, "")

    def is_finished(self) -> bool:
        return self in (InstanceStatus.SUCCEED, InstanceStatus.FAILED, InstanceStatus.REMOVED)


_INSTANCE_STATUS_DESC = {
    InstanceStatus.UNKNOWN: "未知",
    InstanceStatus.WAITING: "等待",
    InstanceStatus.READY: "池子",
    InstanceStatus.RUNNING: "运行",
    InstanceStatus.SUCCEED: "成功",
    InstanceStatus.FAILED: "失败",
    InstanceStatus.PAUSED: "暂停",
    InstanceStatus.SUBMITTED: "已提交",
    InstanceStatus.REJECTED: "拒绝",
    InstanceStatus.ACCEPTED: "接收",
    InstanceStatus.PARTIAL_FAILED: "部分失败",
    InstanceStatus.REMOVED: "删除",
}

_INSTANCE_STATUS_EN_DESC = {
    InstanceStatus.UNKNOWN: "unknown",
    InstanceStatus.WAITING: "waiting",
    InstanceStatus.READY: "ready",
    InstanceStatus.RUNNING: "running",
    InstanceStatus.SUCCEED: "success",
    InstanceStatus.FAILED: "failed",
    InstanceStatus.PAUSED: "paused",
    InstanceStatus.SUBMITTED: "submitted",
    InstanceStatus.REJECTED: "rejected",
    InstanceStatus.ACCEPTED: "accepted",
    InstanceStatus.PARTIAL_FAILED: "partial_failed",
    InstanceStatus.REMOVED: "removed",
}


class WorkerBusyStatus(IntEnum):
    """Why a worker declines new work, if it does."""

    FREE = 0
    LOAD5_BUSY = 1
    HEAP5_BUSY = 2
    DISK_BUSY = 3

    def descriptor(self) -> str:
        return _WORKER_BUSY_STATUS_DESC.get(self, "")


_WORKER_BUSY_STATUS_DESC = {
    WorkerBusyStatus.FREE: "空闲",
    WorkerBusyStatus.LOAD5_BUSY: "load5过高",
    WorkerBusyStatus.HEAP5_BUSY: "heap5过高",
    WorkerBusyStatus.DISK_BUSY: "磁盘使用率过高",
}