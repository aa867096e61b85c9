import pytest

from schedulerx_worker.statuses import (
    InstanceStatus,
    TaskDispatchMode,
    TaskStatus,
    TimeType,
    WorkerBusyStatus,
)


def test_task_status_from_int():
    assert TaskStatus(4) is TaskStatus.SUCCEED
    assert TaskStatus(4).descriptor() == "成功"


@pytest.mark.parametrize("value", [-1, 6, 99])
def test_task_status_invalid(value):
    with pytest.raises(ValueError):
        TaskStatus(value)


@pytest.mark.parametrize(
    "status, expected",
    [
        (TaskStatus.UNKNOWN, "未知"),
        (TaskStatus.INIT, "初始化"),
        (TaskStatus.PULLED, "已拉取"),
        (TaskStatus.RUNNING, "运行"),
        (TaskStatus.SUCCEED, "成功"),
        (TaskStatus.FAILED, "失败"),
    ],
)
def test_task_status_descriptors(status, expected):
    assert status.descriptor() == expected


@pytest.mark.parametrize(
    "status, expected",
    [
        (TaskStatus.UNKNOWN, False),
        (TaskStatus.INIT, False),
        (TaskStatus.PULLED, False),
        (TaskStatus.RUNNING, False),
        (TaskStatus.SUCCEED, True),
        (TaskStatus.FAILED, True),
    ],
)
def test_task_status_finished(status, expected):
    assert status.is_finished() is expected


def test_time_type_values():
    assert TimeType(-1) is TimeType.NONE
    assert TimeType.SECOND_DELAY.descriptor() == "second_delay"
    assert TimeType.CRON.class_name() == "com.alibaba.schedulerx.core.time.CronParser"
    assert TimeType.API.class_name() == ""


@pytest.mark.parametrize(
    "time_type, expected",
    [
        (TimeType.NONE, False),
        (TimeType.CRON, True),
        (TimeType.FIXED_RATE, True),
        (TimeType.SECOND_DELAY, True),
        (TimeType.ONE_TIME, False),
        (TimeType.API, False),
        (TimeType.TEMP, False),
    ],
)
def test_time_type_auto_next(time_type, expected):
    assert time_type.auto_next() is expected


def test_dispatch_mode():
    assert TaskDispatchMode("pull") is TaskDispatchMode.PULL
    assert TaskDispatchMode.PULL.description() == "拉模型"
    assert TaskDispatchMode.PUSH.description() == "推模型"
    with pytest.raises(ValueError):
        TaskDispatchMode("poll")


def test_instance_status_descriptors():
    assert InstanceStatus.SUCCEED.en_descriptor() == "success"
    assert InstanceStatus.PARTIAL_FAILED.en_descriptor() == "partial_failed"
    assert InstanceStatus.REMOVED.descriptor() == "删除"
    assert InstanceStatus(99) is InstanceStatus.REMOVED


def test_instance_status_killed_has_no_description():
    assert InstanceStatus.KILLED.descriptor() == ""
    assert InstanceStatus.KILLED.en_descriptor() == ""


@pytest.mark.parametrize(
    "status, expected",
    [
        (InstanceStatus.UNKNOWN, False),
        (InstanceStatus.RUNNING, False),
        (InstanceStatus.KILLED, False),
        (InstanceStatus.PARTIAL_FAILED, False),
        (InstanceStatus.SUCCEED, True),
        (InstanceStatus.FAILED, True),
        (InstanceStatus.REMOVED, True),
    ],
)
def test_instance_status_finished(status, expected):
    assert status.is_finished() is expected


@pytest.mark.parametrize(
    "status, expected",
    [
        (WorkerBusyStatus.FREE, "空闲"),
        (WorkerBusyStatus.LOAD5_BUSY, "load5过高"),
        (WorkerBusyStatus.HEAP5_BUSY, "heap5过高"),
        (WorkerBusyStatus.DISK_BUSY, "磁盘使用率过高"),
    ],
)
def test_worker_busy_status(status, expected):
    assert status.descriptor() == expected