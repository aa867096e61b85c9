"""Shared constants and defaults used by the worker."""

from enum import IntEnum

TRANSPORT_HEADER_SIZE = 4

DEFAULT_XATTRS_PAGE_SIZE = 5
DEFAULT_XATTRS_CONSUMER_SIZE = 5
DEFAULT_XATTRS_QUEUE_SIZE = 10
DEFAULT_XATTRS_DISPATCHER_SIZE = 5
DEFAULT_XATTRS_GLOBAL_CONSUMER_SIZE = 1000

INSTANCE_RESULT_SIZE_MAX = 1000

PULL_MODE_TASK_SIZE_MAX = 10000

SECOND_DELAY_STANDALONE_DISPATCH = "second_delay.standalone.dispatch"
SECOND_DELAY_STANDALONE_DISPATCH_DEFAULT = False

MAP_MASTER_PAGE_SIZE = "map.master.page.size"
MAP_MASTER_QUEUE_SIZE = "map.master.queue.size"
MAP_MASTER_DISPATCHER_SIZE = "map.master.dispatcher.size"

MAP_MASTER_PAGE_SIZE_DEFAULT = 100
MAP_MASTER_QUEUE_SIZE_DEFAULT = 10000
MAP_MASTER_DISPATCHER_SIZE_DEFAULT = 5
MAP_MASTER_DISPATCHER_SIZE_MAX = 200
TASK_BODY_SIZE_MAX_DEFAULT = 65536

USER_SPACE_PERCENT_MAX = 0.9

MAP_MASTER_STATUS_CHECK_INTERVAL = "map.master.status.check.interval"
# Seconds.
MAP_MASTER_STATUS_CHECK_INTERVAL_DEFAULT = 3.0

MAP_TASK_ROOT_NAME = "MAP_TASK_ROOT"
REDUCE_TASK_NAME = "REDUCE_TASK"

SHARED_POOL_SIZE_DEFAULT = 64

CONSUMER_NUM_DEFAULT = 64

PARALLEL_TASK_LIST_SIZE_MAX_ADVANCED = 1000
PARALLEL_TASK_LIST_SIZE_MAX = 300

TIME_FORMAT = "%Y-%m-%d %H:%M:%S"

WORKER_MAP_PAGE_SIZE_DEFAULT = 1000


class AppVersion(IntEnum):
    """Edition of the scheduling service an application runs on."""

    BASIC = 1
    ADVANCED = 2


def version() -> str:
    """Return the worker version reported to the server."""
    return "v0.0.1"