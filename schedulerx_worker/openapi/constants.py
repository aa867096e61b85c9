"""Constants of the management API."""

from enum import Enum, IntEnum


class TimeExpressionType(IntEnum):
    """Kinds of time expression a job may carry."""

    CRON = 1
    FIX_RATE = 3
    SECOND_DELAY = 4
    ONE_TIME = 5
    API = 100


class ExecuteMode(str, Enum):
    """How a job's work is spread over workers."""

    STANDALONE = "standalone"
    BROADCAST = "broadcast"
    PARALLEL = "parallel"
    GRID = "grid"
    BATCH = "batch"


class Header(str, Enum):
    """Special request headers and property keys of the management API."""

    TIMESTAMP = "openapi-timestamp"
    SIGNATURE = "openapi-signature"
    GROUP_ID = "openapi-groupid"
    NAMESPACE = "schedulerx-namespace"
    NAMESPACE_SOURCE = "schedulerx-namespace-source"
    CREATE_NAMESPACE = "openapi-create-namespace"
    CREATE_GROUP = "openapi-create-group"
    LIST_NAMESPACES = "openapi-list-namespaces"
    LIST_GROUPS = "openapi-list-groups"


HTTP_GET_METHOD = "GET"

DEFAULT_XATTRS = {
    "page_size": 5,
    "consumer_size": 5,
    "queue_size": 10,
    "dispatcher_size": 5,
    "global_consumer_size": 1000,
}

DEFAULT_XATTRS_PAGE_SIZE = DEFAULT_XATTRS["page_size"]
DEFAULT_XATTRS_CONSUMER_SIZE = DEFAULT_XATTRS["consumer_size"]
DEFAULT_XATTRS_QUEUE_SIZE = DEFAULT_XATTRS["queue_size"]
DEFAULT_XATTRS_DISPATCHER_SIZE = DEFAULT_XATTRS["dispatcher_size"]
DEFAULT_XATTRS_GLOBAL_CONSUMER_SIZE = DEFAULT_XATTRS["global_consumer_size"]

CRON_TYPE = int(TimeExpressionType.CRON)
FIX_RATE_TYPE = int(TimeExpressionType.FIX_RATE)
SECOND_DELAY_TYPE = int(TimeExpressionType.SECOND_DELAY)
ONE_TIME_TYPE = int(TimeExpressionType.ONE_TIME)
API_TYPE = int(TimeExpressionType.API)

EXEC_MODE_STANDALONE = ExecuteMode.STANDALONE.value
EXEC_MODE_BROADCAST = ExecuteMode.BROADCAST.value
EXEC_MODE_PARALLEL = ExecuteMode.PARALLEL.value
EXEC_MODE_GRID = ExecuteMode.GRID.value
EXEC_MODE_BATCH = ExecuteMode.BATCH.value

TIME_STAMP_HEADER = Header.TIMESTAMP.value
SIGNATURE_HEADER = Header.SIGNATURE.value
GROUPID_HEADER = Header.GROUP_ID.value
NAMESPACE_KEY_HEADER = Header.NAMESPACE.value
NAMESPACE_SOURCE_HEADER = Header.NAMESPACE_SOURCE.value
CREATE_NAMESPACE_HEADER = Header.CREATE_NAMESPACE.value
CREATE_GROUP_HEADER = Header.CREATE_GROUP.value
LIST_NAMESPACES_HEADER = Header.LIST_NAMESPACES.value
LIST_GROUPS_HEADER = Header.LIST_GROUPS.value

_APP_PREFIX = "app."
ADMIN_USERS = _APP_PREFIX + "admin.users"
ENV = _APP_PREFIX + "env"
ENV_NETWORK = ENV + ".network"

ENV_KEY_STAGE = "SIGMA_APP_STAGE"

SERVER_DOMAINS = {
    "daily": "schedulerx2.taobao.net",
    "pre": "pre.schedulerx2.alibaba-inc.com",
    "prod": "center.schedulerx2.alibaba-inc.com",
}

ENV_STAGE_PRE = "pre"
ENV_STAGE_PROD = "prod"

SERVER_DOMAIN_DAILY = SERVER_DOMAINS["daily"]
SERVER_DOMAIN_PRE = SERVER_DOMAINS[ENV_STAGE_PRE]
SERVER_DOMAIN_PROD = SERVER_DOMAINS[ENV_STAGE_PROD]