# schedulerx_worker

Worker-side building blocks for a distributed job scheduler. The package
keeps a registry of named task processors, models the job instances the
scheduling server hands out and their statuses, discovers the active
server address for an application group through the management console,
and calls the console's management API to manage jobs.

It has no third-party runtime dependencies.

## Installing

```
pip install .
```

To run the test suite:

```
pip install .[test]
pytest
```

## Writing a task

A task is a `Processor` whose `process` method receives a `JobContext`
(`schedulerx_worker.jobcontext`) and returns a `ProcessResult`:

```python
from schedulerx_worker.processor import Processor, ProcessResult
from schedulerx_worker.tasks import get_task_map


class HelloWorld(Processor):
    def process(self, ctx):
        print("Hello world!")
        return ProcessResult.from_success(True, "done")


get_task_map().register("HelloWorld", HelloWorld())
```

`get_task_map()` returns the process-wide `TaskMap`; `find(name)` returns
the processor registered under a name, or `None`. Registering a name again
replaces the earlier processor.

`str(ProcessResult(...))` renders the status by its description, for
example `ProcessResult [status=成功, result=done]`.

## Status values

`schedulerx_worker.statuses` holds the enumerations shared with the
server: `InstanceStatus`, `TaskStatus`, `TimeType`, `TaskDispatchMode` and
`WorkerBusyStatus`. Each has a description (`descriptor()`, or
`description()` for `TaskDispatchMode`); `InstanceStatus` also has
`en_descriptor()`. `InstanceStatus` and `TaskStatus` tell whether they are
finished with `is_finished()`, and `TimeType.auto_next()` tells whether a
schedule triggers itself again.

## Data records

`schedulerx_worker.models` holds the dataclasses `JobInstanceInfo`,
`JobInstanceData`, `WorkerInfo`, `Metrics` and `MapTaskXAttrs`.
`MapTaskXAttrs.from_json(text)` reads extended map-task attributes over
their defaults and raises `ValueError` on malformed input.

`schedulerx_worker.masterpool` keeps task masters by job instance id:
`get_task_master_pool()` returns the process-wide `TaskMasterPool`, with
`get`, `put`, `remove`, `in` and `instance_ids(app_group_id)`.

## Worker settings

`schedulerx_worker.config` holds the process-wide, frozen `WorkerConfig`.
`get_worker_config()` returns it, falling back to the defaults when none
was set; `init_worker_config(cfg)` and `new_worker_config(**overrides)`
set it, and only the first of them in a process takes effect.

## Tracing

Implement `Tracer` (`start` and `end`) from `schedulerx_worker.tracer` and
install it with `init_tracer(tracer)`; only the first call takes effect.
`get_tracer()` returns the installed one, or `None`.

## Logging

`schedulerx_worker.logger` offers `debug`, `info`, `warning` and `error`,
writing to standard error. The initial level comes from the
`SCHEDULERX_WORKER_LOG_LEVEL` environment variable (`debug`, `warn`,
`error`, `fatal`, anything else means `info`). `set_log_level(level)`
changes it, and `set_output_path(path)` switches to a rotating log file;
`DefaultLogger.configure(LogConfig(...))` sets size, backup count, age and
compression of that file. `set_logger(logger)` installs a custom logger,
which must have the methods `debug`, `info`, `warning`, `error`,
`set_level` and `set_output_path`.

## Helpers

- `schedulerx_worker.ids`: `get_unique_id`, `get_unique_id_without_task_id`
  and `parse_id` for `jobId_jobInstanceId_taskId` identifiers.
- `schedulerx_worker.signature`: `hmac_sha1_encrypt(text, key)`, the
  request signature used by the management API.
- `schedulerx_worker.netutil`: `parse_ip_addr`, `get_ipv4_host`,
  `get_format_ipv4_addr` and `get_worker_id`.
- `schedulerx_worker.misc`: `get_msg_type`, `gen_path_tpl`,
  `base64_encode`, `get_delivery_id`, `get_handshake_uid`,
  `is_valid_domain` and `shuffle_strings`.
- `schedulerx_worker.sets`: `ConcurrentSet`, a thread-safe set.
- `schedulerx_worker.constants`: shared defaults, `AppVersion` and
  `version()`.

## Management API

`schedulerx_worker.openapi.client` provides `OpenApiClient`. HTTP goes
through `urllib` by default; pass `transport=` to supply another. Failures
raise `OpenApiError`.

```python
from schedulerx_worker.openapi.client import OpenApiClient, init_openapi_client
from schedulerx_worker.openapi.jobs import JavaJobConfig, JobApi

client = OpenApiClient(
    domain="console.example.com",
    group_id="demo-group",
    app_key="placeholder",
    namespace="demo-namespace",
)
init_openapi_client(client)

config = JavaJobConfig.for_class("HelloWorld")
config.name = "hello"
config.execute_mode = "standalone"
config.time_config.time_expression = "0 * * * * ?"
job_id = JobApi(client).create_job(config)
```

`init_openapi_client` installs the client once per process and settles its
domain, asking the configured `endpoint` when `domain` is empty.
`schedulerx_worker.openapi.jobs` describes Java and HTTP jobs
(`JavaJobConfig.for_class`, `HttpJobConfig.for_class`, `JobConfigInfo`),
and `JobApi` creates, updates, deletes, runs, enables, disables and kills
them and fetches job instances. Calls with missing required fields raise
`ValueError` before anything is sent.

## Server discovery

`schedulerx_worker.discovery` keeps the active server address for each
group up to date by polling the console:
`get_group_manager().start_server_discovery(group_id, app_key)` starts a
background poll and looks up the group's numeric id, and
`get_discovery(group_id)` returns the group's `ServiceDiscovery`, whose
`active_server` holds the current address and whose `changed` queue is
signalled when it moves. Child groups reported by a scaled-out group are
picked up automatically. Console failures raise `DiscoveryError`.

## What this package does not do

It does not connect to the scheduling server itself: there is no wire
protocol, handshake or heartbeat, and no loop that receives submitted or
killed job instances and runs the registered processors for them. It
provides no command-line program; everything here is used as a library.