import json

import pytest

from schedulerx_worker.openapi import constants as c
from schedulerx_worker.openapi.client import OpenApiClient, OpenApiError
from schedulerx_worker.openapi.jobs import (
    ContactInfo,
    HttpAttribute,
    HttpJobConfig,
    JavaJobConfig,
    JobApi,
    JobBaseConfig,
    JobConfigInfo,
    JobMonitorInfo,
    MonitorConfig,
    TimeConfig,
    XAttrsConfig,
)


class FakeTransport:
    def __init__(self, status=200, body=b"{}"):
        self.status = status
        self.body = body
        self.calls = []

    def __call__(self, method, url, headers, body, timeout):
        self.calls.append((method, url, dict(headers), body))
        return self.status, self.body


def make_api(status=200, body=b"{}"):
    transport = FakeTransport(status, body)
    client = OpenApiClient(
        domain="console.example.com",
        group_id="group",
        app_key="placeholder",
        transport=transport,
    )
    return JobApi(client), transport


def sent_params(transport):
    return json.loads(transport.calls[-1][3])


def valid_java():
    cfg = JavaJobConfig.for_class("com.example.Hello")
    cfg.name = "hello"
    cfg.execute_mode = c.EXEC_MODE_STANDALONE
    cfg.time_config.time_expression = "0 * * * * ?"
    return cfg


def test_defaults():
    xattrs = XAttrsConfig()
    assert xattrs.consumer_size == c.DEFAULT_XATTRS_CONSUMER_SIZE
    assert xattrs.global_consumer_size == c.DEFAULT_XATTRS_GLOBAL_CONSUMER_SIZE
    base = JobBaseConfig()
    assert base.max_concurrency == 1
    assert base.attempt_interval == 30
    assert base.status == 1
    assert base.time_config.time_type == c.CRON_TYPE
    assert base.job_monitor_info.monitor_config.send_channel == "ding"
    assert HttpAttribute().method == c.HTTP_GET_METHOD


def test_time_config_is_required():
    assert TimeConfig(time_type=0).is_required() is False
    assert TimeConfig().is_required() is False
    assert TimeConfig(time_expression="0 * * * * ?").is_required() is True
    assert TimeConfig(time_type=c.API_TYPE).is_required() is True


def test_monitor_info_is_required():
    assert JobMonitorInfo().is_required() is True
    empty = JobMonitorInfo(
        monitor_config=MonitorConfig(
            timeout_enable=False, fail_enable=False, fail_limit_times=0, send_channel=""
        )
    )
    assert empty.is_required() is False
    empty.contact_info.append(ContactInfo(user_name="someone"))
    assert empty.is_required() is True


def test_java_for_class():
    cfg = JavaJobConfig.for_class("com.example.Hello")
    assert cfg.class_name == "com.example.Hello"
    assert cfg.params["jobType"] == "java"
    assert cfg.params["contentType"] == "text"
    assert json.loads(cfg.params["content"]) == {"className": "com.example.Hello"}
    assert cfg.is_required() is False
    assert valid_java().is_required() is True


def test_http_for_class():
    cfg = HttpJobConfig.for_class("com.example.Hello")
    assert cfg.execute_mode == c.EXEC_MODE_STANDALONE
    assert cfg.params["jobType"] == "http"
    cfg.name = "call"
    cfg.time_config.time_expression = "30"
    assert cfg.is_required() is False
    cfg.http_attribute = HttpAttribute(
        url="http://www.example.com/ping", resp_key="code", resp_value="ok", timeout=5
    )
    assert cfg.is_required() is True


def test_http_attribute_needs_timeout():
    attr = HttpAttribute(url="http://www.example.com", resp_key="k", resp_value="v")
    assert attr.is_required() is False


def test_job_config_info_is_required():
    info = JobConfigInfo(name="n", execute_mode=c.EXEC_MODE_GRID)
    assert info.is_required() is False
    info.time_config = TimeConfig(time_type=c.API_TYPE)
    assert info.is_required() is True


def test_create_job_posts_and_returns_id():
    api, transport = make_api(body=b'{"job_id": 42}')
    assert api.create_job(valid_java()) == 42
    method, url, headers, _ = transport.calls[0]
    assert method == "POST"
    assert url == "http://console.example.com/openapi/v1/job/create"
    assert headers["Content-Type"] == "application/json"
    params = sent_params(transport)
    assert params["jobType"] == "java"
    assert params["groupId"] == "group"
    assert params["user"] == "openapi"


def test_create_job_rejects_incomplete():
    api, transport = make_api()
    with pytest.raises(ValueError):
        api.create_job(JavaJobConfig.for_class("com.example.Hello"))
    assert transport.calls == []


def test_create_http_job():
    api, transport = make_api(body=b'{"job_id": 7}')
    cfg = HttpJobConfig.for_class("com.example.Hello")
    cfg.name = "call"
    cfg.time_config = TimeConfig(time_type=c.API_TYPE)
    cfg.http_attribute = HttpAttribute(
        url="http://www.example.com", resp_key="k", resp_value="v", timeout=3
    )
    assert api.create_http_job(cfg) == 7
    assert sent_params(transport)["jobType"] == "http"


def test_update_job_sends_job_id():
    api, transport = make_api(body=b'{"job_id": 9}')
    info = JobConfigInfo(job_id=9, name="n", execute_mode="grid", time_config=TimeConfig(time_type=c.API_TYPE))
    assert api.update_job(info) == 9
    assert transport.calls[0][1].endswith("/openapi/v1/job/update")
    assert sent_params(transport)["jobId"] == 9


def test_server_error_raises():
    api, _ = make_api(status=500)
    with pytest.raises(OpenApiError):
        api.create_job(valid_java())


def test_bad_response_body_raises():
    api, _ = make_api(body=b"not json")
    with pytest.raises(OpenApiError):
        api.create_job(valid_java())


@pytest.mark.parametrize(
    "call, path",
    [
        ("delete_job", "/openapi/v1/job/delete"),
        ("exec_job", "/openapi/v1/job/execute"),
        ("enable_job", "/openapi/v1/job/enable"),
        ("disable_job", "/openapi/v1/job/disable"),
    ],
)
def test_job_operations(call, path):
    api, transport = make_api()
    getattr(api, call)(5)
    assert transport.calls[0][1] == "http://console.example.com" + path
    assert sent_params(transport)["jobId"] == 5


@pytest.mark.parametrize("call", ["delete_job", "exec_job", "enable_job", "disable_job", "get_job_instance_list"])
def test_job_operations_reject_bad_id(call):
    api, transport = make_api()
    with pytest.raises(ValueError):
        getattr(api, call)(0)
    assert transport.calls == []


def test_instance_operations():
    api, transport = make_api(body=b'{"data": 1}')
    assert api.get_job_instance(3, 4) == b'{"data": 1}'
    assert transport.calls[0][1].endswith("/openapi/v1/instance/get")
    assert sent_params(transport)["jobInstanceId"] == 4
    api.kill_job_instance(3, 4)
    assert transport.calls[1][1].endswith("/openapi/v1/instance/kill")
    assert sent_params(transport)["instanceId"] == 4
    with pytest.raises(ValueError):
        api.get_job_instance(3, 0)
    with pytest.raises(ValueError):
        api.kill_job_instance(0, 4)