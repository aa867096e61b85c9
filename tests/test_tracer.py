import pytest

from schedulerx_worker import tracer
from schedulerx_worker.jobcontext import JobContext
from schedulerx_worker.processor import ProcessResult
from schedulerx_worker.statuses import InstanceStatus


class _TagTracer(tracer.Tracer):
    def __init__(self, tag):
        self.tag = tag

    def start(self, ctx):
        ctx.trace_id = self.tag
        return ctx

    def end(self, ctx, result):
        result.result = ctx.trace_id
        return result


@pytest.fixture(autouse=True)
def _fresh_state(monkeypatch):
    monkeypatch.setattr(tracer, "_tracer", None)
    monkeypatch.setattr(tracer, "_initialized", False)


def test_no_tracer_by_default():
    assert tracer.get_tracer() is None


def test_init_installs_once():
    first = _TagTracer("one")
    tracer.init_tracer(first)
    tracer.init_tracer(_TagTracer("two"))
    assert tracer.get_tracer() is first


def test_tracer_hooks_run():
    tracer.init_tracer(_TagTracer("t1"))
    active = tracer.get_tracer()
    ctx = active.start(JobContext())
    result = active.end(ctx, ProcessResult(status=InstanceStatus.SUCCEED))
    assert ctx.trace_id == "t1"
    assert result.result == "t1"
    assert result.status is InstanceStatus.SUCCEED


def test_tracer_is_abstract():
    with pytest.raises(TypeError):
        tracer.Tracer()