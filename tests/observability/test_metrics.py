#!filepath: tests/observability/test_metrics.py

from worldlink.observability.metrics import MetricRecorder


def test_metric_record():
    m = MetricRecorder(enabled=True)
    m.record("latency_ms", 123)

    assert "latency_ms" in m.metrics
    assert m.metrics["latency_ms"] == 123


def test_metric_disabled():
    m = MetricRecorder(enabled=False)
    m.record("x", 1)
    m.incr("messages")

    # Nothing should be recorded
    assert m.metrics == {}


def test_metric_incr():
    m = MetricRecorder()
    m.incr("messages")
    m.incr("messages")
    m.incr("updates", 5)

    assert m.get("messages") == 2
    assert m.get("updates") == 5
    assert m.get("missing") == 0
    assert m.summary() == {"messages": 2, "updates": 5}
