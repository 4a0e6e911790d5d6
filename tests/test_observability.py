"""Tests for in-process metrics."""

from lola.infrastructure.observability.logging import MetricsCollector, metric_key


class TestMetricKey:
    def test_plain_name(self):
        assert metric_key("jobs.failed") == "jobs.failed"

    def test_tags_are_sorted(self):
        assert metric_key("tool.failures", {"tool": "echo", "kind": "timeout"}) == "tool.failures{kind=timeout,tool=echo}"


class TestMetricsCollector:
    def test_latency_summary(self):
        collector = MetricsCollector()
        collector.record_latency("job", 10.0)
        collector.record_latency("job", 30.0)

        summary = collector.get_metrics_summary()["latency.job"]

        assert summary == {"count": 2, "avg": 20.0, "min": 10.0, "max": 30.0}

    def test_counters_and_gauges(self):
        collector = MetricsCollector()
        collector.increment_counter("jobs.failed")
        collector.increment_counter("jobs.failed", 2)
        collector.set_gauge("sessions.active", 3)

        summary = collector.get_metrics_summary()

        assert summary["jobs.failed"] == 3
        assert summary["sessions.active"] == 3

    def test_tags_kept_apart(self):
        collector = MetricsCollector()
        collector.increment_counter("tool.failures", tags={"tool": "echo"})
        collector.increment_counter("tool.failures", tags={"tool": "echo"})
        collector.increment_counter("tool.failures", tags={"tool": "slow"})

        summary = collector.get_metrics_summary()

        assert summary["tool.failures{tool=echo}"] == 2
        assert summary["tool.failures{tool=slow}"] == 1
        assert "tool.failures" not in summary

    def test_empty_collector(self):
        collector = MetricsCollector()
        assert collector.keys() == []
        assert collector.get_metrics_summary() == {}
