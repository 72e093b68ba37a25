"""Tests for the registry collector."""
from registry_exporter.collector import RegistryCollector
from registry_exporter.names import MetricName
from registry_exporter.samples import MetricType
from tests.fakes import (
    BrokenGauge, FakeCounter, FakeGauge, FakeRegistry, build_registry
)


def test_collect_orders_groups_by_kind():
    groups = RegistryCollector(build_registry()).collect()

    assert [g.name for g in groups] == [
        "pool_size",
        "jobs_active",
        "payload_size",
        "db_query",
        "requests_total",
    ]
    assert [g.type for g in groups] == [
        MetricType.GAUGE,
        MetricType.GAUGE,
        MetricType.SUMMARY,
        MetricType.SUMMARY,
        MetricType.COUNTER,
    ]


def test_collect_sorts_within_kind():
    registry = FakeRegistry()
    registry.counters[MetricName("zeta")] = FakeCounter(1)
    registry.counters[MetricName("alpha").tagged(shard="2")] = FakeCounter(2)
    registry.counters[MetricName("alpha").tagged(shard="1")] = FakeCounter(3)

    groups = RegistryCollector(registry).collect()

    assert [(g.name, g.samples[0].value) for g in groups] == [
        ("alpha", 3.0),
        ("alpha", 2.0),
        ("zeta", 1.0),
    ]


def test_collect_empty_registry():
    collector = RegistryCollector(FakeRegistry())
    assert collector.collect() == []
    assert collector.describe() == []


def test_skipped_gauge_does_not_block_others():
    registry = FakeRegistry()
    registry.gauges[MetricName("a.text")] = FakeGauge("not a number")
    registry.gauges[MetricName("b.ready")] = FakeGauge(True)

    groups = RegistryCollector(registry).collect()

    assert [g.name for g in groups] == ["b_ready"]
    assert groups[0].samples[0].value == 1.0


def test_failing_metric_is_logged_and_skipped(caplog):
    registry = FakeRegistry()
    registry.gauges[MetricName("broken")] = BrokenGauge()
    registry.counters[MetricName("jobs")] = FakeCounter(4)

    groups = RegistryCollector(registry).collect()

    assert [g.name for g in groups] == ["jobs"]
    assert "Failed to convert gauge broken" in caplog.text


def test_source_appears_in_help():
    registry = FakeRegistry()
    registry.counters[MetricName("jobs")] = FakeCounter(4)

    groups = RegistryCollector(registry, source="Codahale").collect()

    assert groups[0].help.startswith("Generated from Codahale metric import (metric=jobs,")


def test_each_collect_builds_fresh_groups():
    collector = RegistryCollector(build_registry())
    first = collector.collect()
    second = collector.collect()

    assert first == second
    assert all(a is not b for a, b in zip(first, second))
