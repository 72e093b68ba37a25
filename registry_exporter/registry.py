"""Interface of the source metrics registry.

The exporter never registers or updates metrics itself; it only reads
what an application registry exposes. Any object providing the accessors
below can be exported; they follow the Dropwizard metrics naming.
"""
from enum import Enum
from typing import Any, Mapping, Protocol

from registry_exporter.names import MetricName


class Snapshot(Protocol):
    """Precomputed distribution statistics of a histogram or timer."""

    def get_median(self) -> float: ...

    def get_75th_percentile(self) -> float: ...

    def get_95th_percentile(self) -> float: ...

    def get_98th_percentile(self) -> float: ...

    def get_99th_percentile(self) -> float: ...

    def get_999th_percentile(self) -> float: ...


class Counter(Protocol):
    def get_count(self) -> int: ...


class Gauge(Protocol):
    def get_value(self) -> Any: ...


class Histogram(Protocol):
    def get_count(self) -> int: ...

    def get_snapshot(self) -> Snapshot: ...


class Timer(Protocol):
    """Timer whose snapshot values are in nanoseconds."""

    def get_count(self) -> int: ...

    def get_snapshot(self) -> Snapshot: ...


class Meter(Protocol):
    def get_count(self) -> int: ...


class MetricRegistry(Protocol):
    def get_gauges(self) -> Mapping[MetricName, Gauge]: ...

    def get_counters(self) -> Mapping[MetricName, Counter]: ...

    def get_histograms(self) -> Mapping[MetricName, Histogram]: ...

    def get_timers(self) -> Mapping[MetricName, Timer]: ...

    def get_meters(self) -> Mapping[MetricName, Meter]: ...


class MetricKind(Enum):
    """Metric kinds in the order they are collected."""
    GAUGE = "gauges"
    COUNTER = "counters"
    HISTOGRAM = "histograms"
    TIMER = "timers"
    METER = "meters"

    def metrics_of(self, registry: MetricRegistry) -> Mapping[MetricName, Any]:
        """Fetch the registry's current name -> metric mapping for this kind."""
        return getattr(registry, f"get_{self.value}")()
