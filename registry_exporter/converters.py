"""Per-kind conversion of registry metrics into sample groups."""
import logging
import math
import numbers
from decimal import Decimal
from typing import Any, Callable, Dict, List

import numpy as np

from registry_exporter.labels import LabelSet
from registry_exporter.names import MetricName, sanitize_metric_name
from registry_exporter.registry import (
    Counter, Gauge, Histogram, Meter, MetricKind, Snapshot, Timer
)
from registry_exporter.samples import MetricType, Sample, SampleGroup

logger = logging.getLogger(__name__)

DEFAULT_SOURCE = "Dropwizard"

# Timer snapshots are recorded in nanoseconds, Prometheus expects seconds
NANOS_TO_SECONDS = 1.0 / 1e9

QUANTILE_LABEL = "quantile"

Converter = Callable[[MetricName, Any, str], List[SampleGroup]]


def class_name(obj: Any) -> str:
    obj_class = type(obj)
    return f"{obj_class.__module__}.{obj_class.__qualname__}"


def help_message(name: MetricName, metric: Any, source: str = DEFAULT_SOURCE) -> str:
    return (
        f"Generated from {source} metric import "
        f"(metric={name.key}, type={class_name(metric)})"
    )


def from_counter(name: MetricName, counter: Counter, source: str = DEFAULT_SOURCE) -> List[SampleGroup]:
    """Export a counter as a gauge, since registry counters may decrease."""
    sanitized = sanitize_metric_name(name.key)
    labels = LabelSet.from_tags(name.tag_map())
    sample = Sample(sanitized, labels, float(counter.get_count()))
    return [SampleGroup(sanitized, MetricType.GAUGE, help_message(name, counter, source), [sample])]


def gauge_value(obj: Any):
    """Numeric value of a gauge reading, or None when it is not exportable."""
    if isinstance(obj, (bool, np.bool_)):
        return 1.0 if obj else 0.0
    if isinstance(obj, (numbers.Real, Decimal)):
        try:
            return float(obj)
        except OverflowError:
            # ints and fractions beyond the double range
            return math.inf if obj > 0 else -math.inf
    return None


def from_gauge(name: MetricName, gauge: Gauge, source: str = DEFAULT_SOURCE) -> List[SampleGroup]:
    """Export a gauge as a gauge; readings that are not numbers or booleans are dropped."""
    sanitized = sanitize_metric_name(name.key)
    obj = gauge.get_value()
    value = gauge_value(obj)
    if value is None:
        logger.debug(f"Invalid type for Gauge {sanitized}: {class_name(obj)}")
        return []

    labels = LabelSet.from_tags(name.tag_map())
    sample = Sample(sanitized, labels, value)
    return [SampleGroup(sanitized, MetricType.GAUGE, help_message(name, gauge, source), [sample])]


def _quantile_readers(snapshot: Snapshot):
    return [
        ("0.5", snapshot.get_median),
        ("0.75", snapshot.get_75th_percentile),
        ("0.95", snapshot.get_95th_percentile),
        ("0.98", snapshot.get_98th_percentile),
        ("0.99", snapshot.get_99th_percentile),
        ("0.999", snapshot.get_999th_percentile),
    ]


def from_snapshot_and_count(
    name: MetricName,
    snapshot: Snapshot,
    count: int,
    factor: float,
    help_text: str
) -> List[SampleGroup]:
    """
    Export a distribution snapshot as a summary.

    Args:
        name: Registry name of the metric
        snapshot: Precomputed distribution statistics
        count: Total number of observations
        factor: Multiplier applied to every quantile value
        help_text: Help string of the resulting group

    Returns:
        A single summary group with six quantile samples and a count sample
    """
    sanitized = sanitize_metric_name(name.key)
    labels = LabelSet.from_tags(name.tag_map())

    samples = [
        Sample(sanitized, labels.with_added(QUANTILE_LABEL, quantile), read() * factor)
        for quantile, read in _quantile_readers(snapshot)
    ]
    samples.append(Sample(f"{sanitized}_count", LabelSet(), float(count)))

    return [SampleGroup(sanitized, MetricType.SUMMARY, help_text, samples)]


def from_histogram(name: MetricName, histogram: Histogram, source: str = DEFAULT_SOURCE) -> List[SampleGroup]:
    return from_snapshot_and_count(
        name, histogram.get_snapshot(), histogram.get_count(), 1.0,
        help_message(name, histogram, source)
    )


def from_timer(name: MetricName, timer: Timer, source: str = DEFAULT_SOURCE) -> List[SampleGroup]:
    """Export a timer as a summary in seconds."""
    return from_snapshot_and_count(
        name, timer.get_snapshot(), timer.get_count(), NANOS_TO_SECONDS,
        help_message(name, timer, source)
    )


def from_meter(name: MetricName, meter: Meter, source: str = DEFAULT_SOURCE) -> List[SampleGroup]:
    """Export a meter as a counter, meters only ever grow."""
    sanitized = f"{sanitize_metric_name(name.key)}_total"
    labels = LabelSet.from_tags(name.tag_map())
    sample = Sample(sanitized, labels, float(meter.get_count()))
    return [SampleGroup(sanitized, MetricType.COUNTER, help_message(name, meter, source), [sample])]


CONVERTERS: Dict[MetricKind, Converter] = {
    MetricKind.GAUGE: from_gauge,
    MetricKind.COUNTER: from_counter,
    MetricKind.HISTOGRAM: from_histogram,
    MetricKind.TIMER: from_timer,
    MetricKind.METER: from_meter,
}


def convert(kind: MetricKind, name: MetricName, metric: Any, source: str = DEFAULT_SOURCE) -> List[SampleGroup]:
    """Convert one registry metric with the converter for its kind."""
    return CONVERTERS[kind](name, metric, source)
