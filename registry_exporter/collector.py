"""Collector that turns a registry snapshot into sample groups."""
import logging
from typing import List

from registry_exporter.converters import DEFAULT_SOURCE, convert
from registry_exporter.registry import MetricKind, MetricRegistry
from registry_exporter.samples import SampleGroup

logger = logging.getLogger(__name__)


class RegistryCollector:
    """Collects every metric of a registry on each call."""

    def __init__(self, registry: MetricRegistry, source: str = DEFAULT_SOURCE):
        """
        Initialize the collector.

        Args:
            registry: Metrics registry to export
            source: Registry flavour named in every help string
        """
        self.registry = registry
        self.source = source

    def collect(self) -> List[SampleGroup]:
        """Convert all metrics: gauges, counters, histograms, timers, then meters."""
        groups: List[SampleGroup] = []
        for kind in MetricKind:
            metrics = kind.metrics_of(self.registry)
            for name in sorted(metrics):
                try:
                    groups.extend(convert(kind, name, metrics[name], self.source))
                except Exception as e:
                    logger.warning(
                        f"Failed to convert {kind.name.lower()} {name}: {e}",
                        exc_info=True
                    )
        logger.debug(f"Collected {len(groups)} sample groups")
        return groups

    def describe(self) -> List[SampleGroup]:
        """No families are known before the registry is read."""
        return []
