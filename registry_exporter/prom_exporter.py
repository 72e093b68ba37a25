"""Prometheus pull exporter using prometheus_client."""
from typing import Dict, Iterator, List, Optional
from prometheus_client import CollectorRegistry, Metric, generate_latest, start_http_server
import logging

from registry_exporter.collector import RegistryCollector
from registry_exporter.config import ExporterConfig
from registry_exporter.registry import MetricRegistry
from registry_exporter.samples import MetricType, SampleGroup

logger = logging.getLogger(__name__)

COUNTER_SUFFIX = "_total"


def to_metric_family(group: SampleGroup) -> Optional[Metric]:
    """Build a prometheus_client metric family from a sample group."""
    family_name = group.name
    # prometheus_client names counter families without the suffix and
    # re-appends it when writing the exposition
    if group.type is MetricType.COUNTER and family_name.endswith(COUNTER_SUFFIX):
        family_name = family_name[:-len(COUNTER_SUFFIX)]

    if not family_name:
        logger.debug(f"Skipping {group.type.value} family with empty name")
        return None

    family = Metric(family_name, group.help, group.type.value)
    for sample in group.samples:
        family.add_sample(sample.name, sample.labels.as_dict(), sample.value)
    return family


class PrometheusCollector:
    """Custom prometheus_client collector backed by a RegistryCollector."""

    def __init__(self, collector: RegistryCollector):
        self.collector = collector

    def collect(self) -> Iterator[Metric]:
        """Yield one family per name, merging metrics that differ only in tags."""
        families: Dict[str, Metric] = {}
        for group in self.collector.collect():
            family = to_metric_family(group)
            if family is None:
                continue

            existing = families.get(family.name)
            if existing is None:
                families[family.name] = family
            elif existing.type != family.type:
                logger.warning(
                    f"Skipping {family.type} samples for {family.name}: "
                    f"family already exported as {existing.type}"
                )
            else:
                existing.samples.extend(family.samples)

        yield from families.values()

    def describe(self) -> List[Metric]:
        return []


class PrometheusExporter:
    """Serves a metrics registry over the Prometheus HTTP endpoint."""

    def __init__(self, config: ExporterConfig, source_registry: MetricRegistry):
        self.config = config
        self.source_registry = source_registry
        # Use a custom registry to avoid exporting default Python/process metrics
        self.registry = CollectorRegistry()

        self.collector = PrometheusCollector(
            RegistryCollector(source_registry, source=config.help_source)
        )
        self.registry.register(self.collector)

        # Start HTTP server
        if config.enabled:
            self._start_server()

    def _start_server(self):
        """Start Prometheus HTTP server."""
        try:
            start_http_server(
                self.config.port,
                addr=self.config.bind_address,
                registry=self.registry
            )
            logger.info(
                f"Prometheus exporter listening on "
                f"{self.config.bind_address}:{self.config.port}/metrics"
            )
        except Exception as e:
            logger.error(f"Failed to start Prometheus HTTP server: {e}")
            raise

    def render(self) -> bytes:
        """Current exposition in the Prometheus text format."""
        return generate_latest(self.registry)
