"""Data structures for exported samples and sample groups."""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Tuple

from registry_exporter.labels import LabelSet


class MetricType(str, Enum):
    """Exposition type of a sample group (values match prometheus_client)."""
    GAUGE = "gauge"
    COUNTER = "counter"
    SUMMARY = "summary"


@dataclass(frozen=True)
class Sample:
    """A single labeled value."""
    name: str
    labels: LabelSet
    value: float

    @property
    def label_names(self) -> Tuple[str, ...]:
        return self.labels.names

    @property
    def label_values(self) -> Tuple[str, ...]:
        return self.labels.values


@dataclass
class SampleGroup:
    """One exposed metric family."""
    name: str
    type: MetricType
    help: str
    samples: List[Sample] = field(default_factory=list)
