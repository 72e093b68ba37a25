"""Metric identifiers and Prometheus-safe name sanitization."""
import re
from dataclasses import dataclass
from typing import Dict, Mapping, Tuple

METRIC_NAME_RE = re.compile(r"[^a-zA-Z0-9:_]")

SEPARATOR = "."


def sanitize_metric_name(key: str) -> str:
    """Replace unsupported chars with '_', prepend '_' if the name starts with a digit."""
    name = METRIC_NAME_RE.sub("_", key)
    if name and name[0].isdigit():
        name = "_" + name
    return name


@dataclass(frozen=True, order=True)
class MetricName:
    """A registry key plus its tags.

    Tags are kept as ordered (name, value) pairs so that the label order
    exported for a metric follows the order in which the tags were added.
    Instances sort by key, then by tags.
    """
    key: str
    tags: Tuple[Tuple[str, str], ...] = ()

    @classmethod
    def build(cls, *parts: str) -> "MetricName":
        """Join the non-empty parts with dots into an untagged name."""
        return cls(SEPARATOR.join(p for p in parts if p))

    def resolve(self, part: str) -> "MetricName":
        """Append a dotted part to the key, keeping the tags."""
        if not part:
            return self
        key = f"{self.key}{SEPARATOR}{part}" if self.key else part
        return MetricName(key, self.tags)

    def tagged(self, **tags: str) -> "MetricName":
        return self.tagged_with(tags)

    def tagged_with(self, tags: Mapping[str, str]) -> "MetricName":
        """Return a copy with extra tags; an existing tag name keeps its position."""
        merged = self.tag_map()
        for name, value in tags.items():
            merged[str(name)] = str(value)
        return MetricName(self.key, tuple(merged.items()))

    def tag_map(self) -> Dict[str, str]:
        return dict(self.tags)

    def __str__(self) -> str:
        if not self.tags:
            return self.key
        rendered = ",".join(f"{k}={v}" for k, v in self.tags)
        return f"{self.key}{{{rendered}}}"
