"""Label sets attached to exported samples."""
import logging
from dataclasses import dataclass
from typing import Dict, Mapping, Tuple

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LabelSet:
    """Parallel label names and values.

    Position ``i`` in ``names`` pairs with position ``i`` in ``values``.
    A LabelSet is never changed after construction; ``with_added`` returns
    a new one.
    """
    names: Tuple[str, ...] = ()
    values: Tuple[str, ...] = ()

    def __post_init__(self):
        if len(self.names) != len(self.values):
            raise ValueError(
                f"Label names and values differ in length: "
                f"{len(self.names)} != {len(self.values)}"
            )

    @classmethod
    def from_tags(cls, tags: Mapping[str, str]) -> "LabelSet":
        """Build a label set following the tag mapping's iteration order."""
        items = list(tags.items())
        return cls(
            tuple(name for name, _ in items),
            tuple(value for _, value in items),
        )

    def with_added(self, name: str, value: str) -> "LabelSet":
        """Copy of this label set with one more pair at the end."""
        return LabelSet(self.names + (name,), self.values + (value,))

    def as_dict(self) -> Dict[str, str]:
        """Labels as a mapping; for a repeated name the last value wins."""
        labels = dict(zip(self.names, self.values))
        if len(labels) != len(self.names):
            logger.debug(f"Duplicate label names collapsed: {list(self.names)}")
        return labels

    def __len__(self) -> int:
        return len(self.names)
