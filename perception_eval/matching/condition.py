"""A matching strategy paired with its per-label thresholds."""

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from ..common.label import Label
from .strategies import MatchingMode, MatchingStrategy, get_matching_strategy


@dataclass(frozen=True)
class MatchingCondition:
    """
    One (strategy, threshold) combination to evaluate.

    Hashable, so it keys aggregated frame results and metric scores.

    Attributes:
        mode: Matching strategy identifier.
        thresholds: (label, threshold) pairs in target-label order.
    """
    mode: MatchingMode
    thresholds: Tuple[Tuple[Label, float], ...]

    @classmethod
    def from_mapping(cls, mode: MatchingMode, thresholds: Dict[Label, float]) -> "MatchingCondition":
        return cls(mode, tuple((label, float(value)) for label, value in thresholds.items()))

    @property
    def strategy(self) -> MatchingStrategy:
        return get_matching_strategy(self.mode)

    @property
    def threshold_map(self) -> Dict[Label, float]:
        return dict(self.thresholds)

    @property
    def labels(self) -> Tuple[Label, ...]:
        return tuple(label for label, _ in self.thresholds)

    def threshold_for(self, label: Label) -> Optional[float]:
        return self.threshold_map.get(label)

    @property
    def threshold_name(self) -> str:
        """Compact threshold text: one value if shared by every label."""
        values = {value for _, value in self.thresholds}
        if len(values) == 1:
            return f"{values.pop()}"
        return "[" + ", ".join(f"{label}:{value}" for label, value in self.thresholds) + "]"

    def __str__(self) -> str:
        return f"{self.mode}@{self.threshold_name}"
