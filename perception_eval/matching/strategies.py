"""
Matching strategies scoring one estimated object against one ground truth.

Each strategy carries a polarity tag:
- LOWER_IS_BETTER (center / plane distance): match iff score <= threshold.
- HIGHER_IS_BETTER (BEV / 3D IoU): match iff score >= threshold.

Consumers compare scores only through `is_better` and
`is_better_or_equal`, never by checking the mode.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Union

from ..common.object import DynamicObject
from ..geometry import center_distance, iou_3d, iou_bev, plane_distance


class MatchingMode(Enum):
    """Available matching strategies."""
    CENTER_DISTANCE = "center_distance"
    PLANE_DISTANCE = "plane_distance"
    IOU_2D = "iou_2d"
    IOU_3D = "iou_3d"

    def __str__(self) -> str:
        return self.value


class Polarity(Enum):
    """Direction in which a score improves."""
    LOWER_IS_BETTER = "lower_is_better"
    HIGHER_IS_BETTER = "higher_is_better"


@dataclass(frozen=True)
class MatchingStrategy:
    """
    Scoring function plus its polarity.

    Attributes:
        mode: Strategy identifier.
        polarity: Direction in which the score improves.
        score_fn: Function (estimated, ground_truth) -> float.
    """
    mode: MatchingMode
    polarity: Polarity
    score_fn: Callable[[DynamicObject, DynamicObject], float]

    def score(self, estimated: DynamicObject, ground_truth: DynamicObject) -> float:
        """Compute the matching score between two objects."""
        return float(self.score_fn(estimated, ground_truth))

    def is_better_or_equal(self, score: float, threshold: float) -> bool:
        """Whether `score` satisfies `threshold`."""
        if self.polarity is Polarity.LOWER_IS_BETTER:
            return score <= threshold
        return score >= threshold

    def is_better(self, score: float, other: float) -> bool:
        """Whether `score` is strictly better than `other`."""
        if self.polarity is Polarity.LOWER_IS_BETTER:
            return score < other
        return score > other

    @property
    def worst_score(self) -> float:
        """Score every real score is better than."""
        if self.polarity is Polarity.LOWER_IS_BETTER:
            return float("inf")
        return float("-inf")


CenterDistance = MatchingStrategy(MatchingMode.CENTER_DISTANCE, Polarity.LOWER_IS_BETTER, center_distance)
PlaneDistance = MatchingStrategy(MatchingMode.PLANE_DISTANCE, Polarity.LOWER_IS_BETTER, plane_distance)
Iou2D = MatchingStrategy(MatchingMode.IOU_2D, Polarity.HIGHER_IS_BETTER, iou_bev)
Iou3D = MatchingStrategy(MatchingMode.IOU_3D, Polarity.HIGHER_IS_BETTER, iou_3d)

_STRATEGIES: Dict[MatchingMode, MatchingStrategy] = {
    MatchingMode.CENTER_DISTANCE: CenterDistance,
    MatchingMode.PLANE_DISTANCE: PlaneDistance,
    MatchingMode.IOU_2D: Iou2D,
    MatchingMode.IOU_3D: Iou3D,
}


def get_matching_strategy(mode: Union[MatchingMode, str]) -> MatchingStrategy:
    """
    Look up the strategy for a mode.

    Args:
        mode: MatchingMode or its string value (e.g. "plane_distance").

    Returns:
        The MatchingStrategy instance.
    """
    if not isinstance(mode, MatchingMode):
        mode = MatchingMode(str(mode).lower())
    return _STRATEGIES[mode]
