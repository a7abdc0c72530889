"""Matching results of one frame under one condition."""

from dataclasses import dataclass, field
from typing import List, Optional

from ..common.evaluation_task import FrameID
from ..common.label import Label
from .perception_result import PerceptionResult


@dataclass
class PerceptionFrameResult:
    """
    Ordered results of one frame.

    Results follow matcher order: estimate-derived results (TP/FP) by
    descending confidence, then trailing false negatives.

    Attributes:
        results: Classified results.
        frame_index: Position of the frame in the scenario.
        frame_id: Coordinate frame of the objects.
        timestamp: Frame timestamp in seconds.
    """
    results: List[PerceptionResult] = field(default_factory=list)
    frame_index: int = 0
    frame_id: FrameID = FrameID.BASE_LINK
    timestamp: float = 0.0

    @property
    def true_positives(self) -> List[PerceptionResult]:
        return [r for r in self.results if r.is_true_positive]

    @property
    def false_positives(self) -> List[PerceptionResult]:
        return [r for r in self.results if r.is_false_positive]

    @property
    def false_negatives(self) -> List[PerceptionResult]:
        return [r for r in self.results if r.is_false_negative]

    def results_for(self, label: Optional[Label] = None) -> List[PerceptionResult]:
        if label is None:
            return list(self.results)
        return [r for r in self.results if r.label == label]

    def num_ground_truth(self, label: Optional[Label] = None) -> int:
        """Count of ground truth (TP + FN) for a label, or all labels."""
        return sum(
            1 for r in self.results_for(label) if r.is_true_positive or r.is_false_negative
        )

    def num_estimated(self, label: Optional[Label] = None) -> int:
        return sum(
            1 for r in self.results_for(label) if r.is_true_positive or r.is_false_positive
        )

    @property
    def is_success(self) -> bool:
        """True when the frame has no FP and no FN."""
        return not self.false_positives and not self.false_negatives

    def __len__(self) -> int:
        return len(self.results)
