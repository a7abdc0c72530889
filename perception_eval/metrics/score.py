"""Per-label AP/APH scores and their label averages."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

import numpy as np

from ..common.label import Label
from ..errors import MetricsError
from ..matching import MatchingCondition
from ..result.aggregation import SceneResultAggregator
from ..result.frame_result import PerceptionFrameResult
from .average_precision import compute_ap, precision_recall_curve


@dataclass
class APScore:
    """
    AP and APH of one label under one matching condition.

    `ap` and `aph` are None when the label has no ground truth.
    """
    label: Label
    condition: MatchingCondition
    num_gt: int
    num_tp: int
    num_fp: int
    ap: Optional[float]
    aph: Optional[float]
    precisions: np.ndarray = field(repr=False, default_factory=lambda: np.zeros(0))
    recalls: np.ndarray = field(repr=False, default_factory=lambda: np.zeros(0))
    heading_precisions: np.ndarray = field(repr=False, default_factory=lambda: np.zeros(0))

    @property
    def is_defined(self) -> bool:
        return self.num_gt > 0

    @property
    def precision(self) -> float:
        """Precision at the lowest confidence."""
        return float(self.precisions[-1]) if len(self.precisions) > 0 else 0.0

    @property
    def recall(self) -> float:
        """Recall at the lowest confidence."""
        return float(self.recalls[-1]) if len(self.recalls) > 0 else 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ap": self.ap,
            "aph": self.aph,
            "precision": self.precision,
            "recall": self.recall,
            "num_gt": self.num_gt,
            "num_tp": self.num_tp,
            "num_fp": self.num_fp,
        }


def compute_label_score(
    frame_results: Sequence[PerceptionFrameResult],
    label: Label,
    condition: MatchingCondition,
    interpolation: str = "all_point",
) -> APScore:
    """
    Score one label over all frames of one condition.

    Args:
        frame_results: Frame results in frame order.
        label: Label to score.
        condition: Condition the frames were matched under.
        interpolation: AP integration method.

    Returns:
        APScore; AP/APH are None if the label has no ground truth.
    """
    results = [r for frame in frame_results for r in frame.results_for(label)]
    num_tp = sum(1 for r in results if r.is_true_positive)
    num_fp = sum(1 for r in results if r.is_false_positive)
    num_gt = sum(1 for r in results if r.is_true_positive or r.is_false_negative)

    if num_gt == 0:
        return APScore(label, condition, num_gt, num_tp, num_fp, ap=None, aph=None)

    precisions, recalls, heading_precisions = precision_recall_curve(results, num_gt)
    return APScore(
        label=label,
        condition=condition,
        num_gt=num_gt,
        num_tp=num_tp,
        num_fp=num_fp,
        ap=compute_ap(recalls, precisions, interpolation),
        aph=compute_ap(recalls, heading_precisions, interpolation),
        precisions=precisions,
        recalls=recalls,
        heading_precisions=heading_precisions,
    )


@dataclass
class MapScore:
    """Label scores of one condition plus their mean over labels with ground truth."""
    condition: MatchingCondition
    label_scores: Dict[Label, APScore]

    def _mean(self, attr: str) -> Optional[float]:
        values = [getattr(s, attr) for s in self.label_scores.values() if s.is_defined]
        if not values:
            return None
        return float(np.mean(values))

    @property
    def map(self) -> Optional[float]:
        return self._mean("ap")

    @property
    def maph(self) -> Optional[float]:
        return self._mean("aph")


class MetricsScore:
    """
    Scores of every configured matching condition.

    Args:
        map_scores: MapScore per condition, in configuration order.
        num_frames: Number of frames the scores were computed over.
    """

    def __init__(self, map_scores: List[MapScore], num_frames: int = 0):
        self.map_scores = map_scores
        self.num_frames = num_frames
        self._by_condition = {score.condition: score for score in map_scores}

    @property
    def conditions(self) -> List[MatchingCondition]:
        return [score.condition for score in self.map_scores]

    def __getitem__(self, condition: MatchingCondition) -> MapScore:
        return self._by_condition[condition]

    def label_score(self, label: Label, condition: MatchingCondition) -> APScore:
        map_score = self._by_condition.get(condition)
        if map_score is None or label not in map_score.label_scores:
            raise MetricsError(f"No score for condition {condition}", label=label)
        return map_score.label_scores[label]

    def get_ap(self, label: Label, condition: MatchingCondition, strict: bool = False) -> Optional[float]:
        """
        AP of a label.

        Args:
            label: Label to look up.
            condition: Matching condition.
            strict: Raise instead of returning None for labels without ground truth.

        Raises:
            MetricsError: Unknown label/condition, or strict access to a
                label without ground truth.
        """
        score = self.label_score(label, condition)
        if strict and not score.is_defined:
            raise MetricsError("Label has no ground truth instances", label=label, value=str(condition))
        return score.ap

    def get_aph(self, label: Label, condition: MatchingCondition, strict: bool = False) -> Optional[float]:
        score = self.label_score(label, condition)
        if strict and not score.is_defined:
            raise MetricsError("Label has no ground truth instances", label=label, value=str(condition))
        return score.aph

    def map(self, condition: MatchingCondition) -> Optional[float]:
        return self[condition].map

    def maph(self, condition: MatchingCondition) -> Optional[float]:
        return self[condition].maph

    def to_dict(self) -> Dict[str, Any]:
        """Nested plain-python summary keyed by condition and label name."""
        return {
            str(score.condition): {
                "mAP": score.map,
                "mAPH": score.maph,
                "labels": {
                    str(label): label_score.to_dict()
                    for label, label_score in score.label_scores.items()
                },
            }
            for score in self.map_scores
        }

    def __str__(self) -> str:
        def fmt(value: Optional[float]) -> str:
            return "   -  " if value is None else f"{value:6.4f}"

        lines = [f"Frames: {self.num_frames}"]
        for score in self.map_scores:
            lines.append("")
            lines.append(f"[{score.condition}]  mAP: {fmt(score.map)}  mAPH: {fmt(score.maph)}")
            lines.append(f"  {'label':<12} {'AP':>6} {'APH':>6} {'GT':>6} {'TP':>6} {'FP':>6}")
            for label, s in score.label_scores.items():
                lines.append(
                    f"  {str(label):<12} {fmt(s.ap)} {fmt(s.aph)} {s.num_gt:>6} {s.num_tp:>6} {s.num_fp:>6}"
                )
        return "\n".join(lines)


def evaluate_scene(
    aggregator: SceneResultAggregator,
    target_labels: Sequence[Label],
    interpolation: str = "all_point",
) -> MetricsScore:
    """
    Compute scores for every condition in an aggregator.

    Pure: the aggregator is only read, so repeated calls give equal results.

    Args:
        aggregator: Accumulated frame results.
        target_labels: Labels to score.
        interpolation: AP integration method.

    Returns:
        MetricsScore over all frames accumulated so far.
    """
    map_scores = []
    for condition, frame_results in aggregator.items():
        label_scores = {
            label: compute_label_score(frame_results, label, condition, interpolation)
            for label in target_labels
        }
        map_scores.append(MapScore(condition, label_scores))
    return MetricsScore(map_scores, num_frames=aggregator.num_frames)
