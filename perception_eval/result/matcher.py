"""
Greedy per-frame assignment of estimates to ground truth.

Estimates are visited by descending confidence and each one takes the best
remaining ground truth of its label. This is greedy, not a globally optimal
assignment: higher-confidence estimates get first choice, in the same
order the precision-recall curve is later built in.
"""

from numbers import Number
from typing import List, Mapping, Optional, Sequence, Union

from ..common.evaluation_task import FrameID
from ..common.label import Label
from ..common.object import DynamicObject
from ..errors import MatchingError
from ..matching import MatchingCondition, MatchingStrategy
from .frame_result import PerceptionFrameResult
from .perception_result import PerceptionResult

Threshold = Union[float, Mapping[Label, float]]


def _check_objects(objects: Sequence[DynamicObject], name: str, frame_index: int):
    for obj in objects:
        if not isinstance(obj, DynamicObject):
            raise MatchingError(
                f"{name} must contain DynamicObject instances",
                frame_index=frame_index,
                value=type(obj).__name__,
            )


def _threshold_for(label: Label, threshold: Threshold, frame_index: int) -> float:
    if isinstance(threshold, Number):
        return float(threshold)
    if label not in threshold:
        raise MatchingError("No matching threshold defined", label=label, frame_index=frame_index)
    return float(threshold[label])


def match_objects(
    estimated: Sequence[DynamicObject],
    ground_truth: Sequence[DynamicObject],
    strategy: MatchingStrategy,
    threshold: Threshold,
    frame_index: int = 0,
    frame_id: FrameID = FrameID.BASE_LINK,
    timestamp: float = 0.0,
) -> PerceptionFrameResult:
    """
    Classify every object of one frame as TP, FP or FN.

    Args:
        estimated: Filtered estimated objects.
        ground_truth: Filtered ground truth objects.
        strategy: Scoring strategy.
        threshold: One threshold for every label, or a label -> threshold map.
        frame_index: Frame position, reported in errors.
        frame_id: Coordinate frame of the objects.
        timestamp: Frame timestamp in seconds.

    Returns:
        PerceptionFrameResult holding TP/FP in confidence order followed by
        FN in ground truth input order.

    Raises:
        MatchingError: Non-object input, or an estimate whose label has no
            threshold.
    """
    _check_objects(estimated, "estimated", frame_index)
    _check_objects(ground_truth, "ground_truth", frame_index)

    # sorted() is stable: equal confidences keep input order
    ordered = sorted(estimated, key=lambda obj: obj.score, reverse=True)

    gt_matched = [False] * len(ground_truth)
    results: List[PerceptionResult] = []

    for est in ordered:
        limit = _threshold_for(est.label, threshold, frame_index)

        best_score = strategy.worst_score
        best_gt_idx: Optional[int] = None

        for gt_idx, gt in enumerate(ground_truth):
            if gt_matched[gt_idx] or gt.label != est.label:
                continue

            score = strategy.score(est, gt)
            if best_gt_idx is None or strategy.is_better(score, best_score):
                best_score = score
                best_gt_idx = gt_idx

        if best_gt_idx is not None and strategy.is_better_or_equal(best_score, limit):
            gt_matched[best_gt_idx] = True
            results.append(
                PerceptionResult.true_positive(est, ground_truth[best_gt_idx], best_score)
            )
        else:
            results.append(PerceptionResult.false_positive(est))

    for gt_idx, gt in enumerate(ground_truth):
        if not gt_matched[gt_idx]:
            results.append(PerceptionResult.false_negative(gt))

    return PerceptionFrameResult(
        results=results,
        frame_index=frame_index,
        frame_id=frame_id,
        timestamp=timestamp,
    )


def match_with_condition(
    estimated: Sequence[DynamicObject],
    ground_truth: Sequence[DynamicObject],
    condition: MatchingCondition,
    frame_index: int = 0,
    frame_id: FrameID = FrameID.BASE_LINK,
    timestamp: float = 0.0,
) -> PerceptionFrameResult:
    """Run `match_objects` with the strategy and thresholds of a condition."""
    return match_objects(
        estimated,
        ground_truth,
        condition.strategy,
        condition.threshold_map,
        frame_index=frame_index,
        frame_id=frame_id,
        timestamp=timestamp,
    )
