"""
Precision-recall curves and Average Precision integration.

Curves are built from TP/FP results sorted globally by descending
confidence. AP is the area under the monotone (interpolated) precision
envelope, integrated over every recall change ("all_point", default) or
sampled at 11 recall levels ("11point").
"""

from typing import Sequence, Tuple

import numpy as np

from ..errors import ConfigurationError
from ..result.perception_result import PerceptionResult

# Recall levels 0.0, 0.1, ..., 1.0
_ELEVEN_RECALL_LEVELS = np.arange(11) / 10.0


def precision_envelope(recalls: np.ndarray, precisions: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """
    Sort a curve by recall and replace each precision by the best precision
    reached at that recall or beyond.

    The result is bracketed by (0, 0) and (1, 0) sentinels.
    """
    order = np.argsort(recalls, kind="stable")
    recalls = np.concatenate([[0.0], np.asarray(recalls, dtype=float)[order], [1.0]])
    precisions = np.concatenate([[0.0], np.asarray(precisions, dtype=float)[order], [0.0]])
    envelope = np.maximum.accumulate(precisions[::-1])[::-1]
    return recalls, envelope


def compute_ap_11point(recalls: np.ndarray, precisions: np.ndarray) -> float:
    """
    Mean envelope precision at the recall levels 0.0, 0.1, ..., 1.0.

    Args:
        recalls: Recall per curve point.
        precisions: Precision per curve point.

    Returns:
        Average Precision, 0.0 for an empty curve.
    """
    if len(recalls) == 0:
        return 0.0

    recalls, envelope = precision_envelope(recalls, precisions)
    # First point reaching each level; the envelope covers everything beyond it
    indices = np.searchsorted(recalls, _ELEVEN_RECALL_LEVELS, side="left")
    return float(np.mean(envelope[indices]))


def compute_ap_all_point(recalls: np.ndarray, precisions: np.ndarray) -> float:
    """
    Area under the envelope, summed over every recall step.

    Args:
        recalls: Recall per curve point.
        precisions: Precision per curve point.

    Returns:
        Average Precision, 0.0 for an empty curve.
    """
    if len(recalls) == 0:
        return 0.0

    recalls, envelope = precision_envelope(recalls, precisions)
    return float(np.sum(np.diff(recalls) * envelope[1:]))


_AP_FUNCTIONS = {
    "all_point": compute_ap_all_point,
    "11point": compute_ap_11point,
}


def compute_ap(recalls: np.ndarray, precisions: np.ndarray, interpolation: str = "all_point") -> float:
    """Dispatch to the configured integration method."""
    if interpolation not in _AP_FUNCTIONS:
        raise ConfigurationError("Unknown AP interpolation method", value=interpolation)
    return _AP_FUNCTIONS[interpolation](recalls, precisions)


def sort_by_confidence(results: Sequence[PerceptionResult]) -> list:
    """
    TP and FP results sorted by descending confidence.

    The sort is stable, so ties keep frame order and then in-frame order.
    """
    estimated = [r for r in results if r.is_true_positive or r.is_false_positive]
    return sorted(estimated, key=lambda r: r.confidence, reverse=True)


def precision_recall_curve(
    results: Sequence[PerceptionResult],
    num_gt: int,
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Build precision, recall and heading-weighted precision arrays.

    Args:
        results: Results of one label across all frames, in frame order.
        num_gt: Number of ground truth instances of the label (> 0).

    Returns:
        Tuple of (precisions, recalls, heading_precisions), one entry per
        TP/FP result in confidence order.
    """
    ordered = sort_by_confidence(results)
    if not ordered:
        empty = np.zeros(0)
        return empty, empty.copy(), empty.copy()

    is_tp = np.array([r.is_true_positive for r in ordered], dtype=float)
    weights = np.array([r.heading_weight for r in ordered], dtype=float)

    tp_cumsum = np.cumsum(is_tp)
    weight_cumsum = np.cumsum(weights)
    num_seen = np.arange(1, len(ordered) + 1, dtype=float)

    precisions = tp_cumsum / num_seen
    recalls = tp_cumsum / num_gt
    heading_precisions = weight_cumsum / num_seen

    return precisions, recalls, heading_precisions
