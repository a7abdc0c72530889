"""Average precision metrics."""

from .average_precision import (
    compute_ap,
    compute_ap_11point,
    compute_ap_all_point,
    precision_envelope,
    precision_recall_curve,
)
from .score import APScore, MapScore, MetricsScore, compute_label_score, evaluate_scene

__all__ = [
    "APScore",
    "MapScore",
    "MetricsScore",
    "compute_ap",
    "compute_ap_11point",
    "compute_ap_all_point",
    "compute_label_score",
    "evaluate_scene",
    "precision_envelope",
    "precision_recall_curve",
]
