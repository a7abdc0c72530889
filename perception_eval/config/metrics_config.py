"""Metrics configuration: which matching conditions to score."""

from typing import Any, Dict, List, Optional, Sequence, Union

from ..common.evaluation_task import EvaluationTask
from ..common.label import Label, convert_labels
from ..errors import ConfigurationError
from ..matching import MatchingCondition, MatchingMode
from .label_values import broadcast_label_values

INTERPOLATION_METHODS = ("all_point", "11point")


class MetricsConfig:
    """
    Validated set of (matching strategy, threshold) pairs per label.

    Each threshold list entry is either a scalar shared by every target
    label or a list with one threshold per target label, e.g.
    `center_distance_thresholds=[1.0, 2.0]` produces two conditions.
    None leaves a strategy out; an empty list is an error.

    Args:
        target_labels: Labels to score.
        center_distance_thresholds: Center distance thresholds [m].
        plane_distance_thresholds: Plane distance thresholds [m].
        iou_2d_thresholds: BEV IoU thresholds.
        iou_3d_thresholds: 3D IoU thresholds.
        evaluation_task: Only detection is supported.
        interpolation: "all_point" (continuous) or "11point".
    """

    def __init__(
        self,
        target_labels: Sequence[Union[str, Label]],
        center_distance_thresholds: Optional[Sequence[Any]] = None,
        plane_distance_thresholds: Optional[Sequence[Any]] = None,
        iou_2d_thresholds: Optional[Sequence[Any]] = None,
        iou_3d_thresholds: Optional[Sequence[Any]] = None,
        evaluation_task: Union[str, EvaluationTask] = EvaluationTask.DETECTION,
        interpolation: str = "all_point",
    ):
        if not isinstance(evaluation_task, EvaluationTask):
            evaluation_task = EvaluationTask.from_name(evaluation_task)
        if evaluation_task is not EvaluationTask.DETECTION:
            raise ConfigurationError("Only detection evaluation is supported", value=str(evaluation_task))
        if interpolation not in INTERPOLATION_METHODS:
            raise ConfigurationError("Unknown AP interpolation method", value=interpolation)

        self.evaluation_task = evaluation_task
        self.interpolation = interpolation
        self.target_labels: List[Label] = convert_labels(target_labels or [])
        if not self.target_labels:
            raise ConfigurationError("MetricsConfig requires at least one target label")

        requested = {
            MatchingMode.CENTER_DISTANCE: center_distance_thresholds,
            MatchingMode.PLANE_DISTANCE: plane_distance_thresholds,
            MatchingMode.IOU_2D: iou_2d_thresholds,
            MatchingMode.IOU_3D: iou_3d_thresholds,
        }

        self.matching_conditions: List[MatchingCondition] = []
        for mode, thresholds in requested.items():
            if thresholds is None:
                continue
            if len(thresholds) == 0:
                raise ConfigurationError(f"Empty threshold list for {mode}")
            for entry in thresholds:
                per_label = broadcast_label_values(f"{mode}_thresholds", entry, self.target_labels)
                for label, value in per_label.items():
                    if not isinstance(value, (int, float)) or value < 0:
                        raise ConfigurationError(
                            f"Invalid {mode} threshold", label=label, value=value
                        )
                condition = MatchingCondition.from_mapping(mode, per_label)
                if condition not in self.matching_conditions:
                    self.matching_conditions.append(condition)

        if not self.matching_conditions:
            raise ConfigurationError("No matching thresholds configured")

    def conditions_for(self, mode: MatchingMode) -> List[MatchingCondition]:
        return [c for c in self.matching_conditions if c.mode is mode]

    @classmethod
    def from_dict(cls, params: Dict[str, Any]) -> "MetricsConfig":
        """Build from an `evaluation_config_dict` section."""
        def thresholds(*keys):
            for key in keys:
                value = params.get(key)
                if value is not None:
                    return value if isinstance(value, (list, tuple)) else [value]
            return None

        return cls(
            target_labels=params.get("target_labels") or [],
            center_distance_thresholds=thresholds(
                "center_distance_thresholds", "center_distance_threshold"
            ),
            plane_distance_thresholds=thresholds(
                "plane_distance_thresholds", "plane_distance_threshold"
            ),
            iou_2d_thresholds=thresholds(
                "iou_bev_thresholds", "iou_2d_thresholds", "iou_2d_threshold"
            ),
            iou_3d_thresholds=thresholds("iou_3d_thresholds", "iou_3d_threshold"),
            evaluation_task=params.get("evaluation_task", "detection"),
            interpolation=params.get("interpolation", "all_point"),
        )
