"""Object filter configuration."""

from numbers import Number
from typing import Any, Dict, List, Optional, Sequence, Union

from ..common.label import Label, convert_labels
from ..errors import FilterError
from .label_values import LabelValues, broadcast_label_values


class FilterConfig:
    """
    Validated parameters selecting the objects eligible for matching.

    Per-label entries may be given as a scalar (applied to every target
    label) or as a list with one entry per target label. None disables the
    corresponding check.

    Args:
        target_labels: Labels to keep. Empty or None keeps every label.
        max_x_position_list: Maximum |x| of the object center per label.
        max_y_position_list: Maximum |y| of the object center per label.
        max_distance_list: Maximum BEV distance from ego per label.
        min_distance_list: Minimum BEV distance from ego per label.
        min_point_numbers: Minimum supporting point count per label.
        confidence_threshold_list: Minimum estimated confidence per label.
        target_uuids: Ground truth uuids to keep; None keeps every uuid.

    Raises:
        ConfigurationError: Unknown label or per-label length mismatch.
        FilterError: Negative bounds or inverted distance band.
    """

    def __init__(
        self,
        target_labels: Optional[Sequence[Union[str, Label]]] = None,
        max_x_position_list: Any = None,
        max_y_position_list: Any = None,
        max_distance_list: Any = None,
        min_distance_list: Any = None,
        min_point_numbers: Any = None,
        confidence_threshold_list: Any = None,
        target_uuids: Optional[Sequence[str]] = None,
    ):
        self.target_labels: List[Label] = convert_labels(target_labels or [])

        self.max_x_positions = self._bounds("max_x_position", max_x_position_list)
        self.max_y_positions = self._bounds("max_y_position", max_y_position_list)
        self.max_distances = self._bounds("max_distance", max_distance_list)
        self.min_distances = self._bounds("min_distance", min_distance_list)
        self.min_point_numbers = self._bounds("min_point_number", min_point_numbers)
        self.confidence_thresholds = self._bounds(
            "confidence_threshold", confidence_threshold_list
        )
        self.target_uuids = None if target_uuids is None else list(target_uuids)

        if self.confidence_thresholds is not None:
            for label, threshold in self.confidence_thresholds.items():
                if threshold > 1.0:
                    raise FilterError(
                        "confidence_threshold must be within [0, 1]",
                        label=label,
                        value=threshold,
                    )

        if self.max_distances is not None and self.min_distances is not None:
            for label, max_distance in self.max_distances.items():
                min_distance = self.min_distances[label]
                if min_distance > max_distance:
                    raise FilterError(
                        "min_distance exceeds max_distance",
                        label=label,
                        value=(min_distance, max_distance),
                    )

    def _bounds(self, name: str, values: Any) -> Optional[LabelValues]:
        bounds = broadcast_label_values(name, values, self.target_labels)
        if bounds is None:
            return None

        for label, value in bounds.items():
            if not isinstance(value, Number) or value < 0:
                raise FilterError(f"{name} must be a non-negative number", label=label, value=value)
        return {label: float(value) for label, value in bounds.items()}

    @property
    def restricts_labels(self) -> bool:
        return len(self.target_labels) > 0

    @classmethod
    def from_dict(cls, params: Dict[str, Any]) -> "FilterConfig":
        """
        Build from a scenario config section.

        Accepts both scalar keys (`max_x_position`) and list keys
        (`max_x_position_list`).
        """
        def pick(*keys):
            for key in keys:
                if params.get(key) is not None:
                    return params[key]
            return None

        return cls(
            target_labels=params.get("target_labels"),
            max_x_position_list=pick("max_x_position_list", "max_x_position"),
            max_y_position_list=pick("max_y_position_list", "max_y_position"),
            max_distance_list=pick("max_distance_list", "max_distance"),
            min_distance_list=pick("min_distance_list", "min_distance"),
            min_point_numbers=pick("min_point_numbers", "min_point_number"),
            confidence_threshold_list=pick("confidence_threshold_list", "confidence_threshold"),
            target_uuids=params.get("target_uuids"),
        )

    def __repr__(self) -> str:
        labels = [str(label) for label in self.target_labels]
        return f"FilterConfig(target_labels={labels}, target_uuids={self.target_uuids})"
