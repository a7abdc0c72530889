"""
Eligibility filtering of objects before matching.

Checks are applied in order and combined with AND:
1. Label membership (skipped when no target labels are configured)
2. Position bounds |x| < max_x, |y| < max_y for the object's label
3. BEV distance band from ego
4. Minimum supporting point count (objects carrying a count)
5. UUID allow-list (ground truth carrying a uuid)
6. Confidence threshold (estimates carrying a confidence)

Objects that fail are dropped; they never produce a result.
"""

from typing import List, Sequence

from ..common.object import DynamicObject
from ..config.filter_config import FilterConfig
from ..config.label_values import get_label_value
from ..errors import FilterError


def is_target_object(
    obj: DynamicObject,
    config: FilterConfig,
    is_gt: bool,
) -> bool:
    """
    Return whether the object is kept.

    Args:
        obj: Object to test.
        config: Filter parameters.
        is_gt: Whether the object is ground truth.

    Returns:
        True if the object passes every configured check.
    """
    label = obj.label

    if config.restricts_labels and label not in config.target_labels:
        return False

    max_x = get_label_value(label, config.max_x_positions, "max_x_position", FilterError)
    if max_x is not None and not abs(obj.position[0]) < max_x:
        return False

    max_y = get_label_value(label, config.max_y_positions, "max_y_position", FilterError)
    if max_y is not None and not abs(obj.position[1]) < max_y:
        return False

    max_distance = get_label_value(label, config.max_distances, "max_distance", FilterError)
    if max_distance is not None and obj.distance_bev > max_distance:
        return False

    min_distance = get_label_value(label, config.min_distances, "min_distance", FilterError)
    if min_distance is not None and obj.distance_bev < min_distance:
        return False

    if obj.pointcloud_num is not None:
        min_points = get_label_value(label, config.min_point_numbers, "min_point_number", FilterError)
        if min_points is not None and obj.pointcloud_num < min_points:
            return False

    if is_gt and config.target_uuids is not None and obj.uuid is not None:
        if obj.uuid not in config.target_uuids:
            return False

    if not is_gt and obj.confidence is not None:
        threshold = get_label_value(
            label, config.confidence_thresholds, "confidence_threshold", FilterError
        )
        if threshold is not None and obj.confidence < threshold:
            return False

    return True


def filter_objects(
    objects: Sequence[DynamicObject],
    config: FilterConfig,
    is_gt: bool,
) -> List[DynamicObject]:
    """
    Keep the objects passing `is_target_object`, in input order.

    Args:
        objects: Objects of one frame.
        config: Filter parameters.
        is_gt: Whether the objects are ground truth.

    Returns:
        Kept objects.
    """
    return [obj for obj in objects if is_target_object(obj, config, is_gt)]
