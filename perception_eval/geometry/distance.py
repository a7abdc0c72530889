"""Distance measures between two dynamic objects."""

import numpy as np

from ..common.object import DynamicObject


def center_distance(estimated: DynamicObject, ground_truth: DynamicObject) -> float:
    """
    Euclidean distance between two box centers.

    Args:
        estimated: Estimated object.
        ground_truth: Ground truth object.

    Returns:
        3D distance in meters.
    """
    return estimated.distance_from(ground_truth.position)


def center_distance_bev(estimated: DynamicObject, ground_truth: DynamicObject) -> float:
    """Euclidean distance between two box centers, ignoring z."""
    return estimated.distance_bev_from(ground_truth.position)


def nearest_plane_corners(obj: DynamicObject) -> np.ndarray:
    """
    Return the two footprint corners closest to the ego origin.

    For a rectangle the two closest corners are always adjacent, so they
    span the side of the box facing the ego vehicle.

    Returns:
        (2, 2) array, closest corner first.
    """
    footprint = obj.footprint()
    order = np.argsort(np.linalg.norm(footprint, axis=1), kind="stable")
    return footprint[order[:2]]


def plane_distance(estimated: DynamicObject, ground_truth: DynamicObject) -> float:
    """
    RMS distance between the nearest sides of two boxes.

    The side of each footprint facing the ego origin is found, its two
    endpoints are paired with the other box's endpoints so that the summed
    squared distance is minimal, and the root mean square of the two
    endpoint distances is returned.

    Boxes with a zero length or width have no side to compare; the 3D
    center distance is returned instead.

    Args:
        estimated: Estimated object.
        ground_truth: Ground truth object.

    Returns:
        Plane distance in meters.
    """
    if estimated.size[0] <= 0.0 or estimated.size[1] <= 0.0:
        return center_distance(estimated, ground_truth)
    if ground_truth.size[0] <= 0.0 or ground_truth.size[1] <= 0.0:
        return center_distance(estimated, ground_truth)

    est_plane = nearest_plane_corners(estimated)
    gt_plane = nearest_plane_corners(ground_truth)

    straight = np.sum((est_plane - gt_plane) ** 2, axis=1)
    crossed = np.sum((est_plane - gt_plane[::-1]) ** 2, axis=1)

    squared = straight if straight.sum() <= crossed.sum() else crossed

    return float(np.sqrt(squared.mean()))
