"""
Overlap measures between two oriented boxes.

BEV IoU intersects the rotated footprints as polygons. 3D IoU extends the
BEV intersection with the overlap along z:

    IoU_3d = area(A ∩ B) * overlap_z / (vol(A) + vol(B) - area(A ∩ B) * overlap_z)

Boxes with a zero extent have no overlap and yield 0.0.
"""

from shapely.geometry import Polygon

from ..common.object import DynamicObject


def footprint_polygon(obj: DynamicObject) -> Polygon:
    """Shapely polygon of the object's BEV footprint."""
    return Polygon(obj.footprint())


def intersection_area_bev(estimated: DynamicObject, ground_truth: DynamicObject) -> float:
    """Area of the BEV footprint intersection."""
    if estimated.area <= 0.0 or ground_truth.area <= 0.0:
        return 0.0
    return footprint_polygon(estimated).intersection(footprint_polygon(ground_truth)).area


def height_overlap(estimated: DynamicObject, ground_truth: DynamicObject) -> float:
    """Length of the overlap of both boxes along z."""
    est_min = estimated.position[2] - estimated.size[2] / 2
    est_max = estimated.position[2] + estimated.size[2] / 2
    gt_min = ground_truth.position[2] - ground_truth.size[2] / 2
    gt_max = ground_truth.position[2] + ground_truth.size[2] / 2

    return max(0.0, min(est_max, gt_max) - max(est_min, gt_min))


def iou_bev(estimated: DynamicObject, ground_truth: DynamicObject) -> float:
    """
    Bird's-eye-view IoU of two oriented boxes.

    Args:
        estimated: Estimated object.
        ground_truth: Ground truth object.

    Returns:
        IoU value in [0, 1].
    """
    intersection = intersection_area_bev(estimated, ground_truth)
    union = estimated.area + ground_truth.area - intersection

    if union <= 0.0 or intersection <= 0.0:
        return 0.0

    return min(1.0, intersection / union)


def iou_3d(estimated: DynamicObject, ground_truth: DynamicObject) -> float:
    """
    3D IoU of two boxes rotated around z.

    Args:
        estimated: Estimated object.
        ground_truth: Ground truth object.

    Returns:
        IoU value in [0, 1].
    """
    if estimated.is_degenerate() or ground_truth.is_degenerate():
        return 0.0

    intersection = intersection_area_bev(estimated, ground_truth) * height_overlap(
        estimated, ground_truth
    )
    union = estimated.volume + ground_truth.volume - intersection

    if union <= 0.0 or intersection <= 0.0:
        return 0.0

    return min(1.0, intersection / union)
