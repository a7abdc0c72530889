"""Geometry primitives: center/plane distance and oriented box IoU."""

from .distance import center_distance, center_distance_bev, nearest_plane_corners, plane_distance
from .iou import footprint_polygon, height_overlap, intersection_area_bev, iou_3d, iou_bev

__all__ = [
    "center_distance",
    "center_distance_bev",
    "nearest_plane_corners",
    "plane_distance",
    "footprint_polygon",
    "height_overlap",
    "intersection_area_bev",
    "iou_bev",
    "iou_3d",
]
