"""Object eligibility filtering."""

from .object_filter import filter_objects, is_target_object

__all__ = ["filter_objects", "is_target_object"]
