"""Common data types: labels, task identifiers and dynamic objects."""

from .evaluation_task import EvaluationTask, FrameID
from .label import Label, LabelConverter, convert_labels
from .object import DynamicObject, normalize_angle

__all__ = [
    "DynamicObject",
    "EvaluationTask",
    "FrameID",
    "Label",
    "LabelConverter",
    "convert_labels",
    "normalize_angle",
]
