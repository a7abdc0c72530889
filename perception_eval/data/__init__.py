"""Frame loading."""

from .frame_loader import MAX_TIME_DIFF, Frame, get_current_frame, load_frames, object_from_dict

__all__ = [
    "MAX_TIME_DIFF",
    "Frame",
    "get_current_frame",
    "load_frames",
    "object_from_dict",
]
