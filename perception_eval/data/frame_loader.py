"""
Frame loading from JSON files.

File format:
====================

    {
      "frames": [
        {
          "timestamp": 0.0,
          "frame_id": "base_link",
          "estimated": [<object>, ...],
          "ground_truth": [<object>, ...]
        }
      ]
    }

A top level list of frames is accepted as well. Each <object>:

    {
      "label": "car",
      "position": [x, y, z],          # meters
      "size": [length, width, height],  # meters
      "yaw": 0.0,                       # radians, or
      "orientation": [w, x, y, z],      # quaternion
      "confidence": 0.9,                # estimates
      "uuid": "...",                    # optional
      "pointcloud_num": 42,             # optional
      "velocity": [vx, vy, vz]          # optional
    }
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from ..common.evaluation_task import FrameID
from ..common.label import LabelConverter
from ..common.object import DynamicObject
from ..errors import MatchingError
from ..utils.logger import get_logger

logger = get_logger(__name__)

# Nearest ground truth frame must lie strictly within this window [s]
MAX_TIME_DIFF = 0.075


@dataclass
class Frame:
    """Estimated and ground truth objects of one timestamp."""

    estimated: List[DynamicObject] = field(default_factory=list)
    ground_truth: List[DynamicObject] = field(default_factory=list)
    frame_id: FrameID = FrameID.BASE_LINK
    timestamp: float = 0.0


def object_from_dict(
    data: Dict[str, Any],
    timestamp: float = 0.0,
    frame_id: FrameID = FrameID.BASE_LINK,
    label_converter: Optional[LabelConverter] = None,
) -> DynamicObject:
    """
    Build a DynamicObject from its JSON mapping.

    Args:
        data: Object mapping (see module docstring).
        timestamp: Timestamp of the enclosing frame.
        frame_id: Coordinate frame of the enclosing frame.
        label_converter: Converter for label names (lenient by default).

    Returns:
        DynamicObject instance.

    Raises:
        KeyError / ValueError: Missing or malformed fields.
    """
    label_converter = label_converter or LabelConverter()
    label = label_converter.convert(data["label"])

    kwargs = dict(
        confidence=data.get("confidence"),
        uuid=data.get("uuid"),
        pointcloud_num=data.get("pointcloud_num"),
        timestamp=float(data.get("timestamp", timestamp)),
        frame_id=frame_id,
        velocity=data.get("velocity"),
    )

    if "orientation" in data:
        return DynamicObject.from_quaternion(
            data["position"], data["orientation"], data["size"], label, **kwargs
        )
    return DynamicObject(
        position=data["position"],
        size=data["size"],
        yaw=data.get("yaw", 0.0),
        label=label,
        **kwargs,
    )


def _parse_frame(index: int, data: Any, label_converter: LabelConverter) -> Frame:
    if not isinstance(data, dict):
        raise MatchingError("Frame record must be a mapping", frame_index=index, value=type(data).__name__)

    try:
        timestamp = float(data.get("timestamp", 0.0))
        frame_id = FrameID.from_name(data.get("frame_id", "base_link"))
        estimated = [
            object_from_dict(obj, timestamp, frame_id, label_converter)
            for obj in data.get("estimated", [])
        ]
        ground_truth = [
            object_from_dict(obj, timestamp, frame_id, label_converter)
            for obj in data.get("ground_truth", [])
        ]
    except (KeyError, TypeError, ValueError) as e:
        raise MatchingError(f"Malformed frame record: {e}", frame_index=index) from e

    return Frame(estimated=estimated, ground_truth=ground_truth, frame_id=frame_id, timestamp=timestamp)


def load_frames(
    path: Union[str, Path],
    label_converter: Optional[LabelConverter] = None,
) -> List[Frame]:
    """
    Load all frames of a JSON frames file.

    Args:
        path: Path to the JSON file.
        label_converter: Converter for label names (lenient by default).

    Returns:
        Frames in file order.

    Raises:
        FileNotFoundError: If the file does not exist.
        MatchingError: If a frame or object record is malformed.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Frames file not found: {path}")

    with open(path, "r") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise MatchingError(f"Frames file is not valid JSON: {path}: {e}") from e

    frames_data = data.get("frames", []) if isinstance(data, dict) else data
    if not isinstance(frames_data, list):
        raise MatchingError(f"Frames file must hold a list of frames: {path}")

    label_converter = label_converter or LabelConverter()
    frames = [_parse_frame(i, frame, label_converter) for i, frame in enumerate(frames_data)]
    logger.debug(f"Loaded {len(frames)} frames from {path}")
    return frames


def get_current_frame(
    frames: Sequence[Frame],
    timestamp: float,
    max_time_diff: float = MAX_TIME_DIFF,
) -> Optional[Frame]:
    """
    Find the frame nearest to a timestamp.

    Args:
        frames: Candidate frames.
        timestamp: Target timestamp in seconds.
        max_time_diff: Maximum allowed difference in seconds (exclusive).

    Returns:
        Nearest frame, or None if none lies within `max_time_diff`.
    """
    if not frames:
        return None

    # min() keeps the first frame on ties
    nearest = min(frames, key=lambda frame: abs(frame.timestamp - timestamp))
    diff = abs(nearest.timestamp - timestamp)
    if diff < max_time_diff:
        return nearest

    logger.warning(
        f"No ground truth frame for timestamp {timestamp}: "
        f"{diff * 1000:.1f} [ms] >= {max_time_diff * 1000:.1f} [ms]"
    )
    return None
