"""Dynamic object record shared by estimation and ground truth."""

from dataclasses import dataclass, field
from typing import Optional, Sequence, Tuple, Union

import numpy as np
from scipy.spatial.transform import Rotation

from .evaluation_task import FrameID
from .label import Label, LabelConverter


def _as_vector3(values: Sequence[float], name: str) -> Tuple[float, float, float]:
    vector = tuple(float(v) for v in values)
    if len(vector) != 3:
        raise ValueError(f"{name} must have 3 elements, got {len(vector)}")
    return vector


def normalize_angle(angle: float) -> float:
    """Wrap an angle to [-pi, pi)."""
    return float((angle + np.pi) % (2 * np.pi) - np.pi)


@dataclass(frozen=True)
class DynamicObject:
    """
    One detected or ground-truth object in one frame.

    Coordinates follow the ego (base_link) convention: x forward, y left,
    z up. Yaw is the rotation around z, zero along +x.

    Attributes:
        position: Box center [x, y, z] in meters.
        size: Box extents [length, width, height] in meters.
        yaw: Heading in radians.
        label: Semantic label.
        confidence: Detection score; None for ground truth.
        uuid: Instance identifier.
        pointcloud_num: Number of supporting sensor points.
        timestamp: Frame timestamp in seconds.
        frame_id: Coordinate frame of the position.
        velocity: Optional velocity [vx, vy, vz].
    """
    position: Tuple[float, float, float]
    size: Tuple[float, float, float]
    yaw: float
    label: Label
    confidence: Optional[float] = None
    uuid: Optional[str] = None
    pointcloud_num: Optional[int] = None
    timestamp: float = 0.0
    frame_id: FrameID = FrameID.BASE_LINK
    velocity: Optional[Tuple[float, float, float]] = field(default=None, compare=False)

    def __post_init__(self):
        # frozen: coerce through object.__setattr__
        object.__setattr__(self, "position", _as_vector3(self.position, "position"))
        object.__setattr__(self, "size", _as_vector3(self.size, "size"))
        object.__setattr__(self, "yaw", float(self.yaw))
        if not isinstance(self.label, Label):
            object.__setattr__(self, "label", LabelConverter().convert(self.label))
        if self.confidence is not None:
            object.__setattr__(self, "confidence", float(self.confidence))
        if self.velocity is not None:
            object.__setattr__(self, "velocity", _as_vector3(self.velocity, "velocity"))

    @classmethod
    def from_quaternion(
        cls,
        position: Sequence[float],
        orientation: Sequence[float],
        size: Sequence[float],
        label: Union[Label, str],
        **kwargs,
    ) -> "DynamicObject":
        """
        Build an object from a [w, x, y, z] orientation quaternion.

        Only the yaw component of the rotation is kept.
        """
        w, x, y, z = orientation
        yaw = Rotation.from_quat([x, y, z, w]).as_euler("xyz")[2]
        return cls(position=position, size=size, yaw=yaw, label=label, **kwargs)

    @property
    def center(self) -> np.ndarray:
        return np.array(self.position)

    @property
    def heading(self) -> float:
        """Yaw wrapped to [-pi, pi)."""
        return normalize_angle(self.yaw)

    @property
    def score(self) -> float:
        """Confidence used for ordering; ground truth counts as 1.0."""
        return 1.0 if self.confidence is None else self.confidence

    @property
    def area(self) -> float:
        """BEV footprint area."""
        return self.size[0] * self.size[1]

    @property
    def volume(self) -> float:
        return self.area * self.size[2]

    @property
    def distance(self) -> float:
        """3D distance from the ego origin."""
        return float(np.linalg.norm(self.center))

    @property
    def distance_bev(self) -> float:
        """BEV distance from the ego origin."""
        return float(np.hypot(self.position[0], self.position[1]))

    def distance_from(self, point: Sequence[float]) -> float:
        return float(np.linalg.norm(self.center - np.asarray(point, dtype=float)))

    def distance_bev_from(self, point: Sequence[float]) -> float:
        return float(np.hypot(self.position[0] - point[0], self.position[1] - point[1]))

    def footprint(self) -> np.ndarray:
        """
        BEV corners of the box.

        Returns:
            (4, 2) array ordered front-left, rear-left, rear-right,
            front-right (counter-clockwise for a box facing +x).
        """
        length, width, _ = self.size
        local = np.array([
            [length / 2, width / 2],
            [-length / 2, width / 2],
            [-length / 2, -width / 2],
            [length / 2, -width / 2],
        ])
        c, s = np.cos(self.yaw), np.sin(self.yaw)
        R = np.array([[c, -s], [s, c]])
        return local @ R.T + np.array(self.position[:2])

    def corners(self) -> np.ndarray:
        """
        3D corners of the box.

        Returns:
            (8, 3) array: footprint corners at the bottom face, then the
            same corners at the top face.
        """
        bottom_z = self.position[2] - self.size[2] / 2
        top_z = self.position[2] + self.size[2] / 2
        footprint = self.footprint()
        bottom = np.hstack([footprint, np.full((4, 1), bottom_z)])
        top = np.hstack([footprint, np.full((4, 1), top_z)])
        return np.vstack([bottom, top])

    def is_degenerate(self) -> bool:
        """True if any extent is zero (or negative)."""
        return min(self.size) <= 0.0
