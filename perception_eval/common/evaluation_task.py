"""Evaluation task and coordinate frame identifiers."""

from enum import Enum

from ..errors import ConfigurationError


class EvaluationTask(Enum):
    """Evaluation tasks known to the configuration layer."""
    DETECTION = "detection"
    TRACKING = "tracking"
    PREDICTION = "prediction"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_name(cls, name: str) -> "EvaluationTask":
        """Parse `detection` / `Detection` style names."""
        try:
            return cls(str(name).strip().lower())
        except ValueError:
            raise ConfigurationError("Unknown evaluation task", value=name) from None


class FrameID(Enum):
    """Coordinate frame objects are expressed in."""
    BASE_LINK = "base_link"
    MAP = "map"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_name(cls, name: str) -> "FrameID":
        """Parse `base_link` / `BaseLink` style names."""
        key = str(name).strip()
        aliases = {"baselink": cls.BASE_LINK, "base_link": cls.BASE_LINK, "map": cls.MAP}
        frame_id = aliases.get(key.lower())
        if frame_id is None:
            raise ConfigurationError("Unknown frame id", value=name)
        return frame_id
