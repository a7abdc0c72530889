"""Object labels and conversion from dataset / config names."""

from enum import Enum
from typing import Dict, Iterable, List, Union

from ..errors import ConfigurationError


class Label(Enum):
    """Closed set of object labels."""
    UNKNOWN = "unknown"
    CAR = "car"
    TRUCK = "truck"
    BUS = "bus"
    BICYCLE = "bicycle"
    MOTORBIKE = "motorbike"
    PEDESTRIAN = "pedestrian"
    ANIMAL = "animal"

    def __str__(self) -> str:
        return self.value


# Lower-case name -> label. Covers Autoware names and NuScenes categories.
LABEL_ALIASES: Dict[str, Label] = {
    # autoware
    "unknown": Label.UNKNOWN,
    "car": Label.CAR,
    "truck": Label.TRUCK,
    "bus": Label.BUS,
    "bicycle": Label.BICYCLE,
    "motorbike": Label.MOTORBIKE,
    "motorcycle": Label.MOTORBIKE,
    "pedestrian": Label.PEDESTRIAN,
    "animal": Label.ANIMAL,
    # nuscenes
    "vehicle.car": Label.CAR,
    "vehicle.emergency.police": Label.CAR,
    "vehicle.truck": Label.TRUCK,
    "vehicle.trailer": Label.TRUCK,
    "vehicle.construction": Label.TRUCK,
    "vehicle.emergency.ambulance": Label.TRUCK,
    "vehicle.bus": Label.BUS,
    "vehicle.bus.rigid": Label.BUS,
    "vehicle.bus.bendy": Label.BUS,
    "vehicle.bicycle": Label.BICYCLE,
    "vehicle.motorcycle": Label.MOTORBIKE,
    "human.pedestrian.adult": Label.PEDESTRIAN,
    "human.pedestrian.child": Label.PEDESTRIAN,
    "human.pedestrian.construction_worker": Label.PEDESTRIAN,
    "human.pedestrian.police_officer": Label.PEDESTRIAN,
    "human.pedestrian.personal_mobility": Label.PEDESTRIAN,
    "human.pedestrian.stroller": Label.PEDESTRIAN,
    "human.pedestrian.wheelchair": Label.PEDESTRIAN,
    "animal.dog": Label.ANIMAL,
    "animal.cat": Label.ANIMAL,
}


class LabelConverter:
    """
    Convert label names into `Label` members.

    Args:
        strict: If True, unknown names raise ConfigurationError.
            Otherwise they map to Label.UNKNOWN.
    """

    def __init__(self, strict: bool = False):
        self.strict = strict

    def convert(self, name: Union[str, Label]) -> Label:
        """Convert a single name."""
        if isinstance(name, Label):
            return name

        label = LABEL_ALIASES.get(str(name).strip().lower())
        if label is None:
            if self.strict:
                raise ConfigurationError("Unknown label name", value=name)
            return Label.UNKNOWN
        return label

    def convert_all(self, names: Iterable[Union[str, Label]]) -> List[Label]:
        """Convert a sequence of names, preserving order."""
        return [self.convert(name) for name in names]


def convert_labels(names: Iterable[Union[str, Label]]) -> List[Label]:
    """Strictly convert configuration label names."""
    return LabelConverter(strict=True).convert_all(names)
