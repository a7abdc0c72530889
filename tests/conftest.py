"""Shared fixtures."""

import pytest

from perception_eval.common import DynamicObject, Label


@pytest.fixture
def make_object():
    """Factory for DynamicObject with car-sized defaults."""

    def _make(
        x=10.0,
        y=0.0,
        z=0.0,
        label=Label.CAR,
        confidence=None,
        size=(4.0, 2.0, 1.5),
        yaw=0.0,
        **kwargs,
    ):
        return DynamicObject(
            position=(x, y, z),
            size=size,
            yaw=yaw,
            label=label,
            confidence=confidence,
            **kwargs,
        )

    return _make
