"""Tests for object eligibility filtering."""

import pytest

from perception_eval.common import Label
from perception_eval.config import FilterConfig
from perception_eval.filtering import filter_objects, is_target_object


class TestLabelFilter:
    """Tests for label membership."""

    def test_drops_other_labels(self, make_object):
        config = FilterConfig(target_labels=["car"])

        assert is_target_object(make_object(label=Label.CAR), config, is_gt=True)
        assert not is_target_object(make_object(label=Label.PEDESTRIAN), config, is_gt=True)

    def test_empty_labels_keep_everything(self, make_object):
        config = FilterConfig(target_labels=[], max_x_position_list=50.0)

        for label in (Label.CAR, Label.ANIMAL, Label.UNKNOWN):
            assert is_target_object(make_object(label=label), config, is_gt=True)

    def test_keeps_input_order(self, make_object):
        config = FilterConfig(target_labels=["car"])
        objects = [
            make_object(x=1.0),
            make_object(x=2.0, label=Label.BUS),
            make_object(x=3.0),
        ]

        kept = filter_objects(objects, config, is_gt=True)

        assert [obj.position[0] for obj in kept] == [1.0, 3.0]


class TestPositionFilter:
    """Tests for position and distance bounds."""

    def test_position_bound_is_strict(self, make_object):
        config = FilterConfig(target_labels=["car"], max_x_position_list=[10.0], max_y_position_list=[5.0])

        assert is_target_object(make_object(x=9.9), config, is_gt=True)
        assert not is_target_object(make_object(x=10.0), config, is_gt=True)
        assert not is_target_object(make_object(x=-10.0), config, is_gt=True)
        assert not is_target_object(make_object(x=0.0, y=5.0), config, is_gt=True)

    def test_per_label_bounds(self, make_object):
        config = FilterConfig(
            target_labels=["car", "pedestrian"],
            max_x_position_list=[50.0, 20.0],
        )

        assert is_target_object(make_object(x=30.0, label=Label.CAR), config, is_gt=True)
        assert not is_target_object(make_object(x=30.0, label=Label.PEDESTRIAN), config, is_gt=True)

    def test_distance_band(self, make_object):
        config = FilterConfig(target_labels=["car"], min_distance_list=5.0, max_distance_list=20.0)

        assert not is_target_object(make_object(x=3.0), config, is_gt=True)
        assert is_target_object(make_object(x=3.0, y=4.0), config, is_gt=True)
        assert is_target_object(make_object(x=12.0, y=16.0), config, is_gt=True)
        assert not is_target_object(make_object(x=21.0), config, is_gt=True)


class TestObjectAttributeFilter:
    """Tests for point count, uuid and confidence checks."""

    def test_min_point_number(self, make_object):
        config = FilterConfig(target_labels=["car"], min_point_numbers=[5])

        assert not is_target_object(make_object(pointcloud_num=4), config, is_gt=True)
        assert is_target_object(make_object(pointcloud_num=5), config, is_gt=True)
        # No count recorded: check skipped
        assert is_target_object(make_object(), config, is_gt=True)

    def test_uuid_applies_to_ground_truth_only(self, make_object):
        config = FilterConfig(target_labels=["car"], target_uuids=["a"])

        assert is_target_object(make_object(uuid="a"), config, is_gt=True)
        assert not is_target_object(make_object(uuid="b"), config, is_gt=True)
        assert is_target_object(make_object(uuid="b", confidence=0.9), config, is_gt=False)

    def test_confidence_applies_to_estimates_only(self, make_object):
        config = FilterConfig(target_labels=["car"], confidence_threshold_list=[0.5])

        assert not is_target_object(make_object(confidence=0.3), config, is_gt=False)
        assert is_target_object(make_object(confidence=0.5), config, is_gt=False)
        assert is_target_object(make_object(), config, is_gt=True)

    @pytest.mark.parametrize("is_gt", [True, False])
    def test_all_checks_pass(self, make_object, is_gt):
        config = FilterConfig(
            target_labels=["car"],
            max_x_position_list=[100.0],
            max_y_position_list=[100.0],
            max_distance_list=[100.0],
            min_distance_list=[0.0],
            min_point_numbers=[0],
            confidence_threshold_list=[0.1],
        )
        obj = make_object(confidence=None if is_gt else 0.8, pointcloud_num=10)

        assert is_target_object(obj, config, is_gt=is_gt)
