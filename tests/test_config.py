"""Tests for configuration validation and scenario loading."""

import pytest
import yaml

from perception_eval.common import EvaluationTask, FrameID, Label, LabelConverter
from perception_eval.config import (
    FilterConfig,
    MetricsConfig,
    PassFailConfig,
    PerceptionEvaluationConfig,
    load_scenario,
    parse_scenario,
)
from perception_eval.errors import ConfigurationError, FilterError
from perception_eval.matching import MatchingMode
from perception_eval.utils import ConfigLoader, get_nested


@pytest.fixture
def scenario_dict():
    return {
        "ScenarioName": "unit_scenario",
        "Evaluation": {
            "Conditions": {"PassRate": 90.0},
            "PerceptionEvaluationConfig": {
                "evaluation_config_dict": {
                    "evaluation_task": "detection",
                    "frame_id": "base_link",
                    "target_labels": ["car", "pedestrian"],
                    "max_x_position": 100.0,
                    "max_y_position": 100.0,
                    "center_distance_thresholds": [[1.0, 0.5]],
                    "plane_distance_thresholds": [2.0],
                    "iou_bev_thresholds": [0.5],
                    "iou_3d_thresholds": [0.5],
                },
            },
            "CriticalObjectFilterConfig": {
                "target_labels": ["car", "pedestrian"],
                "max_x_position_list": [30.0, 30.0],
                "max_y_position_list": [30.0, 30.0],
            },
            "PerceptionPassFailConfig": {
                "target_labels": ["car", "pedestrian"],
                "plane_distance_threshold_list": [2.0, 3.0],
            },
        },
    }


class TestLabels:
    """Tests for label conversion."""

    def test_aliases(self):
        converter = LabelConverter()

        assert converter.convert("Car") is Label.CAR
        assert converter.convert("human.pedestrian.adult") is Label.PEDESTRIAN
        assert converter.convert("spaceship") is Label.UNKNOWN

    def test_strict_unknown(self):
        with pytest.raises(ConfigurationError):
            LabelConverter(strict=True).convert("spaceship")

    def test_task_and_frame_names(self):
        assert EvaluationTask.from_name("Detection") is EvaluationTask.DETECTION
        assert FrameID.from_name("BaseLink") is FrameID.BASE_LINK
        with pytest.raises(ConfigurationError):
            FrameID.from_name("odom")


class TestFilterConfig:
    """Tests for FilterConfig validation."""

    def test_scalar_broadcast(self):
        config = FilterConfig(target_labels=["car", "bus"], max_x_position_list=50.0)

        assert config.max_x_positions == {Label.CAR: 50.0, Label.BUS: 50.0}
        assert config.confidence_thresholds is None

    def test_length_mismatch(self):
        with pytest.raises(ConfigurationError):
            FilterConfig(target_labels=["car", "bus"], max_x_position_list=[50.0])

    def test_unknown_label(self):
        with pytest.raises(ConfigurationError):
            FilterConfig(target_labels=["car", "spaceship"])

    def test_negative_bound(self):
        with pytest.raises(FilterError) as excinfo:
            FilterConfig(target_labels=["car"], max_y_position_list=[-1.0])

        assert excinfo.value.label is Label.CAR
        assert excinfo.value.value == -1.0

    def test_inverted_distance_band(self):
        with pytest.raises(FilterError):
            FilterConfig(target_labels=["car"], min_distance_list=[50.0], max_distance_list=[10.0])

    def test_confidence_above_one(self):
        with pytest.raises(FilterError):
            FilterConfig(target_labels=["car"], confidence_threshold_list=[1.5])

    def test_list_without_labels(self):
        with pytest.raises(ConfigurationError):
            FilterConfig(target_labels=[], max_x_position_list=[50.0])


class TestMetricsConfig:
    """Tests for MetricsConfig validation."""

    def test_conditions(self):
        config = MetricsConfig(
            target_labels=["car", "pedestrian"],
            center_distance_thresholds=[1.0, [2.0, 1.0], 1.0],
            iou_3d_thresholds=[0.5],
        )

        modes = [c.mode for c in config.matching_conditions]
        assert modes == [MatchingMode.CENTER_DISTANCE, MatchingMode.CENTER_DISTANCE, MatchingMode.IOU_3D]
        assert config.matching_conditions[1].threshold_for(Label.CAR) == 2.0
        assert len(config.conditions_for(MatchingMode.IOU_3D)) == 1

    def test_empty_threshold_list(self):
        with pytest.raises(ConfigurationError):
            MetricsConfig(target_labels=["car"], center_distance_thresholds=[])

    def test_no_thresholds(self):
        with pytest.raises(ConfigurationError):
            MetricsConfig(target_labels=["car"])

    def test_negative_threshold(self):
        with pytest.raises(ConfigurationError):
            MetricsConfig(target_labels=["car"], iou_2d_thresholds=[-0.5])

    def test_unsupported_task(self):
        with pytest.raises(ConfigurationError):
            MetricsConfig(target_labels=["car"], center_distance_thresholds=[1.0], evaluation_task="tracking")

    def test_unknown_interpolation(self):
        with pytest.raises(ConfigurationError):
            MetricsConfig(target_labels=["car"], center_distance_thresholds=[1.0], interpolation="spline")


class TestPassFailConfig:
    """Tests for PassFailConfig validation."""

    def test_condition(self):
        config = PassFailConfig(["car", "pedestrian"], [2.0, 3.0], pass_rate=95.0)

        assert config.matching_condition.mode is MatchingMode.PLANE_DISTANCE
        assert config.matching_condition.threshold_for(Label.PEDESTRIAN) == 3.0
        assert config.pass_rate == 95.0

    @pytest.mark.parametrize("pass_rate", [-1.0, 101.0])
    def test_invalid_pass_rate(self, pass_rate):
        with pytest.raises(ConfigurationError):
            PassFailConfig(["car"], [2.0], pass_rate=pass_rate)

    def test_missing_thresholds(self):
        with pytest.raises(ConfigurationError):
            PassFailConfig(["car"], None)

    def test_defaults(self):
        metrics = MetricsConfig(target_labels=["car"], center_distance_thresholds=[1.0])
        config = PerceptionEvaluationConfig(metrics_config=metrics, frame_id="map")

        assert config.filter_config.target_labels == [Label.CAR]
        assert config.critical_object_filter_config is config.filter_config
        assert config.frame_id is FrameID.MAP


class TestLabelCoverage:
    """Filters may only keep labels that the section they feed can match."""

    @pytest.fixture
    def metrics(self):
        return MetricsConfig(target_labels=["car", "pedestrian"], center_distance_thresholds=[1.0])

    def test_critical_label_without_pass_fail_threshold(self, metrics):
        with pytest.raises(ConfigurationError) as excinfo:
            PerceptionEvaluationConfig(
                metrics_config=metrics,
                critical_object_filter_config=FilterConfig(target_labels=["car", "pedestrian"]),
                pass_fail_config=PassFailConfig(["car"], [2.0]),
            )

        assert excinfo.value.label is Label.PEDESTRIAN

    def test_critical_filter_falls_back_to_metrics_labels(self, metrics):
        with pytest.raises(ConfigurationError) as excinfo:
            PerceptionEvaluationConfig(
                metrics_config=metrics,
                pass_fail_config=PassFailConfig(["car"], [2.0]),
            )

        assert excinfo.value.label is Label.PEDESTRIAN

    def test_unrestricted_critical_filter(self, metrics):
        with pytest.raises(ConfigurationError):
            PerceptionEvaluationConfig(
                metrics_config=metrics,
                critical_object_filter_config=FilterConfig(target_labels=[]),
                pass_fail_config=PassFailConfig(["car", "pedestrian"], [2.0, 2.0]),
            )

    def test_unrestricted_evaluation_filter(self, metrics):
        with pytest.raises(ConfigurationError):
            PerceptionEvaluationConfig(metrics_config=metrics, filter_config=FilterConfig(target_labels=[]))

    def test_evaluation_filter_label_outside_metrics(self, metrics):
        with pytest.raises(ConfigurationError) as excinfo:
            PerceptionEvaluationConfig(
                metrics_config=metrics,
                filter_config=FilterConfig(target_labels=["car", "bus"]),
            )

        assert excinfo.value.label is Label.BUS

    def test_critical_subset_of_pass_fail(self, metrics):
        config = PerceptionEvaluationConfig(
            metrics_config=metrics,
            critical_object_filter_config=FilterConfig(target_labels=["car"]),
            pass_fail_config=PassFailConfig(["car", "pedestrian"], [2.0, 2.0]),
        )

        assert config.critical_object_filter_config.target_labels == [Label.CAR]

    def test_scenario_mismatch(self, scenario_dict):
        scenario_dict["Evaluation"]["PerceptionPassFailConfig"]["target_labels"] = ["car"]
        scenario_dict["Evaluation"]["PerceptionPassFailConfig"]["plane_distance_threshold_list"] = [2.0]

        with pytest.raises(ConfigurationError):
            parse_scenario(scenario_dict)


class TestScenario:
    """Tests for scenario parsing and loading."""

    def test_parse(self, scenario_dict):
        config = parse_scenario(scenario_dict)

        assert config.name == "unit_scenario"
        assert config.target_labels == [Label.CAR, Label.PEDESTRIAN]
        assert len(config.matching_conditions) == 4
        assert config.pass_fail_config.pass_rate == 90.0
        assert config.critical_object_filter_config.max_x_positions[Label.CAR] == 30.0
        assert config.filter_config.max_x_positions[Label.PEDESTRIAN] == 100.0

    def test_missing_section(self):
        with pytest.raises(ConfigurationError):
            parse_scenario({"Evaluation": {}})

    def test_optional_sections(self, scenario_dict):
        del scenario_dict["Evaluation"]["CriticalObjectFilterConfig"]
        del scenario_dict["Evaluation"]["PerceptionPassFailConfig"]

        config = parse_scenario(scenario_dict)

        assert config.pass_fail_config is None
        assert config.critical_object_filter_config is config.filter_config

    def test_load_from_file(self, tmp_path, scenario_dict):
        path = tmp_path / "scenario.yaml"
        path.write_text(yaml.safe_dump(scenario_dict))

        config = load_scenario(path, overrides={"Evaluation": {"Conditions": {"PassRate": 50.0}}})

        assert config.name == "unit_scenario"
        assert config.pass_fail_config.pass_rate == 50.0

    def test_load_with_include(self, tmp_path, scenario_dict):
        pass_fail = scenario_dict["Evaluation"].pop("PerceptionPassFailConfig")
        (tmp_path / "pass_fail.yaml").write_text(yaml.safe_dump(pass_fail))
        scenario_dict["Evaluation"]["PerceptionPassFailConfig"] = "!include pass_fail.yaml"
        path = tmp_path / "scenario.yaml"
        path.write_text(yaml.safe_dump(scenario_dict))

        config = load_scenario(path)

        assert config.pass_fail_config.matching_condition.threshold_for(Label.PEDESTRIAN) == 3.0

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_scenario(tmp_path / "missing.yaml")

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")

        with pytest.raises(ConfigurationError):
            ConfigLoader().load(path)


class TestConfigLoader:
    """Tests for ConfigLoader helpers."""

    def test_merge(self):
        loader = ConfigLoader()
        merged = loader.merge({"a": {"b": 1, "c": 2}}, {"a": {"c": 3}, "d": 4})

        assert merged == {"a": {"b": 1, "c": 3}, "d": 4}

    def test_get_nested(self):
        config = {"a": {"b": {"c": 5}}}

        assert get_nested(config, "a.b.c") == 5
        assert get_nested(config, "a.x", default="none") == "none"
