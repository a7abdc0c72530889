"""
Scenario file loading.

Expected layout (keys outside these are ignored):

    ScenarioName: sample
    Evaluation:
      Conditions:
        PassRate: 99.0
      PerceptionEvaluationConfig:
        evaluation_config_dict:
          evaluation_task: detection
          frame_id: base_link
          target_labels: [car, pedestrian]
          max_x_position: 100.0
          ...
          center_distance_thresholds: [1.0]
      CriticalObjectFilterConfig:
        target_labels: [car, pedestrian]
        max_x_position_list: [100.0, 100.0]
        ...
      PerceptionPassFailConfig:
        target_labels: [car, pedestrian]
        plane_distance_threshold_list: [2.0, 2.0]
"""

from pathlib import Path
from typing import Any, Dict, Optional, Union

from ..errors import ConfigurationError
from ..utils.config_loader import ConfigLoader, get_nested
from .evaluation_config import PassFailConfig, PerceptionEvaluationConfig
from .filter_config import FilterConfig
from .metrics_config import MetricsConfig


def parse_scenario(scenario: Dict[str, Any]) -> PerceptionEvaluationConfig:
    """
    Build a validated configuration from a parsed scenario mapping.

    Raises:
        ConfigurationError: Missing sections or invalid values.
    """
    params = get_nested(scenario, "Evaluation.PerceptionEvaluationConfig.evaluation_config_dict")
    if not isinstance(params, dict):
        raise ConfigurationError(
            "Scenario is missing Evaluation.PerceptionEvaluationConfig.evaluation_config_dict"
        )

    metrics_config = MetricsConfig.from_dict(params)
    filter_config = FilterConfig.from_dict(params)

    critical_params = get_nested(scenario, "Evaluation.CriticalObjectFilterConfig")
    critical_filter_config = (
        FilterConfig.from_dict(critical_params) if isinstance(critical_params, dict) else None
    )

    pass_fail_params = get_nested(scenario, "Evaluation.PerceptionPassFailConfig")
    pass_rate = get_nested(scenario, "Evaluation.Conditions.PassRate", 100.0)
    pass_fail_config = (
        PassFailConfig.from_dict(pass_fail_params, pass_rate=pass_rate)
        if isinstance(pass_fail_params, dict)
        else None
    )

    return PerceptionEvaluationConfig(
        metrics_config=metrics_config,
        filter_config=filter_config,
        critical_object_filter_config=critical_filter_config,
        pass_fail_config=pass_fail_config,
        frame_id=params.get("frame_id", "base_link"),
        name=str(scenario.get("ScenarioName", "")),
    )


def load_scenario(
    scenario_path: Union[str, Path],
    overrides: Optional[Dict[str, Any]] = None,
    loader: Optional[ConfigLoader] = None,
) -> PerceptionEvaluationConfig:
    """
    Load and validate a scenario YAML file.

    Args:
        scenario_path: Path to the scenario file.
        overrides: Optional mapping deep-merged over the file contents.
        loader: ConfigLoader to use (a fresh one by default).

    Returns:
        Validated PerceptionEvaluationConfig.
    """
    loader = loader or ConfigLoader()
    scenario = loader.load(scenario_path)

    if overrides:
        scenario = loader.merge(scenario, overrides)

    return parse_scenario(scenario)
