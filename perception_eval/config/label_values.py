"""Per-label configuration arrays."""

from numbers import Number
from typing import Any, Dict, List, Optional, Sequence, Type

from ..common.label import Label
from ..errors import ConfigurationError, PerceptionEvalError

LabelValues = Dict[Label, Any]


def broadcast_label_values(
    name: str,
    values: Any,
    target_labels: Sequence[Label],
) -> Optional[LabelValues]:
    """
    Expand a config entry into a label -> value mapping.

    A scalar applies to every target label. A list must have exactly one
    entry per target label. With no target labels (no label restriction)
    only scalars are accepted and apply to every label.

    Args:
        name: Config key, used in error messages.
        values: None, a scalar or a per-label list.
        target_labels: Labels the list is indexed by.

    Returns:
        Mapping, or None when `values` is None.
    """
    if values is None:
        return None

    labels: List[Label] = list(target_labels) if target_labels else list(Label)

    if isinstance(values, (Number, str)):
        return {label: values for label in labels}

    values = list(values)
    if not target_labels or len(values) != len(target_labels):
        raise ConfigurationError(
            f"{name} must have one entry per target label "
            f"({len(target_labels)} labels)",
            value=values,
        )
    return dict(zip(target_labels, values))


def get_label_value(
    label: Label,
    values: Optional[LabelValues],
    name: str = "value",
    error: Type[PerceptionEvalError] = ConfigurationError,
) -> Any:
    """
    Look up the value configured for `label`.

    Raises:
        `error` if a mapping is configured but has no entry for the label.
    """
    if values is None:
        return None
    if label not in values:
        raise error(f"No {name} configured", label=label)
    return values[label]
