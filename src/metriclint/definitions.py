"""Load metric definitions from a YAML file."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import yaml

from metriclint.descriptor import SUPPORTED_KINDS, MetricDescriptor, MetricKind
from metriclint.units import check_schema_version

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

_VALID_KINDS: frozenset[str] = frozenset(k.value for k in SUPPORTED_KINDS)


def _parse_str_field(data: dict[str, object], key: str, context: str) -> str:
    raw = data.get(key, "")
    if raw is None:
        return ""
    if not isinstance(raw, str):
        msg = f"{context}: '{key}' must be a string"
        raise ValueError(msg)
    return raw


def _parse_metric(data: dict[str, object], context: str) -> MetricDescriptor:
    """Parse one entry of the ``metrics`` list into a :class:`MetricDescriptor`."""
    name = data.get("name")
    if name is None or not isinstance(name, str) or not name.strip():
        msg = f"{context}: missing required 'name' field"
        raise ValueError(msg)
    context = f"{context} ('{name}')"

    kind_raw = data.get("kind")
    if kind_raw is None:
        msg = f"{context}: missing required 'kind' field"
        raise ValueError(msg)
    kind_str = str(kind_raw).lower()
    if kind_str not in _VALID_KINDS:
        msg = f"{context}: invalid kind '{kind_raw}', must be one of {sorted(_VALID_KINDS)}"
        raise ValueError(msg)

    const_labels_raw = data.get("const_labels", {})
    if const_labels_raw is None:
        const_labels_raw = {}
    if not isinstance(const_labels_raw, dict):
        msg = f"{context}: 'const_labels' must be a mapping"
        raise ValueError(msg)
    const_labels: dict[str, str] = {}
    for label, value in const_labels_raw.items():
        if not isinstance(label, str) or not label:
            msg = f"{context}: const label name {label!r} must be a non-empty string"
            raise ValueError(msg)
        # YAML scalars only; null, lists and mappings are rejected.
        if value is None or not isinstance(value, (str, int, float)):
            msg = f"{context}: const label '{label}' must have a scalar value"
            raise ValueError(msg)
        const_labels[label] = str(value)

    # A present-but-empty label_names list still marks a vector metric.
    label_names: tuple[str, ...] | None = None
    label_names_raw = data.get("label_names")
    if label_names_raw is not None:
        if not isinstance(label_names_raw, list):
            msg = f"{context}: 'label_names' must be a list"
            raise ValueError(msg)
        for idx, label in enumerate(label_names_raw):
            if not isinstance(label, str) or not label:
                msg = f"{context}: 'label_names' entry at index {idx} must be a non-empty string"
                raise ValueError(msg)
        label_names = tuple(label_names_raw)

    return MetricDescriptor(
        name=name,
        namespace=_parse_str_field(data, "namespace", context),
        subsystem=_parse_str_field(data, "subsystem", context),
        help=_parse_str_field(data, "help", context),
        const_labels=const_labels,
        kind=MetricKind(kind_str),
        label_names=label_names,
    )


def load_definitions(path: Path) -> list[MetricDescriptor]:
    """Parse a metric definitions file.

    Expected layout::

        version: 1
        metrics:
          - name: requests_total
            kind: counter
            namespace: shop
            subsystem: http
            help: Requests served.
            const_labels: { region: eu }
            label_names: [method, code]

    Raises ``ValueError`` on schema errors.
    """
    with path.open("r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh)

    if not isinstance(data, dict):
        msg = f"{path.name} must be a YAML mapping"
        raise ValueError(msg)

    check_schema_version(data.get("version"), path.name)

    metrics_data = data.get("metrics", [])
    if not isinstance(metrics_data, list):
        msg = f"{path.name}: 'metrics' must be a list"
        raise ValueError(msg)

    descriptors: list[MetricDescriptor] = []
    for idx, metric_data in enumerate(metrics_data):
        context = f"{path.name}: metric at index {idx}"
        if not isinstance(metric_data, dict):
            msg = f"{context} must be a mapping"
            raise ValueError(msg)
        descriptors.append(_parse_metric(metric_data, context))

    if not descriptors:
        logger.warning("No metrics defined in %s", path)
    logger.debug("Loaded %d metric definition(s) from %s", len(descriptors), path)
    return descriptors
