"""Metric descriptors: the plain data the linter consumes."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping


class MetricKind(enum.Enum):
    """Kinds of metric instruments.

    ``UNTYPED`` exists so that callers can describe a metric whose kind is not
    known; the linter refuses to dispatch on it.
    """

    COUNTER = "counter"
    GAUGE = "gauge"
    HISTOGRAM = "histogram"
    SUMMARY = "summary"
    UNTYPED = "untyped"


SUPPORTED_KINDS: frozenset[MetricKind] = frozenset(
    {MetricKind.COUNTER, MetricKind.GAUGE, MetricKind.HISTOGRAM, MetricKind.SUMMARY}
)


@dataclass(frozen=True)
class MetricDescriptor:
    """Definition-time metadata of a single metric.

    ``label_names`` holds the dynamic label names of a vector metric, in
    declaration order.  ``None`` means the metric is not a vector.
    """

    name: str
    namespace: str = ""
    subsystem: str = ""
    help: str = ""
    const_labels: Mapping[str, str] = field(default_factory=dict, hash=False)
    kind: MetricKind = MetricKind.UNTYPED
    label_names: tuple[str, ...] | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "const_labels", MappingProxyType(dict(self.const_labels)))
        if self.label_names is not None:
            object.__setattr__(self, "label_names", tuple(self.label_names))

    @property
    def fq_name(self) -> str:
        return build_fq_name(self.namespace, self.subsystem, self.name)


def build_fq_name(namespace: str, subsystem: str, name: str) -> str:
    """Join *namespace*, *subsystem* and *name* with underscores.

    Empty components are skipped.  An empty *name* yields an empty result,
    since a metric without a name has no fully-qualified name at all.
    """
    if not name:
        return ""
    return "_".join(part for part in (namespace, subsystem, name) if part)
