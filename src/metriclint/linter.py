"""Linter orchestrator: pick the checks for a metric kind, evaluate, format results."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from metriclint import rules
from metriclint.descriptor import MetricKind
from metriclint.units import DEFAULT_UNIT_TABLE, UnitTable

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from metriclint.descriptor import MetricDescriptor

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class UnsupportedKindError(ValueError):
    """Raised when a metric kind has no lint rules (a caller bug, not a finding)."""


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass
class LintResult:
    """Issues found for a single metric."""

    metric_name: str
    issues: list[str] = field(default_factory=list)

    def render(self) -> str:
        """Return ``<metric_name>:<issue>,<issue>,...``."""
        return self.metric_name + ":" + ",".join(self.issues)

    def __str__(self) -> str:
        return self.render()


@dataclass(frozen=True)
class _Subject:
    """What the checks look at: the descriptor reduced to lintable fields."""

    name: str
    help: str
    const_label_names: tuple[str, ...]
    label_names: tuple[str, ...]
    kind: MetricKind
    table: UnitTable


# ---------------------------------------------------------------------------
# Check composition
# ---------------------------------------------------------------------------


def _help(s: _Subject) -> list[str]:
    return rules.lint_help(s.help)


def _reserved_chars(s: _Subject) -> list[str]:
    return rules.lint_reserved_chars(s.name)


def _name_camel_case(s: _Subject) -> list[str]:
    return rules.lint_metric_camel_case(s.name)


def _const_camel_case(s: _Subject) -> list[str]:
    return rules.lint_label_camel_case(s.const_label_names)


def _units(s: _Subject) -> list[str]:
    return rules.lint_units(s.name, s.table)


def _type_in_name(s: _Subject) -> list[str]:
    return rules.lint_type_in_name(s.name, s.kind)


def _abbreviations(s: _Subject) -> list[str]:
    return rules.lint_abbreviations(s.name, s.table)


_COMMON_CHECKS: tuple[Callable[[_Subject], list[str]], ...] = (
    _help,
    _reserved_chars,
    _name_camel_case,
    _const_camel_case,
    _units,
    _type_in_name,
    _abbreviations,
)


def _const_le(s: _Subject) -> list[str]:
    return rules.lint_non_histogram_le(s.const_label_names)


def _const_quantile(s: _Subject) -> list[str]:
    return rules.lint_non_summary_quantile(s.const_label_names)


def _bucket(s: _Subject) -> list[str]:
    return rules.lint_non_histogram_bucket(s.name)


def _count(s: _Subject) -> list[str]:
    return rules.lint_non_histogram_summary_count(s.name)


def _sum(s: _Subject) -> list[str]:
    return rules.lint_non_histogram_summary_sum(s.name)


def _total_required(s: _Subject) -> list[str]:
    return rules.lint_counter_total(s.name)


def _total_forbidden(s: _Subject) -> list[str]:
    return rules.lint_non_counter_total(s.name)


def _vector_le(s: _Subject) -> list[str]:
    return rules.lint_non_histogram_le(s.label_names)


def _vector_quantile(s: _Subject) -> list[str]:
    return rules.lint_non_summary_quantile(s.label_names)


def _vector_camel_case(s: _Subject) -> list[str]:
    return rules.lint_label_camel_case(s.label_names)


KIND_CHECKS: dict[MetricKind, tuple[Callable[[_Subject], list[str]], ...]] = {
    MetricKind.COUNTER: (
        *_COMMON_CHECKS,
        _const_le,
        _const_quantile,
        _bucket,
        _count,
        _sum,
        _total_required,
    ),
    MetricKind.GAUGE: (
        *_COMMON_CHECKS,
        _const_le,
        _const_quantile,
        _bucket,
        _count,
        _sum,
        _total_forbidden,
    ),
    MetricKind.HISTOGRAM: (
        *_COMMON_CHECKS,
        _const_quantile,
        _total_forbidden,
    ),
    MetricKind.SUMMARY: (
        *_COMMON_CHECKS,
        _const_le,
        _bucket,
        _total_forbidden,
    ),
}

VECTOR_CHECKS: dict[MetricKind, tuple[Callable[[_Subject], list[str]], ...]] = {
    MetricKind.COUNTER: (_vector_le, _vector_quantile, _vector_camel_case),
    MetricKind.GAUGE: (_vector_le, _vector_quantile, _vector_camel_case),
    MetricKind.HISTOGRAM: (_vector_quantile, _vector_camel_case),
    MetricKind.SUMMARY: (_vector_le, _vector_camel_case),
}


def _checks_for(
    kind: MetricKind, *, vector: bool
) -> tuple[Callable[[_Subject], list[str]], ...]:
    """Return the ordered checks for *kind*, raising on unsupported kinds."""
    try:
        checks = KIND_CHECKS[kind]
    except (KeyError, TypeError):
        supported = sorted(k.value for k in KIND_CHECKS)
        msg = f"unsupported metric kind {kind!r}, must be one of {supported}"
        raise UnsupportedKindError(msg) from None
    if vector:
        checks = checks + VECTOR_CHECKS[kind]
    return checks


# ---------------------------------------------------------------------------
# Main entry points
# ---------------------------------------------------------------------------


def _lint(
    descriptor: MetricDescriptor,
    kind: MetricKind,
    label_names: Sequence[str] | None,
    table: UnitTable,
) -> LintResult:
    checks = _checks_for(kind, vector=label_names is not None)
    subject = _Subject(
        name=descriptor.fq_name,
        help=descriptor.help,
        const_label_names=tuple(sorted(descriptor.const_labels)),
        label_names=tuple(label_names or ()),
        kind=kind,
        table=table,
    )

    result = LintResult(metric_name=subject.name)
    for check in checks:
        result.issues.extend(check(subject))

    logger.debug("Linted %s %r: %d issue(s)", kind.value, result.metric_name, len(result.issues))
    return result


def lint(
    descriptor: MetricDescriptor,
    label_names: Sequence[str] | None = None,
    *,
    table: UnitTable = DEFAULT_UNIT_TABLE,
) -> LintResult:
    """Lint *descriptor* according to its own ``kind``.

    When *label_names* is ``None`` the descriptor's ``label_names`` are used;
    if those are ``None`` too the metric is linted as a non-vector metric.

    Raises
    ------
    UnsupportedKindError
        When ``descriptor.kind`` is ``UNTYPED`` or otherwise unsupported.
    """
    if label_names is None:
        label_names = descriptor.label_names
    return _lint(descriptor, descriptor.kind, label_names, table)


def lint_counter(
    descriptor: MetricDescriptor, *, table: UnitTable = DEFAULT_UNIT_TABLE
) -> LintResult:
    return _lint(descriptor, MetricKind.COUNTER, None, table)


def lint_counter_vector(
    descriptor: MetricDescriptor,
    label_names: Sequence[str],
    *,
    table: UnitTable = DEFAULT_UNIT_TABLE,
) -> LintResult:
    return _lint(descriptor, MetricKind.COUNTER, label_names, table)


def lint_gauge(descriptor: MetricDescriptor, *, table: UnitTable = DEFAULT_UNIT_TABLE) -> LintResult:
    return _lint(descriptor, MetricKind.GAUGE, None, table)


def lint_gauge_vector(
    descriptor: MetricDescriptor,
    label_names: Sequence[str],
    *,
    table: UnitTable = DEFAULT_UNIT_TABLE,
) -> LintResult:
    return _lint(descriptor, MetricKind.GAUGE, label_names, table)


def lint_histogram(
    descriptor: MetricDescriptor, *, table: UnitTable = DEFAULT_UNIT_TABLE
) -> LintResult:
    return _lint(descriptor, MetricKind.HISTOGRAM, None, table)


def lint_histogram_vector(
    descriptor: MetricDescriptor,
    label_names: Sequence[str],
    *,
    table: UnitTable = DEFAULT_UNIT_TABLE,
) -> LintResult:
    return _lint(descriptor, MetricKind.HISTOGRAM, label_names, table)


def lint_summary(
    descriptor: MetricDescriptor, *, table: UnitTable = DEFAULT_UNIT_TABLE
) -> LintResult:
    return _lint(descriptor, MetricKind.SUMMARY, None, table)


def lint_summary_vector(
    descriptor: MetricDescriptor,
    label_names: Sequence[str],
    *,
    table: UnitTable = DEFAULT_UNIT_TABLE,
) -> LintResult:
    return _lint(descriptor, MetricKind.SUMMARY, label_names, table)


# ---------------------------------------------------------------------------
# Formatters
# ---------------------------------------------------------------------------


def format_rich(results: Sequence[LintResult]) -> str:
    """Format lint results as human-readable text.

    Example output with issues::

        x http_request_duration_hours
          use base unit "seconds" instead of "hours"

        1 issue found in 1 of 3 metrics

    Example output without issues::

        No issues found (3 metrics checked)
    """
    lines: list[str] = []
    flagged = [r for r in results if r.issues]
    metric_noun = "metric" if len(results) == 1 else "metrics"

    if not flagged:
        lines.append(f"✓ No issues found ({len(results)} {metric_noun} checked)")
        return "\n".join(lines)

    for r in flagged:
        lines.append(f"✗ {r.metric_name}")
        for issue in r.issues:
            lines.append(f"  {issue}")
        lines.append("")

    count = sum(len(r.issues) for r in flagged)
    noun = "issue" if count == 1 else "issues"
    lines.append(f"{count} {noun} found in {len(flagged)} of {len(results)} {metric_noun}")
    return "\n".join(lines)


def format_json(results: Sequence[LintResult]) -> str:
    """Format lint results as structured JSON with ``metrics`` and ``summary``."""
    output: dict[str, object] = {
        "metrics": [{"metric_name": r.metric_name, "issues": list(r.issues)} for r in results],
        "summary": {
            "metrics_checked": len(results),
            "metrics_with_issues": sum(1 for r in results if r.issues),
            "issues_count": sum(len(r.issues) for r in results),
        },
    }
    return json.dumps(output, indent=2)


def format_porcelain(results: Sequence[LintResult]) -> str:
    """One rendered line per metric with issues; empty string when clean."""
    return "\n".join(r.render() for r in results if r.issues)
