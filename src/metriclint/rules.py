"""Individual lint checks.

Every check is a pure function returning a (possibly empty) list of issue
messages, so that results can be concatenated in evaluation order.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from metriclint.descriptor import MetricKind
from metriclint.units import DEFAULT_UNIT_TABLE, UnitTable, detect_unit

if TYPE_CHECKING:
    from collections.abc import Iterable

# ---------------------------------------------------------------------------
# Messages
# ---------------------------------------------------------------------------

MSG_NO_HELP = "no help text"
MSG_RESERVED_CHARS = 'metric names should not contain ":"'
MSG_METRIC_CAMEL_CASE = 'metric names should be written in "snake_case" not "camelCase"'
MSG_LABEL_CAMEL_CASE = 'label names should be written in "snake_case" not "camelCase"'
MSG_ABBREVIATED_UNITS = "metric names should not contain abbreviated units"
MSG_COUNTER_TOTAL = 'counter metrics should have "_total" suffix'
MSG_NON_COUNTER_TOTAL = 'non-counter metrics should not have "_total" suffix'
MSG_NON_HISTOGRAM_BUCKET = 'non-histogram metrics should not have "_bucket" suffix'
MSG_NON_HISTOGRAM_SUMMARY_COUNT = (
    'non-histogram and non-summary metrics should not have "_count" suffix'
)
MSG_NON_HISTOGRAM_SUMMARY_SUM = 'non-histogram and non-summary metrics should not have "_sum" suffix'
MSG_NON_HISTOGRAM_LE = 'non-histogram metrics should not have "le" label'
MSG_NON_SUMMARY_QUANTILE = 'non-summary metrics should not have "quantile" label'

_CAMEL_CASE = re.compile(r"[a-z][A-Z]")


def _tokens(name: str) -> list[str]:
    return name.lower().split("_")


# ---------------------------------------------------------------------------
# Lexical checks
# ---------------------------------------------------------------------------


def lint_help(help_text: str) -> list[str]:
    """Whitespace-only help text counts as present."""
    if len(help_text) == 0:
        return [MSG_NO_HELP]
    return []


def lint_reserved_chars(name: str) -> list[str]:
    if ":" in name:
        return [MSG_RESERVED_CHARS]
    return []


def lint_metric_camel_case(name: str) -> list[str]:
    if _CAMEL_CASE.search(name):
        return [MSG_METRIC_CAMEL_CASE]
    return []


def lint_label_camel_case(label_names: Iterable[str]) -> list[str]:
    """One issue per offending label."""
    return [MSG_LABEL_CAMEL_CASE for label in label_names if _CAMEL_CASE.search(label)]


def lint_units(name: str, table: UnitTable = DEFAULT_UNIT_TABLE) -> list[str]:
    unit, base, found = detect_unit(name, table)
    if found and unit != base:
        return [f'use base unit "{base}" instead of "{unit}"']
    return []


def lint_type_in_name(name: str, kind: MetricKind) -> list[str]:
    """Flag names that repeat their own metric kind, e.g. ``jobs_counter_total``."""
    if kind is MetricKind.UNTYPED:
        return []
    if kind.value in _tokens(name):
        return [f'metric names should not include type "{kind.value}"']
    return []


def lint_abbreviations(name: str, table: UnitTable = DEFAULT_UNIT_TABLE) -> list[str]:
    tokens = set(_tokens(name))
    if any(abbr.lower() in tokens for abbr in table.abbreviations):
        return [MSG_ABBREVIATED_UNITS]
    return []


# ---------------------------------------------------------------------------
# Suffix checks
# ---------------------------------------------------------------------------


def lint_counter_total(name: str) -> list[str]:
    if not name.endswith("_total"):
        return [MSG_COUNTER_TOTAL]
    return []


def lint_non_counter_total(name: str) -> list[str]:
    if name.endswith("_total"):
        return [MSG_NON_COUNTER_TOTAL]
    return []


def lint_non_histogram_bucket(name: str) -> list[str]:
    if name.endswith("_bucket"):
        return [MSG_NON_HISTOGRAM_BUCKET]
    return []


def lint_non_histogram_summary_count(name: str) -> list[str]:
    if name.endswith("_count"):
        return [MSG_NON_HISTOGRAM_SUMMARY_COUNT]
    return []


def lint_non_histogram_summary_sum(name: str) -> list[str]:
    if name.endswith("_sum"):
        return [MSG_NON_HISTOGRAM_SUMMARY_SUM]
    return []


# ---------------------------------------------------------------------------
# Reserved label checks
# ---------------------------------------------------------------------------


def lint_non_histogram_le(label_names: Iterable[str]) -> list[str]:
    return [MSG_NON_HISTOGRAM_LE for label in label_names if label == "le"]


def lint_non_summary_quantile(label_names: Iterable[str]) -> list[str]:
    return [MSG_NON_SUMMARY_QUANTILE for label in label_names if label == "quantile"]
