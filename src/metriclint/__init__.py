"""metriclint - naming and documentation lint for metric definitions."""

__version__ = "0.1.0"

from metriclint.descriptor import MetricDescriptor, MetricKind, build_fq_name  # noqa: E402
from metriclint.linter import (  # noqa: E402
    LintResult,
    UnsupportedKindError,
    format_json,
    format_porcelain,
    format_rich,
    lint,
    lint_counter,
    lint_counter_vector,
    lint_gauge,
    lint_gauge_vector,
    lint_histogram,
    lint_histogram_vector,
    lint_summary,
    lint_summary_vector,
)
from metriclint.units import DEFAULT_UNIT_TABLE, UnitTable, detect_unit, load_unit_table  # noqa: E402

__all__ = [
    "DEFAULT_UNIT_TABLE",
    "LintResult",
    "MetricDescriptor",
    "MetricKind",
    "UnitTable",
    "UnsupportedKindError",
    "__version__",
    "build_fq_name",
    "detect_unit",
    "format_json",
    "format_porcelain",
    "format_rich",
    "lint",
    "lint_counter",
    "lint_counter_vector",
    "lint_gauge",
    "lint_gauge_vector",
    "lint_histogram",
    "lint_histogram_vector",
    "lint_summary",
    "lint_summary_vector",
    "load_unit_table",
]
