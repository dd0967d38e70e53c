"""Unit table and unit detection for metric names."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING

import yaml

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

SUPPORTED_SCHEMA_VERSIONS: frozenset[int] = frozenset({1})

_DEFAULT_UNITS: dict[str, str] = {
    # Base units.
    "amperes": "amperes",
    "bytes": "bytes",
    "celsius": "celsius",
    "grams": "grams",
    "joules": "joules",
    "kelvin": "kelvin",
    "meters": "meters",
    "metres": "metres",
    "seconds": "seconds",
    "volts": "volts",
    # Time.
    "minutes": "seconds",
    "hours": "seconds",
    "days": "seconds",
    "weeks": "seconds",
    # Temperature.
    "kelvins": "kelvin",
    "fahrenheit": "celsius",
    "rankine": "celsius",
    # Length.
    "inches": "meters",
    "yards": "meters",
    "miles": "meters",
    # Information.
    "bits": "bytes",
    # Energy.
    "calories": "joules",
    # Mass.
    "pounds": "grams",
    "ounces": "grams",
}

_DEFAULT_PREFIXES: tuple[str, ...] = (
    "pico",
    "nano",
    "micro",
    "milli",
    "centi",
    "deci",
    "deca",
    "hecto",
    "kilo",
    "kibi",
    "mega",
    "mibi",
    "giga",
    "gibi",
    "tera",
    "tebi",
    "peta",
    "pebi",
)

_DEFAULT_ABBREVIATIONS: tuple[str, ...] = (
    "s",
    "ms",
    "us",
    "ns",
    "sec",
    "b",
    "kb",
    "mb",
    "gb",
    "tb",
    "pb",
    "m",
    "h",
    "d",
)

# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class UnitTable:
    """Known units, magnitude prefixes and discouraged abbreviations.

    ``units`` maps each unit word to the base unit of its dimension.  Its
    iteration order is the search order used by :func:`detect_unit`.
    """

    units: Mapping[str, str]
    prefixes: tuple[str, ...]
    abbreviations: tuple[str, ...]


DEFAULT_UNIT_TABLE = UnitTable(
    units=MappingProxyType(dict(_DEFAULT_UNITS)),
    prefixes=_DEFAULT_PREFIXES,
    abbreviations=_DEFAULT_ABBREVIATIONS,
)

# ---------------------------------------------------------------------------
# Detection
# ---------------------------------------------------------------------------


def detect_unit(name: str, table: UnitTable = DEFAULT_UNIT_TABLE) -> tuple[str, str, bool]:
    """Find the unit encoded in *name*.

    Returns ``(unit, base, found)`` where *unit* includes its magnitude
    prefix, e.g. ``("milliseconds", "seconds", True)``.

    The first match wins.  Units are tried in table order, then the bare unit
    before each prefix in table order, then segments left to right.  A name
    matching several unit/prefix combinations therefore reports whichever
    table entry comes first, not the most specific one.
    """
    segments = name.split("_")
    for unit, base in table.units.items():
        for prefix in ("", *table.prefixes):
            candidate = prefix + unit
            for segment in segments:
                if segment == candidate:
                    return candidate, base, True
    return "", "", False


# ---------------------------------------------------------------------------
# YAML loading
# ---------------------------------------------------------------------------


def check_schema_version(version: object, context: str) -> None:
    """Raise ``ValueError`` unless *version* is a supported schema version."""
    if version is None:
        msg = f"{context}: missing required 'version' field"
        raise ValueError(msg)
    # bool is an int subclass; ``true`` must not pass as version 1.
    if (
        not isinstance(version, int)
        or isinstance(version, bool)
        or version not in SUPPORTED_SCHEMA_VERSIONS
    ):
        expected = sorted(SUPPORTED_SCHEMA_VERSIONS)
        msg = f"{context}: unsupported version {version!r}, expected one of {expected}"
        raise ValueError(msg)


def _parse_str_list(data: dict[str, object], key: str, default: tuple[str, ...]) -> tuple[str, ...]:
    raw = data.get(key)
    if raw is None:
        return default
    if not isinstance(raw, list):
        msg = f"units file: '{key}' must be a list"
        raise ValueError(msg)
    for idx, value in enumerate(raw):
        if not isinstance(value, str) or not value:
            msg = f"units file: '{key}' entry at index {idx} must be a non-empty string"
            raise ValueError(msg)
    return tuple(raw)


def load_unit_table(path: Path) -> UnitTable:
    """Parse a YAML unit table.

    Expected layout::

        version: 1
        units:
          seconds: seconds
          hours: seconds
        prefixes: [milli, kilo]
        abbreviations: [ms, kb]

    Sections that are omitted keep their default values.  Raises
    ``ValueError`` on schema errors.
    """
    with path.open("r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh)

    if not isinstance(data, dict):
        msg = "units file must be a YAML mapping"
        raise ValueError(msg)

    check_schema_version(data.get("version"), "units file")

    units: Mapping[str, str] = DEFAULT_UNIT_TABLE.units
    units_raw = data.get("units")
    if units_raw is not None:
        if not isinstance(units_raw, dict):
            msg = "units file: 'units' must be a mapping of unit to base unit"
            raise ValueError(msg)
        parsed: dict[str, str] = {}
        for unit, base in units_raw.items():
            if not isinstance(unit, str) or not unit:
                msg = f"units file: unit {unit!r} must be a non-empty string"
                raise ValueError(msg)
            if not isinstance(base, str) or not base:
                msg = f"units file: unit '{unit}' must map to a non-empty base unit"
                raise ValueError(msg)
            parsed[unit] = base
        for unit, base in parsed.items():
            if base not in parsed:
                logger.warning("Base unit %r of %r is not itself a listed unit", base, unit)
        units = MappingProxyType(parsed)

    table = UnitTable(
        units=units,
        prefixes=_parse_str_list(data, "prefixes", DEFAULT_UNIT_TABLE.prefixes),
        abbreviations=_parse_str_list(data, "abbreviations", DEFAULT_UNIT_TABLE.abbreviations),
    )
    logger.debug(
        "Loaded unit table from %s: %d units, %d prefixes, %d abbreviations",
        path,
        len(table.units),
        len(table.prefixes),
        len(table.abbreviations),
    )
    return table
