"""Tests for metriclint.units - unit detection and unit table loading."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest

from metriclint.units import DEFAULT_UNIT_TABLE, UnitTable, detect_unit, load_unit_table

if TYPE_CHECKING:
    from pathlib import Path


# ---------------------------------------------------------------------------
# TestDetectUnit
# ---------------------------------------------------------------------------


class TestDetectUnit:
    """Tests for detect_unit() - first-match unit search."""

    def test_base_unit(self) -> None:
        assert detect_unit("request_seconds_total") == ("seconds", "seconds", True)

    def test_non_base_unit(self) -> None:
        assert detect_unit("request_hours_total") == ("hours", "seconds", True)

    def test_prefixed_unit(self) -> None:
        assert detect_unit("latency_milliseconds") == ("milliseconds", "seconds", True)

    def test_prefixed_base_unit_is_not_base(self) -> None:
        unit, base, found = detect_unit("payload_kilobytes")
        assert found
        assert unit == "kilobytes"
        assert base == "bytes"

    def test_no_unit(self) -> None:
        assert detect_unit("queue_depth") == ("", "", False)

    def test_segment_must_match_exactly(self) -> None:
        # "secondsish" contains "seconds" but is not a segment match.
        assert detect_unit("uptime_secondsish") == ("", "", False)

    def test_table_order_wins_over_name_order(self) -> None:
        # "minutes" precedes "hours" in the table even though "hours" comes first here.
        assert detect_unit("x_hours_minutes") == ("minutes", "seconds", True)

    def test_earlier_unit_with_prefix_wins(self) -> None:
        # "bytes" (with a prefix) is visited before "hours".
        assert detect_unit("size_kilobytes_hours") == ("kilobytes", "bytes", True)

    def test_custom_table(self) -> None:
        table = UnitTable(units={"fortnights": "seconds"}, prefixes=(), abbreviations=())
        assert detect_unit("sprint_fortnights", table) == ("fortnights", "seconds", True)
        assert detect_unit("sprint_hours", table) == ("", "", False)

    def test_default_table_is_read_only(self) -> None:
        with pytest.raises(TypeError):
            DEFAULT_UNIT_TABLE.units["hours"] = "hours"  # type: ignore[index]


# ---------------------------------------------------------------------------
# TestLoadUnitTable
# ---------------------------------------------------------------------------


class TestLoadUnitTable:
    """Tests for load_unit_table() - YAML parsing and validation."""

    def test_full_table(self, tmp_path: Path) -> None:
        path = tmp_path / "units.yml"
        path.write_text(
            "version: 1\n"
            "units:\n"
            "  seconds: seconds\n"
            "  fortnights: seconds\n"
            "prefixes: [kilo]\n"
            "abbreviations: [fn]\n"
        )
        table = load_unit_table(path)
        assert list(table.units.items()) == [("seconds", "seconds"), ("fortnights", "seconds")]
        assert table.prefixes == ("kilo",)
        assert table.abbreviations == ("fn",)

    def test_omitted_sections_use_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "units.yml"
        path.write_text("version: 1\nprefixes: []\n")
        table = load_unit_table(path)
        assert table.units == DEFAULT_UNIT_TABLE.units
        assert table.prefixes == ()
        assert table.abbreviations == DEFAULT_UNIT_TABLE.abbreviations

    def test_missing_version(self, tmp_path: Path) -> None:
        path = tmp_path / "units.yml"
        path.write_text("units: {}\n")
        with pytest.raises(ValueError, match="missing required 'version'"):
            load_unit_table(path)

    def test_unsupported_version(self, tmp_path: Path) -> None:
        path = tmp_path / "units.yml"
        path.write_text("version: 7\n")
        with pytest.raises(ValueError, match="unsupported version 7"):
            load_unit_table(path)

    def test_not_a_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "units.yml"
        path.write_text("- seconds\n")
        with pytest.raises(ValueError, match="must be a YAML mapping"):
            load_unit_table(path)

    def test_units_must_be_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "units.yml"
        path.write_text("version: 1\nunits: [seconds]\n")
        with pytest.raises(ValueError, match="'units' must be a mapping"):
            load_unit_table(path)

    def test_empty_base_unit(self, tmp_path: Path) -> None:
        path = tmp_path / "units.yml"
        path.write_text('version: 1\nunits:\n  hours: ""\n')
        with pytest.raises(ValueError, match="non-empty base unit"):
            load_unit_table(path)

    def test_prefixes_must_be_list(self, tmp_path: Path) -> None:
        path = tmp_path / "units.yml"
        path.write_text("version: 1\nprefixes: kilo\n")
        with pytest.raises(ValueError, match="'prefixes' must be a list"):
            load_unit_table(path)

    @pytest.mark.parametrize("version", ["[1]", "{a: 1}", "'1'", "true"])
    def test_non_integer_version(self, tmp_path: Path, version: str) -> None:
        path = tmp_path / "units.yml"
        path.write_text(f"version: {version}\n")
        with pytest.raises(ValueError, match="unsupported version"):
            load_unit_table(path)

    def test_non_string_base_unit(self, tmp_path: Path) -> None:
        path = tmp_path / "units.yml"
        path.write_text("version: 1\nunits:\n  hours: [a]\n")
        with pytest.raises(ValueError, match="non-empty base unit"):
            load_unit_table(path)

    def test_non_string_unit(self, tmp_path: Path) -> None:
        path = tmp_path / "units.yml"
        path.write_text("version: 1\nunits:\n  1: seconds\n")
        with pytest.raises(ValueError, match="must be a non-empty string"):
            load_unit_table(path)

    def test_non_string_prefix(self, tmp_path: Path) -> None:
        path = tmp_path / "units.yml"
        path.write_text("version: 1\nprefixes: [kilo, 3]\n")
        with pytest.raises(ValueError, match="'prefixes' entry at index 1"):
            load_unit_table(path)

    def test_warns_on_unlisted_base(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        path = tmp_path / "units.yml"
        path.write_text("version: 1\nunits:\n  fortnights: seconds\n")
        with caplog.at_level(logging.WARNING, logger="metriclint.units"):
            load_unit_table(path)
        assert "fortnights" in caplog.text
