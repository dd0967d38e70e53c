"""Shared test fixtures for metriclint."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture()
def definitions_file(tmp_path: Path) -> Path:
    """Write a small definitions file with one clean and one flagged metric."""
    path = tmp_path / "metrics.yml"
    path.write_text(
        "version: 1\n"
        "metrics:\n"
        "  - name: requests_total\n"
        "    kind: counter\n"
        "    namespace: shop\n"
        "    subsystem: http\n"
        "    help: Requests served.\n"
        "    label_names: [method, code]\n"
        "  - name: request_duration_hours\n"
        "    kind: histogram\n"
        "    namespace: shop\n"
        "    help: Request latency.\n"
    )
    return path


@pytest.fixture()
def clean_definitions_file(tmp_path: Path) -> Path:
    """Write a definitions file without any findings."""
    path = tmp_path / "clean.yml"
    path.write_text(
        "version: 1\n"
        "metrics:\n"
        "  - name: queue_depth\n"
        "    kind: gauge\n"
        "    help: Jobs waiting.\n"
    )
    return path
