"""Integration test for an anchor walk over a Synthea-style bundle."""

from __future__ import annotations

from datetime import date
import json
from pathlib import Path
import shutil

import pytest

from core.errors import UnknownResourceTypeError
from shift.anchor_tracker import run_anchor_walk
from tests.fixture_paths import fixture_path


def _prepare_dataset(tmp_path: Path, fixture_name: str) -> Path:
    dataset_dir = tmp_path / "data" / "R4"
    dataset_dir.mkdir(parents=True)
    shutil.copy(fixture_path(f"documents/{fixture_name}"), dataset_dir / fixture_name)
    (dataset_dir / ".anchorDate").write_text("2019-04-29", encoding="utf-8")
    return dataset_dir


def _resources(document_path: Path) -> dict[str, dict]:
    bundle = json.loads(document_path.read_text(encoding="utf-8"))
    return {entry["resource"]["resourceType"]: entry["resource"] for entry in bundle["entry"]}


def test_anchor_walk_shifts_bundle_consistently(tmp_path: Path) -> None:
    """Every registered date in the bundle moves by the same ten days."""
    dataset_dir = _prepare_dataset(tmp_path, "patient_bundle.json")

    summary = run_anchor_walk(tmp_path / "data", today=date(2019, 5, 9))
    resources = _resources(dataset_dir / "patient_bundle.json")

    assert summary.values_shifted == 10
    assert resources["Patient"]["birthDate"] == "1980-01-11"
    assert resources["Patient"]["text"]["div"].endswith("Generated by Synthea on 2019-05-09</div>")
    assert resources["Encounter"]["participant"][1]["period"]["start"] == (
        "2019-04-30T10:05:00-04:00"
    )
    assert resources["Observation"]["issued"] == "2019-04-30T10:00:00.123-04:00"
    assert resources["Organization"]["name"] == "Founded 1990-06-01 General Hospital"


def test_second_walk_on_the_same_day_is_a_no_op(tmp_path: Path) -> None:
    """Once the anchor is moved, rerunning the same day changes nothing."""
    dataset_dir = _prepare_dataset(tmp_path, "patient_bundle.json")
    run_anchor_walk(tmp_path / "data", today=date(2019, 5, 9))
    shifted_text = (dataset_dir / "patient_bundle.json").read_text(encoding="utf-8")

    summary = run_anchor_walk(tmp_path / "data", today=date(2019, 5, 9))

    assert summary.directories_shifted == 0
    assert (dataset_dir / "patient_bundle.json").read_text(encoding="utf-8") == shifted_text


def test_unknown_resource_type_aborts_the_walk(tmp_path: Path) -> None:
    """An unregistered type stops the run and keeps the old anchor."""
    dataset_dir = _prepare_dataset(tmp_path, "unknown_type.json")

    with pytest.raises(UnknownResourceTypeError):
        run_anchor_walk(tmp_path / "data", today=date(2019, 5, 9))

    assert (dataset_dir / ".anchorDate").read_text(encoding="utf-8") == "2019-04-29"
