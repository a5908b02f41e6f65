"""Tests for manifest I/O and console helpers."""

from __future__ import annotations

import pytest

from reelagent.models.project import Project, SourceMedia
from reelagent.utils.io import atomic_open, load_model, read_yaml, save_model
from reelagent.utils.progress import format_seconds


@pytest.fixture
def project(segments):
    return Project(
        source=SourceMedia(path="clip.mp4", duration_seconds=20.0),
        segments=segments,
        edits=[{"type": "delete", "start": 1, "end": "oops"}],
    )


@pytest.mark.parametrize("name", ["project.yaml", "project.json"])
def test_manifest_survives_save_and_load(tmp_path, project, name):
    path = tmp_path / name
    save_model(path, project)

    assert load_model(path, Project) == project


def test_yaml_manifest_is_plain_data(tmp_path, project):
    path = tmp_path / "project.yaml"
    save_model(path, project)

    data = read_yaml(path)
    assert type(data) is dict
    assert data["segments"][1]["tags"]["has_action"] is True
    assert data["edits"] == [{"type": "delete", "start": 1, "end": "oops"}]


def test_failed_write_keeps_previous_file(tmp_path):
    path = tmp_path / "project.yaml"
    path.write_text("version: '1.0'\n")

    with pytest.raises(RuntimeError):
        with atomic_open(path) as f:
            f.write("partial")
            raise RuntimeError("interrupted")

    assert path.read_text() == "version: '1.0'\n"
    assert [p.name for p in tmp_path.iterdir()] == ["project.yaml"]


@pytest.mark.parametrize(
    "seconds, expected",
    [(4.25, "4.25s"), (0, "0.00s"), (125.0, "2m05.0s")],
)
def test_format_seconds(seconds, expected):
    assert format_seconds(seconds) == expected
