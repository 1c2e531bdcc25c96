"""Tests for catalog models and loading the JSON catalog file."""

import json
from pathlib import Path

from pydantic import ValidationError
import pytest

from couchtube.config import Catalog, VideoEntry, load_catalog
from couchtube.exceptions import ConfigLoadError

SAMPLE_CATALOG = {
    "channels": [
        {
            "name": "Cartoons",
            "videos": [
                {"id": "abc", "sectionStart": 10, "sectionEnd": 50},
                {"id": "full"},
            ],
        },
        {"name": "Empty", "videos": []},
    ]
}


@pytest.fixture
def catalog_file(tmp_path: Path) -> Path:
    """Writes the sample catalog to a temporary JSON file."""
    path = tmp_path / "videos.json"
    path.write_text(json.dumps(SAMPLE_CATALOG), encoding="utf-8")
    return path


@pytest.mark.unit
def test_load_catalog_reads_channels_in_order(catalog_file: Path):
    """Channels and videos keep the order of the file."""
    catalog = load_catalog(catalog_file)

    assert [c.name for c in catalog.channels] == ["Cartoons", "Empty"]
    first, second = catalog.channels[0].videos
    assert (first.id, first.section_start, first.section_end) == ("abc", 10, 50)
    assert (second.section_start, second.section_end) == (0, 0)
    assert catalog.channels[1].videos == []


@pytest.mark.unit
def test_video_entry_accepts_snake_case_keys():
    """Both camelCase and snake_case bound keys are accepted."""
    video = VideoEntry.model_validate({"id": "x", "section_start": 1, "section_end": 2})

    assert (video.section_start, video.section_end) == (1, 2)


@pytest.mark.unit
@pytest.mark.parametrize(
    ("start", "end", "expected"),
    [(0, 0, True), (0, 30, False), (5, 0, False), (5, 30, False)],
)
def test_video_entry_needs_resolution(start: int, end: int, expected: bool):
    """Only a clip with both bounds zero plays in full."""
    video = VideoEntry(id="x", section_start=start, section_end=end)
    assert video.needs_resolution is expected


@pytest.mark.unit
def test_missing_channels_key_is_empty_catalog():
    """A document without channels is an empty catalog."""
    assert Catalog.model_validate({}).channels == []


@pytest.mark.unit
@pytest.mark.parametrize(
    "raw",
    [
        {"channels": [{"name": "", "videos": []}]},
        {"channels": [{"name": "A", "videos": [{"id": ""}]}]},
        {"channels": [{"name": "A", "videos": [{"id": "x", "sectionStart": -1}]}]},
        {"channels": [{"videos": []}]},
    ],
)
def test_invalid_entries_raise(raw: dict[str, object]):
    """Entries that break the catalog structure fail validation."""
    with pytest.raises(ValidationError):
        Catalog.model_validate(raw)


@pytest.mark.unit
def test_load_catalog_missing_file_raises(tmp_path: Path):
    """A missing file raises ConfigLoadError naming the file."""
    path = tmp_path / "missing.json"

    with pytest.raises(ConfigLoadError) as exc_info:
        load_catalog(path)

    assert exc_info.value.config_file == str(path)


@pytest.mark.unit
def test_load_catalog_invalid_json_raises(tmp_path: Path):
    """A file that is not JSON raises ConfigLoadError."""
    path = tmp_path / "videos.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(ConfigLoadError) as exc_info:
        load_catalog(path)

    assert isinstance(exc_info.value.__cause__, ValidationError)


@pytest.mark.unit
def test_load_catalog_wrong_structure_raises(tmp_path: Path):
    """Valid JSON with the wrong shape raises ConfigLoadError."""
    path = tmp_path / "videos.json"
    path.write_text(json.dumps({"channels": "nope"}), encoding="utf-8")

    with pytest.raises(ConfigLoadError) as exc_info:
        load_catalog(path)

    assert isinstance(exc_info.value.__cause__, ValidationError)
