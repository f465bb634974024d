"""Tests for the park catalogue."""
import json

import pytest
from parks import DEFAULT_PARKS, load_parks


def test_default_parks_have_coordinates():
    assert len(DEFAULT_PARKS) > 0
    names = [park.name for park in DEFAULT_PARKS]
    assert len(names) == len(set(names))
    for park in DEFAULT_PARKS:
        assert -90 <= park.latitude <= 90
        assert -180 <= park.longitude <= 180


def test_load_parks(tmp_path):
    path = tmp_path / "parks.json"
    path.write_text(json.dumps([
        {"id": 4, "name": "Zion", "state": "Utah", "latitude": 37.2982, "longitude": -113.0263, "visitors": 4692417},
        {"name": "Acadia", "latitude": "44.3386", "longitude": -68.2733},
    ]))

    parks = load_parks(str(path))

    assert [p.name for p in parks] == ["Zion", "Acadia"]
    assert parks[0].id == 4
    assert parks[0].state == "Utah"
    assert parks[1].latitude == 44.3386
    assert parks[1].type == "National Park"


def test_load_parks_rejects_missing_fields(tmp_path):
    path = tmp_path / "parks.json"
    path.write_text(json.dumps([{"name": "Zion"}]))

    with pytest.raises(ValueError) as exc_info:
        load_parks(str(path))
    assert "entry 0" in str(exc_info.value)


def test_load_parks_rejects_non_list(tmp_path):
    path = tmp_path / "parks.json"
    path.write_text(json.dumps({"name": "Zion"}))

    with pytest.raises(ValueError):
        load_parks(str(path))
