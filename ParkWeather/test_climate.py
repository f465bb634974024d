"""Tests for climate classification and park code lookup."""
import pytest
from climate import DEFAULT_ARCHETYPE, classify
from park_codes import get_park_code
from weather_data import ClimateArchetype


@pytest.mark.parametrize("name, expected", [
    ("Death Valley", ClimateArchetype.DESERT),
    ("Yosemite National Park", ClimateArchetype.MOUNTAIN),
    ("Acadia", ClimateArchetype.COASTAL),
    ("Everglades", ClimateArchetype.TROPICAL),
    ("Denali", ClimateArchetype.ARCTIC),
    ("Redwood", ClimateArchetype.FOREST),
])
def test_known_parks(name, expected):
    assert classify(name) is expected


def test_unknown_park_gets_default():
    assert classify("Zion") is DEFAULT_ARCHETYPE
    assert DEFAULT_ARCHETYPE is ClimateArchetype.FOREST


def test_first_match_in_table_order_wins():
    # "Glacier" is listed before "Glacier Bay"
    assert classify("Glacier Bay") is ClimateArchetype.MOUNTAIN


def test_park_code_exact():
    assert get_park_code("Zion") == "zion"
    assert get_park_code("Glacier Bay") == "glba"


def test_park_code_partial_match():
    assert get_park_code("Yellowstone National Park") == "yell"
    assert get_park_code("Smoky") == "grsm"


def test_park_code_fallback():
    assert get_park_code("Lake Mead") == "lake"
