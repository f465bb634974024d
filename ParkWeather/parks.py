"""Built-in park catalogue and loader for park lists stored as JSON."""
import json
import logging
from typing import List

from weather_data import Park

DEFAULT_PARKS: List[Park] = [
    Park(id=1, name="Yellowstone", state="Wyoming", latitude=44.428, longitude=-110.5885),
    Park(id=2, name="Grand Canyon", state="Arizona", latitude=36.0544, longitude=-112.2401),
    Park(id=3, name="Yosemite", state="California", latitude=37.8651, longitude=-119.5383),
    Park(id=4, name="Zion", state="Utah", latitude=37.2982, longitude=-113.0263),
    Park(id=5, name="Great Smoky Mountains", state="Tennessee", latitude=35.6118, longitude=-83.4895),
    Park(id=6, name="Acadia", state="Maine", latitude=44.3386, longitude=-68.2733),
    Park(id=7, name="Olympic", state="Washington", latitude=47.8021, longitude=-123.6044),
    Park(id=8, name="Everglades", state="Florida", latitude=25.2866, longitude=-80.8987),
    Park(id=9, name="Joshua Tree", state="California", latitude=33.8734, longitude=-115.9010),
    Park(id=10, name="Redwood", state="California", latitude=41.2132, longitude=-124.0046),
    Park(id=11, name="Denali", state="Alaska", latitude=63.1148, longitude=-151.1926),
    Park(id=12, name="Hawaii Volcanoes", state="Hawaii", latitude=19.4194, longitude=-155.2885),
]


def load_parks(path: str) -> List[Park]:
    """
    Read parks from a JSON array of objects.

    Each object needs name, latitude and longitude; id, state, type and
    description are optional. Unknown keys are ignored.
    """
    with open(path, encoding="utf-8") as f:
        raw = json.load(f)

    if not isinstance(raw, list):
        raise ValueError(f"{path}: expected a JSON array of parks")

    parks = []
    for index, item in enumerate(raw):
        try:
            parks.append(Park(
                name=str(item["name"]),
                latitude=float(item["latitude"]),
                longitude=float(item["longitude"]),
                state=item.get("state", ""),
                type=item.get("type", "National Park"),
                description=item.get("description", ""),
                id=item.get("id"),
            ))
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise ValueError(f"{path}: invalid park entry {index}: {e}") from e

    logging.info(f"Loaded {len(parks)} parks from {path}")
    return parks
