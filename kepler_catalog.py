"""
kepler_catalog.py

Already-fetched Kepler KOI records: loading a JSON dump, range filtering
and grouping by star. No network access happens here.
"""

import json
import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from celestial import (
    AXIS,
    KOI,
    PERIOD,
    PLANET_RADIUS,
    PLANET_TEMPERATURE,
    InvalidInput,
    star_id_of,
)

logger = logging.getLogger(__name__)

Record = Mapping[str, Any]
Range = Optional[Tuple[float, float]]

# The API has no paging, so only the top results are kept
DEFAULT_RESULT_LIMIT = 10


def load_records(path: str) -> List[Record]:
    """
    Load either:
      - a JSON list of records: [ {"KOI": 70.01, ...}, ... ]
      - an object wrapping them: { "results": [ ... ] }
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    if isinstance(data, dict) and "results" in data:
        data = data["results"]
    if not isinstance(data, list):
        raise InvalidInput("Records JSON must be a list or contain a 'results' list.")
    for i, record in enumerate(data):
        if not isinstance(record, dict):
            raise InvalidInput(f"Record {i} is not an object.")

    logger.info("Loaded %d record(s) from %s", len(data), path)
    return data


def _koi(record: Record) -> Optional[float]:
    try:
        return float(record[KOI])
    except (KeyError, TypeError, ValueError):
        return None


def _within(record: Record, field: str, bounds: Range) -> bool:
    if bounds is None:
        return True
    low, high = bounds
    try:
        value = float(record[field])
    except (KeyError, TypeError, ValueError):
        return False
    return low < value < high


def filter_records(
    records: Sequence[Record],
    planet_temperature: Range = None,
    planet_radius: Range = None,
    orbit_period: Range = None,
    orbit_axis: Range = None,
) -> List[Record]:
    """Keep records strictly between each given (min, max); order is kept."""
    filters = (
        (PLANET_TEMPERATURE, planet_temperature),
        (PLANET_RADIUS, planet_radius),
        (PERIOD, orbit_period),
        (AXIS, orbit_axis),
    )
    matches = [r for r in records if all(_within(r, f, b) for f, b in filters)]
    logger.debug("%d of %d record(s) match filters", len(matches), len(records))
    return matches


def records_for_star(records: Sequence[Record], star_id: int) -> List[Record]:
    """
    Every record of one star. The integer part of a KOI is the star, so
    star_id and star_id + 1 bound its planets.
    """
    result = []
    for record in records:
        koi = _koi(record)
        if koi is not None and star_id < koi < star_id + 1:
            result.append(record)
    return result


def group_by_star(records: Sequence[Record]) -> Dict[int, List[Record]]:
    """Records grouped by star id, in first-seen order. Records without a KOI are skipped."""
    groups: Dict[int, List[Record]] = {}
    for record in records:
        koi = _koi(record)
        if koi is None:
            logger.warning("Skipping record without a usable KOI: %r", record)
            continue
        groups.setdefault(star_id_of(koi), []).append(record)
    return groups
