"""
celestial.py

Star and Planet value objects built from Kepler KOI records.

Both are frozen: raw physical attributes are stored once, display
attributes are derived on every access through physical_scale so they can
never drift from the source data.
"""

import logging
import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Sequence

from physical_scale import (
    DEFAULT_SCALE,
    RGB,
    PlanetType,
    ScaleConfig,
    color_from_temperature,
    orbit_pixels,
    orbital_period_seconds,
    planet_color,
    planet_radius_pixels,
    probable_type,
    round_half_up,
    round_to,
    star_radius_pixels,
)

logger = logging.getLogger(__name__)

# Kepler API field names
KOI = "KOI"
STAR_RADIUS = "RSTAR"
STAR_TEMPERATURE = "TSTAR"
PLANET_RADIUS = "RPLANET"
PLANET_TEMPERATURE = "TPLANET"
AXIS = "A"
PERIOD = "PER"


class InvalidInput(ValueError):
    """Malformed or empty record data."""


def _number(record: Mapping[str, Any], key: str) -> float:
    try:
        value = record[key]
    except (KeyError, TypeError):
        raise InvalidInput(f"Record is missing numeric field '{key}'.") from None
    if isinstance(value, bool):
        raise InvalidInput(f"Field '{key}' must be numeric, got {value!r}.")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidInput(f"Field '{key}' must be numeric, got {value!r}.") from None
    if not math.isfinite(number):
        raise InvalidInput(f"Field '{key}' must be finite, got {value!r}.")
    return number


def star_id_of(planet_id: float) -> int:
    """Integer part of a KOI represents the star."""
    return int(planet_id)


@dataclass(frozen=True)
class Planet:
    """
    An individual Kepler planet. Held by a Star, but also the unit of
    search results and selection.
    """

    planet_id: float
    earth_radii: float
    temperature: float
    axis: float
    period_days: float
    config: ScaleConfig = field(default=DEFAULT_SCALE, compare=False, repr=False)

    @classmethod
    def from_record(cls, record: Mapping[str, Any], config: ScaleConfig = DEFAULT_SCALE) -> "Planet":
        planet_id = _number(record, KOI)
        earth_radii = _number(record, PLANET_RADIUS)
        temperature = _number(record, PLANET_TEMPERATURE)
        axis = _number(record, AXIS)
        period_days = _number(record, PERIOD)

        if planet_id < 0:
            raise InvalidInput(f"KOI must not be negative, got {planet_id}.")
        if earth_radii < 0:
            raise InvalidInput(f"Planet radius must not be negative, got {earth_radii}.")
        if axis < 0:
            raise InvalidInput(f"Orbital axis must not be negative, got {axis}.")
        if period_days <= 0:
            raise InvalidInput(f"Orbital period must be positive, got {period_days}.")

        return cls(
            planet_id=planet_id,
            earth_radii=earth_radii,
            temperature=temperature,
            axis=axis,
            period_days=period_days,
            config=config,
        )

    @property
    def star_id(self) -> int:
        return star_id_of(self.planet_id)

    @property
    def radius(self) -> int:
        return planet_radius_pixels(self.earth_radii, self.config)

    @property
    def orbit(self) -> int:
        return orbit_pixels(self.axis, self.config)

    @property
    def period(self) -> float:
        return orbital_period_seconds(self.period_days)

    @property
    def type(self) -> PlanetType:
        return probable_type(self.earth_radii)

    @property
    def kelvin(self) -> int:
        """Temperature rounded to whole Kelvin for display."""
        return round_half_up(self.temperature)

    @property
    def color(self) -> RGB:
        return planet_color(self.temperature, self.earth_radii)

    def summary(self) -> str:
        return (
            f"{self.type}: {self.kelvin}K, {round_to(self.axis, 2)} AU, "
            f"{self.earth_radii} R⊕"
        )


@dataclass(frozen=True)
class Star:
    """An individual Kepler star and its planets, keyed by KOI."""

    star_id: int
    sol_radii: float
    temperature: float
    planets: Mapping[float, Planet] = field(
        default_factory=lambda: MappingProxyType({}), compare=False
    )
    config: ScaleConfig = field(default=DEFAULT_SCALE, compare=False, repr=False)

    @classmethod
    def from_result_set(
        cls, records: Sequence[Mapping[str, Any]], config: ScaleConfig = DEFAULT_SCALE
    ) -> "Star":
        """
        Build a star from records that share its identity. Stellar fields
        come from the first record; every record becomes one planet.
        """
        if not records:
            raise InvalidInput("Cannot build a star from an empty result set.")

        first = records[0]
        star_id = star_id_of(_number(first, KOI))
        sol_radii = _number(first, STAR_RADIUS)
        temperature = _number(first, STAR_TEMPERATURE)
        if sol_radii < 0:
            raise InvalidInput(f"Star radius must not be negative, got {sol_radii}.")

        planets = {}
        for record in records:
            planet = Planet.from_record(record, config)
            if planet.star_id != star_id:
                raise InvalidInput(
                    f"Planet {planet.planet_id} does not belong to star {star_id}."
                )
            planets[planet.planet_id] = planet

        logger.debug("Built star %s with %d planet(s)", star_id, len(planets))
        return cls(
            star_id=star_id,
            sol_radii=sol_radii,
            temperature=temperature,
            planets=MappingProxyType(planets),
            config=config,
        )

    @property
    def kelvin(self) -> int:
        return round_half_up(self.temperature)

    @property
    def radius(self) -> float:
        return star_radius_pixels(self.sol_radii, self.config)

    @property
    def color(self) -> RGB:
        # A star's color can reasonably be approximated as a blackbody
        return color_from_temperature(self.temperature)
