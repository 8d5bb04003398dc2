"""
physical_scale.py

Pure mapping from physical quantities (radii, temperatures, orbital axes)
to display quantities (pixels, colors, animation periods).

Nothing here holds state: the two scale constants travel in a ScaleConfig
so callers can swap them out.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple

RADIUS_SCALE = 36  # pixels per solar radius
ORBIT_SCALE = 600  # pixels per AU (Earth's orbital radius)

SUN_EARTH_RATIO = 109
SCALING_FACTOR = 10  # planets drawn 10x their true size next to the star

HOT_PLANET_KELVIN = 1000

RGB = Tuple[int, int, int]


@dataclass(frozen=True)
class ScaleConfig:
    radius_scale: float = RADIUS_SCALE
    orbit_scale: float = ORBIT_SCALE


DEFAULT_SCALE = ScaleConfig()


def round_half_up(value: float) -> int:
    """Round to the nearest integer, .5 always going up."""
    return int(math.floor(value + 0.5))


def round_to(number: float, precision: int) -> float:
    """Two parameter round in the style of PHP (half up)."""
    factor = 10 ** precision
    return round_half_up(number * factor) / factor


# ---------- Sizes ----------


def planet_radius_pixels(earth_radii: float, config: ScaleConfig = DEFAULT_SCALE) -> int:
    """
    Display radius of a planet. 109 is the sun/earth radius ratio, so
    dividing by 109/SCALING_FACTOR inflates planets enough to be seen
    alongside their star.
    """
    return round_half_up(
        earth_radii / (SUN_EARTH_RATIO / SCALING_FACTOR) * config.radius_scale
    )


def star_radius_pixels(sol_radii: float, config: ScaleConfig = DEFAULT_SCALE) -> float:
    return sol_radii * config.radius_scale


def orbit_pixels(axis_au: float, config: ScaleConfig = DEFAULT_SCALE) -> int:
    return round_half_up(axis_au * config.orbit_scale)


def orbital_period_seconds(period_days: float) -> float:
    """One display second of animation per day of real period (1:1)."""
    return period_days


# ---------- Planet type ----------


class PlanetType(str, Enum):
    SUB_EARTH = "Sub-Earth"
    TERRESTRIAL = "Terrestrial"
    SUPER_EARTH = "Super-Earth"
    ICE_GIANT = "Ice Giant"
    GAS_GIANT = "Gas Giant"

    def __str__(self) -> str:
        return self.value


def probable_type(earth_radii: float) -> PlanetType:
    """
    Best guess planet type from radius alone. Mass would improve the
    guess but Kepler data does not carry it.
    """
    if earth_radii < 0.75:
        return PlanetType.SUB_EARTH
    elif earth_radii < 1.5:
        return PlanetType.TERRESTRIAL
    elif earth_radii < 2.5:
        return PlanetType.SUPER_EARTH
    elif earth_radii < 8:
        return PlanetType.ICE_GIANT
    return PlanetType.GAS_GIANT


# ---------- Colors ----------

MERCURY: RGB = (177, 173, 173)
EARTH: RGB = (6, 79, 64)
NEPTUNE: RGB = (68, 102, 127)
JUPITER: RGB = (209, 167, 127)

# Cool planets are colored by analogy to solar system bodies of their size
PLANET_PALETTE: Dict[PlanetType, RGB] = {
    PlanetType.SUB_EARTH: MERCURY,
    PlanetType.TERRESTRIAL: EARTH,
    PlanetType.SUPER_EARTH: EARTH,
    PlanetType.ICE_GIANT: NEPTUNE,
    PlanetType.GAS_GIANT: JUPITER,
}


def _log(value: float) -> float:
    # log of a non-positive argument only happens far below any real
    # temperature; -inf drives the channel to the clamp.
    return math.log(value) if value > 0 else float("-inf")


def _clamp_channel(value: float) -> int:
    if math.isnan(value) or value == float("-inf"):
        return 0
    if value == float("inf"):
        return 255
    return max(0, min(255, round_half_up(value)))


def color_from_temperature(temperature: float) -> RGB:
    """
    Map a blackbody temperature in Kelvin to an RGB triplet bounded 0..255.

    Adapted from https://github.com/neilbartlett/color-temperature,
    coefficients unchanged.
    """
    t = temperature / 100

    if t < 66.0:
        red = 255.0
    else:
        x = t - 55.0
        red = 351.97690566805693 + 0.114206453784165 * x - 40.25366309332127 * _log(x)

    if t < 66.0:
        x = t - 2
        green = -155.25485562709179 - 0.44596950469579133 * x + 104.49216199393888 * _log(x)
    else:
        x = t - 50.0
        green = 325.4494125711974 + 0.07943456536662342 * x - 28.0852963507957 * _log(x)

    if t >= 66.0:
        blue = 255.0
    elif t <= 20.0:
        blue = 0.0
    else:
        x = t - 10
        blue = -254.76935184120902 + 0.8274096064007395 * x + 115.67994401066147 * _log(x)

    return (_clamp_channel(red), _clamp_channel(green), _clamp_channel(blue))


def planet_color(temperature: float, earth_radii: float) -> RGB:
    """
    Hot planets glow like a blackbody (like a star); everything else gets
    the palette color of its probable type.
    """
    if temperature > HOT_PLANET_KELVIN:
        return color_from_temperature(temperature)
    return PLANET_PALETTE[probable_type(earth_radii)]
