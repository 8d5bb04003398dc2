import pytest

from physical_scale import (
    EARTH,
    JUPITER,
    MERCURY,
    NEPTUNE,
    PLANET_PALETTE,
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


def test_round_half_up_always_rounds_halves_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(0.5) == 1
    assert round_half_up(-0.5) == 0
    assert round_half_up(3.49) == 3


def test_round_to_decimal_places():
    assert round_to(0.3463, 2) == pytest.approx(0.35)
    assert round_to(1.046, 2) == pytest.approx(1.05)
    assert round_to(12.0, 2) == 12.0


def test_planet_radius_pixels_for_earth():
    assert planet_radius_pixels(1) == 3
    assert planet_radius_pixels(0) == 0


def test_planet_radius_pixels_is_monotonic():
    radii = [i * 0.05 for i in range(0, 600)]
    pixels = [planet_radius_pixels(r) for r in radii]
    assert all(a <= b for a, b in zip(pixels, pixels[1:]))
    assert all(p >= 0 for p in pixels)


def test_star_radius_pixels_is_not_rounded():
    assert star_radius_pixels(1) == 36
    assert star_radius_pixels(0.94) == pytest.approx(33.84)


def test_orbit_pixels():
    assert orbit_pixels(1) == 600
    assert orbit_pixels(0.0355) == 21


def test_scale_constants_are_injectable():
    config = ScaleConfig(radius_scale=72, orbit_scale=10)
    assert star_radius_pixels(1, config) == 72
    assert planet_radius_pixels(1, config) == 7
    # 2.5 rounds up, not to even
    assert orbit_pixels(0.25, config) == 3


def test_orbital_period_seconds_is_one_to_one():
    assert orbital_period_seconds(365) == 365
    assert orbital_period_seconds(2.47) == 2.47


@pytest.mark.parametrize(
    "earth_radii, expected",
    [
        (0.5, "Sub-Earth"),
        (0.75, "Terrestrial"),
        (1.0, "Terrestrial"),
        (1.5, "Super-Earth"),
        (2.5, "Ice Giant"),
        (7.99, "Ice Giant"),
        (8, "Gas Giant"),
        (13.04, "Gas Giant"),
    ],
)
def test_probable_type_boundaries_go_to_higher_band(earth_radii, expected):
    assert probable_type(earth_radii) == expected


def test_planet_type_prints_as_label():
    assert str(PlanetType.ICE_GIANT) == "Ice Giant"


def test_sun_color():
    assert color_from_temperature(5778) == (255, 240, 232)


@pytest.mark.parametrize("kelvin", [0, 150, 1000, 2000, 6600, 10000, 40000])
def test_color_channels_are_clamped(kelvin):
    color = color_from_temperature(kelvin)
    assert len(color) == 3
    assert all(isinstance(c, int) and 0 <= c <= 255 for c in color)


def test_very_cold_body_has_no_green_or_blue():
    assert color_from_temperature(150) == (255, 0, 0)


def test_hot_star_is_blue_white():
    red, green, blue = color_from_temperature(40000)
    assert blue == 255
    assert red < 255


@pytest.mark.parametrize("earth_radii", [0.1, 0.75, 1.0, 2.0, 5.0, 20.0])
def test_hot_planets_use_blackbody_color(earth_radii):
    assert planet_color(1500, earth_radii) == color_from_temperature(1500)


@pytest.mark.parametrize(
    "earth_radii, expected",
    [(0.5, MERCURY), (1.0, EARTH), (2.0, EARTH), (4.0, NEPTUNE), (11.0, JUPITER)],
)
def test_cool_planets_use_palette(earth_radii, expected):
    assert planet_color(288, earth_radii) == expected


def test_exactly_1000_kelvin_is_not_hot():
    assert planet_color(1000, 1.0) == EARTH


def test_palette_covers_every_type():
    assert set(PLANET_PALETTE) == set(PlanetType)
