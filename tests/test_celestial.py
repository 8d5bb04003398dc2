import dataclasses

import pytest

from celestial import InvalidInput, Planet, Star, star_id_of
from physical_scale import EARTH, ScaleConfig, color_from_temperature


def test_planet_from_record(make_record):
    planet = Planet.from_record(make_record(1.01))
    assert planet.planet_id == 1.01
    assert planet.star_id == 1
    assert planet.earth_radii == 1.0
    assert planet.temperature == 288
    assert planet.axis == 1.0
    assert planet.period_days == 365.0


def test_planet_derived_attributes(make_record):
    planet = Planet.from_record(make_record(1.01))
    assert planet.radius == 3
    assert planet.orbit == 600
    assert planet.period == 365.0
    assert planet.type == "Terrestrial"
    assert planet.color == EARTH


def test_planet_derived_attributes_follow_config(make_record):
    planet = Planet.from_record(make_record(1.01), ScaleConfig(radius_scale=36, orbit_scale=100))
    assert planet.orbit == 100


def test_planet_is_immutable(make_record):
    planet = Planet.from_record(make_record(1.01))
    with pytest.raises(dataclasses.FrozenInstanceError):
        planet.axis = 2.0


def test_numeric_strings_are_accepted(make_record):
    record = make_record("70.02", rplanet="1.91", tplanet="1040.4")
    planet = Planet.from_record(record)
    assert planet.planet_id == 70.02
    assert planet.temperature == 1040.4
    assert planet.kelvin == 1040


@pytest.mark.parametrize("tplanet, hot", [(1000, False), (1000.4, True), (999.6, False)])
def test_hot_threshold_uses_unrounded_temperature(make_record, tplanet, hot):
    planet = Planet.from_record(make_record(1.01, tplanet=tplanet))
    if hot:
        assert planet.color == color_from_temperature(tplanet)
    else:
        assert planet.color == EARTH
    assert planet.kelvin == 1000


@pytest.mark.parametrize("field", ["KOI", "RPLANET", "TPLANET", "A", "PER"])
def test_missing_field_is_invalid(make_record, field):
    record = make_record(1.01)
    del record[field]
    with pytest.raises(InvalidInput, match=field):
        Planet.from_record(record)


@pytest.mark.parametrize("value", [None, "big", True, float("nan"), [1]])
def test_non_numeric_field_is_invalid(make_record, value):
    record = make_record(1.01)
    record["RPLANET"] = value
    with pytest.raises(InvalidInput):
        Planet.from_record(record)


@pytest.mark.parametrize(
    "overrides",
    [{"rplanet": -1.0}, {"a": -0.1}, {"per": 0}, {"per": -3.0}],
)
def test_out_of_domain_values_are_invalid(make_record, overrides):
    with pytest.raises(InvalidInput):
        Planet.from_record(make_record(1.01, **overrides))


def test_invalid_input_is_a_value_error():
    assert issubclass(InvalidInput, ValueError)


def test_summary(make_record):
    planet = Planet.from_record(make_record(70.03, rplanet=3.07, tplanet=369, a=0.3463))
    assert planet.summary() == "Ice Giant: 369K, 0.35 AU, 3.07 R⊕"


def test_star_id_of_truncates():
    assert star_id_of(70.05) == 70
    assert star_id_of(7016.01) == 7016


def test_star_from_result_set(kepler20_records):
    star = Star.from_result_set(kepler20_records)
    assert star.star_id == 70
    assert star.sol_radii == 0.94
    assert star.temperature == 5466
    assert list(star.planets) == [70.01, 70.02, 70.03]
    assert all(p.star_id == star.star_id for p in star.planets.values())


def test_star_display_attributes(sun_records):
    star = Star.from_result_set(sun_records)
    assert star.radius == 36
    assert star.color == color_from_temperature(5778)


def test_star_uses_first_record_for_stellar_fields(make_record):
    records = [make_record(5.01, rstar=2.0, tstar=6000), make_record(5.02, rstar=9.0, tstar=3000)]
    star = Star.from_result_set(records)
    assert star.sol_radii == 2.0
    assert star.temperature == 6000


def test_star_planets_are_read_only(kepler20_records):
    star = Star.from_result_set(kepler20_records)
    with pytest.raises(TypeError):
        star.planets[70.09] = star.planets[70.01]


def test_empty_result_set_is_invalid():
    with pytest.raises(InvalidInput):
        Star.from_result_set([])


def test_one_bad_record_aborts_the_star(kepler20_records):
    del kepler20_records[2]["PER"]
    with pytest.raises(InvalidInput):
        Star.from_result_set(kepler20_records)


def test_foreign_planet_is_invalid(make_record):
    with pytest.raises(InvalidInput, match="does not belong"):
        Star.from_result_set([make_record(70.01), make_record(71.01)])


def test_missing_stellar_field_is_invalid(make_record):
    record = make_record(70.01)
    del record["TSTAR"]
    with pytest.raises(InvalidInput, match="TSTAR"):
        Star.from_result_set([record])
