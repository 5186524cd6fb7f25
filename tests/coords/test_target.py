import datetime
import math

import pytest

from astrocoords.coords import CoordinateTarget, CoordinateVariant, new_coords
from astrocoords.errors import (
    ConstructionError,
    TelescopeRequiredError,
    TypeMismatchError,
    UnimplementedError,
)
from astrocoords.telescope import Telescope
from astrocoords.util.format import hours_to_rad, rad_to_hours

UTC = datetime.timezone.utc


def _close(value, rel=1e-5):
    return pytest.approx(value, rel=rel, abs=1e-7)


@pytest.fixture
def orion(ref_time, jcmt):
    return new_coords(
        type="J2000", ra="05:35:17.3", dec="-05:23:28", tel=jcmt, datetime=ref_time
    )


def test_azel_in_degrees_without_telescope():
    c = new_coords(az=345, el=45)
    assert c.azimuth("deg") == pytest.approx(345.0)
    assert c.elevation("deg") == pytest.approx(45.0)
    assert c.azel("d") == (pytest.approx(345.0), pytest.approx(45.0))


def test_radec2000_formats():
    c = new_coords(type="J2000", ra="05:22:56", dec="-26:20:40.4", units="sexagesimal")
    assert c.radec2000("s") == ("05:22:56.00", "-26:20:40.40")
    ra, _ = c.radec2000()
    assert ra == pytest.approx(hours_to_rad(5 + 22 / 60 + 56 / 3600))


def test_units_pair():
    c = new_coords(type="J2000", ra=5.5, dec=-10.0, units=("hours", "degrees"))
    assert c.radec2000("h")[0] == pytest.approx(5.5)
    assert c.radec2000("d")[1] == pytest.approx(-10.0)


def test_galactic_centre_in_fk5():
    c = new_coords(type="galactic", long=0.0, lat=0.0, units="degrees")
    ra, dec = c.radec2000("deg")
    assert ra == pytest.approx(266.405, abs=0.01)
    assert dec == pytest.approx(-28.936, abs=0.01)


def test_galactic_round_trip():
    c = new_coords(type="galactic", long=30.0, lat=10.0, units="degrees")
    lon, lat = c.galactic("deg")
    assert lon == pytest.approx(30.0, abs=1e-6)
    assert lat == pytest.approx(10.0, abs=1e-6)


def test_b1950_is_precessed():
    b1950 = new_coords(type="B1950", ra="05:22:56", dec="-26:20:40.4")
    j2000 = new_coords(type="J2000", ra="05:22:56", dec="-26:20:40.4")
    sep = b1950.distance(j2000, "deg")
    assert 0.1 < sep < 1.0


def test_supergalactic_is_accepted():
    c = new_coords(type="supergalactic", long=45.0, lat=-20.0, units="degrees")
    ra, dec = c.radec2000()
    assert 0.0 <= ra < 2 * math.pi
    assert -math.pi / 2 <= dec <= math.pi / 2


def test_apparent_type_inverts_to_j2000(orion, ref_time):
    app = new_coords(
        type="apparent",
        ra=orion.apparent_ra(),
        dec=orion.apparent_dec(),
        units="radians",
        datetime=ref_time,
    )
    ra, dec = app.radec2000()
    ra0, dec0 = orion.radec2000()
    assert ra == pytest.approx(ra0, abs=1e-7)
    assert dec == pytest.approx(dec0, abs=1e-7)


def test_apparent_type_needs_datetime():
    with pytest.raises(ConstructionError, match="reference datetime"):
        new_coords(type="apparent", ra=1.0, dec=0.5, units="radians")


def test_horizon_target_matches_equatorial_target(orion, ref_time, jcmt):
    az, el = orion.azel()
    fixed = new_coords(az=az, el=el, units="radians", tel=jcmt, datetime=ref_time)

    assert fixed.azimuth() == _close(orion.azimuth())
    assert fixed.elevation() == _close(orion.elevation())
    assert fixed.apparent_ra() == _close(orion.apparent_ra())
    assert fixed.apparent_dec() == _close(orion.apparent_dec())
    assert fixed.hour_angle() == _close(orion.hour_angle())
    assert fixed.local_sidereal_time() == _close(orion.local_sidereal_time())


@pytest.mark.parametrize(
    "lat_deg, lon_deg, when",
    [
        (19.8, -155.5, datetime.datetime(2024, 1, 15, 10, 0, tzinfo=UTC)),
        (-34.9, 138.6, datetime.datetime(2023, 7, 1, 14, 30, tzinfo=UTC)),
        (51.5, 0.0, datetime.datetime(2025, 12, 31, 23, 59, 59, tzinfo=UTC)),
        (-70.0, 45.0, datetime.datetime(2010, 3, 3, 3, 3, 3, tzinfo=UTC)),
    ],
)
def test_horizon_round_trip(lat_deg, lon_deg, when):
    tel = Telescope(
        name="X", longitude_rad=math.radians(lon_deg), latitude_rad=math.radians(lat_deg)
    )
    for ra, dec in (("03:00:00", "10:00:00"), ("13:30:00", "-45:00:00"), ("20:00:00", "60:00:00")):
        eq = new_coords(type="J2000", ra=ra, dec=dec, tel=tel, datetime=when)
        az, el = eq.azel()
        back = new_coords(az=az, el=el, units="radians", tel=tel, datetime=when)
        assert back.apparent_ra() == pytest.approx(eq.apparent_ra(), abs=1e-5)
        assert back.apparent_dec() == pytest.approx(eq.apparent_dec(), abs=1e-5)


def test_accessors_are_idempotent(orion):
    for accessor in (
        orion.apparent_ra,
        orion.apparent_dec,
        orion.hour_angle,
        orion.azimuth,
        orion.elevation,
        orion.parallactic_angle,
        orion.local_sidereal_time,
    ):
        assert accessor() == accessor()
    assert orion.status_summary() == orion.status_summary()


def test_hour_like_formats(orion):
    ha = orion.hour_angle()
    assert -math.pi < ha <= math.pi
    assert orion.hour_angle("h") == pytest.approx(rad_to_hours(ha))
    assert orion.hour_angle("deg") == pytest.approx(math.degrees(ha))
    assert orion.apparent_ra("h") == pytest.approx(rad_to_hours(orion.apparent_ra()))
    sign, hours, minutes, seconds, fraction = orion.apparent_ra("array")
    assert sign == "+"
    assert hours == 5
    assert orion.apparent_ra("s").startswith("05:")


def test_hour_angle_is_lst_minus_ra(orion):
    diff = orion.local_sidereal_time() - orion.apparent_ra()
    assert math.cos(orion.hour_angle() - diff) == pytest.approx(1.0)


def test_context_changes_are_seen(orion, ref_time):
    before = orion.hour_angle()
    orion.datetime = ref_time + datetime.timedelta(hours=1)
    after = orion.hour_angle()
    # one solar hour is slightly more than one sidereal hour
    assert rad_to_hours(after - before) == pytest.approx(1.0027, abs=1e-3)


def test_telescope_changes_are_seen(orion):
    at_jcmt = orion.elevation()
    orion.telescope = "GREENWICH"
    assert orion.elevation() != at_jcmt
    orion.telescope = None
    assert orion.telescope is None


def test_clock_is_injected():
    when = datetime.datetime(2024, 2, 1, 0, 0, tzinfo=UTC)
    calls = []

    def clock():
        calls.append(1)
        return when

    c = CoordinateTarget(new_coords(planet="sun").variant, clock=clock)
    assert c.datetime == when
    c.apparent_ra()
    assert calls


def test_explicit_time_beats_clock(ref_time):
    def clock():
        raise AssertionError("clock should not be read")

    c = CoordinateTarget(new_coords(planet="sun").variant, time=ref_time, clock=clock)
    assert c.datetime == ref_time
    c.azel()


def test_setters_check_types(orion):
    with pytest.raises(TypeMismatchError):
        orion.datetime = "2024-01-01T00:00:00"
    with pytest.raises(TypeMismatchError):
        orion.telescope = 42


def test_hadec_target_requires_telescope_at_use(ref_time):
    c = new_coords(ha="01:00:00", dec="20:00:00", datetime=ref_time)
    with pytest.raises(TelescopeRequiredError):
        c.apparent_ra()
    c.telescope = "UKIRT"
    assert c.hour_angle("h") == pytest.approx(1.0)
    assert c.apparent_dec("d") == pytest.approx(20.0)


def test_parallactic_angle_on_meridian(ref_time, jcmt):
    c = new_coords(ha=0.0, dec=0.0, units="radians", tel=jcmt, datetime=ref_time)
    assert c.parallactic_angle() == pytest.approx(0.0, abs=1e-9)


def test_calibration_sits_at_zenith(ref_time, jcmt):
    c = new_coords(tel=jcmt, datetime=ref_time)
    assert c.elevation() == pytest.approx(math.pi / 2)
    assert c.azimuth() == 0.0
    assert c.apparent_dec() == pytest.approx(jcmt.latitude())
    assert c.hour_angle() == pytest.approx(0.0, abs=1e-12)


def test_distance(ref_time):
    a = new_coords(type="J2000", ra="10:00:00", dec="10:00:00", datetime=ref_time)
    b = new_coords(type="J2000", ra="10:00:00", dec="11:00:00", datetime=ref_time)
    assert a.distance(b, "deg") == pytest.approx(1.0, abs=1e-4)


def test_planet_has_no_radec2000():
    with pytest.raises(UnimplementedError):
        new_coords(planet="mars").radec2000()


def test_elements_match_planet(ref_time):
    # Mean J2000 elements for Mars (longitudes of node and perihelion)
    mars_elements = {
        "epoch": 51544.5,
        "jform": 1,
        "orbinc": math.radians(1.84969142),
        "anode": math.radians(49.55953891),
        "perih": math.radians(-23.94362959),
        "aorq": 1.52371034,
        "e": 0.09339410,
        "aorl": math.radians(-4.55343205),
    }
    when = datetime.datetime(2000, 1, 1, 12, 0, tzinfo=UTC)
    from_elements = new_coords(elements=mars_elements, datetime=when)
    planet = new_coords(planet="mars", datetime=when)
    assert from_elements.distance(planet) < 0.01


def test_summary_arrays():
    assert new_coords(planet="mars").summary_array() == ("MARS",) + (None,) * 10
    assert new_coords().summary_array() == ("CAL",) + (None,) * 10

    eq = new_coords(type="J2000", ra=1.0, dec=0.5, units="radians").summary_array()
    assert eq[:3] == ("RADEC", 1.0, 0.5)
    assert len(eq) == 11

    fixed = new_coords(az=1.0, el=0.5, units="radians").summary_array()
    assert fixed[:5] == ("FIXED", None, None, 1.0, 0.5)
    assert len(fixed) == 11


def test_elements_summary_array():
    elements = {
        "epoch": 51544.5,
        "orbinc": 0.1,
        "anode": 0.2,
        "perih": 0.3,
        "aorq": 2.5,
        "e": 0.1,
        "aorl": 0.4,
    }
    array = new_coords(elements=elements).summary_array()
    assert array == ("ELEMENTS", None, None, 51544.5, 0.1, 0.2, 0.3, 2.5, 0.1, 0.4, None)


def test_summary_array_must_be_provided(ref_time):
    class Bare(CoordinateVariant):
        def apparent(self, context):
            return 0.0, 0.0

    c = CoordinateTarget(Bare(), time=ref_time)
    assert c.apparent_ra() == 0.0
    with pytest.raises(UnimplementedError):
        c.summary_array()


def test_status_summary(orion, ref_time):
    text = str(orion)
    lines = text.splitlines()
    assert lines[0] == "Coordinate type:RADEC"
    assert lines[1].startswith("Elevation:")
    assert "Telescope:      James Clerk Maxwell Telescope" in lines
    assert any(line.startswith("The target is") for line in lines)
    assert lines[-1] == f"For time {ref_time.isoformat()}"


def test_status_summary_without_telescope(ref_time):
    text = new_coords(planet="venus", datetime=ref_time, name="evening star").status_summary()
    assert "Telescope:" not in text
    assert "Name:           evening star" in text
    assert "observable" not in text


def test_status_summary_for_hadec_without_telescope(ref_time):
    c = new_coords(ha="01:00:00", dec="20:00:00", datetime=ref_time)
    text = str(c)
    assert text.startswith("Coordinate type:FIXED")
    assert "Position unavailable:" in text
    assert "Elevation:" not in text
    assert text.rstrip().endswith(ref_time.isoformat())
    with pytest.raises(TelescopeRequiredError):
        c.elevation()
