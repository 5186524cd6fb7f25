"""Astrometric primitives used by the coordinate classes.

All angles are in radians. Time arguments are ``datetime.datetime``
instances; naive values are taken to be UTC. UT1 is approximated by UTC so
no IERS tables are ever required.
"""

import datetime
import math
import warnings

import erfa

# Light travel time for one astronomical unit, in days.
LIGHT_TIME_AU_DAYS = 0.005775518331436995


def _utc_fields(dt: datetime.datetime) -> tuple[int, int, int, int, int, float]:
    if dt.tzinfo is not None:
        dt = dt.astimezone(datetime.timezone.utc)
    second = dt.second + dt.microsecond / 1e6
    return dt.year, dt.month, dt.day, dt.hour, dt.minute, second


def _calendar_to_jd(year, month, day, hour, minute, second):
    with warnings.catch_warnings():
        # Dates past the end of the leap second table are "dubious" but usable.
        warnings.simplefilter("ignore", erfa.ErfaWarning)
        utc1, utc2 = erfa.dtf2d(b"UTC", year, month, day, hour, minute, second)
        tai1, tai2 = erfa.utctai(utc1, utc2)
        tt1, tt2 = erfa.taitt(tai1, tai2)
    return float(utc1), float(utc2), float(tt1), float(tt2)


def utc_to_tt(dt: datetime.datetime) -> tuple[float, float, float, float]:
    """Return ``(utc1, utc2, tt1, tt2)`` two-part Julian dates for ``dt``."""
    return _calendar_to_jd(*_utc_fields(dt))


def tt_julian_date(dt: datetime.datetime) -> tuple[float, float]:
    _, _, tt1, tt2 = utc_to_tt(dt)
    return tt1, tt2


def normalize_to_2pi(angle: float) -> float:
    return float(erfa.anp(angle))


def normalize_to_signed_pi(angle: float) -> float:
    """Wrap ``angle`` into (-pi, pi]."""
    wrapped = float(erfa.anpm(angle))
    # anpm works on [-pi, pi)
    if wrapped <= -math.pi:
        return math.pi
    return wrapped


def local_sidereal_time(
    year: int,
    month: int,
    day: int,
    hour: int,
    minute: int,
    second: float,
    longitude: float,
) -> float:
    """Local apparent sidereal time for a UTC calendar instant and east longitude."""
    utc1, utc2, tt1, tt2 = _calendar_to_jd(year, month, day, hour, minute, second)
    gast = erfa.gst06a(utc1, utc2, tt1, tt2)
    return normalize_to_2pi(gast + longitude)


def local_sidereal_time_at(dt: datetime.datetime, longitude: float) -> float:
    return local_sidereal_time(*_utc_fields(dt), longitude)


def apparent_place(ra2000: float, dec2000: float, dt: datetime.datetime) -> tuple[float, float]:
    """Geocentric apparent (equinox based) RA/Dec of a J2000 catalog position."""
    tt1, tt2 = tt_julian_date(dt)
    ri, di, eo = erfa.atci13(ra2000, dec2000, 0.0, 0.0, 0.0, 0.0, tt1, tt2)
    return normalize_to_2pi(ri - eo), float(di)


def mean_place(ra_app: float, dec_app: float, dt: datetime.datetime) -> tuple[float, float]:
    """Inverse of :func:`apparent_place`."""
    tt1, tt2 = tt_julian_date(dt)
    eo = erfa.eo06a(tt1, tt2)
    rc, dc, _ = erfa.atic13(normalize_to_2pi(ra_app + eo), dec_app, tt1, tt2)
    return normalize_to_2pi(rc), float(dc)


def equatorial_to_horizon(ha: float, dec: float, lat: float) -> tuple[float, float]:
    az, el = erfa.hd2ae(ha, dec, lat)
    return normalize_to_2pi(az), float(el)


def horizon_to_hadec(az: float, el: float, lat: float) -> tuple[float, float]:
    ha, dec = erfa.ae2hd(az, el, lat)
    return normalize_to_signed_pi(ha), float(dec)


def horizon_to_equatorial(
    az: float,
    el: float,
    lat: float,
    longitude: float,
    dt: datetime.datetime,
) -> tuple[float, float]:
    """Apparent RA/Dec of a horizon position at a site and instant."""
    ha, dec = horizon_to_hadec(az, el, lat)
    lst = local_sidereal_time_at(dt, longitude)
    return normalize_to_2pi(lst - ha), dec


def parallactic_angle(ha: float, dec: float, lat: float) -> float:
    return float(erfa.hd2pa(ha, dec, lat))


def angular_separation(ra1: float, dec1: float, ra2: float, dec2: float) -> float:
    return float(erfa.seps(ra1, dec1, ra2, dec2))
