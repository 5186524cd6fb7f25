import datetime
import math
import warnings

import erfa
import numpy as np

from astrocoords.astrometry import (
    LIGHT_TIME_AU_DAYS,
    apparent_place,
    normalize_to_2pi,
    tt_julian_date,
)
from astrocoords.errors import ConstructionError

# erfa.plan94 body numbers
PLANET_NUMBERS = {
    "mercury": 1,
    "venus": 2,
    "mars": 4,
    "jupiter": 5,
    "saturn": 6,
    "uranus": 7,
    "neptune": 8,
}

BODY_NAMES = ("sun", "moon") + tuple(PLANET_NUMBERS)

# Gaussian gravitational constant (radians per day)
GAUSS_K = 0.01720209895

# Mean obliquity of the ecliptic at J2000 (IAU 2006)
_OBLIQUITY_J2000 = math.radians(84381.406 / 3600.0)

_MJD_ZERO = 2400000.5

ELEMENT_KEYS = ("epoch", "orbinc", "anode", "perih", "aorq", "e", "aorl", "dm")

_REQUIRED_ELEMENTS = {
    1: ("epoch", "orbinc", "anode", "perih", "aorq", "e", "aorl"),
    2: ("epoch", "orbinc", "anode", "perih", "aorq", "e", "aorl"),
    3: ("epoch", "orbinc", "anode", "perih", "aorq", "e"),
}


def is_known_body(name) -> bool:
    return isinstance(name, str) and name.strip().lower() in BODY_NAMES


def _earth_heliocentric(tt1: float, tt2: float) -> np.ndarray:
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", erfa.ErfaWarning)
        pvh, _ = erfa.epv00(tt1, tt2)
    return np.asarray(pvh["p"], dtype=float)


def _planet_heliocentric(number: int, tt1: float, tt2: float) -> np.ndarray:
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", erfa.ErfaWarning)
        pv = erfa.plan94(tt1, tt2, number)
    return np.asarray(pv["p"], dtype=float)


def _light_time_corrected(heliocentric, tt1: float, tt2: float) -> np.ndarray:
    """Geocentric position of a body given a heliocentric position function of TT."""
    earth = _earth_heliocentric(tt1, tt2)
    geo = heliocentric(tt1, tt2) - earth
    for _ in range(2):
        tau = np.linalg.norm(geo) * LIGHT_TIME_AU_DAYS
        geo = heliocentric(tt1, tt2 - tau) - earth
    return geo


def _direction(vector: np.ndarray) -> tuple[float, float]:
    ra, dec = erfa.c2s(vector)
    return normalize_to_2pi(ra), float(dec)


def body_apparent_place(name: str, dt: datetime.datetime) -> tuple[float, float]:
    """Geocentric apparent RA/Dec of the Sun, Moon or a major planet."""
    body = name.strip().lower()
    tt1, tt2 = tt_julian_date(dt)

    if body == "moon":
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", erfa.ErfaWarning)
            pv = erfa.moon98(tt1, tt2)
        rbpn = erfa.pnm06a(tt1, tt2)
        return _direction(erfa.rxp(rbpn, pv["p"]))

    if body == "sun":
        geo = -_earth_heliocentric(tt1, tt2)
    elif body in PLANET_NUMBERS:
        number = PLANET_NUMBERS[body]
        geo = _light_time_corrected(
            lambda d1, d2: _planet_heliocentric(number, d1, d2), tt1, tt2
        )
    else:
        raise ValueError(f"Unknown planet: {name}")

    ra, dec = _direction(geo)
    return apparent_place(ra, dec, dt)


def normalize_elements(elements) -> dict:
    """Lower-case element keys and check the set is complete for its form."""
    normalized = {str(k).lower(): v for k, v in elements.items()}
    if normalized.get("epoch") is None:
        raise ConstructionError("Orbital elements require an epoch")

    jform = normalized.get("jform")
    if jform is None:
        if normalized.get("aorl") is None:
            jform = 3
        elif normalized.get("dm") is not None:
            jform = 1
        else:
            jform = 2
    jform = int(jform)
    if jform not in _REQUIRED_ELEMENTS:
        raise ConstructionError(f"Unsupported element form: {jform}")

    missing = [k for k in _REQUIRED_ELEMENTS[jform] if normalized.get(k) is None]
    if missing:
        raise ConstructionError(f"Orbital elements missing: {', '.join(missing)}")

    result = {"jform": jform}
    for key in ELEMENT_KEYS:
        value = normalized.get(key)
        if value is not None:
            try:
                value = float(value)
            except (TypeError, ValueError) as exc:
                raise ConstructionError(f"Orbital element {key} is not numeric: {value!r}") from exc
        result[key] = value
    if result["e"] < 0:
        raise ConstructionError("Eccentricity must not be negative")
    if jform != 3 and result["e"] >= 1.0:
        raise ConstructionError("Open orbits must use the comet element form")
    return result


def _solve_kepler(m: float, e: float) -> float:
    e_anom = m if e < 0.8 else math.pi
    for _ in range(50):
        delta = (e_anom - e * math.sin(e_anom) - m) / (1 - e * math.cos(e_anom))
        e_anom -= delta
        if abs(delta) < 1e-14:
            break
    return e_anom


def _solve_hyperbolic(m: float, e: float) -> float:
    h_anom = math.asinh(m / e)
    for _ in range(50):
        delta = (e * math.sinh(h_anom) - h_anom - m) / (e * math.cosh(h_anom) - 1)
        h_anom -= delta
        if abs(delta) < 1e-14:
            break
    return h_anom


def _true_anomaly_and_radius(elements: dict, days: float) -> tuple[float, float]:
    """Two-body true anomaly and heliocentric distance ``days`` after the epoch."""
    jform = elements["jform"]
    e = elements["e"]

    if jform == 3:
        q = elements["aorq"]
        if e == 1.0:
            w = 3.0 * GAUSS_K / math.sqrt(2.0 * q ** 3) * days
            y = np.cbrt(w / 2.0 + math.sqrt(w * w / 4.0 + 1.0))
            s = float(y - 1.0 / y)
            return 2.0 * math.atan(s), q * (1.0 + s * s)
        if e > 1.0:
            a = q / (e - 1.0)
            m = GAUSS_K / a ** 1.5 * days
            h_anom = _solve_hyperbolic(m, e)
            v = 2.0 * math.atan(math.sqrt((e + 1.0) / (e - 1.0)) * math.tanh(h_anom / 2.0))
            return v, a * (e * math.cosh(h_anom) - 1.0)
        a = q / (1.0 - e)
        m = GAUSS_K / a ** 1.5 * days
    else:
        a = elements["aorq"]
        n = elements["dm"] if elements["dm"] is not None else GAUSS_K / a ** 1.5
        m = elements["aorl"] + n * days
        if jform == 1:
            # mean longitude minus longitude of perihelion
            m -= elements["perih"]

    e_anom = _solve_kepler(math.remainder(m, 2.0 * math.pi), e)
    v = 2.0 * math.atan2(
        math.sqrt(1.0 + e) * math.sin(e_anom / 2.0),
        math.sqrt(1.0 - e) * math.cos(e_anom / 2.0),
    )
    return v, a * (1.0 - e * math.cos(e_anom))


def elements_heliocentric(elements: dict, tt1: float, tt2: float) -> np.ndarray:
    """Heliocentric J2000 equatorial position (au) from normalized elements."""
    days = (tt1 - _MJD_ZERO) + tt2 - elements["epoch"]
    v, r = _true_anomaly_and_radius(elements, days)

    n = elements["anode"]
    i = elements["orbinc"]
    w = elements["perih"]
    if elements["jform"] == 1:
        # longitude of perihelion -> argument of perihelion
        w -= n

    xh = r * (math.cos(n) * math.cos(v + w) - math.sin(n) * math.sin(v + w) * math.cos(i))
    yh = r * (math.sin(n) * math.cos(v + w) + math.cos(n) * math.sin(v + w) * math.cos(i))
    zh = r * (math.sin(v + w) * math.sin(i))

    cos_eps = math.cos(_OBLIQUITY_J2000)
    sin_eps = math.sin(_OBLIQUITY_J2000)
    return np.array([xh, yh * cos_eps - zh * sin_eps, yh * sin_eps + zh * cos_eps])


def elements_apparent_place(elements: dict, dt: datetime.datetime) -> tuple[float, float]:
    """Geocentric apparent RA/Dec of a body described by normalized elements."""
    tt1, tt2 = tt_julian_date(dt)
    geo = _light_time_corrected(
        lambda d1, d2: elements_heliocentric(elements, d1, d2), tt1, tt2
    )
    ra, dec = _direction(geo)
    return apparent_place(ra, dec, dt)
