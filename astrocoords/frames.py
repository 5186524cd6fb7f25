"""Conversions between fixed sky frames, all via astropy."""

import datetime

from astropy.coordinates import FK4, FK5, ICRS, Galactic, SkyCoord, Supergalactic
import astropy.units as u

from astrocoords.astrometry import mean_place
from astrocoords.errors import ConstructionError

# Frames whose coordinates are named ra/dec; the rest use long/lat.
RADEC_FRAMES = ("J2000", "FK5", "ICRS", "B1950", "FK4", "APPARENT")
LONGLAT_FRAMES = ("GALACTIC", "SUPERGALACTIC")


def _frame(name: str):
    if name in ("J2000", "FK5"):
        return FK5()
    if name == "ICRS":
        return ICRS()
    if name in ("B1950", "FK4"):
        return FK4()
    if name == "GALACTIC":
        return Galactic()
    if name == "SUPERGALACTIC":
        return Supergalactic()
    raise ConstructionError(f"Unsupported coordinate type: {name}")


def normalize_frame_name(name) -> str:
    key = str(name).strip().upper()
    if key not in RADEC_FRAMES + LONGLAT_FRAMES:
        raise ConstructionError(f"Unsupported coordinate type: {name}")
    return key


def to_fk5_j2000(
    a_rad: float,
    b_rad: float,
    frame: str,
    dt: datetime.datetime | None = None,
) -> tuple[float, float]:
    """Convert a position in ``frame`` to FK5 J2000 RA/Dec (radians).

    Apparent positions need the instant ``dt`` they refer to.
    """
    frame = normalize_frame_name(frame)
    if frame == "APPARENT":
        if dt is None:
            raise ConstructionError("Apparent coordinates require a reference datetime")
        return mean_place(a_rad, b_rad, dt)
    if frame in ("J2000", "FK5"):
        return a_rad, b_rad
    coord = SkyCoord(a_rad * u.rad, b_rad * u.rad, frame=_frame(frame))
    fk5 = coord.transform_to(FK5())
    return float(fk5.ra.rad), float(fk5.dec.rad)


def fk5_to_galactic(ra_rad: float, dec_rad: float) -> tuple[float, float]:
    coord = SkyCoord(ra=ra_rad * u.rad, dec=dec_rad * u.rad, frame=FK5())
    gal = coord.galactic
    return float(gal.l.rad), float(gal.b.rad)
