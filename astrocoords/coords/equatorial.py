from dataclasses import dataclass
from typing import Mapping

from astrocoords.astrometry import apparent_place
from astrocoords.errors import ConstructionError
from astrocoords.frames import LONGLAT_FRAMES, normalize_frame_name, to_fk5_j2000
from astrocoords.util.format import to_radians
from .base import CoordinateVariant
from .types import ObservingContext


def split_units(units) -> tuple:
    """Expand a ``units`` argument into one hint per coordinate."""
    if units is None or isinstance(units, str):
        return units, units
    units = tuple(units)
    if len(units) != 2:
        raise ConstructionError(f"Expected one or two unit hints, got {units!r}")
    return units


@dataclass(frozen=True)
class FixedEquatorial(CoordinateVariant):
    """Fixed sky position, stored as FK5 J2000 RA/Dec in radians."""

    ra2000: float
    dec2000: float

    type = "RADEC"

    @classmethod
    def from_spec(cls, args: Mapping) -> "FixedEquatorial":
        frame = normalize_frame_name(args["type"])
        ra_units, dec_units = split_units(args.get("units"))

        if frame in LONGLAT_FRAMES:
            first, second = args.get("long"), args.get("lat")
            if first is None or second is None:
                raise ConstructionError(f"{frame} coordinates require long and lat")
            hours = False
        else:
            first, second = args.get("ra"), args.get("dec")
            if first is None or second is None:
                raise ConstructionError(f"{frame} coordinates require ra and dec")
            hours = True

        a = to_radians(first, ra_units, hours=hours)
        b = to_radians(second, dec_units)
        ra, dec = to_fk5_j2000(a, b, frame, args.get("datetime"))
        return cls(ra2000=ra, dec2000=dec)

    def apparent(self, context: ObservingContext) -> tuple[float, float]:
        return apparent_place(self.ra2000, self.dec2000, context.now())

    def radec2000(self) -> tuple[float, float]:
        return self.ra2000, self.dec2000

    def array(self) -> tuple:
        return self._pad((self.type, self.ra2000, self.dec2000))
