from dataclasses import dataclass
from typing import Mapping

from astrocoords.astrometry import (
    horizon_to_equatorial,
    local_sidereal_time_at,
    normalize_to_2pi,
)
from astrocoords.errors import ConstructionError, TelescopeRequiredError
from astrocoords.util.format import to_radians
from .base import CoordinateVariant
from .equatorial import split_units
from .types import ObservingContext


@dataclass(frozen=True)
class FixedHorizon(CoordinateVariant):
    """A position fixed relative to the telescope rather than the sky.

    Defined either by azimuth/elevation or by hour angle/declination; the
    latter needs a telescope whenever a position is derived.
    """

    az: float | None = None
    el: float | None = None
    ha: float | None = None
    dec: float | None = None

    type = "FIXED"

    def __post_init__(self):
        azel = self.az is not None and self.el is not None
        hadec = self.ha is not None and self.dec is not None
        if azel == hadec:
            raise ConstructionError(
                "Fixed coordinates need exactly one of az/el or ha/dec"
            )

    @classmethod
    def from_spec(cls, args: Mapping) -> "FixedHorizon":
        first_units, second_units = split_units(args.get("units"))
        if args.get("ha") is not None:
            if args.get("dec") is None:
                raise ConstructionError("Hour angle requires a declination")
            return cls(
                ha=to_radians(args["ha"], first_units, hours=True),
                dec=to_radians(args["dec"], second_units),
            )
        if args.get("az") is None or args.get("el") is None:
            raise ConstructionError("Fixed coordinates require both az and el")
        return cls(
            az=normalize_to_2pi(to_radians(args["az"], first_units)),
            el=to_radians(args["el"], second_units),
        )

    def apparent(self, context: ObservingContext) -> tuple[float, float]:
        if self.ha is not None:
            if context.telescope is None:
                raise TelescopeRequiredError(
                    "Hour angle/declination coordinates require a telescope"
                )
            lst = local_sidereal_time_at(context.now(), context.longitude)
            return normalize_to_2pi(lst - self.ha), self.dec
        return horizon_to_equatorial(
            self.az, self.el, context.latitude, context.longitude, context.now()
        )

    def fixed_horizon(self) -> tuple[float, float] | None:
        if self.az is None:
            return None
        return self.az, self.el

    def array(self) -> tuple:
        return self._pad((self.type, None, None, self.az, self.el, self.ha, self.dec))
