from __future__ import annotations

from abc import ABC, abstractmethod
import dataclasses
import datetime

from astrocoords.astrometry import (
    angular_separation,
    equatorial_to_horizon,
    local_sidereal_time_at,
    normalize_to_signed_pi,
    parallactic_angle,
)
from astrocoords.errors import TelescopeRequiredError, TypeMismatchError, UnimplementedError
from astrocoords.frames import fk5_to_galactic
from astrocoords.telescope import TelescopeLike, get_telescope
from astrocoords.util.format import (
    AngleFormat,
    from_radians,
    hour_scaled,
    rad_to_deg,
    rad_to_hours,
)
from .observability import ObservabilityChecker
from .types import Observability, ObservingContext, utcnow

# Number of entries in a summary array: type tag, ra2000, dec2000 and up to
# eight defining parameters.
SUMMARY_LENGTH = 11


class CoordinateVariant(ABC):
    """Minimal defining data for one way of specifying a position."""

    type: str = "UNKNOWN"
    has_geometry = True

    @abstractmethod
    def apparent(self, context: ObservingContext) -> tuple[float, float]:
        """Geocentric apparent RA/Dec (radians) for the context's time and telescope."""

    def fixed_horizon(self) -> tuple[float, float] | None:
        """Azimuth/elevation when they are part of the definition, else None."""
        return None

    def radec2000(self) -> tuple[float, float] | None:
        """FK5 J2000 RA/Dec when the variant has a catalog position."""
        return None

    def array(self) -> tuple:
        raise UnimplementedError(
            f"{type(self).__name__} must provide its own summary array"
        )

    @staticmethod
    def _pad(values) -> tuple:
        values = tuple(values)
        return values + (None,) * (SUMMARY_LENGTH - len(values))


class CoordinateTarget:
    """A coordinate variant observed from a given telescope at a given time.

    Every accessor recomputes from the current context. When no explicit
    time has been set the injected clock is read once per accessor call.
    """

    def __init__(
        self,
        variant: CoordinateVariant,
        time: datetime.datetime | None = None,
        telescope=None,
        clock=utcnow,
        name: str | None = None,
    ):
        self._variant = variant
        self._context = ObservingContext(clock=clock)
        self.name = name
        if time is not None:
            self.datetime = time
        if telescope is not None:
            self.telescope = telescope

    def __repr__(self) -> str:
        return f"CoordinateTarget({self._variant!r}, context={self._context!r})"

    def __str__(self) -> str:
        return self.status_summary()

    def __eq__(self, other) -> bool:
        if not isinstance(other, CoordinateTarget):
            return NotImplemented
        return (
            self._variant == other._variant
            and self._context == other._context
            and self.name == other.name
        )

    @property
    def variant(self) -> CoordinateVariant:
        return self._variant

    @property
    def type(self) -> str:
        return self._variant.type

    @property
    def context(self) -> ObservingContext:
        return self._context

    @property
    def datetime(self) -> datetime.datetime:
        return self._context.now()

    @datetime.setter
    def datetime(self, value: datetime.datetime | None) -> None:
        if value is not None and not isinstance(value, datetime.datetime):
            raise TypeMismatchError(
                f"Reference time must be a datetime.datetime, got {type(value).__name__}"
            )
        self._context.time = value

    @property
    def telescope(self):
        return self._context.telescope

    @telescope.setter
    def telescope(self, value) -> None:
        if isinstance(value, str):
            value = get_telescope(value)
        elif value is not None and not isinstance(value, TelescopeLike):
            raise TypeMismatchError(
                f"Telescope must provide longitude/latitude/limits/display_name, "
                f"got {type(value).__name__}"
            )
        self._context.telescope = value

    def _snapshot(self) -> ObservingContext:
        return dataclasses.replace(self._context, time=self._context.now())

    def _apparent(self, ctx: ObservingContext) -> tuple[float, float]:
        return self._variant.apparent(ctx)

    def _lst(self, ctx: ObservingContext) -> float:
        return local_sidereal_time_at(ctx.now(), ctx.longitude)

    def _hadec(self, ctx: ObservingContext) -> tuple[float, float]:
        ra, dec = self._apparent(ctx)
        return normalize_to_signed_pi(self._lst(ctx) - ra), dec

    def _azel(self, ctx: ObservingContext) -> tuple[float, float]:
        fixed = self._variant.fixed_horizon()
        if fixed is not None:
            return fixed
        ha, dec = self._hadec(ctx)
        return equatorial_to_horizon(ha, dec, ctx.latitude)

    def apparent_ra(self, fmt: AngleFormat | str = AngleFormat.RADIANS):
        return hour_scaled(self._apparent(self._snapshot())[0], fmt)

    def apparent_dec(self, fmt: AngleFormat | str = AngleFormat.RADIANS):
        return from_radians(self._apparent(self._snapshot())[1], fmt)

    def local_sidereal_time(self, fmt: AngleFormat | str = AngleFormat.RADIANS):
        return hour_scaled(self._lst(self._snapshot()), fmt)

    def hour_angle(self, fmt: AngleFormat | str = AngleFormat.RADIANS):
        return hour_scaled(self._hadec(self._snapshot())[0], fmt)

    def hadec(self, fmt: AngleFormat | str = AngleFormat.RADIANS):
        ha, dec = self._hadec(self._snapshot())
        return hour_scaled(ha, fmt), from_radians(dec, fmt)

    def azimuth(self, fmt: AngleFormat | str = AngleFormat.RADIANS):
        return from_radians(self._azel(self._snapshot())[0], fmt)

    def elevation(self, fmt: AngleFormat | str = AngleFormat.RADIANS):
        return from_radians(self._azel(self._snapshot())[1], fmt)

    def azel(self, fmt: AngleFormat | str = AngleFormat.RADIANS):
        az, el = self._azel(self._snapshot())
        return from_radians(az, fmt), from_radians(el, fmt)

    def parallactic_angle(self, fmt: AngleFormat | str = AngleFormat.RADIANS):
        ctx = self._snapshot()
        ha, dec = self._hadec(ctx)
        return from_radians(parallactic_angle(ha, dec, ctx.latitude), fmt)

    def radec2000(self, fmt: AngleFormat | str = AngleFormat.RADIANS):
        position = self._variant.radec2000()
        if position is None:
            raise UnimplementedError(f"{self.type} coordinates have no fixed J2000 position")
        ra, dec = position
        return hour_scaled(ra, fmt), from_radians(dec, fmt)

    def galactic(self, fmt: AngleFormat | str = AngleFormat.RADIANS):
        position = self._variant.radec2000()
        if position is None:
            raise UnimplementedError(f"{self.type} coordinates have no fixed galactic position")
        lon, lat = fk5_to_galactic(*position)
        return from_radians(lon, fmt), from_radians(lat, fmt)

    def distance(self, other: CoordinateTarget, fmt: AngleFormat | str = AngleFormat.RADIANS):
        """Angular separation of the apparent positions at this target's time."""
        ctx = self._snapshot()
        other_ctx = dataclasses.replace(other.context, time=ctx.time)
        ra1, dec1 = self._apparent(ctx)
        ra2, dec2 = other.variant.apparent(other_ctx)
        return from_radians(angular_separation(ra1, dec1, ra2, dec2), fmt)

    def observability(self) -> Observability:
        return self._observability_in(self._snapshot())

    def _observability_in(self, ctx: ObservingContext) -> Observability:
        if ctx.telescope is not None and not self._variant.has_geometry:
            return Observability.NOT_OBSERVABLE
        checker = ObservabilityChecker(ctx.telescope)
        return checker.check(
            elevation=lambda: self._azel(ctx)[1],
            hour_angle=lambda: self._hadec(ctx)[0],
            declination=lambda: self._apparent(ctx)[1],
        )

    def is_observable(self) -> bool:
        return self.observability() is Observability.OBSERVABLE

    def status_summary(self) -> str:
        ctx = self._snapshot()
        lines = [f"Coordinate type:{self.type}"]
        if self.name:
            lines.append(f"Name:           {self.name}")
        try:
            az, el = self._azel(ctx)
            ha, dec = self._hadec(ctx)
        except TelescopeRequiredError as exc:
            lines.append(f"Position unavailable: {exc}")
        else:
            lines.append(f"Elevation:      {rad_to_deg(el):.6f} deg")
            lines.append(f"Azimuth  :      {rad_to_deg(az):.6f} deg")
            lines.append(f"Hour angle:     {rad_to_hours(normalize_to_signed_pi(ha)):.6f} hrs")
            lines.append(f"Apparent dec:   {rad_to_deg(dec):.6f} deg")
        if ctx.telescope is not None:
            lines.append(f"Telescope:      {ctx.telescope.display_name()}")
            if self._observability_in(ctx) is Observability.OBSERVABLE:
                lines.append("The target is currently observable")
            else:
                lines.append("The target is not currently observable")
        lines.append(f"For time {ctx.time.isoformat()}")
        return "\n".join(lines) + "\n"

    def summary_array(self) -> tuple:
        return self._variant.array()
