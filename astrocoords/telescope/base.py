from dataclasses import dataclass
from typing import Protocol, Union, runtime_checkable


@dataclass(frozen=True)
class AzElLimits:
    el_min: float
    el_max: float

    type = "AZEL"


@dataclass(frozen=True)
class HaDecLimits:
    ha_min: float
    ha_max: float
    dec_min: float
    dec_max: float

    type = "HADEC"


LimitWindow = Union[AzElLimits, HaDecLimits]


@runtime_checkable
class TelescopeLike(Protocol):
    """Anything that can tell a coordinate where it is being observed from."""

    def longitude(self) -> float: ...

    def latitude(self) -> float: ...

    def limits(self): ...

    def display_name(self) -> str: ...


@dataclass(frozen=True)
class Telescope:
    """Observatory site with an optional pointing envelope.

    Longitude is east-positive, all angles in radians.
    """

    name: str
    longitude_rad: float
    latitude_rad: float
    full_name: str | None = None
    limit_window: LimitWindow | None = None
    elevation_m: float | None = None

    def longitude(self) -> float:
        return self.longitude_rad

    def latitude(self) -> float:
        return self.latitude_rad

    def limits(self) -> LimitWindow | None:
        return self.limit_window

    def display_name(self) -> str:
        return self.full_name or self.name
