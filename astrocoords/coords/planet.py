from dataclasses import dataclass

from astrocoords.ephemeris import body_apparent_place, is_known_body
from astrocoords.errors import ConstructionError
from .base import CoordinateVariant
from .types import ObservingContext


@dataclass(frozen=True)
class NamedPlanet(CoordinateVariant):
    """The Sun, the Moon or one of the major planets."""

    name: str

    type = "PLANET"

    def __post_init__(self):
        if not is_known_body(self.name):
            raise ConstructionError(f"Unknown planet: {self.name}")
        object.__setattr__(self, "name", self.name.strip().lower())

    def apparent(self, context: ObservingContext) -> tuple[float, float]:
        return body_apparent_place(self.name, context.now())

    def array(self) -> tuple:
        return self._pad((self.name.upper(),))
