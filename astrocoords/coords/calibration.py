from dataclasses import dataclass
import math

from astrocoords.astrometry import local_sidereal_time_at
from .base import CoordinateVariant
from .types import ObservingContext


@dataclass(frozen=True)
class Calibration(CoordinateVariant):
    """Placeholder used for calibration observations.

    It sits at the zenith and is never reported as observable.
    """

    type = "CAL"
    has_geometry = False

    def apparent(self, context: ObservingContext) -> tuple[float, float]:
        return local_sidereal_time_at(context.now(), context.longitude), context.latitude

    def fixed_horizon(self) -> tuple[float, float]:
        return 0.0, math.pi / 2.0

    def array(self) -> tuple:
        return self._pad((self.type,))
