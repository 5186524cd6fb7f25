from dataclasses import dataclass, field
from typing import Mapping

from astrocoords.ephemeris import ELEMENT_KEYS, elements_apparent_place, normalize_elements
from .base import CoordinateVariant
from .types import ObservingContext


def has_epoch(elements) -> bool:
    if not isinstance(elements, Mapping):
        return False
    return any(str(k).lower() == "epoch" and v is not None for k, v in elements.items())


@dataclass(frozen=True)
class OrbitalElements(CoordinateVariant):
    """Heliocentric osculating elements, propagated on demand.

    Keys follow the classic ``planel`` conventions: ``epoch`` (MJD),
    ``orbinc``, ``anode``, ``perih``, ``aorq``, ``e``, ``aorl``, ``dm`` and
    ``jform``. Angles are radians and distances au.
    """

    elements: dict = field(hash=False)

    type = "ELEMENTS"

    @classmethod
    def from_spec(cls, args: Mapping) -> "OrbitalElements":
        return cls(elements=normalize_elements(args["elements"]))

    def apparent(self, context: ObservingContext) -> tuple[float, float]:
        return elements_apparent_place(self.elements, context.now())

    def array(self) -> tuple:
        return self._pad(
            (self.type, None, None) + tuple(self.elements[k] for k in ELEMENT_KEYS)
        )
