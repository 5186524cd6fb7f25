import datetime
import logging
from typing import Mapping

from astrocoords.ephemeris import is_known_body
from astrocoords.errors import ConstructionError, TypeMismatchError
from astrocoords.telescope import get_telescope
from .base import CoordinateTarget, CoordinateVariant
from .calibration import Calibration
from .elements import OrbitalElements, has_epoch
from .equatorial import FixedEquatorial
from .fixed import FixedHorizon
from .planet import NamedPlanet
from .types import Observability, ObservingContext

logger = logging.getLogger(__name__)

# Keys describing the observing context rather than the position itself.
CONTEXT_KEYS = ("tel", "datetime", "name")


def select_variant(args: Mapping) -> CoordinateVariant:
    """Build the coordinate variant described by ``args``.

    The first matching rule wins: a recognised planet name, an element set
    with an epoch, a sky frame ``type``, any of az/el/ha, and finally an
    empty specification for calibration.
    """
    planet = args.get("planet")
    if planet and is_known_body(planet):
        logger.debug("Selected planet %s", planet)
        return NamedPlanet(planet)

    if has_epoch(args.get("elements")):
        logger.debug("Selected orbital elements")
        return OrbitalElements.from_spec(args)

    if args.get("type") is not None:
        logger.debug("Selected fixed %s coordinates", args["type"])
        return FixedEquatorial.from_spec(args)

    if any(key in args for key in ("az", "el", "ha")):
        logger.debug("Selected horizon-fixed coordinates")
        return FixedHorizon.from_spec(args)

    if not any(key not in CONTEXT_KEYS for key in args):
        logger.debug("Selected calibration")
        return Calibration()

    raise ConstructionError(f"Unrecognized coordinate specification: {sorted(args)}")


def from_spec(args: Mapping, clock=None, config=None) -> CoordinateTarget:
    """Create a :class:`CoordinateTarget` from a named-argument mapping.

    ``tel`` may be a telescope object or a registry name (looked up in
    ``config`` first), ``datetime`` fixes the reference time and ``name``
    labels the target.
    """
    when = args.get("datetime")
    if when is not None and not isinstance(when, datetime.datetime):
        raise TypeMismatchError(
            f"Reference time must be a datetime.datetime, got {type(when).__name__}"
        )
    variant = select_variant(args)
    kwargs = {"name": args.get("name"), "time": args.get("datetime")}
    if clock is not None:
        kwargs["clock"] = clock
    target = CoordinateTarget(variant, **kwargs)

    tel = args.get("tel")
    if isinstance(tel, str):
        tel = get_telescope(tel, config)
    target.telescope = tel
    return target


def new_coords(**kwargs) -> CoordinateTarget:
    return from_spec(kwargs)


__all__ = [
    "Calibration",
    "CoordinateTarget",
    "CoordinateVariant",
    "FixedEquatorial",
    "FixedHorizon",
    "NamedPlanet",
    "Observability",
    "ObservingContext",
    "OrbitalElements",
    "from_spec",
    "new_coords",
    "select_variant",
]
