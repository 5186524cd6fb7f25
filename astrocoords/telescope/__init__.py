import logging
import math

from astrocoords.errors import UnknownTelescopeError
from .base import AzElLimits, HaDecLimits, LimitWindow, Telescope, TelescopeLike

logger = logging.getLogger(__name__)

_HOURS_TO_RAD = math.pi / 12.0

BUILTIN_TELESCOPES = {
    "JCMT": Telescope(
        name="JCMT",
        full_name="James Clerk Maxwell Telescope",
        longitude_rad=math.radians(-155.477),
        latitude_rad=math.radians(19.822808),
        elevation_m=4092.0,
        limit_window=AzElLimits(el_min=math.radians(5.0), el_max=math.radians(88.0)),
    ),
    "UKIRT": Telescope(
        name="UKIRT",
        full_name="United Kingdom Infrared Telescope",
        longitude_rad=math.radians(-155.470215),
        latitude_rad=math.radians(19.822558),
        elevation_m=4194.0,
        limit_window=HaDecLimits(
            ha_min=-4.5 * _HOURS_TO_RAD,
            ha_max=4.5 * _HOURS_TO_RAD,
            dec_min=math.radians(-42.0),
            dec_max=math.radians(60.0),
        ),
    ),
    "GREENWICH": Telescope(
        name="GREENWICH",
        full_name="Royal Observatory Greenwich",
        longitude_rad=0.0,
        latitude_rad=math.radians(51.4769),
        elevation_m=46.0,
    ),
}


def _limits_from_table(name: str, table) -> LimitWindow | None:
    if not table:
        return None
    kind = str(table.get("type", "")).upper()
    if kind == "AZEL":
        return AzElLimits(
            el_min=math.radians(table["el_min_deg"]),
            el_max=math.radians(table["el_max_deg"]),
        )
    if kind == "HADEC":
        return HaDecLimits(
            ha_min=table["ha_min_hours"] * _HOURS_TO_RAD,
            ha_max=table["ha_max_hours"] * _HOURS_TO_RAD,
            dec_min=math.radians(table["dec_min_deg"]),
            dec_max=math.radians(table["dec_max_deg"]),
        )
    logger.warning("Telescope %s has unknown limit type %r; ignoring limits", name, kind)
    return None


def telescope_from_table(name: str, table: dict) -> Telescope:
    return Telescope(
        name=name,
        full_name=table.get("full_name"),
        longitude_rad=math.radians(table["longitude_deg"]),
        latitude_rad=math.radians(table["latitude_deg"]),
        elevation_m=table.get("elevation_m"),
        limit_window=_limits_from_table(name, table.get("limits")),
    )


def get_telescope(name: str, config=None) -> Telescope:
    """Look up a telescope by name, configuration first, then builtins.

    ``SITE`` refers to the ``[site]`` section of the configuration.
    """
    key = name.strip().upper()
    if config is not None:
        tables = config.telescopes
        if key in tables:
            return telescope_from_table(key, tables[key])
        if key == "SITE" and config.site_latitude_deg is not None:
            return Telescope(
                name="SITE",
                longitude_rad=math.radians(config.site_longitude_deg or 0.0),
                latitude_rad=math.radians(config.site_latitude_deg),
                elevation_m=config.site_elevation_m,
            )
    if key in BUILTIN_TELESCOPES:
        return BUILTIN_TELESCOPES[key]
    raise UnknownTelescopeError(f"Unknown telescope: {name}")


def get_default_telescope(config) -> Telescope | None:
    if config.default_telescope is None:
        return None
    return get_telescope(config.default_telescope, config)


__all__ = [
    "AzElLimits",
    "HaDecLimits",
    "LimitWindow",
    "Telescope",
    "TelescopeLike",
    "BUILTIN_TELESCOPES",
    "get_telescope",
    "get_default_telescope",
    "telescope_from_table",
]
