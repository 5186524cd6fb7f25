from .format import (
    AngleFormat,
    SECONDS_PRECISION,
    deg_to_rad,
    from_radians,
    hour_scaled,
    hours_to_rad,
    parse_sexagesimal,
    rad_to_deg,
    rad_to_hours,
    split_sexagesimal,
    to_radians,
)

__all__ = [
    "AngleFormat",
    "SECONDS_PRECISION",
    "deg_to_rad",
    "from_radians",
    "hour_scaled",
    "hours_to_rad",
    "parse_sexagesimal",
    "rad_to_deg",
    "rad_to_hours",
    "split_sexagesimal",
    "to_radians",
]
