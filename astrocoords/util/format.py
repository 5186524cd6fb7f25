import enum
import math
import re
from typing import Tuple

from astrocoords.errors import AngleParseError

# Seconds of arc (or time) are always rendered to this many decimal places.
SECONDS_PRECISION = 2

_TWO_PI = 2.0 * math.pi
_RAD_TO_HOURS = 12.0 / math.pi
_HOURS_TO_RAD = math.pi / 12.0

_SEPARATOR_RE = re.compile(r"[:\s]")
_SEXAGESIMAL_RE = re.compile(
    r"^(?P<sign>[+-])?\s*(?P<major>\d+)\s+(?P<minutes>\d+)\s+(?P<seconds>\d+(?:\.\d*)?)$"
)

Components = Tuple[str, int, int, int, int]


class AngleFormat(enum.Enum):
    """Output representations for a radian value."""

    RADIANS = "radians"
    DEGREES = "degrees"
    HOURS = "hours"
    SEXAGESIMAL = "sexagesimal"
    COMPONENTS = "components"

    @classmethod
    def parse(cls, value: "AngleFormat | str | None") -> "AngleFormat":
        """Resolve a format name, matching on its first letter.

        ``"d"``/``"deg"`` give degrees, ``"h"`` decimal hours, ``"s"``
        sexagesimal strings and ``"a"``/``"c"`` component arrays.
        """
        if value is None:
            return cls.RADIANS
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        if not key:
            return cls.RADIANS
        for prefix, fmt in _FORMAT_PREFIXES:
            if key.startswith(prefix):
                return fmt
        raise ValueError(f"Unknown angle format: {value}")


_FORMAT_PREFIXES = (
    ("r", AngleFormat.RADIANS),
    ("d", AngleFormat.DEGREES),
    ("h", AngleFormat.HOURS),
    ("s", AngleFormat.SEXAGESIMAL),
    ("a", AngleFormat.COMPONENTS),
    ("c", AngleFormat.COMPONENTS),
)


def rad_to_deg(rad: float) -> float:
    return math.degrees(rad)


def rad_to_hours(rad: float) -> float:
    return rad * _RAD_TO_HOURS


def deg_to_rad(deg: float) -> float:
    return math.radians(deg)


def hours_to_rad(hours: float) -> float:
    return hours * _HOURS_TO_RAD


def split_sexagesimal(value: float, precision: int = SECONDS_PRECISION) -> Components:
    """Split a decimal value (degrees or hours) into sign/major/minutes/seconds/fraction.

    The fraction is an integer count of ``10**-precision`` seconds. Rounding
    is done once on the total so carries propagate into minutes and degrees.
    """
    sign = "-" if value < 0 else "+"
    scale = 10 ** precision
    total = int(round(abs(value) * 3600.0 * scale))
    major, rem = divmod(total, 3600 * scale)
    minutes, rem = divmod(rem, 60 * scale)
    seconds, fraction = divmod(rem, scale)
    return sign, major, minutes, seconds, fraction


def parse_sexagesimal(text: str) -> float:
    """Parse ``"[+-]dd mm ss.s"`` or ``"[+-]dd:mm:ss.s"`` into decimal units."""
    cleaned = _SEPARATOR_RE.sub(" ", text.strip())
    match = _SEXAGESIMAL_RE.match(cleaned)
    if match is None:
        raise AngleParseError(f"Malformed sexagesimal angle: {text!r}")
    major = int(match.group("major"))
    minutes = int(match.group("minutes"))
    seconds = float(match.group("seconds"))
    if minutes >= 60:
        raise AngleParseError(f"Minutes out of range in {text!r}")
    if seconds >= 60.0:
        raise AngleParseError(f"Seconds out of range in {text!r}")
    value = major + minutes / 60.0 + seconds / 3600.0
    if match.group("sign") == "-":
        value = -value
    return value


def _to_float(value) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise AngleParseError(f"Cannot interpret {value!r} as an angle") from exc


def infer_units(value) -> str:
    if isinstance(value, str):
        text = value.strip()
        if _SEPARATOR_RE.search(text):
            return "sexagesimal"
        value = _to_float(text)
    if abs(_to_float(value)) > _TWO_PI:
        return "degrees"
    return "radians"


def to_radians(value, units: str | None = None, hours: bool = False) -> float:
    """Convert an angle in any supported representation to radians.

    ``units`` is one of ``sexagesimal``, ``degrees``, ``hours`` or
    ``radians`` (only the first letter matters). When omitted it is inferred:
    strings with colons or spaces are sexagesimal, magnitudes above 2pi are
    degrees and anything else is radians. ``hours`` only affects sexagesimal
    input, which is then read as h:m:s.
    """
    if value is None:
        raise AngleParseError("No angle supplied")
    if units is None:
        units = infer_units(value)
    key = str(units).strip().lower()

    if key.startswith("s"):
        if not isinstance(value, str):
            raise AngleParseError(f"Sexagesimal angle must be a string, got {value!r}")
        decimal = parse_sexagesimal(value)
        result = hours_to_rad(decimal) if hours else deg_to_rad(decimal)
    elif key.startswith("h"):
        result = hours_to_rad(_to_float(value))
    elif key.startswith("d"):
        result = deg_to_rad(_to_float(value))
    elif key.startswith("r"):
        result = _to_float(value)
    else:
        raise AngleParseError(f"Unknown angle units: {units}")

    if not math.isfinite(result):
        raise AngleParseError(f"Angle is not finite: {value!r}")
    return result


def from_radians(value: float, fmt: AngleFormat | str | None = AngleFormat.RADIANS):
    """Render a radian value in the requested format.

    Sexagesimal and component output is in degrees; hour-like quantities
    must be divided by 15 by the caller first (see ``hour_scaled``).
    """
    fmt = AngleFormat.parse(fmt)
    if fmt is AngleFormat.RADIANS:
        return float(value)
    if fmt is AngleFormat.DEGREES:
        return rad_to_deg(value)
    if fmt is AngleFormat.HOURS:
        return rad_to_hours(value)

    components = split_sexagesimal(rad_to_deg(value))
    if fmt is AngleFormat.COMPONENTS:
        return components
    sign, major, minutes, seconds, fraction = components
    sign = "" if sign == "+" else sign
    return f"{sign}{major:02d}:{minutes:02d}:{seconds:02d}.{fraction:0{SECONDS_PRECISION}d}"


def hour_scaled(value: float, fmt: AngleFormat | str | None = AngleFormat.RADIANS):
    """Render an hour-like quantity (RA, HA, LST).

    Sexagesimal and component output is in hours rather than degrees.
    """
    fmt = AngleFormat.parse(fmt)
    if fmt in (AngleFormat.SEXAGESIMAL, AngleFormat.COMPONENTS):
        return from_radians(value / 15.0, fmt)
    return from_radians(value, fmt)
