from .coords import (
    Calibration,
    CoordinateTarget,
    CoordinateVariant,
    FixedEquatorial,
    FixedHorizon,
    NamedPlanet,
    Observability,
    ObservingContext,
    OrbitalElements,
    from_spec,
    new_coords,
)
from .errors import (
    AngleParseError,
    AstrocoordsError,
    ConstructionError,
    TelescopeRequiredError,
    TypeMismatchError,
    UnimplementedError,
    UnknownTelescopeError,
)
from .telescope import AzElLimits, HaDecLimits, Telescope, get_telescope
from .util.format import AngleFormat, from_radians, to_radians

__all__ = [
    "AngleFormat",
    "AngleParseError",
    "AstrocoordsError",
    "AzElLimits",
    "Calibration",
    "ConstructionError",
    "CoordinateTarget",
    "CoordinateVariant",
    "FixedEquatorial",
    "FixedHorizon",
    "HaDecLimits",
    "NamedPlanet",
    "Observability",
    "ObservingContext",
    "OrbitalElements",
    "Telescope",
    "TelescopeRequiredError",
    "TypeMismatchError",
    "UnimplementedError",
    "UnknownTelescopeError",
    "from_radians",
    "from_spec",
    "get_telescope",
    "new_coords",
    "to_radians",
]
