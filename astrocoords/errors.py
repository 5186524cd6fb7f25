class AstrocoordsError(Exception):
    """Base exception for astrocoords errors."""


class ConstructionError(AstrocoordsError):
    """Raised when a coordinate specification cannot be turned into an object."""


class AngleParseError(ConstructionError, ValueError):
    """Raised for malformed angle strings or unknown unit hints."""


class TelescopeRequiredError(ConstructionError):
    """Raised when a calculation needs a telescope and none is attached."""


class TypeMismatchError(AstrocoordsError, TypeError):
    """Raised when a setter receives an object of the wrong kind."""


class UnimplementedError(NotImplementedError, AstrocoordsError):
    """Raised for operations a coordinate variant does not provide."""


class UnknownTelescopeError(AstrocoordsError, LookupError):
    """Raised when a telescope name is not in the registry or configuration."""
