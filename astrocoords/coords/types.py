from dataclasses import dataclass, field
import datetime
import enum
from typing import Callable

from astrocoords.telescope import TelescopeLike


def utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


class Observability(enum.Enum):
    OBSERVABLE = "observable"
    NOT_OBSERVABLE = "not_observable"
    NO_TELESCOPE = "no_telescope"
    UNKNOWN_LIMITS = "unknown_limits"


@dataclass
class ObservingContext:
    """Reference time and telescope for time-dependent quantities.

    ``clock`` is only consulted when no explicit ``time`` has been set.
    """

    time: datetime.datetime | None = None
    telescope: TelescopeLike | None = None
    clock: Callable[[], datetime.datetime] = field(default=utcnow, repr=False, compare=False)

    def now(self) -> datetime.datetime:
        if self.time is not None:
            return self.time
        return self.clock()

    @property
    def longitude(self) -> float:
        return self.telescope.longitude() if self.telescope is not None else 0.0

    @property
    def latitude(self) -> float:
        return self.telescope.latitude() if self.telescope is not None else 0.0
