import logging
from typing import Callable

from astrocoords.astrometry import normalize_to_signed_pi
from astrocoords.telescope import AzElLimits, HaDecLimits
from .types import Observability

logger = logging.getLogger(__name__)


class ObservabilityChecker:
    """Test a position against a telescope's pointing envelope.

    Positions are supplied as callables so that only the quantities the
    limit type needs are ever computed. All comparisons are strict: a
    position exactly on a limit is not observable.
    """

    def __init__(self, telescope):
        self.telescope = telescope

    def check(
        self,
        elevation: Callable[[], float],
        hour_angle: Callable[[], float],
        declination: Callable[[], float],
    ) -> Observability:
        if self.telescope is None:
            return Observability.NO_TELESCOPE

        limits = self.telescope.limits()
        if isinstance(limits, AzElLimits):
            el = elevation()
            if limits.el_min < el < limits.el_max:
                return Observability.OBSERVABLE
            return Observability.NOT_OBSERVABLE

        if isinstance(limits, HaDecLimits):
            ha = normalize_to_signed_pi(hour_angle())
            if not limits.ha_min < ha < limits.ha_max:
                return Observability.NOT_OBSERVABLE
            if limits.dec_min < declination() < limits.dec_max:
                return Observability.OBSERVABLE
            return Observability.NOT_OBSERVABLE

        logger.debug(
            "Telescope %s has no recognised limits (%r)",
            self.telescope.display_name(),
            limits,
        )
        return Observability.UNKNOWN_LIMITS
