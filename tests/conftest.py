import datetime

import pytest

from astrocoords.telescope import BUILTIN_TELESCOPES


@pytest.fixture
def ref_time():
    # Fixed instant keeps every derived quantity reproducible.
    return datetime.datetime(2024, 1, 15, 10, 0, tzinfo=datetime.timezone.utc)


@pytest.fixture
def jcmt():
    return BUILTIN_TELESCOPES["JCMT"]


@pytest.fixture
def ukirt():
    return BUILTIN_TELESCOPES["UKIRT"]
