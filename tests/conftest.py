import pytest

from codegrep.backends.models import SearchParams
from codegrep.core.palette import Palette


@pytest.fixture
def params():
    return SearchParams(query="foo")


@pytest.fixture
def colors():
    return Palette.default()


@pytest.fixture
def no_colors():
    return Palette.none()
