import pytest

from utils.registry import load_catalog


@pytest.fixture
def bat23():
    return load_catalog("BAT23")


@pytest.fixture
def bat33():
    return load_catalog("BAT33")
