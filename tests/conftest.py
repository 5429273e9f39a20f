# tests/conftest.py
import pytest

from uiauto_macos.config import TimeConfig
from uiauto_macos.timinglogger import TIMING_LOGGER

from tests.fakes import FakeClock


@pytest.fixture(autouse=True)
def reset_time_config():
    TimeConfig.reset_to_defaults()
    yield
    TimeConfig.reset_to_defaults()
    TIMING_LOGGER.disable()


@pytest.fixture
def clock():
    return FakeClock()
