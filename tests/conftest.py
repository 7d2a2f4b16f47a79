import os

# plots in the tests are never shown
os.environ.setdefault('MPLBACKEND', 'Agg')

import pytest
import birthday_settings


@pytest.fixture(autouse=True)
def default_settings():
    birthday_settings.reset()
    yield
    birthday_settings.reset()
