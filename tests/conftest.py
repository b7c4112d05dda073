import random

import pytest

from orrery.data_models import BodyDescriptor
from orrery.presets_loader import template_solar_system


@pytest.fixture
def earth():
    return BodyDescriptor(10, 1.0, 1.0, "/textures/2k_earth.jpg")


@pytest.fixture
def saturn():
    return BodyDescriptor(21, 9.4, 0.3, "/textures/2k_saturn.jpg", has_ring=True)


@pytest.fixture
def solar_system():
    return template_solar_system()


@pytest.fixture
def rng():
    return random.Random(1234)
