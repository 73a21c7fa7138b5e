"""
Shared fixtures: a reference seed and its palettes.
"""

import pytest

from monet_palette import generate

SEED = "#1B6EF3"


@pytest.fixture(scope="session")
def seed() -> str:
    return SEED


@pytest.fixture(scope="session")
def tonal_spot(seed):
    return generate(seed, "TONAL_SPOT")


@pytest.fixture(scope="session")
def monochromatic(seed):
    return generate(seed, "MONOCHROMATIC")
