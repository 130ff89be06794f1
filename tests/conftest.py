from __future__ import annotations

import random

import numpy as np
import pytest
from hypothesis import seed, settings


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line("markers", "hypothesis: property-based tests")
    config.addinivalue_line("markers", "performance: timing-sensitive tests")
    config.addinivalue_line("markers", "slow: tests that scan very large inputs")


# ---- Deterministic Testing Configuration ---------------------

DETERMINISTIC_SEED = 42


@pytest.fixture(autouse=True)
def set_deterministic_seed():
    """Set deterministic seed for all tests"""
    random.seed(DETERMINISTIC_SEED)
    np.random.seed(DETERMINISTIC_SEED)
    yield
    random.seed()
    np.random.seed()


settings.register_profile(
    "deterministic",
    deadline=None,
    max_examples=200,
    derandomize=False,
    database=None,
)
settings.load_profile("deterministic")
seed(DETERMINISTIC_SEED)


# ---- Shared data ------------------------------------------------


@pytest.fixture
def fruit_choices() -> list[str]:
    return ["apple", "apply", "application", "banana", "grape", "pineapple", "orange"]


@pytest.fixture
def company_choices() -> list[str]:
    return [
        "Acme Corporation",
        "Acme Corp",
        "ACME Holdings Ltd",
        "Globex Corporation",
        "Initech",
        "Umbrella Corp",
        "Acme-Widgets_International",
        "Stark Industries",
        "Wayne Enterprises",
        "Wonka Industries",
        "Cyberdyne Systems",
        "Soylent Corp",
    ]

