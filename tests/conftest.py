"""Shared fixtures for the defense simulation tests."""
import random

import pytest

from game.defense.store import EntityStore
from game.defense.simulation import DefenseSimulation


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def world() -> EntityStore:
    store = EntityStore()
    store.reset(600, 600)
    return store


@pytest.fixture
def sim() -> DefenseSimulation:
    return DefenseSimulation(width=600, height=600, rng=random.Random(7))