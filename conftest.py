import random

import pytest

from logic import ArenaBalance
from loop import ManualClock
from teams import MatchDescriptor, SideInfo

# 8 fixed steps per second keeps every timer on exact binary fractions.
FAST_FPS = 8.0


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def balance():
    return ArenaBalance(fps=FAST_FPS)


@pytest.fixture
def descriptor():
    return MatchDescriptor(SideInfo((220, 20, 60), "A"), SideInfo((3, 70, 148), "C"))
