import random

import numpy as np
import pytest

from mazebmp.generator import carve_maze


class ScriptedRandom:
    """randrange() source that replays `values`, then repeats `fallback` forever."""

    def __init__(self, values=(), fallback=0):
        self.values = list(values)
        self.fallback = fallback
        self.calls = []

    def randrange(self, stop):
        value = self.values.pop(0) if self.values else self.fallback
        assert 0 <= value < stop, f"scripted value {value} outside [0, {stop})"
        self.calls.append(stop)
        return value


# 3x3 grid carved from (0,0) with every scan starting at Up.
#   y0: right            | right+left, back left | down+left, back left
#   y1: right+down, back right | down+left, back down | up+down, back up
#   y2: up, back up      | up+right, back right  | up+left, back up
EXPECTED_3X3 = np.array([
    0x02, 0x8A, 0x8C,
    0x26, 0x4C, 0x15,
    0x11, 0x23, 0x19,
], dtype=np.uint8)


@pytest.fixture
def maze_3x3():
    return carve_maze(3, ScriptedRandom(fallback=0))

@pytest.fixture(params=[(2, 0), (5, 1), (10, 7), (25, 42), (40, 2024)])
def seeded_maze(request):
    n, seed = request.param
    return carve_maze(n, random.Random(seed))
