# generator.py
# -----------------------------------------------------------------------------
# Randomized depth-first carving. The grid doubles as the backtracking stack:
# every cell remembers the direction back to its parent in the high nibble, so
# an exhausted cell just follows that pointer. No recursion, no list of
# pending cells, no visited set.
# -----------------------------------------------------------------------------
import random
from typing import Callable, Optional, Tuple

import numpy as np

from mazebmp.cells import (
    INVALID, LEFT, UP,
    HEADING, cell_index, entry_mask, in_bounds, is_dir_valid, new_grid,
    return_direction,
)
from mazebmp.config import PROGRESS_EVERY


class MazeState:
    """
    Everything one generation run mutates: the grid, the cursor and the rng.

    rng is anything with randrange(stop) -> int in [0, stop); random.Random
    works, tests pass scripted sources.
    """

    def __init__(self, n: int, rng=None, start: Optional[Tuple[int, int]] = None):
        if n < 1:
            raise ValueError(f"Maze needs at least one cell per side, got {n}.")
        self.n = int(n)
        self.rng = rng if rng is not None else random.Random()
        self.grid: np.ndarray = new_grid(self.n)

        if start is None:
            # x first, then y
            start = (self.rng.randrange(self.n), self.rng.randrange(self.n))
        sx, sy = start
        if not in_bounds(sx, sy, self.n):
            raise ValueError(f"Start cell {start} outside {self.n}x{self.n} grid.")
        self.start = (sx, sy)
        self.x, self.y = sx, sy

    @property
    def cursor(self) -> Tuple[int, int]:
        return self.x, self.y

    def cell_idx(self) -> int:
        return cell_index(self.x, self.y, self.n)

    def move(self, d: int):
        dx, dy = HEADING[d]
        self.x += dx
        self.y += dy

    def random_direction(self) -> int:
        return 1 << self.rng.randrange(4)

    def get_direction(self) -> int:
        """
        Next direction to carve from the cursor, backtracking as needed.
        Returns INVALID once the start cell itself is exhausted.
        """
        d = self.random_direction()
        while True:
            for _ in range(4):
                if is_dir_valid(self.grid, self.n, self.x, self.y, d):
                    return d
                d <<= 1
                if d > LEFT:
                    d = UP

            d = return_direction(self.grid[self.cell_idx()])
            # nowhere to go
            if d == INVALID:
                return INVALID

            self.move(d)
            d = self.random_direction()

    def carve(self, d: int):
        self.grid[self.cell_idx()] |= d
        self.move(d)
        self.grid[self.cell_idx()] = entry_mask(d)


def generate_maze(state: MazeState,
                  progress: Optional[Callable[[int], None]] = None,
                  progress_every: int = PROGRESS_EVERY) -> int:
    """Carve until the walk backtracks out of the start cell. Returns carved cell count."""
    cells = 0
    d = state.get_direction()
    while d != INVALID:
        cells += 1
        if progress is not None and progress_every > 0 and cells % progress_every == 0:
            progress(cells)
        state.carve(d)
        d = state.get_direction()
    return cells

def carve_maze(n: int, rng=None, start: Optional[Tuple[int, int]] = None,
               progress: Optional[Callable[[int], None]] = None) -> MazeState:
    state = MazeState(n, rng, start=start)
    generate_maze(state, progress=progress)
    return state
