# cells.py
# -----------------------------------------------------------------------------
# One byte per cell:
#   low nibble  -> open passages (bit set = passage carved in that direction)
#   high nibble -> direction back to the parent cell, written once on entry
# A byte of 0 means "never visited"; there is no separate visited set.
# -----------------------------------------------------------------------------
import hashlib
from typing import Iterator, Tuple

import numpy as np

INVALID = 0
UP      = 1
RIGHT   = 2
DOWN    = 4
LEFT    = 8

DIR_ORDER = (UP, RIGHT, DOWN, LEFT)  # scan order, wraps Left -> Up

# x grows rightward, y grows downward.
HEADING = {INVALID: (0, 0), UP: (0, -1), RIGHT: (1, 0), DOWN: (0, 1), LEFT: (-1, 0)}
OPP     = {INVALID: INVALID, UP: DOWN, DOWN: UP, RIGHT: LEFT, LEFT: RIGHT}

PASSAGE_MASK = 0x0F
RETURN_MASK  = 0xF0


def new_grid(n: int) -> np.ndarray:
    return np.zeros(n * n, dtype=np.uint8)

def opposite(d: int) -> int:
    return OPP[d]

def neighbor(x: int, y: int, d: int) -> Tuple[int, int]:
    dx, dy = HEADING[d]
    return x + dx, y + dy

def in_bounds(x: int, y: int, n: int) -> bool:
    return 0 <= x < n and 0 <= y < n

def cell_index(x: int, y: int, n: int) -> int:
    return x + n * y

def passages(cell) -> int:
    return int(cell) & PASSAGE_MASK

def return_direction(cell) -> int:
    return (int(cell) & RETURN_MASK) >> 4

def entry_mask(d: int) -> int:
    """Byte for a cell entered by moving in `d`: one passage back, same return path."""
    back = OPP[d]
    return back | (back << 4)

def is_dir_valid(grid: np.ndarray, n: int, x: int, y: int, d: int) -> bool:
    if not d:
        return False
    nx, ny = neighbor(x, y, d)
    if not in_bounds(nx, ny, n):
        return False
    return not grid[cell_index(nx, ny, n)]

def iter_passages(grid: np.ndarray, n: int) -> Iterator[Tuple[Tuple[int, int], Tuple[int, int]]]:
    """
    Yield every carved connection once as ((x, y), (nx, ny)).
    Only Right and Down bits are followed, so each edge shows up a single time.
    """
    for y in range(n):
        for x in range(n):
            open_dirs = passages(grid[cell_index(x, y, n)])
            for d in (RIGHT, DOWN):
                if open_dirs & d:
                    nx, ny = neighbor(x, y, d)
                    if in_bounds(nx, ny, n):
                        yield (x, y), (nx, ny)

def encode_maze(grid: np.ndarray) -> str:
    return hashlib.sha256(np.ascontiguousarray(grid, dtype=np.uint8).tobytes()).hexdigest()
