import random
from collections import deque

import numpy as np
import pytest

from mazebmp.cells import (
    DIR_ORDER, INVALID, cell_index, in_bounds, iter_passages, neighbor,
    opposite, passages, return_direction, encode_maze,
)
from mazebmp.generator import MazeState, carve_maze, generate_maze

from conftest import EXPECTED_3X3, ScriptedRandom


def test_scripted_3x3_tree(maze_3x3):
    assert maze_3x3.start == (0, 0)
    assert np.array_equal(maze_3x3.grid, EXPECTED_3X3)
    # walk ends back on the start cell
    assert maze_3x3.cursor == (0, 0)

def test_start_cell_drawn_x_then_y():
    rng = ScriptedRandom([2, 1], fallback=0)
    state = MazeState(3, rng)
    assert state.start == (2, 1)
    assert rng.calls == [3, 3]

def test_every_cell_visited(seeded_maze):
    assert np.all(seeded_maze.grid != 0)
    assert np.all(seeded_maze.grid & 0x0F)

def test_edge_count_is_spanning_tree(seeded_maze):
    n = seeded_maze.n
    assert len(list(iter_passages(seeded_maze.grid, n))) == n * n - 1

def test_passages_are_mutual(seeded_maze):
    n, grid = seeded_maze.n, seeded_maze.grid
    for y in range(n):
        for x in range(n):
            open_dirs = passages(grid[cell_index(x, y, n)])
            for d in DIR_ORDER:
                if open_dirs & d:
                    nx, ny = neighbor(x, y, d)
                    assert in_bounds(nx, ny, n)
                    assert passages(grid[cell_index(nx, ny, n)]) & opposite(d)

def test_connected(seeded_maze):
    n, grid = seeded_maze.n, seeded_maze.grid
    seen = {seeded_maze.start}
    q = deque([seeded_maze.start])
    while q:
        x, y = q.popleft()
        open_dirs = passages(grid[cell_index(x, y, n)])
        for d in DIR_ORDER:
            if open_dirs & d:
                nxt = neighbor(x, y, d)
                if nxt not in seen:
                    seen.add(nxt)
                    q.append(nxt)
    assert len(seen) == n * n

def test_return_pointers_lead_to_start(seeded_maze):
    n, grid = seeded_maze.n, seeded_maze.grid
    sx, sy = seeded_maze.start
    assert return_direction(grid[cell_index(sx, sy, n)]) == INVALID
    for y in range(n):
        for x in range(n):
            cx, cy = x, y
            for _ in range(n * n):
                d = return_direction(grid[cell_index(cx, cy, n)])
                if d == INVALID:
                    break
                # the way back is always an open passage
                assert passages(grid[cell_index(cx, cy, n)]) & d
                cx, cy = neighbor(cx, cy, d)
            assert (cx, cy) == (sx, sy)

def test_single_cell_terminates_immediately():
    state = MazeState(1, ScriptedRandom())
    assert generate_maze(state) == 0
    assert state.start == (0, 0)
    assert state.grid.tolist() == [0]
    assert list(iter_passages(state.grid, 1)) == []

@pytest.mark.parametrize("n", [2, 3, 17])
def test_carved_count(n):
    state = MazeState(n, random.Random(1))
    assert generate_maze(state) == state.n * state.n - 1

@pytest.mark.parametrize("fallback", [0, 1, 2, 3])
def test_constant_random_source_still_spans(fallback):
    state = carve_maze(12, ScriptedRandom([5, 7], fallback=fallback))
    assert np.all(state.grid != 0)
    assert len(list(iter_passages(state.grid, 12))) == 143

def test_deterministic_for_same_seed():
    a = carve_maze(30, random.Random(99))
    b = carve_maze(30, random.Random(99))
    assert np.array_equal(a.grid, b.grid)
    assert encode_maze(a.grid) == encode_maze(b.grid)

def test_different_seeds_usually_differ():
    sigs = {encode_maze(carve_maze(15, random.Random(s)).grid) for s in range(10)}
    assert len(sigs) > 1

def test_progress_callback():
    calls = []
    state = MazeState(40, random.Random(3))
    carved = generate_maze(state, progress=calls.append)
    assert carved == 1599
    assert calls == [1000]

def test_progress_every_custom():
    calls = []
    generate_maze(MazeState(4, random.Random(3)), progress=calls.append, progress_every=5)
    assert calls == [5, 10, 15]

def test_explicit_start():
    state = carve_maze(6, random.Random(0), start=(5, 2))
    assert state.start == (5, 2)
    assert return_direction(state.grid[cell_index(5, 2, 6)]) == INVALID

@pytest.mark.parametrize("n", [0, -3])
def test_rejects_empty_grid(n):
    with pytest.raises(ValueError):
        MazeState(n, random.Random(0))

def test_rejects_start_outside_grid():
    with pytest.raises(ValueError):
        MazeState(4, random.Random(0), start=(4, 0))
