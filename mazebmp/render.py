# render.py
# -----------------------------------------------------------------------------
# Carved grid -> B,G,R pixel buffer. Cells stay black, closed edges become
# 1 px white lines. All segments are axis-aligned, so they are written as
# numpy slices; anything past the buffer edge is dropped.
# -----------------------------------------------------------------------------
from typing import Optional

import numpy as np

from mazebmp.cells import DOWN, LEFT, RIGHT, UP, passages

WALL_BGR = (255, 255, 255)


def new_pixel_buffer(width: int, height: int) -> np.ndarray:
    if width < 1 or height < 1:
        raise ValueError(f"Pixel buffer must be at least 1x1, got {width}x{height}.")
    return np.zeros((height, width, 3), dtype=np.uint8)

def hline(img: np.ndarray, x0: int, x1: int, y: int):
    """Pixels [x0, x1) on row y."""
    H, W = img.shape[:2]
    if y < 0 or y >= H:
        return
    xs, xe = max(x0, 0), min(x1, W)
    if xs < xe:
        img[y, xs:xe] = WALL_BGR

def vline(img: np.ndarray, x: int, y0: int, y1: int):
    """Pixels [y0, y1) on column x."""
    H, W = img.shape[:2]
    if x < 0 or x >= W:
        return
    ys, ye = max(y0, 0), min(y1, H)
    if ys < ye:
        img[ys:ye, x] = WALL_BGR

def draw_cell(img: np.ndarray, cell, nx: int, ny: int, cell_size: int):
    v = passages(cell)
    cs = cell_size
    # +1 on the far end closes the corner with the neighbouring segment
    if not v & UP:
        hline(img, nx, nx + cs + 1, ny)
    if not v & RIGHT:
        vline(img, nx + cs, ny, ny + cs + 1)
    if not v & DOWN:
        hline(img, nx, nx + cs + 1, ny + cs)
    if not v & LEFT:
        vline(img, nx, ny, ny + cs + 1)

def render_maze(grid: np.ndarray, n: int, width: int, height: Optional[int] = None) -> np.ndarray:
    """
    Draw every cell of an n x n grid into a fresh black buffer.
    cell_size = width // n; the remainder is left as an uncovered border.
    """
    if height is None:
        height = width
    if n < 1:
        raise ValueError(f"n must be >= 1, got {n}.")
    if grid.size != n * n:
        raise ValueError(f"Grid holds {grid.size} cells, expected {n * n}.")
    cell_size = width // n
    if cell_size == 0:
        raise ValueError(f"Image width {width} too small for {n} cells.")

    img = new_pixel_buffer(width, height)

    flat = grid.reshape(-1)
    for y in range(n):
        for x in range(n):
            draw_cell(img, flat[y * n + x], x * cell_size, y * cell_size, cell_size)
    return img
