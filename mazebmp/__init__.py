__version__ = "1.0.0"

from mazebmp.cells import (
    INVALID, UP, RIGHT, DOWN, LEFT,
    encode_maze, entry_mask, is_dir_valid, iter_passages, opposite,
    passages, return_direction,
)
from mazebmp.config import MazeConfig
from mazebmp.generator import MazeState, carve_maze, generate_maze
from mazebmp.render import new_pixel_buffer, render_maze
from mazebmp.bitmap import build_bmp_header, decode_bmp, encode_bmp, parse_bmp_header, save_bmp
