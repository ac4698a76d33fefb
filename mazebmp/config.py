# config.py

from typing import Optional

# -------------------------
# Defaults
# -------------------------
DEF_NUM_CELLS  = 63
DEF_IMAGE_SIZE = 512
DEF_OUT        = "Maze.bmp"

DEF_BASE_SEED  = 20140527
DEF_INDEX      = "info_labels.jsonl"

PROGRESS_EVERY = 1000  # carved cells per progress dot

BMP_PPM        = 6000  # horizontal / vertical resolution written to the header


class MazeConfig:
    """Dimensions and output for one run. Call validate() before generating."""

    def __init__(self,
                 num_cells: int = DEF_NUM_CELLS,
                 width: int = DEF_IMAGE_SIZE,
                 height: Optional[int] = None,
                 seed: Optional[int] = None,
                 out: str = DEF_OUT):
        self.num_cells = num_cells
        self.width = width
        self.height = width if height is None else height
        self.seed = seed
        self.out = out

    @property
    def cell_size(self) -> int:
        return self.width // self.num_cells

    def validate(self) -> "MazeConfig":
        if self.num_cells < 1:
            raise ValueError(f"num_cells must be >= 1, got {self.num_cells}.")
        if self.width < 1 or self.height < 1:
            raise ValueError(f"Image must be at least 1x1, got {self.width}x{self.height}.")
        if self.cell_size == 0:
            raise ValueError(
                f"Image width {self.width} too small for {self.num_cells} cells (cell size would be 0).")
        return self

    def __repr__(self):
        return (f"MazeConfig(num_cells={self.num_cells}, width={self.width}, "
                f"height={self.height}, seed={self.seed}, out={self.out!r})")
