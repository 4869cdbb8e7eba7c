# grid.py
from dataclasses import dataclass
from typing import Iterator, Tuple

from .config import WIDTH, HEIGHT, GRID_SIZE

Position = Tuple[int, int]


@dataclass(frozen=True)
class Grid:
    """Fixed canvas of width x height pixels quantized into square cells."""
    width: int = WIDTH
    height: int = HEIGHT
    cell: int = GRID_SIZE

    def __post_init__(self):
        if self.cell <= 0:
            raise ValueError(f"cell size must be positive, got {self.cell}")

    @property
    def cols(self) -> int:
        return self.width // self.cell

    @property
    def rows(self) -> int:
        return self.height // self.cell

    @property
    def cell_count(self) -> int:
        return self.cols * self.rows

    def snap(self, n: int) -> int:
        """Round a pixel coordinate down onto the grid (floors negatives too)."""
        return (n // self.cell) * self.cell

    def center(self) -> Position:
        return (self.snap(self.width // 2), self.snap(self.height // 2))

    def contains(self, pos: Position) -> bool:
        """Canvas pixel semantics: left/top inclusive, right/bottom exclusive."""
        x, y = pos
        return 0 <= x < self.width and 0 <= y < self.height

    def is_aligned(self, pos: Position) -> bool:
        return pos[0] % self.cell == 0 and pos[1] % self.cell == 0

    def cells(self) -> Iterator[Position]:
        for gy in range(self.rows):
            for gx in range(self.cols):
                yield (gx * self.cell, gy * self.cell)
