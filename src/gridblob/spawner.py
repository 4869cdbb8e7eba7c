# spawner.py
import random

from .config import CFG
from .grid import Grid, Position


class Spawner:
    """
    Draws random grid-aligned positions for food and obstacles.

    The obstacle draw rejects candidates that land on the current food. The
    retry loop is bounded by `attempts`; past that budget a free cell is
    picked directly from the complement, so the call always terminates on a
    grid with at least two cells.
    """

    def __init__(self, grid: Grid, rng: random.Random | None = None,
                 attempts: int = CFG.spawn_attempts):
        self.grid = grid
        self.rng = rng if rng is not None else random.Random()
        self.attempts = attempts

    def random_cell(self) -> Position:
        if self.grid.cell_count == 0:
            raise ValueError(
                f"canvas {self.grid.width}x{self.grid.height} holds no "
                f"{self.grid.cell}px cell"
            )
        gx = self.rng.randrange(self.grid.cols)
        gy = self.rng.randrange(self.grid.rows)
        return (gx * self.grid.cell, gy * self.grid.cell)

    def spawn_food(self) -> Position:
        return self.random_cell()

    def spawn_obstacle(self, food: Position) -> Position:
        if self.grid.cell_count < 2:
            raise ValueError("obstacle placement needs a grid with at least 2 cells")

        for _ in range(self.attempts):
            cand = self.random_cell()
            if cand != food:
                return cand

        free = [p for p in self.grid.cells() if p != food]
        return self.rng.choice(free)
