from dataclasses import dataclass

# ----- Canvas & grid -----
WIDTH, HEIGHT = 400, 400
GRID_SIZE = 20

# ----- Colors -----
BG       = (24, 24, 30)
PLAYER   = (70, 130, 180)   # steel blue
FOOD     = (80, 190, 80)
OBSTACLE = (200, 120, 60)
TEXT     = (220, 220, 230)
PANEL    = (0, 0, 0, 160)   # RGBA overlay

# ----- Directions (dx, dy) -----
UP, DOWN, LEFT, RIGHT = (0, -1), (0, 1), (-1, 0), (1, 0)
STILL = (0, 0)

# ----- Tunables -----
@dataclass(frozen=True)
class Config:
    seed: int | None = None
    tick_ms: int = 150
    base_size: int = 10
    min_size: int = 5
    max_size: int = 20          # game over once size reaches this
    food_score: int = 10
    obstacle_penalty: int = 5
    obstacle_growth: int = 2
    swipe_threshold: int = 30   # pixels
    spawn_attempts: int = 64    # rejection draws before sampling free cells

    def validate(self) -> "Config":
        if self.tick_ms <= 0:
            raise ValueError(f"tick_ms must be positive, got {self.tick_ms}")
        if self.min_size > self.base_size:
            raise ValueError("min_size must not exceed base_size")
        if self.base_size >= self.max_size:
            raise ValueError("base_size must be below max_size")
        if self.spawn_attempts < 1:
            raise ValueError("spawn_attempts must be at least 1")
        return self

CFG = Config()
