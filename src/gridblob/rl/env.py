# src/gridblob/rl/env.py
from __future__ import annotations
from dataclasses import dataclass, field
import random

import numpy as np  # type: ignore
import pygame       # type: ignore

from gridblob.config import WIDTH, HEIGHT, Config
from gridblob.controls import Direction
from gridblob.game import GameSession, new_session
from gridblob.grid import Grid, Position
from gridblob.main import draw_frame

# -----------------------------------------------------------------------------
# Actions: integers -> directional intents
# -----------------------------------------------------------------------------
ACTIONS = {
    0: Direction.UP,
    1: Direction.DOWN,
    2: Direction.LEFT,
    3: Direction.RIGHT,
}

# -----------------------------------------------------------------------------
# Small geometry helpers
# -----------------------------------------------------------------------------
def _next_cell(pos: Position, direction: Direction, cell: int) -> Position:
    return (pos[0] + direction.dx * cell, pos[1] + direction.dy * cell)

def _norm(value: int, span: int) -> float:
    """Map a pixel coordinate in [0, span] to [0, 1]."""
    return value / max(span, 1)

# -----------------------------------------------------------------------------
# Observation function
# -----------------------------------------------------------------------------
def _obs(session: GameSession) -> np.ndarray:
    """
    Return a 13-D observation vector.

    Features:
      0-1:  avatar x, y normalized in [0, 1]
      2-3:  food x, y normalized in [0, 1]
      4-5:  obstacle x, y normalized in [0, 1]
      6-7:  current direction components in {-1, 0, 1}
      8:    size normalized so min_size -> 0 and max_size -> 1
      9-12: 1.0 if one more cell up / down / left / right leaves the canvas
    """
    grid = session.grid
    cfg = session.config
    span_x = (grid.cols - 1) * grid.cell
    span_y = (grid.rows - 1) * grid.cell

    px, py = session.position
    fx, fy = session.food if session.food is not None else session.position
    ox, oy = session.obstacle if session.obstacle is not None else session.position
    dx, dy = session.direction
    size_n = (session.size - cfg.min_size) / max(cfg.max_size - cfg.min_size, 1)

    walls = [
        float(not grid.contains(_next_cell(session.position, d, grid.cell)))
        for d in (Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT)
    ]

    return np.array(
        [
            _norm(px, span_x), _norm(py, span_y),
            _norm(fx, span_x), _norm(fy, span_y),
            _norm(ox, span_x), _norm(oy, span_y),
            float(dx), float(dy),
            size_n,
            *walls,
        ],
        dtype=np.float32,
    )

# -----------------------------------------------------------------------------
# Headless environment
# -----------------------------------------------------------------------------
@dataclass
class BlobEnv:
    """
    Gym-like wrapper that drives one GameSession tick by tick.

    Rewards:
      + score_scale * (score after - score before) each tick
      + step_penalty per tick (tiny negative to discourage idling)
      + death_reward when the run ends
    """
    width: int          = WIDTH
    height: int         = HEIGHT
    config: Config      = field(default_factory=Config)
    step_penalty: float = -0.001
    score_scale: float  = 0.1
    death_reward: float = -1.0
    seed_value: int     = 0
    render_enabled: bool = False

    def __post_init__(self):
        # Deterministic RNG for reproducibility
        self.rng = random.Random(self.seed_value)
        np.random.seed(self.seed_value)
        self.session: GameSession | None = None

        self.screen = None
        self.clock = None
        self.font = None
        if self.render_enabled:
            pygame.init()
            self.screen = pygame.display.set_mode((self.width, self.height))
            pygame.display.set_caption("Grid Blob autopilot")
            self.clock = pygame.time.Clock()
            self.font = pygame.font.SysFont(None, 24)

    @property
    def grid(self) -> Grid:
        assert self.session is not None, "Call reset() first."
        return self.session.grid

    # Gym-like API -------------------------------------------------------------
    def reset(self, seed: int | None = None) -> np.ndarray:
        """Start a new run (already past the start panel) and return its observation."""
        if seed is not None:
            self.rng.seed(seed)
            np.random.seed(seed)

        self.session = new_session(self.width, self.height, self.config, rng=self.rng)
        self.session.start()
        return _obs(self.session)

    def step(self, action: int):
        """
        Request the action's direction, advance exactly one tick, and return:
          (obs, reward, terminated, info)
        """
        assert self.session is not None, "Call reset() first."
        assert action in ACTIONS, f"Invalid action {action}"

        session = self.session
        score_before = session.score
        session.request_direction(ACTIONS[action])
        events = session.step()

        reward = self.step_penalty + self.score_scale * (session.score - score_before)
        terminated = session.is_game_over
        if terminated:
            reward += self.death_reward

        info = {
            "score": session.score,
            "size": session.size,
            "events": [e.value for e in events],
        }
        return _obs(session), reward, terminated, info

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------
    def render(self, mode: str = "human") -> None:
        """Draw the current frame with the game's own renderer (render_enabled only)."""
        if not self.render_enabled or self.session is None or self.screen is None:
            return
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                pygame.quit()
                raise SystemExit

        draw_frame(self.screen, self.font, self.session)
        pygame.display.flip()

        # watchable pace, matches the default tick interval
        if self.clock is not None:
            self.clock.tick(1000 // self.config.tick_ms)

    def close(self) -> None:
        if self.render_enabled:
            pygame.quit()

    @property
    def action_space_n(self) -> int:
        return len(ACTIONS)

    @property
    def observation_space_shape(self):
        return (13,)
