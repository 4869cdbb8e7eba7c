# game.py
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import List, NamedTuple, Optional, Protocol
import logging
import random

from .config import CFG, STILL, Config
from .controls import IntentSlot, Vector, apply_direction
from .grid import Grid, Position
from .rules import Event, apply_rules
from .spawner import Spawner

logger = logging.getLogger(__name__)


class Phase(Enum):
    READY = "ready"          # start panel shown, items not spawned yet
    RUNNING = "running"
    GAME_OVER = "game_over"


class Timer(Protocol):
    def cancel(self) -> None: ...


@dataclass
class Avatar:
    x: int
    y: int
    size: int

    @property
    def position(self) -> Position:
        return (self.x, self.y)


class Snapshot(NamedTuple):
    """Read-only view handed to renderers and observers."""
    position: Position
    size: int
    food: Optional[Position]
    obstacle: Optional[Position]
    direction: Vector
    score: int
    phase: Phase
    final_score: Optional[int]
    ticks: int

    @property
    def is_game_over(self) -> bool:
        return self.phase is Phase.GAME_OVER


@dataclass
class GameSession:
    """
    Everything one run owns: avatar, items, score, movement and the tick
    timer handle. The loop driver holds the session; nothing here is global.

    Lifecycle: READY -> RUNNING via start(), RUNNING -> GAME_OVER only through
    end_game() (called by the rules), and restart() from either of the others.
    """
    grid: Grid = field(default_factory=Grid)
    config: Config = field(default_factory=Config)
    rng: random.Random | None = None

    def __post_init__(self):
        self.config.validate()
        if self.rng is None:
            self.rng = random.Random(self.config.seed)
        self.spawner = Spawner(self.grid, self.rng, self.config.spawn_attempts)
        self.intents = IntentSlot()
        self.timer: Optional[Timer] = None
        self._reset()

    def _reset(self) -> None:
        cx, cy = self.grid.center()
        self.avatar = Avatar(cx, cy, self.config.base_size)
        self.direction: Vector = STILL
        self.food: Optional[Position] = None
        self.obstacle: Optional[Position] = None
        self.score = 0
        self.final_score: Optional[int] = None
        self.ticks = 0
        self.phase = Phase.READY
        self.intents.clear()

    # ---------- state machine ----------
    def start(self, timer: Optional[Timer] = None) -> None:
        if self.phase is not Phase.READY:
            raise RuntimeError(f"cannot start a session in phase {self.phase.value}")
        self.food = self.spawner.spawn_food()
        self.obstacle = self.spawner.spawn_obstacle(self.food)
        self.timer = timer
        self.phase = Phase.RUNNING
        logger.info("run started at %s, food=%s obstacle=%s",
                    self.position, self.food, self.obstacle)

    def restart(self, timer: Optional[Timer] = None) -> None:
        # a finished run already cancelled its timer; a live one is stopped here
        self._cancel_timer()
        self._reset()
        self.start(timer)

    def end_game(self, reason: Event | None = None) -> bool:
        """Enter GAME_OVER once. Returns False if the run was not running."""
        if self.phase is not Phase.RUNNING:
            return False
        self.phase = Phase.GAME_OVER
        self.final_score = self.score
        self._cancel_timer()
        logger.info("game over (%s) after %d ticks, final score %d",
                    reason.value if reason else "stopped", self.ticks, self.score)
        return True

    def _cancel_timer(self) -> None:
        if self.timer is not None:
            self.timer.cancel()
            self.timer = None

    # ---------- input ----------
    def request_direction(self, direction) -> bool:
        """
        Queue a turn for the next tick. Unknown directions and turns onto the
        active axis are ignored and do not disturb a turn already queued.
        """
        return self.intents.request(direction, self.direction)

    # ---------- tick ----------
    def step(self) -> List[Event]:
        """
        Advance one tick: take the pending turn, move one cell along the
        current direction, then run the rules. Inert outside RUNNING.
        """
        if self.phase is not Phase.RUNNING:
            return []

        requested = self.intents.take()
        if requested is not None:
            self.direction = apply_direction(self.direction, requested)

        dx, dy = self.direction
        self.avatar.x += dx * self.grid.cell
        self.avatar.y += dy * self.grid.cell
        self.ticks += 1

        return apply_rules(self)

    # ---------- read-only views ----------
    @property
    def position(self) -> Position:
        return self.avatar.position

    @property
    def size(self) -> int:
        return self.avatar.size

    @property
    def is_running(self) -> bool:
        return self.phase is Phase.RUNNING

    @property
    def is_game_over(self) -> bool:
        return self.phase is Phase.GAME_OVER

    def snapshot(self) -> Snapshot:
        return Snapshot(
            position=self.position,
            size=self.size,
            food=self.food,
            obstacle=self.obstacle,
            direction=self.direction,
            score=self.score,
            phase=self.phase,
            final_score=self.final_score,
            ticks=self.ticks,
        )


def new_session(width: int, height: int, cfg: Config = CFG,
                rng: random.Random | None = None) -> GameSession:
    grid = Grid(width, height)
    return GameSession(grid=grid, config=cfg, rng=rng)

