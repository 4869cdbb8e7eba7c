# rules.py
"""
Per-tick collision rules.

Order is fixed: wall, then food, then obstacle. A wall hit ends the run and
skips the item checks; food and obstacle are evaluated independently.
"""
from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, List
import logging

if TYPE_CHECKING:
    from .game import GameSession

logger = logging.getLogger(__name__)


class Event(str, Enum):
    WALL = "wall"
    FOOD = "food"
    OBSTACLE = "obstacle"
    MAX_SIZE = "max_size"


def check_wall(session: GameSession) -> bool:
    if session.grid.contains(session.position):
        return False
    session.end_game(reason=Event.WALL)
    return True


def check_food(session: GameSession) -> bool:
    if session.position != session.food:
        return False
    cfg = session.config
    session.score += cfg.food_score
    session.avatar.size = max(cfg.min_size, session.avatar.size - 1)
    session.food = session.spawner.spawn_food()
    return True


def check_obstacle(session: GameSession) -> Event | None:
    """Growth lands before the cap test, so size may end above max_size."""
    if session.position != session.obstacle:
        return None
    cfg = session.config
    session.score -= cfg.obstacle_penalty
    session.avatar.size += cfg.obstacle_growth
    if session.avatar.size >= cfg.max_size:
        session.end_game(reason=Event.MAX_SIZE)
        return Event.MAX_SIZE
    session.obstacle = session.spawner.spawn_obstacle(session.food)
    return Event.OBSTACLE


def apply_rules(session: GameSession) -> List[Event]:
    if session.food is None or session.obstacle is None:
        raise RuntimeError("rules evaluated before food and obstacle were spawned")

    if check_wall(session):
        return [Event.WALL]

    events: List[Event] = []
    if check_food(session):
        events.append(Event.FOOD)
    hit = check_obstacle(session)
    if hit is not None:
        events.append(hit)

    if events:
        logger.debug("tick %d at %s: %s (score=%d size=%d)", session.ticks,
                     session.position, ", ".join(e.value for e in events),
                     session.score, session.avatar.size)
    return events
