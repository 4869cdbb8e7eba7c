# main.py
import argparse
import dataclasses
import logging
from typing import Optional, Tuple

import pygame # type: ignore

from .config import WIDTH, HEIGHT, GRID_SIZE, BG, PLAYER, FOOD, OBSTACLE, TEXT, PANEL, CFG, Config
from .controls import Direction, classify_swipe
from .game import GameSession, Snapshot, Phase, new_session

logger = logging.getLogger(__name__)

TICK_EVENT = pygame.USEREVENT + 1

KEYMAP = {
    pygame.K_UP: Direction.UP,       pygame.K_w: Direction.UP,
    pygame.K_DOWN: Direction.DOWN,   pygame.K_s: Direction.DOWN,
    pygame.K_LEFT: Direction.LEFT,   pygame.K_a: Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT, pygame.K_d: Direction.RIGHT,
}
START_KEYS = (pygame.K_SPACE, pygame.K_RETURN)


class TickTimer:
    """Repeating pygame timer posting TICK_EVENT; cancel() stops it."""

    def __init__(self, interval_ms: int):
        self.interval_ms = interval_ms
        pygame.time.set_timer(TICK_EVENT, interval_ms)

    def cancel(self) -> None:
        pygame.time.set_timer(TICK_EVENT, 0)


# ---------- Drawing ----------
def draw_game(screen: pygame.Surface, font: pygame.font.Font, snap: Snapshot,
              cell: int = GRID_SIZE) -> None:
    screen.fill(BG)

    if snap.food is not None:
        fx, fy = snap.food
        pygame.draw.circle(screen, FOOD, (fx + cell // 2, fy + cell // 2), cell // 2 - 2)
    if snap.obstacle is not None:
        ox, oy = snap.obstacle
        pygame.draw.rect(screen, OBSTACLE, pygame.Rect(ox + 2, oy + 2, cell - 4, cell - 4))

    # avatar circle sits at its top-left corner, so it may overflow the cell
    x, y = snap.position
    pygame.draw.circle(screen, PLAYER, (x + snap.size, y + snap.size), snap.size)

    hud = font.render(f"Score: {snap.score}   Size: {snap.size}", True, TEXT)
    screen.blit(hud, (8, 6))


def draw_panel(screen: pygame.Surface, font: pygame.font.Font, *lines: str) -> None:
    width, height = screen.get_size()
    overlay = pygame.Surface((width, height), pygame.SRCALPHA)
    overlay.fill(PANEL)
    screen.blit(overlay, (0, 0))

    top = height // 2 - 16 * len(lines)
    for i, line in enumerate(lines):
        txt = font.render(line, True, TEXT)
        screen.blit(txt, txt.get_rect(center=(width // 2, top + 32 * i)))


def draw_frame(screen: pygame.Surface, font: pygame.font.Font, session: GameSession) -> None:
    snap = session.snapshot()
    draw_game(screen, font, snap, session.grid.cell)
    if snap.phase is Phase.READY:
        draw_panel(screen, font, "GRID BLOB", "Arrows / swipe to move",
                   "Press SPACE to start")
    elif snap.phase is Phase.GAME_OVER:
        draw_panel(screen, font, "GAME OVER", f"Final score: {snap.final_score}",
                   "Press R to restart")


# ---------- Input ----------
class SwipeTracker:
    """Pairs press/release points from mouse drags or touch into swipes."""

    def __init__(self, threshold: float):
        self.threshold = threshold
        self.origin: Optional[Tuple[float, float]] = None

    def press(self, pos: Tuple[float, float]) -> None:
        self.origin = pos

    def release(self, pos: Tuple[float, float]) -> Optional[Direction]:
        if self.origin is None:
            return None
        start, self.origin = self.origin, None
        return classify_swipe(start, pos, self.threshold)


def launch(session: GameSession) -> bool:
    """Start from the start panel or restart from game over; False while running."""
    if session.phase is Phase.READY:
        session.start(TickTimer(session.config.tick_ms))
    elif session.is_game_over:
        session.restart(TickTimer(session.config.tick_ms))
    else:
        return False
    return True


def handle_event(event: pygame.event.Event, session: GameSession,
                 swipes: SwipeTracker, screen_size: Tuple[int, int]) -> bool:
    """Route one pygame event into the session. Return False to quit."""
    if event.type == pygame.QUIT:
        return False

    if event.type == TICK_EVENT:
        session.step()
    elif event.type == pygame.KEYDOWN:
        if event.key == pygame.K_ESCAPE:
            return False
        if event.key in KEYMAP:
            session.request_direction(KEYMAP[event.key])
        elif event.key in START_KEYS or (event.key == pygame.K_r and session.is_game_over):
            launch(session)
    elif event.type in (pygame.MOUSEBUTTONDOWN, pygame.MOUSEBUTTONUP) and getattr(event, "touch", False):
        pass  # synthesized from touch, handled by the FINGER events
    elif event.type == pygame.MOUSEBUTTONDOWN:
        if not launch(session):
            swipes.press(event.pos)
    elif event.type == pygame.MOUSEBUTTONUP:
        d = swipes.release(event.pos)
        if d is not None:
            session.request_direction(d)
    elif event.type == pygame.FINGERDOWN:
        if not launch(session):
            swipes.press((event.x * screen_size[0], event.y * screen_size[1]))
    elif event.type == pygame.FINGERUP:
        d = swipes.release((event.x * screen_size[0], event.y * screen_size[1]))
        if d is not None:
            session.request_direction(d)
    return True


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Grid Blob arcade game")
    parser.add_argument("--width", type=int, default=WIDTH)
    parser.add_argument("--height", type=int, default=HEIGHT)
    parser.add_argument("--tick-ms", type=int, default=CFG.tick_ms)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--verbose", action="store_true", help="log every rule event")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    cfg: Config = dataclasses.replace(CFG, tick_ms=args.tick_ms, seed=args.seed)

    pygame.init()
    font = pygame.font.SysFont(None, 24)
    screen = pygame.display.set_mode((args.width, args.height))
    pygame.display.set_caption("Grid Blob")
    clock = pygame.time.Clock()

    session = new_session(args.width, args.height, cfg)
    logger.info("grid %dx%d cells, %d ms per tick", session.grid.cols, session.grid.rows, cfg.tick_ms)
    swipes = SwipeTracker(cfg.swipe_threshold)
    running = True

    while running:
        for event in pygame.event.get():
            if not handle_event(event, session, swipes, screen.get_size()):
                running = False
                break

        draw_frame(screen, font, session)
        pygame.display.flip()
        clock.tick(60)  # ticks come from TICK_EVENT, this only paces redraws

    pygame.quit()

if __name__ == "__main__":
    main()
