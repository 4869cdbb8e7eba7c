# src/gridblob/rl/policies/greedy.py
import numpy as np # type: ignore
from gridblob.controls import Direction, apply_direction
from gridblob.grid import Grid


def preferred_directions(px: int, py: int, fx: int, fy: int):
    """
    Returns a preference ordering of directions that reduce Manhattan distance to food,
    followed by the remaining ones. Does NOT check collisions.
    """
    prefs = []
    if fx < px:
        prefs.append(Direction.LEFT)
    elif fx > px:
        prefs.append(Direction.RIGHT)
    if fy < py:
        prefs.append(Direction.UP)
    elif fy > py:
        prefs.append(Direction.DOWN)
    for d in Direction:
        if d not in prefs:
            prefs.append(d)
    return prefs  # length 4


def dir_to_action(direction: Direction) -> int:
    """Map a Direction to the env action id."""
    from gridblob.rl.env import ACTIONS
    for a, d in ACTIONS.items():
        if d is direction:
            return a
    raise ValueError(f"No action for {direction}")


def decode_obs(obs: np.ndarray, grid: Grid):
    """
    Matches env._obs() layout: recovers pixel positions of avatar, food and
    obstacle plus the direction vector. Positions snap back onto the grid.
    """
    values = obs.tolist()
    span_x = max((grid.cols - 1) * grid.cell, 1)
    span_y = max((grid.rows - 1) * grid.cell, 1)

    def px(n, span):
        return int(round(n * span / grid.cell)) * grid.cell

    avatar = (px(values[0], span_x), px(values[1], span_y))
    food = (px(values[2], span_x), px(values[3], span_y))
    obstacle = (px(values[4], span_x), px(values[5], span_y))
    direction = (int(values[6]), int(values[7]))
    return avatar, food, obstacle, direction


def policy_greedy(obs: np.ndarray, env) -> int:
    """
    Greedy on food distance with simple safety:
    - simulate each action through the no-reverse rule (ignored turns keep going straight)
    - drop actions whose next cell is off the canvas or on the obstacle
    - among the rest, take the one that ends closest to the food
    - if every action is fatal, fall back to random
    """
    grid = env.grid
    avatar, food, obstacle, current = decode_obs(obs, grid)

    best_action, best_dist = None, None
    for d in preferred_directions(avatar[0], avatar[1], food[0], food[1]):
        dx, dy = apply_direction(current, d)
        nxt = (avatar[0] + dx * grid.cell, avatar[1] + dy * grid.cell)
        if not grid.contains(nxt) or nxt == obstacle:
            continue
        # on ties, a turn that is actually taken beats one the rule would ignore
        dist = (abs(nxt[0] - food[0]) + abs(nxt[1] - food[1]), (dx, dy) != d.value)
        if best_dist is None or dist < best_dist:
            best_action, best_dist = dir_to_action(d), dist

    if best_action is None:
        # boxed in
        return np.random.randint(env.action_space_n)
    return best_action
