# src/gridblob/rl/policies/random.py
import numpy as np # type: ignore
from gridblob.controls import apply_direction
from gridblob.rl.env import ACTIONS


def live_actions(current) -> list:
    """
    Actions that lead to distinct moves: every turn the no-reverse rule
    accepts, plus the current heading once (reversals only repeat it).
    """
    live = [a for a, d in ACTIONS.items() if apply_direction(current, d) != current]
    live += [a for a, d in ACTIONS.items() if d.value == current]
    return live


def policy_random(obs: np.ndarray, env) -> int:
    """
    Random policy: uniform over distinct moves, so going straight is not
    over-weighted by the ignored reverse key. A baseline; it usually walks
    into a wall within a few dozen ticks.
    """
    current = (int(obs[6]), int(obs[7]))
    return int(np.random.choice(live_actions(current)))
