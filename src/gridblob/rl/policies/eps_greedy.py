# src/gridblob/rl/policies/eps_greedy.py
import numpy as np # type: ignore
from gridblob.rl.policies.random import policy_random
from gridblob.rl.policies.greedy import policy_greedy


def policy_eps_greedy(obs: np.ndarray, env, epsilon: float = 0.1) -> int:
    """Explore with a uniform action with probability epsilon, else follow the greedy autopilot."""
    explore = np.random.rand() < epsilon
    return policy_random(obs, env) if explore else policy_greedy(obs, env)
