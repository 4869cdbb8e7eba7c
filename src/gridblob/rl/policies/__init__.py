# src/gridblob/rl/policies/__init__.py
"""Scripted autopilot policies for the headless environment."""

from gridblob.rl.policies.random import policy_random
from gridblob.rl.policies.greedy import policy_greedy
from gridblob.rl.policies.eps_greedy import policy_eps_greedy

__all__ = ["policy_random", "policy_greedy", "policy_eps_greedy"]
