# src/gridblob/rl/simulate.py
from __future__ import annotations
import argparse
import csv
import os
from typing import List, Tuple

from gridblob.rl.env import BlobEnv
from gridblob.rl.policies import policy_random, policy_greedy, policy_eps_greedy

POLICIES = ("random", "greedy", "eps-greedy")


# --------------------------
# Episode loop
# --------------------------
def choose_action(policy: str, obs, env: BlobEnv, epsilon: float) -> int:
    if policy == "random":
        return policy_random(obs, env)
    if policy == "greedy":
        return policy_greedy(obs, env)
    if policy in ("eps-greedy", "epsilon-greedy"):
        return policy_eps_greedy(obs, env, epsilon)
    raise ValueError(f"Unknown policy: {policy}")


def run_episode(env: BlobEnv, policy: str, epsilon: float,
                max_steps: int = 10_000, render: bool = False) -> Tuple[int, float, int, int]:
    """
    Play one run with a scripted policy.

    Returns:
        steps: ticks played
        total: total return (sum of rewards)
        score: final score
        size:  final avatar size
    """
    obs = env.reset()
    total = 0.0
    steps = 0
    info = {"score": 0, "size": env.config.base_size}

    while True:
        a = choose_action(policy, obs, env, epsilon)
        obs, r, done, info = env.step(a)
        total += r
        steps += 1
        if render:
            env.render()

        if done or steps >= max_steps:
            break

    return steps, total, info["score"], info["size"]


def write_results(rows: List[tuple], out_csv: str) -> None:
    out_dir = os.path.dirname(out_csv)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    with open(out_csv, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(("ep", "steps", "return", "score", "size"))
        writer.writerows(rows)


# --------------------------
# Main
# --------------------------
def main(argv=None):
    parser = argparse.ArgumentParser(description="Run headless Grid Blob episodes with a scripted policy")
    parser.add_argument("--episodes", type=int, default=50)
    parser.add_argument("--policy", type=str, default="greedy", choices=POLICIES)
    parser.add_argument(
        "--epsilon",
        type=float,
        default=0.1,
        help="epsilon for eps-greedy",
    )
    parser.add_argument("--seed", type=int, default=0)
    parser.add_argument("--max-steps", type=int, default=10_000,
                        help="cut an episode after this many ticks")
    parser.add_argument(
        "--out",
        type=str,
        default=None,
        help="CSV path, defaults to data/runs/sim_<policy>.csv",
    )
    parser.add_argument("--render", action="store_true", help="watch the episodes in a window")
    args = parser.parse_args(argv)

    out_csv = args.out or os.path.join("data", "runs", f"sim_{args.policy}.csv")
    env = BlobEnv(seed_value=args.seed, render_enabled=args.render)

    print(
        f"Running {args.episodes} episode(s) with "
        f"policy={args.policy} ε={args.epsilon}"
    )
    print("ep,steps,return,score,size")

    rows = []
    try:
        for ep in range(1, args.episodes + 1):
            steps, ret, score, size = run_episode(env, args.policy, args.epsilon,
                                                  args.max_steps, args.render)
            print(f"{ep},{steps},{ret:.3f},{score},{size}")
            rows.append((ep, steps, float(f"{ret:.6f}"), score, size))
    finally:
        env.close()

    write_results(rows, out_csv)
    print(f"\nSaved results → {out_csv}")


if __name__ == "__main__":
    main()
