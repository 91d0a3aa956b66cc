"""
Throughput benchmark for the step and observation paths.

Measures, per level:
- Steps per second (step() only)
- Observations per second (render_observation() only)
- Steps per second with an observation after every step
"""

import time
from dataclasses import dataclass
from typing import Callable

import numpy as np

from minigrid_core.worlds.minigrid_env import Action, MiniGridEnv
from minigrid_core.worlds.levels import make_door_key, make_empty


@dataclass
class BenchmarkCase:
    name: str
    make: Callable[[np.random.Generator], MiniGridEnv]


CASES = [
    BenchmarkCase("empty-5", lambda rng: make_empty(size=5, rng=rng)),
    BenchmarkCase("empty-16", lambda rng: make_empty(size=16, rng=rng)),
    BenchmarkCase("doorkey-8", lambda rng: make_door_key(size=8, rng=rng)),
    BenchmarkCase("doorkey-8-xray",
                  lambda rng: make_door_key(size=8, rng=rng, see_through_walls=True)),
]


def _rate(count: int, seconds: float) -> float:
    return count / max(seconds, 1e-9)


def run_case(case: BenchmarkCase, n_steps: int = 20000, seed: int = 0) -> dict:
    rng = np.random.default_rng(seed)
    env = case.make(rng)
    actions = rng.integers(0, len(Action), size=n_steps)
    obs = np.zeros((env.agent_view_size, env.agent_view_size, 3), dtype=np.uint8)

    env.reset()
    start = time.perf_counter()
    for a in actions:
        if env.done:
            env.reset()
        env.step(int(a))
    step_time = time.perf_counter() - start

    start = time.perf_counter()
    for _ in range(n_steps // 10):
        env.render_observation(obs)
    obs_time = time.perf_counter() - start

    env.reset()
    start = time.perf_counter()
    for a in actions:
        if env.done:
            env.reset()
        env.step(int(a))
        env.render_observation(obs)
    both_time = time.perf_counter() - start

    return {
        "name": case.name,
        "steps_per_sec": _rate(n_steps, step_time),
        "obs_per_sec": _rate(n_steps // 10, obs_time),
        "steps_obs_per_sec": _rate(n_steps, both_time),
    }


def main():
    print("=" * 70)
    print("  MiniGrid Core — Step Throughput")
    print("=" * 70)
    print(f"  {'level':<18s}{'steps/s':>14s}{'obs/s':>14s}{'step+obs/s':>16s}")
    for case in CASES:
        r = run_case(case)
        print(f"  {r['name']:<18s}{r['steps_per_sec']:>14,.0f}"
              f"{r['obs_per_sec']:>14,.0f}{r['steps_obs_per_sec']:>16,.0f}")
    print("=" * 70)


if __name__ == "__main__":
    main()
