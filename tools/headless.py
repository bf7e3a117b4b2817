"""
Headless Runner
===============

Advances the particle simulation without opening a window and reports
population statistics. Attractors come from the simulated face.

Usage:
    python -m tools.headless                      # 600 particles, 600 ticks
    python -m tools.headless -n 200 -t 1000       # Custom size and length
    python -m tools.headless --seed 7 --every 50  # Reproducible, report often
"""

import argparse
import time
import numpy as np

from attractors import AttractorFeed
from config import particles as config
from swarm import ParticleSystem


def mean_attractor_distance(system: ParticleSystem, points) -> float:
    """Mean distance from each particle to its nearest attractor."""
    if len(system.particles) == 0 or len(points) == 0:
        return 0.0
    positions = np.array([p.position for p in system.particles])
    targets = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    diff = positions[:, np.newaxis, :] - targets[np.newaxis, :, :]
    return float(np.sqrt((diff ** 2).sum(axis=2)).min(axis=1).mean())


def format_report(tick: int, system: ParticleSystem, points, tick_ms: float) -> str:
    stats = system.stats()
    return (f"[Headless] tick {tick:5d} | particles {stats['count']:4d} | "
            f"attracted {stats['attracted']:4d} | "
            f"lifespan {stats['mean_lifespan']:6.1f} | "
            f"dist {mean_attractor_distance(system, points):7.1f} | "
            f"{tick_ms:6.2f} ms/tick")


def run(num_particles: int, ticks: int, width: float, height: float,
        seed=None, every: int = 100, use_spatial_grid: bool = True) -> ParticleSystem:
    """Run ``ticks`` updates and print a report every ``every`` ticks."""
    rng = np.random.default_rng(seed)
    system = ParticleSystem(num_particles, width, height, rng=rng,
                            use_spatial_grid=use_spatial_grid, verbose=True)
    feed = AttractorFeed(width, height, rng=rng)

    elapsed = 0.0
    for tick in range(1, ticks + 1):
        points = feed.points()
        system.set_attractors(points)

        start = time.perf_counter()
        system.update()
        elapsed += time.perf_counter() - start

        feed.advance()

        if every > 0 and (tick % every == 0 or tick == ticks):
            print(format_report(tick, system, points, elapsed / tick * 1000))

    return system


def main():
    parser = argparse.ArgumentParser(description="Run the particle simulation without a window")
    parser.add_argument("--particles", "-n", type=int, default=config.PARTICLES["count"],
                        help="Population size")
    parser.add_argument("--ticks", "-t", type=int, default=600, help="Number of ticks to run")
    parser.add_argument("--width", type=float, default=config.WINDOW["width"], help="Canvas width")
    parser.add_argument("--height", type=float, default=config.WINDOW["height"], help="Canvas height")
    parser.add_argument("--seed", type=int, help="Random seed")
    parser.add_argument("--every", type=int, default=100, help="Report interval in ticks (0 = final only)")
    parser.add_argument("--all-pairs", action="store_true",
                        help="Disable the spatial grid and scan every particle pair")
    args = parser.parse_args()

    system = run(
        args.particles, args.ticks, args.width, args.height,
        seed=args.seed, every=args.every, use_spatial_grid=not args.all_pairs
    )
    if args.every == 0:
        print(f"[Headless] Done: {system.stats()['count']} particles after {args.ticks} ticks")


if __name__ == "__main__":
    main()
