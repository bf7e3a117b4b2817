"""
Face Particles
==============

A flock of translucent particles drawn toward facial feature points.
Without a landmark source the flock gathers around a simulated face.

Controls:
    - D: Toggle debug overlay (attractors + stats)
    - R: Reset the particle population
    - ESC: Quit
"""

import argparse

from config import particles as config
from core import Application


def main():
    parser = argparse.ArgumentParser(description="Face-attracted particle flock")
    parser.add_argument("--particles", "-n", type=int, default=config.PARTICLES["count"],
                        help=f"Population size (default: {config.PARTICLES['count']})")
    parser.add_argument("--seed", type=int, help="Random seed for a reproducible run")
    parser.add_argument("--debug", action="store_true", help="Start with the debug overlay on")
    args = parser.parse_args()

    app = Application(num_particles=args.particles, seed=args.seed, debug=args.debug)
    app.run()


if __name__ == "__main__":
    main()
