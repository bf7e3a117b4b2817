"""Particle population management, attraction and the per-tick update."""

import numpy as np
from typing import List, NamedTuple, Optional, Sequence, Tuple

from config import particles as config
from .particle import Particle
from .spatial import SpatialGrid
from .vector import map_range


class RenderState(NamedTuple):
    """Per-particle arrays handed to the rendering collaborator."""
    positions: np.ndarray   # (n, 2)
    sizes: np.ndarray       # (n,)
    colors: np.ndarray      # (n, 4) rgba, 0-255
    lifespans: np.ndarray   # (n,)


class ParticleSystem:
    """
    A flock of particles pulled toward a set of external attractor points.

    The driver calls ``set_attractors`` then ``update`` once per tick. Every
    completed ``update`` leaves exactly ``max_particles`` particles: dead
    particles are removed during the pass and fresh ones are spawned to
    take their place once the pass is over. Particles spawned that way are
    first moved on the following tick.
    """

    def __init__(
        self,
        max_particles: int = config.PARTICLES["count"],
        width: float = config.WINDOW["width"],
        height: float = config.WINDOW["height"],
        rng: Optional[np.random.Generator] = None,
        use_spatial_grid: bool = config.FLOCKING["use_spatial_grid"],
        verbose: bool = False
    ):
        if max_particles < 0:
            raise ValueError(f"max_particles must be >= 0, got {max_particles}")
        if width <= 0 or height <= 0:
            raise ValueError(f"Canvas size must be positive, got {width}x{height}")

        self.max_particles = int(max_particles)
        self.width = float(width)
        self.height = float(height)
        self.rng = rng if rng is not None else np.random.default_rng()

        self.particles: List[Particle] = []
        self.attractors: Sequence = []

        # Flocking parameters
        self.separation_distance = config.FLOCKING["separation_distance"]
        self.neighbor_distance = config.FLOCKING["neighbor_distance"]
        self.separation_weight = config.FLOCKING["separation_weight"]
        self.alignment_weight = config.FLOCKING["alignment_weight"]
        self.cohesion_weight = config.FLOCKING["cohesion_weight"]
        self.border_weight = config.FLOCKING["border_weight"]

        # Attraction parameters
        self.attraction_radius = config.ATTRACTION["radius"]
        self.strength_near = config.ATTRACTION["strength_near"]
        self.strength_far = config.ATTRACTION["strength_far"]

        # Neighbors may move up to max_speed during the pass, so pad the cells
        self.grid: Optional[SpatialGrid] = None
        if use_spatial_grid:
            cell_size = self.neighbor_distance + 2 * config.PARTICLES["max_speed"]
            self.grid = SpatialGrid(self.width, self.height, cell_size)

        for _ in range(self.max_particles):
            self.add_particle()

        if verbose:
            mode = "spatial grid" if self.grid is not None else "all-pairs"
            print(f"[Particles] Initialized {self.max_particles:,} particles "
                  f"on {self.width:.0f}x{self.height:.0f} ({mode} neighbors)")

    def add_particle(self) -> Particle:
        """Spawn a particle at a uniformly random position on the canvas."""
        x = self.rng.uniform(0.0, self.width)
        y = self.rng.uniform(0.0, self.height)
        particle = Particle.spawn(x, y, self.rng)
        self.particles.append(particle)
        return particle

    def _replenish(self):
        while len(self.particles) < self.max_particles:
            self.add_particle()

    def set_attractors(self, points: Sequence):
        """Replace the attractor set for the coming tick (may be empty)."""
        self.attractors = points

    def resize(self, width: float, height: float):
        """Change the canvas bounds used for spawning and border avoidance."""
        if width <= 0 or height <= 0:
            raise ValueError(f"Canvas size must be positive, got {width}x{height}")
        self.width = float(width)
        self.height = float(height)
        if self.grid is not None:
            self.grid.resize(self.width, self.height)

    def _attractor_array(self) -> np.ndarray:
        """Attractors as an (k, 2) float array; extra coordinates are dropped."""
        if len(self.attractors) == 0:
            return np.zeros((0, 2))
        points = np.asarray([np.asarray(p, dtype=np.float64)[:2] for p in self.attractors])
        return points.reshape(-1, 2)

    def _closest(self, targets: np.ndarray, position: np.ndarray) -> Optional[Tuple[np.ndarray, float]]:
        """First-encountered closest target strictly within the attraction radius."""
        if len(targets) == 0:
            return None
        dist = np.sqrt(((targets - position) ** 2).sum(axis=1))
        in_range = dist < self.attraction_radius
        if not in_range.any():
            return None
        # argmin returns the first index on ties, matching input order
        idx = int(np.argmin(np.where(in_range, dist, np.inf)))
        return targets[idx], float(dist[idx])

    def closest_attractor(self, position) -> Optional[Tuple[np.ndarray, float]]:
        """Return (point, distance) of the closest attractor in range, or None."""
        position = np.asarray(position, dtype=np.float64)[:2]
        return self._closest(self._attractor_array(), position)

    def attraction_strength(self, distance: float) -> float:
        """Pull strength: strength_near at distance 0 down to strength_far at the radius."""
        return map_range(distance, 0.0, self.attraction_radius,
                         self.strength_near, self.strength_far)

    def update(self):
        """Advance the whole population by one tick."""
        self._replenish()

        targets = self._attractor_array()

        population = list(self.particles)
        removed = np.zeros(len(population), dtype=np.bool_)
        if self.grid is not None:
            self.grid.build(np.array([p.position for p in population]).reshape(-1, 2))

        # Walk backward so in-place removal never skips a particle
        for i in range(len(self.particles) - 1, -1, -1):
            p = self.particles[i]

            if self.grid is not None:
                neighbors = [population[j] for j in self.grid.query(*p.position) if not removed[j]]
            else:
                neighbors = self.particles

            separation = p.separate(neighbors, self.separation_distance) * self.separation_weight
            alignment = p.align(neighbors, self.neighbor_distance) * self.alignment_weight
            cohesion = p.cohesion(neighbors, self.neighbor_distance) * self.cohesion_weight
            borders = p.borders(self.width, self.height) * self.border_weight

            p.apply_force(separation)
            p.apply_force(alignment)
            p.apply_force(cohesion)
            p.apply_force(borders)

            p.is_attracted = False

            closest = self._closest(targets, p.position)
            if closest is not None:
                point, dist = closest
                p.apply_force(p.seek(point, self.attraction_strength(dist)))
                p.is_attracted = True

            p.update()

            if p.is_dead():
                del self.particles[i]
                removed[i] = True

        self._replenish()

    def render_state(self) -> RenderState:
        """Snapshot of what the renderer needs from each surviving particle."""
        n = len(self.particles)
        if n == 0:
            return RenderState(np.zeros((0, 2)), np.zeros(0), np.zeros((0, 4)), np.zeros(0))
        return RenderState(
            positions=np.array([p.position for p in self.particles], dtype=np.float64),
            sizes=np.array([p.size for p in self.particles], dtype=np.float64),
            colors=np.array([p.color for p in self.particles], dtype=np.float64),
            lifespans=np.array([p.lifespan for p in self.particles], dtype=np.float64),
        )

    def display(self, renderer):
        """Hand the current particle state to a renderer exposing ``draw(state)``."""
        renderer.draw(self.render_state())

    def stats(self) -> dict:
        """Summary numbers for HUDs and headless runs."""
        n = len(self.particles)
        if n == 0:
            return {"count": 0, "attracted": 0, "mean_lifespan": 0.0,
                    "mean_position": (self.width / 2, self.height / 2)}
        positions = np.array([p.position for p in self.particles])
        mean = positions.mean(axis=0)
        return {
            "count": n,
            "attracted": sum(1 for p in self.particles if p.is_attracted),
            "mean_lifespan": float(np.mean([p.lifespan for p in self.particles])),
            "mean_position": (float(mean[0]), float(mean[1])),
        }
