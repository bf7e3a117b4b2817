"""Individual particle with flocking behaviors and a lifespan."""

import numpy as np
from dataclasses import dataclass, field
from typing import Sequence, Tuple

from config import particles as config
from .vector import limit, magnitude, random_unit, set_magnitude


@dataclass
class Particle:
    """
    A single flocking particle.

    Attributes:
        position: 2D position in canvas pixels
        velocity: 2D velocity (pixels per tick)
        acceleration: 2D force accumulator (reset every update)
        max_speed: Maximum velocity magnitude
        max_force: Maximum magnitude of any single steering force
        size: Diameter in pixels
        color: (r, g, b, a) in 0-255
        lifespan: Remaining life; the particle is dead at <= 0
        decay: Lifespan drained per tick while not attracted
        is_attracted: Set by the system when an attractor pulled this tick
    """
    position: np.ndarray = field(default_factory=lambda: np.zeros(2))
    velocity: np.ndarray = field(default_factory=lambda: np.zeros(2))
    acceleration: np.ndarray = field(default_factory=lambda: np.zeros(2))
    max_speed: float = config.PARTICLES["max_speed"]
    max_force: float = config.PARTICLES["max_force"]
    size: float = 5.0
    color: Tuple[float, float, float, float] = (255.0, 255.0, 255.0, 175.0)
    lifespan: float = config.PARTICLES["max_lifespan"]
    decay: float = 1.0
    is_attracted: bool = False

    @classmethod
    def spawn(cls, x: float, y: float, rng: np.random.Generator) -> "Particle":
        """Create a particle at (x, y) with randomized speed, size, color and decay."""
        p = config.PARTICLES
        speed = rng.uniform(*p["initial_speed"])
        color = (
            rng.uniform(*p["color"]),
            rng.uniform(*p["color"]),
            rng.uniform(*p["color"]),
            rng.uniform(*p["alpha"]),
        )
        return cls(
            position=np.array([x, y], dtype=np.float64),
            velocity=random_unit(rng) * speed,
            size=rng.uniform(*p["size"]),
            color=color,
            decay=rng.uniform(*p["decay"]),
        )

    @property
    def opacity(self) -> float:
        """Lifespan mapped to the 0-1 range."""
        return min(max(self.lifespan / config.PARTICLES["max_lifespan"], 0.0), 1.0)

    def apply_force(self, force: np.ndarray):
        """Add a force to the particle's acceleration."""
        self.acceleration += force

    def _steer(self, desired: np.ndarray) -> np.ndarray:
        """Steering delta toward a desired heading, clamped to max_force."""
        desired = set_magnitude(desired, self.max_speed)
        return limit(desired - self.velocity, self.max_force)

    def seek(self, target, strength: float = 1.0) -> np.ndarray:
        """Calculate steering force toward a target, scaled by strength."""
        desired = np.asarray(target, dtype=np.float64)[:2] - self.position
        if magnitude(desired) < 1:
            return np.zeros(2)
        return self._steer(desired) * strength

    def _in_range(self, neighbors: Sequence["Particle"], radius: float):
        """Positions, distances and a strict (0, radius) mask for the neighbors."""
        others = np.array([other.position for other in neighbors], dtype=np.float64)
        dist = np.sqrt(((others - self.position) ** 2).sum(axis=1))
        return others, dist, (dist > 0) & (dist < radius)

    def separate(self, neighbors: Sequence["Particle"],
                 desired_separation: float = config.FLOCKING["separation_distance"]) -> np.ndarray:
        """Steer away from neighbors closer than desired_separation."""
        if len(neighbors) == 0:
            return np.zeros(2)

        others, dist, mask = self._in_range(neighbors, desired_separation)
        count = int(mask.sum())
        if count == 0:
            return np.zeros(2)

        # Unit vectors away from each neighbor, weighted by 1/d
        diff = self.position - others[mask]
        d = dist[mask][:, np.newaxis]
        steer = (diff / d / d).sum(axis=0) / count

        if magnitude(steer) > 0:
            return self._steer(steer)
        return np.zeros(2)

    def align(self, neighbors: Sequence["Particle"],
              neighbor_distance: float = config.FLOCKING["neighbor_distance"]) -> np.ndarray:
        """Steer toward the average heading of nearby neighbors."""
        if len(neighbors) == 0:
            return np.zeros(2)

        _, _, mask = self._in_range(neighbors, neighbor_distance)
        count = int(mask.sum())
        if count == 0:
            return np.zeros(2)

        velocities = np.array([other.velocity for other in neighbors], dtype=np.float64)
        avg = velocities[mask].sum(axis=0) / count
        return self._steer(avg)

    def cohesion(self, neighbors: Sequence["Particle"],
                 neighbor_distance: float = config.FLOCKING["neighbor_distance"]) -> np.ndarray:
        """Steer toward the center of mass of nearby neighbors."""
        if len(neighbors) == 0:
            return np.zeros(2)

        others, _, mask = self._in_range(neighbors, neighbor_distance)
        count = int(mask.sum())
        if count == 0:
            return np.zeros(2)

        center = others[mask].sum(axis=0) / count
        return self.seek(center, config.FLOCKING["cohesion_strength"])

    def borders(self, width: float, height: float,
                buffer: float = config.FLOCKING["border_buffer"]) -> np.ndarray:
        """
        Steer back toward the interior when within ``buffer`` of an edge.

        The velocity component along the untouched axis is preserved. When
        near a vertical and a horizontal edge at once, the x correction wins.
        """
        x, y = self.position
        desired = None

        if x < buffer:
            desired = np.array([self.max_speed, self.velocity[1]])
        elif x > width - buffer:
            desired = np.array([-self.max_speed, self.velocity[1]])

        if desired is None:
            if y < buffer:
                desired = np.array([self.velocity[0], self.max_speed])
            elif y > height - buffer:
                desired = np.array([self.velocity[0], -self.max_speed])

        if desired is None:
            return np.zeros(2)
        return self._steer(desired)

    def update(self):
        """Integrate acceleration, then drain or regrow lifespan."""
        self.velocity = limit(self.velocity + self.acceleration, self.max_speed)
        self.position = self.position + self.velocity

        # Reset acceleration for next tick
        self.acceleration = np.zeros(2)

        if not self.is_attracted:
            self.lifespan -= self.decay
        else:
            self.lifespan = min(
                config.PARTICLES["max_lifespan"],
                self.lifespan + self.decay * config.PARTICLES["regen_factor"]
            )

    def is_dead(self) -> bool:
        return self.lifespan <= 0
