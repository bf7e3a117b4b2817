"""Pytest configuration and fixtures for the particle simulation tests."""

import numpy as np
import pytest

from swarm import Particle, ParticleSystem


@pytest.fixture
def rng():
    """Provide a deterministic RNG for tests."""
    return np.random.default_rng(42)


@pytest.fixture
def make_particle():
    """Factory for particles with explicit kinematics and default attributes."""
    def _make(position=(100.0, 100.0), velocity=(0.0, 0.0), **kwargs):
        return Particle(
            position=np.array(position, dtype=np.float64),
            velocity=np.array(velocity, dtype=np.float64),
            **kwargs
        )
    return _make


@pytest.fixture
def single_particle_system(rng):
    """An 800x600 system holding one particle parked at rest at (100, 100)."""
    system = ParticleSystem(max_particles=1, width=800, height=600, rng=rng)
    p = system.particles[0]
    p.position = np.array([100.0, 100.0])
    p.velocity = np.zeros(2)
    return system
