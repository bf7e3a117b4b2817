"""Flocking particle simulation pulled toward external attractor points."""

from .particle import Particle
from .spatial import SpatialGrid
from .system import ParticleSystem, RenderState

__all__ = ["Particle", "ParticleSystem", "RenderState", "SpatialGrid"]
