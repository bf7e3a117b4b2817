"""Rendering components for the particle display."""

from .overlay import AttractorOverlay
from .particles import ParticleRenderer
from .text import TextRenderer

__all__ = ["AttractorOverlay", "ParticleRenderer", "TextRenderer"]
