"""Main application class that ties everything together."""

import numpy as np
import pygame
from pygame.locals import *
from OpenGL.GL import *
from typing import Callable, Optional, Sequence

from config import particles as config
from .input_handler import InputHandler
from attractors import AttractorFeed
from rendering import AttractorOverlay, ParticleRenderer, TextRenderer
from swarm import ParticleSystem


class Application:
    """Main application managing the frame loop and rendering."""

    def __init__(self, num_particles: int = config.PARTICLES["count"],
                 landmark_source: Optional[Callable[[], Optional[Sequence]]] = None,
                 seed: Optional[int] = None, debug: bool = False):
        pygame.init()
        self.width = config.WINDOW["width"]
        self.height = config.WINDOW["height"]
        self._flags = DOUBLEBUF | OPENGL | (RESIZABLE if config.WINDOW["resizable"] else 0)
        pygame.display.set_mode((self.width, self.height), self._flags)
        pygame.display.set_caption(config.WINDOW["title"])

        self.num_particles = num_particles
        self.rng = np.random.default_rng(seed)

        # Core components
        self.input_handler = InputHandler(self)
        self.feed = AttractorFeed(self.width, self.height, landmark_source, rng=self.rng)

        # Rendering components
        self.particle_renderer = ParticleRenderer(capacity=num_particles)
        self.overlay = AttractorOverlay()
        self.text_renderer = TextRenderer()

        # Simulation
        self.system = self._new_system()

        # State
        self.clock = pygame.time.Clock()
        self.running = True
        self.debug = debug
        self.fps = 0

        self._setup_gl()

    def _new_system(self) -> ParticleSystem:
        return ParticleSystem(
            max_particles=self.num_particles,
            width=self.width,
            height=self.height,
            rng=self.rng,
            verbose=True
        )

    def _setup_gl(self):
        """2D orthographic projection in canvas pixels, y pointing down."""
        glViewport(0, 0, self.width, self.height)
        glClearColor(*config.COLORS["background"])
        glDisable(GL_DEPTH_TEST)

        glMatrixMode(GL_PROJECTION)
        glLoadIdentity()
        glOrtho(0, self.width, self.height, 0, -1, 1)
        glMatrixMode(GL_MODELVIEW)
        glLoadIdentity()

    def reset(self):
        """Start over with a fresh population and an undisturbed fallback face."""
        self.system = self._new_system()
        self.feed.fallback.reset()

    def resize(self, width: int, height: int):
        """Follow the window size; the canvas shrinks or grows with it."""
        self.width, self.height = max(1, width), max(1, height)
        pygame.display.set_mode((self.width, self.height), self._flags)
        self.system.resize(self.width, self.height)
        self.feed.resize(self.width, self.height)
        self._setup_gl()

    def _handle_events(self):
        """Process all pending pygame events."""
        for event in pygame.event.get():
            if not self.input_handler.handle_event(event):
                self.running = False

    def _update(self):
        """One simulation tick: attractors in, particles advanced."""
        self.system.set_attractors(self.feed.points())
        self.system.update()
        self.feed.advance()

    def _render(self):
        """Render the scene."""
        glClear(GL_COLOR_BUFFER_BIT)
        glLoadIdentity()

        self.system.display(self.particle_renderer)

        if self.debug:
            self.overlay.draw(self.system.attractors)
            stats = self.system.stats()
            screen_size = (self.width, self.height)
            self.text_renderer.draw_lines([
                f"Particles: {stats['count']}  |  Attracted: {stats['attracted']}  |  FPS: {self.fps:.0f}",
                f"Mode: {self.feed.mode}  |  Landmarks: {self.feed.landmark_count}  |  "
                f"Attractors: {len(self.system.attractors)}",
            ], 10, 10, screen_size)

        pygame.display.flip()

    def run(self):
        """Main application loop."""
        while self.running:
            self.clock.tick(config.WINDOW["fps"])
            self.fps = self.clock.get_fps()

            self._handle_events()
            self._update()
            self._render()

        pygame.quit()
