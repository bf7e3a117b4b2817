"""Particle rendering - translucent discs built with Numba and drawn from VBOs."""

import math
import numpy as np
from numba import njit, prange
from OpenGL.GL import *
from OpenGL.arrays import vbo

from config import particles as config


@njit(parallel=True, fastmath=True, cache=True)
def build_discs_numba(
    positions: np.ndarray,
    sizes: np.ndarray,
    colors: np.ndarray,
    lifespans: np.ndarray,
    vertices: np.ndarray,
    vert_colors: np.ndarray,
    segments: int,
    max_lifespan: float,
    num_particles: int
):
    """Numba JIT-compiled disc tessellation (one triangle fan per particle)."""
    step = 2.0 * math.pi / segments
    verts_per = segments * 3

    for i in prange(num_particles):
        px, py = positions[i, 0], positions[i, 1]
        r = sizes[i] * 0.5

        # Lifespan doubles as opacity
        alpha = lifespans[i] / max_lifespan
        if alpha < 0.0:
            alpha = 0.0
        elif alpha > 1.0:
            alpha = 1.0

        cr = colors[i, 0] / 255.0
        cg = colors[i, 1] / 255.0
        cb = colors[i, 2] / 255.0

        base = i * verts_per
        for s in range(segments):
            a0 = s * step
            a1 = a0 + step
            v = base + s * 3

            vertices[v, 0] = px
            vertices[v, 1] = py
            vertices[v + 1, 0] = px + math.cos(a0) * r
            vertices[v + 1, 1] = py + math.sin(a0) * r
            vertices[v + 2, 0] = px + math.cos(a1) * r
            vertices[v + 2, 1] = py + math.sin(a1) * r

            for k in range(3):
                vert_colors[v + k, 0] = cr
                vert_colors[v + k, 1] = cg
                vert_colors[v + k, 2] = cb
                vert_colors[v + k, 3] = alpha


class ParticleRenderer:
    """Draws a ``RenderState`` as alpha-blended discs."""

    def __init__(self, capacity: int = config.PARTICLES["count"]):
        self.segments = config.RENDER["circle_segments"]
        self.verts_per_particle = self.segments * 3
        self.max_lifespan = float(config.PARTICLES["max_lifespan"])

        self._vbo_vertices = None
        self._vbo_colors = None
        self._vbos_initialized = False
        self._allocate(capacity)

        self._warmup_numba()

    def _allocate(self, capacity: int):
        self.capacity = max(1, capacity)
        total = self.capacity * self.verts_per_particle
        self._vertices = np.zeros((total, 2), dtype=np.float32)
        self._vert_colors = np.zeros((total, 4), dtype=np.float32)

    def _init_vbos(self):
        """Initialize VBOs for fast GPU rendering."""
        if self._vbos_initialized:
            return

        try:
            self._vbo_vertices = vbo.VBO(self._vertices, usage=GL_DYNAMIC_DRAW)
            self._vbo_colors = vbo.VBO(self._vert_colors, usage=GL_DYNAMIC_DRAW)
            self._vbos_initialized = True
        except Exception as e:
            print(f"[Render] VBO init failed, using client arrays: {e}")
            self._vbos_initialized = False

    def _warmup_numba(self):
        """Pre-compile the tessellation kernel."""
        n = 4
        pos = np.random.rand(n, 2) * 10
        sizes = np.ones(n)
        cols = np.full((n, 4), 200.0)
        life = np.full(n, 100.0)
        verts = np.zeros((n * self.verts_per_particle, 2), dtype=np.float32)
        vcols = np.zeros((n * self.verts_per_particle, 4), dtype=np.float32)
        build_discs_numba(pos, sizes, cols, life, verts, vcols,
                          self.segments, self.max_lifespan, n)

    def draw(self, state):
        """Render every particle in ``state``."""
        n = len(state.positions)
        if n == 0:
            return

        if n > self.capacity:
            self._allocate(n)
            self._vbos_initialized = False

        if not self._vbos_initialized:
            self._init_vbos()

        build_discs_numba(
            np.ascontiguousarray(state.positions, dtype=np.float64),
            np.ascontiguousarray(state.sizes, dtype=np.float64),
            np.ascontiguousarray(state.colors, dtype=np.float64),
            np.ascontiguousarray(state.lifespans, dtype=np.float64),
            self._vertices,
            self._vert_colors,
            self.segments,
            self.max_lifespan,
            n
        )
        total_verts = n * self.verts_per_particle

        glEnable(GL_BLEND)
        glBlendFunc(GL_SRC_ALPHA, GL_ONE_MINUS_SRC_ALPHA)

        if self._vbos_initialized and self._vbo_vertices is not None:
            # VBO rendering path (faster)
            self._vbo_vertices.set_array(self._vertices[:total_verts])
            self._vbo_colors.set_array(self._vert_colors[:total_verts])

            self._vbo_vertices.bind()
            glEnableClientState(GL_VERTEX_ARRAY)
            glVertexPointer(2, GL_FLOAT, 0, None)

            self._vbo_colors.bind()
            glEnableClientState(GL_COLOR_ARRAY)
            glColorPointer(4, GL_FLOAT, 0, None)

            glDrawArrays(GL_TRIANGLES, 0, total_verts)

            self._vbo_vertices.unbind()
            self._vbo_colors.unbind()
        else:
            # Fallback to client-side arrays
            glEnableClientState(GL_VERTEX_ARRAY)
            glEnableClientState(GL_COLOR_ARRAY)

            glVertexPointer(2, GL_FLOAT, 0, self._vertices[:total_verts])
            glColorPointer(4, GL_FLOAT, 0, self._vert_colors[:total_verts])
            glDrawArrays(GL_TRIANGLES, 0, total_verts)

        glDisableClientState(GL_VERTEX_ARRAY)
        glDisableClientState(GL_COLOR_ARRAY)
        glDisable(GL_BLEND)
