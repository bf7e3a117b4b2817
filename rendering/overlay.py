"""Debug overlay marking the current attractor points."""

import numpy as np
from OpenGL.GL import *

from config import particles as config


class AttractorOverlay:
    """Draws each attractor as a small square point."""

    def __init__(self):
        self.color = config.COLORS["attractor"]
        self.point_size = config.RENDER["attractor_size"]

    def draw(self, attractors):
        if len(attractors) == 0:
            return

        points = np.asarray([np.asarray(p, dtype=np.float32)[:2] for p in attractors])

        glEnable(GL_BLEND)
        glBlendFunc(GL_SRC_ALPHA, GL_ONE_MINUS_SRC_ALPHA)
        glPointSize(self.point_size)

        glBegin(GL_POINTS)
        glColor4f(*self.color)
        for x, y in points:
            glVertex2f(x, y)
        glEnd()

        glDisable(GL_BLEND)
