"""Input handling for keyboard and window events."""

import pygame
from pygame.locals import *


class InputHandler:
    """Maps pygame events onto application actions."""

    def __init__(self, app):
        self.app = app

    def handle_event(self, event: pygame.event.Event) -> bool:
        """
        Handle a single pygame event.
        Returns False if the application should quit, True otherwise.
        """
        if event.type == QUIT:
            return False
        elif event.type == KEYDOWN:
            if event.key == K_ESCAPE:
                return False
            elif event.key == K_d:
                self.app.debug = not self.app.debug
            elif event.key == K_r:
                self.app.reset()
        elif event.type == VIDEORESIZE:
            self.app.resize(event.w, event.h)

        return True
