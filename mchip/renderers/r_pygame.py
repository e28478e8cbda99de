#!/usr/bin/env python3

"""
PyGame Renderer Plugin

Draws graphics onto an SDL window surface via PyGame.  The surface is
allocated at the emulated screen size, and then the contents are stretched
(using 'Nearest Neighbour' translation) to fit the window itself.  This means
we don't have to draw the same pixel multiple times.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import pygame
from .r_null import Renderer as RendererBase
from ..constants import APP_NAME

BACKGROUND_COLOUR = b"\x22\x22\x22"
FOREGROUND_COLOUR = b"\xDD\xDD\xDD"


class Renderer(RendererBase):
    def __init__(self, scale=None, **kwargs):
        if scale is None:
            scale = 640  # Default window width if not supplied, or set to default

        pygame.display.init()
        self.rgb_buffer = None
        self.scaled_size = (scale, scale // 2)
        self.display_surface = pygame.display.set_mode(self.scaled_size)
        self.rgb_map = (BACKGROUND_COLOUR, FOREGROUND_COLOUR)
        super().__init__(scale)
        self.set_title(APP_NAME)

    def set_resolution(self, width, height):
        self.rgb_buffer = bytearray(BACKGROUND_COLOUR * (width * height))  # 24-bit
        super().set_resolution(width, height)

    def set_pixel(self, x, y, colour):
        # Update RGB buffer in-place to minimise allocations and PyGame calls
        rgb_location = (y * self.width + x) * 3
        self.rgb_buffer[rgb_location:rgb_location + 3] = self.rgb_map[colour]

    def refresh_display(self):
        if self.refresh_needed and self.width:
            # Blit the bytearray straight to the surface, rather than making very frequent PixelArray updates
            render_surface = pygame.image.frombuffer(bytes(self.rgb_buffer), (self.width, self.height), "RGB")
            scaled_win = pygame.transform.scale(render_surface, self.scaled_size)
            self.display_surface.blit(scaled_win, (0, 0))
            pygame.display.flip()

        super().refresh_display()

    def set_title(self, title):
        pygame.display.set_caption(title)

    def shutdown(self):
        # PyGame currently segfaults if display.quit is called via __del__
        pygame.display.quit()
        super().shutdown()
