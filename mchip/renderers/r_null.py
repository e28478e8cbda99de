#!/usr/bin/env python3

"""
Null Renderer Plugin

This serves as a base class for other rendering plugins.

This module can be used on its own as a Renderer plugin if you only want to see
debug output or beeps.  Without a renderer, performance data will also not be
shown.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class RendererError(Exception):
    pass


class Renderer:
    def __init__(self, scale=None, **kwargs):  # pylint: disable=unused-argument
        self.scale = 1 if scale is None else scale
        self.refresh_needed = False
        self.set_resolution(0, 0)

    def set_resolution(self, width, height):
        self.width = width
        self.height = height

    def draw(self, framebuffer):
        # Copy the whole framebuffer into the host display surface, ready for the next refresh
        width, height = framebuffer.get_vid_size()

        if (width, height) != (self.width, self.height):
            self.set_resolution(width, height)

        for y, row in enumerate(framebuffer.rows()):
            for x, pixel in enumerate(row):
                self.set_pixel(x, y, pixel)

        self.refresh_needed = True

    def set_pixel(self, x, y, colour):  # pylint: disable=unused-argument
        pass

    def refresh_display(self):
        self.refresh_needed = False

    def set_title(self, title):
        pass

    def shutdown(self):
        pass
