#!/usr/bin/env python3

"""
Framebuffer Emulator

Programs for this system cannot write directly into video RAM.  Instead,
sprites are drawn to the screen using an XOR method, and the whole screen can
be cleared.  Those are the only two ways the display contents can change.

The buffer holds one byte per pixel (0 or 1) in a RAM bank.  It knows nothing
about how it is shown: after the CPU reports a change, the host hands the
buffer to a Renderer plugin, which reads it back row by row.

Collisions (where a pixel was set, but was unset by an XOR) are reported back
to the caller so the CPU can raise the Vf flag.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import VID_WIDTH, VID_HEIGHT
from .ram import RAM


class FramebufferError(Exception):
    pass


class Framebuffer:
    def __init__(self, vid_width=VID_WIDTH, vid_height=VID_HEIGHT):
        if vid_width <= 0 or vid_height <= 0:
            raise FramebufferError("Display dimensions must be positive")

        self.vid_width = vid_width
        self.vid_height = vid_height
        self.vid_size = vid_width * vid_height
        self.ram_bank = RAM()
        self.ram_bank.resize(self.vid_size)

    def clear(self):
        self.ram_bank.clear()

    def xor_pixel(self, x, y):
        # Sprites drawn off the edge wrap around to the opposite side.  Returns True on a collision.
        vram_loc = (y % self.vid_height) * self.vid_width + (x % self.vid_width)
        pixel = self.ram_bank.read(vram_loc)
        self.ram_bank.write(vram_loc, pixel ^ 1)
        return pixel != 0

    def get_pixel(self, x, y):
        return self.ram_bank.read(y * self.vid_width + x)

    def rows(self):
        # Read-only snapshots of each row, top to bottom
        mem = self.ram_bank.mem
        vid_width = self.vid_width

        for y in range(self.vid_height):
            yield bytes(mem[y * vid_width:(y + 1) * vid_width])

    def get_vid_size(self):
        return self.vid_width, self.vid_height
