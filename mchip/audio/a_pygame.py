#!/usr/bin/env python3

"""
PyGame Audio Plugin

Plays a square wave through PyGame / SDL for as long as the sound timer is
above zero.

There is simply a buzzer with an 'on' or 'off' status.  The 1-bit, 16-byte
waveform below is stretched lengthways and has its offset moved to fit in a
modern 8-bit PyGame / SDL buffer, but it retains the shape of a square wave.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import pygame
from .a_null import Audio as AudioBase

PLAYBACK_FREQUENCY = 44100.0
BUZZER_FREQUENCY = 4000.0
BUZZER_WAVEFORM = b"\x00\xFF" * 8
DEFAULT_VOLUME = 0.1


class Audio(AudioBase):
    def __init__(self):
        pygame.mixer.pre_init(int(PLAYBACK_FREQUENCY), size=8, channels=1, buffer=1, allowedchanges=0)
        pygame.mixer.init()
        self.sound = pygame.mixer.Sound(self._resample(BUZZER_WAVEFORM, PLAYBACK_FREQUENCY / BUZZER_FREQUENCY))
        self.sound.set_volume(DEFAULT_VOLUME)
        super().__init__()

    @staticmethod
    def _resample(buffer, sample_multiplier):
        # Stretch the width and height of the 1-bit waveform to fit the host buffer
        resampled_buffer_size = int(len(buffer) * 8 * sample_multiplier)
        resampled_buffer = bytearray(resampled_buffer_size)

        for resampled_buffer_pos in range(resampled_buffer_size):
            buffer_byte_pos = resampled_buffer_pos / sample_multiplier
            byte = int(buffer_byte_pos / 8.0)
            bit = 7 - int(buffer_byte_pos % 8.0)
            resampled_buffer[resampled_buffer_pos] = ((buffer[byte] >> bit) & 1) * 0xFF

        return resampled_buffer

    def enable_buzzer(self, enabled):
        # If the buzzer is already sounding, it won't be restarted
        if enabled and not self.buzzer_enabled:
            self.sound.play(-1)
        elif not enabled and self.buzzer_enabled:
            self.sound.stop()

        super().enable_buzzer(enabled)

    def is_null(self):
        return False

    def shutdown(self):
        super().shutdown()
        pygame.mixer.quit()
