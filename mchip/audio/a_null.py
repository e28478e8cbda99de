#!/usr/bin/env python3

"""
Null Audio Plugin

Serves as a base class for other Audio plugins.  Can be used on its own if no
sound is required.

The CPU drives audio through two calls: the buzzer is switched on while the
sound timer is above zero, and a one-shot beep event fires when the timer
runs down from 1 to 0.  Plugins implement whichever of the two suits them.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class Audio:
    def __init__(self):
        # Buzzer should be disabled (not playing sounds) by default
        self.buzzer_enabled = False

    def enable_buzzer(self, enabled):
        # The buzzer should play sounds when the sound timer is >0
        self.buzzer_enabled = enabled

    def beep(self):
        # Called exactly once each time the sound timer expires
        pass

    def is_null(self):
        # Only the null audio device should return True
        return True

    def shutdown(self):
        self.enable_buzzer(False)
