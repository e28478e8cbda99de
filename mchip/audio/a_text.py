#!/usr/bin/env python3

"""
Text Audio Plugin

Reports each expired sound timer as a line of text on standard output.  Handy
when running headless with the null renderer, or when no speaker is present.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .a_null import Audio as AudioBase


class Audio(AudioBase):
    def beep(self):
        print("BEEP!")

    def is_null(self):
        return False
