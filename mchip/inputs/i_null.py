#!/usr/bin/env python3

"""
Null Input Plugin

Serves as a base class for other Input plugins.  Can be used on its own if
the host drives the keypad directly with set_key, such as in tests or when
embedding the emulator.

The keypad state is a plain vector of 16 level flags.  No debouncing or edge
detection happens here: the CPU only ever asks whether a key is down now.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from ..constants import NUM_KEYS


class InputsError(Exception):
    pass


class Inputs:
    def __init__(self, keymap, renderer=None, force_lowercase=False):
        self.keymap_dict = {}
        self.renderer = renderer
        self.key_down = [False] * NUM_KEYS
        keymap_split = keymap.split(",")

        if len(keymap_split) != NUM_KEYS:
            raise InputsError("Incorrect number of keys defined -- 16 required.  Use commas to split numbers")

        for key_num, key_defined in enumerate(keymap_split):
            try:
                key_defined_ord = int(key_defined)
            except ValueError:
                raise InputsError("Defined keys are not all integer values") from None

            if force_lowercase:
                # If we are working with characters rather than keyscan codes, we should convert to lowercase
                key_defined_ord = ord(chr(key_defined_ord).lower())

            if key_defined_ord in self.keymap_dict:
                raise InputsError("Duplicate keys defined")

            self.keymap_dict[key_defined_ord] = key_num

    def process_messages(self):
        return False  # Don't exit the program

    def set_key(self, key, down):
        if not 0 <= key < NUM_KEYS:
            raise InputsError("Key 0x{:x} is out of range".format(key))

        self.key_down[key] = bool(down)

    def is_key_down(self, key):
        return self.key_down[key]

    def get_keypress(self):
        # Lowest-numbered key currently held, or None
        for key in range(NUM_KEYS):
            if self.is_key_down(key):
                return key

        return None

    def clear(self):
        for key in range(NUM_KEYS):
            self.key_down[key] = False

    def shutdown(self):
        pass
