#!/usr/bin/env python3

"""
Host I/O Functionality

Handles loading program binaries for later writing into RAM.  Programs are raw
images with no header or checksum, so the bytes are handed over untouched.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class Loader:
    def load_binary(self, filename):
        with open(filename, "rb") as f:
            return f.read()
