#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

# App identification
APP_NAME = "MonoChip Emulator"
APP_VERSION = "1.0.0"
APP_COPYRIGHT = "Copyright (C) 2022 Gregory Maynard-Hoare, licensed under GNU Affero General Public License v3.0"
APP_INTRO = "{} V{} -- ".format(APP_NAME, APP_VERSION)

# Emulated memory layout
MEM_SIZE = 0x1000      # 4K of RAM
PROGRAM_START = 0x200  # Everything below this is reserved for the interpreter
SYSFONT_LOC = 0x000    # The built-in font sits at the very start of RAM
SYSFONT_GLYPH_SIZE = 5
STACK_DEPTH = 16

# Emulated display
VID_WIDTH = 64
VID_HEIGHT = 32

# Emulated keypad
NUM_KEYS = 0x10

# 60Hz timer decay and display refresh
TIMER_FREQ = 60.0

# Hexadecimal digits 0-F, 4 pixels wide by 5 high.  Only the top nibble of each row is drawn.
SYSTEM_FONT = bytes((
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80   # F
))

# Default mappings for keys 0-F, laid out as 1234/QWER/ASDF/ZXCV on a QWERTY keyboard.  The keyscans and lowercase
# ASCII characters for these are the same code
DEFAULT_KEYMAP = "120,49,50,51,113,119,101,97,115,100,122,99,52,114,102,118"

# Default instructions per second
DEFAULT_CLOCK_SPEED = 500

# CPU quirks that can be toggled from the command line
CPU_QUIRKS = ["shift"]
