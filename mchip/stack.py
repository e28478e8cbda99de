#!/usr/bin/env python3

"""
Stack Emulator

CHIP-8 gives the call stack no location in RAM and exposes no stack pointer
register to the running program, so a plain list of return addresses is all
that is needed.  The stack pointer is simply the list length.

Overflowing the 16 levels, or returning with nothing on the stack, means the
program (or the interpreter) is broken, so both raise rather than corrupt the
program counter.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class StackError(Exception):
    pass


class Stack:
    def __init__(self, size):
        self.items = []
        self.size = size

    @property
    def sp(self):
        return len(self.items)

    def push(self, item):
        # Fetching the stack size with 'len' should be immediate, so no slow loop
        if len(self.items) >= self.size:
            raise StackError("Stack overflow")

        self.items.append(item)

    def pop(self):
        try:
            return self.items.pop()
        except IndexError:
            raise StackError("Stack underflow") from None

    def clear(self):
        self.items.clear()

    def get_items(self):
        # For debugging
        return self.items
