#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from mchip.constants import DEFAULT_KEYMAP
from mchip.inputs.i_null import Inputs, InputsError


class TestInputs(unittest.TestCase):
    def setUp(self):
        self.inputs = Inputs(DEFAULT_KEYMAP)

    def test_inputs_keymap(self):
        self.assertEqual(0x0, self.inputs.keymap_dict[ord("x")])
        self.assertEqual(0xC, self.inputs.keymap_dict[ord("4")])
        self.assertEqual(0xF, self.inputs.keymap_dict[ord("v")])

    def test_inputs_keymap_lowercase(self):
        inputs = Inputs(",".join(str(ord(char)) for char in "X123QWEASDZC4RFV"), force_lowercase=True)
        self.assertEqual(0x0, inputs.keymap_dict[ord("x")])

    def test_inputs_keymap_wrong_length(self):
        self.assertRaises(InputsError, Inputs, "1,2,3")

    def test_inputs_keymap_not_integer(self):
        self.assertRaises(InputsError, Inputs, ",".join(["a"] * 16))

    def test_inputs_keymap_duplicates(self):
        self.assertRaises(InputsError, Inputs, ",".join(["49"] * 16))

    def test_inputs_set_key(self):
        self.assertFalse(self.inputs.is_key_down(0x3))
        self.inputs.set_key(0x3, True)
        self.assertTrue(self.inputs.is_key_down(0x3))
        self.inputs.set_key(0x3, False)
        self.assertFalse(self.inputs.is_key_down(0x3))
        self.assertRaises(InputsError, self.inputs.set_key, 0x10, True)

    def test_inputs_get_keypress(self):
        self.assertIsNone(self.inputs.get_keypress())
        self.inputs.set_key(0xE, True)
        self.inputs.set_key(0x9, True)
        self.assertEqual(0x9, self.inputs.get_keypress())

    def test_inputs_clear(self):
        self.inputs.set_key(0x1, True)
        self.inputs.clear()
        self.assertIsNone(self.inputs.get_keypress())

    def test_inputs_process_messages(self):
        self.assertFalse(self.inputs.process_messages())
