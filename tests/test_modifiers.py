import unittest

from modifiers import (
    BASE, LATCHED_FLIP, SHIFT_ARMED, SHIFT_OFF, TEMPORARY_FLIP,
    ModifierState, ResolvedKey,
)


class TestFlip(unittest.TestCase):
    def setUp(self):
        self.state = ModifierState()

    def test_flip_alone(self):
        self.assertIsNone(self.state.key_down(' ', 0))
        self.assertEqual(self.state.flip, TEMPORARY_FLIP)
        self.assertEqual(self.state.layer, 1)
        self.state.key_up(' ', 50)
        self.assertEqual(self.state.flip, BASE)
        self.assertEqual(self.state.layer, 0)

    def test_key_while_flipped_latches(self):
        self.state.key_down(' ', 0)
        resolved = self.state.key_down('g', 20)
        self.assertEqual(resolved, ResolvedKey('g', 1, 20))
        self.assertEqual(self.state.flip, LATCHED_FLIP)
        self.state.key_up(' ', 40)
        self.assertEqual(self.state.flip, LATCHED_FLIP)
        self.assertEqual(self.state.key_down('f', 60).layer, 1)

    def test_reset_clears_latch(self):
        self.state.key_down(' ', 0)
        self.state.key_down('g', 20)
        self.state.reset()
        self.assertEqual(self.state.flip, BASE)
        self.assertEqual(self.state.key_down('f', 60).layer, 0)

    def test_release_clears_latch_when_disabled(self):
        state = ModifierState(latch_flip=False)
        state.key_down(' ', 0)
        state.key_down('g', 20)
        state.key_up(' ', 40)
        self.assertEqual(state.flip, BASE)

    def test_flip_key_while_latched(self):
        self.state.key_down(' ', 0)
        self.state.key_down('g', 100)
        self.assertIsNone(self.state.key_down(' ', 300))
        self.assertEqual(self.state.flip, LATCHED_FLIP)
        self.assertEqual(self.state.interval, 200)


class TestShift(unittest.TestCase):
    def setUp(self):
        self.state = ModifierState()

    def test_tap_shifts_next_key_once(self):
        self.assertIsNone(self.state.key_down('Shift', 0))
        self.state.key_up('Shift', 80)
        self.assertEqual(self.state.shift, SHIFT_ARMED)
        self.assertEqual(self.state.key_down('t', 300).key, 'T')
        self.assertEqual(self.state.shift, SHIFT_OFF)
        self.assertEqual(self.state.key_down('t', 400).key, 't')

    def test_tapped_shift_times_out(self):
        self.state.key_down('Shift', 0)
        self.state.key_up('Shift', 80)
        self.assertEqual(self.state.key_down('t', 900).key, 't')
        self.assertEqual(self.state.shift, SHIFT_OFF)

    def test_numeral_substitution(self):
        self.state.key_down('Shift', 0)
        self.state.key_up('Shift', 50)
        self.assertEqual(self.state.key_down('2', 100).key, '@')

    def test_held_past_timeout(self):
        self.state.key_down('Shift', 0)
        self.state.key_up('Shift', 600)
        self.assertEqual(self.state.shift, SHIFT_OFF)
        self.assertEqual(self.state.key_down('t', 700).key, 't')

    def test_timeout_checked_at_next_key(self):
        self.state.key_down('Shift', 0)
        self.assertEqual(self.state.key_down('t', 500).key, 't')

    def test_second_press_cancels(self):
        self.state.key_down('Shift', 0)
        self.state.key_up('Shift', 20)
        self.state.key_down('Shift', 40)
        self.assertEqual(self.state.shift, SHIFT_OFF)
        self.assertEqual(self.state.key_down('t', 60).key, 't')

    def test_flipped_key_drops_shift(self):
        self.state.key_down('Shift', 0)
        self.state.key_up('Shift', 20)
        self.state.key_down(' ', 40)
        self.assertEqual(self.state.key_down('t', 60), ResolvedKey('t', 1, 60))
        self.assertEqual(self.state.shift, SHIFT_OFF)


class TestIntervals(unittest.TestCase):
    def test_rolling_interval(self):
        state = ModifierState()
        state.key_down('g', 1000)
        resolved = state.key_down('g', 1200)
        self.assertEqual(resolved.interval, 200)
        self.assertEqual(state.times, [200, 1200])

    def test_modifier_keys_do_not_roll(self):
        state = ModifierState()
        state.key_down('g', 1000)
        state.key_down('Shift', 1100)
        state.key_down(' ', 1150)
        self.assertEqual(state.key_down('g', 1300).interval, 300)

    def test_reset_keeps_timing(self):
        state = ModifierState()
        state.key_down('g', 1000)
        state.reset()
        self.assertEqual(state.key_down('g', 1100).interval, 100)


if __name__ == "__main__":
    unittest.main(verbosity=2)
