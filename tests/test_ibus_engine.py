import unittest
from unittest import mock

try:
    import gi
    gi.require_version('IBus', '1.0')
    from gi.repository import IBus
    import ibus_engine
except (ImportError, ValueError):
    ibus_engine = None

from engine import RELEASE_MASK


@unittest.skipIf(ibus_engine is None, "IBus introspection data not available")
class TestKeyval(unittest.TestCase):
    def test_printable_keys_are_characters(self):
        self.assertEqual(ibus_engine.key_from_keyval(0x60), "`")
        self.assertEqual(ibus_engine.key_from_keyval(0x7E), "~")
        self.assertEqual(ibus_engine.key_from_keyval(0x21), "!")
        self.assertEqual(ibus_engine.key_from_keyval(0x20), " ")
        self.assertEqual(ibus_engine.key_from_keyval(ord("g")), "g")

    def test_other_keys_are_named(self):
        self.assertEqual(ibus_engine.key_from_keyval(IBus.KEY_BackSpace), "BackSpace")
        self.assertEqual(ibus_engine.key_from_keyval(IBus.KEY_Shift_L), "Shift_L")

    def test_grave_reaches_the_layout(self):
        session = ibus_engine._Session(mock.Mock(), config={})
        key = ibus_engine.key_from_keyval(0x60)
        self.assertTrue(session.process_key_event(key, 100))
        text = session.ibus_engine.commit_text.call_args[0][0]
        self.assertEqual(text.get_text(), "`")


@unittest.skipIf(ibus_engine is None, "IBus introspection data not available")
class TestSession(unittest.TestCase):
    def setUp(self):
        self.target = mock.Mock()
        self.session = ibus_engine._Session(self.target, config={})

    def test_preedit_goes_to_ibus(self):
        self.session.process_key_event("f", 100)
        self.assertEqual(self.session.preedit, "ㅏ")
        text, cursor, visible = self.target.update_preedit_text.call_args[0]
        self.assertEqual(text.get_text(), "ㅏ")
        self.assertEqual(cursor, 1)
        self.assertTrue(visible)

    def test_commit_goes_to_ibus(self):
        self.session.process_key_event("f", 100)
        self.session.process_key_event("f", 100, RELEASE_MASK)
        self.session.process_key_event("c", 200)
        text = self.target.commit_text.call_args[0][0]
        self.assertEqual(text.get_text(), "ㅏ.")
        self.target.hide_preedit_text.assert_called()
        self.assertEqual(self.session.preedit, "")


if __name__ == "__main__":
    unittest.main(verbosity=2)
