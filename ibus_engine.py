import logging
import sys

import gi
gi.require_version('IBus', '1.0')
from gi.repository import IBus, GLib

from engine import OneHandEngine

logger = logging.getLogger(__name__)

BUS_NAME = "org.onehand.inputmethod"
ENGINE_NAME = "onehand"


class _Session(OneHandEngine):
    """OneHandEngine whose output goes to an IBus engine."""

    def __init__(self, ibus_engine, config=None):
        self.ibus_engine = ibus_engine
        super().__init__(config)

    def commit_text(self, text):
        self.ibus_engine.commit_text(IBus.Text.new_from_string(text))

    def update_preedit_text(self, text):
        self.preedit = text
        preedit = IBus.Text.new_from_string(text)
        preedit.set_attributes(IBus.AttrList())
        preedit.append_attribute(IBus.AttrType.UNDERLINE, IBus.AttrUnderline.SINGLE, 0, len(text))
        self.ibus_engine.update_preedit_text(preedit, len(text), True)

    def hide_preedit_text(self):
        self.preedit = ""
        self.ibus_engine.hide_preedit_text()


def key_from_keyval(keyval):
    """Printable ASCII keyvals become the character itself, others their keysym name."""
    if 32 <= keyval <= 126:
        return chr(keyval)
    return IBus.keyval_name(keyval)


class OneHandIBusEngine(IBus.Engine):
    def __init__(self, config=None):
        super().__init__()
        self.session = _Session(self, config)

    def do_process_key_event(self, keyval, keycode, state):
        key = key_from_keyval(keyval)
        if key is None:
            return False
        # key events carry no usable time, use the monotonic clock in ms
        timestamp = GLib.get_monotonic_time() // 1000
        return self.session.process_key_event(key, timestamp, int(state))

    def do_focus_in(self):
        self.register_properties(IBus.PropList())
        self.session.do_focus_in()

    def do_focus_out(self):
        self.session.do_focus_out()

    def do_reset(self):
        self.session.do_reset()


def main():
    logging.basicConfig(level=logging.WARNING)
    IBus.init()
    bus = IBus.Bus()
    if not bus.is_connected():
        logger.error("Cannot connect to the IBus daemon")
        return 1
    bus.request_name(BUS_NAME, 0)

    factory = IBus.Factory.new(bus.get_connection())
    factory.add_engine(ENGINE_NAME, OneHandIBusEngine)

    main_loop = GLib.MainLoop()
    main_loop.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
