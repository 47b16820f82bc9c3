import argparse
import json
import logging
import os
import sys

from automaton import (
    DEBOUNCE, ERASE, CompositionError, OneHandAutomaton,
    format_keys, parse_keys, to_hangul, to_keys,
)
from modifiers import SHIFT_TIMEOUT, ModifierState

logger = logging.getLogger(__name__)

CONFIG_PATH = os.path.expanduser("~/.config/onehand-ime/config.json")

DEFAULT_CONFIG = {
    "DebounceMs": DEBOUNCE,
    "ShiftTimeoutMs": SHIFT_TIMEOUT,
    "LatchFlip": True,
    "FlipKey": "space",
    "ShiftKey": "Shift",
}

# Same bit layout as IBus.ModifierType
SHIFT_MASK = 1 << 0
CONTROL_MASK = 1 << 2
ALT_MASK = 1 << 3
SUPER_MASK = 1 << 26
META_MASK = 1 << 28
RELEASE_MASK = 1 << 30

CHORD_MASK = CONTROL_MASK | ALT_MASK | SUPER_MASK | META_MASK

HANGUL = "hangul"
QWERTY = "qwerty"

KEY_NAMES = {
    "space": " ",
    "BackSpace": ERASE,
    "Shift_L": "Shift",
    "Shift_R": "Shift",
}

# Keys that move the caret or leave the field end the composition.
RESET_KEYS = frozenset([
    "Tab", "Escape", "Return", "KP_Enter", "Insert", "Delete",
    "Left", "Right", "Up", "Down", "Home", "End", "Page_Up", "Page_Down",
    "Pause", "Caps_Lock", "Scroll_Lock", "Super_L", "Super_R", "Menu",
] + ["F%d" % i for i in range(1, 13)])


def load_config(path=CONFIG_PATH):
    config = dict(DEFAULT_CONFIG)
    if not os.path.exists(path):
        return config
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("Error loading config %s: %s", path, e)
        return config
    if not isinstance(data, dict):
        logger.warning("Ignoring config %s: expected an object", path)
        return config
    config.update(data)
    return config


class OneHandEngine:
    """Drives the one-hand automaton from key events.

    Text goes out through commit_text / update_preedit_text /
    hide_preedit_text; override them to talk to a real text field.
    """

    def __init__(self, config=None):
        self.config = dict(DEFAULT_CONFIG)
        self.config.update(load_config() if config is None else config)
        self.input_mode = HANGUL
        self.committed = []
        self.preedit = ""
        self.apply_config()

    def apply_config(self):
        self.automaton = OneHandAutomaton(debounce=self.config["DebounceMs"])
        self.modifiers = ModifierState(
            flip_key=self._key_name(self.config["FlipKey"]),
            shift_key=self._key_name(self.config["ShiftKey"]),
            shift_timeout=self.config["ShiftTimeoutMs"],
            latch_flip=self.config["LatchFlip"],
        )
        self._sent = 0

    def _key_name(self, key):
        return KEY_NAMES.get(key, key)

    def process_key_event(self, key, timestamp, state=0):
        """Handle one key event. Returns True if the key was consumed."""
        key = self._key_name(key)

        if state & RELEASE_MASK:
            self.modifiers.key_up(key, timestamp)
            return False

        if state & SHIFT_MASK and state & ALT_MASK:
            self.toggle_input_mode()
            return True

        if self.input_mode != HANGUL:
            return False

        if state & CHORD_MASK or key in RESET_KEYS:
            self.reset()
            return False

        # Shift+Space belongs to the application
        if key == self.modifiers.flip_key and state & SHIFT_MASK:
            return False

        resolved = self.modifiers.key_down(key, timestamp)
        if resolved is None:
            return True

        if resolved.key == ERASE:
            return self.backspace(resolved)

        try:
            handled = self.automaton.next(resolved)
        except CompositionError:
            logger.exception("Composition failed on %r", resolved)
            del self.automaton.output[self._sent:]
            self.automaton.reset()
            self.update_preedit()
            return False

        if not handled:
            # the raw key must land after the composed text
            if self.automaton.current_block is not None:
                self.commit()
            return False
        self.commit_pending()
        self.update_preedit()
        return True

    def backspace(self, resolved=ERASE):
        if self.automaton.current_block is None:
            # the application deletes the character itself
            self.automaton.next(resolved)
            self._sent = len(self.automaton.output)
            return False
        self.automaton.next(resolved)
        self.update_preedit()
        return True

    def toggle_input_mode(self):
        self.reset()
        self.input_mode = QWERTY if self.input_mode == HANGUL else HANGUL
        logger.debug("input mode: %s", self.input_mode)

    def update_preedit(self):
        composed = self.automaton.current_block
        if composed:
            self.update_preedit_text(composed)
        else:
            self.hide_preedit_text()

    def commit_pending(self):
        output = self.automaton.output
        commit_str = "".join(output[self._sent:])
        self._sent = len(output)
        if commit_str:
            self.commit_text(commit_str)

    def commit(self):
        # Force flush current composition
        self.automaton.flush()
        self.commit_pending()
        self.hide_preedit_text()

    def reset(self):
        self.commit()
        # erase never reaches text committed before a reset
        del self.automaton.output[:self._sent]
        self._sent = 0
        self.modifiers.reset()

    def do_focus_in(self):
        self.modifiers.reset()

    def do_focus_out(self):
        self.reset()

    def do_reset(self):
        self.reset()

    def do_cursor_moved(self):
        self.reset()

    def commit_text(self, text):
        self.committed.append(text)

    def update_preedit_text(self, text):
        self.preedit = text

    def hide_preedit_text(self):
        self.preedit = ""

    @property
    def text(self):
        return "".join(self.committed) + self.preedit


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="onehand-ime",
        description="Convert one-hand layout keys to Hangul, or Hangul to keys. "
                    "'+' types the next key on the flipped layer, "
                    "'_' types it after the double-press window.",
    )
    parser.add_argument("text", nargs="*", help="input strings (default: read stdin)")
    parser.add_argument("--to-keys", action="store_true", help="convert Hangul text to keys")
    parser.add_argument("--debounce", type=int, default=DEBOUNCE, help="double-press window in ms")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    lines = args.text or (line.rstrip("\n") for line in sys.stdin)
    for line in lines:
        if args.to_keys:
            print(format_keys(to_keys(line, args.debounce), args.debounce))
        else:
            print(to_hangul(parse_keys(line, args.debounce), args.debounce))
    return 0


if __name__ == "__main__":
    sys.exit(main())
