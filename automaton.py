"""One-hand Hangul composition automaton.

Feeds resolved keys one at a time, keeps the syllable being built in
``current_block`` and appends finished blocks to ``output``.
"""

import logging

from hangul import (
    compose, compose_double, decompose, decompose_double, get_final,
    is_final, is_initial, is_jamo, is_medial, is_syllable,
)
from layout import EMPTY_LITERAL, LAYER_0, LAYERS, REPEAT_DOUBLES, key_for_jamo
from modifiers import ResolvedKey

logger = logging.getLogger(__name__)

ERASE = '\b'

# Same-jamo presses this far apart are two letters, not a double.
DEBOUNCE = 500

FLIP_MARK = '+'
PAUSE_MARK = '_'

# Ends the pending block without typing anything.
COMMIT_KEY = ResolvedKey(LAYER_0.key_for(EMPTY_LITERAL), 0, 0)


class CompositionError(Exception):
    """The automaton produced jamo that do not form a syllable."""


class OneHandAutomaton:
    def __init__(self, output=None, debounce=DEBOUNCE, layers=LAYERS):
        self.output = output if output is not None else []
        self.debounce = debounce
        self.layers = layers
        self.current_block = None
        self.prev_jamo = None

    def reset(self):
        self.current_block = None
        self.prev_jamo = None

    def flush(self):
        self._flush()
        self.reset()

    def _flush(self):
        if self.current_block is not None:
            logger.debug("commit %r", self.current_block)
            self.output.append(self.current_block)

    def next(self, unit=None):
        """Feed a key, ERASE, or None to end the stream.

        Returns False when the key is not on the active layer; the caller
        passes it through and the pending block is left alone.
        """
        if unit is None:
            self.flush()
            return True
        if not isinstance(unit, ResolvedKey):
            unit = ResolvedKey(unit)

        if unit.key == ERASE:
            self.current_block = self._erase()
            return True

        if not 0 <= unit.layer < len(self.layers):
            logger.warning("key %r resolved to unknown layer %r", unit.key, unit.layer)
            self.flush()
            self.output.append(unit.key)
            return True

        c = self.layers[unit.layer].get(unit.key)
        if c is None:
            return False

        if not is_jamo(c):
            self.flush()
            if c:
                self.output.append(c)
            return True

        self.current_block = self._compose_jamo(c, unit.interval)
        return True

    def _erase(self):
        block = self.current_block
        if block is None:
            if self.output:
                self.output.pop()
            self.prev_jamo = None
            return None

        jamo = decompose(block)
        if jamo is None:
            self.prev_jamo = None
            return None

        initial, medial, final = jamo
        if final:
            self.prev_jamo = medial
            return self._compose(initial, medial)
        self.prev_jamo = initial
        return initial

    def _ends_with(self, block, d):
        if block is None:
            return False
        jamo = decompose(block)
        if jamo is None:
            return block == d
        _, medial, final = jamo
        if final:
            return final == d
        return medial == d

    def _compose(self, initial, medial, final=None):
        syllable = compose(initial, medial, final)
        if syllable is None:
            raise CompositionError("cannot compose %r %r %r" % (initial, medial, final))
        return syllable

    def _compose_jamo(self, curr, interval):
        block = self.current_block
        prev = self.prev_jamo
        self.prev_jamo = curr

        if prev == curr and interval >= self.debounce:
            d = None
        else:
            d = compose_double(prev, curr)

        if d in REPEAT_DOUBLES and self._ends_with(block, d):
            d = None

        if d is not None and not is_syllable(block):
            return d

        if d is not None and (is_medial(d) or is_final(d)):
            initial, medial, final = decompose(block)
            if is_medial(d):
                medial = d
            else:
                final = d
            return self._compose(initial, medial, final)

        if is_final(curr) and is_syllable(block) and not get_final(block):
            initial, medial, _ = decompose(block)
            return self._compose(initial, medial, curr)

        if is_initial(curr):
            self._flush()
            return curr

        if is_medial(curr) and is_initial(block):
            return self._compose(block, curr)

        if is_medial(curr) and is_syllable(block) and is_initial(prev):
            initial, medial, final = decompose(block)
            if final and is_initial(final):
                self.output.append(self._compose(initial, medial))
                return self._compose(final, curr)
            pair = decompose_double(final) if final else None
            if pair is not None:
                self.output.append(self._compose(initial, medial, pair[0]))
                return self._compose(pair[1], curr)

        self._flush()
        return curr


def encode_stream(keys, debounce=DEBOUNCE):
    """Run keys through a fresh automaton and return the committed blocks."""
    output = []
    automaton = OneHandAutomaton(output, debounce)
    for key in keys:
        automaton.next(key)
    automaton.next()
    return output


def to_hangul(keys, debounce=DEBOUNCE):
    return ''.join(encode_stream(keys, debounce))


def _jamo_keys(c):
    found = key_for_jamo(c)
    if found is not None:
        return [(c, found, False)]
    pair = decompose_double(c)
    if pair is None:
        return None
    parts = []
    for i, part in enumerate(pair):
        found = key_for_jamo(part)
        if found is None:
            return None
        parts.append((part, found, i == 1))
    return parts


def _char_keys(c):
    """(jamo or None, (key, layer), joined-to-previous) entries for one character."""
    if is_syllable(c):
        entries = []
        for jamo in decompose(c):
            if jamo is None:
                continue
            parts = _jamo_keys(jamo)
            if parts is None:
                return None
            entries.extend(parts)
        return entries
    if is_jamo(c):
        return _jamo_keys(c)
    for index, layer in enumerate(LAYERS):
        key = layer.key_for(c)
        if key is not None:
            return [(None, (key, index), False)]
    return None


def to_keys(text, debounce=DEBOUNCE):
    """Keys that type text on the one-hand layout.

    A jamo repeated across letters gets ``debounce`` as its interval so it is
    not merged into a double. When the keys of a character would merge into
    the previous block (할 then 까 types 핚), COMMIT_KEY is pressed first.
    Characters with no key are returned as-is.
    """
    keys = []
    typed = ''
    last = None
    for c in text:
        entries = _char_keys(c)
        if entries is None:
            keys.append(ResolvedKey(c, 0, 0))
            last = None
            continue
        char_keys = []
        for jamo, (key, layer), joined in entries:
            interval = 0
            if jamo is not None and jamo == last and not joined:
                interval = debounce
            char_keys.append(ResolvedKey(key, layer, interval))
            last = jamo
        expected = typed + c
        if keys and to_hangul(keys + char_keys, debounce) != expected:
            if to_hangul(keys + [COMMIT_KEY] + char_keys, debounce) == expected:
                keys.append(COMMIT_KEY)
        keys.extend(char_keys)
        typed = expected
    return keys


def decompose_to_keys(c, debounce=DEBOUNCE):
    return to_keys(c, debounce)


def parse_keys(text, debounce=DEBOUNCE):
    """Read the key notation used by the command line.

    FLIP_MARK puts the next key on the flipped layer, PAUSE_MARK types it
    after the debounce window.
    """
    keys = []
    layer = 0
    interval = 0
    for c in text:
        if c == FLIP_MARK:
            layer = 1
        elif c == PAUSE_MARK:
            interval = debounce
        else:
            keys.append(ResolvedKey(c, layer, interval))
            layer = 0
            interval = 0
    return keys


def format_keys(keys, debounce=DEBOUNCE):
    parts = []
    for key in keys:
        if key.interval >= debounce:
            parts.append(PAUSE_MARK)
        if key.layer:
            parts.append(FLIP_MARK)
        parts.append(key.key)
    return ''.join(parts)
