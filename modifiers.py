"""Flip layer, one-shot shift and keystroke timing for the one-hand layout.

Timestamps are milliseconds from the caller's monotonic clock. The shift
timeout is checked at the next event instead of running a timer.
"""

import logging
from collections import namedtuple

from layout import shift_letter

logger = logging.getLogger(__name__)

# flip states
BASE = 0
TEMPORARY_FLIP = 1
LATCHED_FLIP = 2

# shift states
SHIFT_OFF = 0
SHIFT_ARMED = 1

SHIFT_TIMEOUT = 500

ResolvedKey = namedtuple("ResolvedKey", ["key", "layer", "interval"])
ResolvedKey.__new__.__defaults__ = (0, 0)


class ModifierState:
    def __init__(self, flip_key=' ', shift_key='Shift', shift_timeout=SHIFT_TIMEOUT, latch_flip=True):
        self.flip_key = flip_key
        self.shift_key = shift_key
        self.shift_timeout = shift_timeout
        self.latch_flip = latch_flip
        self.flip = BASE
        self.shift = SHIFT_OFF
        self._shift_deadline = None
        # [last interval, last key-down time]
        self.times = [0, 0]

    @property
    def layer(self):
        return 0 if self.flip == BASE else 1

    @property
    def interval(self):
        return self.times[0]

    def reset(self):
        self.flip = BASE
        self.shift = SHIFT_OFF
        self._shift_deadline = None

    def _expire_shift(self, now):
        if self._shift_deadline is not None and now >= self._shift_deadline:
            logger.debug("shift timed out")
            self.shift = SHIFT_OFF
            self._shift_deadline = None

    def key_down(self, key, timestamp):
        """Track a key press. Returns the resolved key, or None for modifier keys."""
        self._expire_shift(timestamp)

        if key == self.flip_key and self.flip == BASE:
            self.flip = TEMPORARY_FLIP
            return None

        if key == self.shift_key:
            if self.shift == SHIFT_OFF:
                self.shift = SHIFT_ARMED
                self._shift_deadline = timestamp + self.shift_timeout
            else:
                self.shift = SHIFT_OFF
                self._shift_deadline = None
            return None

        self.times[0] = timestamp - self.times[1]
        self.times[1] = timestamp
        if key == self.flip_key:
            return None

        if self.flip != BASE:
            self.flip = LATCHED_FLIP
            self.shift = SHIFT_OFF
            self._shift_deadline = None

        if self.shift == SHIFT_ARMED:
            key = shift_letter(key)
            self.shift = SHIFT_OFF
            self._shift_deadline = None

        return ResolvedKey(key, self.layer, self.times[0])

    def key_up(self, key, timestamp):
        if key == self.flip_key:
            if self.flip != LATCHED_FLIP or not self.latch_flip:
                self.flip = BASE
        elif key == self.shift_key:
            # an armed shift keeps its deadline after release
            self._expire_shift(timestamp)
