"""Key tables for the one-hand (left hand) Hangul layout.

Layer 0 is the normal layer, layer 1 is reached by holding the flip key.
Every layer is split into unshifted and shifted keys; each half is a unique
BiMap so that it can be inverted for the key -> jamo -> key direction.
"""

from hangul import BiMap

# Commits the pending block without producing text.
EMPTY_LITERAL = ''


class KeyLayer:
    def __init__(self, name, plain, shifted):
        self.name = name
        self.plain = BiMap(plain, unique=True)
        self.shifted = BiMap(shifted, unique=True)

    def get(self, key):
        value = self.plain.get(key)
        if value is None:
            value = self.shifted.get(key)
        return value

    def has_key(self, key):
        return key in self.plain or key in self.shifted

    def has_value(self, value):
        return self.plain.has_value(value) or self.shifted.has_value(value)

    def key_for(self, value):
        key = self.plain.inverse.get(value)
        if key is None:
            key = self.shifted.inverse.get(value)
        return key

    def __repr__(self):
        return "KeyLayer(%r)" % self.name


LAYER_0 = KeyLayer(
    "normal",
    {
        '`': '`', '1': '-', '2': '1', '3': '2', '4': '3', '5': '4', '6': '5', '7': EMPTY_LITERAL,
        'q': ' ', 'w': 'ㅑ', 'e': 'ㅐ', 'r': 'ㅂ', 't': 'ㄷ', 'y': 'ㅅ',
        'a': '[', 's': 'ㅗ', 'd': 'ㅣ', 'f': 'ㅏ', 'g': 'ㅇ', 'h': 'ㄴ',
        'z': "'", 'x': '/', 'c': '.', 'v': ',', 'b': ':',
    },
    {
        '~': '~', '!': '_', '@': '!', '#': '@', '$': '#', '%': '$', '^': '%', '&': EMPTY_LITERAL,
        'Q': ' ', 'W': 'ㅑ', 'E': 'ㅐ', 'R': 'ㅂ', 'T': 'ㅌ', 'Y': 'ㅅ',
        'A': ']', 'S': 'ㅛ', 'D': 'ㅣ', 'F': 'ㅏ', 'G': 'ㅎ', 'H': 'ㄴ',
        'Z': '\\', 'X': '?', 'C': '>', 'V': '<', 'B': ';',
    },
)

LAYER_1 = KeyLayer(
    "flipped",
    {
        '`': '·', '1': '=', '2': '0', '3': '9', '4': '8', '5': '7', '6': '6', '7': EMPTY_LITERAL,
        'q': '\n', 'w': 'ㅕ', 'e': 'ㅔ', 'r': 'ㅍ', 't': 'ㅈ', 'y': 'ㅁ',
        'a': '{', 's': 'ㅜ', 'd': 'ㅡ', 'f': 'ㅓ', 'g': 'ㄱ', 'h': 'ㄹ',
        'z': '"', 'x': '/', 'c': '.', 'v': ',', 'b': ':',
    },
    {
        '~': '·', '!': '+', '@': ')', '#': '(', '$': '*', '%': '&', '^': '^', '&': EMPTY_LITERAL,
        'Q': '\n', 'W': 'ㅕ', 'E': 'ㅔ', 'R': 'ㅍ', 'T': 'ㅊ', 'Y': 'ㅁ',
        'A': '}', 'S': 'ㅠ', 'D': 'ㅡ', 'F': 'ㅓ', 'G': 'ㅋ', 'H': 'ㄹ',
        'Z': '|', 'X': '?', 'C': '>', 'V': '<', 'B': ';',
    },
)

LAYERS = (LAYER_0, LAYER_1)

# Doubles typed by pressing the same key twice quickly. Once a block ends in
# one of these, a further press starts a new letter instead of merging again.
REPEAT_DOUBLES = frozenset(['ㄸ', 'ㅒ', 'ㅖ', 'ㅃ', 'ㄲ', 'ㅆ', 'ㅉ', 'ㅢ'])

NUM_SHIFT_MAP = {
    '1': '!', '2': '@', '3': '#', '4': '$', '5': '%', '6': '^',
}


def shift_letter(key):
    upper = key.upper()
    if upper != key and len(upper) == 1:
        return upper
    return NUM_SHIFT_MAP.get(key, key)


def key_for_jamo(c):
    """(key, layer index) producing c, layer 0 first, or None."""
    for index, layer in enumerate(LAYERS):
        key = layer.key_for(c)
        if key is not None:
            return key, index
    return None

