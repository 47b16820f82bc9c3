"""Modern Hangul jamo and syllable codec.

Works on compatibility jamo (U+3131-U+3163) and precomposed syllables
(U+AC00-U+D7A3). Every function takes a single character and returns None
(or False for predicates) when the input is outside its domain.
"""

SYLLABLE_BASE = 0xAC00
SYLLABLE_LAST = 0xD7A3
JAMO_FIRST = 0x3131
JAMO_LAST = 0x3163

MEDIAL_COUNT = 21
FINAL_COUNT = 28  # including "no final"


class BiMap:
    """A map with a live inverse view.

    In unique mode a value may be reached from one key only, so the
    inverse never loses entries.
    """

    def __init__(self, items=None, unique=False, _inverse=None):
        self._items = {}
        self.unique = unique
        self.inverse = _inverse if _inverse is not None else BiMap(unique=unique, _inverse=self)
        if items:
            self.add_all(items)

    def add(self, k, v):
        if self.unique:
            owner = self.inverse._items.get(v, k)
            if owner != k:
                raise ValueError("%r and %r both map to %r" % (owner, k, v))
        if k in self._items and self.inverse._items.get(self._items[k]) == k:
            del self.inverse._items[self._items[k]]
        self._items[k] = v
        self.inverse._items[v] = k

    def add_all(self, items):
        if hasattr(items, "items"):
            items = items.items()
        for k, v in items:
            self.add(k, v)

    def get(self, k, default=None):
        return self._items.get(k, default)

    def has_key(self, k):
        return k in self._items

    def has_value(self, v):
        return v in self.inverse._items

    def keys(self):
        return self._items.keys()

    def values(self):
        return self._items.values()

    def items(self):
        return self._items.items()

    def __contains__(self, k):
        return k in self._items

    def __iter__(self):
        return iter(self._items)

    def __len__(self):
        return len(self._items)

    def __repr__(self):
        return "BiMap(%r)" % self._items


def _collect_jamo(first, last, exclude=()):
    jamo = BiMap(unique=True)
    index = 0
    for offset in range(last - first + 1):
        if offset in exclude:
            continue
        jamo.add(index, chr(first + offset))
        index += 1
    return jamo


# ㄱ ... ㅣ
JAMO = _collect_jamo(JAMO_FIRST, JAMO_LAST)
# ㄱ ㄲ ㄴ ㄷ ㄸ ㄹ ㅁ ㅂ ㅃ ㅅ ㅆ ㅇ ㅈ ㅉ ㅊ ㅋ ㅌ ㅍ ㅎ
INITIALS = _collect_jamo(0x3131, 0x314E, (2, 4, 5, 9, 10, 11, 12, 13, 14, 15, 19))
# ㅏ ㅐ ㅑ ㅒ ㅓ ㅔ ㅕ ㅖ ㅗ ㅘ ㅙ ㅚ ㅛ ㅜ ㅝ ㅞ ㅟ ㅠ ㅡ ㅢ ㅣ
MEDIALS = _collect_jamo(0x314F, 0x3163)
# ㄱ ㄲ ㄳ ㄴ ㄵ ㄶ ㄷ ㄹ ㄺ ㄻ ㄼ ㄽ ㄾ ㄿ ㅀ ㅁ ㅂ ㅄ ㅅ ㅆ ㅇ ㅈ ㅊ ㅋ ㅌ ㅍ ㅎ
FINALS = _collect_jamo(0x3131, 0x314E, (7, 18, 24))

# compound -> (first, second)
DOUBLE_JAMO = BiMap({
    'ㄳ': ('ㄱ', 'ㅅ'),
    'ㄵ': ('ㄴ', 'ㅈ'),
    'ㄶ': ('ㄴ', 'ㅎ'),
    'ㄺ': ('ㄹ', 'ㄱ'),
    'ㄻ': ('ㄹ', 'ㅁ'),
    'ㄼ': ('ㄹ', 'ㅂ'),
    'ㄽ': ('ㄹ', 'ㅅ'),
    'ㄾ': ('ㄹ', 'ㅌ'),
    'ㄿ': ('ㄹ', 'ㅍ'),
    'ㅀ': ('ㄹ', 'ㅎ'),
    'ㅄ': ('ㅂ', 'ㅅ'),
    'ㄲ': ('ㄱ', 'ㄱ'),
    'ㄸ': ('ㄷ', 'ㄷ'),
    'ㅃ': ('ㅂ', 'ㅂ'),
    'ㅆ': ('ㅅ', 'ㅅ'),
    'ㅉ': ('ㅈ', 'ㅈ'),
    'ㅘ': ('ㅗ', 'ㅏ'),
    'ㅙ': ('ㅗ', 'ㅐ'),
    'ㅚ': ('ㅗ', 'ㅣ'),
    'ㅝ': ('ㅜ', 'ㅓ'),
    'ㅞ': ('ㅜ', 'ㅔ'),
    'ㅟ': ('ㅜ', 'ㅣ'),
    # ㅢ ㅒ ㅖ are typed by pressing ㅣ ㅐ ㅔ twice
    'ㅢ': ('ㅣ', 'ㅣ'),
    'ㅒ': ('ㅐ', 'ㅐ'),
    'ㅖ': ('ㅔ', 'ㅔ'),
}, unique=True)


def _char(s):
    if isinstance(s, str) and len(s) == 1:
        return s
    return None


def is_syllable(c):
    c = _char(c)
    return c is not None and SYLLABLE_BASE <= ord(c) <= SYLLABLE_LAST


def is_jamo(c):
    return JAMO.has_value(_char(c))


def is_hangul(c):
    return is_jamo(c) or is_syllable(c)


def is_initial(c):
    return INITIALS.has_value(_char(c))


def is_medial(c):
    return MEDIALS.has_value(_char(c))


def is_final(c):
    return FINALS.has_value(_char(c))


def _offset(c):
    if not is_syllable(c):
        return None
    return ord(c) - SYLLABLE_BASE


def get_initial(c):
    offset = _offset(c)
    if offset is None:
        return None
    return INITIALS.get(offset // FINAL_COUNT // MEDIAL_COUNT)


def get_medial(c):
    offset = _offset(c)
    if offset is None:
        return None
    return MEDIALS.get(offset // FINAL_COUNT % MEDIAL_COUNT)


def get_final(c):
    """Final jamo of a syllable, '' when it has none, None if not a syllable."""
    offset = _offset(c)
    if offset is None:
        return None
    i = offset % FINAL_COUNT
    return FINALS.get(i - 1) if i > 0 else ''


def decompose(c):
    """Split a syllable into (initial, medial, final), final None when absent."""
    if not is_syllable(c):
        return None
    return get_initial(c), get_medial(c), get_final(c) or None


def compose(initial, medial, final=None):
    """Build a syllable from jamo. Returns None if any jamo is out of its class."""
    x = INITIALS.inverse.get(_char(initial))
    y = MEDIALS.inverse.get(_char(medial))
    if final is None or final == '':
        z = 0
    else:
        z = FINALS.inverse.get(_char(final))
        if z is None:
            return None
        z += 1
    if x is None or y is None:
        return None
    code = SYLLABLE_BASE + (x * MEDIAL_COUNT + y) * FINAL_COUNT + z
    if code > SYLLABLE_LAST:
        return None
    return chr(code)


def compose_double(a, b):
    if a is None or b is None:
        return None
    return DOUBLE_JAMO.inverse.get((a, b))


def decompose_double(c):
    return DOUBLE_JAMO.get(c)
