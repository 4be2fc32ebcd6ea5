"""Phonetic codes for tolerant player-name matching.

A soundex variant tuned so that different transliterations of the same
Slavic name (Nimzovich/Nimsowitsch, Tal/Talj, Yusupov/Jusupov) share a
code prefix. It deliberately over-matches: a false positive costs less
than a missed game.
"""

import string
from functools import lru_cache

# Maximum number of digits in a code.
MAXSOUNDEX = 50

#            ABCDEFGHIJKLMNOPQRSTUVWXYZ
_MAPPING = "01231220022455012622020202"

_LETTERS = frozenset(string.ascii_letters)


@lru_cache(maxsize=4096)
def soundex(text: str) -> str:
    """Return the phonetic code of text.

    A leading J or Y becomes 7, so that Yusupov matches Jusupov and
    Janosevic does not collapse onto Nimzovich. Every other ASCII letter
    maps to a digit; zeros are dropped and a digit equal to the last one
    emitted is skipped. Anything that is not a letter is ignored.

    Example:
        >>> soundex("Tal")
        '24'
        >>> soundex("Yusupov") == soundex("Jusupov")
        True
    """
    code = []
    last = ""
    chars = text

    if chars and chars[0].upper() in ("J", "Y"):
        code.append("7")
        chars = chars[1:]

    for ch in chars:
        if len(code) >= MAXSOUNDEX:
            break
        if ch not in _LETTERS:
            continue
        digit = _MAPPING[ord(ch.upper()) - ord("A")]
        if digit != "0" and digit != last:
            code.append(digit)
            last = digit

    return "".join(code)
