"""
Sort keys that order text the way a browser's default localeCompare does.

Characters are weighed in root collation order: whitespace, then
punctuation and symbols, then digits, then letters. Letter case only
breaks ties once the rest of the text compares equal, lowercase first.
Characters outside ASCII sort after the ASCII letters by code point.
"""

import re
import string

# Root collation order of the ASCII punctuation and symbols
PUNCTUATION_ORDER = "_-,;:!?.'\"()[]{}@*/\\&#%`^+<=>|~$"

WHITESPACE, PUNCTUATION, DIGITS, LETTERS, OTHER = range(5)

_PUNCTUATION_RANK = {char: rank for rank, char in enumerate(PUNCTUATION_ORDER)}
_NUMBER_OR_CHAR = re.compile(r"[0-9]+|.", re.DOTALL)

CollationKey = tuple[tuple[tuple[int, int], ...], tuple[int, ...]]


def _primary_weight(token: str) -> tuple[int, int]:
    if token[0] in string.digits:
        return DIGITS, int(token)
    if token in string.ascii_letters:
        return LETTERS, ord(token.lower())
    if token in _PUNCTUATION_RANK:
        return PUNCTUATION, _PUNCTUATION_RANK[token]
    if token.isspace():
        return WHITESPACE, 0
    return OTHER, ord(token.lower()[0])


def collation_key(text: str, numeric: bool = False) -> CollationKey:
    """
    Build a sort key for `text`.

    With `numeric`, each run of ASCII digits weighs as one number, so
    "rc.10" sorts after "rc.2".
    """
    tokens = _NUMBER_OR_CHAR.findall(text) if numeric else text
    primary = tuple(_primary_weight(token) for token in tokens)
    tertiary = tuple(int(token.isupper()) for token in tokens)
    return primary, tertiary
