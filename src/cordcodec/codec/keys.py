"""Wire-key matching for entity decoders.

Incoming object keys are resolved against an entity's canonical wire keys in
two steps: an exact byte lookup, then a case-insensitive fallback restricted
to the keys the entity declares. Each canonical key gets the cheapest fold
function able to compare it correctly:

- ``simple_letter_equal_fold``: key is made only of ASCII letters
- ``ascii_equal_fold``: key contains non-letters, which must match exactly
- ``equal_fold_right``: key contains ``k`` or ``s``, whose Unicode folds
  (KELVIN SIGN, LATIN SMALL LETTER LONG S) are multi-byte
- ``unicode_equal_fold``: key is not ASCII
"""

from __future__ import annotations

from typing import Callable, Iterable, Optional

FoldFunc = Callable[[bytes, bytes], bool]

_CASE_MASK = ~0x20 & 0xFF
_UPPER_A = ord("A")
_UPPER_Z = ord("Z")
_KELVIN = "\u212a"
_SMALL_LONG_ESS = "\u017f"
_S_BYTES = frozenset(b"sS")
_K_BYTES = frozenset(b"kK")


def _is_letter(b: int) -> bool:
    return _UPPER_A <= (b & _CASE_MASK) <= _UPPER_Z


def simple_letter_equal_fold(key: bytes, candidate: bytes) -> bool:
    """Compare an all-letter ASCII key ignoring case."""
    if len(key) != len(candidate):
        return False
    for sb, tb in zip(key, candidate):
        if sb & _CASE_MASK != tb & _CASE_MASK:
            return False
    return True


def ascii_equal_fold(key: bytes, candidate: bytes) -> bool:
    """Compare an ASCII key ignoring the case of letters only."""
    if len(key) != len(candidate):
        return False
    for sb, tb in zip(key, candidate):
        if sb == tb:
            continue
        if not _is_letter(sb) or sb & _CASE_MASK != tb & _CASE_MASK:
            return False
    return True


def equal_fold_right(key: bytes, candidate: bytes) -> bool:
    """Compare an ASCII key against a candidate that may hold Unicode folds of k/s."""
    try:
        text = candidate.decode("utf-8")
    except UnicodeDecodeError:
        return False

    if len(text) != len(key):
        return False

    for sb, char in zip(key, text):
        tb = ord(char)
        if tb < 0x80:
            if sb != tb and (not _is_letter(sb) or sb & _CASE_MASK != tb & _CASE_MASK):
                return False
            continue
        if sb in _S_BYTES:
            if char != _SMALL_LONG_ESS:
                return False
        elif sb in _K_BYTES:
            if char != _KELVIN:
                return False
        else:
            return False
    return True


def unicode_equal_fold(key: bytes, candidate: bytes) -> bool:
    """Compare using full Unicode case folding."""
    try:
        return key.decode("utf-8").casefold() == candidate.decode("utf-8").casefold()
    except UnicodeDecodeError:
        return False


def fold_func(key: bytes) -> FoldFunc:
    """Pick the fold function for a canonical wire key.

    Args:
        key: Canonical wire key bytes

    Returns:
        Function comparing the key with a candidate ignoring case
    """
    non_letter = False
    special = False
    for b in key:
        if b >= 0x80:
            return unicode_equal_fold
        upper = b & _CASE_MASK
        if upper < _UPPER_A or upper > _UPPER_Z:
            non_letter = True
        elif upper == ord("K") or upper == ord("S"):
            special = True

    if special:
        return equal_fold_right
    if non_letter:
        return ascii_equal_fold
    return simple_letter_equal_fold


class KeyMatcher:
    """Immutable lookup table from wire keys to field indexes.

    Example:
        >>> matcher = KeyMatcher([(b"id", 0), (b"require_colons", 1)])
        >>> matcher.exact(b"id")
        0
        >>> matcher.fold(b"Require_Colons")
        1
    """

    __slots__ = ("_exact", "_folds")

    def __init__(self, keys: Iterable[tuple[bytes, int]]) -> None:
        keys = list(keys)
        self._exact = {key: index for key, index in keys}
        # fallback candidates are tried in reverse declaration order
        self._folds = tuple((fold_func(key), key, index) for key, index in reversed(keys))

    def exact(self, candidate: bytes) -> Optional[int]:
        """Return the field index for an exact key match, or None."""
        return self._exact.get(candidate)

    def fold(self, candidate: bytes) -> Optional[int]:
        """Return the field index of the first case-insensitive match, or None."""
        for func, key, index in self._folds:
            if func(key, candidate):
                return index
        return None

    def __len__(self) -> int:
        return len(self._exact)
