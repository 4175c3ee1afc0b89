"""
Approximate fuzzy matching against an exact-match word set.

A plain set only catches byte-for-byte hits, so we walk a bounded
neighbourhood of the password (one deletion, substitution or insertion, or a
two-character trim) and stop at the first variant the set contains.
"""
from typing import Iterator, Optional

from .classify import Text, to_bytes
from .errors import RejectKind, Rejection, ResourceError
from .log import get_logger

logger = get_logger(__name__)

ERROR_DICT = "Password found in list of common passwords"

PRINTABLE = bytes(range(0x20, 0x7F))


# ----------------------- variant generation -----------------------

def deletions(pw: bytes) -> Iterator[bytes]:
    for i in range(len(pw)):
        yield pw[:i] + pw[i + 1:]


def substitutions(pw: bytes) -> Iterator[bytes]:
    # includes the unchanged byte; that repeats the exact lookup, which is harmless
    for i in range(len(pw)):
        head, tail = pw[:i], pw[i + 1:]
        for c in PRINTABLE:
            yield head + bytes((c,)) + tail


def insertions(pw: bytes) -> Iterator[bytes]:
    for i in range(len(pw) + 1):
        head, tail = pw[:i], pw[i:]
        for c in PRINTABLE:
            yield head + bytes((c,)) + tail


def trims(pw: bytes) -> Iterator[bytes]:
    if len(pw) > 2:
        yield pw[2:]
        yield pw[1:-1]
        yield pw[:-2]


def edit_variants(password: Text) -> Iterator[bytes]:
    """Yield the password followed by its edit variants, in lookup order."""
    pw = to_bytes(password)
    yield pw
    yield from deletions(pw)
    yield from substitutions(pw)
    yield from insertions(pw)
    yield from trims(pw)


# ----------------------- set lookup -----------------------

def check_variants(password: Text, set_oracle) -> Optional[Rejection]:
    for candidate in edit_variants(password):
        try:
            found = candidate in set_oracle
        except OSError as e:
            raise ResourceError(f"cannot query password dictionary: {e}") from e
        if found:
            logger.debug("password variant found in exact-match dictionary")
            return Rejection(RejectKind.DICTIONARY, ERROR_DICT)
    return None
