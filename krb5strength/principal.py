"""
Reject passwords derived from the principal they are being set for.

The principal arrives in unparsed form, name[/instance]@REALM, with a
backslash escaping a literal "@" or "\\" inside the name.
"""
from typing import Optional

from .classify import Text, to_bytes
from .errors import RejectKind, Rejection

ERROR_USERNAME = "password based on username or principal"

_BACKSLASH = 0x5C
_AT = 0x40


def local_part(principal: Text) -> bytes:
    """Return the principal with the realm stripped.

    Escape sequences are copied through unchanged; the first unescaped "@"
    ends the local part.
    """
    p = to_bytes(principal)
    i, n = 0, len(p)
    while i < n:
        if p[i] == _BACKSLASH and i + 1 < n:
            i += 2
            continue
        if p[i] == _AT:
            return p[:i]
        i += 1
    return p


def _matches(a: bytes, b: bytes) -> bool:
    # bytes.lower() folds ASCII only, like strcasecmp in the C locale
    return a.lower() == b.lower()


def check_principal(password: Text, principal: Text) -> Optional[Rejection]:
    pw = to_bytes(password)
    full = to_bytes(principal)
    reject = Rejection(RejectKind.PRINCIPAL, ERROR_USERNAME)

    if _matches(pw, full):
        return reject

    user = local_part(full)
    if len(pw) == len(user):
        if _matches(pw, user) or _matches(pw, user[::-1]):
            return reject

    # local part followed only by digits; with an empty local part this
    # flags every all-digit password
    if len(pw) > len(user) and _matches(pw[:len(user)], user):
        if pw[len(user):].isdigit():
            return reject

    return None
