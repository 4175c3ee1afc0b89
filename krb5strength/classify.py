"""
Character classification and the cheap composition checks.

All predicates work on bytes with C-locale semantics: only ASCII letters are
letters and only ASCII digits are digits, whatever the password's encoding.
"""
import re
from dataclasses import dataclass
from typing import Iterable, Optional, Set, Tuple, Union

from .errors import ConfigurationError, RejectKind, Rejection

Text = Union[bytes, str]

ERROR_SHORT = "password is too short"
ERROR_ASCII = "password contains non-ASCII or control characters"
ERROR_LETTER = "password is only letters and spaces"
ERROR_MINDIFF = "password does not contain enough unique characters"

CLASS_NAMES = ("lower", "upper", "digit", "symbol")
CLASS_ERRORS = {
    "lower": "Password must contain a lowercase letter",
    "upper": "Password must contain an uppercase letter",
    "digit": "Password must contain a number",
    "symbol": "Password must contain a space or punctuation character",
}
ERROR_NUM_CLASSES = "Password must contain {} types of characters (lowercase, uppercase, numbers, symbols)"


def to_bytes(value: Text) -> bytes:
    if isinstance(value, str):
        return value.encode("utf-8")
    return bytes(value)


# ----------------------- predicates -----------------------

def is_printable_ascii(password: Text) -> bool:
    return all(0x20 <= b <= 0x7E for b in to_bytes(password))


def is_alpha_or_space(password: Text) -> bool:
    # bytes.isalpha() is ASCII-only; the empty password passes vacuously
    return all(b == 0x20 or bytes((b,)).isalpha() for b in to_bytes(password))


def _class_of(b: int) -> str:
    if 0x61 <= b <= 0x7A:
        return "lower"
    if 0x41 <= b <= 0x5A:
        return "upper"
    if 0x30 <= b <= 0x39:
        return "digit"
    return "symbol"


def character_classes(password: Text) -> Set[str]:
    return {_class_of(b) for b in to_bytes(password)}


# ----------------------- class rules -----------------------

@dataclass(frozen=True)
class ClassRule:
    """Character classes required of passwords whose length is in [min_length, max_length].

    max_length of 0 means no upper bound. num_classes, when non-zero, is the
    number of distinct classes required in addition to the named ones.
    """
    min_length: int = 0
    max_length: int = 0
    classes: Tuple[str, ...] = ()
    num_classes: int = 0

    def applies_to(self, length: int) -> bool:
        if length < self.min_length:
            return False
        return self.max_length == 0 or length <= self.max_length


_RE_RANGE = re.compile(r"^(\d+)(?:-(\d*))?$")


def _parse_rule(text: str) -> ClassRule:
    min_length = max_length = 0
    spec = text
    if ":" in text:
        span, spec = text.split(":", 1)
        m = _RE_RANGE.match(span)
        if not m:
            raise ConfigurationError(f"invalid length range in required classes: {text}")
        # "12:" and "12-:" both mean twelve and longer
        min_length = int(m.group(1))
        max_length = int(m.group(2)) if m.group(2) else 0
        if max_length and max_length < min_length:
            raise ConfigurationError(f"invalid length range in required classes: {text}")

    classes = []
    num_classes = 0
    for word in spec.split(","):
        word = word.strip()
        if word.isdigit():
            num_classes = int(word)
            if not 1 <= num_classes <= len(CLASS_NAMES):
                raise ConfigurationError(f"invalid number of required classes: {word}")
        elif word in CLASS_NAMES:
            classes.append(word)
        else:
            raise ConfigurationError(f"unknown character class {word!r} in required classes")
    return ClassRule(min_length, max_length, tuple(classes), num_classes)


def parse_class_rules(text: Optional[str]) -> Tuple[ClassRule, ...]:
    """
    Parse a require_classes setting such as "8-19:lower,upper 8-15:digit 24-24:3".
    """
    if not text:
        return ()
    return tuple(_parse_rule(word) for word in text.split())


# ----------------------- checks -----------------------

def check_length(password: Text, min_length: int) -> Optional[Rejection]:
    if len(to_bytes(password)) < min_length:
        return Rejection(RejectKind.TOO_SHORT, ERROR_SHORT)
    return None


def check_ascii(password: Text, enabled: bool) -> Optional[Rejection]:
    if enabled and not is_printable_ascii(password):
        return Rejection(RejectKind.CHARACTER_CLASS, ERROR_ASCII, "ascii")
    return None


def check_nonletter(password: Text, enabled: bool) -> Optional[Rejection]:
    if enabled and is_alpha_or_space(password):
        return Rejection(RejectKind.CHARACTER_CLASS, ERROR_LETTER, "letter")
    return None


def check_classes(password: Text, rules: Iterable[ClassRule]) -> Optional[Rejection]:
    pw = to_bytes(password)
    present = character_classes(pw)
    for rule in rules:
        if not rule.applies_to(len(pw)):
            continue
        for name in CLASS_NAMES:
            if name in rule.classes and name not in present:
                return Rejection(RejectKind.CHARACTER_CLASS, CLASS_ERRORS[name], name)
        if rule.num_classes and len(present) < rule.num_classes:
            return Rejection(RejectKind.CHARACTER_CLASS,
                             ERROR_NUM_CLASSES.format(rule.num_classes), "count")
    return None


def check_minimum_different(password: Text, minimum: int) -> Optional[Rejection]:
    if minimum and len(set(to_bytes(password))) < minimum:
        return Rejection(RejectKind.CHARACTER_CLASS, ERROR_MINDIFF, "different")
    return None
