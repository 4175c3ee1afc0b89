"""
Verdict types and the engine's error taxonomy.

Rejections are values returned by the checks. Exceptions are reserved for the
cases where the engine could not run at all (bad configuration, a dictionary
that failed underneath us); callers must report those to the operator, not
as a verdict on the password.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class StrengthError(Exception):
    """Base class for failures that prevent a password from being checked."""


class ConfigurationError(StrengthError):
    """Missing or malformed configuration, or an unreadable dictionary."""


class ResourceError(StrengthError):
    """An oracle failed while answering a query."""


# ----------------------- verdicts -----------------------

class RejectKind(str, Enum):
    TOO_SHORT = "too_short"
    CHARACTER_CLASS = "character_class"
    PRINCIPAL = "principal"
    DICTIONARY = "dictionary"


@dataclass(frozen=True)
class Rejection:
    kind: RejectKind
    message: str
    which: Optional[str] = None   # class rule that failed, for CHARACTER_CLASS


@dataclass(frozen=True)
class CheckResult:
    rejection: Optional[Rejection] = None

    @staticmethod
    def accept() -> "CheckResult":
        return CheckResult()

    @staticmethod
    def reject(rejection: Rejection) -> "CheckResult":
        return CheckResult(rejection)

    @property
    def accepted(self) -> bool:
        return self.rejection is None

    @property
    def kind(self) -> Optional[RejectKind]:
        return self.rejection.kind if self.rejection else None

    @property
    def message(self) -> Optional[str]:
        return self.rejection.message if self.rejection else None

    def __bool__(self) -> bool:
        return self.accepted
