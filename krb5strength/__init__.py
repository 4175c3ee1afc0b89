"""Password quality checking for Kerberos password changes."""

from .checker import Policy, close, evaluate, init
from .config import StrengthConfig
from .errors import (
    CheckResult,
    ConfigurationError,
    RejectKind,
    Rejection,
    ResourceError,
    StrengthError,
)
from .oracles import CrackLibOracle, WordSet

__version__ = "1.0.0"

__all__ = [
    "CheckResult",
    "ConfigurationError",
    "CrackLibOracle",
    "Policy",
    "RejectKind",
    "Rejection",
    "ResourceError",
    "StrengthConfig",
    "StrengthError",
    "WordSet",
    "close",
    "evaluate",
    "init",
]
