"""
The password quality engine.

init() resolves a StrengthConfig into a Policy holding the opened dictionary
oracles; evaluate() runs the checks in a fixed order and stops at the first
rejection; close() releases the oracles.
"""
from dataclasses import dataclass
from typing import Optional, Tuple

from .classify import (
    ClassRule,
    Text,
    check_ascii,
    check_classes,
    check_length,
    check_minimum_different,
    check_nonletter,
    parse_class_rules,
    to_bytes,
)
from .config import StrengthConfig
from .errors import CheckResult, ConfigurationError, RejectKind, Rejection
from .log import get_logger
from .oracles import CrackLibOracle, ExactSetOracle, FuzzyOracle, WordSet, query_fuzzy
from .principal import check_principal
from .variants import check_variants

logger = get_logger(__name__)


@dataclass(frozen=True)
class Policy:
    minimum_length: int = 0
    require_ascii_printable: bool = False
    require_non_letter: bool = False
    require_classes: Tuple[ClassRule, ...] = ()
    minimum_different: int = 0
    cracklib_maxlen: int = 0
    dictionary_oracle: Optional[FuzzyOracle] = None
    set_oracle: Optional[ExactSetOracle] = None

    def __post_init__(self):
        if self.dictionary_oracle is None and self.set_oracle is None:
            raise ConfigurationError("password_dictionary not configured")

    # ---- pipeline
    def _fuzzy(self, pw: bytes) -> Optional[Rejection]:
        if self.dictionary_oracle is None:
            return None
        if self.cracklib_maxlen and len(pw) > self.cracklib_maxlen:
            return None
        message = query_fuzzy(pw, self.dictionary_oracle)
        if message is not None:
            return Rejection(RejectKind.DICTIONARY, message)
        return None

    def _exact(self, pw: bytes) -> Optional[Rejection]:
        if self.set_oracle is None:
            return None
        return check_variants(pw, self.set_oracle)

    def evaluate(self, password: Text, principal: Text) -> CheckResult:
        pw = to_bytes(password)
        checks = (
            lambda: check_length(pw, self.minimum_length),
            lambda: check_ascii(pw, self.require_ascii_printable),
            lambda: check_nonletter(pw, self.require_non_letter),
            lambda: check_classes(pw, self.require_classes),
            lambda: check_minimum_different(pw, self.minimum_different),
            lambda: check_principal(pw, principal),
            lambda: self._fuzzy(pw),
            lambda: self._exact(pw),
        )
        name = principal.decode("utf-8", "replace") if isinstance(principal, bytes) else principal
        for check in checks:
            rejection = check()
            if rejection is not None:
                logger.debug("rejected password for %s: %s", name, rejection.message)
                return CheckResult.reject(rejection)
        logger.debug("accepted password for %s", name)
        return CheckResult.accept()

    # ---- lifecycle
    def close(self) -> None:
        for oracle in (self.dictionary_oracle, self.set_oracle):
            if oracle is not None:
                oracle.close()

    def __enter__(self) -> "Policy":
        return self

    def __exit__(self, *exc) -> None:
        self.close()


def init(config: StrengthConfig) -> Policy:
    if config.password_dictionary is None and config.password_dictionary_set is None:
        raise ConfigurationError("password_dictionary not configured")

    rules = parse_class_rules(config.require_classes)
    fuzzy = exact = None
    try:
        if config.password_dictionary is not None:
            fuzzy = CrackLibOracle(config.password_dictionary)
        if config.password_dictionary_set is not None:
            exact = WordSet.open(config.password_dictionary_set)
    except Exception:
        if fuzzy is not None:
            fuzzy.close()
        raise

    return Policy(
        minimum_length=config.minimum_length,
        require_ascii_printable=config.require_ascii_printable,
        require_non_letter=config.require_non_letter,
        require_classes=rules,
        minimum_different=config.minimum_different,
        cracklib_maxlen=config.cracklib_maxlen,
        dictionary_oracle=fuzzy,
        set_oracle=exact,
    )


def evaluate(policy: Policy, password: Text, principal: Text) -> CheckResult:
    return policy.evaluate(password, principal)


def close(policy: Optional[Policy]) -> None:
    if policy is not None:
        policy.close()
