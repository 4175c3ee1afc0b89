"""
Policy configuration.

Settings use the krb5-strength option names so a JSON file can be written by
copying values out of the [appdefaults] section of krb5.conf.
"""
import json
from dataclasses import dataclass, fields, replace
from typing import Any, Mapping, Optional

from .classify import parse_class_rules
from .errors import ConfigurationError
from .log import get_logger

logger = get_logger(__name__)

_TRUE = {"true", "yes", "on", "1", "y", "t"}
_FALSE = {"false", "no", "off", "0", "n", "f", "nil"}


def parse_boolean(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    if isinstance(value, str) and value.strip().lower() in _TRUE:
        return True
    if isinstance(value, str) and value.strip().lower() in _FALSE:
        return False
    raise ConfigurationError(f"invalid boolean for {key}: {value!r}")


def parse_number(key: str, value: Any) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"invalid number for {key}: {value!r}")
    try:
        n = int(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"invalid number for {key}: {value!r}") from None
    if n < 0:
        raise ConfigurationError(f"{key} must not be negative")
    return n


def _parse_path(key: str, value: Any) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigurationError(f"invalid path for {key}: {value!r}")
    # krb5_appdefault_string hands back "" for unset values
    return value or None


@dataclass(frozen=True)
class StrengthConfig:
    minimum_length: int = 0
    require_ascii_printable: bool = False
    require_non_letter: bool = False
    require_classes: Optional[str] = None
    minimum_different: int = 0
    cracklib_maxlen: int = 0
    password_dictionary: Optional[str] = None        # CrackLib base path, no .pwd
    password_dictionary_set: Optional[str] = None    # wordlist, .gz wordlist or .trie

    def __post_init__(self):
        # fail early on malformed class rules rather than at first check
        parse_class_rules(self.require_classes)

    # ---- loading helpers
    @staticmethod
    def from_mapping(values: Mapping[str, Any], base: Optional["StrengthConfig"] = None) -> "StrengthConfig":
        """Parse option values on top of base (defaults if None). None values are skipped."""
        known = {f.name for f in fields(StrengthConfig)}
        kw = {}
        for key, value in values.items():
            if key not in known:
                logger.warning("ignoring unknown configuration option %s", key)
                continue
            if value is None:
                continue
            if key in ("minimum_length", "minimum_different", "cracklib_maxlen"):
                kw[key] = parse_number(key, value)
            elif key in ("require_ascii_printable", "require_non_letter"):
                kw[key] = parse_boolean(key, value)
            elif key == "require_classes":
                if not isinstance(value, str):
                    raise ConfigurationError(f"invalid value for {key}: {value!r}")
                kw[key] = value.strip() or None
            else:
                kw[key] = _parse_path(key, value)
        return replace(base, **kw) if base is not None else StrengthConfig(**kw)

    @staticmethod
    def from_json(path: str) -> "StrengthConfig":
        try:
            with open(path, "r", encoding="utf-8") as f:
                values = json.load(f)
        except OSError as e:
            raise ConfigurationError(f"cannot read configuration {path}: {e}") from e
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"malformed configuration {path}: {e}") from e
        if not isinstance(values, dict):
            raise ConfigurationError(f"configuration {path} must be a JSON object")
        return StrengthConfig.from_mapping(values)
