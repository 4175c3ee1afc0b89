"""
Dictionary oracles consulted by the policy engine.

- CrackLibOracle: fuzzy matching through CrackLib's FascistCheck, which already
  handles case, reversal, plurals and its own length/diversity rules.
- WordSet: exact membership against a wordlist, either loaded into memory or
  memory-mapped from a marisa-trie file built by krb5strength-build.
"""
import gzip
import os
import threading
from typing import Iterable, Optional, Protocol

from .classify import Text, to_bytes
from .errors import ConfigurationError, ResourceError
from .log import get_logger

try:
    import marisa_trie
except ImportError:
    marisa_trie = None  # wordlist backend still works

try:
    import cracklib
except ImportError:
    cracklib = None

logger = get_logger(__name__)

TRIE_SUFFIX = ".trie"


class FuzzyOracle(Protocol):
    def query(self, password: bytes) -> Optional[str]: ...
    def close(self) -> None: ...


class ExactSetOracle(Protocol):
    def __contains__(self, candidate: bytes) -> bool: ...
    def close(self) -> None: ...


# ----------------------- CrackLib -----------------------

class CrackLibOracle:
    """
    Wraps cracklib.FascistCheck. `dictionary` is the base path of the packed
    dictionary, without the .pwd extension.
    """
    def __init__(self, dictionary: str):
        if cracklib is None:
            raise ConfigurationError("CrackLib dictionary requested but cracklib is not installed")
        pwd = f"{dictionary}.pwd"
        if not os.access(pwd, os.R_OK):
            raise ConfigurationError(f"cannot read dictionary {pwd}")
        self.dictionary = dictionary
        # CrackLib keeps its open dictionary in process-global state
        self._lock = threading.Lock()
        logger.info("using CrackLib dictionary %s", dictionary)

    def query(self, password: bytes) -> Optional[str]:
        # CrackLib reads a C string, so it never sees past the first NUL
        pw = password.split(b"\0", 1)[0].decode("utf-8", errors="replace")
        with self._lock:
            try:
                cracklib.FascistCheck(pw, self.dictionary)
            except ValueError as e:
                return str(e)
            except OSError as e:
                raise ResourceError(f"cannot query dictionary {self.dictionary}: {e}") from e
        return None

    def close(self) -> None:
        pass


def query_fuzzy(password: Text, oracle: FuzzyOracle) -> Optional[str]:
    return oracle.query(to_bytes(password))


# ----------------------- exact-match word sets -----------------------

def _key(word: bytes) -> str:
    # latin-1 maps every byte to one code point, so any byte string is a valid key
    return word.decode("latin-1")


def open_maybe_gzip(path: str):
    if path.endswith(".gz"):
        return gzip.open(path, "rb")
    return open(path, "rb")


def read_wordlist(path: str) -> Iterable[bytes]:
    with open_maybe_gzip(path) as f:
        for line in f:
            word = line.rstrip(b"\r\n")
            if word:
                yield word


class WordSet:
    """
    Exact-match set of words.
    - in-memory backend: frozenset of bytes
    - marisa-trie backend: read-only mmap of a saved marisa_trie.Trie
    Both are safe for concurrent readers once constructed.
    """
    def __init__(self, words: Iterable[Text] = ()):
        self._backend = "set"
        self._set = frozenset(to_bytes(w) for w in words)
        self._tr = None
        self._closed = False
        self.path = None

    @staticmethod
    def from_wordlist(path: str) -> "WordSet":
        try:
            inst = WordSet(read_wordlist(path))
        except OSError as e:
            raise ConfigurationError(f"cannot open dictionary {path}: {e}") from e
        inst.path = path
        logger.info("loaded %d words from %s", len(inst), path)
        return inst

    @staticmethod
    def from_trie(path: str) -> "WordSet":
        if marisa_trie is None:
            raise ConfigurationError("marisa-trie dictionary requested but marisa_trie is not installed")
        if not os.access(path, os.R_OK):
            raise ConfigurationError(f"cannot open dictionary {path}")
        tr = marisa_trie.Trie()
        try:
            tr.mmap(path)
        except Exception as e:
            raise ConfigurationError(f"cannot init dictionary {path}: {e}") from e
        inst = WordSet()
        inst._backend = "trie"
        inst._tr = tr
        inst.path = path
        logger.info("mapped %d words from %s", len(inst), path)
        return inst

    @staticmethod
    def open(path: str) -> "WordSet":
        if path.endswith(TRIE_SUFFIX):
            return WordSet.from_trie(path)
        return WordSet.from_wordlist(path)

    @property
    def backend(self) -> str:
        return self._backend

    def __contains__(self, candidate: Text) -> bool:
        if self._closed:
            raise ResourceError(f"dictionary {self.path or '<memory>'} is closed")
        word = to_bytes(candidate)
        if self._backend == "set":
            return word in self._set
        return _key(word) in self._tr

    def __len__(self) -> int:
        if self._backend == "set":
            return len(self._set)
        return len(self._tr) if self._tr is not None else 0

    def close(self) -> None:
        if not self._closed:
            logger.debug("closing dictionary %s", self.path)
        self._closed = True
        self._tr = None
        self._set = frozenset()
