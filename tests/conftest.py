import pytest

from krb5strength import WordSet

COMMON_WORDS = ["password", "bitterbane"]


class FakeFuzzyOracle:
    """Scripted stand-in for CrackLib: maps passwords to failure messages."""

    def __init__(self, responses=None, default=None):
        self.responses = {k.encode() if isinstance(k, str) else k: v
                          for k, v in (responses or {}).items()}
        self.default = default
        self.queries = []
        self.closed = False

    def query(self, password):
        self.queries.append(password)
        return self.responses.get(password, self.default)

    def close(self):
        self.closed = True


@pytest.fixture
def wordlist(tmp_path):
    path = tmp_path / "common.txt"
    path.write_text("\n".join(COMMON_WORDS) + "\n", encoding="utf-8")
    return str(path)


@pytest.fixture
def word_set():
    return WordSet(COMMON_WORDS)


@pytest.fixture
def fake_oracle():
    return FakeFuzzyOracle()
