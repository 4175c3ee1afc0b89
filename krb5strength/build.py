# krb5strength-build
# Pack a plain wordlist into a marisa-trie for memory-mapped exact lookups.

import argparse
import sys

from .log import get_logger, setup_logging
from .oracles import TRIE_SUFFIX, read_wordlist

try:
    import marisa_trie
except ImportError:
    marisa_trie = None

logger = get_logger(__name__)


def load_words(path: str, min_len: int = 0, max_len: int = 0):
    for word in read_wordlist(path):
        if len(word) < min_len:
            continue
        if max_len and len(word) > max_len:
            continue
        # keys must round-trip bytes exactly, see oracles._key
        yield word.decode("latin-1")


def build(wordlist: str, output: str, min_len: int = 0, max_len: int = 0) -> int:
    """Build the trie and return the number of distinct words saved."""
    if marisa_trie is None:
        raise RuntimeError("marisa_trie not installed")
    tr = marisa_trie.Trie(load_words(wordlist, min_len, max_len))
    tr.save(output)
    logger.info("saved %d words to %s", len(tr), output)
    return len(tr)


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Build an exact-match password dictionary from a wordlist.")
    ap.add_argument("wordlist", help="Newline-separated wordlist (or .gz)")
    ap.add_argument("output", help=f"Output trie path (conventionally ending in {TRIE_SUFFIX})")
    ap.add_argument("--min-len", type=int, default=0, help="Skip words shorter than this")
    ap.add_argument("--max-len", type=int, default=0, help="Skip words longer than this (0 = no limit)")
    ap.add_argument("-v", "--verbose", action="store_true", help="Log progress")
    args = ap.parse_args(argv)

    setup_logging(args.verbose)
    if not args.output.endswith(TRIE_SUFFIX):
        logger.warning("%s does not end in %s and will be read as a wordlist", args.output, TRIE_SUFFIX)
    try:
        count = build(args.wordlist, args.output, args.min_len, args.max_len)
    except (OSError, RuntimeError) as e:
        print(f"krb5strength-build: {e}", file=sys.stderr)
        return 1
    print(f"OK: {count:,} words saved to {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
