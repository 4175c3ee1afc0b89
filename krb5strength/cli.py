# krb5strength-check
# Stand-alone password check program speaking Heimdal's external check protocol:
#
#   principal: <principal>
#   new-password: <password>
#   end
#
# Prints APPROVED on stdout if the password is acceptable, otherwise the reason
# on stderr. Either way that is a successful run (exit 0); exit 1 means the
# check itself could not be done.

import argparse
import sys
from typing import BinaryIO, Optional

from .checker import close, evaluate, init
from .config import StrengthConfig
from .errors import StrengthError
from .log import get_logger, setup_logging

logger = get_logger(__name__)


class ProtocolError(Exception):
    pass


# ----------------------- protocol -----------------------

def read_key(stream: BinaryIO, key: str) -> bytes:
    line = stream.readline()
    if not line:
        raise ProtocolError(f"Cannot read {key}")
    if not line.endswith(b"\n"):
        raise ProtocolError(f"Malformed or too long {key} line")
    prefix = key.encode("ascii") + b": "
    if not line.startswith(prefix):
        raise ProtocolError(f"Malformed {key} line")
    return line[len(prefix):-1]


def read_request(stream: BinaryIO):
    principal = read_key(stream, "principal")
    password = read_key(stream, "new-password")
    if stream.readline() != b"end\n":
        raise ProtocolError("Malformed end line")
    return principal, password


# ----------------------- cli -----------------------

def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="krb5strength-check",
                                 description="Check a new Kerberos password read from stdin.")
    ap.add_argument("principal", nargs="?", help="Principal (accepted for Heimdal compatibility, ignored)")
    ap.add_argument("--config", help="JSON file with krb5-strength settings")
    ap.add_argument("--dictionary", help="CrackLib dictionary base path (without .pwd)")
    ap.add_argument("--wordlist", help="Exact-match wordlist or .trie file")
    ap.add_argument("--minimum-length", type=int, default=None)
    ap.add_argument("--minimum-different", type=int, default=None)
    ap.add_argument("--require-classes", default=None, help='e.g. "8-19:lower,upper 24-24:3"')
    ap.add_argument("--require-ascii-printable", action=argparse.BooleanOptionalAction, default=None)
    ap.add_argument("--require-non-letter", action=argparse.BooleanOptionalAction, default=None)
    ap.add_argument("--cracklib-maxlen", type=int, default=None)
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging on stderr")
    return ap


def load_config(args) -> StrengthConfig:
    config = StrengthConfig.from_json(args.config) if args.config else StrengthConfig()
    return StrengthConfig.from_mapping({
        "minimum_length": args.minimum_length,
        "minimum_different": args.minimum_different,
        "require_classes": args.require_classes,
        "require_ascii_printable": args.require_ascii_printable,
        "require_non_letter": args.require_non_letter,
        "cracklib_maxlen": args.cracklib_maxlen,
        "password_dictionary": args.dictionary,
        "password_dictionary_set": args.wordlist,
    }, base=config)


def main(argv=None, stdin: Optional[BinaryIO] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)
    stdin = stdin if stdin is not None else sys.stdin.buffer

    try:
        config = load_config(args)
        principal, password = read_request(stdin)
    except (ProtocolError, StrengthError) as e:
        print(e, file=sys.stderr)
        return 1

    policy = None
    try:
        policy = init(config)
        result = evaluate(policy, password, principal)
    except StrengthError as e:
        logger.error("cannot check password for %s: %s", principal.decode("utf-8", "replace"), e)
        print(f"Cannot check password strength: {e}", file=sys.stderr)
        return 1
    finally:
        close(policy)

    if result.accepted:
        print("APPROVED")
    else:
        print(result.message, file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
