"Convert account addresses between hex and ICAP format"

import argparse
import logging
import sys

from .address import Address
from .iban import IBAN, encode

logger = logging.getLogger(__name__)


def is_hexaddr(s: str) -> bool:
    "Test if a string looks like a hex formatted address"
    if s[:2] in ('0x', '0X'):
        s = s[2:]
    return len(s) == 40 and all(x in '0123456789abcdefABCDEF' for x in s)


def convert_word(word: str, check: bool = False) -> str:
    """
    Return the output line for a single `word`. Hex addresses are encoded to
    their direct ICAP string; ICAP strings are decoded to their address
    (direct) or fields (indirect). Raises :class:`ValueError` if the word can
    not be converted. With `check` set, ICAP strings are only validated.
    """
    if is_hexaddr(word):
        addr = Address(word)
        return f"{'HEX':<6} {addr} {encode(addr)}"
    iban = IBAN(word)
    if check:
        return f"{'VALID':<6} {iban.printable()}"
    if iban.is_direct:
        return f"{'DIRECT':<6} {iban} {iban.to_address()}"
    return (f"{'INDIR':<6} {iban} asset={iban.asset} "
            f"institution={iban.institution} client={iban.client}")


def main(argv=None):
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("words", nargs="*",
                        help="addresses or ICAP strings to convert; read "
                             "from FILE if none are given")
    parser.add_argument("-f", "--file", default="-",
                        type=argparse.FileType('r'),
                        help="whitespace delimited input (default: stdin)")
    parser.add_argument("-c", "--check", action="store_true",
                        help="only validate ICAP strings, do not decode")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="log debug messages to stderr")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    words = args.words or args.file.read().split()

    status = 0
    for word in words:
        try:
            print(convert_word(word, args.check))
        except ValueError as e:
            logger.debug("failed to convert %r", word, exc_info=True)
            print(f"{'':6} {word} {type(e).__name__}: {e}")
            status = 1
    return status


if __name__ == "__main__":
    sys.exit(main())
