"""
This module provides the checksum and validation half of the ICAP_ codec: the
ISO 7064 MOD 97-10 checksum used by IBAN_ and the structural grammar every ICAP
string must satisfy.

An ICAP string is an IBAN in the reserved ``XE`` country namespace. It has one
of two layouts:

- *direct*: ``XE`` + 2 check digits + 30 or 31 base-36 symbols encoding the
  account address itself (34 or 35 characters)
- *indirect*: ``XE`` + 2 check digits + ``ETH`` + 13 alphanumeric symbols
  naming an institution and client (20 characters)

The check digits are valid when :func:`mod97` of the :func:`digit_stream` of
the whole string is exactly ``1``.

.. _ICAP: https://github.com/ethereum/wiki/wiki/Inter-exchange-Client-Address-Protocol-(ICAP)
.. _IBAN: https://en.wikipedia.org/wiki/International_Bank_Account_Number#Validating_the_IBAN
"""
import logging

from .util import ALPHABET

logger = logging.getLogger(__name__)

#: Reserved country code of the ICAP namespace
PREFIX = 'XE'
#: Asset code fixed in the indirect layout
ASSET = 'ETH'
#: Length of an indirect ICAP string
INDIRECT_LEN = 20
#: Allowed lengths of a direct ICAP string
DIRECT_LENS = (34, 35)
#: mod97 residue of a string with correct check digits
VALID_RESIDUE = 1

DIRECT = 'direct'
INDIRECT = 'indirect'

_DECIMAL = ALPHABET[:10]


class ICAPError(ValueError):
    "Base class of every error raised by the ICAP codec"


class StructuralMismatch(ICAPError):
    "String does not have the layout of an ICAP string"


class ChecksumMismatch(ICAPError):
    "String is well formed but its check digits are wrong"


def normalize(s: str) -> str:
    "Remove spaces and convert to uppercase"
    return s.replace(' ', '').upper()


def digit_stream(s: str) -> str:
    """
    Return the all-decimal string fed to :func:`mod97`. The first four
    characters of `s` (country code and check digits) are moved to the end,
    then each digit is kept as is and each letter is replaced by its two-digit
    value ``A`` = 10 ... ``Z`` = 35. `s` is normalized first.

    Raises :class:`ValueError` naming the first character that is neither a
    digit nor a letter.

    >>> digit_stream('GB82WEST12345698765432')
    '3214282912345698765432161182'
    """
    s = normalize(s)
    rearranged = s[4:] + s[:4]
    values = []
    for pos, char in enumerate(rearranged):
        idx = ALPHABET.find(char)
        if idx < 0:
            pos = (pos + 4) % len(s) if len(s) > 4 else pos
            raise ValueError(f"invalid symbol '{char}' at position {pos}")
        values.append(str(idx))
    return ''.join(values)


def mod97(digits: str) -> int:
    """
    Return the decimal number spelled by `digits` modulo 97, computed one digit
    at a time so no big integer is ever built.

    >>> mod97('3214282912345698765432161182')
    1
    """
    m = 0
    for pos, d in enumerate(digits):
        idx = _DECIMAL.find(d)
        if idx < 0:
            raise ValueError(f"invalid decimal digit '{d}' at position {pos}")
        m = (m * 10 + idx) % 97
    return m


def scan(s: str) -> str:
    """
    Check that normalized string `s` has the layout of an ICAP string and
    return its form, :data:`DIRECT` or :data:`INDIRECT`. The layout is chosen
    by length alone, then every position is checked against its character
    class. Raises :class:`StructuralMismatch` describing the first violation.
    """
    if len(s) == INDIRECT_LEN:
        form, body = INDIRECT, 4 + len(ASSET)
    elif len(s) in DIRECT_LENS:
        form, body = DIRECT, 4
    else:
        raise StructuralMismatch(
            f"bad length {len(s)}: must be {INDIRECT_LEN} (indirect) or "
            f"{' or '.join(map(str, DIRECT_LENS))} (direct)"
        )
    if s[:2] != PREFIX:
        raise StructuralMismatch(f"country code must be '{PREFIX}', not '{s[:2]}'")
    for pos in (2, 3):
        if s[pos] not in _DECIMAL:
            raise StructuralMismatch(
                f"invalid check digit '{s[pos]}' at position {pos}"
            )
    if form == INDIRECT and s[4:body] != ASSET:
        raise StructuralMismatch(
            f"indirect asset code must be '{ASSET}', not '{s[4:body]}'"
        )
    for pos in range(body, len(s)):
        if s[pos] not in ALPHABET:
            raise StructuralMismatch(f"invalid symbol '{s[pos]}' at position {pos}")
    return form


def verify(s: str, skip_checksum: bool = False) -> str:
    """
    Validate raw string `s`: normalize it, check its layout with :func:`scan`
    and, unless `skip_checksum` is set, its check digits. Only strings in the
    :data:`PREFIX` namespace carry a checked checksum. Returns the form.

    Raises :class:`StructuralMismatch` or :class:`ChecksumMismatch`.
    """
    s = normalize(s)
    form = scan(s)
    if s.startswith(PREFIX) and not skip_checksum:
        residue = mod97(digit_stream(s))
        if residue != VALID_RESIDUE:
            raise ChecksumMismatch(
                f"bad check digits '{s[2:4]}': residue {residue}, "
                f"expected {VALID_RESIDUE}"
            )
    return form


def is_valid(s: str, skip_checksum: bool = False) -> bool:
    """
    Return ``True`` if and only if `s` is an ICAP string. Spaces and letter
    case are ignored. With `skip_checksum` only the layout is checked.

    >>> is_valid('XE81ETHXREGGAVOFYORK')
    True
    >>> is_valid('XE82ETHXREGGAVOFYORK')
    False
    >>> is_valid('xe81 ethx regg avof york')
    True
    """
    try:
        verify(s, skip_checksum)
    except ICAPError as e:
        logger.debug("rejected %r: %s", s, e)
        return False
    return True
