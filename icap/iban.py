"""
This module provides the ICAP_ codec: a mapping between 20-byte account
addresses and checksummed, IBAN-shaped strings meant to be read, spoken and
typed by people.

The main entry points are :func:`encode` and :func:`decode`, which convert an
:class:`~icap.address.Address` to a *direct* ICAP string and back, and
:func:`parse`, which classifies an arbitrary string without raising. Parsed
strings are instances of :class:`DirectIBAN` or :class:`IndirectIBAN`, both
subclasses of :class:`IBAN` and of :class:`str`. Only the direct form can be
constructed from an address; the indirect form is only ever parsed.

About the Codec
...............

The direct payload is the address read as a big-endian unsigned integer and
written in base 36 (``0-9A-Z``), left-padded with ``0`` to 30 symbols. The
check digits are chosen so that :func:`~icap.checksum.mod97` of the
:func:`~icap.checksum.digit_stream` of the finished string is ``1``, the IBAN
convention. Not every address fits: values of :math:`36^{30}` and above need
31 symbols, and :func:`encode` refuses them (see :func:`can_encode`). 35
character strings carrying such addresses still parse and decode.

.. _ICAP: https://github.com/ethereum/wiki/wiki/Inter-exchange-Client-Address-Protocol-(ICAP)
"""
import logging
from collections import namedtuple

from .address import Address, ADDRESS_LEN
from .checksum import (
    PREFIX, DIRECT, INDIRECT, ICAPError, StructuralMismatch, ChecksumMismatch,
    digit_stream, mod97, normalize, verify,
)
from .util import int2str, str2int, leftpad

logger = logging.getLogger(__name__)

#: Number of base-36 symbols in an encoded direct payload
PAYLOAD_LEN = 30

__all__ = [
    "IBAN", "DirectIBAN", "IndirectIBAN", "Invalid", "parse", "encode",
    "decode", "can_encode", "ICAPError", "StructuralMismatch",
    "ChecksumMismatch", "NonEncodable", "MalformedPayload",
]


class NonEncodable(ICAPError):
    "Address is too large for a 30 symbol direct payload"


class MalformedPayload(ICAPError):
    "Direct payload does not decode to a 160-bit address"


class IBAN(str):
    """
    An ICAP string: normalized (uppercase, no spaces), structurally valid and,
    unless `skip_checksum` is given, with correct check digits. Calling
    :class:`IBAN` returns a :class:`DirectIBAN` or an :class:`IndirectIBAN`
    according to the layout of `s`; calling a subclass directly additionally
    requires that layout. Invalid input raises
    :class:`~icap.checksum.StructuralMismatch` or
    :class:`~icap.checksum.ChecksumMismatch`.

    >>> IBAN("xe81 ethx regg avof york")
    IndirectIBAN('XE81ETHXREGGAVOFYORK')
    >>> IBAN("XE7338O073KYGTWWZN0F2WZ0R8PX5ZPPZS").to_address()
    Address('0x00c5496aee77c1ba1f0854206a26dda82a81d6d8')
    """
    form = None

    def __new__(cls, s, skip_checksum=False):
        s = normalize(s)
        form = verify(s, skip_checksum)
        kind = _FORMS[form]
        if not issubclass(kind, cls):
            raise StructuralMismatch(
                f"{s} is {form}, not {cls.form}"
            )
        return super().__new__(kind, s)

    def __repr__(self):
        return self.__class__.__name__ + f"('{self}')"

    @property
    def is_direct(self) -> bool:
        return self.form == DIRECT

    @property
    def is_indirect(self) -> bool:
        return self.form == INDIRECT

    @property
    def check_digits(self) -> str:
        "The two check digits following the country code"
        return self[2:4]

    def printable(self) -> str:
        """
        Return the IBAN print format: groups of four symbols separated by
        single spaces. The result parses back to the same IBAN.

        >>> IBAN("XE81ETHXREGGAVOFYORK").printable()
        'XE81 ETHX REGG AVOF YORK'
        """
        return ' '.join(self[i:i + 4] for i in range(0, len(self), 4))


class DirectIBAN(IBAN):
    "ICAP string whose payload is the base-36 encoded address (34 or 35 long)"
    form = DIRECT

    @property
    def payload(self) -> str:
        "The base-36 address symbols after the check digits"
        return self[4:]

    def to_address(self) -> Address:
        """
        Decode the payload to an :class:`~icap.address.Address`. Raises
        :class:`MalformedPayload` if the payload exceeds 160 bits, which only a
        35 character string can do.
        """
        try:
            n = str2int(self.payload, 36)
            return Address(int2str(n, 16, ADDRESS_LEN * 2))
        except ValueError as e:
            raise MalformedPayload(f"cannot decode {self}: {e}") from e


class IndirectIBAN(IBAN):
    """
    ICAP string naming an asset, institution and client rather than an address
    (20 long). Parse only: nothing in this package constructs one from its
    fields.

    >>> i = IndirectIBAN("XE81ETHXREGGAVOFYORK")
    >>> i.asset, i.institution, i.client
    ('ETH', 'XREG', 'GAVOFYORK')
    """
    form = INDIRECT

    @property
    def asset(self) -> str:
        "Asset code, always ``ETH``"
        return self[4:7]

    @property
    def institution(self) -> str:
        "Four symbol institution code"
        return self[7:11]

    @property
    def client(self) -> str:
        "Nine symbol client identifier within the institution"
        return self[11:]


_FORMS = {DIRECT: DirectIBAN, INDIRECT: IndirectIBAN}


class Invalid(namedtuple("Invalid", ["raw", "error"])):
    """
    Result of :func:`parse` for a string that is not an ICAP string. Holds the
    `raw` input and the `error` describing why it was rejected. Always false
    in a boolean context.
    """
    __slots__ = ()
    form = None

    def __bool__(self):
        return False


def parse(s: str):
    """
    Classify string `s` without raising: return a :class:`DirectIBAN`, an
    :class:`IndirectIBAN` or, if `s` is not an ICAP string, an
    :class:`Invalid` carrying the reason.

    >>> parse("XE82ETHXREGGAVOFYORK")
    Invalid(raw='XE82ETHXREGGAVOFYORK', error=ChecksumMismatch("bad check digits '82': residue 2, expected 1"))
    """
    try:
        return IBAN(s)
    except ICAPError as e:
        logger.debug("rejected %r: %s", s, e)
        return Invalid(s, e)


def can_encode(address: Address) -> bool:
    "Return ``True`` if and only if :func:`encode` accepts `address`"
    return len(int2str(int(Address(address)), 36)) <= PAYLOAD_LEN


def encode(address: Address) -> DirectIBAN:
    """
    Return the 34 character direct ICAP string of `address`. Raises
    :class:`NonEncodable` if the address does not fit in 30 base-36 symbols.

    >>> encode(Address("0x00c5496aee77c1ba1f0854206a26dda82a81d6d8"))
    DirectIBAN('XE7338O073KYGTWWZN0F2WZ0R8PX5ZPPZS')
    """
    address = Address(address)
    try:
        payload = int2str(int(address), 36, PAYLOAD_LEN)
    except ValueError as e:
        logger.debug("refused to encode %s: %s", address, e)
        raise NonEncodable(f"{address} does not fit in {PAYLOAD_LEN} "
                           "base36 symbols") from e
    remainder = mod97(digit_stream(PREFIX + '00' + payload))
    check = leftpad(str(98 - remainder), 2)
    return DirectIBAN(PREFIX + check + payload)


def decode(s: str) -> Address:
    """
    Return the :class:`~icap.address.Address` carried by direct ICAP string
    `s`. Raises :class:`~icap.checksum.StructuralMismatch` or
    :class:`~icap.checksum.ChecksumMismatch` if `s` is not a direct ICAP
    string and :class:`MalformedPayload` if its payload is not an address.
    """
    return DirectIBAN(s).to_address()
