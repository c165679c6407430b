"""
ICAP codec: checksummed, IBAN-shaped strings for 20-byte account addresses.
"""

from .address import Address
from .checksum import is_valid
from .iban import (
    IBAN, DirectIBAN, IndirectIBAN, Invalid, parse, encode, decode,
    can_encode, ICAPError, StructuralMismatch, ChecksumMismatch,
    NonEncodable, MalformedPayload,
)
