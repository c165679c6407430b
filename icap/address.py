"""
Ethereum-style account address: an opaque 20-byte value. The ICAP codec only
needs to treat it as an unsigned 160-bit integer and to build one back from a
hex string.
"""

from .util import unhex

#: Address width in bytes
ADDRESS_LEN = 20


class Address(bytes):
    """
    A 20-byte account address. Instances are :class:`bytes`, so they compare,
    hash and slice like the raw address bytes.

    `data` may be :class:`bytes` or a hex :class:`str` with or without a
    leading ``0x``. Anything that is not exactly 20 bytes long raises
    :class:`ValueError`.

    >>> a = Address("0x00c5496aee77c1ba1f0854206a26dda82a81d6d8")
    >>> str(a)
    '0x00c5496aee77c1ba1f0854206a26dda82a81d6d8'
    >>> Address.from_int(int(a)) == a
    True
    """

    def __new__(cls, data):
        if isinstance(data, str):
            data = unhex(data)
        return super().__new__(cls, data)

    def __init__(self, data):
        if len(self) != ADDRESS_LEN:
            raise ValueError(
                f"address must be {ADDRESS_LEN} bytes, got {len(self)}"
            )

    @classmethod
    def from_int(cls, i: int) -> 'Address':
        "Create an Address from its big-endian unsigned integer value"
        return cls(i.to_bytes(ADDRESS_LEN, 'big'))

    def __int__(self):
        return int.from_bytes(self, 'big')

    def __str__(self):
        return '0x' + self.hex()

    def __repr__(self):
        return self.__class__.__name__ + f"('{self}')"
