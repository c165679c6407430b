"Small utility module for the radix and padding helpers used by the codec"

#: Symbols for radix up to 36, in digit-value order
ALPHABET = '0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ'


def leftpad(s: str, width: int, pad: str = '0') -> str:
    """
    Left-pad `s` with `pad` to exactly `width` characters. Raises
    :class:`ValueError` if `s` is already longer than `width`; nothing is ever
    truncated.

    >>> leftpad('1z', 4)
    '001z'
    """
    if len(s) > width:
        raise ValueError(f"cannot pad {len(s)} characters to width {width}")
    return pad * (width - len(s)) + s


def int2str(i: int, radix: int, width: int = 0) -> str:
    """
    Render non-negative integer `i` in base `radix` (2 to 36) using uppercase
    :data:`ALPHABET` symbols. If `width` is given the result is left-padded
    with zeros to exactly `width`; :class:`ValueError` is raised if it does
    not fit.

    >>> int2str(35, 36)
    'Z'
    >>> int2str(255, 16, 4)
    '00FF'
    """
    if not 2 <= radix <= len(ALPHABET):
        raise ValueError(f"unsupported radix {radix}")
    if i < 0:
        raise ValueError("cannot render negative integer")
    string = ''
    while i:
        i, idx = divmod(i, radix)
        string += ALPHABET[idx]
    string = string[::-1] or '0'
    return leftpad(string, width) if width else string


def str2int(s: str, radix: int) -> int:
    """
    Parse `s` as an unsigned base-`radix` integer. Case insensitive. Unlike
    :func:`int` no sign, whitespace or underscore is accepted. Raises
    :class:`ValueError` naming the first bad symbol and its position.
    """
    if not 2 <= radix <= len(ALPHABET):
        raise ValueError(f"unsupported radix {radix}")
    if not s:
        raise ValueError("empty string")
    digits = ALPHABET[:radix]
    i = 0
    for pos, char in enumerate(s.upper()):
        idx = digits.find(char)
        if idx < 0:
            raise ValueError(
                f"invalid base{radix} symbol '{s[pos]}' at position {pos}"
            )
        i = i * radix + idx
    return i


def unhex(s: str) -> bytes:
    "Decode hex string `s`, with or without a leading ``0x``, to bytes"
    if s[:2] in ('0x', '0X'):
        s = s[2:]
    return bytes.fromhex(s)
