"""
Test module for the mod97 checksum and the ICAP string grammar. requires pytest
"""
import pytest

from icap.checksum import (
    digit_stream, mod97, scan, verify, is_valid, normalize,
    StructuralMismatch, ChecksumMismatch, DIRECT, INDIRECT,
)

#============================= TEST FUNCTIONS ================================#

def test_iban_reference_vector():
    """
    Test digit_stream() and mod97() against the public IBAN example
    GB82 WEST 1234 5698 7654 32
    """
    ds = digit_stream("GB82WEST12345698765432")
    assert ds == "3214282912345698765432161182"
    assert mod97(ds) == 1

def test_mod97_matches_bigint():
    for digits in ["0", "96", "97", "98", "331400", "3214282912345698765432161182",
                   "9" * 60]:
        assert mod97(digits) == int(digits) % 97

def test_mod97_empty():
    assert mod97("") == 0

def test_digit_stream_letters():
    # letters take two digits each: A=10 ... Z=35
    assert digit_stream("XE00AZ") == "10353314" + "00"

def test_digit_stream_normalizes():
    assert digit_stream("gb82 west 1234 5698 7654 32") == \
        digit_stream("GB82WEST12345698765432")

def test_digit_stream_bad_char():
    with pytest.raises(ValueError, match="invalid symbol '!' at position 5"):
        digit_stream("XE00I!")
    with pytest.raises(ValueError, match="invalid symbol '-' at position 1"):
        digit_stream("X-00AB")

def test_normalize():
    assert normalize(" xe81 ethx regg avof york ") == "XE81ETHXREGGAVOFYORK"

def test_scan_forms():
    assert scan("XE81ETHXREGGAVOFYORK") == INDIRECT
    assert scan("XE7338O073KYGTWWZN0F2WZ0R8PX5ZPPZS") == DIRECT
    assert scan("XE65GB6LDNXYOFTX0NSV3FUWKOWIXAMJK36") == DIRECT

def test_scan_form_by_length():
    """
    Test that a 34 character string starting with the asset code is still
    direct, and that a 20 character string without it is not direct
    """
    assert scan("XE00ETH" + "0" * 27) == DIRECT
    with pytest.raises(StructuralMismatch, match="asset code must be 'ETH'"):
        scan("XE00ABCXREGGAVOFYORK")

@pytest.mark.parametrize("s, msg", [
    ("", "bad length 0"),
    ("XE00INVALID!!", "bad length 13"),
    ("XE00" + "0" * 29, "bad length 33"),
    ("XE00" + "0" * 32, "bad length 36"),
    ("GB00" + "0" * 30, "country code must be 'XE', not 'GB'"),
    ("XEA0" + "0" * 30, "invalid check digit 'A' at position 2"),
    ("XE0" + "0" * 30 + "!", "invalid symbol '!' at position 33"),
    ("XE00ETHXREG-AVOFYORK", "invalid symbol '-' at position 11"),
    ("XE00" + "0" * 29 + "a", "invalid symbol 'a' at position 33"),
])
def test_scan_rejects(s, msg):
    with pytest.raises(StructuralMismatch, match=msg):
        scan(s)

def test_verify_checksum():
    assert verify("XE81ETHXREGGAVOFYORK") == INDIRECT
    with pytest.raises(ChecksumMismatch, match="residue 2, expected 1"):
        verify("XE82ETHXREGGAVOFYORK")
    assert verify("XE82ETHXREGGAVOFYORK", skip_checksum=True) == INDIRECT

def test_is_valid():
    assert is_valid("XE81ETHXREGGAVOFYORK")
    assert is_valid("XE7338O073KYGTWWZN0F2WZ0R8PX5ZPPZS")
    assert is_valid("xe73 38o0 73ky gtww zn0f 2wz0 r8px 5zpp zs")
    assert not is_valid("")
    assert not is_valid("XE00INVALID!!")
    assert not is_valid("XE7438O073KYGTWWZN0F2WZ0R8PX5ZPPZS")
    assert is_valid("XE7438O073KYGTWWZN0F2WZ0R8PX5ZPPZS", skip_checksum=True)

def test_single_substitution_detected():
    """
    Test that replacing any one payload symbol of a valid string with another
    symbol of the same class (digit or letter) is caught by the checksum
    """
    good = "XE7338O073KYGTWWZN0F2WZ0R8PX5ZPPZS"
    digits, letters = "0123456789", "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
    for pos in range(4, len(good)):
        for char in (digits if good[pos] in digits else letters):
            if char == good[pos]:
                continue
            bad = good[:pos] + char + good[pos + 1:]
            assert not is_valid(bad), bad

def test_mod97_bad_digit():
    with pytest.raises(ValueError, match="invalid decimal digit 'A' at position 2"):
        mod97("12A4")
