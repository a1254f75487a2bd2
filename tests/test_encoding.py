
import binascii

import pytest

from ndnkeychain.encoding import encode_var_number, decode_var_number
from ndnkeychain.encoding import encode_non_negative_integer, decode_non_negative_integer
from ndnkeychain.encoding import encode_tlv, read_tlv, parse_elements, decode_tlv, find_element
from ndnkeychain.errors import DecodingError


def test_var_number_sizes():
    assert encode_var_number(0) == b"\x00"
    assert encode_var_number(252) == b"\xfc"
    assert encode_var_number(253) == b"\xfd\x00\xfd"
    assert encode_var_number(0x10000) == b"\xfe\x00\x01\x00\x00"
    assert encode_var_number(0x100000000) == b"\xff\x00\x00\x00\x01\x00\x00\x00\x00"
    pytest.raises(ValueError, encode_var_number, -1)


def test_decode_var_number():
    assert decode_var_number(b"\x05") == (5, 1)
    assert decode_var_number(b"\x00\xfd\x01\x00", 1) == (256, 4)
    pytest.raises(DecodingError, decode_var_number, b"")
    pytest.raises(DecodingError, decode_var_number, b"\xfd\x01")


def test_non_negative_integer():
    assert encode_non_negative_integer(1) == b"\x01"
    assert encode_non_negative_integer(256) == b"\x01\x00"
    assert encode_non_negative_integer(0x10000) == b"\x00\x01\x00\x00"
    assert len(encode_non_negative_integer(1385423216000)) == 8
    assert decode_non_negative_integer(b"\x00\x00\x01\x42\x91\xa8\x9d\x80") == 1385423216000
    pytest.raises(DecodingError, decode_non_negative_integer, b"\x01\x02\x03")
    pytest.raises(ValueError, encode_non_negative_integer, -5)


def test_tlv():
    wire = encode_tlv(21, b"hello")
    assert wire == binascii.unhexlify("150568656c6c6f")
    assert read_tlv(wire) == (21, b"hello", 7)
    assert decode_tlv(wire, 21) == b"hello"


def test_decode_tlv_rejects_wrong_type_and_trailing_bytes():
    wire = encode_tlv(21, b"hello")
    pytest.raises(DecodingError, decode_tlv, wire, 22)
    pytest.raises(DecodingError, decode_tlv, wire + b"\x00", 21)


def test_truncated_element():
    pytest.raises(DecodingError, read_tlv, b"\x15\x05hel")


def test_parse_elements_and_find():
    buf = encode_tlv(129, b"key") + encode_tlv(130, b"cert")
    elements = parse_elements(buf)
    assert elements == [(129, b"key"), (130, b"cert")]
    assert find_element(elements, 130) == b"cert"
    assert find_element(elements, 128, required=False) is None
    pytest.raises(DecodingError, find_element, elements, 128)
