# Copyright 2026 The ndnkeychain developers
#
# This file is part of ndnkeychain.
#
# ndnkeychain is free software: you can redistribute it and/or modify
# it under the terms of version 3 of the GNU Lesser General Public
# License as published by the Free Software Foundation.
#
# ndnkeychain is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU Lesser General Public License for more details.
#
# You should have received a copy of the GNU Lesser General Public
# License along with ndnkeychain.  If not, see
# <http://www.gnu.org/licenses/>.
#

"""
A minimal NDN-TLV codec. Every element on the wire is a
type, a length and a value; type and length are variable
length numbers.
"""

import struct

from ndnkeychain.errors import DecodingError


# packet types
INTEREST = 5
DATA = 6
NAME = 7
GENERIC_NAME_COMPONENT = 8
NONCE = 10
INTEREST_LIFETIME = 12
META_INFO = 20
CONTENT = 21
SIGNATURE_INFO = 22
SIGNATURE_VALUE = 23
CONTENT_TYPE = 24
FRESHNESS_PERIOD = 25
SIGNATURE_TYPE = 27
KEY_LOCATOR = 28

# identity export package
IDENTITY_PACKAGE = 128
KEY_PACKAGE = 129
CERTIFICATE_PACKAGE = 130

# certificate content
SUBJECT_DESCRIPTION = 150
SUBJECT_OID = 151
SUBJECT_VALUE = 152
PUBLIC_KEY_INFO = 153
KEY_TYPE = 154
KEY_DER = 155
VALIDITY_PERIOD = 253
NOT_BEFORE = 254
NOT_AFTER = 255


def encode_var_number(number):
    """
    encode a TLV type or length as a 1, 3, 5 or 9 byte
    variable length number
    """
    if number < 0:
        raise ValueError("variable length numbers are never negative")
    if number < 253:
        return struct.pack("!B", number)
    if number <= 0xFFFF:
        return b"\xfd" + struct.pack("!H", number)
    if number <= 0xFFFFFFFF:
        return b"\xfe" + struct.pack("!I", number)
    return b"\xff" + struct.pack("!Q", number)


def decode_var_number(buf, offset=0):
    """
    returns a 2-tuple, the decoded number and the offset just past it
    """
    if offset >= len(buf):
        raise DecodingError("truncated variable length number")
    first = buf[offset]
    if first < 253:
        return first, offset + 1
    size, fmt = {253: (2, "!H"), 254: (4, "!I"), 255: (8, "!Q")}[first]
    end = offset + 1 + size
    if end > len(buf):
        raise DecodingError("truncated variable length number")
    return struct.unpack(fmt, buf[offset + 1:end])[0], end


def encode_non_negative_integer(number):
    if number < 0:
        raise ValueError("%d is negative" % number)
    if number <= 0xFF:
        return struct.pack("!B", number)
    if number <= 0xFFFF:
        return struct.pack("!H", number)
    if number <= 0xFFFFFFFF:
        return struct.pack("!I", number)
    return struct.pack("!Q", number)


def decode_non_negative_integer(value):
    fmt = {1: "!B", 2: "!H", 4: "!I", 8: "!Q"}.get(len(value))
    if fmt is None:
        raise DecodingError("invalid non-negative integer length %d" % len(value))
    return struct.unpack(fmt, bytes(value))[0]


def encode_tlv(tlv_type, value=b""):
    value = bytes(value)
    return encode_var_number(tlv_type) + encode_var_number(len(value)) + value


def read_tlv(buf, offset=0):
    """
    read one element starting at offset.

    :returns: a 3-tuple, the element type, its value and the
              offset of the next element.
    """
    tlv_type, offset = decode_var_number(buf, offset)
    length, offset = decode_var_number(buf, offset)
    end = offset + length
    if end > len(buf):
        raise DecodingError("element of type %d overruns its buffer" % tlv_type)
    return tlv_type, bytes(buf[offset:end]), end


def parse_elements(buf):
    """
    split a buffer of concatenated elements into a list
    of (type, value) tuples
    """
    elements = []
    offset = 0
    while offset < len(buf):
        tlv_type, value, offset = read_tlv(buf, offset)
        elements.append((tlv_type, value))
    return elements


def decode_tlv(buf, expected_type):
    """
    decode a buffer holding exactly one element of expected_type
    and return its value
    """
    tlv_type, value, end = read_tlv(buf)
    if tlv_type != expected_type:
        raise DecodingError("expected element type %d, got %d" % (expected_type, tlv_type))
    if end != len(buf):
        raise DecodingError("trailing bytes after element of type %d" % tlv_type)
    return value


def find_element(elements, tlv_type, required=True):
    """
    locate an element by type tag rather than by position
    """
    for element_type, value in elements:
        if element_type == tlv_type:
            return value
    if required:
        raise DecodingError("missing element of type %d" % tlv_type)
    return None
