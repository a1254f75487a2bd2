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
The packets a key chain signs: Data, Interest and the
Signature carried by both.
"""

import attr
from Cryptodome.Random import get_random_bytes

from ndnkeychain.crypto_primitives import SIGNATURE_SHA256_WITH_RSA
from ndnkeychain.encoding import DATA, INTEREST, NAME, META_INFO, CONTENT, CONTENT_TYPE
from ndnkeychain.encoding import FRESHNESS_PERIOD, SIGNATURE_INFO, SIGNATURE_VALUE
from ndnkeychain.encoding import SIGNATURE_TYPE, KEY_LOCATOR, NONCE, INTEREST_LIFETIME
from ndnkeychain.encoding import encode_tlv, decode_tlv, parse_elements, find_element
from ndnkeychain.encoding import encode_non_negative_integer, decode_non_negative_integer
from ndnkeychain.errors import DecodingError
from ndnkeychain.name import Name


CONTENT_TYPE_BLOB = 0
CONTENT_TYPE_KEY = 2

DEFAULT_INTEREST_LIFETIME = 4000


def is_4bytes(instance, attribute, value):
    """
    validator for a 4 byte value
    """
    if not isinstance(value, bytes) or len(value) != 4:
        raise ValueError("must be 4 byte value")


@attr.s(frozen=True)
class Signature(object):
    """
    The signature type and key locator form the SignatureInfo;
    the value is filled in once the signed portion is known.
    """
    signature_type = attr.ib(default=SIGNATURE_SHA256_WITH_RSA, validator=attr.validators.instance_of(int))
    key_locator = attr.ib(default=attr.Factory(Name), validator=attr.validators.instance_of(Name))
    value = attr.ib(default=b"", validator=attr.validators.instance_of(bytes))

    def info_wire(self):
        value = encode_tlv(SIGNATURE_TYPE, encode_non_negative_integer(self.signature_type))
        if self.key_locator:
            value += encode_tlv(KEY_LOCATOR, self.key_locator.wire_encode())
        return encode_tlv(SIGNATURE_INFO, value)

    def value_wire(self):
        return encode_tlv(SIGNATURE_VALUE, self.value)

    @classmethod
    def from_wire(cls, info_wire, value_wire=None):
        """
        Create a Signature given the SignatureInfo element and
        optionally the SignatureValue element.
        """
        elements = parse_elements(decode_tlv(info_wire, SIGNATURE_INFO))
        signature_type = decode_non_negative_integer(find_element(elements, SIGNATURE_TYPE))
        key_locator = Name()
        locator = find_element(elements, KEY_LOCATOR, required=False)
        if locator is not None:
            key_locator = Name.wire_decode(locator)
        value = b""
        if value_wire is not None:
            value = decode_tlv(value_wire, SIGNATURE_VALUE)
        return cls(signature_type, key_locator, value)


@attr.s
class Data(object):
    """
    I am a named, signed piece of content.
    """
    name = attr.ib(validator=attr.validators.instance_of(Name))
    content = attr.ib(default=b"", validator=attr.validators.instance_of(bytes))
    content_type = attr.ib(default=CONTENT_TYPE_BLOB, validator=attr.validators.instance_of(int))
    freshness_period = attr.ib(default=None, validator=attr.validators.optional(attr.validators.instance_of(int)))
    signature = attr.ib(default=attr.Factory(Signature), validator=attr.validators.instance_of(Signature))

    def _meta_info_wire(self):
        value = b""
        if self.content_type != CONTENT_TYPE_BLOB:
            value += encode_tlv(CONTENT_TYPE, encode_non_negative_integer(self.content_type))
        if self.freshness_period is not None:
            value += encode_tlv(FRESHNESS_PERIOD, encode_non_negative_integer(self.freshness_period))
        return encode_tlv(META_INFO, value)

    def signed_portion(self):
        """
        Get the bytes covered by the signature: every element
        except the SignatureValue.
        """
        return b"".join((self.name.wire_encode(),
                         self._meta_info_wire(),
                         encode_tlv(CONTENT, self.content),
                         self.signature.info_wire()))

    def wire_encode(self):
        return encode_tlv(DATA, self.signed_portion() + self.signature.value_wire())

    @classmethod
    def wire_decode(cls, wire):
        elements = parse_elements(decode_tlv(wire, DATA))
        if not elements or elements[0][0] != NAME:
            raise DecodingError("Data must start with a Name")
        content_type = CONTENT_TYPE_BLOB
        freshness_period = None
        meta_info = find_element(elements, META_INFO, required=False)
        if meta_info is not None:
            meta = parse_elements(meta_info)
            value = find_element(meta, CONTENT_TYPE, required=False)
            if value is not None:
                content_type = decode_non_negative_integer(value)
            value = find_element(meta, FRESHNESS_PERIOD, required=False)
            if value is not None:
                freshness_period = decode_non_negative_integer(value)
        signature = Signature.from_wire(
            encode_tlv(SIGNATURE_INFO, find_element(elements, SIGNATURE_INFO)),
            encode_tlv(SIGNATURE_VALUE, find_element(elements, SIGNATURE_VALUE)),
        )
        return cls(
            name=Name.from_wire_value(elements[0][1]),
            content=find_element(elements, CONTENT, required=False) or b"",
            content_type=content_type,
            freshness_period=freshness_period,
            signature=signature,
        )


@attr.s
class Interest(object):
    """
    I am a request for named data. A signed interest carries its
    SignatureInfo and SignatureValue elements as the last two
    components of its name.
    """
    name = attr.ib(validator=attr.validators.instance_of(Name))
    lifetime = attr.ib(default=DEFAULT_INTEREST_LIFETIME, validator=attr.validators.instance_of(int))
    nonce = attr.ib(default=attr.Factory(lambda: get_random_bytes(4)), validator=is_4bytes)

    def wire_encode(self):
        return encode_tlv(INTEREST, b"".join((
            self.name.wire_encode(),
            encode_tlv(NONCE, self.nonce),
            encode_tlv(INTEREST_LIFETIME, encode_non_negative_integer(self.lifetime)),
        )))

    @classmethod
    def wire_decode(cls, wire):
        elements = parse_elements(decode_tlv(wire, INTEREST))
        lifetime = find_element(elements, INTEREST_LIFETIME, required=False)
        return cls(
            name=Name.from_wire_value(find_element(elements, NAME)),
            lifetime=DEFAULT_INTEREST_LIFETIME if lifetime is None else decode_non_negative_integer(lifetime),
            nonce=find_element(elements, NONCE),
        )

    def signed_portion(self):
        """
        the encoded name up to and including the SignatureInfo component
        """
        if len(self.name) < 2:
            raise DecodingError("interest %s is not signed" % self.name)
        return self.name.get_prefix(-1).wire_encode_value()

    def get_signature(self):
        """
        parse the Signature out of a signed interest name
        """
        if len(self.name) < 2:
            raise DecodingError("interest %s is not signed" % self.name)
        return Signature.from_wire(self.name[-2], self.name[-1])
