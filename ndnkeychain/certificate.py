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
Identity certificates and the naming conventions binding them to keys:

  key name:          /<identity>/<key id>
  certificate name:  /<identity>/KEY/<key id>/ID-CERT/<version>
"""

import attr
from Cryptodome.Hash import SHA256

from ndnkeychain.common import now_milliseconds
from ndnkeychain.crypto_primitives import KEY_TYPES
from ndnkeychain.encoding import VALIDITY_PERIOD, NOT_BEFORE, NOT_AFTER
from ndnkeychain.encoding import SUBJECT_DESCRIPTION, SUBJECT_OID, SUBJECT_VALUE
from ndnkeychain.encoding import PUBLIC_KEY_INFO, KEY_TYPE, KEY_DER
from ndnkeychain.encoding import encode_tlv, parse_elements, find_element
from ndnkeychain.encoding import encode_non_negative_integer, decode_non_negative_integer
from ndnkeychain.errors import DecodingError, MalformedNameError
from ndnkeychain.packet import Data, CONTENT_TYPE_KEY


KEY_MARKER = b"KEY"
ID_CERT_MARKER = b"ID-CERT"

# attribute type "name", binds a certificate to its key name
KEY_NAME_OID = "2.5.4.41"


def get_key_name_from_certificate_prefix(certificate_prefix):
    """
    Remove the KEY marker component from a certificate prefix;
    what precedes and what follows it form the key name.
    """
    index = certificate_prefix.find(KEY_MARKER)
    if index < 0:
        raise MalformedNameError(
            "certificate prefix %s does not have a KEY component" % certificate_prefix)
    if index == len(certificate_prefix) - 1:
        raise MalformedNameError(
            "certificate prefix %s ends with its KEY component" % certificate_prefix)
    return certificate_prefix.get_prefix(index).append(certificate_prefix.get_sub_name(index + 1))


def certificate_identity_prefix(certificate_name):
    """
    the certificate name without its trailing ID-CERT/<version>,
    which is what signatures by this certificate put in their
    key locator
    """
    index = certificate_name.rfind(ID_CERT_MARKER)
    if index < 0:
        raise MalformedNameError(
            "certificate name %s does not have an ID-CERT component" % certificate_name)
    return certificate_name.get_prefix(index)


def certificate_name_to_public_key_name(certificate_name):
    return get_key_name_from_certificate_prefix(certificate_identity_prefix(certificate_name))


@attr.s(frozen=True)
class PublicKey(object):
    """
    The public projection of a key: its type and its
    SubjectPublicKeyInfo DER encoding.
    """
    key_type = attr.ib(validator=attr.validators.in_(KEY_TYPES))
    key_der = attr.ib(validator=attr.validators.instance_of(bytes))

    def digest(self):
        return SHA256.new(self.key_der).digest()

    def wire_encode(self):
        return encode_tlv(PUBLIC_KEY_INFO,
                          encode_tlv(KEY_TYPE, self.key_type.encode("ascii")) +
                          encode_tlv(KEY_DER, self.key_der))

    @classmethod
    def from_wire_value(cls, value):
        elements = parse_elements(value)
        key_type = find_element(elements, KEY_TYPE).decode("ascii")
        if key_type not in KEY_TYPES:
            raise DecodingError("unknown key type %r" % key_type)
        return cls(key_type, find_element(elements, KEY_DER))


@attr.s(frozen=True)
class SubjectDescription(object):
    oid = attr.ib(validator=attr.validators.instance_of(str))
    value = attr.ib(validator=attr.validators.instance_of(str))

    def wire_encode(self):
        return encode_tlv(SUBJECT_DESCRIPTION,
                          encode_tlv(SUBJECT_OID, self.oid.encode("ascii")) +
                          encode_tlv(SUBJECT_VALUE, self.value.encode("utf-8")))

    @classmethod
    def from_wire_value(cls, value):
        elements = parse_elements(value)
        return cls(find_element(elements, SUBJECT_OID).decode("ascii"),
                   find_element(elements, SUBJECT_VALUE).decode("utf-8"))


@attr.s
class Certificate(Data):
    """
    I am a Data packet whose content binds a public key to a key
    name for a validity window. Call encode() after changing any
    of the certificate fields so the content reflects them.
    """
    not_before = attr.ib(default=0, validator=attr.validators.instance_of(int))
    not_after = attr.ib(default=0, validator=attr.validators.instance_of(int))
    public_key = attr.ib(default=None, validator=attr.validators.optional(attr.validators.instance_of(PublicKey)))
    subject_descriptions = attr.ib(default=attr.Factory(list))

    @property
    def public_key_name(self):
        return certificate_name_to_public_key_name(self.name)

    def add_subject_description(self, description):
        self.subject_descriptions.append(description)

    def encode(self):
        if self.public_key is None:
            raise ValueError("certificate %s has no public key" % self.name)
        validity = encode_tlv(VALIDITY_PERIOD,
                              encode_tlv(NOT_BEFORE, encode_non_negative_integer(self.not_before)) +
                              encode_tlv(NOT_AFTER, encode_non_negative_integer(self.not_after)))
        self.content = b"".join(
            [validity] +
            [description.wire_encode() for description in self.subject_descriptions] +
            [self.public_key.wire_encode()]
        )
        self.content_type = CONTENT_TYPE_KEY

    def is_too_early(self, now=None):
        if now is None:
            now = now_milliseconds()
        return now < self.not_before

    def is_too_late(self, now=None):
        if now is None:
            now = now_milliseconds()
        return now > self.not_after

    def is_valid(self, now=None):
        if now is None:
            now = now_milliseconds()
        return not self.is_too_early(now) and not self.is_too_late(now)

    @classmethod
    def from_data(cls, data):
        """
        Create a Certificate from a Data packet by parsing its content.
        """
        elements = parse_elements(data.content)
        validity = parse_elements(find_element(elements, VALIDITY_PERIOD))
        return cls(
            name=data.name,
            content=data.content,
            content_type=data.content_type,
            freshness_period=data.freshness_period,
            signature=data.signature,
            not_before=decode_non_negative_integer(find_element(validity, NOT_BEFORE)),
            not_after=decode_non_negative_integer(find_element(validity, NOT_AFTER)),
            public_key=PublicKey.from_wire_value(find_element(elements, PUBLIC_KEY_INFO)),
            subject_descriptions=[SubjectDescription.from_wire_value(value)
                                  for tlv_type, value in elements
                                  if tlv_type == SUBJECT_DESCRIPTION],
        )

    @classmethod
    def wire_decode(cls, wire):
        return cls.from_data(Data.wire_decode(wire))
