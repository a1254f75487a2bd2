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

import string

import attr

from ndnkeychain.common import now_milliseconds
from ndnkeychain.encoding import NAME, GENERIC_NAME_COMPONENT
from ndnkeychain.encoding import encode_tlv, decode_tlv, parse_elements
from ndnkeychain.encoding import encode_non_negative_integer, decode_non_negative_integer
from ndnkeychain.errors import DecodingError


VERSION_MARKER = 0xFD

_UNRESERVED = frozenset(
    b"ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-._~"
)


def to_component(value):
    """
    coerce bytes or text into a name component
    """
    if isinstance(value, bytes):
        return value
    if isinstance(value, bytearray):
        return bytes(value)
    if isinstance(value, str):
        return value.encode("utf-8")
    raise TypeError("cannot make a name component from %r" % (value,))


def _to_components(values):
    if isinstance(values, (str, bytes)):
        raise TypeError("use Name.from_uri to parse a name from a string")
    return tuple(to_component(value) for value in values)


def escape_component(component):
    # a component made only of periods gets three extra periods
    if all(c == 0x2E for c in component):
        return "..." + "." * len(component)
    return "".join(chr(c) if c in _UNRESERVED else "%%%02X" % c for c in component)


def unescape_component(text):
    out = bytearray()
    i = 0
    while i < len(text):
        hex_digits = text[i + 1:i + 3]
        if text[i] == "%" and len(hex_digits) == 2 and all(c in string.hexdigits for c in hex_digits):
            out.append(int(hex_digits, 16))
            i += 3
            continue
        out.extend(text[i].encode("utf-8"))
        i += 1
    component = bytes(out)
    if component and all(c == 0x2E for c in component):
        if len(component) < 3:
            raise ValueError("illegal name component %r" % text)
        return component[3:]
    return component


def version_component(version):
    return bytes(bytearray([VERSION_MARKER])) + encode_non_negative_integer(version)


def component_to_version(component):
    if len(component) < 2 or component[0] != VERSION_MARKER:
        raise ValueError("component is not a version")
    return decode_non_negative_integer(component[1:])


@attr.s(frozen=True, repr=False)
class Name(object):
    """
    I am an immutable hierarchical name, an ordered sequence
    of opaque binary components.
    """
    components = attr.ib(default=(), converter=_to_components)

    @classmethod
    def from_uri(cls, uri):
        if uri.startswith("ndn:"):
            uri = uri[4:]
        uri = uri.strip()
        if uri.startswith("//"):
            # skip the authority section
            slash = uri.find("/", 2)
            uri = uri[slash:] if slash >= 0 else "/"
        return cls(unescape_component(part) for part in uri.split("/") if part)

    def to_uri(self):
        if not self.components:
            return "/"
        return "".join("/" + escape_component(c) for c in self.components)

    def __str__(self):
        return self.to_uri()

    def __repr__(self):
        return "Name(%r)" % self.to_uri()

    def __len__(self):
        return len(self.components)

    def __iter__(self):
        return iter(self.components)

    def __getitem__(self, index):
        if isinstance(index, slice):
            return Name(self.components[index])
        return self.components[index]

    def get(self, index):
        return self.components[index]

    def append(self, value):
        """
        return a new name with value appended; value is a
        component (bytes or text) or a Name to concatenate
        """
        if isinstance(value, Name):
            return Name(self.components + value.components)
        return Name(self.components + (to_component(value),))

    def append_version(self, version=None):
        if version is None:
            version = now_milliseconds()
        return self.append(version_component(version))

    def get_prefix(self, n):
        """
        the first n components, or all but the last -n
        components when n is negative
        """
        if n < 0:
            n = max(len(self.components) + n, 0)
        return Name(self.components[:n])

    def get_sub_name(self, start, count=None):
        if start < 0:
            start = max(len(self.components) + start, 0)
        if count is None:
            return Name(self.components[start:])
        return Name(self.components[start:start + count])

    def is_prefix_of(self, other):
        return self.components == other.components[:len(self.components)]

    def find(self, component):
        component = to_component(component)
        for i, c in enumerate(self.components):
            if c == component:
                return i
        return -1

    def rfind(self, component):
        component = to_component(component)
        for i in range(len(self.components) - 1, -1, -1):
            if self.components[i] == component:
                return i
        return -1

    def wire_encode_value(self):
        """
        the concatenated component elements without the outer
        Name type and length
        """
        return b"".join(encode_tlv(GENERIC_NAME_COMPONENT, c) for c in self.components)

    def wire_encode(self):
        return encode_tlv(NAME, self.wire_encode_value())

    @classmethod
    def from_wire_value(cls, value):
        components = []
        for tlv_type, component in parse_elements(value):
            if tlv_type != GENERIC_NAME_COMPONENT:
                raise DecodingError("unexpected name component type %d" % tlv_type)
            components.append(component)
        return cls(components)

    @classmethod
    def wire_decode(cls, wire):
        return cls.from_wire_value(decode_tlv(wire, NAME))
