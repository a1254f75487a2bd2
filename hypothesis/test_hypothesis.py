# -*- coding: utf-8 -*-

import pytest
from hypothesis import given, assume
from hypothesis.strategies import binary, lists, integers

from ndnkeychain import Name, DecodingError
from ndnkeychain.certificate import get_key_name_from_certificate_prefix
from ndnkeychain.certificate import certificate_identity_prefix, certificate_name_to_public_key_name
from ndnkeychain.encoding import encode_var_number, decode_var_number, parse_elements, encode_tlv
from ndnkeychain.name import version_component, component_to_version


components = lists(binary(max_size=16), max_size=6)


@given(components)
def test_hypothesis_name_uri_round_trip(values):
    name = Name(values)
    assert Name.from_uri(name.to_uri()) == name


@given(components)
def test_hypothesis_name_wire_round_trip(values):
    name = Name(values)
    assert Name.wire_decode(name.wire_encode()) == name


@given(
    lists(binary(max_size=8), max_size=4),
    lists(binary(max_size=8), min_size=1, max_size=4),
    integers(min_value=0, max_value=2 ** 63),
)
def test_hypothesis_key_name_from_certificate_prefix(identity, rest, version):
    assume(b"KEY" not in identity and b"KEY" not in rest)
    assume(b"ID-CERT" not in identity and b"ID-CERT" not in rest)
    key_name = Name(identity + rest)
    prefix = Name(identity).append("KEY").append(Name(rest))
    assert get_key_name_from_certificate_prefix(prefix) == key_name

    certificate_name = prefix.append("ID-CERT").append_version(version)
    assert certificate_identity_prefix(certificate_name) == prefix
    assert certificate_name_to_public_key_name(certificate_name) == key_name


@given(integers(min_value=0, max_value=2 ** 64 - 1))
def test_hypothesis_version_component(version):
    assert component_to_version(version_component(version)) == version


@given(integers(min_value=0, max_value=2 ** 64 - 1))
def test_hypothesis_var_number(number):
    wire = encode_var_number(number)
    assert decode_var_number(wire) == (number, len(wire))


@given(binary(min_size=1, max_size=64))
def test_hypothesis_parse_elements_never_crashes(buf):
    try:
        elements = parse_elements(buf)
    except DecodingError:
        return
    for tlv_type, value in elements:
        assert isinstance(tlv_type, int)
        assert isinstance(value, bytes)


@given(binary(max_size=32))
def test_hypothesis_truncated_element(value):
    wire = encode_tlv(21, value)
    pytest.raises(DecodingError, parse_elements, wire[:-1])
