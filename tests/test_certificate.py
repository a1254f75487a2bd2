
import pytest

from ndnkeychain.certificate import Certificate, PublicKey, SubjectDescription, KEY_NAME_OID
from ndnkeychain.certificate import get_key_name_from_certificate_prefix
from ndnkeychain.certificate import certificate_identity_prefix, certificate_name_to_public_key_name
from ndnkeychain.crypto_primitives import KEY_TYPE_RSA, SIGNATURE_SHA256_WITH_RSA
from ndnkeychain.errors import MalformedNameError, DecodingError
from ndnkeychain.name import Name
from ndnkeychain.packet import Data, Interest, Signature, CONTENT_TYPE_KEY


def test_key_name_from_certificate_prefix():
    prefix = Name.from_uri("/ndn/alice/KEY/ksk-123")
    assert get_key_name_from_certificate_prefix(prefix) == Name.from_uri("/ndn/alice/ksk-123")
    prefix = Name.from_uri("/ndn/KEY/alice/ksk-123")
    assert get_key_name_from_certificate_prefix(prefix) == Name.from_uri("/ndn/alice/ksk-123")


def test_key_name_from_malformed_certificate_prefix():
    pytest.raises(MalformedNameError, get_key_name_from_certificate_prefix, Name.from_uri("/ndn/alice/ksk-1"))
    pytest.raises(MalformedNameError, get_key_name_from_certificate_prefix, Name.from_uri("/ndn/alice/KEY"))
    pytest.raises(MalformedNameError, get_key_name_from_certificate_prefix, Name())


def test_certificate_name_helpers():
    name = Name.from_uri("/alice/KEY/ksk-1/ID-CERT").append_version(5)
    assert certificate_identity_prefix(name) == Name.from_uri("/alice/KEY/ksk-1")
    assert certificate_name_to_public_key_name(name) == Name.from_uri("/alice/ksk-1")
    pytest.raises(MalformedNameError, certificate_identity_prefix, Name.from_uri("/alice/KEY/ksk-1"))


def make_certificate():
    certificate = Certificate(
        name=Name.from_uri("/alice/KEY/ksk-1/ID-CERT").append_version(1),
        freshness_period=3600000,
        not_before=1000,
        not_after=2000,
        public_key=PublicKey(KEY_TYPE_RSA, b"\x30\x03\x02\x01\x01"),
    )
    certificate.add_subject_description(SubjectDescription(KEY_NAME_OID, "/alice/ksk-1"))
    certificate.add_subject_description(SubjectDescription("2.5.4.10", "Université"))
    certificate.encode()
    certificate.signature = Signature(SIGNATURE_SHA256_WITH_RSA, Name.from_uri("/alice/KEY/ksk-1"), b"\x01" * 16)
    return certificate


def test_certificate_encoding():
    certificate = make_certificate()
    assert certificate.content_type == CONTENT_TYPE_KEY
    assert certificate.public_key_name == Name.from_uri("/alice/ksk-1")

    decoded = Certificate.wire_decode(certificate.wire_encode())
    assert decoded.name == certificate.name
    assert decoded.not_before == 1000
    assert decoded.not_after == 2000
    assert decoded.public_key == certificate.public_key
    assert decoded.subject_descriptions == certificate.subject_descriptions
    assert decoded.signature == certificate.signature
    assert decoded.freshness_period == 3600000
    assert decoded.wire_encode() == certificate.wire_encode()


def test_certificate_from_plain_data():
    data = Data.wire_decode(make_certificate().wire_encode())
    certificate = Certificate.from_data(data)
    assert certificate.public_key.key_type == KEY_TYPE_RSA
    pytest.raises(DecodingError, Certificate.from_data, Data(Name.from_uri("/a"), content=b""))


def test_certificate_without_public_key():
    certificate = Certificate(name=Name.from_uri("/alice/KEY/ksk-1/ID-CERT"))
    pytest.raises(ValueError, certificate.encode)


def test_certificate_validity():
    certificate = make_certificate()
    assert certificate.is_too_early(999)
    assert not certificate.is_too_early(1000)
    assert certificate.is_too_late(2001)
    assert certificate.is_valid(1500)
    assert certificate.is_valid(2000)
    assert not certificate.is_valid(2001)
    # validity is checked against the current time by default
    assert certificate.is_too_late()


def test_public_key_digest():
    public_key = PublicKey(KEY_TYPE_RSA, b"abc")
    assert len(public_key.digest()) == 32
    pytest.raises(ValueError, PublicKey, "DSA", b"abc")


def test_data_encoding():
    data = Data(Name.from_uri("/alice/hello"), content=b"hello world", freshness_period=10)
    data.signature = Signature(SIGNATURE_SHA256_WITH_RSA, Name.from_uri("/alice/KEY/ksk-1"), b"\x02" * 8)
    wire = data.wire_encode()
    decoded = Data.wire_decode(wire)
    assert decoded == data
    assert wire.endswith(data.signature.value_wire())
    assert wire[2:].startswith(data.signed_portion())


def test_signature_without_key_locator():
    signature = Signature(SIGNATURE_SHA256_WITH_RSA)
    decoded = Signature.from_wire(signature.info_wire())
    assert decoded.key_locator == Name()
    assert decoded.value == b""


def test_interest_encoding():
    interest = Interest(Name.from_uri("/alice/ping"), lifetime=1000)
    assert len(interest.nonce) == 4
    decoded = Interest.wire_decode(interest.wire_encode())
    assert decoded == interest
    pytest.raises(ValueError, Interest, Name.from_uri("/a"), nonce=b"\x00")
    pytest.raises(DecodingError, Interest(Name.from_uri("/ping")).get_signature)
