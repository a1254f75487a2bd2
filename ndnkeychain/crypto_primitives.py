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
This module is used to parameterize the crypto primitives
used to generate keys, sign packets and wrap private keys
for export.
"""

from Cryptodome.Hash import SHA256
from Cryptodome.IO import PKCS8
from Cryptodome.PublicKey import RSA, ECC
from Cryptodome.Signature import pkcs1_15, DSS

from ndnkeychain.errors import AuthenticationError, UnsupportedKeyTypeError


KEY_TYPE_RSA = "RSA"
KEY_TYPE_ECDSA = "ECDSA"
KEY_TYPES = (KEY_TYPE_RSA, KEY_TYPE_ECDSA)

DEFAULT_KEY_SIZES = {
    KEY_TYPE_RSA: 2048,
    KEY_TYPE_ECDSA: 256,
}

# for now we support SHA256 only
DIGEST_ALGORITHM_SHA256 = "SHA256"
DIGEST_ALGORITHMS = (DIGEST_ALGORITHM_SHA256,)

# values of the SignatureType field
SIGNATURE_SHA256_WITH_RSA = 1
SIGNATURE_SHA256_WITH_ECDSA = 3

PKCS8_PROTECTION = "PBKDF2WithHMAC-SHA1AndAES256-CBC"

RSA_ENCRYPTION_OID = "1.2.840.113549.1.1.1"
EC_PUBLIC_KEY_OID = "1.2.840.10045.2.1"


def _password_bytes(password):
    if not password:
        raise AuthenticationError("a password is required")
    if isinstance(password, bytes):
        return password
    return password.encode("utf-8")


def _digest(data, digest_algorithm):
    if digest_algorithm != DIGEST_ALGORITHM_SHA256:
        raise ValueError("unsupported digest algorithm %s" % digest_algorithm)
    return SHA256.new(bytes(data))


class RSAScheme:
    "SHA256 with RSA, PKCS#1 v1.5 padding"
    key_type = KEY_TYPE_RSA
    signature_type = SIGNATURE_SHA256_WITH_RSA
    oid = RSA_ENCRYPTION_OID

    def generate(self, key_size):
        if key_size < 1024:
            raise ValueError("RSA keys must be at least 1024 bits")
        return RSA.generate(key_size)

    def public_key_der(self, private_key):
        return private_key.publickey().export_key(format="DER")

    def private_key_der(self, private_key):
        return private_key.export_key(format="DER", pkcs=8)

    def import_key(self, encoded, passphrase=None):
        return RSA.import_key(encoded, passphrase)

    def export_encrypted(self, private_key, passphrase, protection):
        return private_key.export_key(format="DER", passphrase=passphrase,
                                      pkcs=8, protection=protection)

    def sign(self, private_key, digest):
        return pkcs1_15.new(private_key).sign(digest)

    def verify(self, public_key, digest, signature_value):
        try:
            pkcs1_15.new(public_key).verify(digest, signature_value)
        except (ValueError, TypeError):
            return False
        return True


class ECDSAScheme:
    "SHA256 with ECDSA over the NIST curves, DER encoded signatures"
    key_type = KEY_TYPE_ECDSA
    signature_type = SIGNATURE_SHA256_WITH_ECDSA
    oid = EC_PUBLIC_KEY_OID
    curves = {256: "P-256", 384: "P-384"}

    def generate(self, key_size):
        if key_size not in self.curves:
            raise ValueError("no ECDSA curve of size %d" % key_size)
        return ECC.generate(curve=self.curves[key_size])

    def public_key_der(self, private_key):
        return private_key.public_key().export_key(format="DER")

    def private_key_der(self, private_key):
        return private_key.export_key(format="DER", use_pkcs8=True)

    def import_key(self, encoded, passphrase=None):
        return ECC.import_key(encoded, passphrase)

    def export_encrypted(self, private_key, passphrase, protection):
        return private_key.export_key(format="DER", passphrase=passphrase,
                                      use_pkcs8=True, protection=protection)

    def sign(self, private_key, digest):
        # deterministic signatures, see RFC 6979
        return DSS.new(private_key, "deterministic-rfc6979", encoding="der").sign(digest)

    def verify(self, public_key, digest, signature_value):
        try:
            DSS.new(public_key, "fips-186-3", encoding="der").verify(digest, signature_value)
        except (ValueError, TypeError):
            return False
        return True


SCHEMES = {
    KEY_TYPE_RSA: RSAScheme(),
    KEY_TYPE_ECDSA: ECDSAScheme(),
}


def get_scheme(key_type):
    try:
        return SCHEMES[key_type]
    except KeyError:
        raise UnsupportedKeyTypeError("unsupported key type %r" % (key_type,))


def key_type_of(key):
    if isinstance(key, RSA.RsaKey):
        return KEY_TYPE_RSA
    if isinstance(key, ECC.EccKey):
        return KEY_TYPE_ECDSA
    raise UnsupportedKeyTypeError("unsupported key object %r" % (key,))


def signature_type_for(key_type):
    return get_scheme(key_type).signature_type


def generate_private_key(key_type, key_size):
    return get_scheme(key_type).generate(key_size)


def public_key_der(private_key):
    """
    the SubjectPublicKeyInfo DER encoding of the public half
    """
    return get_scheme(key_type_of(private_key)).public_key_der(private_key)


def private_key_to_der(private_key):
    """
    the unencrypted PKCS#8 DER encoding of a private key
    """
    return get_scheme(key_type_of(private_key)).private_key_der(private_key)


def _scheme_for_oid(oid):
    for scheme in SCHEMES.values():
        if scheme.oid == oid:
            return scheme
    raise UnsupportedKeyTypeError("unsupported private key algorithm %s" % oid)


def private_key_from_der(der):
    """
    parse an unencrypted PKCS#8 DER private key.

    :returns: a 2-tuple, the key type and the private key.
    """
    scheme = _scheme_for_oid(PKCS8.unwrap(bytes(der))[0])
    return scheme.key_type, scheme.import_key(bytes(der))


def sign(private_key, data, digest_algorithm=DIGEST_ALGORITHM_SHA256):
    scheme = get_scheme(key_type_of(private_key))
    return scheme.sign(private_key, _digest(data, digest_algorithm))


def verify_signature(key_type, key_der, data, signature_value,
                     digest_algorithm=DIGEST_ALGORITHM_SHA256):
    """
    verify signature_value over data with a DER encoded public key.
    returns True if the signature is valid, otherwise False.
    """
    scheme = get_scheme(key_type)
    public_key = scheme.import_key(key_der)
    return scheme.verify(public_key, _digest(data, digest_algorithm), signature_value)


def export_pkcs8(private_key, password, protection=PKCS8_PROTECTION):
    """
    wrap a private key as a password encrypted PKCS#8
    EncryptedPrivateKeyInfo DER blob
    """
    passphrase = _password_bytes(password)
    scheme = get_scheme(key_type_of(private_key))
    return scheme.export_encrypted(private_key, passphrase, protection)


def import_pkcs8(blob, password):
    """
    unwrap a password encrypted PKCS#8 blob.

    :returns: a 2-tuple, the key type and the private key.
    :raises AuthenticationError: if the password does not decrypt the blob.
    """
    passphrase = _password_bytes(password)
    try:
        oid = PKCS8.unwrap(bytes(blob), passphrase)[0]
    except (ValueError, IndexError, TypeError) as e:
        raise AuthenticationError("cannot decrypt private key: %s" % e)
    scheme = _scheme_for_oid(oid)
    return scheme.key_type, scheme.import_key(bytes(blob), passphrase)
