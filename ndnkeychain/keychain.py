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
The key chain: identity, key and certificate management on top of
a metadata store holding public information and a key storage
holding private keys.

Every identity has a default chain, identity -> default key ->
default certificate, which is used whenever the caller does not
name a signing certificate. Nothing which belongs to the default
identity can be deleted.

Deletion cascades are sequences of independent steps and are not
atomic: if a step fails, the records removed by the earlier steps
stay removed. Default pointers at removed records read as unset,
so a partially deleted identity never leaves a dangling default.
"""

import logging

import attr

from ndnkeychain.certificate import Certificate, SubjectDescription
from ndnkeychain.certificate import KEY_MARKER, ID_CERT_MARKER, KEY_NAME_OID
from ndnkeychain.certificate import get_key_name_from_certificate_prefix
from ndnkeychain.certificate import certificate_identity_prefix, certificate_name_to_public_key_name
from ndnkeychain.common import KEY_CLASS_PRIVATE, now_milliseconds
from ndnkeychain.crypto_primitives import KEY_TYPE_RSA, KEY_TYPE_ECDSA, signature_type_for
from ndnkeychain.crypto_primitives import import_pkcs8
from ndnkeychain.encoding import IDENTITY_PACKAGE, KEY_PACKAGE, CERTIFICATE_PACKAGE
from ndnkeychain.encoding import encode_tlv, decode_tlv, parse_elements, find_element
from ndnkeychain.errors import AuthenticationError, MalformedNameError, NotFoundError, NoDefaultCertificateError
from ndnkeychain.interfaces import IMetadataStore, IKeyStorage
from ndnkeychain.name import Name
from ndnkeychain.packet import Data, Interest, Signature
from ndnkeychain.params import KeyChainParams


log = logging.getLogger(__name__)

KSK_PREFIX = "ksk-"
DSK_PREFIX = "dsk-"


class KeyChain:
    """
    I manage identities, keys and certificates and sign
    packets with them.
    """

    def __init__(self, metadata_store, key_storage, params=None):
        """
        :param metadata_store: An IMetadataStore provider.

        :param key_storage: An IKeyStorage provider.

        :param KeyChainParams params: policy parameters, the
            defaults are used if omitted.
        """
        assert IMetadataStore.providedBy(metadata_store)
        assert IKeyStorage.providedBy(key_storage)
        if params is None:
            params = KeyChainParams()
        self.metadata_store = metadata_store
        self.key_storage = key_storage
        self.params = params
        self._last_version = 0
        self._last_key_id = 0

    def unlock(self, password):
        self.key_storage.unlock(password)

    def _next_version(self):
        # strictly increasing even within one millisecond
        self._last_version = max(now_milliseconds(), self._last_version + 1)
        return self._last_version

    def _new_key_name(self, identity_name, is_ksk):
        prefix = KSK_PREFIX if is_ksk else DSK_PREFIX
        while True:
            self._last_key_id = max(now_milliseconds(), self._last_key_id + 1)
            key_name = identity_name.append(prefix + str(self._last_key_id))
            if not (self.metadata_store.does_public_key_exist(key_name) or
                    self.key_storage.does_key_exist(key_name, KEY_CLASS_PRIVATE)):
                return key_name

    # identities and keys

    def create_identity(self, identity_name):
        """
        Make sure identity_name exists and has a default key with a
        default certificate, creating whatever is missing. Calling
        me again returns the same certificate name.

        :returns: the name of the identity's default certificate.
        """
        if not identity_name:
            raise MalformedNameError("identity name must not be empty")
        store = self.metadata_store
        if not store.does_identity_exist(identity_name):
            log.info("creating identity %s", identity_name)
            store.add_identity(identity_name)

        key_name = store.get_default_key_name_for_identity(identity_name)
        if not key_name:
            key_name = self.generate_key_pair_as_default(identity_name, is_ksk=True)

        certificate_name = store.get_default_certificate_name_for_key(key_name)
        if not certificate_name:
            certificate = self.self_sign(key_name)
            self.add_certificate_as_identity_default(certificate)
            certificate_name = certificate.name
        return certificate_name

    def generate_key_pair(self, identity_name, is_ksk=False, key_type=None, key_size=None):
        """
        Generate a key pair for identity_name under a fresh key name
        and register its public key. No default pointer changes.

        :returns: the key name.
        """
        if key_type is None:
            key_type = self.params.default_key_type
        if key_size is None:
            key_size = self.params.key_size_for(key_type)
        key_name = self._new_key_name(identity_name, is_ksk)
        self.key_storage.generate_key_pair(key_name, key_type, key_size)
        public_key = self.key_storage.get_public_key(key_name)
        self.metadata_store.add_public_key(key_name, public_key)
        log.debug("generated %s key %s", key_type, key_name)
        return key_name

    def generate_key_pair_as_default(self, identity_name, is_ksk=False, key_type=None, key_size=None):
        key_name = self.generate_key_pair(identity_name, is_ksk, key_type, key_size)
        self.metadata_store.set_default_key_name_for_identity(key_name, identity_name)
        return key_name

    def generate_rsa_key_pair(self, identity_name, is_ksk=False, key_size=None):
        return self.generate_key_pair(identity_name, is_ksk, KEY_TYPE_RSA, key_size)

    def generate_rsa_key_pair_as_default(self, identity_name, is_ksk=False, key_size=None):
        return self.generate_key_pair_as_default(identity_name, is_ksk, KEY_TYPE_RSA, key_size)

    def generate_ecdsa_key_pair(self, identity_name, is_ksk=False, key_size=None):
        return self.generate_key_pair(identity_name, is_ksk, KEY_TYPE_ECDSA, key_size)

    def generate_ecdsa_key_pair_as_default(self, identity_name, is_ksk=False, key_size=None):
        return self.generate_key_pair_as_default(identity_name, is_ksk, KEY_TYPE_ECDSA, key_size)

    # certificates

    def _new_certificate(self, certificate_name, key_name, public_key, not_before, not_after,
                         subject_descriptions=()):
        certificate = Certificate(
            name=certificate_name,
            freshness_period=self.params.certificate_freshness,
            not_before=not_before,
            not_after=not_after,
            public_key=public_key,
        )
        certificate.add_subject_description(SubjectDescription(KEY_NAME_OID, key_name.to_uri()))
        for description in subject_descriptions:
            certificate.add_subject_description(description)
        certificate.encode()
        return certificate

    def create_identity_certificate(self, certificate_prefix, signer_certificate_name,
                                    not_before, not_after, public_key=None, subject_descriptions=()):
        """
        Create a certificate for the key named by certificate_prefix,
        /<identity>/KEY/<key id>, signed with the certificate named
        signer_certificate_name.

        If public_key is omitted the registered public key of the key
        is certified. The certificate is registered when its key is
        registered.
        """
        key_name = get_key_name_from_certificate_prefix(certificate_prefix)
        if public_key is None:
            public_key = self.metadata_store.get_public_key(key_name)
        certificate_name = certificate_prefix.append(ID_CERT_MARKER).append_version(self._next_version())
        certificate = self._new_certificate(certificate_name, key_name, public_key,
                                            not_before, not_after, subject_descriptions)
        self.sign(certificate, signer_certificate_name)
        if self.metadata_store.does_public_key_exist(key_name):
            self.metadata_store.add_certificate(certificate)
        return certificate

    def self_sign(self, key_name, not_before=None, not_after=None):
        """
        Create a certificate for key_name signed by the key itself.
        The certificate is not registered.
        """
        if not key_name:
            raise MalformedNameError("key name must not be empty")
        public_key = self.metadata_store.get_public_key(key_name)
        if not_before is None:
            not_before = now_milliseconds()
        if not_after is None:
            not_after = not_before + self.params.self_signed_validity
        certificate_name = (key_name.get_prefix(-1)
                            .append(KEY_MARKER)
                            .append(key_name[-1])
                            .append(ID_CERT_MARKER)
                            .append_version(self._next_version()))
        certificate = self._new_certificate(certificate_name, key_name, public_key, not_before, not_after)
        self.self_sign_certificate(certificate)
        return certificate

    def self_sign_certificate(self, certificate):
        """
        sign certificate with the private key it certifies
        """
        return self._sign_with_certificate(certificate, certificate)

    def issue_certificate(self, request, subject_name, signing_identity=None,
                          not_before=None, not_after=None, subject_info=()):
        """
        Issue a certificate for the public key of a certificate
        request, which is a self-signed certificate.

        :param Certificate request: the certificate request.

        :param str subject_name: the subject name recorded in the
            certificate.

        :param Name signing_identity: the identity whose default
            certificate signs the new certificate; it must be a proper
            prefix of the requested key name. The new certificate is
            self-signed if omitted.

        :param subject_info: (oid, value) pairs recorded after the
            subject name.

        :returns: the new, unregistered, Certificate.
        """
        if not_before is None:
            not_before = now_milliseconds()
        if not_after is None:
            not_after = not_before + self.params.issued_validity
        if not_after < not_before:
            raise ValueError("not_before is later than not_after")

        key_name = request.public_key_name
        if signing_identity is None:
            certificate_prefix = key_name.get_prefix(-1).append(KEY_MARKER).append(key_name[-1])
        else:
            if not (signing_identity.is_prefix_of(key_name) and len(signing_identity) < len(key_name)):
                raise MalformedNameError(
                    "signing identity %s is not a prefix of key %s" % (signing_identity, key_name))
            count = len(signing_identity)
            certificate_prefix = (key_name.get_prefix(count)
                                  .append(KEY_MARKER)
                                  .append(key_name.get_sub_name(count)))
        certificate_name = certificate_prefix.append(ID_CERT_MARKER).append_version(self._next_version())

        certificate = Certificate(
            name=certificate_name,
            freshness_period=self.params.certificate_freshness,
            not_before=not_before,
            not_after=not_after,
            public_key=request.public_key,
        )
        certificate.add_subject_description(SubjectDescription(KEY_NAME_OID, subject_name))
        for oid, value in subject_info:
            certificate.add_subject_description(SubjectDescription(oid, value))
        certificate.encode()

        if signing_identity is None:
            self.self_sign_certificate(certificate)
        else:
            signer_certificate_name = self.get_default_certificate_name_for_identity(signing_identity)
            if not signer_certificate_name:
                raise NotFoundError("identity %s has no default certificate" % signing_identity)
            self.sign(certificate, signer_certificate_name)
        log.info("issued certificate %s", certificate.name)
        return certificate

    # signing

    def _default_signing_certificate(self):
        certificate = self.metadata_store.get_default_certificate()
        if certificate is None:
            certificate = self.metadata_store.refresh_default_certificate()
            if certificate is None:
                raise NoDefaultCertificateError("default certificate cannot be determined")
        return certificate

    def _sign_with_certificate(self, target, certificate):
        signature = Signature(
            signature_type=signature_type_for(certificate.public_key.key_type),
            key_locator=certificate_identity_prefix(certificate.name),
        )
        key_name = certificate.public_key_name
        digest_algorithm = self.params.digest_algorithm

        if isinstance(target, Data):
            target.signature = signature
            value = self.key_storage.sign(target.signed_portion(), key_name, digest_algorithm)
            signature = attr.evolve(signature, value=value)
            target.signature = signature
        elif isinstance(target, Interest):
            signed_name = target.name.append(signature.info_wire())
            value = self.key_storage.sign(signed_name.wire_encode_value(), key_name, digest_algorithm)
            signature = attr.evolve(signature, value=value)
            target.name = signed_name.append(signature.value_wire())
        elif isinstance(target, (bytes, bytearray)):
            value = self.key_storage.sign(bytes(target), key_name, digest_algorithm)
            signature = attr.evolve(signature, value=value)
        else:
            raise TypeError("cannot sign %r" % (target,))
        return signature

    def sign(self, target, certificate_name=None):
        """
        Sign a Data packet, an Interest or a byte string.

        A Data packet gets the signature attached, an Interest gets
        the SignatureInfo and SignatureValue appended to its name and
        a byte string is left alone.

        :param certificate_name: the name of the signing certificate;
            the default certificate of the default identity is used
            if omitted.

        :returns: the Signature.
        """
        if certificate_name is None:
            certificate = self._default_signing_certificate()
        else:
            certificate = self.metadata_store.get_certificate(certificate_name)
        return self._sign_with_certificate(target, certificate)

    def sign_by_identity(self, target, identity_name):
        """
        sign with the default certificate of identity_name,
        creating the identity if it has none
        """
        certificate_name = self.get_default_certificate_name_for_identity(identity_name)
        if not certificate_name:
            certificate_name = self.create_identity(identity_name)
        return self.sign(target, certificate_name)

    # deletion

    def _is_protected(self, identity_name):
        default_identity = self.metadata_store.get_default_identity()
        return bool(default_identity) and identity_name == default_identity

    def _delete_private_key(self, key_name):
        if self.key_storage.does_key_exist(key_name, KEY_CLASS_PRIVATE):
            self.key_storage.delete_key_pair(key_name)
        else:
            log.warning("no private key to delete for %s", key_name)

    def delete_certificate(self, certificate_name):
        key_name = certificate_name_to_public_key_name(certificate_name)
        if self._is_protected(key_name.get_prefix(-1)):
            log.debug("not deleting certificate %s of the default identity", certificate_name)
            return
        self.metadata_store.delete_certificate_info(certificate_name)
        log.info("deleted certificate %s", certificate_name)

    def delete_key(self, key_name):
        if self._is_protected(key_name.get_prefix(-1)):
            log.debug("not deleting key %s of the default identity", key_name)
            return
        store = self.metadata_store
        for certificate_name in store.get_all_certificate_names_of_key(key_name):
            store.delete_certificate_info(certificate_name)
        store.delete_public_key_info(key_name)
        self._delete_private_key(key_name)
        log.info("deleted key %s", key_name)

    def delete_identity(self, identity_name):
        if self._is_protected(identity_name):
            log.debug("not deleting default identity %s", identity_name)
            return
        store = self.metadata_store
        key_names = (store.get_all_key_names_of_identity(identity_name, is_default=True) +
                     store.get_all_key_names_of_identity(identity_name, is_default=False))
        for key_name in key_names:
            for certificate_name in store.get_all_certificate_names_of_key(key_name):
                store.delete_certificate_info(certificate_name)
            store.delete_public_key_info(key_name)
        store.delete_identity_info(identity_name)
        for key_name in key_names:
            self._delete_private_key(key_name)
        log.info("deleted identity %s", identity_name)

    # export and import

    def export_identity(self, identity_name, password):
        """
        Export the default key and default certificate of an
        identity, the key encrypted with password.

        :returns: the identity package bytes.
        """
        store = self.metadata_store
        if not store.does_identity_exist(identity_name):
            raise NotFoundError("identity %s does not exist" % identity_name)
        key_name = store.get_default_key_name_for_identity(identity_name)
        if not key_name:
            raise NotFoundError("identity %s has no default key" % identity_name)

        pkcs8 = self.key_storage.export_private_key_pkcs8(key_name, password)

        certificate_name = store.get_default_certificate_name_for_key(key_name)
        if not certificate_name:
            certificate = self.self_sign(key_name)
            self.add_certificate_as_identity_default(certificate)
            certificate_name = certificate.name
        certificate = store.get_certificate(certificate_name)

        log.info("exporting identity %s", identity_name)
        return encode_tlv(IDENTITY_PACKAGE,
                          encode_tlv(CERTIFICATE_PACKAGE, certificate.wire_encode()) +
                          encode_tlv(KEY_PACKAGE, pkcs8))

    def import_identity(self, package, password):
        """
        Import an identity package made by export_identity. An
        existing identity of the same name is deleted first.

        :returns: the name of the imported identity.
        """
        elements = parse_elements(decode_tlv(package, IDENTITY_PACKAGE))
        certificate = Certificate.wire_decode(find_element(elements, CERTIFICATE_PACKAGE))
        pkcs8 = find_element(elements, KEY_PACKAGE)
        # fail on a wrong password or a locked storage before anything local is replaced
        import_pkcs8(pkcs8, password)
        if self.key_storage.locked:
            raise AuthenticationError("key storage is locked")

        key_name = certificate.public_key_name
        identity_name = key_name.get_prefix(-1)
        store = self.metadata_store

        if store.does_identity_exist(identity_name):
            self.delete_identity(identity_name)
        if self.key_storage.does_key_exist(key_name, KEY_CLASS_PRIVATE):
            self.delete_key(key_name)
        self.key_storage.import_private_key_pkcs8(key_name, pkcs8, password)

        store.add_identity(identity_name)
        if not store.does_public_key_exist(key_name):
            store.add_public_key(key_name, self.key_storage.get_public_key(key_name))
        store.set_default_key_name_for_identity(key_name, identity_name)

        if store.does_certificate_exist(certificate.name):
            self.delete_certificate(certificate.name)
        self.add_certificate_as_identity_default(certificate)
        log.info("imported identity %s", identity_name)
        return identity_name

    # default chain

    def get_default_identity(self):
        return self.metadata_store.get_default_identity()

    def set_default_identity(self, identity_name):
        self.metadata_store.set_default_identity(identity_name)

    def get_default_certificate_name_for_identity(self, identity_name):
        key_name = self.metadata_store.get_default_key_name_for_identity(identity_name)
        if not key_name:
            return Name()
        return self.metadata_store.get_default_certificate_name_for_key(key_name)

    def get_default_certificate_name(self):
        return self.get_default_certificate_name_for_identity(self.get_default_identity())

    def set_default_key_for_identity(self, key_name, identity_name=None):
        self.metadata_store.set_default_key_name_for_identity(key_name, identity_name)

    def set_default_certificate_for_key(self, certificate_name):
        key_name = certificate_name_to_public_key_name(certificate_name)
        self.metadata_store.set_default_certificate_name_for_key(key_name, certificate_name)

    def add_certificate(self, certificate):
        self.metadata_store.add_certificate(certificate)

    def add_certificate_as_key_default(self, certificate):
        self.add_certificate(certificate)
        self.set_default_certificate_for_key(certificate.name)

    def add_certificate_as_identity_default(self, certificate):
        self.add_certificate(certificate)
        key_name = certificate.public_key_name
        self.set_default_key_for_identity(key_name, key_name.get_prefix(-1))
        self.set_default_certificate_for_key(certificate.name)
