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

import zope.interface


class IMetadataStore(zope.interface.Interface):
    """
    I am the public information store of a key chain. I keep the
    identity, public key and certificate records and the default
    identity, default key and default certificate pointers; I never
    see private key material.

    Fetching an absent record raises NotFoundError. Default pointer
    getters return an empty Name when the pointer is unset or refers
    to a record which no longer exists. Adding a record which already
    exists is not an error.
    """

    def does_identity_exist(self, identity_name):
        """
        return True if the identity is registered, otherwise False
        """

    def add_identity(self, identity_name):
        """
        register an identity
        """

    def delete_identity_info(self, identity_name):
        """
        remove an identity record together with the records
        of its keys and their certificates
        """

    def get_all_identities(self, is_default=None):
        """
        return a list of identity names; is_default True or False
        restricts the list to the default identity or to the others
        """

    def does_public_key_exist(self, key_name):
        """
        return True if the key is registered, otherwise False
        """

    def add_public_key(self, key_name, public_key):
        """
        register the PublicKey of key_name, a key of the identity
        key_name.get_prefix(-1)
        """

    def get_public_key(self, key_name):
        """
        given a key name, return its PublicKey
        """

    def get_public_key_type(self, key_name):
        """
        given a key name, return its key type
        """

    def delete_public_key_info(self, key_name):
        """
        remove a key record together with its certificate records
        """

    def get_all_key_names_of_identity(self, identity_name, is_default=None):
        """
        return a list of key names of an identity; is_default True or
        False restricts the list to the default key or to the others
        """

    def does_certificate_exist(self, certificate_name):
        """
        return True if the certificate is registered, otherwise False
        """

    def add_certificate(self, certificate):
        """
        register a Certificate
        """

    def get_certificate(self, certificate_name):
        """
        given a certificate name, return the Certificate
        """

    def delete_certificate_info(self, certificate_name):
        """
        remove a certificate record
        """

    def get_all_certificate_names_of_key(self, key_name, is_default=None):
        """
        return a list of certificate names of a key; is_default True or
        False restricts the list to the default certificate or to the others
        """

    def get_default_identity(self):
        """
        return the default identity name
        """

    def set_default_identity(self, identity_name):
        """
        make identity_name the default identity
        """

    def get_default_key_name_for_identity(self, identity_name):
        """
        return the default key name of an identity
        """

    def set_default_key_name_for_identity(self, key_name, identity_name=None):
        """
        make key_name the default key of its identity; the identity
        is inferred from key_name unless given
        """

    def get_default_certificate_name_for_key(self, key_name):
        """
        return the default certificate name of a key
        """

    def set_default_certificate_name_for_key(self, key_name, certificate_name):
        """
        make certificate_name the default certificate of key_name
        """

    def get_default_certificate(self):
        """
        return the cached Certificate at the end of the default
        identity's default chain, or None if nothing is cached
        """

    def refresh_default_certificate(self):
        """
        resolve the default identity's default certificate again
        and cache it; the cache is emptied if it cannot be resolved
        """


class IKeyStorage(zope.interface.Interface):
    """
    I am a secure key storage. I own the private key material and
    perform every private key operation; private key bytes only
    leave me as a password encrypted PKCS#8 blob.

    Operations on a key name I hold no key for raise KeyNotFoundError.
    A wrong or absent password raises AuthenticationError and leaves
    nothing written.
    """

    locked = zope.interface.Attribute(
        "True while private key operations are refused pending unlock")

    def unlock(self, password):
        """
        unlock the storage for private key operations
        """

    def generate_key_pair(self, key_name, key_type, key_size):
        """
        generate a key pair under key_name; raises KeyAlreadyExistsError
        if key_name already holds a key
        """

    def get_public_key(self, key_name):
        """
        return the PublicKey of key_name
        """

    def sign(self, data, key_name, digest_algorithm):
        """
        sign data with the private key of key_name
        -> signature value bytes
        """

    def delete_key_pair(self, key_name):
        """
        delete the key pair of key_name
        """

    def does_key_exist(self, key_name, key_class):
        """
        return True if a key of key_class (KEY_CLASS_PUBLIC or
        KEY_CLASS_PRIVATE) is held for key_name, otherwise False
        """

    def export_private_key_pkcs8(self, key_name, password):
        """
        return the private key of key_name as a password encrypted
        PKCS#8 blob
        """

    def import_private_key_pkcs8(self, key_name, blob, password):
        """
        decrypt a PKCS#8 blob and store the private key under key_name
        """
