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

import logging

import zope.interface

from ndnkeychain.certificate import Certificate, PublicKey
from ndnkeychain.certificate import certificate_name_to_public_key_name
from ndnkeychain.errors import NotFoundError
from ndnkeychain.interfaces import IMetadataStore
from ndnkeychain.name import Name


log = logging.getLogger(__name__)


def _filter_default(names, default_name, is_default):
    if is_default is None:
        return names
    return [name for name in names if (name == default_name) == is_default]


@zope.interface.implementer(IMetadataStore)
class MetadataStoreDict:
    """
    I am an implementation of IMetadataStore which keeps
    everything in dicts; records are enumerated in the
    order they were added.
    """

    def __init__(self):
        # identity name -> default key name
        self.identities = {}
        # key name -> PublicKey
        self.public_keys = {}
        # key name -> default certificate name
        self.default_certificates = {}
        # certificate name -> wire encoding
        self.certificates = {}
        self.default_identity = Name()
        self._default_certificate = None

    # identities

    def does_identity_exist(self, identity_name):
        return identity_name in self.identities

    def add_identity(self, identity_name):
        if identity_name not in self.identities:
            self.identities[identity_name] = Name()

    def delete_identity_info(self, identity_name):
        for key_name in self.get_all_key_names_of_identity(identity_name):
            self.delete_public_key_info(key_name)
        self.identities.pop(identity_name, None)
        if self.default_identity == identity_name:
            self.default_identity = Name()
        self._default_certificate = None

    def get_all_identities(self, is_default=None):
        return _filter_default(list(self.identities), self.get_default_identity(), is_default)

    # public keys

    def does_public_key_exist(self, key_name):
        return key_name in self.public_keys

    def add_public_key(self, key_name, public_key):
        if not isinstance(public_key, PublicKey):
            raise TypeError("public_key must be a PublicKey")
        if key_name in self.public_keys:
            return
        self.add_identity(key_name.get_prefix(-1))
        self.public_keys[key_name] = public_key

    def get_public_key(self, key_name):
        try:
            return self.public_keys[key_name]
        except KeyError:
            raise NotFoundError("public key %s does not exist" % key_name)

    def get_public_key_type(self, key_name):
        return self.get_public_key(key_name).key_type

    def delete_public_key_info(self, key_name):
        for certificate_name in self.get_all_certificate_names_of_key(key_name):
            self.delete_certificate_info(certificate_name)
        self.public_keys.pop(key_name, None)
        self.default_certificates.pop(key_name, None)
        identity_name = key_name.get_prefix(-1)
        if self.identities.get(identity_name) == key_name:
            self.identities[identity_name] = Name()
        self._default_certificate = None

    def get_all_key_names_of_identity(self, identity_name, is_default=None):
        key_names = [key_name for key_name in self.public_keys
                     if key_name.get_prefix(-1) == identity_name]
        return _filter_default(key_names, self.get_default_key_name_for_identity(identity_name), is_default)

    # certificates

    def does_certificate_exist(self, certificate_name):
        return certificate_name in self.certificates

    def add_certificate(self, certificate):
        # raises MalformedNameError for names without KEY or ID-CERT
        certificate_name_to_public_key_name(certificate.name)
        if certificate.name not in self.certificates:
            self.certificates[certificate.name] = certificate.wire_encode()

    def get_certificate(self, certificate_name):
        try:
            wire = self.certificates[certificate_name]
        except KeyError:
            raise NotFoundError("certificate %s does not exist" % certificate_name)
        return Certificate.wire_decode(wire)

    def delete_certificate_info(self, certificate_name):
        if self.certificates.pop(certificate_name, None) is None:
            return
        key_name = certificate_name_to_public_key_name(certificate_name)
        if self.default_certificates.get(key_name) == certificate_name:
            del self.default_certificates[key_name]
        self._default_certificate = None

    def get_all_certificate_names_of_key(self, key_name, is_default=None):
        certificate_names = [certificate_name for certificate_name in self.certificates
                             if certificate_name_to_public_key_name(certificate_name) == key_name]
        return _filter_default(certificate_names,
                               self.get_default_certificate_name_for_key(key_name),
                               is_default)

    # default pointers; a pointer at a record which is gone reads as unset

    def get_default_identity(self):
        if self.default_identity in self.identities:
            return self.default_identity
        return Name()

    def set_default_identity(self, identity_name):
        if identity_name not in self.identities:
            raise NotFoundError("identity %s does not exist" % identity_name)
        self.default_identity = identity_name
        self._default_certificate = None

    def get_default_key_name_for_identity(self, identity_name):
        key_name = self.identities.get(identity_name, Name())
        if key_name in self.public_keys:
            return key_name
        return Name()

    def set_default_key_name_for_identity(self, key_name, identity_name=None):
        if identity_name is None:
            identity_name = key_name.get_prefix(-1)
        if key_name not in self.public_keys:
            raise NotFoundError("public key %s does not exist" % key_name)
        if identity_name not in self.identities:
            raise NotFoundError("identity %s does not exist" % identity_name)
        self.identities[identity_name] = key_name
        self._default_certificate = None

    def get_default_certificate_name_for_key(self, key_name):
        certificate_name = self.default_certificates.get(key_name, Name())
        if certificate_name in self.certificates:
            return certificate_name
        return Name()

    def set_default_certificate_name_for_key(self, key_name, certificate_name):
        if key_name not in self.public_keys:
            raise NotFoundError("public key %s does not exist" % key_name)
        if certificate_name not in self.certificates:
            raise NotFoundError("certificate %s does not exist" % certificate_name)
        self.default_certificates[key_name] = certificate_name
        self._default_certificate = None

    def get_default_certificate(self):
        return self._default_certificate

    def refresh_default_certificate(self):
        self._default_certificate = None
        identity_name = self.get_default_identity()
        key_name = self.get_default_key_name_for_identity(identity_name)
        certificate_name = self.get_default_certificate_name_for_key(key_name)
        if certificate_name:
            self._default_certificate = self.get_certificate(certificate_name)
        else:
            log.debug("no default certificate for default identity %s", identity_name)
        return self._default_certificate
