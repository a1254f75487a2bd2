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
Key storages: the only place private keys live. Private key
bytes leave a key storage only as password encrypted PKCS#8.
"""

import base64
import logging
import os

import zope.interface
from Cryptodome.Hash import SHA256

from ndnkeychain.certificate import PublicKey
from ndnkeychain.common import KEY_CLASS_PUBLIC, KEY_CLASS_PRIVATE
from ndnkeychain.crypto_primitives import PKCS8_PROTECTION, DIGEST_ALGORITHM_SHA256
from ndnkeychain.crypto_primitives import generate_private_key, key_type_of, public_key_der
from ndnkeychain.crypto_primitives import private_key_to_der, private_key_from_der
from ndnkeychain.crypto_primitives import export_pkcs8, import_pkcs8
from ndnkeychain.crypto_primitives import sign as private_key_sign
from ndnkeychain.errors import AuthenticationError, KeyAlreadyExistsError, KeyNotFoundError
from ndnkeychain.interfaces import IKeyStorage


log = logging.getLogger(__name__)

DEFAULT_KEY_FILE_PATH = "~/.ndn/ndnsec-tpm-file"


class KeyStorageBase:
    """
    I implement the IKeyStorage operations on top of four
    primitives which subclasses must provide:

    _has_key(key_name) returns True if a key pair is stored.
    _load_key(key_name) returns the private key object.
    _store_key(key_name, private_key) stores a new key pair.
    _remove_key(key_name) removes a stored key pair.

    If a password is given the storage starts out locked and
    refuses to sign, export or import until unlock is called
    with the same password.
    """

    def __init__(self, password=None, protection=PKCS8_PROTECTION):
        self._password = password
        self.locked = bool(password)
        self.protection = protection

    def _require_key(self, key_name):
        if not self._has_key(key_name):
            raise KeyNotFoundError("key %s does not exist" % key_name)

    def _require_unlocked(self):
        if self.locked:
            raise AuthenticationError("key storage is locked")

    def unlock(self, password):
        if not self._password:
            return
        if password != self._password:
            raise AuthenticationError("wrong key storage password")
        self.locked = False

    def generate_key_pair(self, key_name, key_type, key_size):
        if self._has_key(key_name):
            raise KeyAlreadyExistsError("key %s already exists" % key_name)
        log.debug("generating %d bit %s key %s", key_size, key_type, key_name)
        self._store_key(key_name, generate_private_key(key_type, key_size))

    def get_public_key(self, key_name):
        self._require_key(key_name)
        private_key = self._load_key(key_name)
        return PublicKey(key_type_of(private_key), public_key_der(private_key))

    def sign(self, data, key_name, digest_algorithm=DIGEST_ALGORITHM_SHA256):
        self._require_unlocked()
        self._require_key(key_name)
        return private_key_sign(self._load_key(key_name), data, digest_algorithm)

    def delete_key_pair(self, key_name):
        self._require_key(key_name)
        log.debug("deleting key %s", key_name)
        self._remove_key(key_name)

    def does_key_exist(self, key_name, key_class):
        if key_class not in (KEY_CLASS_PUBLIC, KEY_CLASS_PRIVATE):
            raise ValueError("unknown key class %r" % (key_class,))
        # both halves are always stored together
        return self._has_key(key_name)

    def export_private_key_pkcs8(self, key_name, password):
        self._require_unlocked()
        self._require_key(key_name)
        return export_pkcs8(self._load_key(key_name), password, self.protection)

    def import_private_key_pkcs8(self, key_name, blob, password):
        self._require_unlocked()
        if self._has_key(key_name):
            raise KeyAlreadyExistsError("key %s already exists" % key_name)
        key_type, private_key = import_pkcs8(blob, password)
        log.debug("importing %s key %s", key_type, key_name)
        self._store_key(key_name, private_key)


@zope.interface.implementer(IKeyStorage)
class KeyStorageDict(KeyStorageBase):
    """
    I am an implementation of IKeyStorage which
    keeps private key objects in a dict.
    """

    def __init__(self, password=None, protection=PKCS8_PROTECTION):
        super(KeyStorageDict, self).__init__(password, protection)
        self.keys = {}

    def _has_key(self, key_name):
        return key_name in self.keys

    def _load_key(self, key_name):
        return self.keys[key_name]

    def _store_key(self, key_name, private_key):
        self.keys[key_name] = private_key

    def _remove_key(self, key_name):
        del self.keys[key_name]


@zope.interface.implementer(IKeyStorage)
class KeyStorageFile(KeyStorageBase):
    """
    I am an implementation of IKeyStorage which keeps each key
    pair in a directory as two base64 text files named after the
    SHA-256 of the key name URI: <digest>.pri holds the PKCS#8
    private key and is readable by its owner only, <digest>.pub
    holds the SubjectPublicKeyInfo.
    """

    def __init__(self, path=None, password=None, protection=PKCS8_PROTECTION):
        super(KeyStorageFile, self).__init__(password, protection)
        if path is None:
            path = DEFAULT_KEY_FILE_PATH
        self.path = os.path.expanduser(path)
        if not os.path.exists(self.path):
            os.makedirs(self.path, 0o700)

    def _key_file(self, key_name, extension):
        digest = SHA256.new(key_name.to_uri().encode("utf-8")).hexdigest()
        return os.path.join(self.path, digest + extension)

    def _has_key(self, key_name):
        return os.path.exists(self._key_file(key_name, ".pri"))

    def _load_key(self, key_name):
        with open(self._key_file(key_name, ".pri"), "rb") as f:
            der = base64.b64decode(f.read())
        return private_key_from_der(der)[1]

    def _store_key(self, key_name, private_key):
        private_file = self._key_file(key_name, ".pri")
        fd = os.open(private_file, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o400)
        with os.fdopen(fd, "wb") as f:
            f.write(base64.b64encode(private_key_to_der(private_key)))
        with open(self._key_file(key_name, ".pub"), "wb") as f:
            f.write(base64.b64encode(public_key_der(private_key)))

    def _remove_key(self, key_name):
        os.remove(self._key_file(key_name, ".pri"))
        public_file = self._key_file(key_name, ".pub")
        if os.path.exists(public_file):
            os.remove(public_file)
        else:
            log.warning("public key file of %s is missing", key_name)
