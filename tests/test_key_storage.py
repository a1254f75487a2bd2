
import os
import stat

import pytest

from ndnkeychain.common import KEY_CLASS_PUBLIC, KEY_CLASS_PRIVATE
from ndnkeychain.crypto_primitives import KEY_TYPE_RSA, KEY_TYPE_ECDSA, verify_signature
from ndnkeychain.errors import AuthenticationError, KeyAlreadyExistsError, KeyNotFoundError
from ndnkeychain.interfaces import IKeyStorage
from ndnkeychain.key_storage import KeyStorageDict, KeyStorageFile
from ndnkeychain.name import Name


KEY_NAME = Name.from_uri("/alice/ksk-1")
OTHER_KEY_NAME = Name.from_uri("/bob/ksk-1")


@pytest.fixture(params=["dict", "file"])
def storage(request, tmp_path):
    if request.param == "dict":
        return KeyStorageDict()
    return KeyStorageFile(str(tmp_path / "keys"))


def test_provides_interface(tmp_path):
    assert IKeyStorage.providedBy(KeyStorageDict())
    assert IKeyStorage.providedBy(KeyStorageFile(str(tmp_path)))


def test_generate_and_sign(storage):
    storage.generate_key_pair(KEY_NAME, KEY_TYPE_RSA, 1024)
    assert storage.does_key_exist(KEY_NAME, KEY_CLASS_PRIVATE)
    assert storage.does_key_exist(KEY_NAME, KEY_CLASS_PUBLIC)
    public_key = storage.get_public_key(KEY_NAME)
    assert public_key.key_type == KEY_TYPE_RSA
    signature_value = storage.sign(b"message", KEY_NAME)
    assert verify_signature(KEY_TYPE_RSA, public_key.key_der, b"message", signature_value)


def test_ecdsa_keys(storage):
    storage.generate_key_pair(KEY_NAME, KEY_TYPE_ECDSA, 256)
    public_key = storage.get_public_key(KEY_NAME)
    assert public_key.key_type == KEY_TYPE_ECDSA
    signature_value = storage.sign(b"message", KEY_NAME, "SHA256")
    assert verify_signature(KEY_TYPE_ECDSA, public_key.key_der, b"message", signature_value)


def test_generate_existing_key(storage):
    storage.generate_key_pair(KEY_NAME, KEY_TYPE_ECDSA, 256)
    public_key = storage.get_public_key(KEY_NAME)
    pytest.raises(KeyAlreadyExistsError, storage.generate_key_pair, KEY_NAME, KEY_TYPE_ECDSA, 256)
    assert storage.get_public_key(KEY_NAME) == public_key


def test_missing_key(storage):
    assert not storage.does_key_exist(KEY_NAME, KEY_CLASS_PRIVATE)
    pytest.raises(KeyNotFoundError, storage.get_public_key, KEY_NAME)
    pytest.raises(KeyNotFoundError, storage.sign, b"message", KEY_NAME)
    pytest.raises(KeyNotFoundError, storage.delete_key_pair, KEY_NAME)
    pytest.raises(KeyNotFoundError, storage.export_private_key_pkcs8, KEY_NAME, "secret")


def test_unknown_key_class(storage):
    pytest.raises(ValueError, storage.does_key_exist, KEY_NAME, "symmetric")


def test_delete_key_pair(storage):
    storage.generate_key_pair(KEY_NAME, KEY_TYPE_ECDSA, 256)
    storage.delete_key_pair(KEY_NAME)
    assert not storage.does_key_exist(KEY_NAME, KEY_CLASS_PRIVATE)


def test_export_import(storage):
    storage.generate_key_pair(KEY_NAME, KEY_TYPE_ECDSA, 256)
    blob = storage.export_private_key_pkcs8(KEY_NAME, "secret")
    storage.import_private_key_pkcs8(OTHER_KEY_NAME, blob, "secret")
    assert storage.get_public_key(OTHER_KEY_NAME) == storage.get_public_key(KEY_NAME)


def test_import_wrong_password_writes_nothing(storage):
    storage.generate_key_pair(KEY_NAME, KEY_TYPE_ECDSA, 256)
    blob = storage.export_private_key_pkcs8(KEY_NAME, "secret")
    pytest.raises(AuthenticationError, storage.import_private_key_pkcs8, OTHER_KEY_NAME, blob, "wrong")
    pytest.raises(AuthenticationError, storage.import_private_key_pkcs8, OTHER_KEY_NAME, blob, "")
    assert not storage.does_key_exist(OTHER_KEY_NAME, KEY_CLASS_PRIVATE)


def test_import_over_existing_key(storage):
    storage.generate_key_pair(KEY_NAME, KEY_TYPE_ECDSA, 256)
    blob = storage.export_private_key_pkcs8(KEY_NAME, "secret")
    pytest.raises(KeyAlreadyExistsError, storage.import_private_key_pkcs8, KEY_NAME, blob, "secret")


def test_export_requires_password(storage):
    storage.generate_key_pair(KEY_NAME, KEY_TYPE_ECDSA, 256)
    pytest.raises(AuthenticationError, storage.export_private_key_pkcs8, KEY_NAME, "")


class TestLockedStorage:

    def test_locked_until_unlocked(self):
        storage = KeyStorageDict(password="storage password")
        assert storage.locked
        storage.generate_key_pair(KEY_NAME, KEY_TYPE_ECDSA, 256)
        pytest.raises(AuthenticationError, storage.sign, b"message", KEY_NAME)
        pytest.raises(AuthenticationError, storage.export_private_key_pkcs8, KEY_NAME, "secret")

        pytest.raises(AuthenticationError, storage.unlock, "wrong")
        assert storage.locked

        storage.unlock("storage password")
        assert not storage.locked
        assert storage.sign(b"message", KEY_NAME)

    def test_import_while_locked(self):
        source = KeyStorageDict()
        source.generate_key_pair(KEY_NAME, KEY_TYPE_ECDSA, 256)
        blob = source.export_private_key_pkcs8(KEY_NAME, "secret")
        storage = KeyStorageDict(password="storage password")
        pytest.raises(AuthenticationError, storage.import_private_key_pkcs8, KEY_NAME, blob, "secret")
        assert not storage.does_key_exist(KEY_NAME, KEY_CLASS_PRIVATE)

    def test_storage_without_password(self):
        storage = KeyStorageDict()
        assert not storage.locked
        storage.unlock("anything")
        assert not storage.locked


class TestKeyStorageFile:

    def test_key_files(self, tmp_path):
        storage = KeyStorageFile(str(tmp_path))
        storage.generate_key_pair(KEY_NAME, KEY_TYPE_RSA, 1024)
        names = sorted(os.listdir(str(tmp_path)))
        assert len(names) == 2
        assert names[0].endswith(".pri")
        assert names[1].endswith(".pub")
        mode = stat.S_IMODE(os.stat(os.path.join(str(tmp_path), names[0])).st_mode)
        assert mode == 0o400

    def test_keys_persist(self, tmp_path):
        storage = KeyStorageFile(str(tmp_path))
        storage.generate_key_pair(KEY_NAME, KEY_TYPE_ECDSA, 256)
        public_key = storage.get_public_key(KEY_NAME)
        reopened = KeyStorageFile(str(tmp_path))
        assert reopened.does_key_exist(KEY_NAME, KEY_CLASS_PRIVATE)
        assert reopened.get_public_key(KEY_NAME) == public_key

    def test_delete_removes_files(self, tmp_path):
        storage = KeyStorageFile(str(tmp_path))
        storage.generate_key_pair(KEY_NAME, KEY_TYPE_ECDSA, 256)
        storage.delete_key_pair(KEY_NAME)
        assert os.listdir(str(tmp_path)) == []

    def test_creates_directory(self, tmp_path):
        path = tmp_path / "a" / "b"
        KeyStorageFile(str(path))
        assert path.is_dir()

    def test_private_key_file_never_readable_by_others(self, tmp_path, monkeypatch):
        def no_chmod(*args, **kwargs):
            raise AssertionError("permissions must be set when the file is created")
        monkeypatch.setattr(os, "chmod", no_chmod)
        path = tmp_path / "keys"
        umask = os.umask(0)
        try:
            storage = KeyStorageFile(str(path))
            storage.generate_key_pair(KEY_NAME, KEY_TYPE_ECDSA, 256)
        finally:
            os.umask(umask)
        assert stat.S_IMODE(os.stat(str(path)).st_mode) == 0o700
        private_files = [n for n in os.listdir(str(path)) if n.endswith(".pri")]
        assert len(private_files) == 1
        mode = stat.S_IMODE(os.stat(os.path.join(str(path), private_files[0])).st_mode)
        assert mode == 0o400
