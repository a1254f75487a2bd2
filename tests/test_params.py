
import attr
import pytest

from ndnkeychain.crypto_primitives import KEY_TYPE_RSA, KEY_TYPE_ECDSA
from ndnkeychain.params import KeyChainParams, SELF_SIGNED_VALIDITY, MILLISECONDS_PER_DAY


def test_defaults():
    params = KeyChainParams()
    assert params.default_key_type == KEY_TYPE_RSA
    assert params.default_key_size == 2048
    assert params.self_signed_validity == SELF_SIGNED_VALIDITY
    assert params.self_signed_validity == 20 * 365 * MILLISECONDS_PER_DAY
    assert params.issued_validity == 365 * MILLISECONDS_PER_DAY
    assert params.digest_algorithm == "SHA256"


def test_key_size_for():
    params = KeyChainParams(default_key_size=1024)
    assert params.key_size_for(KEY_TYPE_RSA) == 1024
    assert params.key_size_for(KEY_TYPE_ECDSA) == 256
    params = KeyChainParams(default_key_type=KEY_TYPE_ECDSA, default_key_size=384)
    assert params.key_size_for(KEY_TYPE_ECDSA) == 384
    assert params.key_size_for(KEY_TYPE_RSA) == 2048


def test_validation():
    pytest.raises(ValueError, KeyChainParams, default_key_type="DSA")
    pytest.raises(ValueError, KeyChainParams, default_key_size=512)
    pytest.raises(ValueError, KeyChainParams, default_key_type=KEY_TYPE_ECDSA, default_key_size=2048)
    pytest.raises(ValueError, KeyChainParams, self_signed_validity=0)
    pytest.raises(ValueError, KeyChainParams, issued_validity=-1)
    pytest.raises(ValueError, KeyChainParams, digest_algorithm="MD5")


def test_params_are_frozen():
    params = KeyChainParams()
    with pytest.raises(attr.exceptions.FrozenInstanceError):
        params.default_key_size = 4096


def test_default_key_size_follows_key_type():
    params = KeyChainParams(default_key_type=KEY_TYPE_ECDSA)
    assert params.default_key_size == 256
    assert params.key_size_for(KEY_TYPE_ECDSA) == 256
    assert params.key_size_for(KEY_TYPE_RSA) == 2048
