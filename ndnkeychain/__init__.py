
"""
ndnkeychain manages the identities, keys and certificates of
Named Data Networking applications and signs packets with them
"""

import logging

from ndnkeychain._metadata import __version__, __author__, __contact__
from ndnkeychain._metadata import __license__, __copyright__, __url__

from ndnkeychain.errors import NotFoundError, MalformedNameError, NoDefaultCertificateError
from ndnkeychain.errors import KeyNotFoundError, KeyAlreadyExistsError, AuthenticationError
from ndnkeychain.errors import UnsupportedKeyTypeError, DecodingError

from ndnkeychain.name import Name
from ndnkeychain.packet import Data, Interest, Signature
from ndnkeychain.certificate import Certificate, PublicKey, SubjectDescription
from ndnkeychain.certificate import get_key_name_from_certificate_prefix, certificate_identity_prefix
from ndnkeychain.certificate import certificate_name_to_public_key_name
from ndnkeychain.common import KEY_CLASS_PUBLIC, KEY_CLASS_PRIVATE
from ndnkeychain.crypto_primitives import KEY_TYPE_RSA, KEY_TYPE_ECDSA, DIGEST_ALGORITHM_SHA256
from ndnkeychain.crypto_primitives import verify_signature
from ndnkeychain.params import KeyChainParams
from ndnkeychain.interfaces import IMetadataStore, IKeyStorage
from ndnkeychain.metadata_store import MetadataStoreDict
from ndnkeychain.key_storage import KeyStorageDict, KeyStorageFile
from ndnkeychain.keychain import KeyChain

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "KEY_CLASS_PUBLIC",
    "KEY_CLASS_PRIVATE",
    "KEY_TYPE_RSA",
    "KEY_TYPE_ECDSA",
    "DIGEST_ALGORITHM_SHA256",

    "NotFoundError",
    "MalformedNameError",
    "NoDefaultCertificateError",
    "KeyNotFoundError",
    "KeyAlreadyExistsError",
    "AuthenticationError",
    "UnsupportedKeyTypeError",
    "DecodingError",

    "IMetadataStore",
    "IKeyStorage",

    "Name",
    "Data",
    "Interest",
    "Signature",
    "Certificate",
    "PublicKey",
    "SubjectDescription",
    "KeyChainParams",
    "MetadataStoreDict",
    "KeyStorageDict",
    "KeyStorageFile",
    "KeyChain",

    "get_key_name_from_certificate_prefix",
    "certificate_identity_prefix",
    "certificate_name_to_public_key_name",
    "verify_signature",

    "__version__", "__author__", "__contact__",
    "__license__", "__copyright__", "__url__",
]
