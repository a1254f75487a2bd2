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
Policy parameters of a key chain: the key type and size used when
none is requested and the lifetimes of generated certificates.
"""

import attr

from ndnkeychain.crypto_primitives import KEY_TYPES, KEY_TYPE_RSA, KEY_TYPE_ECDSA
from ndnkeychain.crypto_primitives import DEFAULT_KEY_SIZES, DIGEST_ALGORITHMS
from ndnkeychain.crypto_primitives import DIGEST_ALGORITHM_SHA256, ECDSAScheme


MILLISECONDS_PER_DAY = 24 * 3600 * 1000

# self-signed certificates are valid for 20 years
SELF_SIGNED_VALIDITY = 20 * 365 * MILLISECONDS_PER_DAY
# issued certificates default to one year
ISSUED_VALIDITY = 365 * MILLISECONDS_PER_DAY
CERTIFICATE_FRESHNESS = 3600 * 1000


def is_positive(instance, attribute, value):
    """
    validator for a positive integer
    """
    if not isinstance(value, int) or value <= 0:
        raise ValueError("%s must be a positive integer" % attribute.name)


@attr.s(frozen=True)
class KeyChainParams(object):

    default_key_type = attr.ib(default=KEY_TYPE_RSA, validator=attr.validators.in_(KEY_TYPES))
    default_key_size = attr.ib(
        default=attr.Factory(lambda self: DEFAULT_KEY_SIZES[self.default_key_type], takes_self=True),
        validator=is_positive)
    self_signed_validity = attr.ib(default=SELF_SIGNED_VALIDITY, validator=is_positive)
    issued_validity = attr.ib(default=ISSUED_VALIDITY, validator=is_positive)
    digest_algorithm = attr.ib(default=DIGEST_ALGORITHM_SHA256, validator=attr.validators.in_(DIGEST_ALGORITHMS))
    certificate_freshness = attr.ib(default=CERTIFICATE_FRESHNESS, validator=is_positive)

    @default_key_size.validator
    def _check_key_size(self, attribute, value):
        if self.default_key_type == KEY_TYPE_RSA and value < 1024:
            raise ValueError("RSA keys must be at least 1024 bits")
        if self.default_key_type == KEY_TYPE_ECDSA and value not in ECDSAScheme.curves:
            raise ValueError("no ECDSA curve of size %d" % value)

    def key_size_for(self, key_type):
        """
        i am a helper method that returns the key size to use
        when a key of key_type is generated without an explicit size
        """
        if key_type == self.default_key_type:
            return self.default_key_size
        return DEFAULT_KEY_SIZES[key_type]
