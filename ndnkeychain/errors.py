#!/usr/bin/env python

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

"""
error classes for identity, key and certificate management
"""

# metadata store errors

class NotFoundError(Exception):
    pass


class MalformedNameError(Exception):
    pass


class NoDefaultCertificateError(Exception):
    pass


# key storage errors

class KeyNotFoundError(NotFoundError):
    pass


class KeyAlreadyExistsError(Exception):
    pass


class AuthenticationError(Exception):
    pass


class UnsupportedKeyTypeError(Exception):
    pass


# wire encoding errors

class DecodingError(Exception):
    pass
