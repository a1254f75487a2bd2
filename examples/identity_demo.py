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


import logging
import sys

from ndnkeychain import KeyChain, KeyChainParams, MetadataStoreDict, KeyStorageDict
from ndnkeychain import Name, Data, Interest, KEY_TYPE_ECDSA


def main():
    use_ecc = (len(sys.argv) > 1 and sys.argv[1] == "-ecc")
    logging.basicConfig(level=logging.DEBUG)

    params = KeyChainParams()
    if use_ecc:
        params = KeyChainParams(default_key_type=KEY_TYPE_ECDSA)

    # A key chain for the certificate authority
    ca = KeyChain(MetadataStoreDict(), KeyStorageDict(), params)
    ca_identity = Name.from_uri("/ndn/edu/ucla")
    ca.create_identity(ca_identity)
    ca.set_default_identity(ca_identity)

    # Create an identity and sign some packets with it
    alice = Name.from_uri("/ndn/edu/ucla/alice")
    alice_certificate_name = ca.create_identity(alice)
    data = Data(alice.append("hello"), content=b"this is a test")
    ca.sign(data, alice_certificate_name)
    interest = Interest(alice.append("ping"))
    ca.sign_by_identity(interest, alice)
    print("signed interest %s" % interest.name)

    # Certify alice's key with the authority's default certificate
    request = ca.metadata_store.get_certificate(alice_certificate_name)
    certificate = ca.issue_certificate(request, "Alice", signing_identity=ca_identity)
    print("issued %s" % certificate.name)

    # Move alice to a key chain of her own
    package = ca.export_identity(alice, "password")
    laptop = KeyChain(MetadataStoreDict(), KeyStorageDict(), params)
    laptop.import_identity(package, "password")
    laptop.add_certificate_as_identity_default(certificate)
    laptop.set_default_identity(alice)
    laptop.sign(Data(alice.append("from-laptop"), content=b"this is a reply"))
    print("default certificate %s" % laptop.get_default_certificate_name())

    ca.delete_identity(alice)


if __name__ == '__main__':
    main()
