#!/usr/bin/env python3

# Copyright (C) The hdkeychain developers
#
# This file is part of hdkeychain. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of hdkeychain including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Well-known BIP32 version bytes.

Version bytes are chosen by the caller when serializing an extended key;
these are the ones defined by BIP32 itself.
Any other 4 bytes version is accepted, but it cannot be checked
against the kind (private or public) of the serialized key data.
"""

from typing import Dict, Tuple

from hdkeychain.alias import Octets
from hdkeychain.utils import bytes_from_octets

# base58 encoding starts with 'xprv'
MAINNET_PRIVATE = bytes.fromhex("0488ADE4")
# base58 encoding starts with 'xpub'
MAINNET_PUBLIC = bytes.fromhex("0488B21E")
# base58 encoding starts with 'tprv'
TESTNET_PRIVATE = bytes.fromhex("04358394")
# base58 encoding starts with 'tpub'
TESTNET_PUBLIC = bytes.fromhex("043587CF")

# network name -> (private version, public version)
NETWORKS: Dict[str, Tuple[bytes, bytes]] = {
    "mainnet": (MAINNET_PRIVATE, MAINNET_PUBLIC),
    "testnet": (TESTNET_PRIVATE, TESTNET_PUBLIC),
}

_PRIVATE_VERSIONS = tuple(prv for prv, _ in NETWORKS.values())
_PUBLIC_VERSIONS = tuple(pub for _, pub in NETWORKS.values())


def is_private_version(version: Octets) -> bool:
    "Return True if version is a well-known private key version."
    return bytes_from_octets(version, 4) in _PRIVATE_VERSIONS


def is_public_version(version: Octets) -> bool:
    "Return True if version is a well-known public key version."
    return bytes_from_octets(version, 4) in _PUBLIC_VERSIONS
