#!/usr/bin/env python3

# Copyright (C) The hdkeychain developers
#
# This file is part of hdkeychain. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of hdkeychain including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Key derivation across a path spanning multiple depth levels.

Each path segment is a single derivation step:
private keys are derived with CKDpriv, public keys with CKDpub.
The first failing step aborts the whole derivation:
the error is re-raised unchanged, with the failing segment
(1-based), its key index, and the path attached to it.
"""

import logging
from typing import Union

from hdkeychain.bip32.chain_path import ChainPath, parse
from hdkeychain.bip32.derivation import derive_child, fingerprint, neuter
from hdkeychain.bip32.extended_key import ExtendedKey, ExtendedPrivKey, ExtendedPubKey
from hdkeychain.exceptions import (
    HardenedDerivationUnsupported,
    HDKeyChainTypeError,
    HDKeyChainValueError,
    InvalidChainPath,
)

logger = logging.getLogger(__name__)

Path = Union[ChainPath, str]


def derive(root: ExtendedKey, path: Path) -> ExtendedKey:
    """Derive a BIP32 key across a path spanning multiple depth levels.

    Valid path examples:

    - string like "m/44'/0'/1'/0/10" (root must be a master key)
    - relative string like "0/10" (any root key)
    - ChainPath

    The derived key is of the same kind (private or public) of the root;
    the empty path returns the root itself.
    """

    if not isinstance(root, (ExtendedPrivKey, ExtendedPubKey)):
        raise HDKeyChainTypeError(f"not an extended key: {type(root).__name__}")
    if isinstance(path, str):
        path = parse(path)
    elif not isinstance(path, ChainPath):
        raise HDKeyChainTypeError(f"not a path: {type(path).__name__}")

    if len(path) == 0:
        return root

    if path.absolute and root.depth != 0:
        err_msg = f"absolute path '{path}' from non-master key"
        err_msg += f" at depth {root.depth}"
        raise InvalidChainPath(err_msg)

    if isinstance(root, ExtendedPubKey) and path.has_hardened:
        err_msg = f"hardened derivation from public key along path '{path}'"
        raise HardenedDerivationUnsupported(err_msg)

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "deriving path '%s' from key %s at depth %d",
            path,
            fingerprint(root).hex(),
            root.depth,
        )
    key = root
    for segment, index in enumerate(path, 1):
        try:
            key = derive_child(key, index)
        except HDKeyChainValueError as e:
            e.segment = segment
            e.key_index = index
            e.path = str(path)
            logger.debug("derivation failed at segment %d (%s)", segment, index)
            raise
        logger.debug("segment %d (%s): depth %d", segment, index, key.depth)
    return key


class KeyChain:
    """Key chain rooted at an extended key.

    The root is never modified: every derivation returns a new key.
    """

    def __init__(self, root: ExtendedKey) -> None:
        if not isinstance(root, (ExtendedPrivKey, ExtendedPubKey)):
            raise HDKeyChainTypeError(f"not an extended key: {type(root).__name__}")
        self._root = root

    @property
    def root(self) -> ExtendedKey:
        return self._root

    def derive(self, path: Path) -> ExtendedKey:
        return derive(self._root, path)

    def derive_public(self, path: Path) -> ExtendedPubKey:
        "Derive along the path, then return the corresponding public key."
        key = derive(self._root, path)
        if isinstance(key, ExtendedPrivKey):
            return neuter(key)
        return key

    def __repr__(self) -> str:
        kind = "private" if self._root.is_private else "public"
        return f"KeyChain({kind} root at depth {self._root.depth})"
