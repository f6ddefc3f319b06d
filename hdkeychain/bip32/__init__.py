#!/usr/bin/env python3

# Copyright (C) The hdkeychain developers
#
# This file is part of hdkeychain. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of hdkeychain including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Module hdkeychain.bip32."""

from hdkeychain.bip32.chain_path import ChainPath, parse
from hdkeychain.bip32.derivation import (
    ckd_priv,
    ckd_pub,
    derive_child,
    fingerprint,
    master_key,
    neuter,
    next_valid_child,
    random_master_key,
)
from hdkeychain.bip32.extended_key import (
    ExtendedKey,
    ExtendedPrivKey,
    ExtendedPubKey,
    b58decode,
    b58decode_with_version,
    b58encode,
    deserialize,
    deserialize_with_version,
    serialize,
)
from hdkeychain.bip32.key_chain import KeyChain, derive
from hdkeychain.bip32.key_index import Hardened, KeyIndex, Normal

__all__ = [
    "ChainPath",
    "parse",
    "ckd_priv",
    "ckd_pub",
    "derive_child",
    "fingerprint",
    "master_key",
    "neuter",
    "next_valid_child",
    "random_master_key",
    "ExtendedKey",
    "ExtendedPrivKey",
    "ExtendedPubKey",
    "b58decode",
    "b58decode_with_version",
    "b58encode",
    "deserialize",
    "deserialize_with_version",
    "serialize",
    "KeyChain",
    "derive",
    "Hardened",
    "KeyIndex",
    "Normal",
]
