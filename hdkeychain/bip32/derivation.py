#!/usr/bin/env python3

# Copyright (C) The hdkeychain developers
#
# This file is part of hdkeychain. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of hdkeychain including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""BIP32 child key derivation functions.

A deterministic wallet is a hash-chain of private/public key pairs that
derives from a single root, which is the only element requiring backup.
Moreover, there are schemes where public keys can be calculated without
accessing private keys.

Here, the key tree is implemented according to BIP32 bitcoin standard
https://github.com/bitcoin/bips/blob/master/bip-0032.mediawiki:

- master key generation from seed
- private parent key to private child key (CKDpriv)
- public parent key to public child key (CKDpub)
- private key to public key neutering (N)

All functions are pure: parent keys are never modified.
With probability lower than 1 in 2^127 a child index yields
an invalid key; BIP32 suggests to proceed with the next index,
but here this is an error (InvalidChildKey) and the caller decides:
next_valid_child is the explicit opt-in for that policy.
"""

import logging
import secrets
from typing import Tuple

from hdkeychain.alias import Octets
from hdkeychain.bip32.extended_key import ExtendedKey, ExtendedPrivKey, ExtendedPubKey
from hdkeychain.bip32.key_index import HARDENED_OFFSET, KeyIndex
from hdkeychain.ec import (
    curve_order,
    is_infinity,
    point_add,
    point_from_compressed,
    point_from_scalar,
    point_serialize_compressed,
    pub_key_from_scalar,
)
from hdkeychain.exceptions import (
    DepthOverflow,
    HardenedDerivationUnsupported,
    HDKeyChainTypeError,
    InvalidChildKey,
    InvalidChildNumber,
    InvalidScalar,
    InvalidSeedLength,
)
from hdkeychain.hashes import hash160, hmac_sha512
from hdkeychain.utils import bytes_from_octets

logger = logging.getLogger(__name__)

MASTER_KEY_HMAC_KEY = b"Bitcoin seed"
MIN_SEED_SIZE = 16
MAX_SEED_SIZE = 64
# 128, 256, and 512 bits
RANDOM_SEED_SIZES = (16, 32, 64)
MAX_DEPTH = 255


def _ser32(index: KeyIndex) -> bytes:
    return index.to_u32().to_bytes(4, byteorder="big", signed=False)


def _check_index(index: KeyIndex) -> None:
    if not isinstance(index, KeyIndex):
        raise HDKeyChainTypeError(f"not a KeyIndex: {type(index).__name__}")


def master_key(seed: Octets) -> ExtendedPrivKey:
    """Return the BIP32 master extended private key from seed.

    The seed must be 16 to 64 bytes (128 to 512 bits).
    """

    seed = bytes_from_octets(seed)
    if not MIN_SEED_SIZE <= len(seed) <= MAX_SEED_SIZE:
        err_msg = f"invalid seed size: {len(seed)} bytes"
        err_msg += f" not in {MIN_SEED_SIZE}..{MAX_SEED_SIZE}"
        raise InvalidSeedLength(err_msg)

    hmac_ = hmac_sha512(MASTER_KEY_HMAC_KEY, seed)
    q = int.from_bytes(hmac_[:32], byteorder="big", signed=False)
    if not 0 < q < curve_order():
        # no retry: the seed is simply unusable
        raise InvalidScalar("invalid master private key not in 1..n-1")

    return ExtendedPrivKey(
        private_key=hmac_[:32],
        chain_code=hmac_[32:],
        depth=0,
        parent_fingerprint=b"\x00" * 4,
        child_number=0,
    )


def random_master_key(seed_size: int = 32) -> ExtendedPrivKey:
    """Return a master extended private key from a fresh random seed.

    The seed is not returned: the key itself must be backed up.
    """

    if seed_size not in RANDOM_SEED_SIZES:
        err_msg = f"invalid random seed size: {seed_size} bytes"
        err_msg += f" not in {RANDOM_SEED_SIZES}"
        raise InvalidSeedLength(err_msg)
    return master_key(secrets.token_bytes(seed_size))


def _pub_key_from_prv_key(prv_key: bytes) -> bytes:
    q = int.from_bytes(prv_key, byteorder="big", signed=False)
    return pub_key_from_scalar(q)


def fingerprint(key: ExtendedKey) -> bytes:
    "Return the first 4 bytes of the HASH160 of the compressed public key."

    if isinstance(key, ExtendedPrivKey):
        return hash160(_pub_key_from_prv_key(key.private_key))[:4]
    if isinstance(key, ExtendedPubKey):
        return hash160(key.public_key)[:4]
    raise HDKeyChainTypeError(f"not an extended key: {type(key).__name__}")


def neuter(xprv: ExtendedPrivKey) -> ExtendedPubKey:
    """Neutered Derivation (N).

    Derivation of the extended public key corresponding to an extended
    private key ("neutered" as it removes the ability to sign transactions).
    """

    if not isinstance(xprv, ExtendedPrivKey):
        raise HDKeyChainTypeError(f"not a private key: {type(xprv).__name__}")

    return ExtendedPubKey(
        public_key=_pub_key_from_prv_key(xprv.private_key),
        chain_code=xprv.chain_code,
        depth=xprv.depth,
        parent_fingerprint=xprv.parent_fingerprint,
        child_number=xprv.child_number,
    )


def ckd_priv(parent: ExtendedPrivKey, index: KeyIndex) -> ExtendedPrivKey:
    "Private parent key to private child key derivation."

    _check_index(index)
    if parent.depth == MAX_DEPTH:
        raise DepthOverflow(f"cannot derive beyond depth {MAX_DEPTH}")

    Q_bytes = _pub_key_from_prv_key(parent.private_key)
    if index.is_hardened:
        data = parent.key_data + _ser32(index)
    else:
        data = Q_bytes + _ser32(index)
    hmac_ = hmac_sha512(parent.chain_code, data)

    n = curve_order()
    offset = int.from_bytes(hmac_[:32], byteorder="big", signed=False)
    if offset >= n:
        logger.debug("invalid child key at index %s: tweak not in 0..n-1", index)
        raise InvalidChildKey(f"invalid child key at index {index}: tweak not in 0..n-1")
    q = int.from_bytes(parent.private_key, byteorder="big", signed=False)
    q = (q + offset) % n
    if q == 0:
        logger.debug("invalid child key at index %s: zero private key", index)
        raise InvalidChildKey(f"invalid child key at index {index}: zero private key")

    return ExtendedPrivKey(
        private_key=q.to_bytes(32, byteorder="big", signed=False),
        chain_code=hmac_[32:],
        depth=parent.depth + 1,
        parent_fingerprint=hash160(Q_bytes)[:4],
        child_number=index.to_u32(),
    )


def ckd_pub(parent: ExtendedPubKey, index: KeyIndex) -> ExtendedPubKey:
    "Public parent key to public child key derivation."

    _check_index(index)
    if index.is_hardened:
        raise HardenedDerivationUnsupported(
            f"invalid hardened derivation from public key: {index}"
        )
    if parent.depth == MAX_DEPTH:
        raise DepthOverflow(f"cannot derive beyond depth {MAX_DEPTH}")

    hmac_ = hmac_sha512(parent.chain_code, parent.public_key + _ser32(index))

    offset = int.from_bytes(hmac_[:32], byteorder="big", signed=False)
    if offset >= curve_order():
        logger.debug("invalid child key at index %s: tweak not in 0..n-1", index)
        raise InvalidChildKey(f"invalid child key at index {index}: tweak not in 0..n-1")
    Q = point_add(point_from_scalar(offset), point_from_compressed(parent.public_key))
    if is_infinity(Q):
        logger.debug("invalid child key at index %s: infinity point", index)
        raise InvalidChildKey(f"invalid child key at index {index}: infinity point")

    return ExtendedPubKey(
        public_key=point_serialize_compressed(Q),
        chain_code=hmac_[32:],
        depth=parent.depth + 1,
        parent_fingerprint=hash160(parent.public_key)[:4],
        child_number=index.to_u32(),
    )


def derive_child(key: ExtendedKey, index: KeyIndex) -> ExtendedKey:
    "Derive the child key of the same kind as the parent."

    if isinstance(key, ExtendedPrivKey):
        return ckd_priv(key, index)
    if isinstance(key, ExtendedPubKey):
        return ckd_pub(key, index)
    raise HDKeyChainTypeError(f"not an extended key: {type(key).__name__}")


def next_valid_child(key: ExtendedKey, index: KeyIndex) -> Tuple[KeyIndex, ExtendedKey]:
    """Return the first valid (index, child key) starting from index.

    This is the BIP32 suggested policy for invalid child keys:
    proceed with the next index of the same kind (normal or hardened).
    The returned index is the one actually used.
    """

    _check_index(index)
    while True:
        try:
            return index, derive_child(key, index)
        except InvalidChildKey as e:
            if index.value + 1 == HARDENED_OFFSET:
                raise InvalidChildNumber(f"no valid child index after {index}") from e
            index = type(index)(index.value + 1)
            logger.debug("proceeding with the next index: %s", index)
