#!/usr/bin/env python3

# Copyright (C) The hdkeychain developers
#
# This file is part of hdkeychain. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of hdkeychain including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""secp256k1 primitives consumed by BIP32 derivation.

These are the only elliptic curve operations the derivation engine needs:
scalar validation, generator and point multiplication, point addition,
and compressed point (de)serialization.
"""

from hdkeychain.alias import Octets, Point
from hdkeychain.ec import libsecp256k1
from hdkeychain.ec.curve import mult, secp256k1
from hdkeychain.ec.sec_point import bytes_from_point, point_from_octets
from hdkeychain.utils import bytes_from_octets


def curve_order() -> int:
    return secp256k1.n


def scalar_is_valid(scalar: Octets) -> bool:
    """Return True if the 32 bytes big-endian scalar is in [1, n-1]."""
    scalar = bytes_from_octets(scalar, 32)
    return 0 < int.from_bytes(scalar, byteorder="big") < secp256k1.n


def point_from_scalar(q: int) -> Point:
    "Return q*G."
    return mult(q)


def point_add(P: Point, Q: Point) -> Point:
    return secp256k1.add(P, Q)


def point_mul(q: int, Q: Point) -> Point:
    return mult(q, Q)


def point_serialize_compressed(Q: Point) -> bytes:
    return bytes_from_point(Q)


def pub_key_from_scalar(q: int) -> bytes:
    """Return the compressed SEC public key of the scalar q.

    q is assumed to be in [1, n-1].
    """
    if libsecp256k1.is_available():
        return libsecp256k1.pubkey_from_prvkey(q)
    return bytes_from_point(mult(q))


def point_from_compressed(pub_key: Octets) -> Point:
    """Return the curve point of a 33 bytes compressed public key.

    The x-coordinate is validated to be on the curve.
    """
    return point_from_octets(pub_key)


def is_infinity(Q: Point) -> bool:
    # the infinity point in affine coordinates has y == 0
    return Q[1] == 0
