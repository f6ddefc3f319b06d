#!/usr/bin/env python3

# Copyright (C) 2017-2022 The btclib developers
# Copyright (C) The hdkeychain developers
#
# This file is part of hdkeychain. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of hdkeychain including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""SEC compressed point representation.

BIP32 only ever serializes public keys as 33 bytes compressed points:
0x02 or 0x03 (according to y parity) followed by the x-coordinate.
"""

from hdkeychain.alias import Octets, Point
from hdkeychain.ec.curve import Curve, secp256k1
from hdkeychain.exceptions import HDKeyChainValueError, InvalidKeyData
from hdkeychain.utils import bytes_from_octets, hex_string


def bytes_from_point(Q: Point, ec: Curve = secp256k1) -> bytes:
    """Return a point as compressed octet sequence.

    Return a point as compressed (0x02, 0x03) octet sequence,
    according to SEC 1 v.2, section 2.3.3.
    """

    # check that Q is a point and that is on curve
    ec.require_on_curve(Q)

    if Q[1] == 0:  # infinity point in affine coordinates
        raise HDKeyChainValueError("no bytes representation for infinity point")

    bPx = Q[0].to_bytes(ec.p_size, byteorder="big")
    return (b"\x03" if (Q[1] & 1) else b"\x02") + bPx


def point_from_octets(pub_key: Octets, ec: Curve = secp256k1) -> Point:
    """Return a tuple (Px, Py) that belongs to the curve.

    Return a tuple (Px, Py) that belongs to the curve according to
    SEC 1 v.2, section 2.3.4.
    """

    pub_key = bytes_from_octets(pub_key, ec.p_size + 1)

    if pub_key[0] not in (0x02, 0x03):
        raise InvalidKeyData(f"not a compressed point: {pub_key.hex()}")

    Px = int.from_bytes(pub_key[1:], byteorder="big")
    try:
        Py = ec.y_even(Px)  # also check Px validity
    except HDKeyChainValueError as e:
        msg = f"invalid x-coordinate: '{hex_string(Px)}'"
        raise InvalidKeyData(msg) from e
    return Px, Py if pub_key[0] == 0x02 else ec.p - Py
