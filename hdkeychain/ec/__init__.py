#!/usr/bin/env python3

# Copyright (C) The hdkeychain developers
#
# This file is part of hdkeychain. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of hdkeychain including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Module hdkeychain.ec."""

from hdkeychain.ec.curve import Curve, mult, secp256k1
from hdkeychain.ec.primitives import (
    curve_order,
    is_infinity,
    point_add,
    point_from_compressed,
    point_from_scalar,
    point_mul,
    point_serialize_compressed,
    pub_key_from_scalar,
    scalar_is_valid,
)
from hdkeychain.ec.sec_point import bytes_from_point, point_from_octets

__all__ = [
    "Curve",
    "mult",
    "secp256k1",
    "bytes_from_point",
    "point_from_octets",
    "curve_order",
    "is_infinity",
    "point_add",
    "point_from_compressed",
    "point_from_scalar",
    "point_mul",
    "point_serialize_compressed",
    "pub_key_from_scalar",
    "scalar_is_valid",
]
