#!/usr/bin/env python3

# Copyright (C) 2017-2022 The btclib developers
# Copyright (C) The hdkeychain developers
#
# This file is part of hdkeychain. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of hdkeychain including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Elliptic curve class and scalar multiplication.

The elliptic curve is the set of points (x, y)
that are solutions to a Weierstrass equation y^2 = x^3 + a*x + b,
with x, y, a, and b in Fp (p being a prime),
together with a point at infinity INF.

Only the prime order curves used by BIP32 are needed here,
i.e. secp256k1, with cofactor h=1.
"""

from math import ceil
from typing import Optional

from hdkeychain.alias import INF, INFJ, Integer, JacPoint, Point
from hdkeychain.ec import libsecp256k1
from hdkeychain.exceptions import HDKeyChainValueError
from hdkeychain.utils import hex_string, int_from_integer


def jac_from_aff(Q: Point) -> JacPoint:
    """Return the Jacobian representation of the affine point.

    The input point is assumed to be on curve.
    """
    return Q[0], Q[1], 1 if Q[1] else 0


class Curve:
    "Prime order group of the points of an elliptic curve over Fp."

    def __init__(self, p: Integer, a: Integer, b: Integer, G: Point, n: Integer) -> None:

        p = int_from_integer(p)
        # must be true to compute square roots as y = y2^((p+1)/4)
        if p % 4 != 3:
            raise HDKeyChainValueError(f"field prime is not 3 mod 4: {hex_string(p)}")
        self.p = p
        self.p_size = ceil(p.bit_length() / 8)

        self._a = int_from_integer(a)
        self._b = int_from_integer(b)
        if (4 * self._a ** 3 + 27 * self._b ** 2) % p == 0:
            raise HDKeyChainValueError("zero discriminant")

        self.G = G
        self.GJ = jac_from_aff(G)
        self.require_on_curve(G)

        self.n = int_from_integer(n)
        self.n_size = ceil(self.n.bit_length() / 8)

    def __repr__(self) -> str:
        result = f"Curve('{hex_string(self.p)}', {self._a}, {self._b}, "
        result += f"('{hex_string(self.G[0])}', '{hex_string(self.G[1])}'), "
        result += f"'{hex_string(self.n)}')"
        return result

    def aff_from_jac(self, Q: JacPoint) -> Point:
        # point is assumed to be on curve
        if Q[2] == 0:  # Infinity point in Jacobian coordinates
            return INF

        Z2 = Q[2] * Q[2]
        x = Q[0] * pow(Z2, -1, self.p)
        y = Q[1] * pow(Z2 * Q[2], -1, self.p)
        return x % self.p, y % self.p

    def add(self, Q1: Point, Q2: Point) -> Point:
        """Return the sum of two points.

        The input points must be on the curve.
        """

        self.require_on_curve(Q1)
        self.require_on_curve(Q2)
        return self.aff_from_jac(self.add_jac(jac_from_aff(Q1), jac_from_aff(Q2)))

    def add_jac(self, Q: JacPoint, R: JacPoint) -> JacPoint:
        # points are assumed to be on curve

        RZ2 = R[2] * R[2]
        RZ3 = RZ2 * R[2]
        QZ2 = Q[2] * Q[2]
        QZ3 = QZ2 * Q[2]

        M = Q[0] * RZ2
        N = R[0] * QZ2

        T = Q[1] * RZ3
        U = R[1] * QZ3

        if M % self.p == N % self.p and T % self.p == U % self.p:
            return self.double_jac(Q)

        W = U - T
        V = N - M

        V2 = V * V
        V3 = V2 * V
        MV2 = M * V2

        X = (W * W - V3 - 2 * MV2) % self.p
        Y = (W * (MV2 - X) - T * V3) % self.p
        Z = (V * Q[2] * R[2]) % self.p

        # Z is zero if Q or R are equal to INFJ,
        # so (X, Y, Z) is INFJ instead of being R or Q (respectively)
        #      Q==INFJ  +    R==INFJ  * 2
        #            0  +          0  * 2 = 0 → (X, Y, Z)
        #            1  +          0  * 2 = 1 → R
        #            0  +          1  * 2 = 2 → Q
        #            1  +          1  * 2 = 3 → INFJ
        ret_values = [(X, Y, Z), R, Q, INFJ]
        i = (Q[2] == 0) + (R[2] == 0) * 2
        return ret_values[i]

    def double_jac(self, Q: JacPoint) -> JacPoint:
        # point is assumed to be on curve

        QZ2 = Q[2] * Q[2]
        QY2 = Q[1] * Q[1]
        W = 3 * Q[0] * Q[0] + self._a * QZ2 * QZ2
        V = 4 * Q[0] * QY2
        X = W * W - 2 * V
        Y = W * (V - X) - 8 * QY2 * QY2
        Z = 2 * Q[1] * Q[2]
        return X % self.p, Y % self.p, Z % self.p

    def _y2(self, x: int) -> int:
        # skipping a crucial check here:
        # if sqrt(y*y) does not exist, then x is not valid.
        # This is a good reason to keep this method private
        return ((x * x + self._a) * x + self._b) % self.p

    def y(self, x: int) -> int:
        """Return the y coordinate from x, as in (x, y)."""
        if not 0 <= x < self.p:
            raise HDKeyChainValueError(f"x-coordinate not in 0..p-1: {hex_string(x)}")
        y2 = self._y2(x)
        root = pow(y2, (self.p + 1) // 4, self.p)
        if root * root % self.p != y2:
            raise HDKeyChainValueError(f"invalid x-coordinate: {hex_string(x)}")
        return root

    def y_even(self, x: int) -> int:
        """Return the even affine y-coordinate associated to x."""
        root = self.y(x)
        return self.p - root if root % 2 else root

    def require_on_curve(self, Q: Point) -> None:
        """Require the input curve Point to be on the curve.

        An Error is raised if not.
        """
        if not self.is_on_curve(Q):
            raise HDKeyChainValueError("point not on curve")

    def is_on_curve(self, Q: Point) -> bool:
        """Return True if the point is on the curve."""
        if len(Q) != 2:
            raise HDKeyChainValueError("point must be a tuple[int, int]")
        if Q[1] == 0:  # Infinity point in affine coordinates
            return True
        if not 0 < Q[1] < self.p:  # y cannot be zero
            raise HDKeyChainValueError(f"y-coordinate not in 1..p-1: '{hex_string(Q[1])}'")
        return self._y2(Q[0]) == (Q[1] * Q[1] % self.p)


def mult_jac(m: int, Q: JacPoint, ec: Curve) -> JacPoint:
    """Scalar multiplication of a curve point in Jacobian coordinates.

    This implementation uses
    'double & add' algorithm,
    'right-to-left' binary decomposition of the m coefficient,
    Jacobian coordinates.

    The input point is assumed to be on curve and
    the m coefficient is assumed to have been reduced mod n.
    """

    if m < 0:
        raise HDKeyChainValueError(f"negative m: {hex(m)}")

    # R[0] is the running result, R[1] = R[0] + Q is an ancillary variable
    R = [INFJ, Q]
    # if least significant bit of m is 1, then add Q to R[0]
    R[not m & 1] = Q
    # remove the bit just accounted for
    m >>= 1
    while m > 0:
        # the doubling part of 'double & add'
        Q = ec.double_jac(Q)
        # always perform the addition, even if useless, to be constant-time
        # but use it as R[0] only if least significant bit of m is 1
        R[not m & 1] = ec.add_jac(R[0], Q)
        m >>= 1
    return R[0]


# SEC 2 v.2, section 2.4.1
secp256k1 = Curve(
    p=0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEFFFFFC2F,
    a=0,
    b=7,
    G=(
        0x79BE667EF9DCBBAC55A06295CE870B07029BFCDB2DCE28D959F2815B16F81798,
        0x483ADA7726A3C4655DA4FBFC0E1108A8FD17B448A68554199C47D08FFB10D4B8,
    ),
    n=0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141,
)


def mult(m: Integer, Q: Optional[Point] = None, ec: Curve = secp256k1) -> Point:
    """Elliptic curve scalar multiplication.

    Q defaults to the generator point G.
    The m coefficient is reduced mod n.
    """
    if Q is None:
        if ec is secp256k1 and libsecp256k1.is_available():
            return libsecp256k1.mult(m)
        QJ = ec.GJ
    else:
        ec.require_on_curve(Q)
        QJ = jac_from_aff(Q)

    m = int_from_integer(m) % ec.n
    R = mult_jac(m, QJ, ec)
    return ec.aff_from_jac(R)
