#!/usr/bin/env python3

# Copyright (C) The hdkeychain developers
#
# This file is part of hdkeychain. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of hdkeychain including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""BIP32 child key index.

A child index is either normal or hardened:
both variants carry a 31-bit value u (0 <= u < 2^31),
their 32-bit encoding being u for normal indexes
and u + 2^31 for hardened ones.

Hardened derivation requires the parent private key,
normal derivation can also be performed from the parent public key.
"""

from dataclasses import dataclass
from typing import Any

from hdkeychain.exceptions import HDKeyChainTypeError, InvalidChildNumber

HARDENED_OFFSET = 0x80000000
MAX_U32 = 0xFFFFFFFF
# canonical output marker; "h" and "H" are also accepted when parsing
CANONICAL_HARDENED_MARKER = "'"


def _check_value(value: Any) -> None:
    # bool is an int subclass, but it is never a valid index
    if not isinstance(value, int) or isinstance(value, bool):
        raise InvalidChildNumber(f"invalid index type: {type(value).__name__}")
    if not 0 <= value < HARDENED_OFFSET:
        raise InvalidChildNumber(f"index not in 0..2^31-1: {value}")


@dataclass(frozen=True)
class KeyIndex:
    """Abstract child index, either Normal or Hardened.

    Use KeyIndex.normal, KeyIndex.hardened or KeyIndex.from_u32
    to build one of the two concrete variants.
    """

    value: int

    def __post_init__(self) -> None:
        if type(self) is KeyIndex:
            raise HDKeyChainTypeError("KeyIndex is abstract: use Normal or Hardened")
        _check_value(self.value)

    @property
    def is_hardened(self) -> bool:
        return isinstance(self, Hardened)

    def to_u32(self) -> int:
        return self.value + HARDENED_OFFSET if self.is_hardened else self.value

    def __str__(self) -> str:
        return f"{self.value}{CANONICAL_HARDENED_MARKER if self.is_hardened else ''}"

    @staticmethod
    def normal(value: int) -> "Normal":
        return Normal(value)

    @staticmethod
    def hardened(value: int) -> "Hardened":
        return Hardened(value)

    @staticmethod
    def from_u32(n: int) -> "KeyIndex":
        """Return the index encoded by the u32 integer n.

        n >= 2^31 is the hardened index n - 2^31.
        """
        if not isinstance(n, int) or isinstance(n, bool):
            raise InvalidChildNumber(f"invalid index type: {type(n).__name__}")
        if not 0 <= n <= MAX_U32:
            raise InvalidChildNumber(f"index not in 0..2^32-1: {n}")
        if n >= HARDENED_OFFSET:
            return Hardened(n - HARDENED_OFFSET)
        return Normal(n)


@dataclass(frozen=True)
class Normal(KeyIndex):
    "Normal (non-hardened) child index."


@dataclass(frozen=True)
class Hardened(KeyIndex):
    "Hardened child index."
