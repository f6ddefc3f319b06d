#!/usr/bin/env python3

# Copyright (C) The hdkeychain developers
#
# This file is part of hdkeychain. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of hdkeychain including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""BIP32 derivation path.

A derivation path is a sequence of child indexes,
either absolute (rooted at the master key "m") or relative:

- "m/44'/0'/1'/0/10" absolute path
- "44h/0H/1'/0/10" relative path
- "m" empty absolute path (the master key itself)
- "" empty relative path (any key itself)

Each segment is an ASCII decimal integer in 0..2^31-1,
optionally followed by a single hardened marker among "'", "h", "H".
The canonical string representation always uses "'".
"""

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Tuple, Union

from hdkeychain.bip32.key_index import HARDENED_OFFSET, Hardened, KeyIndex, Normal
from hdkeychain.exceptions import HDKeyChainTypeError, InvalidChainPath

HARDENED_MARKERS = ("'", "h", "H")
_MASTER = "m"
_SEPARATOR = "/"
_DIGITS = "0123456789"


def _index_from_segment(segment: str, position: int, text: str, reason: str) -> KeyIndex:

    err_msg = f"invalid segment {position} '{segment}' in path '{text}': "
    if segment == "":
        raise InvalidChainPath(err_msg + reason)

    digits = segment
    hardened = segment[-1] in HARDENED_MARKERS
    if hardened:
        digits = segment[:-1]
    if digits == "":
        raise InvalidChainPath(err_msg + "missing index")
    if any(c not in _DIGITS for c in digits):
        if any(c in HARDENED_MARKERS for c in digits):
            err_msg += "malformed hardened marker"
        else:
            err_msg += "not a decimal integer"
        raise InvalidChainPath(err_msg)

    # 2^31-1 has 10 digits; int() is bounded on very long strings
    digits = digits.lstrip("0")
    if len(digits) > 10:
        raise InvalidChainPath(err_msg + "index not in 0..2^31-1")
    value = int(digits or "0")
    if value >= HARDENED_OFFSET:
        raise InvalidChainPath(err_msg + "index not in 0..2^31-1")
    return Hardened(value) if hardened else Normal(value)


def parse(text: str) -> "ChainPath":
    """Return the ChainPath represented by the input string.

    The string is scanned left to right, segment by segment:
    the first invalid segment is reported (1-based) in the error message.
    """

    if not isinstance(text, str):
        raise HDKeyChainTypeError(f"not a path string: {type(text).__name__}")

    if text == "":
        return ChainPath((), absolute=False)

    segments = text.split(_SEPARATOR)
    absolute = segments[0] == _MASTER
    if absolute:
        segments = segments[1:]
        if not segments:
            return ChainPath((), absolute=True)

    indexes: List[KeyIndex] = []
    for position, segment in enumerate(segments, 1):
        # explanation for an empty segment
        if position == len(segments):
            reason = "trailing separator"
        elif position == 1 and not absolute:
            reason = "leading separator"
        else:
            reason = "empty segment"
        indexes.append(_index_from_segment(segment, position, text, reason))
    return ChainPath(tuple(indexes), absolute=absolute)


@dataclass(frozen=True)
class ChainPath:
    """Immutable sequence of KeyIndex, absolute or relative."""

    indexes: Tuple[KeyIndex, ...] = ()
    absolute: bool = True

    def __post_init__(self) -> None:
        indexes = tuple(self.indexes)
        for i in indexes:
            if not isinstance(i, (Normal, Hardened)):
                raise HDKeyChainTypeError(f"not a KeyIndex: {i!r}")
        object.__setattr__(self, "indexes", indexes)

    @classmethod
    def parse(cls, text: str) -> "ChainPath":
        return parse(text)

    @classmethod
    def from_u32s(cls, ints: Iterable[int], absolute: bool = True) -> "ChainPath":
        "Return the ChainPath of the u32 encoded indexes."
        return cls(tuple(KeyIndex.from_u32(i) for i in ints), absolute)

    def to_u32s(self) -> List[int]:
        return [i.to_u32() for i in self.indexes]

    def to_string(self) -> str:
        result = _SEPARATOR.join(str(i) for i in self.indexes)
        if not self.absolute:
            return result
        return _MASTER + (_SEPARATOR + result if result else "")

    def __str__(self) -> str:
        return self.to_string()

    @property
    def has_hardened(self) -> bool:
        return any(i.is_hardened for i in self.indexes)

    def child(self, index: Union[KeyIndex, int]) -> "ChainPath":
        """Return the path extended by one more index.

        An int is interpreted as u32 encoded index.
        """
        if not isinstance(index, KeyIndex):
            index = KeyIndex.from_u32(index)
        return ChainPath(self.indexes + (index,), self.absolute)

    def __add__(self, other: Union["ChainPath", str]) -> "ChainPath":
        if isinstance(other, str):
            other = parse(other)
        if not isinstance(other, ChainPath):
            return NotImplemented
        if other.absolute:
            raise InvalidChainPath(f"cannot append absolute path: '{other}'")
        return ChainPath(self.indexes + other.indexes, self.absolute)

    def __len__(self) -> int:
        return len(self.indexes)

    def __iter__(self) -> Iterator[KeyIndex]:
        return iter(self.indexes)

    def __getitem__(self, i: int) -> KeyIndex:
        return self.indexes[i]
