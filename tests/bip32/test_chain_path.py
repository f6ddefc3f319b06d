#!/usr/bin/env python3

# Copyright (C) The hdkeychain developers
#
# This file is part of hdkeychain. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of hdkeychain including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"Tests for the `hdkeychain.bip32.chain_path` module."

import pytest

from hdkeychain.bip32.chain_path import ChainPath, parse
from hdkeychain.bip32.key_index import Hardened, Normal
from hdkeychain.exceptions import HDKeyChainTypeError, InvalidChainPath, InvalidChildNumber


def test_parse() -> None:
    path = parse("m/0'/1/2'")
    assert path.absolute
    assert path.indexes == (Hardened(0), Normal(1), Hardened(2))
    assert len(path) == 3
    assert path[1] == Normal(1)
    assert list(path) == [Hardened(0), Normal(1), Hardened(2)]
    assert path.has_hardened

    path = parse("44h/0H/1'/0/10")
    assert not path.absolute
    assert path.to_u32s() == [0x8000002C, 0x80000000, 0x80000001, 0, 10]
    assert str(path) == "44'/0'/1'/0/10"

    assert parse("m/2147483647'") == ChainPath((Hardened(0x7FFFFFFF),))
    # leading zeros are accepted, the canonical form drops them
    assert str(parse("m/007")) == "m/7"
    assert parse("m/" + "0" * 5000 + "1") == ChainPath((Normal(1),))
    assert parse("0000") == ChainPath((Normal(0),), absolute=False)

    assert not parse("m/0/1").has_hardened
    assert ChainPath.parse("0/1") == parse("0/1")


def test_empty_paths() -> None:
    master = parse("m")
    assert master.absolute
    assert len(master) == 0
    assert str(master) == "m"
    assert master == ChainPath()

    relative = parse("")
    assert not relative.absolute
    assert len(relative) == 0
    assert str(relative) == ""
    assert relative != master


def test_canonical_round_trip() -> None:
    for canonical in (
        "m",
        "",
        "m/0",
        "m/0'/1/2'/2/1000000000",
        "m/0/2147483647'/1/2147483646'/2",
        "0'/1",
        "1",
    ):
        assert parse(canonical).to_string() == canonical

    assert parse("m/0h/1H").to_string() == "m/0'/1'"


def test_u32s() -> None:
    ints = [0x80000000, 1, 0x80000002]
    path = ChainPath.from_u32s(ints)
    assert path == parse("m/0'/1/2'")
    assert path.to_u32s() == ints
    assert ChainPath.from_u32s(ints, absolute=False) == parse("0'/1/2'")

    with pytest.raises(InvalidChildNumber):
        ChainPath.from_u32s([2**32])


def test_composition() -> None:
    path = parse("m/0'")
    assert path.child(Normal(1)) == parse("m/0'/1")
    assert path.child(0x80000001) == parse("m/0'/1'")
    assert path + parse("1/2'") == parse("m/0'/1/2'")
    assert path + "1/2'" == parse("m/0'/1/2'")
    assert parse("1") + parse("2") == parse("1/2")
    assert path + "" == path
    # the original path is unchanged
    assert path == parse("m/0'")

    with pytest.raises(InvalidChainPath, match="cannot append absolute path: "):
        path + parse("m/1")  # pylint: disable=expression-not-assigned

    with pytest.raises(HDKeyChainTypeError, match="not a KeyIndex: "):
        ChainPath((0, 1))  # type: ignore


def test_invalid_paths() -> None:
    invalid_paths = {
        "m/": (1, "trailing separator"),
        "/0": (1, "leading separator"),
        "0/": (2, "trailing separator"),
        "m//0": (1, "empty segment"),
        "m/0//1": (2, "empty segment"),
        "m/a": (1, "not a decimal integer"),
        "m/1/-1": (2, "not a decimal integer"),
        "m/0''": (1, "malformed hardened marker"),
        "m/0h'": (1, "malformed hardened marker"),
        "m/'0": (1, "malformed hardened marker"),
        "m/h": (1, "missing index"),
        "m/2147483648": (1, "index not in 0..2^31-1"),
        "m/0/2147483648'": (2, "index not in 0..2^31-1"),
        "m/99999999999": (1, "index not in 0..2^31-1"),
        "m/" + "9" * 5000: (1, "index not in 0..2^31-1"),
        "m/0/" + "1" * 5000 + "h": (2, "index not in 0..2^31-1"),
        "m/0/m": (2, "not a decimal integer"),
        "M/0": (1, "not a decimal integer"),
        "m/ 1": (1, "not a decimal integer"),
        "m/١": (1, "not a decimal integer"),
    }
    for path, (position, reason) in invalid_paths.items():
        with pytest.raises(InvalidChainPath) as excinfo:
            parse(path)
        err_msg = str(excinfo.value)
        assert err_msg.startswith(f"invalid segment {position} "), path
        assert f"in path '{path}': " in err_msg, path
        assert err_msg.endswith(reason), path

    with pytest.raises(HDKeyChainTypeError, match="not a path string: "):
        parse(["m", 0])  # type: ignore
