#!/usr/bin/env python3

# Copyright (C) The hdkeychain developers
#
# This file is part of hdkeychain. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of hdkeychain including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"Tests for the `hdkeychain.versions` module."

import pytest

from hdkeychain.exceptions import InvalidLength
from hdkeychain.versions import (
    MAINNET_PRIVATE,
    MAINNET_PUBLIC,
    NETWORKS,
    TESTNET_PRIVATE,
    TESTNET_PUBLIC,
    is_private_version,
    is_public_version,
)


def test_well_known_versions() -> None:
    assert MAINNET_PRIVATE.hex() == "0488ade4"
    assert MAINNET_PUBLIC.hex() == "0488b21e"
    assert TESTNET_PRIVATE.hex() == "04358394"
    assert TESTNET_PUBLIC.hex() == "043587cf"

    for prv, pub in NETWORKS.values():
        assert is_private_version(prv)
        assert not is_public_version(prv)
        assert is_public_version(pub)
        assert not is_private_version(pub)


def test_unknown_version() -> None:
    assert not is_private_version("deadbeef")
    assert not is_public_version(b"\x00\x00\x00\x00")

    with pytest.raises(InvalidLength):
        is_private_version(b"\x04\x88\xad")
