#!/usr/bin/env python3

# Copyright (C) The hdkeychain developers
#
# This file is part of hdkeychain. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of hdkeychain including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"Tests for the `hdkeychain.bip32.key_chain` module."

import hashlib
import hmac
import json
import logging
from os import path

import pytest

from hdkeychain.bip32 import derivation
from hdkeychain.bip32.chain_path import ChainPath, parse
from hdkeychain.bip32.derivation import ckd_priv, master_key, neuter
from hdkeychain.bip32.extended_key import ExtendedPubKey, b58decode, b58encode
from hdkeychain.bip32.key_chain import KeyChain, derive
from hdkeychain.bip32.key_index import Hardened, Normal
from hdkeychain.exceptions import (
    HardenedDerivationUnsupported,
    HDKeyChainTypeError,
    InvalidChainPath,
    InvalidChildKey,
)
from hdkeychain.hashes import hash160, hmac_sha512
from hdkeychain.versions import MAINNET_PRIVATE, MAINNET_PUBLIC

SEED = "000102030405060708090a0b0c0d0e0f"


def _test_vectors() -> list:
    filename = path.join(path.dirname(__file__), "_data", "bip32_test_vectors.json")
    with open(filename, "r", encoding="ascii") as file_:
        return json.load(file_)["vectors"]


def test_bip32_vectors() -> None:
    "BIP32 test vectors 1 to 4."

    for vector in _test_vectors():
        root = master_key(vector["seed"])
        chain = KeyChain(root)
        for key in vector["keys"]:
            xprv = chain.derive(key["path"])
            assert b58encode(xprv, MAINNET_PRIVATE) == key["xprv"], key["path"]
            xpub = chain.derive_public(key["path"])
            assert b58encode(xpub, MAINNET_PUBLIC) == key["xpub"], key["path"]


def test_public_derivation_vectors() -> None:
    "Normal segments derived from the parent xpub match the vectors."

    for vector in _test_vectors():
        keys = vector["keys"]
        for parent, child in zip(keys, keys[1:]):
            last = parse(child["path"])[-1]
            if last.is_hardened:
                continue
            xpub = derive(b58decode(parent["xpub"]), str(last))
            assert b58encode(xpub, MAINNET_PUBLIC) == child["xpub"]


def test_vector_1_end_to_end() -> None:
    root = master_key(SEED)
    xprv = derive(root, "m/0'/1/2'")
    expected = "xprv9z4pot5VBttmtdRTWfWQmoH1taj2axGVzFqSb8C9xaxKymcFzXBDptWmT7FwuEzG3ryjH4ktypQSAewRiNMjANTtpgP4mLTj34bhnZX7UiM"
    assert b58encode(xprv, MAINNET_PRIVATE) == expected
    assert xprv.depth == 3
    assert xprv.child_number == 0x80000002

    # same result with ChainPath, alternative markers, and step by step
    assert derive(root, parse("m/0'/1/2'")) == xprv
    assert derive(root, "m/0h/1/2H") == xprv
    step = ckd_priv(ckd_priv(ckd_priv(root, Hardened(0)), Normal(1)), Hardened(2))
    assert step == xprv

    # relative paths compose
    assert derive(derive(root, "m/0'"), "1/2'") == xprv
    assert derive(root, "0'/1/2'") == xprv


def test_empty_path_is_identity() -> None:
    root = master_key(SEED)
    assert derive(root, "m") is root
    assert derive(root, "") is root
    assert derive(root, ChainPath()) is root

    xpub = neuter(derive(root, "m/0'"))
    assert derive(xpub, "") is xpub
    assert derive(xpub, ChainPath((), absolute=False)) is xpub


def test_public_root() -> None:
    root = master_key(SEED)
    xpub = neuter(root)

    # normal paths commute with neutering
    assert derive(xpub, "m/0/1") == neuter(derive(root, "m/0/1"))
    assert KeyChain(xpub).derive_public("m/0") == neuter(derive(root, "m/0"))

    # hardened segments are rejected before any derivation
    err_msg = "hardened derivation from public key along path 'm/0/1'/2'"
    with pytest.raises(HardenedDerivationUnsupported, match=err_msg):
        derive(xpub, "m/0/1'/2")


def test_private_root_public_output() -> None:
    chain = KeyChain(master_key(SEED))
    xpub = chain.derive_public("m/0'/1")
    assert isinstance(xpub, ExtendedPubKey)
    assert xpub == neuter(chain.derive("m/0'/1"))


def test_absolute_path_requires_master() -> None:
    xprv = derive(master_key(SEED), "m/0'")
    err_msg = "absolute path 'm/1' from non-master key at depth 1"
    with pytest.raises(InvalidChainPath, match=err_msg):
        derive(xprv, "m/1")
    assert derive(xprv, "1") == derive(master_key(SEED), "m/0'/1")


def test_fail_fast_diagnostics(monkeypatch: pytest.MonkeyPatch) -> None:
    root = master_key(SEED)
    n = derivation.curve_order()
    calls = []

    def hmac_invalid_at_third_call(key: bytes, data: bytes) -> bytes:
        calls.append(data)
        if len(calls) == 3:
            return n.to_bytes(32, byteorder="big") + b"\x00" * 32
        return hmac_sha512(key, data)

    monkeypatch.setattr(derivation, "hmac_sha512", hmac_invalid_at_third_call)

    with pytest.raises(InvalidChildKey) as excinfo:
        derive(root, "m/0'/1/2'/2")
    err = excinfo.value
    assert err.segment == 3
    assert err.key_index == Hardened(2)
    assert err.path == "m/0'/1/2'/2"
    assert str(err).endswith("(derivation failed at segment 3 of path 'm/0'/1/2'/2')")
    # no further derivation step after the failing one
    assert len(calls) == 3


def test_debug_logging(caplog: pytest.LogCaptureFixture) -> None:
    root = master_key(SEED)
    with caplog.at_level(logging.DEBUG, logger="hdkeychain"):
        derive(root, "m/0'/1")
    assert "deriving path 'm/0'/1' from key 3442193e at depth 0" in caplog.text
    assert "segment 1 (0'): depth 1" in caplog.text
    assert "segment 2 (1): depth 2" in caplog.text
    assert root.private_key.hex() not in caplog.text
    assert root.chain_code.hex() not in caplog.text


def test_key_chain() -> None:
    root = master_key(SEED)
    chain = KeyChain(root)
    assert chain.root is root
    assert chain.derive("m") is root
    assert chain.derive("m/0'") == derive(root, "m/0'")
    assert repr(chain) == "KeyChain(private root at depth 0)"
    assert repr(KeyChain(neuter(root))) == "KeyChain(public root at depth 0)"

    with pytest.raises(HDKeyChainTypeError, match="not an extended key: "):
        KeyChain("xprv")  # type: ignore
    with pytest.raises(HDKeyChainTypeError, match="not an extended key: "):
        derive("xprv", "m")  # type: ignore
    with pytest.raises(HDKeyChainTypeError, match="not a path: "):
        derive(root, [0, 1])  # type: ignore
    with pytest.raises(InvalidChainPath):
        chain.derive("m/x")


def test_path_order() -> None:
    chain = KeyChain(master_key(SEED))
    assert chain.derive("0/1") == chain.derive("0/1")
    assert chain.derive("0/1") != chain.derive("1/0")
    assert chain.derive("0'/1") != chain.derive("0/1'")


# plain affine secp256k1 arithmetic, as in HWI bip32.py
_P = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEFFFFFC2F
_N = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141
_G = (
    0x79BE667EF9DCBBAC55A06295CE870B07029BFCDB2DCE28D959F2815B16F81798,
    0x483ADA7726A3C4655DA4FBFC0E1108A8FD17B448A68554199C47D08FFB10D4B8,
)


def _add(p1, p2):  # type: ignore
    if p1 is None:
        return p2
    if p2 is None:
        return p1
    if p1[0] == p2[0] and p1[1] != p2[1]:
        return None
    if p1 == p2:
        lam = (3 * p1[0] * p1[0] * pow(2 * p1[1], _P - 2, _P)) % _P
    else:
        lam = ((p2[1] - p1[1]) * pow(p2[0] - p1[0], _P - 2, _P)) % _P
    x3 = (lam * lam - p1[0] - p2[0]) % _P
    return x3, (lam * (p1[0] - x3) - p1[1]) % _P


def _pub_key(k: int) -> bytes:
    r, p = None, _G
    for i in range(256):
        if (k >> i) & 1:
            r = _add(r, p)
        p = _add(p, p)
    return (b"\x03" if r[1] & 1 else b"\x02") + r[0].to_bytes(32, byteorder="big")


def _reference_derivation(seed: bytes, u32s: list) -> tuple:
    "Return the 78 bytes xprv and xpub serializations, mainnet versions."

    i = hmac.new(b"Bitcoin seed", seed, hashlib.sha512).digest()
    k, c = int.from_bytes(i[:32], byteorder="big"), i[32:]
    depth, parent_fingerprint, child_number = 0, b"\x00" * 4, 0
    for u32 in u32s:
        pub_key = _pub_key(k)
        if u32 >= 0x80000000:
            data = b"\x00" + k.to_bytes(32, byteorder="big")
        else:
            data = pub_key
        i = hmac.new(c, data + u32.to_bytes(4, byteorder="big"), hashlib.sha512).digest()
        k, c = (int.from_bytes(i[:32], byteorder="big") + k) % _N, i[32:]
        depth, parent_fingerprint, child_number = depth + 1, hash160(pub_key)[:4], u32

    metadata = bytes([depth]) + parent_fingerprint + child_number.to_bytes(4, "big") + c
    xprv = MAINNET_PRIVATE + metadata + b"\x00" + k.to_bytes(32, byteorder="big")
    xpub = MAINNET_PUBLIC + metadata + _pub_key(k)
    return xprv, xpub


def test_zero_seed() -> None:
    "64 zero bytes seed along m/0'/1/2'."

    seed = b"\x00" * 64
    path_ = parse("m/0'/1/2'")
    assert path_.indexes == (Hardened(0), Normal(1), Hardened(2))

    xprv_bin, xpub_bin = _reference_derivation(seed, path_.to_u32s())
    chain = KeyChain(master_key(seed))
    assert chain.derive(path_).serialize(MAINNET_PRIVATE) == xprv_bin
    assert chain.derive_public(path_).serialize(MAINNET_PUBLIC) == xpub_bin
    assert len(xprv_bin) == len(xpub_bin) == 78
