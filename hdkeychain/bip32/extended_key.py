#!/usr/bin/env python3

# Copyright (C) The hdkeychain developers
#
# This file is part of hdkeychain. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of hdkeychain including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""BIP32 extended keys and their serialization.

An extended key is a private or public key
together with its chain code and derivation metadata.

A serialized BIP32 extended key is 78 bytes:

- [  : 4] version
- [ 4: 5] depth in the derivation path
- [ 5: 9] parent fingerprint
- [ 9:13] child number
- [13:45] chain code
- [45:78] compressed pub_key or [0x00][prv_key]

and it is usually Base58Check encoded.

Version bytes are not part of the key: they are provided by the caller
at serialization time and returned along the key at deserialization time.
"""

from dataclasses import dataclass, field
from typing import Any, Tuple, Union

from dataclasses_json import DataClassJsonMixin, config

from hdkeychain import base58
from hdkeychain.alias import Octets, String
from hdkeychain.bip32.chain_path import parse
from hdkeychain.bip32.key_index import MAX_U32, KeyIndex
from hdkeychain.ec import point_from_compressed, scalar_is_valid
from hdkeychain.exceptions import HDKeyChainTypeError, InvalidKeyData
from hdkeychain.utils import bytes_from_octets
from hdkeychain.versions import is_private_version, is_public_version

_REQUIRED_LENGTH = 78
_PRV_PREFIX = b"\x00"
_ZERO_FINGERPRINT = b"\x00\x00\x00\x00"


def _str_from_child_number(n: int) -> str:
    return str(KeyIndex.from_u32(n))


def _child_number_from_str(s: str) -> int:
    path = parse(s)
    if path.absolute or len(path) != 1:
        raise InvalidKeyData(f"invalid child number: '{s}'")
    return path[0].to_u32()


def _bytes_from_hex(s: str) -> bytes:
    try:
        return bytes.fromhex(s)
    except (TypeError, ValueError) as e:
        raise InvalidKeyData(f"invalid hex-string: '{s}'") from e


def _hex_field(**kwargs: Any) -> Any:
    metadata = config(encoder=lambda v: v.hex(), decoder=_bytes_from_hex)
    return field(metadata=metadata, **kwargs)


def _child_number_field() -> Any:
    metadata = config(encoder=_str_from_child_number, decoder=_child_number_from_str)
    return field(default=0, metadata=metadata)


def _check_metadata(key: Any) -> None:
    "Normalize and validate chain code and derivation metadata."

    object.__setattr__(key, "chain_code", bytes_from_octets(key.chain_code, 32))
    object.__setattr__(
        key, "parent_fingerprint", bytes_from_octets(key.parent_fingerprint, 4)
    )

    if not isinstance(key.depth, int):
        raise HDKeyChainTypeError("depth is not an instance of int")
    if not 0 <= key.depth <= 255:
        raise InvalidKeyData(f"invalid depth: {key.depth}")

    if not isinstance(key.child_number, int):
        raise HDKeyChainTypeError("child number is not an instance of int")
    if not 0 <= key.child_number <= MAX_U32:
        raise InvalidKeyData(f"invalid child number: {key.child_number}")

    if key.depth == 0:
        if key.parent_fingerprint != _ZERO_FINGERPRINT:
            err_msg = "zero depth with non-zero parent fingerprint: "
            err_msg += f"0x{key.parent_fingerprint.hex()}"
            raise InvalidKeyData(err_msg)
        if key.child_number != 0:
            err_msg = f"zero depth with non-zero child number: {key.child_number}"
            raise InvalidKeyData(err_msg)


@dataclass(frozen=True)
class ExtendedPrivKey(DataClassJsonMixin):
    "BIP32 extended private key."

    # 32 bytes big-endian scalar in [1, n-1]
    private_key: bytes = _hex_field(repr=False)
    chain_code: bytes = _hex_field()
    depth: int = 0
    parent_fingerprint: bytes = _hex_field(default=_ZERO_FINGERPRINT)
    # an int, not bytes, to avoid any byteorder ambiguity
    child_number: int = _child_number_field()

    def __post_init__(self) -> None:
        object.__setattr__(self, "private_key", bytes_from_octets(self.private_key, 32))
        if not scalar_is_valid(self.private_key):
            raise InvalidKeyData("invalid private key not in 1..n-1")
        _check_metadata(self)

    @property
    def is_private(self) -> bool:
        return True

    @property
    def key_data(self) -> bytes:
        "Return the 33 bytes key data: 0x00 followed by the private key."
        return _PRV_PREFIX + self.private_key

    def serialize(self, version: Octets) -> bytes:
        return serialize(self, version)

    def b58encode(self, version: Octets) -> str:
        return b58encode(self, version)


@dataclass(frozen=True)
class ExtendedPubKey(DataClassJsonMixin):
    "BIP32 extended public key."

    # 33 bytes compressed SEC point
    public_key: bytes = _hex_field()
    chain_code: bytes = _hex_field()
    depth: int = 0
    parent_fingerprint: bytes = _hex_field(default=_ZERO_FINGERPRINT)
    # an int, not bytes, to avoid any byteorder ambiguity
    child_number: int = _child_number_field()

    def __post_init__(self) -> None:
        object.__setattr__(self, "public_key", bytes_from_octets(self.public_key, 33))
        # raise InvalidKeyData if not a valid compressed point
        point_from_compressed(self.public_key)
        _check_metadata(self)

    @property
    def is_private(self) -> bool:
        return False

    @property
    def key_data(self) -> bytes:
        return self.public_key

    def serialize(self, version: Octets) -> bytes:
        return serialize(self, version)

    def b58encode(self, version: Octets) -> str:
        return b58encode(self, version)


ExtendedKey = Union[ExtendedPrivKey, ExtendedPubKey]


def serialize(key: ExtendedKey, version: Octets) -> bytes:
    "Return the 78 bytes serialization of the extended key."

    if not isinstance(key, (ExtendedPrivKey, ExtendedPubKey)):
        raise HDKeyChainTypeError(f"not an extended key: {type(key).__name__}")

    xkey_bin = bytes_from_octets(version, 4)
    xkey_bin += key.depth.to_bytes(1, byteorder="big", signed=False)
    xkey_bin += key.parent_fingerprint
    xkey_bin += key.child_number.to_bytes(4, byteorder="big", signed=False)
    xkey_bin += key.chain_code
    xkey_bin += key.key_data
    return xkey_bin


def deserialize_with_version(xkey_bin: Octets) -> Tuple[bytes, ExtendedKey]:
    """Return the (version, extended key) tuple parsed from 78 bytes.

    Well-known versions must agree with the kind of key data,
    any other version is accepted as it is.
    """

    xkey_bin = bytes_from_octets(xkey_bin, _REQUIRED_LENGTH)

    version = xkey_bin[0:4]
    depth = xkey_bin[4]
    parent_fingerprint = xkey_bin[5:9]
    child_number = int.from_bytes(xkey_bin[9:13], byteorder="big", signed=False)
    chain_code = xkey_bin[13:45]
    key_data = xkey_bin[45:78]

    if key_data[0] == 0:
        if is_public_version(version):
            err_msg = f"public key version with private key data: 0x{version.hex()}"
            raise InvalidKeyData(err_msg)
        key: ExtendedKey = ExtendedPrivKey(
            private_key=key_data[1:],
            chain_code=chain_code,
            depth=depth,
            parent_fingerprint=parent_fingerprint,
            child_number=child_number,
        )
    elif key_data[0] in (2, 3):
        if is_private_version(version):
            err_msg = f"private key version with public key data: 0x{version.hex()}"
            raise InvalidKeyData(err_msg)
        key = ExtendedPubKey(
            public_key=key_data,
            chain_code=chain_code,
            depth=depth,
            parent_fingerprint=parent_fingerprint,
            child_number=child_number,
        )
    else:
        raise InvalidKeyData(f"invalid key data prefix: 0x{key_data[:1].hex()}")

    return version, key


def deserialize(xkey_bin: Octets) -> ExtendedKey:
    "Return the extended key parsed from 78 bytes."
    return deserialize_with_version(xkey_bin)[1]


def b58encode(key: ExtendedKey, version: Octets) -> str:
    "Return the Base58Check encoded serialization of the extended key."
    return base58.b58encode(serialize(key, version)).decode("ascii")


def b58decode_with_version(address: String) -> Tuple[bytes, ExtendedKey]:

    if isinstance(address, str):
        address = address.strip()

    xkey_bin = base58.b58decode(address, _REQUIRED_LENGTH)
    return deserialize_with_version(xkey_bin)


def b58decode(address: String) -> ExtendedKey:
    "Return the extended key from its Base58Check encoding."
    return b58decode_with_version(address)[1]
