#!/usr/bin/env python3

# Copyright (C) The hdkeychain developers
#
# This file is part of hdkeychain. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of hdkeychain including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Exception classes.

The base classes are only meant to discriminate between Exceptions
being raised by hdkeychain from those raised by other codebase:
users are usually fine just dealing with the regular
ValueError, TypeError, and RuntimeError
from which the hdkeychain versions are derived.

The HDKeyChainValueError subclasses are the typed errors
of the BIP32 derivation protocol:

- InvalidChildNumber: child index out of its range
- InvalidChainPath: malformed derivation path
- InvalidSeedLength: seed not in 16..64 bytes
- InvalidScalar: master key material not in 1..n-1
- InvalidChildKey: child key material not valid, the caller may
  decide to proceed with the next index
- HardenedDerivationUnsupported: hardened derivation from a public key
- DepthOverflow: derivation beyond depth 255
- InvalidLength: serialized data of the wrong size
- ChecksumMismatch: invalid Base58Check checksum
- InvalidKeyData: inconsistent extended key data
- InvalidBase58: invalid Base58 character
"""

from typing import Any, Optional


class HDKeyChainValueError(ValueError):
    # diagnostics attached by KeyChain when a derivation step fails
    segment: Optional[int] = None
    key_index: Optional[Any] = None
    path: Optional[str] = None

    def __str__(self) -> str:
        msg = super().__str__()
        if self.segment is None:
            return msg
        return f"{msg} (derivation failed at segment {self.segment} of path '{self.path}')"


class HDKeyChainTypeError(TypeError):
    pass


class HDKeyChainRuntimeError(RuntimeError):
    pass


class InvalidChildNumber(HDKeyChainValueError):
    pass


class InvalidChainPath(HDKeyChainValueError):
    pass


class InvalidSeedLength(HDKeyChainValueError):
    pass


class InvalidScalar(HDKeyChainValueError):
    pass


class InvalidChildKey(HDKeyChainValueError):
    pass


class HardenedDerivationUnsupported(HDKeyChainValueError):
    pass


class DepthOverflow(HDKeyChainValueError):
    pass


class InvalidLength(HDKeyChainValueError):
    pass


class ChecksumMismatch(HDKeyChainValueError):
    pass


class InvalidKeyData(HDKeyChainValueError):
    pass


class InvalidBase58(HDKeyChainValueError):
    pass
