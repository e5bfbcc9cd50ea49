"""Key model shared by the codec and the algorithm adapters.

A key variant advertises what it can do through a static ``capabilities``
set and exposes its X.509 marshalling through two optional adapters:

* ``x509_encoder()`` returns the AlgorithmIdentifier and raw key bits,
* ``x509_decoder()`` returns a callable that builds a complete key from them.

Either adapter may be ``None`` for a variant that cannot take part in that
direction of the SubjectPublicKeyInfo codec.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Callable, Optional


@dataclass(frozen=True)
class AlgorithmIdentifier:
    """
    oid: dotted object identifier, e.g. "1.2.840.113549.1.1.1".
    parameters: full DER encoding of the parameters field, b"" when absent.
    """
    oid: str
    parameters: bytes = b""


@dataclass(frozen=True)
class X509Encoder:
    alg_id: AlgorithmIdentifier
    key_bits: bytes


X509Decoder = Callable[[AlgorithmIdentifier, bytes], "PublicKey"]


class Capability(enum.Flag):
    NONE = 0
    ENCRYPTING = enum.auto()
    KEY_AGREEMENT = enum.auto()
    VERIFYING_WITHOUT_RECOVERY = enum.auto()
    VERIFYING_WITH_RECOVERY = enum.auto()


class PublicKey:
    """Base class for every public key variant."""

    algo_name: str = ""
    capabilities: Capability = Capability.NONE

    def supports(self, capability: Capability) -> bool:
        return bool(self.capabilities & capability)

    def x509_encoder(self) -> Optional[X509Encoder]:
        return None

    @classmethod
    def x509_decoder(cls) -> Optional[X509Decoder]:
        return None

    def _identity(self) -> Any:
        encoder = self.x509_encoder()
        return encoder if encoder is not None else id(self)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PublicKey) or type(other) is not type(self):
            return NotImplemented
        return self._identity() == other._identity()

    def __hash__(self) -> int:
        return hash((type(self), self._identity()))

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.algo_name}>"
