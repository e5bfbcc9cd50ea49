from __future__ import annotations

import enum

from .keys import Capability, PublicKey


class KeyConstraints(enum.IntFlag):
    """X.509 key usage bits."""
    NO_CONSTRAINTS = 0
    DIGITAL_SIGNATURE = 0x8000
    NON_REPUDIATION = 0x4000
    KEY_ENCIPHERMENT = 0x2000
    DATA_ENCIPHERMENT = 0x1000
    KEY_AGREEMENT = 0x0800
    KEY_CERT_SIGN = 0x0400
    CRL_SIGN = 0x0200
    ENCIPHER_ONLY = 0x0100
    DECIPHER_ONLY = 0x0080


ALL_CONSTRAINTS = KeyConstraints(0)
for _flag in KeyConstraints:
    ALL_CONSTRAINTS |= _flag
del _flag

_SIGNING = Capability.VERIFYING_WITHOUT_RECOVERY | Capability.VERIFYING_WITH_RECOVERY


def find_constraints(
    key: PublicKey,
    limits: KeyConstraints = KeyConstraints.NO_CONSTRAINTS,
) -> KeyConstraints:
    """
    Usages the key's capabilities allow, restricted to limits.
    Empty limits mean no restriction.
    """
    constraints = KeyConstraints.NO_CONSTRAINTS

    if key.supports(Capability.ENCRYPTING):
        constraints |= KeyConstraints.KEY_ENCIPHERMENT

    if key.supports(Capability.KEY_AGREEMENT):
        constraints |= KeyConstraints.KEY_AGREEMENT

    # message recovery does not change the X.509 usage
    if key.supports(_SIGNING):
        constraints |= KeyConstraints.DIGITAL_SIGNATURE | KeyConstraints.NON_REPUDIATION

    if limits:
        constraints &= limits

    return constraints
