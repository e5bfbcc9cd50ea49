from __future__ import annotations

import enum

DECODING_FAILED = "X.509 public key decoding failed"


class SPKIError(Exception):
    """Base class for all errors raised by this package."""


class DecodingError(SPKIError, ValueError):
    """
    Raised for any malformed public key input.

    The message is always the same so callers cannot tell which
    step of the decode rejected the input.
    """

    def __init__(self) -> None:
        super().__init__(DECODING_FAILED)


class EncodingError(SPKIError):
    pass


class InternalError(SPKIError, RuntimeError):
    pass


class DecodeFault(enum.Enum):
    MALFORMED_PEM = "malformed PEM framing"
    WRONG_LABEL = "unexpected PEM label"
    MALFORMED_ASN1 = "malformed SubjectPublicKeyInfo"
    TRAILING_DATA = "trailing data after SubjectPublicKeyInfo"
    EMPTY_KEY_BITS = "empty subjectPublicKey"
    UNKNOWN_OID = "unknown algorithm OID"
    NO_CONSTRUCTOR = "no key type registered for algorithm"
    NO_DECODER = "key type does not support X.509 decoding"
    KEY_REJECTED = "key material rejected by algorithm"


class KeyDecodeFault(Exception):
    """Internal decode failure. Converted to DecodingError before leaving the codec."""

    def __init__(self, fault: DecodeFault, detail: str = "") -> None:
        self.fault = fault
        self.detail = detail
        super().__init__(f"{fault.value}: {detail}" if detail else fault.value)
