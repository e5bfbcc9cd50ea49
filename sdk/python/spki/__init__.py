
"""
SPKI v0.1 X.509 SubjectPublicKeyInfo codec (Python)

DER/PEM encoding and decoding of public keys, 64-bit key identifiers,
and X.509 key-usage resolution. All operations are local.
"""

import logging

from .keys import (
    AlgorithmIdentifier,
    Capability,
    PublicKey,
    X509Encoder,
)
from .errors import (
    SPKIError,
    DecodingError,
    EncodingError,
    InternalError,
)
from .constraints import (
    KeyConstraints,
    ALL_CONSTRAINTS,
    find_constraints,
)
from .registry import (
    oid_to_name,
    name_to_oid,
    name_to_constructor,
    supported_algorithms,
)
from .algorithms import (
    RSAPublicKey,
    DSAPublicKey,
    ECPublicKey,
    Ed25519PublicKey,
    Ed448PublicKey,
    X25519PublicKey,
    X448PublicKey,
    wrap_public_key,
)
from .core import (
    X509Encoding,
    encode,
    pem_encode,
    load_key,
    load_key_file,
    load_key_bytes,
    copy_key,
    key_id,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "AlgorithmIdentifier",
    "Capability",
    "PublicKey",
    "X509Encoder",
    "SPKIError",
    "DecodingError",
    "EncodingError",
    "InternalError",
    "KeyConstraints",
    "ALL_CONSTRAINTS",
    "find_constraints",
    "oid_to_name",
    "name_to_oid",
    "name_to_constructor",
    "supported_algorithms",
    "RSAPublicKey",
    "DSAPublicKey",
    "ECPublicKey",
    "Ed25519PublicKey",
    "Ed448PublicKey",
    "X25519PublicKey",
    "X448PublicKey",
    "wrap_public_key",
    "X509Encoding",
    "encode",
    "pem_encode",
    "load_key",
    "load_key_file",
    "load_key_bytes",
    "copy_key",
    "key_id",
]
