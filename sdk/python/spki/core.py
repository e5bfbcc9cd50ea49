from __future__ import annotations

import enum
import hashlib
import logging
from pathlib import Path
from typing import BinaryIO, Union

from cryptography.exceptions import UnsupportedAlgorithm
from pyasn1.error import PyAsn1Error

from .asn1 import decode_spki, encode_spki
from .errors import (
    DecodeFault,
    DecodingError,
    EncodingError,
    InternalError,
    KeyDecodeFault,
)
from .keys import PublicKey
from .registry import name_to_constructor, oid_to_name
from .utils import (
    looks_like_pem,
    maybe_der,
    pem_decode,
    pem_encode as pem_frame,
    uint64_from_be,
    utf8_encode,
)

logger = logging.getLogger(__name__)

PEM_LABEL = "PUBLIC KEY"
KEY_ID_HASH = "sha1"
KEY_ID_SIZE = 8


class X509Encoding(enum.Enum):
    DER = "der"
    PEM = "pem"


# ─────────────────────────────────────────────
# Encoding
# ─────────────────────────────────────────────

def encode(key: PublicKey, encoding: X509Encoding = X509Encoding.DER) -> bytes:
    encoder = key.x509_encoder()
    if encoder is None:
        raise EncodingError(f"{key.algo_name or type(key).__name__} key does not support X.509 encoding")

    der = encode_spki(encoder.alg_id, encoder.key_bits)

    if encoding is X509Encoding.PEM:
        return utf8_encode(pem_frame(der, PEM_LABEL))
    return der


def pem_encode(key: PublicKey) -> str:
    return encode(key, X509Encoding.PEM).decode("ascii")


# ─────────────────────────────────────────────
# Decoding
# ─────────────────────────────────────────────

def _unwrap(data: bytes) -> bytes:
    if maybe_der(data) and not looks_like_pem(data):
        return data

    try:
        label, der = pem_decode(data)
    except ValueError as e:
        raise KeyDecodeFault(DecodeFault.MALFORMED_PEM, str(e)) from e

    if label != PEM_LABEL:
        raise KeyDecodeFault(DecodeFault.WRONG_LABEL, label)
    return der


def _decode(data: bytes) -> PublicKey:
    alg_id, key_bits = decode_spki(_unwrap(data))

    if not key_bits:
        raise KeyDecodeFault(DecodeFault.EMPTY_KEY_BITS)

    alg_name = oid_to_name(alg_id.oid)
    if alg_name is None:
        raise KeyDecodeFault(DecodeFault.UNKNOWN_OID, alg_id.oid)

    constructor = name_to_constructor(alg_name)
    if constructor is None:
        raise KeyDecodeFault(DecodeFault.NO_CONSTRUCTOR, alg_name)

    decoder = constructor.x509_decoder()
    if decoder is None:
        raise KeyDecodeFault(DecodeFault.NO_DECODER, alg_name)

    try:
        return decoder(alg_id, key_bits)
    except (ValueError, TypeError, OverflowError, PyAsn1Error, UnsupportedAlgorithm) as e:
        raise KeyDecodeFault(DecodeFault.KEY_REJECTED, alg_name) from e


def load_key_bytes(data: Union[bytes, bytearray, memoryview, str]) -> PublicKey:
    """
    Decode a DER or PEM SubjectPublicKeyInfo.

    Every failure surfaces as DecodingError with the same message; the
    specific reason is only logged at DEBUG level.
    """
    if isinstance(data, str):
        data = utf8_encode(data)
    try:
        return _decode(bytes(data))
    except KeyDecodeFault as e:
        logger.debug("Public key decoding failed: %s", e.fault.name)
    raise DecodingError()


def load_key(source: BinaryIO) -> PublicKey:
    return load_key_bytes(source.read())


def load_key_file(path: Union[str, Path]) -> PublicKey:
    return load_key_bytes(Path(path).read_bytes())


def copy_key(key: PublicKey) -> PublicKey:
    """
    Independent copy of key, made by serializing to DER and loading it back.
    """
    return load_key_bytes(encode(key, X509Encoding.DER))


# ─────────────────────────────────────────────
# Key identifier
# ─────────────────────────────────────────────

def key_id(key: PublicKey) -> int:
    """
    64-bit identifier: first 8 bytes of SHA-1 over the algorithm name,
    the encoded parameters and the key bits, read big-endian.

    Suitable for lookup and de-duplication, not for trust decisions.
    """
    encoder = key.x509_encoder()
    if encoder is None:
        raise InternalError("key_id: no X.509 encoder for key")

    h = hashlib.new(KEY_ID_HASH)
    h.update(utf8_encode(key.algo_name))
    h.update(encoder.alg_id.parameters)
    h.update(encoder.key_bits)
    output = h.digest()[:KEY_ID_SIZE]

    if len(output) != KEY_ID_SIZE:
        raise InternalError("key_id: incorrect digest output size")

    return uint64_from_be(output)
