from __future__ import annotations

from typing import Tuple

from pyasn1.codec.der import decoder as der_decoder
from pyasn1.codec.der import encoder as der_encoder
from pyasn1.error import PyAsn1Error
from pyasn1.type import univ
from pyasn1_modules import rfc5280

from .errors import DecodeFault, KeyDecodeFault
from .keys import AlgorithmIdentifier


def encode_spki(alg_id: AlgorithmIdentifier, key_bits: bytes) -> bytes:
    """
    DER SEQUENCE { AlgorithmIdentifier, BIT STRING key_bits }
    """
    algorithm = rfc5280.AlgorithmIdentifier()
    algorithm["algorithm"] = univ.ObjectIdentifier(alg_id.oid)
    if alg_id.parameters:
        algorithm["parameters"] = univ.Any(alg_id.parameters)

    spki = rfc5280.SubjectPublicKeyInfo()
    spki["algorithm"] = algorithm
    spki["subjectPublicKey"] = univ.BitString.fromOctetString(key_bits)
    return der_encoder.encode(spki)


def decode_spki(der: bytes) -> Tuple[AlgorithmIdentifier, bytes]:
    try:
        spki, rest = der_decoder.decode(der, asn1Spec=rfc5280.SubjectPublicKeyInfo())
    except PyAsn1Error as e:
        raise KeyDecodeFault(DecodeFault.MALFORMED_ASN1, str(e)) from e

    if rest:
        raise KeyDecodeFault(DecodeFault.TRAILING_DATA, f"{len(rest)} bytes")

    algorithm = spki["algorithm"]
    parameters = algorithm["parameters"]
    alg_id = AlgorithmIdentifier(
        oid=str(algorithm["algorithm"]),
        parameters=parameters.asOctets() if parameters.isValue else b"",
    )

    bits = spki["subjectPublicKey"]
    if len(bits) % 8:
        raise KeyDecodeFault(DecodeFault.MALFORMED_ASN1, "subjectPublicKey is not octet aligned")
    return alg_id, bits.asOctets()


def encode_integer(value: int) -> bytes:
    return der_encoder.encode(univ.Integer(value))


def decode_strict(data: bytes, spec):
    """
    Decode data against spec, rejecting trailing bytes.
    Raises ValueError on any ASN.1 problem.
    """
    try:
        value, rest = der_decoder.decode(data, asn1Spec=spec)
    except PyAsn1Error as e:
        raise ValueError(f"Invalid DER: {e}") from e
    if rest:
        raise ValueError("Trailing data after DER value")
    return value
