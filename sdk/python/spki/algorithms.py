from __future__ import annotations

from typing import Any, Dict, Optional, Tuple, Type

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import (
    dsa,
    ec,
    ed448,
    ed25519,
    rsa,
    x448,
    x25519,
)
from pyasn1.codec.der import encoder as der_encoder
from pyasn1.type import univ
from pyasn1_modules import rfc3279

from .asn1 import decode_strict, encode_integer
from .errors import EncodingError
from .keys import (
    AlgorithmIdentifier,
    Capability,
    PublicKey,
    X509Decoder,
    X509Encoder,
)
from .registry import name_to_constructor, name_to_oid, register, supported_algorithms

DER_NULL = b"\x05\x00"

# cryptography curve name -> (namedCurve OID, curve class)
EC_CURVES: Dict[str, Tuple[str, Type[ec.EllipticCurve]]] = {
    "secp256r1": ("1.2.840.10045.3.1.7", ec.SECP256R1),
    "secp384r1": ("1.3.132.0.34", ec.SECP384R1),
    "secp521r1": ("1.3.132.0.35", ec.SECP521R1),
    "secp256k1": ("1.3.132.0.10", ec.SECP256K1),
}
_EC_CURVES_BY_OID = {oid: curve for oid, curve in EC_CURVES.values()}


class _CryptographyKey(PublicKey):
    """A public key variant backed by a ``cryptography`` key object."""

    _backend_type: Any = None

    def __init__(self, key: Any) -> None:
        if not isinstance(key, self._backend_type):
            raise TypeError(
                f"{type(self).__name__} expects {self._backend_type.__name__}, "
                f"got {type(key).__name__}"
            )
        self._key = key

    @property
    def key(self) -> Any:
        return self._key

    def _alg_parameters(self) -> bytes:
        return b""

    def _key_bits(self) -> bytes:
        raise NotImplementedError

    def x509_encoder(self) -> Optional[X509Encoder]:
        oid = name_to_oid(self.algo_name)
        if oid is None:
            raise EncodingError(f"No OID known for algorithm: {self.algo_name}")
        alg_id = AlgorithmIdentifier(
            oid=oid,
            parameters=self._alg_parameters(),
        )
        return X509Encoder(alg_id=alg_id, key_bits=self._key_bits())

    @classmethod
    def x509_decoder(cls) -> Optional[X509Decoder]:
        return cls._from_x509

    @classmethod
    def _from_x509(cls, alg_id: AlgorithmIdentifier, key_bits: bytes) -> PublicKey:
        raise NotImplementedError


# ─────────────────────────────────────────────
# RSA / DSA
# ─────────────────────────────────────────────

@register("RSA")
class RSAPublicKey(_CryptographyKey):
    algo_name = "RSA"
    capabilities = Capability.ENCRYPTING | Capability.VERIFYING_WITHOUT_RECOVERY
    _backend_type = rsa.RSAPublicKey

    def _alg_parameters(self) -> bytes:
        return DER_NULL

    def _key_bits(self) -> bytes:
        return self._key.public_bytes(
            encoding=serialization.Encoding.DER,
            format=serialization.PublicFormat.PKCS1,
        )

    @classmethod
    def _from_x509(cls, alg_id: AlgorithmIdentifier, key_bits: bytes) -> PublicKey:
        if alg_id.parameters not in (b"", DER_NULL):
            raise ValueError("RSA parameters must be NULL or absent")

        rsa_key = decode_strict(key_bits, rfc3279.RSAPublicKey())
        n = int(rsa_key["modulus"])
        e = int(rsa_key["publicExponent"])
        if n <= 0 or e <= 0:
            raise ValueError("RSA modulus and exponent must be positive")
        numbers = rsa.RSAPublicNumbers(e=e, n=n)
        return cls(numbers.public_key())


@register("DSA")
class DSAPublicKey(_CryptographyKey):
    algo_name = "DSA"
    capabilities = Capability.VERIFYING_WITHOUT_RECOVERY
    _backend_type = dsa.DSAPublicKey

    def _alg_parameters(self) -> bytes:
        numbers = self._key.parameters().parameter_numbers()
        params = rfc3279.Dss_Parms()
        params["p"] = numbers.p
        params["q"] = numbers.q
        params["g"] = numbers.g
        return der_encoder.encode(params)

    def _key_bits(self) -> bytes:
        return encode_integer(self._key.public_numbers().y)

    @classmethod
    def _from_x509(cls, alg_id: AlgorithmIdentifier, key_bits: bytes) -> PublicKey:
        # Parameters inherited from a CA certificate are out of scope
        if not alg_id.parameters:
            raise ValueError("DSA parameters are required")

        params = decode_strict(alg_id.parameters, rfc3279.Dss_Parms())
        y = decode_strict(key_bits, univ.Integer())
        numbers = dsa.DSAPublicNumbers(
            y=int(y),
            parameter_numbers=dsa.DSAParameterNumbers(
                p=int(params["p"]),
                q=int(params["q"]),
                g=int(params["g"]),
            ),
        )
        return cls(numbers.public_key())


# ─────────────────────────────────────────────
# Elliptic curves (X9.62)
# ─────────────────────────────────────────────

@register("EC")
class ECPublicKey(_CryptographyKey):
    algo_name = "EC"
    capabilities = Capability.VERIFYING_WITHOUT_RECOVERY | Capability.KEY_AGREEMENT
    _backend_type = ec.EllipticCurvePublicKey

    def __init__(self, key: Any) -> None:
        super().__init__(key)
        if key.curve.name not in EC_CURVES:
            raise ValueError(f"Unsupported curve: {key.curve.name}")

    def _alg_parameters(self) -> bytes:
        curve_oid, _ = EC_CURVES[self._key.curve.name]
        return der_encoder.encode(univ.ObjectIdentifier(curve_oid))

    def _key_bits(self) -> bytes:
        return self._key.public_bytes(
            encoding=serialization.Encoding.X962,
            format=serialization.PublicFormat.UncompressedPoint,
        )

    @classmethod
    def _from_x509(cls, alg_id: AlgorithmIdentifier, key_bits: bytes) -> PublicKey:
        # only namedCurve parameters; explicit curves are rejected here
        curve_oid = str(decode_strict(alg_id.parameters, univ.ObjectIdentifier()))
        curve = _EC_CURVES_BY_OID.get(curve_oid)
        if curve is None:
            raise ValueError(f"Unsupported curve OID: {curve_oid}")
        return cls(ec.EllipticCurvePublicKey.from_encoded_point(curve(), key_bits))


# ─────────────────────────────────────────────
# RFC 8410 curves (raw key bits, no parameters)
# ─────────────────────────────────────────────

class _RawPublicKey(_CryptographyKey):
    def _key_bits(self) -> bytes:
        return self._key.public_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PublicFormat.Raw,
        )

    @classmethod
    def _from_x509(cls, alg_id: AlgorithmIdentifier, key_bits: bytes) -> PublicKey:
        if alg_id.parameters:
            raise ValueError(f"{cls.algo_name} parameters must be absent")
        return cls(cls._backend_type.from_public_bytes(key_bits))


@register("Ed25519")
class Ed25519PublicKey(_RawPublicKey):
    algo_name = "Ed25519"
    capabilities = Capability.VERIFYING_WITHOUT_RECOVERY
    _backend_type = ed25519.Ed25519PublicKey


@register("Ed448")
class Ed448PublicKey(_RawPublicKey):
    algo_name = "Ed448"
    capabilities = Capability.VERIFYING_WITHOUT_RECOVERY
    _backend_type = ed448.Ed448PublicKey


@register("X25519")
class X25519PublicKey(_RawPublicKey):
    algo_name = "X25519"
    capabilities = Capability.KEY_AGREEMENT
    _backend_type = x25519.X25519PublicKey


@register("X448")
class X448PublicKey(_RawPublicKey):
    algo_name = "X448"
    capabilities = Capability.KEY_AGREEMENT
    _backend_type = x448.X448PublicKey


def wrap_public_key(key: Any) -> PublicKey:
    """
    Wrap a ``cryptography`` public key object in the matching key variant.
    """
    for name in supported_algorithms():
        cls = name_to_constructor(name)
        backend_type = getattr(cls, "_backend_type", None)
        if backend_type is not None and isinstance(key, backend_type):
            return cls(key)
    raise TypeError(f"Unsupported public key type: {type(key).__name__}")
