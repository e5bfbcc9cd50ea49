import pytest

from spki import (
    Ed25519PublicKey,
    RSAPublicKey,
    name_to_constructor,
    name_to_oid,
    oid_to_name,
    supported_algorithms,
    wrap_public_key,
)
from spki.registry import OID_TO_NAME, registry
from spki.utils import looks_like_pem, pem_decode, pem_encode, pem_search_range, uint64_from_be


def test_oid_lookup():
    assert oid_to_name("1.2.840.113549.1.1.1") == "RSA"
    assert name_to_oid("Ed25519") == "1.3.101.112"
    assert oid_to_name("1.2.3.4") is None
    assert name_to_oid("Rot13") is None


def test_constructors():
    assert name_to_constructor("RSA") is RSAPublicKey
    assert name_to_constructor("Ed25519") is Ed25519PublicKey
    assert name_to_constructor("DH") is None
    assert "DH" not in supported_algorithms()
    assert {"RSA", "DSA", "EC", "Ed25519", "Ed448", "X25519", "X448"} <= set(supported_algorithms())


def test_oid_table_is_read_only():
    with pytest.raises(TypeError):
        OID_TO_NAME["1.2.3.4"] = "Rot13"


def test_register_rejects_unknown_and_duplicate_names():
    with pytest.raises(ValueError):
        registry.register("Rot13")
    with pytest.raises(ValueError):
        registry.register("RSA")(RSAPublicKey)


def test_wrap_rejects_foreign_objects():
    with pytest.raises(TypeError):
        wrap_public_key(object())
    with pytest.raises(TypeError):
        RSAPublicKey(b"not a key")


def test_pem_framing():
    pem = pem_encode(b"\x00" * 100, "TEST BLOB")
    lines = pem.splitlines()

    assert lines[0] == "-----BEGIN TEST BLOB-----"
    assert lines[-1] == "-----END TEST BLOB-----"
    assert all(len(line) <= 64 for line in lines[1:-1])
    assert pem_decode(pem.encode()) == ("TEST BLOB", b"\x00" * 100)
    assert looks_like_pem(pem.encode())


def test_pem_decode_rejects_mismatched_end():
    with pytest.raises(ValueError):
        pem_decode(b"-----BEGIN A-----\nAAAA\n-----END B-----\n")


def test_pem_search_range(monkeypatch):
    monkeypatch.delenv("SPKI_PEM_SEARCH_RANGE", raising=False)
    assert pem_search_range() == 4096

    monkeypatch.setenv("SPKI_PEM_SEARCH_RANGE", "16")
    assert pem_search_range() == 16
    assert not looks_like_pem(b"x" * 32 + b"-----BEGIN PUBLIC KEY-----")

    monkeypatch.setenv("SPKI_PEM_SEARCH_RANGE", "lots")
    with pytest.raises(ValueError):
        pem_search_range()


def test_uint64_from_be():
    assert uint64_from_be(b"\x00" * 7 + b"\x01") == 1
    assert uint64_from_be(b"\xff" * 8) == 2 ** 64 - 1
    with pytest.raises(ValueError):
        uint64_from_be(b"\x01")
