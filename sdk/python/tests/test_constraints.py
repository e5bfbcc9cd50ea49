import pytest
from cryptography.hazmat.primitives.asymmetric import ec, rsa, x25519

from spki import (
    ALL_CONSTRAINTS,
    Capability,
    KeyConstraints,
    PublicKey,
    find_constraints,
    wrap_public_key,
)

SIGNING = KeyConstraints.DIGITAL_SIGNATURE | KeyConstraints.NON_REPUDIATION


class EncryptOnlyKey(PublicKey):
    algo_name = "EncryptOnly"
    capabilities = Capability.ENCRYPTING


class VerifyKey(PublicKey):
    algo_name = "Verify"
    capabilities = Capability.VERIFYING_WITHOUT_RECOVERY


class RecoveryKey(PublicKey):
    algo_name = "Recovery"
    capabilities = Capability.VERIFYING_WITH_RECOVERY


class InertKey(PublicKey):
    algo_name = "Inert"


def test_encrypt_only_key():
    assert find_constraints(EncryptOnlyKey(), ALL_CONSTRAINTS) == KeyConstraints.KEY_ENCIPHERMENT


def test_signing_key_limited_to_key_agreement():
    result = find_constraints(VerifyKey(), KeyConstraints.KEY_AGREEMENT)
    assert result == KeyConstraints.NO_CONSTRAINTS


def test_recovery_and_plain_verification_are_equivalent():
    assert find_constraints(RecoveryKey()) == SIGNING
    assert find_constraints(VerifyKey()) == SIGNING


def test_key_without_capabilities():
    assert find_constraints(InertKey()) == KeyConstraints.NO_CONSTRAINTS
    assert find_constraints(InertKey(), ALL_CONSTRAINTS) == KeyConstraints.NO_CONSTRAINTS


def test_empty_limits_mean_unrestricted():
    key = wrap_public_key(rsa.generate_private_key(public_exponent=65537, key_size=2048).public_key())
    natural = KeyConstraints.KEY_ENCIPHERMENT | SIGNING

    assert find_constraints(key) == natural
    assert find_constraints(key, KeyConstraints.NO_CONSTRAINTS) == natural
    assert find_constraints(key, KeyConstraints.DIGITAL_SIGNATURE) == KeyConstraints.DIGITAL_SIGNATURE


def test_concrete_key_capabilities():
    ec_key = wrap_public_key(ec.generate_private_key(ec.SECP384R1()).public_key())
    x_key = wrap_public_key(x25519.X25519PrivateKey.generate().public_key())

    assert find_constraints(ec_key) == KeyConstraints.KEY_AGREEMENT | SIGNING
    assert find_constraints(x_key) == KeyConstraints.KEY_AGREEMENT


@pytest.mark.parametrize("limits", [
    KeyConstraints.KEY_AGREEMENT,
    KeyConstraints.DIGITAL_SIGNATURE | KeyConstraints.CRL_SIGN,
    KeyConstraints.KEY_ENCIPHERMENT | KeyConstraints.NON_REPUDIATION,
    ALL_CONSTRAINTS,
])
@pytest.mark.parametrize("key_cls", [EncryptOnlyKey, VerifyKey, RecoveryKey, InertKey])
def test_result_is_subset_of_limits(key_cls, limits):
    result = find_constraints(key_cls(), limits)
    assert int(result) & ~int(limits) == 0
    assert result == find_constraints(key_cls()) & limits
