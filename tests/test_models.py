"""
Tests for provider documents, key construction and claims parsing.
"""

import time

import pytest

from conftest import AUDIENCE, PROVIDER_URL, TEST_JWKS
from oidc_guard import Claims, KeyConstructionError, KeySet, ProviderMetadata
from oidc_guard.keys import build_verifying_key


def test_provider_metadata_ignores_extra_fields():
    metadata = ProviderMetadata.from_json(
        {
            "issuer": "https://idp",
            "jwks_uri": "https://idp/jwks",
            "authorization_endpoint": "https://idp/auth",
        }
    )

    assert metadata == ProviderMetadata(issuer="https://idp", jwks_uri="https://idp/jwks")


@pytest.mark.parametrize(
    "document",
    [{}, {"issuer": "https://idp"}, {"issuer": 1, "jwks_uri": "https://idp/jwks"}, "text"],
)
def test_provider_metadata_rejects_incomplete(document):
    with pytest.raises(ValueError):
        ProviderMetadata.from_json(document)


def test_keyset_lookup_by_kid():
    second = {**TEST_JWKS["keys"][0], "kid": "k2"}
    keyset = KeySet.from_json({"keys": [TEST_JWKS["keys"][0], second]})

    assert len(keyset) == 2
    assert keyset.find("k2").kid == "k2"
    assert keyset.find("k3") is None


def test_keyset_kty_defaults_to_rsa():
    entry = {key: value for key, value in TEST_JWKS["keys"][0].items() if key != "kty"}
    keyset = KeySet.from_json({"keys": [entry]})

    assert keyset.keys[0].kty == "RSA"


@pytest.mark.parametrize(
    "document",
    [{}, {"keys": "k1"}, {"keys": [{"kid": "k1", "alg": "RS256", "n": "AQAB"}]}],
    ids=["no-keys", "keys-not-list", "missing-exponent"],
)
def test_keyset_rejects_malformed(document):
    with pytest.raises(ValueError):
        KeySet.from_json(document)


def test_build_verifying_key_uses_declared_alg():
    signing_key = KeySet.from_json(TEST_JWKS).keys[0]

    key = build_verifying_key(signing_key)

    assert key.to_dict()["n"] == signing_key.n


@pytest.mark.parametrize(
    "overrides,algorithm",
    [
        ({"e": "AA"}, None),
        ({"n": ""}, None),
        ({"kty": "EC"}, None),
        ({"alg": "RSA-OAEP"}, None),
        ({}, "HS256"),
    ],
    ids=["zero-exponent", "empty-modulus", "not-rsa", "encryption-alg", "hmac-requested"],
)
def test_build_verifying_key_failures(overrides, algorithm):
    signing_key = KeySet.from_json({"keys": [{**TEST_JWKS["keys"][0], **overrides}]}).keys[0]

    with pytest.raises(KeyConstructionError) as exc_info:
        build_verifying_key(signing_key, algorithm)

    assert exc_info.value.key_id == "k1"


def test_claims_from_payload():
    payload = {
        "sub": "user-123",
        "preferred_username": "testuser",
        "aud": AUDIENCE,
        "iss": PROVIDER_URL,
        "exp": int(time.time()) + 60,
        "realm_access": {"roles": ["user"]},
    }

    claims = Claims.from_payload(payload, AUDIENCE)

    assert claims.sub == "user-123"
    assert claims.email is None
    assert claims.get_claim("realm_access") == {"roles": ["user"]}
    assert claims.get_claim("missing", "default") == "default"


def test_claims_require_expected_audience_in_list():
    payload = {"preferred_username": "u", "aud": ["account"], "iss": PROVIDER_URL, "exp": 1}

    with pytest.raises(ValueError):
        Claims.from_payload(payload, AUDIENCE)
