import pytest
from jose import jwt

from backend.app.auth.jwt import (
    TokenRejected,
    VerifierMisconfigured,
    create_access_token,
    decode_access_token,
)


def test_round_trip_carries_user_id(test_settings):
    token = create_access_token("user-1", settings=test_settings)
    assert decode_access_token(token, test_settings) == {"id": "user-1"}


def test_claims_include_expiry_and_jti(test_settings):
    token = create_access_token("user-1", settings=test_settings)
    claims = jwt.get_unverified_claims(token)

    assert claims["user"] == {"id": "user-1"}
    assert "exp" in claims
    assert claims["jti"]


def test_each_token_gets_a_fresh_jti(test_settings):
    first = jwt.get_unverified_claims(create_access_token("user-1", settings=test_settings))
    second = jwt.get_unverified_claims(create_access_token("user-1", settings=test_settings))
    assert first["jti"] != second["jti"]


def test_expired_token_rejected(test_settings):
    token = create_access_token("user-1", expires_seconds=-10, settings=test_settings)
    with pytest.raises(TokenRejected):
        decode_access_token(token, test_settings)


def test_wrong_secret_rejected(test_settings):
    other = test_settings.model_copy(update={"jwt_secret_key": "x" * 40})
    token = create_access_token("user-1", settings=other)
    with pytest.raises(TokenRejected):
        decode_access_token(token, test_settings)


@pytest.mark.parametrize("claims", [{}, {"user": "user-1"}, {"user": {}}, {"user": {"id": ""}}])
def test_missing_identity_rejected(test_settings, claims):
    token = jwt.encode(claims, test_settings.jwt_secret_key, algorithm="HS256")
    with pytest.raises(TokenRejected):
        decode_access_token(token, test_settings)


def test_empty_secret_is_misconfiguration(test_settings):
    token = create_access_token("user-1", settings=test_settings)
    with pytest.raises(VerifierMisconfigured):
        decode_access_token(token, test_settings.model_copy(update={"jwt_secret_key": ""}))
