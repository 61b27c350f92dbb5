"""
Tests for token issuing and verification.
"""
import pytest
from bson import ObjectId
from jose import jwt
from config import Settings
from devconnector.exceptions import InvalidCredential, Unauthenticated
from devconnector.main import create_app
from devconnector.services.token_service import TokenVerifier, actor_object_id


@pytest.fixture
def verifier():
    return TokenVerifier("secret", expires_in=3600)


def test_issue_then_verify_returns_user_id(verifier):
    user_id = str(ObjectId())

    assert verifier.verify(verifier.issue(user_id)) == user_id


def test_token_carries_user_claim(verifier):
    token = verifier.issue("abc")

    claims = jwt.get_unverified_claims(token)

    assert claims["user"] == {"id": "abc"}
    assert claims["exp"] > claims["iat"]


@pytest.mark.parametrize("token", [None, "", "   "])
def test_missing_token_is_unauthenticated(verifier, token):
    with pytest.raises(Unauthenticated):
        verifier.verify(token)


def test_garbage_token_is_invalid(verifier):
    with pytest.raises(InvalidCredential):
        verifier.verify("not-a-token")


def test_token_signed_with_other_secret_is_invalid(verifier):
    token = TokenVerifier("other-secret").issue("abc")

    with pytest.raises(InvalidCredential):
        verifier.verify(token)


def test_expired_token_is_invalid():
    verifier = TokenVerifier("secret", expires_in=-60)
    token = verifier.issue("abc")

    with pytest.raises(InvalidCredential, match="expired"):
        verifier.verify(token)


def test_token_without_user_claim_is_invalid(verifier):
    token = jwt.encode({"sub": "abc"}, "secret", algorithm="HS256")

    with pytest.raises(InvalidCredential):
        verifier.verify(token)


def test_actor_object_id_rejects_non_object_ids():
    with pytest.raises(InvalidCredential):
        actor_object_id("abc")

    oid = ObjectId()
    assert actor_object_id(str(oid)) == oid


def test_missing_secret_outside_development_refuses_to_start():
    settings = Settings(jwt_secret=None, app_env="production")

    with pytest.raises(RuntimeError, match="JWT_SECRET"):
        TokenVerifier.from_settings(settings)

    with pytest.raises(RuntimeError):
        create_app(settings, database_provider=lambda: None)


def test_missing_secret_in_development_uses_unguessable_secret():
    verifier = TokenVerifier.from_settings(Settings(jwt_secret=None, app_env="development"))
    forged = TokenVerifier("change-me").issue(str(ObjectId()))

    with pytest.raises(InvalidCredential):
        verifier.verify(forged)

    user_id = str(ObjectId())
    assert verifier.verify(verifier.issue(user_id)) == user_id


def test_defaults_do_not_expose_debug_or_a_fixed_secret():
    settings = Settings(_env_file=None)

    assert settings.debug is False
    assert settings.jwt_secret != "change-me"
