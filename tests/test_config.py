import pytest
from pydantic import ValidationError

from devconnector.config import Settings


def test_defaults():
    settings = Settings(jwt_secret_key="k" * 40)
    assert settings.api_prefix == "/api"
    assert settings.auth_header_name == "x-auth-token"
    assert settings.access_token_expire_seconds == 360000


def test_production_rejects_default_secret():
    with pytest.raises(ValidationError, match="default value"):
        Settings(env="production", jwt_secret_key="CHANGE_ME")


def test_production_rejects_short_secret():
    with pytest.raises(ValidationError, match="at least 32 characters"):
        Settings(env="production", jwt_secret_key="short-secret")


def test_development_warns_on_default_secret():
    with pytest.warns(UserWarning, match="default value"):
        Settings(env="development", jwt_secret_key="CHANGE_ME")


def test_cors_origins_list():
    settings = Settings(
        jwt_secret_key="k" * 40,
        cors_allowed_origins="http://a.example, http://b.example ,",
    )
    assert settings.cors_origins_list == ["http://a.example", "http://b.example"]


def test_validate_production_config(test_settings):
    errors, warnings_ = test_settings.validate_production_config()
    assert errors == []
    assert any("GITHUB_CLIENT_ID" in w for w in warnings_)
    assert any("SQLite" in w for w in warnings_)


@pytest.mark.parametrize("raw,expected", [("/api/", "/api"), ("api", "/api"), ("", "")])
def test_api_prefix_normalized(raw, expected):
    assert Settings(jwt_secret_key="k" * 40, api_prefix=raw).api_prefix == expected


def test_weak_secret_is_a_production_error():
    settings = Settings(jwt_secret_key="k" * 40).model_copy(update={"jwt_secret_key": "secret"})
    errors, _ = settings.validate_production_config()
    assert errors and "placeholder" in errors[0]
