"""Tests for the cross-origin policy."""

import pytest
from fastapi.testclient import TestClient

from livestock_api.config import Settings
from livestock_api.middleware import CorsPolicy


def _settings(**overrides) -> Settings:
    values = {"_env_file": None, "environment": "production", "ui_url": "https://market.example.com"}
    values.update(overrides)
    return Settings(**values)


@pytest.mark.unit
def test_ui_url_is_allowed_on_both_schemes() -> None:
    policy = CorsPolicy.from_settings(_settings())

    assert policy.is_allowed("https://market.example.com")
    assert policy.is_allowed("http://market.example.com")
    assert not policy.is_allowed("https://evil.example.com")
    assert not policy.is_allowed(None)


@pytest.mark.unit
def test_dev_origins_only_outside_production() -> None:
    assert not CorsPolicy.from_settings(_settings()).is_allowed("http://localhost:5173")
    assert CorsPolicy.from_settings(_settings(environment="development")).is_allowed("http://localhost:5173")


@pytest.mark.unit
def test_extra_origins_are_split_and_trimmed() -> None:
    policy = CorsPolicy.from_settings(_settings(cors_allowed_origins=" https://a.example.com/ , https://b.example.com"))

    assert policy.is_allowed("https://a.example.com")
    assert policy.is_allowed("https://b.example.com")


@pytest.mark.unit
@pytest.mark.parametrize(
    ("origin", "allowed"),
    [
        ("https://my-app.vercel.app", True),
        ("https://preview-123.my-app.vercel.app", True),
        ("http://localhost.vercel.app:8080", True),
        ("https://vercel.app", False),
        ("https://evilvercel.app", False),
        ("https://my-app.vercel.app.evil.com", False),
        ("ftp://my-app.vercel.app", False),
    ],
)
def test_suffix_rule(origin: str, allowed: bool) -> None:
    policy = CorsPolicy.from_settings(_settings(cors_allowed_suffixes="vercel.app"))
    assert policy.is_allowed(origin) is allowed


@pytest.mark.unit
def test_wildcard_allows_any_origin() -> None:
    policy = CorsPolicy(allowed_origins=frozenset({"*"}))
    assert policy.is_allowed("https://anything.example.org")


@pytest.mark.unit
def test_headers_for_respects_credentials_flag() -> None:
    with_credentials = CorsPolicy(allowed_origins=frozenset({"https://a.example.com"}))
    without = CorsPolicy(allowed_origins=frozenset({"https://a.example.com"}), allow_credentials=False)

    assert with_credentials.headers_for("https://a.example.com")["Access-Control-Allow-Credentials"] == "true"
    assert "Access-Control-Allow-Credentials" not in without.headers_for("https://a.example.com")
    assert with_credentials.headers_for("https://b.example.com") == {}


@pytest.mark.unit
def test_preflight_from_suffix_origin(upload_dir) -> None:
    from livestock_api.main import create_app

    app = create_app(_settings(cors_allowed_suffixes=".vercel.app", upload_dir=str(upload_dir)))
    with TestClient(app) as client:
        allowed = client.options(
            "/api/animals",
            headers={"Origin": "https://shop.vercel.app", "Access-Control-Request-Method": "POST"},
        )
        denied = client.options(
            "/api/animals",
            headers={"Origin": "https://evil.example.com", "Access-Control-Request-Method": "POST"},
        )

    assert allowed.status_code == 200
    assert allowed.headers["access-control-allow-origin"] == "https://shop.vercel.app"
    assert denied.status_code == 400
