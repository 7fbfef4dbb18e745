"""Tests for ClientConfig validation in new_client / ClientFactory."""

from __future__ import annotations

import logging

import pytest

from ocidist.auth import BasicCredential, NoCredential, TokenCredential
from ocidist.client import ClientFactory, new_client, parse_endpoint
from ocidist.exceptions import (
    ClientConfigError,
    ConflictingAuthError,
    ErrorKind,
    InvalidEndpointError,
    MissingPasswordError,
    MissingUsernameError,
    NoEndpointError,
)
from ocidist.exit_codes import EXIT_INVALID_CONFIG
from ocidist.models import AuthMode, ClientConfig

HOST = "http://localhost"


# ---------------------------------------------------------------------------
# Valid configurations
# ---------------------------------------------------------------------------


class TestValidConfigs:
    def test_basic_auth(self) -> None:
        client = new_client(ClientConfig(endpoint=HOST, username="user", password="pass"))
        assert client.credential == BasicCredential(username="user", password="pass")
        assert client.auth_mode is AuthMode.BASIC

    def test_token_auth(self) -> None:
        client = new_client(ClientConfig(endpoint=HOST, token="tok"))
        assert client.credential == TokenCredential(token="tok")
        assert client.auth_mode is AuthMode.TOKEN

    def test_no_auth(self) -> None:
        client = new_client(ClientConfig(endpoint=HOST))
        assert isinstance(client.credential, NoCredential)
        assert client.auth_enabled is False

    def test_endpoint_is_parsed(self) -> None:
        client = new_client(ClientConfig(endpoint="https://registry.example.com:5000/base"))
        assert client.endpoint.scheme == "https"
        assert client.endpoint.host == "registry.example.com"
        assert client.endpoint.port == 5000
        assert client.endpoint.path == "/base"

    def test_factory_object(self) -> None:
        client = ClientFactory().new(ClientConfig(endpoint=HOST, token="tok"))
        assert client.auth_mode is AuthMode.TOKEN

    def test_logs_auth_mode_without_secret(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="ocidist.client.factory"):
            new_client(ClientConfig(endpoint=HOST, username="user", password="hunter2"))
        assert "basic" in caplog.text
        assert "hunter2" not in caplog.text


# ---------------------------------------------------------------------------
# Rejected configurations
# ---------------------------------------------------------------------------


class TestRejectedConfigs:
    @pytest.mark.parametrize(
        ("config", "error_type", "kind"),
        [
            (
                ClientConfig(endpoint=HOST, username="user", password="pass", token="tok"),
                ConflictingAuthError,
                ErrorKind.CONFLICTING_AUTH,
            ),
            (
                ClientConfig(endpoint="", token="tok"),
                NoEndpointError,
                ErrorKind.NO_ENDPOINT,
            ),
            (
                ClientConfig(endpoint=HOST, username="user"),
                MissingPasswordError,
                ErrorKind.MISSING_PASSWORD,
            ),
            (
                ClientConfig(endpoint=HOST, password="pass"),
                MissingUsernameError,
                ErrorKind.MISSING_USERNAME,
            ),
        ],
        ids=["basic and token", "no endpoint", "no password", "no username"],
    )
    def test_rejected(
        self, config: ClientConfig, error_type: type[ClientConfigError], kind: ErrorKind
    ) -> None:
        with pytest.raises(error_type) as exc_info:
            new_client(config)
        assert exc_info.value.kind is kind
        assert exc_info.value.exit_code == EXIT_INVALID_CONFIG

    @pytest.mark.parametrize(
        "config",
        [
            ClientConfig(),
            ClientConfig(username="user", password="pass"),
            ClientConfig(username="user", password="pass", token="tok"),
            ClientConfig(password="pass"),
        ],
    )
    def test_no_endpoint_wins_over_other_fields(self, config: ClientConfig) -> None:
        with pytest.raises(NoEndpointError):
            new_client(config)

    def test_password_with_token_conflicts(self) -> None:
        with pytest.raises(ConflictingAuthError):
            new_client(ClientConfig(endpoint=HOST, password="pass", token="tok"))

    def test_username_with_token_conflicts(self) -> None:
        with pytest.raises(ConflictingAuthError):
            new_client(ClientConfig(endpoint=HOST, username="user", token="tok"))

    def test_invalid_endpoint_checked_before_auth(self) -> None:
        with pytest.raises(InvalidEndpointError):
            new_client(ClientConfig(endpoint="not a url", username="user", token="tok"))

    def test_errors_share_base_class(self) -> None:
        with pytest.raises(ClientConfigError):
            new_client(ClientConfig(endpoint=HOST, username="user"))

    def test_default_messages(self) -> None:
        assert str(NoEndpointError()) == "no endpoint provided to client"
        assert str(MissingPasswordError()) == "no password defined"


# ---------------------------------------------------------------------------
# Endpoint parsing
# ---------------------------------------------------------------------------


class TestParseEndpoint:
    @pytest.mark.parametrize(
        "endpoint",
        ["http://localhost", "https://registry-1.docker.io", "http://127.0.0.1:5000/"],
    )
    def test_accepts_http_urls(self, endpoint: str) -> None:
        assert parse_endpoint(endpoint).host

    @pytest.mark.parametrize(
        "endpoint",
        ["localhost", "ftp://registry.example.com", "http://", "/v2/"],
    )
    def test_rejects_malformed(self, endpoint: str) -> None:
        with pytest.raises(InvalidEndpointError) as exc_info:
            parse_endpoint(endpoint)
        assert exc_info.value.kind is ErrorKind.INVALID_ENDPOINT

    def test_rejects_empty(self) -> None:
        with pytest.raises(NoEndpointError):
            parse_endpoint("")
