"""Tests for credential variants and Authorization header injection."""

from __future__ import annotations

import base64
import threading

import httpx
import pytest
from pydantic import TypeAdapter, ValidationError

from ocidist.auth import (
    AUTHORIZATION,
    BasicCredential,
    Credential,
    NoCredential,
    TokenCredential,
    auth_mode,
    authorization_header,
    inject,
)
from ocidist.models import AuthMode


def _request() -> httpx.Request:
    return httpx.Request("GET", "http://localhost/v2/")


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


class TestVariantConstruction:
    def test_basic_requires_username(self) -> None:
        with pytest.raises(ValidationError):
            BasicCredential(username="", password="pass")

    def test_basic_requires_password(self) -> None:
        with pytest.raises(ValidationError):
            BasicCredential(username="user", password="")

    def test_token_requires_token(self) -> None:
        with pytest.raises(ValidationError):
            TokenCredential(token="")

    def test_variants_are_frozen(self) -> None:
        cred = TokenCredential(token="tok")
        with pytest.raises(ValidationError):
            cred.token = "other"  # type: ignore[misc]

    def test_secrets_hidden_from_repr(self) -> None:
        basic = repr(BasicCredential(username="user", password="s3cr3t-pass"))
        token = repr(TokenCredential(token="s3cr3t-value"))
        assert "s3cr3t-pass" not in basic
        assert "s3cr3t-value" not in token
        assert "kind='token'" in token

    def test_discriminated_union_parses_by_kind(self) -> None:
        adapter = TypeAdapter(Credential)
        cred = adapter.validate_python({"kind": "token", "token": "abc"})
        assert isinstance(cred, TokenCredential)
        assert isinstance(adapter.validate_python({"kind": "none"}), NoCredential)

    @pytest.mark.parametrize(
        ("credential", "expected"),
        [
            (NoCredential(), AuthMode.NONE),
            (BasicCredential(username="u", password="p"), AuthMode.BASIC),
            (TokenCredential(token="t"), AuthMode.TOKEN),
        ],
    )
    def test_auth_mode(self, credential: Credential, expected: AuthMode) -> None:
        assert auth_mode(credential) is expected


# ---------------------------------------------------------------------------
# Injection
# ---------------------------------------------------------------------------


class TestInject:
    def test_none_leaves_request_unchanged(self) -> None:
        request = _request()
        before = dict(request.headers)
        result = inject(NoCredential(), request)
        assert result is request
        assert AUTHORIZATION not in result.headers
        assert dict(result.headers) == before

    def test_basic_header(self) -> None:
        request = inject(BasicCredential(username="user", password="pass"), _request())
        assert request.headers[AUTHORIZATION] == "Basic dXNlcjpwYXNz"

    def test_basic_header_decodes_to_pair(self) -> None:
        request = inject(BasicCredential(username="al:ice", password="p@ss wörd"), _request())
        scheme, _, encoded = request.headers[AUTHORIZATION].partition(" ")
        assert scheme == "Basic"
        assert base64.b64decode(encoded).decode("utf-8") == "al:ice:p@ss wörd"

    def test_token_header(self) -> None:
        request = inject(TokenCredential(token="tok"), _request())
        assert request.headers[AUTHORIZATION] == "Bearer tok"

    def test_inject_mutates_in_place(self) -> None:
        request = _request()
        inject(TokenCredential(token="tok"), request)
        assert request.headers[AUTHORIZATION] == "Bearer tok"

    def test_inject_replaces_existing_header(self) -> None:
        request = httpx.Request("GET", "http://localhost/", headers={"Authorization": "Bearer old"})
        inject(TokenCredential(token="new"), request)
        assert request.headers.get_list(AUTHORIZATION) == ["Bearer new"]

    def test_none_keeps_caller_header(self) -> None:
        request = httpx.Request("GET", "http://localhost/", headers={"Authorization": "Bearer mine"})
        inject(NoCredential(), request)
        assert request.headers[AUTHORIZATION] == "Bearer mine"

    def test_unknown_type_rejected(self) -> None:
        with pytest.raises(TypeError):
            authorization_header(object())  # type: ignore[arg-type]

    def test_concurrent_injection_is_consistent(self) -> None:
        cred = BasicCredential(username="user", password="pass")
        results: list[str] = []
        lock = threading.Lock()

        def worker() -> None:
            value = inject(cred, _request()).headers[AUTHORIZATION]
            with lock:
                results.append(value)

        threads = [threading.Thread(target=worker) for _ in range(16)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert results == ["Basic dXNlcjpwYXNz"] * 16
