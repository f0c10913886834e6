"""Tests for the authorization code exchange."""

import httpx
import pytest

from conftest import TokenEndpoint
from snap_oauth import TokenExchangeFailed, exchange_code_for_tokens


async def exchange(endpoint: TokenEndpoint):
    return await exchange_code_for_tokens(
        auth_domain="auth.example.com",
        client_id="client-123",
        code="auth-code",
        code_verifier="verifier-xyz",
        redirect_uri="http://localhost:8085",
        transport=endpoint.transport,
    )


class TestExchangeCodeForTokens:
    async def test_posts_form_encoded_grant(self):
        endpoint = TokenEndpoint(body={"id_token": "a.b.c", "access_token": "abc"})

        await exchange(endpoint)

        request = endpoint.requests[0]
        assert request.method == "POST"
        assert str(request.url) == "https://auth.example.com/oauth/token"
        assert request.headers["content-type"] == "application/x-www-form-urlencoded"
        assert endpoint.form() == {
            "grant_type": "authorization_code",
            "client_id": "client-123",
            "code_verifier": "verifier-xyz",
            "code": "auth-code",
            "redirect_uri": "http://localhost:8085",
        }

    async def test_returns_tokens(self):
        endpoint = TokenEndpoint(body={"id_token": "a.b.c", "access_token": "abc", "refresh_token": "r"})

        tokens = await exchange(endpoint)

        assert tokens.id_token == "a.b.c"
        assert tokens.access_token == "abc"
        assert tokens.refresh_token == "r"

    async def test_server_error_fails_without_retry(self):
        endpoint = TokenEndpoint(status_code=500, body={"error": "server_error"})

        with pytest.raises(TokenExchangeFailed, match="500"):
            await exchange(endpoint)

        assert len(endpoint.requests) == 1

    async def test_malformed_json_fails(self):
        endpoint = TokenEndpoint(text="<html>oops</html>")

        with pytest.raises(TokenExchangeFailed, match="JSON"):
            await exchange(endpoint)

    async def test_body_that_is_not_utf8_fails(self):
        def respond(request):
            return httpx.Response(200, content=b'{"id_token": "\xff"}')

        with pytest.raises(TokenExchangeFailed, match="JSON"):
            await exchange_code_for_tokens(
                "auth.example.com", "client-123", "code", "verifier", "http://localhost:8085",
                transport=httpx.MockTransport(respond),
            )

    async def test_missing_tokens_fail(self):
        endpoint = TokenEndpoint(body={"access_token": "abc"})

        with pytest.raises(TokenExchangeFailed, match="id_token"):
            await exchange(endpoint)

    async def test_network_error_fails(self):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(TokenExchangeFailed, match="HTTP error"):
            await exchange_code_for_tokens(
                "auth.example.com", "client-123", "code", "verifier", "http://localhost:8085",
                transport=httpx.MockTransport(refuse),
            )
