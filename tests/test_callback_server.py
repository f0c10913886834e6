"""Tests for the loopback OAuth callback server."""

import httpx
import pytest

from snap_oauth import (
    Identity,
    LoginTimeout,
    MissingAuthorizationCode,
    OAuthCallbackServer,
    PreconditionError,
    TokenExchangeFailed,
)


class RecordingHandler:
    def __init__(self, identity=None, error=None):
        self.identity = identity or Identity(name="Ada", email="ada@example.com")
        self.error = error
        self.codes = []

    async def __call__(self, code):
        self.codes.append(code)
        if self.error:
            raise self.error
        return self.identity


async def browse(url):
    async with httpx.AsyncClient(trust_env=False, timeout=10) as client:
        return await client.get(url)


class TestOAuthCallbackServer:
    async def test_successful_callback(self, port):
        handler = RecordingHandler()
        server = OAuthCallbackServer("127.0.0.1", port, handler)
        await server.start()

        response = await browse(f"http://127.0.0.1:{port}/?code=abc123")
        identity = await server.wait_for_callback(timeout=5)

        assert handler.codes == ["abc123"]
        assert identity == handler.identity
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert "Hi, Ada! You've logged in successfully." in response.text

    async def test_listener_closes_after_one_request(self, port):
        server = OAuthCallbackServer("127.0.0.1", port, RecordingHandler())
        await server.start()

        await browse(f"http://127.0.0.1:{port}/?code=abc123")
        await server.wait_for_callback(timeout=5)

        assert server.runner is None
        with pytest.raises(httpx.ConnectError):
            await browse(f"http://127.0.0.1:{port}/?code=again")

    async def test_missing_code_skips_exchange(self, port):
        handler = RecordingHandler()
        server = OAuthCallbackServer("127.0.0.1", port, handler)
        await server.start()

        response = await browse(f"http://127.0.0.1:{port}/?error=access_denied")

        with pytest.raises(MissingAuthorizationCode, match="access_denied"):
            await server.wait_for_callback(timeout=5)

        assert handler.codes == []
        assert response.status_code == 400
        assert response.text == "Error: could not find 'code' URL parameter\n"

    async def test_handler_failure_is_reported_to_browser(self, port):
        handler = RecordingHandler(error=TokenExchangeFailed("token endpoint returned HTTP 500"))
        server = OAuthCallbackServer("127.0.0.1", port, handler)
        await server.start()

        response = await browse(f"http://127.0.0.1:{port}/?code=abc123")

        with pytest.raises(TokenExchangeFailed):
            await server.wait_for_callback(timeout=5)

        assert response.text == "Error: could not retrieve access token\n"
        assert server.runner is None

    async def test_name_is_escaped_in_success_page(self, port):
        handler = RecordingHandler(identity=Identity(name="<script>x</script>", email="x@example.com"))
        server = OAuthCallbackServer("127.0.0.1", port, handler)
        await server.start()

        response = await browse(f"http://127.0.0.1:{port}/?code=abc123")
        await server.wait_for_callback(timeout=5)

        assert "<script>x</script>" not in response.text
        assert "&lt;script&gt;x&lt;/script&gt;" in response.text

    async def test_timeout_closes_listener(self, port):
        server = OAuthCallbackServer("127.0.0.1", port, RecordingHandler())
        await server.start()

        with pytest.raises(LoginTimeout):
            await server.wait_for_callback(timeout=0.1)

        assert server.runner is None

    async def test_port_in_use_is_a_precondition_error(self, port):
        first = OAuthCallbackServer("127.0.0.1", port, RecordingHandler())
        await first.start()
        try:
            second = OAuthCallbackServer("127.0.0.1", port, RecordingHandler())
            with pytest.raises(PreconditionError, match=str(port)):
                await second.start()
        finally:
            await first.stop()
