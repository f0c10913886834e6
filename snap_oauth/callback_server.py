"""Local OAuth callback server

Serves the single redirect the identity provider sends back to the
loopback redirect URL, then shuts itself down.
"""
import asyncio
import html
import logging
from typing import Awaitable, Callable, Optional

from aiohttp import web

from .errors import (
    AuthError,
    ClaimDecodeError,
    LoginTimeout,
    MissingAuthorizationCode,
    PersistenceFailed,
    PreconditionError,
    TokenExchangeFailed,
)
from .models import Identity

logger = logging.getLogger(__name__)

CodeHandler = Callable[[str], Awaitable[Identity]]

SUCCESS_PAGE = """
<html>
    <head>
        <link href="https://fonts.googleapis.com/css?family=Lato:100,300,400&display=swap" rel="stylesheet">
        <title>SnapMaster</title>
    </head>
    <body style="background: #000; color: #fff; font-family: 'Lato', -apple-system, BlinkMacSystemFont, 'Segoe UI',
    'Roboto', 'Helvetica Neue', sans-serif; font-weight: 300;">
        <center style="margin: 100px">
            <img src="https://www.snapmaster.io/SnapMaster-logo-220.png" alt="snapmaster" width="100" height="100" />
            <h1>Hi, {name}! You've logged in successfully.</h1>
            <h2>You can close this window and return to the snap CLI.</h2>
        </center>
    </body>
</html>
"""

# Browser-facing text for each failure
FAILURE_MESSAGES = {
    MissingAuthorizationCode: "could not find 'code' URL parameter",
    TokenExchangeFailed: "could not retrieve access token",
    ClaimDecodeError: "could not parse identity token",
    PersistenceFailed: "could not store access token",
}


def render_success_page(name: str) -> str:
    return SUCCESS_PAGE.format(name=html.escape(name))


def failure_message(error: BaseException) -> str:
    for error_type, message in FAILURE_MESSAGES.items():
        if isinstance(error, error_type):
            return message
    return "login failed"


class OAuthCallbackServer:
    """Loopback HTTP server that handles exactly one OAuth callback

    Args:
        host: Interface to bind (from the redirect URL)
        port: Port to bind (from the redirect URL)
        on_code: Coroutine that turns the authorization code into an
            Identity (token exchange, claim decoding and persistence)
    """

    def __init__(self, host: str, port: int, on_code: CodeHandler):
        self.host = host
        self.port = port
        self.on_code = on_code
        self.identity: Optional[Identity] = None
        self.error: Optional[BaseException] = None
        self.app = web.Application()
        self.runner: Optional[web.AppRunner] = None
        self._handled = False
        self._done = asyncio.Event()

        self.app.router.add_get("/", self._handle_callback)

    @property
    def done(self) -> bool:
        return self._done.is_set()

    async def _handle_callback(self, request: web.Request) -> web.StreamResponse:
        """Handle the provider's redirect back to the CLI"""
        if self._handled:
            return web.Response(text="Error: login already handled\n", status=409)
        self._handled = True

        code = request.query.get("code")
        if not code:
            logger.error("Url param 'code' is missing")
            error = request.query.get("error_description") or request.query.get("error")
            message = "could not find 'code' URL parameter"
            self.error = MissingAuthorizationCode(f"{message} ({error})" if error else message)
            return await self._respond(
                request,
                web.Response(text=f"Error: {message}\n", status=400),
            )

        try:
            self.identity = await self.on_code(code)
        except AuthError as e:
            logger.error(f"Login failed: {e}")
            self.error = e
            return await self._respond(
                request,
                web.Response(text=f"Error: {failure_message(e)}\n", status=500),
            )
        except Exception as e:
            logger.exception("Unexpected error in callback handler")
            self.error = e
            return await self._respond(
                request,
                web.Response(text="Error: login failed\n", status=500),
            )

        return await self._respond(
            request,
            web.Response(text=render_success_page(self.identity.name), content_type="text/html"),
        )

    async def _respond(self, request: web.Request, response: web.Response) -> web.Response:
        """Write the response, then queue the listener shutdown

        The handler does not wait for the shutdown; the waiter in
        wait_for_callback closes the listener once the queued callback runs.
        """
        await response.prepare(request)
        await response.write_eof()
        asyncio.get_running_loop().call_soon(self._done.set)
        return response

    async def start(self) -> None:
        """Bind the listener

        Raises:
            PreconditionError: if the port cannot be bound
        """
        self.runner = web.AppRunner(self.app, access_log=None)
        await self.runner.setup()

        site = web.TCPSite(self.runner, host=self.host, port=self.port)
        try:
            await site.start()
        except OSError as e:
            await self.runner.cleanup()
            self.runner = None
            raise PreconditionError(f"can't listen to port {self.port}: {e}") from e

        logger.info(f"OAuth callback server listening on {self.host}:{self.port}")

    async def wait_for_callback(self, timeout: Optional[float] = None) -> Identity:
        """Block until the callback has been handled, then close the listener

        Args:
            timeout: Seconds to wait; None or 0 waits indefinitely

        Returns:
            Identity of the logged in user

        Raises:
            LoginTimeout: if no callback arrived in time
            AuthError: the failure reported by the callback handler
        """
        try:
            if timeout:
                await asyncio.wait_for(self._done.wait(), timeout=timeout)
            else:
                await self._done.wait()
        except asyncio.TimeoutError:
            raise LoginTimeout(f"no response from the browser after {timeout:g} seconds") from None
        finally:
            await self.stop()

        if self.error is not None:
            raise self.error
        return self.identity

    async def stop(self) -> None:
        """Stop the callback server"""
        if self.runner:
            await self.runner.cleanup()
            self.runner = None
            logger.debug("OAuth callback server stopped")
