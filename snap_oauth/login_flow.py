"""OAuth2 PKCE login flow for the snap CLI"""

import asyncio
import logging
import webbrowser
from typing import TYPE_CHECKING, Callable, Optional, Tuple

import httpx
from rich.console import Console

from api import ProfileAPI, SnapAPIClient
from config.session import SnapConfig
from .authorization import build_authorize_url, parse_redirect_uri
from .callback_server import OAuthCallbackServer
from .errors import PersistenceFailed, PreconditionError
from .jwt_utils import extract_identity
from .models import Identity, LoginResult, PkceCodes
from .pkce import generate_pkce
from .provisioning import AccountAPI, AccountProvisioner
from .token_exchange import exchange_code_for_tokens

if TYPE_CHECKING:
    from utils.storage import ConfigStore

logger = logging.getLogger(__name__)


def default_api_factory(config: SnapConfig) -> AccountAPI:
    return ProfileAPI(SnapAPIClient(config))


class LoginFlow:
    """Log a user in with the Authorization Code + PKCE flow

    The flow binds a loopback listener on the redirect URL's port, sends
    the user's browser to the identity provider and handles the single
    redirect that comes back: the code is exchanged for tokens, the ID
    token's claims are decoded and the session credential is written to
    the config store. First-time users are then asked to pick an account
    name.

    Args:
        config: Current config (client id, auth domain, redirect URL)
        store: Config store the session credential is persisted to
        console: Rich console for output
        api_factory: Builds the account API from the updated config
        open_browser: Opens a URL in the user's browser
        token_transport: Optional httpx transport for the token exchange
        callback_timeout: Seconds to wait for the callback; None waits forever
        input_func: Reads a line from the user during provisioning
    """

    def __init__(
        self,
        config: SnapConfig,
        store: "ConfigStore",
        console: Optional[Console] = None,
        api_factory: Callable[[SnapConfig], AccountAPI] = default_api_factory,
        open_browser: Callable[[str], bool] = webbrowser.open,
        token_transport: Optional[httpx.AsyncBaseTransport] = None,
        callback_timeout: Optional[float] = None,
        input_func: Callable[[str], str] = input,
    ):
        self.config = config
        self.store = store
        self.console = console or Console()
        self.api_factory = api_factory
        self.open_browser = open_browser
        self.token_transport = token_transport
        self.callback_timeout = callback_timeout
        self.input_func = input_func

    async def _complete_login(self, code: str, pkce: PkceCodes) -> Identity:
        """Trade the authorization code for tokens and persist the session"""
        tokens = await exchange_code_for_tokens(
            auth_domain=self.config.auth_domain,
            client_id=self.config.client_id,
            code=code,
            code_verifier=pkce.code_verifier,
            redirect_uri=self.config.redirect_url,
            transport=self.token_transport,
        )

        identity = extract_identity(tokens.id_token)

        updated = self.config.with_session(tokens.access_token, identity.name, identity.email)
        if not self.store.save(updated):
            raise PersistenceFailed(f"could not write config file {self.store.config_file}")

        self.config = updated
        logger.info(f"Stored session credential for {identity.email}")
        return identity

    def _launch_browser(self, auth_url: str) -> None:
        try:
            opened = self.open_browser(auth_url)
        except webbrowser.Error as e:
            logger.warning(f"Could not open browser: {e}")
            opened = False

        if opened:
            self.console.print("[green][OK][/green] Browser opened for SnapMaster login")
        else:
            self.console.print("[yellow]Could not open browser automatically[/yellow]")
            self.console.print(f"Please open this URL manually:\n{auth_url}", markup=False)

    async def authenticate(self) -> Identity:
        """Run the browser part of the login and return the user's identity

        Raises:
            AuthError: on any failure; the browser is told as well when the
                failure happens after the callback arrived
        """
        if not self.config.client_id or not self.config.auth_domain:
            raise PreconditionError("client ID and auth domain must be configured (see 'snap config set')")

        pkce = generate_pkce()
        auth_url = build_authorize_url(
            auth_domain=self.config.auth_domain,
            client_id=self.config.client_id,
            redirect_uri=self.config.redirect_url,
            pkce=pkce,
        )
        logger.debug(f"Authorization URL: {auth_url}")

        host, port = parse_redirect_uri(self.config.redirect_url)
        server = OAuthCallbackServer(host, port, lambda code: self._complete_login(code, pkce))
        await server.start()

        self._launch_browser(auth_url)
        self.console.print("[dim]Waiting for the browser to complete the login...[/dim]")

        identity = await server.wait_for_callback(timeout=self.callback_timeout)

        self.console.print("Successfully logged into snapmaster API.")
        return identity

    def ensure_account(self, identity: Identity) -> Tuple[str, bool]:
        """Provision an account if the user has none yet

        Returns:
            Tuple of (account name, whether it was created now)
        """
        account_api = self.api_factory(self.config)
        account = account_api.get_account()
        if account:
            logger.debug(f"Existing account: {account}")
            return account, False

        provisioner = AccountProvisioner(
            account_api,
            web_url=self.config.api_url,
            console=self.console,
            input_func=self.input_func,
        )
        return provisioner.provision(identity), True

    def login(self, provision: bool = True) -> LoginResult:
        """Run the complete login, including first-login provisioning"""
        identity = asyncio.run(self.authenticate())

        result = LoginResult(identity=identity, config=self.config)
        if provision:
            result.account, result.provisioned = self.ensure_account(identity)
        return result


def logout(store: "ConfigStore") -> SnapConfig:
    """Forget the local session credential

    The server is not contacted. API URL, client ID, auth domain and
    redirect URL are kept.

    Raises:
        PersistenceFailed: if the config file cannot be written
    """
    if not store.clear_session():
        raise PersistenceFailed(f"could not write config file {store.config_file}")
    logger.info("Cleared session credential")
    return store.load()
