"""Authentication handlers for CLI"""

import logging

import settings
from api import APIError
from cli.status_display import print_error, print_message, show_user
from snap_oauth import AuthError, LoginFlow, logout
from utils.storage import ConfigStore

logger = logging.getLogger(__name__)


def login(store: ConfigStore, console, flow_factory=LoginFlow) -> int:
    """
    Handle the login command

    Args:
        store: Config store holding the session credential
        console: Rich console for output
        flow_factory: Builds the LoginFlow (replaced in tests)

    Returns:
        Process exit status
    """
    config = store.load()
    timeout = settings.LOGIN_TIMEOUT or None

    logger.debug(f"Starting login against {config.auth_domain} (redirect {config.redirect_url})")
    flow = flow_factory(config, store, console=console, callback_timeout=timeout)

    try:
        result = flow.login()
    except AuthError as e:
        print_error(console, str(e))
        logger.debug("Login failed", exc_info=True)
        return 1
    except APIError as e:
        # Logged in, but the account check or setup could not reach the API
        print_error(console, f"logged in, but could not complete account setup: {e}")
        return 1

    if result.provisioned:
        logger.debug(f"Created account {result.account}")
    print_message(console, f"logged in as {result.identity.name} <{result.identity.email}>")
    return 0


def logout_user(store: ConfigStore, console) -> int:
    """Handle the logout command"""
    try:
        logout(store)
    except AuthError as e:
        print_error(console, str(e))
        return 1

    print_message(console, "no logged in user.")
    return 0


def current_user(store: ConfigStore, console, output_format: str = "table") -> int:
    """Handle the user command"""
    config = store.load()
    if not config.is_logged_in:
        print_error(console, "no logged in user.  To login, use the command 'snap login'.")
        return 1

    show_user(config, console, output_format)
    return 0
