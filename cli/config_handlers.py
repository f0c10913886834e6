"""Config and init handlers for CLI"""

from typing import Dict, Optional

import settings
from cli.status_display import print_error, print_message, show_config
from utils.storage import ConfigStore


def get_config(store: ConfigStore, console, output_format: str = "table") -> int:
    """Handle `snap config` and `snap config get`"""
    show_config(store.load(), console, output_format)
    return 0


def set_config(
    store: ConfigStore,
    console,
    environment: Optional[str] = None,
    overrides: Optional[Dict[str, Optional[str]]] = None,
    output_format: str = "table",
) -> int:
    """
    Handle `snap config set [dev|prod] [--api-url ...]`

    Args:
        store: Config store
        console: Rich console for output
        environment: Optional preset name from settings.ENVIRONMENTS
        overrides: Config keys (e.g. "APIURL") to explicit values; None values are skipped
        output_format: "table" or "json"

    Returns:
        Process exit status
    """
    config = store.load()

    if environment:
        for key, value in settings.ENVIRONMENTS[environment].items():
            config.set(key, value)

    for key, value in (overrides or {}).items():
        if value:
            config.set(key, value)

    if not store.save(config):
        print_error(console, f"could not write config file {store.config_file}")
        return 1

    print_message(console, "updated config")
    show_config(config, console, output_format)
    return 0


def init_config(
    store: ConfigStore,
    console,
    api_url: Optional[str] = None,
    client_id: Optional[str] = None,
    auth_domain: Optional[str] = None,
) -> int:
    """Handle `snap init [API server URL] [Client ID] [Auth Domain]`"""
    config = store.load()

    for key, value in (("APIURL", api_url), ("ClientID", client_id), ("AuthDomain", auth_domain)):
        if value:
            config.set(key, value)

    if not store.save(config):
        print_error(console, f"could not write config file {store.config_file}")
        return 1

    print_message(console, f"created config file in {store.config_file}")
    return 0
