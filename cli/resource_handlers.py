"""Handlers for the snaps, active, gallery, tools, connections and logs commands"""

import argparse
import logging
from typing import Any, Callable, Dict, Optional, Tuple, Union

from api import APIError, DataResponse, ResourceAPI, SnapAPIClient
from cli.status_display import print_error, print_message, show_document
from config.session import SnapConfig
from utils.storage import ConfigStore

logger = logging.getLogger(__name__)

Document = Union[DataResponse, Dict[str, Any], None]


def default_resource_api(config: SnapConfig) -> ResourceAPI:
    return ResourceAPI(SnapAPIClient(config))


# (command, action) -> call; the second argument is the positional target, if any
FETCHERS: Dict[Tuple[str, Optional[str]], Callable[[ResourceAPI, Optional[str]], Document]] = {
    ("gallery", "list"): lambda api, _: api.gallery(),
    ("snaps", "list"): lambda api, _: api.snaps(),
    ("snaps", "get"): lambda api, snap_id: api.snap(snap_id),
    ("active", "list"): lambda api, _: api.active_snaps(),
    ("active", "get"): lambda api, active_id: api.active_snap(active_id),
    ("active", "logs"): lambda api, active_id: api.active_snap_logs(active_id),
    ("active", "pause"): lambda api, active_id: api.active_snap_action(active_id, "pause"),
    ("active", "resume"): lambda api, active_id: api.active_snap_action(active_id, "resume"),
    ("active", "deactivate"): lambda api, active_id: api.active_snap_action(active_id, "deactivate"),
    ("tools", "list"): lambda api, _: api.tools(),
    ("tools", "get"): lambda api, provider: api.tool(provider),
    ("connections", "list"): lambda api, _: api.connections(),
    ("connections", "get"): lambda api, name: api.connection(name),
    ("logs", None): lambda api, _: api.logs(),
    ("logs", "details"): lambda api, log_id: api.log_details(log_id),
}

# What a lookup that finds nothing was looking for
NOT_FOUND = {
    ("tools", "get"): "tool",
    ("logs", "details"): "log ID",
}


def resource_command(
    store: ConfigStore,
    console,
    args: argparse.Namespace,
    api_factory: Callable[[SnapConfig], ResourceAPI] = default_resource_api,
) -> int:
    """
    Run one resource command and print the result as JSON

    Args:
        store: Config store holding the access token and API URL
        console: Rich console for output
        args: Parsed command line (command, action, target)
        api_factory: Builds the ResourceAPI (replaced in tests)

    Returns:
        Process exit status
    """
    key = (args.command, args.action)
    target = getattr(args, "target", None)
    api = api_factory(store.load())

    try:
        document = FETCHERS[key](api, target)
    except APIError as e:
        print_error(console, f"could not retrieve data: {e}")
        logger.debug(f"{args.command} {args.action} failed", exc_info=True)
        return 1

    if document is None:
        print_error(console, f"{NOT_FOUND[key]} {target} not found")
        return 1

    if isinstance(document, DataResponse) and document.status == "error":
        print_error(console, document.message or f"{args.command} {args.action} failed")
        return 1

    if args.action in ("pause", "resume", "deactivate"):
        print_message(console, f"{args.action} requested for active snap {target}")

    show_document(console, document)
    return 0
