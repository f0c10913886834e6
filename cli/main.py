"""CLI entry point and argument parsing"""

import sys
import argparse
from typing import List, Optional

import settings
from cli.auth_handlers import current_user, login, logout_user
from cli.config_handlers import get_config, init_config, set_config
from cli.resource_handlers import resource_command
from cli.debug_setup import setup_console
from cli.status_display import print_error, print_message
from utils.storage import ConfigStore

RESOURCE_COMMANDS = ("gallery", "snaps", "active", "tools", "connections", "logs")


DESCRIPTION = """
SnapMaster is a tool that manages and runs snaps.  Snaps are workflows which tie
various dev and operational tools together.  Snaps define a trigger (an event such
as a webhook) and a set of actions (anything that can be executed over a REST API).

snap is the SnapMaster CLI."""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="snap",
        description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--config", default=None, help=f"config file (default is {settings.CONFIG_FILE})")
    parser.add_argument(
        "--format", "-f",
        choices=["table", "json"],
        default="table",
        help="return output of command as one of {table, json}",
    )
    parser.add_argument("--debug", "-d", action="store_true", help="Enable debug logging")

    commands = parser.add_subparsers(dest="command", metavar="<command>")

    commands.add_parser("login", help="Login to a SnapMaster deployment.")
    commands.add_parser("logout", help="Log out of a SnapMaster deployment.")
    commands.add_parser("user", help="Show the active user")
    commands.add_parser("version", help="Show the current version")

    init_parser = commands.add_parser("init", help="Initialize the snap CLI environment")
    init_parser.add_argument("api_url", nargs="?", help="API server URL")
    init_parser.add_argument("client_id", nargs="?", help="OAuth client ID")
    init_parser.add_argument("auth_domain", nargs="?", help="OAuth auth domain")

    config_parser = commands.add_parser("config", help="Get and set config information")
    config_commands = config_parser.add_subparsers(dest="config_command", metavar="<get|set>")
    config_commands.add_parser("get", help="Print out config information")
    set_parser = config_commands.add_parser("set", help="Set config information")
    set_parser.add_argument(
        "environment",
        nargs="?",
        choices=sorted(settings.ENVIRONMENTS),
        help="switch to a known SnapMaster environment",
    )
    set_parser.add_argument("--api-url", default=None, help="API URL")
    set_parser.add_argument("--client-id", default=None, help="OAuth client ID (required for any non-default API URL)")
    set_parser.add_argument("--auth-domain", default=None, help="OAuth auth domain")
    set_parser.add_argument("--redirect-url", default=None, help="Loopback URL for the login callback")

    add_resource_commands(commands)

    return parser


def add_resource_commands(commands) -> None:
    """Register the snaps, active, gallery, tools, connections and logs commands"""
    groups = {
        "gallery": ("Browse the snap gallery", {"list": None}),
        "snaps": ("Manage snaps", {"list": None, "get": "snap ID"}),
        "active": (
            "Manage active snaps",
            {
                "list": None,
                "get": "active snap ID",
                "logs": "active snap ID",
                "pause": "active snap ID",
                "resume": "active snap ID",
                "deactivate": "active snap ID",
            },
        ),
        "tools": ("Browse the SnapMaster tools library", {"list": None, "get": "tool (provider) name"}),
        "connections": ("Manage connections to tools", {"list": None, "get": "connection name"}),
    }

    for command, (help_text, actions) in groups.items():
        group_parser = commands.add_parser(command, help=help_text)
        group_commands = group_parser.add_subparsers(dest="action", metavar="<" + "|".join(actions) + ">")
        group_commands.required = True
        for action, target in actions.items():
            action_parser = group_commands.add_parser(action, help=f"{action} {command}")
            if target:
                action_parser.add_argument("target", help=target)

    logs_parser = commands.add_parser("logs", help="Get all logs for the current user")
    logs_commands = logs_parser.add_subparsers(dest="action", metavar="<details>")
    details_parser = logs_commands.add_parser("details", help="Get the details of a log entry")
    details_parser.add_argument("target", help="log ID")


def run(args: argparse.Namespace, console) -> int:
    """Dispatch a parsed command line; returns the exit status"""
    store = ConfigStore(args.config)

    if args.command == "login":
        return login(store, console)
    if args.command == "logout":
        return logout_user(store, console)
    if args.command == "user":
        return current_user(store, console, args.format)
    if args.command == "version":
        print_message(console, f"version <{settings.VERSION}>, git hash <{settings.GIT_HASH}>")
        return 0
    if args.command == "init":
        return init_config(store, console, args.api_url, args.client_id, args.auth_domain)
    if args.command == "config":
        if args.config_command == "set":
            overrides = {
                "APIURL": args.api_url,
                "ClientID": args.client_id,
                "AuthDomain": args.auth_domain,
                "RedirectURL": args.redirect_url,
            }
            return set_config(store, console, args.environment, overrides, args.format)
        return get_config(store, console, args.format)
    if args.command in RESOURCE_COMMANDS:
        return resource_command(store, console, args)

    build_parser().print_help()
    return 0


def main(argv: Optional[List[str]] = None):
    """Entry point for the CLI"""
    args = build_parser().parse_args(argv)
    console = setup_console(args.debug)

    try:
        status = run(args, console)
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        status = 130
    except Exception as e:
        print_error(console, f"fatal error: {e}")
        if args.debug:
            console.print_exception()
        status = 1

    sys.exit(status)


if __name__ == "__main__":
    main()
