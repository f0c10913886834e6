"""Status display functionality for CLI"""

import json

from rich.markup import escape
from rich.table import Table

from api.models import DataResponse
from config.session import SnapConfig


def print_error(console, message: str):
    """Print an error line in the snap CLI style"""
    console.print(f"snap: [red]{escape(message)}[/red]")


def print_message(console, message: str):
    """Print an informational line in the snap CLI style"""
    console.print(f"snap: [green]{escape(message)}[/green]")


def show_config(config: SnapConfig, console, output_format: str = "table"):
    """
    Display the service settings (never the access token)

    Args:
        config: Current config
        console: Rich console for output
        output_format: "table" or "json"
    """
    values = {
        "API URL": config.api_url,
        "Client ID": config.client_id,
        "Auth Domain": config.auth_domain,
        "Redirect URL": config.redirect_url,
    }

    if output_format == "json":
        console.print_json(json.dumps(values))
        return

    table = Table(title="Config Values")
    table.add_column("Field", style="cyan")
    table.add_column("Value")

    for field, value in values.items():
        table.add_row(field, value)

    console.print(table)


def show_user(config: SnapConfig, console, output_format: str = "table"):
    """
    Display the logged in user

    Args:
        config: Current config
        console: Rich console for output
        output_format: "table" or "json"
    """
    if output_format == "json":
        console.print_json(json.dumps({"name": config.name, "email": config.email}))
        return

    print_message(console, f"current user is {config.name} <{config.email}>")


def show_document(console, document):
    """
    Print an API document as JSON

    Envelopes ({"status": ..., "data": ...}) are unwrapped to their data.

    Args:
        console: Rich console for output
        document: DataResponse or a plain dict
    """
    if isinstance(document, DataResponse):
        payload = document.data if document.data is not None else document.model_dump(exclude_none=True)
    else:
        payload = document

    console.print_json(json.dumps(payload))
