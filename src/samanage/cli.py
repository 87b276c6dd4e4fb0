"""Command line access to the Samanage API."""
import asyncio
import logging
from typing import Any, Dict, List, Optional

import httpx
import typer
from rich.console import Console
from rich.table import Table

from samanage.client import Samanage
from samanage.config import Settings, get_settings
from samanage.errors import CapabilityError, ConfigurationError
from samanage.resources import RESOURCES, Operation
from samanage.utils.logging import setup_logging

logger = logging.getLogger(__name__)

app = typer.Typer(no_args_is_help=True, help="Query the Samanage API from the command line.")

_console = Console()


def build_client(settings: Settings) -> Samanage:
    return Samanage.from_settings(settings)


def parse_params(pairs: List[str]) -> Dict[str, str]:
    """Turn ``key=value`` strings into an ordered mapping."""
    params: Dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise typer.BadParameter(f"Expected key=value, got {pair!r}", param_hint="--param")
        params[key] = value
    return params


async def _fetch(client: Samanage, resource: str, params: Dict[str, Any]) -> httpx.Response:
    async with client:
        reader = getattr(client.resource(resource), Operation.GET.value, None)
        if reader is None:
            raise CapabilityError.unsupported(resource, Operation.GET.value)
        return await reader(params)


def _print_response(response: httpx.Response) -> None:
    if not response.text.strip():
        _console.print(f"HTTP {response.status_code}: empty response", markup=False, highlight=False)
        return
    if "json" in response.headers.get("content-type", ""):
        _console.print_json(response.text)
    else:
        _console.print(response.text, markup=False, highlight=False)


@app.command()
def get(
    resource: str = typer.Argument(..., help="Resource name, e.g. users or catalog_items"),
    record_id: Optional[str] = typer.Option(None, "--id", help="Fetch a single record"),
    per_page: Optional[int] = typer.Option(None, "--per-page", help="Records per page"),
    param: List[str] = typer.Option([], "--param", "-p", help="Extra query parameter as key=value"),
) -> None:
    """Fetch a resource and print the response body."""
    settings = get_settings()
    setup_logging(settings.log_level, log_json=settings.log_json)

    params: Dict[str, Any] = {}
    if record_id:
        params["id"] = record_id
    if per_page is not None:
        params["per_page"] = per_page
    params.update(parse_params(param))

    try:
        client = build_client(settings)
        response = asyncio.run(_fetch(client, resource, params))
    except CapabilityError as e:
        typer.echo(f"Error: {e.message}", err=True)
        raise typer.Exit(code=2)
    except ConfigurationError as e:
        typer.echo(f"Error: {e.message}", err=True)
        raise typer.Exit(code=1)
    except httpx.HTTPStatusError as e:
        typer.echo(f"Error: HTTP {e.response.status_code} for {e.request.url}", err=True)
        raise typer.Exit(code=1)
    except httpx.TransportError as e:
        logger.error(f"Network error: {e}")
        typer.echo(f"Error: network failure: {e}", err=True)
        raise typer.Exit(code=1)

    _print_response(response)


@app.command()
def resources() -> None:
    """Show which operations each resource supports."""
    table = Table(title="Samanage resources")
    table.add_column("Resource", style="bright_green", no_wrap=True)
    table.add_column("Segment", style="white")
    for operation in Operation:
        table.add_column(operation.value, justify="center")
    table.add_column("Extra", style="dim")

    for descriptor in RESOURCES:
        if not descriptor.implemented:
            table.add_row(descriptor.name, "-", *["no"] * len(Operation), "not implemented")
            continue
        marks = []
        for operation in Operation:
            if operation in descriptor.operations:
                marks.append("yes")
            elif operation in descriptor.rejected:
                marks.append("rejected")
            else:
                marks.append("-")
        table.add_row(
            descriptor.name,
            descriptor.uri_segment,
            *marks,
            ", ".join(attribute for attribute, _ in descriptor.nested_reads),
        )

    _console.print(table)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
