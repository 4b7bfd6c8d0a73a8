"""
hep command line.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import dataclasses
import logging

import click
from rich.console import Console
from rich.markup import escape

from hep import __version__
from hep.config import HepConfig
from hep.http.client import HTTPClient
from hep.logging_config import configure_logging
from hep.parse import HepError, RequestDescriptor, assemble

logger = logging.getLogger(__name__)

console = Console(stderr=True, highlight=False)


def _show_request(request: RequestDescriptor) -> None:
    console.print("\n[cyan]Request:[/cyan]")
    console.print(f"  {request.method} {escape(str(request.url))}", soft_wrap=True)
    for name, value in request.headers.multi_items():
        console.print(f"  [dim]{escape(name)}:[/dim] {escape(value)}", soft_wrap=True)
    if request.body:
        body = request.body.decode("utf-8", errors="replace")
        console.print(f"  [dim]Body:[/dim] {escape(body)}", soft_wrap=True)
    console.print()


@click.command(context_settings={
    "ignore_unknown_options": True,
    "help_option_names": ["-h", "--help"],
})
@click.argument("tokens", nargs=-1, required=True, type=click.UNPROCESSED)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging and show the request")
@click.option("--log-file", help="Also write debug logs to this file")
@click.option("-t", "--timeout", type=click.FloatRange(min=0, min_open=True), help="Request timeout in seconds")
@click.option("-k", "--insecure", is_flag=True, help="Disable SSL verification")
@click.option("--no-follow", is_flag=True, help="Do not follow redirects")
@click.version_option(__version__, prog_name="hep")
def main(tokens: tuple, verbose: bool, log_file: str | None,
         timeout: float | None, insecure: bool, no_follow: bool):
    """Build and send an HTTP request from terse arguments.

    \b
    TOKENS are [METHOD] HOST [ITEM ...] where each ITEM is one of:
        Name:value      request header
        name==value     query string parameter
        path=value      JSON body field (string), dots nest objects
        path:=json      JSON body field (raw JSON literal)

    \b
    Examples:
        hep httpbin.org/get q==search Accept:application/json
        hep POST :8080/people person.name=brett person.age:=100
        hep PUT https://api.example.com/items/1 tags:='["a","b"]'
    """
    try:
        config = HepConfig.from_env()
    except ValueError as e:
        console.print(f"[red]Error:[/red] configuration failure: {escape(str(e))}")
        raise SystemExit(1)

    overrides = {}
    if verbose:
        overrides["verbose"] = True
    if log_file:
        overrides["log_file"] = log_file
    if timeout is not None:
        overrides["timeout"] = timeout
    if insecure:
        overrides["verify_ssl"] = False
    if no_follow:
        overrides["follow_redirects"] = False
    config = dataclasses.replace(config, **overrides)

    configure_logging(verbose=config.verbose, log_file=config.log_file)

    try:
        parsed = assemble(list(tokens))
    except HepError as e:
        logger.debug("request build failed", exc_info=e)
        console.print(f"[red]Error:[/red] failed to parse command: {escape(str(e))}")
        raise SystemExit(1)

    for token in parsed.unrecognized:
        logger.warning(f"ignoring unrecognized argument {token!r}")

    request = parsed.request
    if config.verbose:
        _show_request(request)

    with HTTPClient(config) as client:
        result = client.execute(request)

    if not result.success:
        console.print(f"[red]Error:[/red] failed to execute request: {escape(result.error or '')}")
        raise SystemExit(1)

    resp = result.response
    for name, values in resp.grouped_headers().items():
        click.echo(f"{name}: {', '.join(values)}", err=True)
    click.echo()
    click.echo(resp.body)


if __name__ == "__main__":
    main()
