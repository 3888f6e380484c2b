"""CLI commands for rating shipments."""

from __future__ import annotations

import json

import click

from rater.application.dto import JobView
from rater.application.serialization import job_view_to_raw
from rater.domain.exceptions import DomainException
from rater.infrastructure.bootstrap import job_store, settings


def _load_payload(path: str) -> dict:
    try:
        with open(path, encoding="utf-8") as fh:
            return json.load(fh)
    except json.JSONDecodeError as exc:
        raise click.BadParameter(f"'{path}' is not valid JSON: {exc}")


def _display_rates(view: JobView) -> None:
    if not view.rates:
        click.echo("No rates available.")
        return

    click.echo(f"  {'Carrier':<18} {'Service':<18} {'Days':>4} {'Base':>10} {'Total':>10}")
    click.echo(f"  {'-'*64}")
    for quote in view.rates:
        click.echo(
            f"  {quote.carrier_name:<18} {quote.service_name:<18} "
            f"{quote.transit_time_days:>4} {str(quote.base):>10} {str(quote.total):>10}"
        )
        for surcharge in quote.surcharges:
            click.echo(f"  {'':<18} + {surcharge.type:<33} {str(surcharge.amount):>10}")
    click.echo(f"  {'-'*64}")


@click.command("quote")
@click.option(
    "--file",
    "request_file",
    required=True,
    type=click.Path(exists=True, dir_okay=False),
    help="JSON rate request (same body as POST /rate).",
)
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the wire JSON.")
@click.option("--timeout", default=10.0, show_default=True, help="Seconds to wait for rates.")
def rate_quote(request_file: str, as_json: bool, timeout: float) -> None:
    """Submit a rate request and wait for its quotes."""
    payload = _load_payload(request_file)
    store = job_store()

    try:
        job_id = store.submit(payload)
        view = store.wait(job_id, timeout=timeout)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not view.done:
        raise click.ClickException(f"Rate request {job_id} did not finish in {timeout}s")

    if as_json:
        click.echo(json.dumps(job_view_to_raw(view), indent=2))
        return

    click.echo(f"Rate request {job_id}  ({view.complete} rate(s))")
    click.echo()
    _display_rates(view)


@click.command("serve")
@click.option("--host", default=None, help="Bind address (default from RATER_HOST).")
@click.option("--port", default=None, type=int, help="Port (default from RATER_PORT).")
def rate_serve(host: str | None, port: int | None) -> None:
    """Run the HTTP rating service."""
    import uvicorn

    from rater.infrastructure.http.app import create_app

    config = settings()
    app = create_app(job_store(config))
    uvicorn.run(app, host=host or config.host, port=port or config.port, log_level="warning")
