import logging
import sys

import click
import uvicorn
from rich.console import Console
from rich.table import Table

from ..apcupsd.client import APCUPSDClient, APCUPSDError, dial
from ..apcupsd.models import StatusSnapshot
from ..app import create_app
from ..config import parse_addr, settings
from ..exporter import Exporter
from ..utils.logging import setup_logging

console = Console()
logger = logging.getLogger(__name__)


def _split_addr(addr: str, default_host: str, flag: str):
    try:
        return parse_addr(addr, default_host)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint=flag)


@click.group()
@click.option('--verbose', '-v', is_flag=True, help='Enables verbose mode.')
@click.option('--quiet', '-q', is_flag=True, help='Enables quiet mode.')
@click.pass_context
def app(ctx, verbose, quiet):
    """
    Prometheus exporter for apcupsd.
    """
    ctx.ensure_object(dict)
    ctx.obj['VERBOSE'] = verbose
    ctx.obj['QUIET'] = quiet

    if verbose:
        setup_logging(level="DEBUG")
    elif quiet:
        setup_logging(level="ERROR")
    else:
        setup_logging()


@app.command()
@click.option('--telemetry-addr', default=settings.TELEMETRY_ADDR, show_default=True,
              help='Address for the apcupsd exporter to listen on.')
@click.option('--telemetry-path', default=settings.TELEMETRY_PATH, show_default=True,
              help='URL path for surfacing collected metrics.')
@click.option('--apcupsd-addr', default=settings.APCUPSD_ADDR, show_default=True,
              help='Address of the apcupsd Network Information Server (NIS).')
@click.option('--timeout', default=settings.TIMEOUT, show_default=True, type=click.FloatRange(min=0, min_open=True),
              help='Seconds to wait for apcupsd on each scrape.')
def serve(telemetry_addr: str, telemetry_path: str, apcupsd_addr: str, timeout: float) -> None:
    """Serves apcupsd metrics over HTTP."""
    if not apcupsd_addr:
        raise click.UsageError("address of apcupsd Network Information Server (NIS) must be specified with '--apcupsd-addr'")
    if not telemetry_path.startswith('/'):
        raise click.BadParameter("must start with '/'", param_hint='--telemetry-path')

    listen_host, listen_port = _split_addr(telemetry_addr, "0.0.0.0", '--telemetry-addr')
    nis_host, nis_port = _split_addr(apcupsd_addr, "localhost", '--apcupsd-addr')

    exporter = Exporter(dial(nis_host, nis_port), timeout=timeout)
    web_app = create_app(exporter, metrics_path=telemetry_path)

    logger.info("Starting apcupsd exporter on %s:%s for server %s:%s", listen_host, listen_port, nis_host, nis_port)
    uvicorn.run(web_app, host=listen_host, port=listen_port, log_config=None)


def _format_timestamp(value) -> str:
    return value.isoformat() if value is not None else "[dim]never[/dim]"


def _status_table(snapshot: StatusSnapshot) -> Table:
    table = Table(title=f"UPS {snapshot.ups_name or '(unnamed)'}")
    table.add_column("Field", style="cyan")
    table.add_column("Value")

    table.add_row("Hostname", snapshot.hostname)
    table.add_row("Model", snapshot.model)
    table.add_row("Status", snapshot.status)
    table.add_row("Load", f"{snapshot.load_percent:g} %")
    table.add_row("Battery charge", f"{snapshot.battery_charge_percent:g} %")
    table.add_row("Line voltage", f"{snapshot.line_volts:g} V (nominal {snapshot.line_nominal_volts:g} V)")
    table.add_row("Output", f"{snapshot.output_volts:g} V, {snapshot.output_amps:g} A")
    table.add_row("Battery voltage", f"{snapshot.battery_volts:g} V (nominal {snapshot.battery_nominal_volts:g} V)")
    table.add_row("Internal temperature", f"{snapshot.internal_temp_celsius:g} °C")
    table.add_row("Time left", f"{snapshot.time_left.total_seconds():g} s")
    table.add_row("Time on battery", f"{snapshot.time_on_battery.total_seconds():g} s")
    table.add_row("Transfers", str(snapshot.number_transfers))
    table.add_row("Cumulative time on battery", f"{snapshot.cumulative_time_on_battery.total_seconds():g} s")
    table.add_row("Last transfer on battery", _format_timestamp(snapshot.last_transfer_on_battery))
    table.add_row("Last transfer off battery", _format_timestamp(snapshot.last_transfer_off_battery))
    table.add_row("Last selftest", _format_timestamp(snapshot.last_selftest))
    table.add_row("Nominal power", f"{snapshot.nominal_power_watts} W")
    return table


@app.command()
@click.option('--apcupsd-addr', default=settings.APCUPSD_ADDR, show_default=True,
              help='Address of the apcupsd Network Information Server (NIS).')
@click.option('--timeout', default=settings.TIMEOUT, show_default=True, type=click.FloatRange(min=0, min_open=True),
              help='Seconds to wait for apcupsd.')
def status(apcupsd_addr: str, timeout: float) -> None:
    """Reads UPS status from apcupsd once and prints it."""
    host, port = _split_addr(apcupsd_addr, "localhost", '--apcupsd-addr')
    console.print(f"[bold blue]Reading UPS status from {host}:{port}[/bold blue]")
    try:
        snapshot = APCUPSDClient(host=host, port=port, timeout=timeout).status()
    except APCUPSDError as e:
        console.print(f"[red]❌ apcupsd status failed: {e}[/red]")
        sys.exit(1)
    console.print(_status_table(snapshot))


if __name__ == '__main__':
    app()
