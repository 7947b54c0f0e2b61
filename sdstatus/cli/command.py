import asyncio
import sys

import click
from dbus_next.constants import BusType
from pydantic import ValidationError

from sdstatus import __version__
from sdstatus.config import OUTPUT_TYPE_ALIASES, RunConfig, setup_logger
from sdstatus.dbus import (
    DBusConnectionManager,
    SystemdManager,
    SystemdUnitClient,
)
from sdstatus.errors import SdstatusError
from sdstatus.output import StatusPresenter, resolve_output_format
from sdstatus.status import OutputFormat, ResultSet
from sdstatus.status.fetcher import StatusFetcher

OUTPUT_TYPE_CHOICES = [
    *(output_format.value for output_format in OutputFormat),
    *OUTPUT_TYPE_ALIASES,
]


async def fetch_status(config: RunConfig) -> ResultSet:
    """Fetch the status of the configured units over D-Bus.
    """
    connection = DBusConnectionManager(
        bus_type=BusType.SESSION if config.user_bus else BusType.SYSTEM,
    )
    fetcher = StatusFetcher(
        SystemdManager(connection),
        SystemdUnitClient(connection),
    )

    try:
        return await fetcher.fetch(config.units)
    finally:
        await connection.disconnect()


@click.command('sdstatus')
@click.argument('units', nargs=-1, required=True)
@click.option(
    '-c',
    '--color',
    'force_color',
    is_flag=True,
    help='Force colored output.',
)
@click.option(
    '-t',
    '--output-type',
    type=click.Choice(OUTPUT_TYPE_CHOICES, case_sensitive=False),
    default=None,
    help='Output type, defaults to table for TTY, JSON otherwise.',
)
@click.option(
    '--user',
    'user_bus',
    is_flag=True,
    help='Talk to the service manager of the calling user.',
)
@click.option(
    '-v',
    '--verbose',
    is_flag=True,
    help='Log debug messages to stderr.',
)
@click.version_option(__version__, prog_name='sdstatus')
def status(
    units: tuple[str, ...],
    force_color: bool,
    output_type: str | None,
    user_bus: bool,
    verbose: bool,
) -> None:
    """Show how long systemd UNITS have been in their current state.

    Unit names without a type suffix are treated as services.
    """
    try:
        config = RunConfig(
            units=units,
            output_format=output_type,
            force_color=force_color,
            user_bus=user_bus,
            verbose=verbose,
        )
    except ValidationError as e:
        raise click.UsageError(str(e)) from e

    setup_logger(verbose=config.verbose)

    try:
        results = asyncio.run(fetch_status(config))
    except SdstatusError as e:
        click.echo(f'Error: {e}', err=True)
        sys.exit(1)

    is_tty = click.get_text_stream('stdout').isatty()
    output_format = resolve_output_format(config.output_format, is_tty)

    output = StatusPresenter().render(
        results,
        output_format,
        color=config.force_color or is_tty,
    )
    click.echo(output, color=True if config.force_color else None)
