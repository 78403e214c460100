import asyncio
import logging
import signal
import sys

import click
import httpx
from rich.console import Console
from rich.logging import RichHandler

from . import __version__
from .config import DURATION, FamilyFilter, RunConfiguration
from .coordinator import FanOutCoordinator
from .enrichment import Enricher, PTRResolver, IPInfoLookup, ILineLookup
from .errors import ChickError, InterruptCancellation
from .models import EnrichmentRecord, IPAddress
from .output import ConsoleOutput
from .resolver import AddressResolver


log = logging.getLogger(__name__)

USER_AGENT = f"chick/{__version__}"


class ChickCommand(click.Command):
    """Command whose usage errors exit with status 1"""

    def parse_args(self, ctx, args):
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as e:
            e.exit_code = 1
            raise


def setup_logging(verbose: bool):
    """Send chick's log records to stderr through rich"""
    logger = logging.getLogger("chick")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if not logger.handlers:
        handler = RichHandler(console=Console(stderr=True), show_path=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)


def build_enricher(config: RunConfiguration, client: httpx.AsyncClient,
                   iline_client: httpx.AsyncClient) -> Enricher:
    return Enricher(
        PTRResolver(timeout=config.timeout),
        IPInfoLookup(client, timeout=config.timeout),
        ILineLookup(iline_client, timeout=config.iline_timeout)
    )


async def run_checks(config: RunConfiguration, addresses: list[IPAddress],
                     output: ConsoleOutput) -> list[EnrichmentRecord]:
    """
    Enrich every address, showing progress until all are done.

    SIGINT and SIGTERM set the coordinator's cancel event. Where the
    loop cannot install signal handlers (Windows), Ctrl+C still
    surfaces as KeyboardInterrupt.
    """
    cancel_event = asyncio.Event()
    loop = asyncio.get_running_loop()

    installed = []
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, cancel_event.set)
            installed.append(sig)
        except (NotImplementedError, RuntimeError, ValueError):
            pass

    headers = {'User-Agent': USER_AGENT, 'Accept': 'application/json'}
    try:
        async with httpx.AsyncClient(timeout=config.timeout, headers=headers) as client, \
                httpx.AsyncClient(timeout=config.iline_timeout, headers=headers) as iline_client:
            coordinator = FanOutCoordinator(
                build_enricher(config, client, iline_client),
                cancel_event=cancel_event
            )
            with output.progress(len(addresses)) as progress:
                return await coordinator.run(
                    addresses,
                    on_progress=lambda done, total: output.update_progress(progress, done, total)
                )
    finally:
        for sig in installed:
            loop.remove_signal_handler(sig)


@click.command(cls=ChickCommand, context_settings={'help_option_names': ['-h', '--help']})
@click.argument('target', metavar='DOMAIN/IP')
@click.option('-4', '--ipv4', is_flag=True,
              help='Show only IPv4 (A) records')
@click.option('-6', '--ipv6', is_flag=True,
              help='Show only IPv6 (AAAA) records')
@click.option('--timeout', default='5s', type=DURATION, show_default=True,
              help='Timeout for HTTP requests')
@click.option('--iline-timeout', default='10s', type=DURATION, show_default=True,
              help='Timeout for I-line API requests')
@click.option('--no-color', is_flag=True,
              help='Disable colorized output')
@click.option('-v', '--verbose', is_flag=True,
              help='Show debug logging on stderr')
@click.version_option(version=__version__)
def main(target: str, ipv4: bool, ipv6: bool, timeout: float,
         iline_timeout: float, no_color: bool, verbose: bool):
    """
    chick - Extended DNS Check.

    Show A/AAAA records for DOMAIN/IP with PTR records, country and
    organization (ipinfo.io) and IRCnet I-line servers for every
    address.

    Examples:

        chick example.com

        chick -4 irc.example.net

        chick 2001:db8::1 --iline-timeout 20s
    """
    setup_logging(verbose)
    output = ConsoleOutput(no_color=no_color)
    config = RunConfiguration(
        target=target,
        family_filter=FamilyFilter.from_flags(ipv4, ipv6),
        timeout=timeout,
        iline_timeout=iline_timeout
    )

    try:
        resolver = AddressResolver(config.family_filter)
        try:
            resolver.validate(config.target)
            addresses = resolver.filter(resolver.resolve(config.target))
        except ChickError as e:
            output.print_error(str(e))
            sys.exit(1)

        if not addresses:
            output.print_warning(f"No addresses of the requested family for {config.target}")
            return

        records = asyncio.run(run_checks(config, addresses, output))
        output.print_records(records)

    except (InterruptCancellation, KeyboardInterrupt):
        output.print_cancelled()
        sys.exit(130)
    except Exception as e:
        log.debug("Unexpected error", exc_info=True)
        output.print_error(f"Unexpected error: {e}")
        sys.exit(1)


if __name__ == '__main__':
    main()
