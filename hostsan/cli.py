"""CLI interface for hostsan using Click and Rich."""

import logging
import sys

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from hostsan import __version__
from hostsan.config import HostsanConfig
from hostsan.loader import SuffixListLoader
from hostsan.pipeline import FilterStats, HostFilter, Verdict, classify
from hostsan.suffixes import SuffixLocator, SuffixMatch
from hostsan.utils.validators import split_sources

# stdout carries accepted hosts, so everything human-facing goes to stderr
console = Console(stderr=True)


def _setup_logging(verbose: bool):
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _load_config(config_path, suffix_list, no_default_lists, cache_dir, max_age_hours) -> HostsanConfig:
    """Load YAML config (if any) and apply CLI overrides."""
    if config_path:
        try:
            config = HostsanConfig.from_yaml(config_path)
        except FileNotFoundError:
            console.print(f"[red]Error:[/red] Config file not found: {config_path}")
            sys.exit(1)
    else:
        config = HostsanConfig.default()

    if suffix_list:
        config.suffix_lists.sources.extend(suffix_list)
    if no_default_lists:
        config.suffix_lists.include_defaults = False
    if cache_dir:
        config.suffix_lists.cache_dir = cache_dir
    if max_age_hours is not None:
        config.suffix_lists.max_age_hours = max_age_hours
    return config


def _build_loader(config: HostsanConfig) -> SuffixListLoader:
    return SuffixListLoader(
        sources=config.suffix_lists.sources,
        cache_dir=config.suffix_lists.cache_dir,
        max_age=config.suffix_lists.max_age,
        include_defaults=config.suffix_lists.include_defaults,
    )


def _build_locator(config: HostsanConfig) -> SuffixLocator:
    """Load every configured suffix list; exits when nothing could be loaded."""
    suffixes = _build_loader(config).load()
    if not suffixes:
        console.print(
            "[red]Error:[/red] No suffixes loaded. Check network access, "
            "--cache-dir or --suffix-list."
        )
        sys.exit(1)
    return SuffixLocator(suffixes)


def _print_stats(stats: FilterStats):
    table = Table(title="Filter Summary", border_style="cyan")
    table.add_column("Outcome", style="bold")
    table.add_column("Lines", justify="right")
    table.add_row("[green]Accepted[/green]", str(stats.accepted))
    table.add_row("[yellow]Rejected[/yellow]", str(stats.rejected))
    table.add_row("[dim]Dropped[/dim]", str(stats.dropped))
    table.add_row("Total", str(stats.total))
    console.print(table)


def suffix_list_options(f):
    """Options shared by every command that loads suffix lists."""
    options = [
        click.option("--config", "-c", "config_path", help="Path to YAML configuration file"),
        click.option(
            "--suffix-list", "-s", multiple=True,
            help="Extra suffix list (local path or URL); repeatable",
        ),
        click.option(
            "--no-default-lists", is_flag=True,
            help="Do not load the IANA and Public Suffix lists",
        ),
        click.option(
            "--cache-dir", envvar="HOSTSAN_CACHE_DIR", default=None,
            help="Directory for downloaded suffix lists",
        ),
        click.option(
            "--max-age-hours", type=int, default=None,
            help="Re-download cached lists older than this (default 72)",
        ),
        click.option("--verbose", "-v", is_flag=True, help="Enable verbose output"),
    ]
    for option in reversed(options):
        f = option(f)
    return f


@click.group(invoke_without_command=True)
@click.pass_context
def cli(ctx):
    """hostsan - normalize and validate host lists."""
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@cli.command(name="filter")
@click.argument("input_file", type=click.File("r", encoding="utf-8", errors="replace"), default="-")
@click.option("--keep-ip", is_flag=True, envvar="IP", help="Accept public IPv4/IPv6 addresses")
@click.option(
    "--keep-unknown-tld", is_flag=True, envvar="TLD",
    help="Accept hosts whose suffix is not in any list",
)
@click.option("--summary", is_flag=True, help="Print a summary table to stderr")
@suffix_list_options
def filter_hosts(input_file, keep_ip, keep_unknown_tld, summary, config_path, suffix_list,
                 no_default_lists, cache_dir, max_age_hours, verbose):
    """Filter host lines: accepted hosts to stdout, rejected to stderr.

    Lines that are not valid hosts at all are dropped.
    """
    _setup_logging(verbose)
    config = _load_config(config_path, suffix_list, no_default_lists, cache_dir, max_age_hours)

    if keep_ip:
        config.filter.keep_ip = True
    if keep_unknown_tld:
        config.filter.keep_unknown_suffix = True

    host_filter = HostFilter(_build_locator(config), config.filter)
    stats = host_filter.run(
        input_file,
        accepted=sys.stdout,
        rejected=sys.stderr,
    )

    if summary:
        _print_stats(stats)


@cli.command()
@click.argument("hosts", nargs=-1, required=True)
@suffix_list_options
def check(hosts, config_path, suffix_list, no_default_lists, cache_dir, max_age_hours, verbose):
    """Show how each HOST is normalized and classified."""
    _setup_logging(verbose)
    config = _load_config(config_path, suffix_list, no_default_lists, cache_dir, max_age_hours)
    locator = _build_locator(config)

    table = Table(title="Host Classification", border_style="cyan")
    table.add_column("Input", style="bold")
    table.add_column("Host")
    table.add_column("Type", justify="center")
    table.add_column("Apex")
    table.add_column("Suffix")
    table.add_column("Verdict", justify="center")

    for raw in hosts:
        result = locator.locate(raw)
        verdict = classify(result, config.filter)

        if result.is_ip:
            kind = "ip"
        elif result.match is SuffixMatch.BARE_SUFFIX:
            kind = "suffix"
        else:
            kind = "domain"

        if verdict is Verdict.ACCEPT:
            styled = "[green]ACCEPT[/green]"
        elif verdict is Verdict.REJECT:
            styled = "[yellow]REJECT[/yellow]"
        else:
            styled = "[red]DROP[/red]"

        table.add_row(raw, result.host, kind, result.apex or "-", result.suffix or "-", styled)

    Console().print(table)


@cli.command()
@suffix_list_options
def suffixes(config_path, suffix_list, no_default_lists, cache_dir, max_age_hours, verbose):
    """Download (or refresh) the suffix lists and report their size."""
    _setup_logging(verbose)
    config = _load_config(config_path, suffix_list, no_default_lists, cache_dir, max_age_hours)
    loader = _build_loader(config)

    remote, local = split_sources(loader.sources)
    table = Table(title="Suffix Sources", border_style="cyan")
    table.add_column("Source", style="bold")
    table.add_column("Kind", justify="center")
    table.add_column("Suffixes", justify="right")

    merged: set[str] = set()
    for source in loader.sources:
        found = loader.read(source)
        merged |= found
        kind = "remote" if source in remote else "local"
        count = str(len(found)) if found else "[red]0[/red]"
        table.add_row(source, kind, count)

    console.print(table)
    summary = Text()
    summary.append(f"{len(merged)}", style="bold green" if merged else "bold red")
    summary.append(f" unique suffixes from {len(remote)} remote and {len(local)} local sources")
    console.print(Panel(summary, border_style="cyan"))
    if not merged:
        sys.exit(1)


@cli.command()
def version():
    """Show version information."""
    click.echo(f"hostsan v{__version__}")


if __name__ == "__main__":
    cli()
