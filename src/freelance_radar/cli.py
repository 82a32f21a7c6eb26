"""Command-line entry point for freelance-radar."""

from __future__ import annotations

import logging
import sys

import click

from .commands import search as search_cmd
from .core.config import ConfigManager, DEFAULT_CONFIG_PATH
from .core.lexicons import LEXICON_VERSION
from .core.sources import is_location_relevant

# Setup logging early so submodules inherit sane defaults
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)


@click.group()
@click.option(
    "--config",
    default=str(DEFAULT_CONFIG_PATH),
    show_default=True,
    help="Path to config file (defaults to data_dir/config/config.yaml)",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.pass_context
def cli(ctx: click.Context, config: str, verbose: bool) -> None:
    """freelance-radar - find freelancer questions in RSS/Atom feeds."""
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config


@cli.command("search")
@click.argument("keyword")
@click.option("--location", default="", help="Restrict to sources matching this location (e.g. 'Paris')")
@click.option("--json", "as_json", is_flag=True, help="Print the ranked items as JSON")
@click.pass_context
def search(ctx: click.Context, keyword: str, location: str, as_json: bool) -> None:
    """Rank recent help requests matching KEYWORD."""
    try:
        items = search_cmd.run(ctx.obj["config_path"], keyword, location)
    except Exception as exc:  # pragma: no cover - click echoes the message
        click.echo(f"❌ Search failed: {exc}", err=True)
        sys.exit(1)

    if as_json:
        click.echo(search_cmd.to_json(items))
    else:
        click.echo(search_cmd.to_text(items))


@cli.command("sources")
@click.option("--location", default="", help="Show which sources a search for this location would query")
@click.pass_context
def sources(ctx: click.Context, location: str) -> None:
    """List the configured feed sources."""
    try:
        registry = ConfigManager(ctx.obj["config_path"]).get_sources()
    except Exception as exc:  # pragma: no cover - click echoes the message
        click.echo(f"❌ Could not load sources: {exc}", err=True)
        sys.exit(1)

    for source in registry:
        marker = "✅" if is_location_relevant(source.region, location) else "⏭️ "
        click.echo(
            f"{marker} {source.display_name} [{source.source_type}, {source.region or '-'}, "
            f"weight {source.weight:.1f}] {source.url}"
        )


@cli.command("status")
@click.pass_context
def status(ctx: click.Context) -> None:
    """Show configuration status."""
    try:
        config_manager = ConfigManager(ctx.obj["config_path"])
        click.echo(f"📄 Config file: {config_manager.config_path}")

        if config_manager.validate_config():
            click.echo("✅ Configuration is valid")
        else:
            click.echo("❌ Configuration validation failed")
            return

        settings = config_manager.get_settings()
        click.echo(f"📡 Sources: {len(config_manager.get_sources())}")
        click.echo(f"🔎 Max results: {settings.max_results}, time window: {settings.time_window_days} days")
        click.echo(f"🌐 Relay: {settings.relay_url or 'none'} (timeout {settings.timeout:g}s)")
        click.echo(f"📚 Lexicon version: {LEXICON_VERSION}")

    except Exception as exc:  # pragma: no cover - click echoes the message
        click.echo(f"❌ Error checking status: {exc}", err=True)


if __name__ == "__main__":  # pragma: no cover - script entry
    cli()
