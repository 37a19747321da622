"""
Font Finder CLI
===============

Command line interface to list, search and install fonts.
"""

import json
import logging
import sys
from pathlib import Path

import click

from .core.config import FontFinderConfig
from .core.exceptions import FontFinderError
from .fonts.manager import SystemFonts

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _system_fonts(ctx: click.Context) -> SystemFonts:
    """Create the SystemFonts instance on first use."""
    if ctx.obj.get("fonts") is None:
        options = ctx.obj["options"]
        try:
            config = FontFinderConfig.from_env_and_yaml(yaml_path=options["config"])
            level = "DEBUG" if options["verbose"] else config.effective_log_level
            logging.getLogger("fontfinder").setLevel(level)
            overrides = {}
            if options["custom_dirs"]:
                overrides["custom_dirs"] = [*config.custom_dirs, *options["custom_dirs"]]
            if options["ignore_system_fonts"]:
                overrides["ignore_system_fonts"] = True
            ctx.obj["fonts"] = SystemFonts(config, **overrides)
        except FontFinderError as e:
            logger.exception(f"Font finder setup failed: {e}")
            sys.exit(1)
    return ctx.obj["fonts"]


def _echo_json(data) -> None:
    click.echo(json.dumps(data, indent=2, ensure_ascii=False))


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to configuration YAML file",
)
@click.option(
    "--custom-dir",
    "-d",
    "custom_dirs",
    multiple=True,
    type=click.Path(file_okay=False, path_type=Path),
    help="Additional font directory (repeatable); its fonts are non-system",
)
@click.option("--ignore-system-fonts", is_flag=True, help="Only index custom directory fonts")
@click.pass_context
def cli(ctx, verbose, config, custom_dirs, ignore_system_fonts):
    """Find installed fonts by family and style."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO, format=LOG_FORMAT)
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    ctx.ensure_object(dict)
    ctx.obj["options"] = {
        "verbose": verbose,
        "config": config,
        "custom_dirs": list(custom_dirs),
        "ignore_system_fonts": ignore_system_fonts,
    }


@cli.command(name="families")
@click.pass_context
def families(ctx):
    """List font family names."""
    for name in _system_fonts(ctx).get_fonts():
        click.echo(name)


@cli.command(name="files")
@click.option("--all", "all_files", is_flag=True, help="Include files that cannot be parsed")
@click.pass_context
def files(ctx, all_files):
    """List discovered font files."""
    fonts = _system_fonts(ctx)
    for file in fonts.get_all_font_files() if all_files else fonts.get_font_files():
        click.echo(str(file))


@cli.command(name="list")
@click.option("--json", "as_json", is_flag=True, help="Print the full index as JSON")
@click.pass_context
def list_fonts(ctx, as_json):
    """List indexed families with their styles."""
    index = _system_fonts(ctx).get_fonts_extended()
    if as_json:
        _echo_json(index.to_dict())
        return

    for entry in index:
        marker = "" if entry.is_system_font else " [custom]"
        click.echo(f"{entry.family}{marker}")
        for style, file in entry.files.items():
            click.echo(f"    {style}: {file}")


@cli.command(name="find")
@click.argument("family")
@click.option("--style", "-s", "styles", multiple=True, help="Style name (repeatable)")
@click.pass_context
def find(ctx, family, styles):
    """Find the files of FAMILY, for all styles unless --style is given."""
    query = {"family": family}
    if styles:
        query["style"] = list(styles)

    try:
        result = _system_fonts(ctx).find_fonts([query])
    except FontFinderError as e:
        logger.exception(f"Search failed: {e}")
        sys.exit(1)

    _echo_json(result.to_dict())
    if result.missing:
        sys.exit(1)


@cli.command(name="install")
@click.argument(
    "font_paths", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False)
)
@click.option("--timeout", "-t", type=float, help="Font cache refresh timeout in seconds")
@click.pass_context
def install(ctx, font_paths, timeout):
    """Install fonts that are not installed yet."""
    try:
        outcome = _system_fonts(ctx).install_fonts(font_paths, timeout=timeout)
    except FontFinderError as e:
        logger.exception(f"Font installation failed: {e}")
        sys.exit(1)

    _echo_json(outcome.to_dict())
    if not outcome.success:
        sys.exit(1)


if __name__ == "__main__":
    cli()
