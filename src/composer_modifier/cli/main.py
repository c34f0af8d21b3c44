"""
Composer Modifier CLI — edit composer.json files with modify-composer.json directives.

Usage:
    composer-modifier parse composer-json composer.json --print
    composer-modifier parse modify modify-composer.json
    composer-modifier modify composer.json modify-composer.json --dry-run --print
    composer-modifier -d --config settings.json modify --output build/composer.json
"""

import asyncio
import logging
from pathlib import Path

import click
from rich.console import Console

from composer_modifier.core.errors import ComposerModifierError, DocumentParseError, SettingsError
from composer_modifier.core.settings import ModifierSettings, load_settings
from composer_modifier.parsers.composer import DocumentKind

LOG_LEVELS = [logging.WARNING, logging.INFO, logging.DEBUG]


def _error_message(error: ComposerModifierError, source: str | None = None) -> str:
    if isinstance(error, DocumentParseError) or source is None:
        return str(error)
    return f"error parsing {source}: {error}"


def _fail(ctx: click.Context, error: ComposerModifierError, source: str | None = None) -> None:
    Console(stderr=True).print(_error_message(error, source), markup=False, highlight=False)
    ctx.exit(1)


@click.group()
@click.version_option(package_name="composer-modifier")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Settings file (JSON). Defaults to $COMPOSER_MODIFIER_CONFIG.",
)
@click.option("--debug", "-d", count=True, help="Turn debugging information on (repeat for more).")
@click.pass_context
def cli(ctx, config_path, debug):
    """Composer Modifier — edit composer.json with modify-composer.json directives."""
    # Configure logging
    logging.basicConfig(
        level=LOG_LEVELS[min(debug, len(LOG_LEVELS) - 1)],
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        ctx.obj = load_settings(config_path)
    except SettingsError as e:
        _fail(ctx, e)


@cli.group()
def parse():
    """Parse a composer.json or modify-composer.json file."""
    pass


def _parse(ctx: click.Context, kind: DocumentKind, file: str, print_: bool) -> None:
    from composer_modifier.core.modifier import ComposerModifier
    from composer_modifier.exporters.render import render_document

    settings: ModifierSettings = ctx.obj
    console = Console()
    modifier = ComposerModifier(settings=settings, console=console)

    try:
        document = asyncio.run(modifier.load(kind, file))
    except ComposerModifierError as e:
        _fail(ctx, e, source=file)
        return

    if print_:
        console.print(f"\n{file}:", markup=False, highlight=False)
        console.print_json(render_document(document, indent=settings.indent), indent=settings.indent)


@parse.command("composer-json")
@click.argument("file", required=False)
@click.option("--print", "-p", "print_", is_flag=True, help="Print the parsed document.")
@click.pass_context
def parse_composer_json(ctx, file, print_):
    """Parse a composer.json file."""
    _parse(ctx, DocumentKind.MANIFEST, file or ctx.obj.manifest_file, print_)


@parse.command("modify")
@click.argument("file", required=False)
@click.option("--print", "-p", "print_", is_flag=True, help="Print the parsed document.")
@click.pass_context
def parse_modify(ctx, file, print_):
    """Parse a modify-composer.json file."""
    _parse(ctx, DocumentKind.DIRECTIVE, file or ctx.obj.directive_file, print_)


@cli.command()
@click.argument("composer_json", required=False)
@click.argument("modify_json", required=False)
@click.option("--dry-run", "-n", is_flag=True, help="Show the changes without writing anything.")
@click.option("--print", "-p", "print_", is_flag=True, help="Print the resulting composer.json.")
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write the result here instead of overwriting COMPOSER_JSON.",
)
@click.pass_context
def modify(ctx, composer_json, modify_json, dry_run, print_, output):
    """Apply MODIFY_JSON to COMPOSER_JSON."""
    from composer_modifier.core.modifier import ComposerModifier
    from composer_modifier.exporters import get_exporter

    settings: ModifierSettings = ctx.obj
    composer_json = composer_json or settings.manifest_file
    modify_json = modify_json or settings.directive_file
    console = Console()

    exporters = [get_exporter("file", output or composer_json, indent=settings.indent)]
    if print_:
        exporters.append(get_exporter("console", composer_json, indent=settings.indent, console=console))

    modifier = ComposerModifier(exporters=exporters, settings=settings, console=console)
    try:
        asyncio.run(modifier.run(composer_json, modify_json, dry_run=dry_run or settings.dry_run))
    except ComposerModifierError as e:
        _fail(ctx, e)


if __name__ == "__main__":
    cli()
