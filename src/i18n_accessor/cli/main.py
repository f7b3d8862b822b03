"""Command line tools for translation files."""

import logging
from pathlib import Path
from typing import List, Optional, Tuple

import click
import yaml
from rich.console import Console
from rich.table import Table

from ..accessor import TranslationAccessor, keys_of, path_of, resolve_key, wrap
from ..core.config import DEFAULT_CONFIG_PATH, AccessorConfig, load_config
from ..errors import TextError
from ..tree import load_translations, validate_tree
from ..tree.loader import LOCALE_SUFFIXES
from ..utils.rich_logging import setup_logging

logger = logging.getLogger(__name__)

console = Console()


def _coerce_arg(value: str):
    """Pass numeric arguments as ints so they can select plural forms."""
    digits = value[1:] if value.startswith("-") else value
    return int(value) if digits.isdecimal() else value


def _translation_file(config: AccessorConfig, file: Optional[Path]) -> Path:
    path = file or config.locale_path()
    if not path.exists():
        raise click.ClickException(f"Translation file not found: {path}")
    return path


def _load_or_fail(path: Path):
    try:
        return load_translations(path)
    except (yaml.YAMLError, ValueError, OSError) as e:
        raise click.ClickException(f"Cannot load {path}: {e}")


def _keys_table(accessor: TranslationAccessor) -> Table:
    path = path_of(accessor) or "<root>"
    table = Table(title=f"Keys under {path}")
    table.add_column("Key")
    table.add_column("Type")
    for key in keys_of(accessor):
        child = accessor[key]
        try:
            value = child()
        except TextError:
            kind = "[red]invalid[/]"
        else:
            kind = "branch" if isinstance(value, TranslationAccessor) else "string"
        table.add_row(str(key), kind)
    return table


@click.group()
@click.option(
    "--config", "-c", "config_path",
    default=str(DEFAULT_CONFIG_PATH),
    type=click.Path(dir_okay=False, path_type=Path),
    help="Config file",
)
@click.pass_context
def cli(ctx, config_path):
    """i18n accessor - strict access to translation files."""
    ctx.ensure_object(dict)
    config = load_config(config_path)
    setup_logging(config.log_level)
    ctx.obj["config"] = config


@cli.command()
@click.argument("files", nargs=-1, type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
def lint(ctx, files: Tuple[Path, ...]):
    """Check translation files for plural forms missing '!!pl'."""
    config: AccessorConfig = ctx.obj["config"]
    paths: List[Path] = list(files)
    if not paths:
        if not config.translations_dir.is_dir():
            raise click.ClickException(
                f"No files given and translations directory not found: {config.translations_dir}"
            )
        paths = sorted(
            p for p in config.translations_dir.iterdir() if p.suffix in LOCALE_SUFFIXES
        )

    failed = 0
    for path in paths:
        report = validate_tree(_load_or_fail(path), source=str(path))
        logger.debug(f"{path}: {report.nodes_checked} nodes checked")
        if not report.passed:
            failed += 1
            console.print(str(report), style="red", markup=False, highlight=False)

    if failed:
        console.print(f"[red]✗ {failed} of {len(paths)} file(s) failed[/]")
        ctx.exit(1)
    console.print(f"[green]✓ {len(paths)} file(s) passed[/]")


@cli.command()
@click.argument("key")
@click.argument("args", nargs=-1)
@click.option("--file", "-f", type=click.Path(dir_okay=False, path_type=Path), help="Translation file")
@click.pass_context
def get(ctx, key: str, args: Tuple[str, ...], file: Optional[Path]):
    """Print the translation for a dotted KEY."""
    config: AccessorConfig = ctx.obj["config"]
    tree = _load_or_fail(_translation_file(config, file))

    try:
        result = resolve_key(wrap(tree), key, *(_coerce_arg(a) for a in args))
    except TextError as e:
        logger.debug("Lookup failed", extra={"i18n_key": key})
        console.print(str(e), style="red", markup=False, highlight=False)
        ctx.exit(1)

    if isinstance(result, TranslationAccessor):
        console.print(_keys_table(result))
    else:
        click.echo(result)


@cli.command()
@click.argument("key", required=False, default="")
@click.option("--file", "-f", type=click.Path(dir_okay=False, path_type=Path), help="Translation file")
@click.pass_context
def keys(ctx, key: str, file: Optional[Path]):
    """List the keys under KEY (or the root)."""
    config: AccessorConfig = ctx.obj["config"]
    tree = _load_or_fail(_translation_file(config, file))

    try:
        result = resolve_key(wrap(tree), key)
    except TextError as e:
        console.print(str(e), style="red", markup=False, highlight=False)
        ctx.exit(1)

    if not isinstance(result, TranslationAccessor):
        raise click.ClickException(f"{key} is a string, not a namespace")
    for child_key in keys_of(result):
        click.echo(child_key)


if __name__ == "__main__":
    cli()
