import json
import logging
from pathlib import Path

import click

from .pipeline import IncludeMergeError, MergeConfig, OutputMode, merge_project_file


@click.command()
@click.option("--root", "-r", default=None, type=click.Path(exists=True, file_okay=False, resolve_path=True))
@click.option("--output", "-o", default=None, type=click.Path(dir_okay=False, resolve_path=True))
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True))
@click.option(
    "--force/--no-force",
    default=None,
    help="Overwrite an existing output file (default) or fail if it exists",
)
@click.option("--strict", is_flag=True, default=False, help="Fail when a local include cannot be resolved")
@click.option("--strip-pragma-once", is_flag=True, default=False, help="Drop #pragma once lines from merged code")
@click.option("--stdout", is_flag=True, default=False, help="Print the merged code instead of writing it")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging")
@click.argument("entry", type=click.Path(exists=True, dir_okay=False, resolve_path=True))
def cpp_include_merger(root, output, config, force, strict, strip_pragma_once, stdout, verbose, entry):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    if config is not None:
        with open(config) as f:
            config = MergeConfig.from_dict(json.load(f))
    else:
        config = MergeConfig()

    # CLI flags override the config file when set
    if force is not None:
        config.output.mode = OutputMode.FORCE if force else OutputMode.ERROR_IF_EXISTS
    if strict:
        config.strict = True
    if strip_pragma_once:
        config.strip_pragma_once = True

    try:
        merged = merge_project_file(
            Path(entry),
            config,
            root=Path(root) if root is not None else None,
            output_path=Path(output) if output is not None else None,
            write=not stdout,
        )
    except (IncludeMergeError, OSError, UnicodeDecodeError) as e:
        raise click.ClickException(str(e)) from e

    if stdout:
        click.echo(merged.result.text, nl=False)
    else:
        click.echo(f"Merged {len(merged.result.sections)} library files into {merged.output_path}")
