"""
Joplin Publisher CLI.

Transcodes a Joplin notebook export into a Zola site, copies the referenced
images, then deletes the export.
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Tuple

import click

from joplin_publisher import __version__
from joplin_publisher.core.models import TranscodeError
from joplin_publisher.core.transcoder import Transcoder, TranscoderConfig, load_config
from joplin_publisher.log_config import setup_logging

logger = logging.getLogger(__name__)


def _build_config(
    config_path: Optional[Path],
    source: Optional[Path],
    destination: Optional[Path],
    skip_dirs: Tuple[str, ...],
    keep_source: bool,
) -> TranscoderConfig:
    overrides = {
        'source_root': source,
        'destination_root': destination,
        'skip_dirs': list(skip_dirs) if skip_dirs else None,
        'delete_source': False if keep_source else None,
    }
    if config_path is not None:
        return load_config(config_path, **overrides)
    return TranscoderConfig.from_dict({k: v for k, v in overrides.items() if v is not None})


@click.command()
@click.version_option(__version__, prog_name="joplin-publisher")
@click.option("--config", "config_path", type=click.Path(dir_okay=False, path_type=Path),
              help="YAML config file.")
@click.option("--source", type=click.Path(file_okay=False, path_type=Path),
              help="Joplin export root (holds Website/ and _resources/).")
@click.option("--destination", type=click.Path(file_okay=False, path_type=Path),
              help="Zola site root (holds content/ and static/images/).")
@click.option("--skip-dir", "skip_dirs", multiple=True,
              help="Top-level notebook to leave out. Repeatable.")
@click.option("--keep-source", is_flag=True, help="Do not delete the Joplin export afterwards.")
@click.option("--dry-run", is_flag=True, help="Check everything, write nothing.")
@click.option("--debug", is_flag=True, help="Log every file.")
def main(
    config_path: Optional[Path],
    source: Optional[Path],
    destination: Optional[Path],
    skip_dirs: Tuple[str, ...],
    keep_source: bool,
    dry_run: bool,
    debug: bool,
) -> None:
    """Publish a Joplin notebook export to a Zola site."""
    setup_logging(debug=debug)

    try:
        config = _build_config(config_path, source, destination, skip_dirs, keep_source)
        result = Transcoder(config).run(dry_run=dry_run)
    except TranscodeError as e:
        logger.error("%s", e)
        sys.exit(1)

    prefix = "Would publish" if result.dry_run else "Published"
    click.echo(
        f"{prefix} {len(result.written_paths)} notes and "
        f"{len(result.copied_resources)} images"
    )


if __name__ == "__main__":
    main()
