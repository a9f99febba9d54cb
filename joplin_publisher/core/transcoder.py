"""Transcoder orchestrating a full Joplin to Zola run."""

import logging
import os
import shutil
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Set

import yaml

from joplin_publisher.core.discovery import NoteDiscovery
from joplin_publisher.core.models import (
    CleanupError,
    ConfigError,
    MissingResourceError,
    ProcessedNote,
    ResourceCopyError,
    TranscodeResult,
    WriteError,
)
from joplin_publisher.core.processor import ContentProcessor
from joplin_publisher.transforms.resources import resource_rewriter

logger = logging.getLogger(__name__)

STRING_KEYS = (
    'notes_dir',
    'resources_dir',
    'content_dir',
    'assets_dir',
    'resource_link_prefix',
    'image_path_prefix',
)


@dataclass
class TranscoderConfig:
    """Where to read the Joplin export from and where the Zola site lives.

    source_root holds the notes directory and the resources directory side
    by side. It is deleted after a successful run unless delete_source is
    False.
    """
    source_root: Path
    destination_root: Path
    notes_dir: str = "Website"
    resources_dir: str = "_resources"
    content_dir: str = "content"
    assets_dir: str = "static/images"
    skip_dirs: List[str] = field(default_factory=lambda: ["books", "about"])
    resource_link_prefix: str = "../../_resources/"
    image_path_prefix: str = "/images/"
    delete_source: bool = True

    def __post_init__(self):
        self.source_root = Path(self.source_root).expanduser()
        self.destination_root = Path(self.destination_root).expanduser()
        self.skip_dirs = list(self.skip_dirs)

    @property
    def notes_path(self) -> Path:
        return self.source_root / self.notes_dir

    @property
    def resources_path(self) -> Path:
        return self.source_root / self.resources_dir

    @property
    def content_path(self) -> Path:
        return self.destination_root / self.content_dir

    @property
    def assets_path(self) -> Path:
        return self.destination_root / self.assets_dir

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TranscoderConfig":
        """Build a config from a mapping, e.g. a parsed YAML file.

        Raises:
            ConfigError: On unknown keys, missing roots or values of the wrong type
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"unknown config keys: {', '.join(unknown)}")

        for key in ('source_root', 'destination_root'):
            if not data.get(key):
                raise ConfigError(f"{key} is required")
            if not isinstance(data[key], (str, os.PathLike)):
                raise ConfigError(f"{key} must be a path")

        for key in STRING_KEYS:
            if key in data and not isinstance(data[key], str):
                raise ConfigError(f"{key} must be a string")

        skip_dirs = data.get('skip_dirs')
        if skip_dirs is not None:
            if not isinstance(skip_dirs, list) or not all(isinstance(d, str) for d in skip_dirs):
                raise ConfigError("skip_dirs must be a list of strings")

        if 'delete_source' in data and not isinstance(data['delete_source'], bool):
            raise ConfigError("delete_source must be true or false")

        return cls(**data)


def load_config(config_path: Path, **overrides: Any) -> TranscoderConfig:
    """Load a TranscoderConfig from a YAML file.

    Args:
        config_path: Path to the YAML config file
        **overrides: Values taking precedence over the file; None values are ignored

    Returns:
        The loaded config
    """
    config_path = Path(config_path)
    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}
    except OSError as e:
        raise ConfigError(f"could not read config: {e}", config_path) from e
    except yaml.YAMLError as e:
        raise ConfigError(f"could not parse config: {e}", config_path) from e

    if not isinstance(data, dict):
        raise ConfigError("config must be a mapping", config_path)

    data.update({k: v for k, v in overrides.items() if v is not None})
    return TranscoderConfig.from_dict(data)


class Transcoder:
    """Transcodes a Joplin export into a Zola site.

    A run has three phases, each of which aborts on the first error:
    1. Transcode every discovered note into the content directory
    2. Copy every referenced resource into the assets directory
    3. Delete the source tree

    Nothing is rolled back when a phase fails.
    """

    def __init__(
        self,
        config: TranscoderConfig,
        processor: Optional[ContentProcessor] = None,
        discovery: Optional[NoteDiscovery] = None,
    ):
        """Initialize Transcoder.

        Args:
            config: Run configuration
            processor: Content processor (default: built from config)
            discovery: Note discovery (default: built from config)
        """
        self.config = config
        self.processor = processor or ContentProcessor(
            resource_transform=resource_rewriter(
                config.resource_link_prefix,
                config.image_path_prefix,
            ),
        )
        self.discovery = discovery or NoteDiscovery(
            config.notes_path,
            skip_dirs=config.skip_dirs,
        )
        self.resources: Set[str] = set()

    def run(self, dry_run: bool = False) -> TranscodeResult:
        """Run all phases.

        Args:
            dry_run: If True, read and check everything but write, copy and delete nothing

        Returns:
            TranscodeResult describing what was done
        """
        result = TranscodeResult(dry_run=dry_run)
        result.written_paths = self.transcode_notes(dry_run=dry_run)
        result.copied_resources = self.copy_resources(dry_run=dry_run)
        result.source_removed = self.remove_source(dry_run=dry_run)
        return result

    def transcode_notes(self, dry_run: bool = False) -> List[Path]:
        """Transcode every discovered note, collecting referenced resources.

        Returns:
            Output paths, in walk order
        """
        written = []
        for note in self.discovery.discover():
            processed = self.processor.process(note)
            self.resources.update(processed.referenced_resources)
            written.append(self._write(processed, dry_run))

        logger.info("Transcoded %d notes into %s", len(written), self.config.content_path)
        return written

    def copy_resources(self, dry_run: bool = False) -> List[str]:
        """Copy every collected resource into the assets directory.

        Returns:
            Copied resource names, sorted
        """
        copied = []
        for name in sorted(self.resources):
            src = self.config.resources_path / name
            dst = self.config.assets_path / name

            if not src.is_file():
                raise MissingResourceError("resource not found", src)

            if not dry_run:
                try:
                    shutil.copyfile(src, dst)
                except OSError as e:
                    raise ResourceCopyError(f"could not copy to {dst}: {e}", src) from e
            copied.append(name)

        logger.info("Copied %d resources into %s", len(copied), self.config.assets_path)
        return copied

    def remove_source(self, dry_run: bool = False) -> bool:
        """Delete the whole source tree.

        Returns:
            True if the tree was deleted
        """
        if not self.config.delete_source:
            logger.info("Keeping source tree %s", self.config.source_root)
            return False
        if dry_run:
            logger.info("Would delete source tree %s", self.config.source_root)
            return False

        try:
            shutil.rmtree(self.config.source_root)
        except OSError as e:
            raise CleanupError(f"could not delete source tree: {e}", self.config.source_root) from e

        logger.info("Deleted source tree %s", self.config.source_root)
        return True

    def _write(self, processed: ProcessedNote, dry_run: bool) -> Path:
        output = self.processor.build_output(processed)
        dest = self.config.content_path / processed.output_relative_path

        if not dest.parent.is_dir():
            raise WriteError("destination directory does not exist", dest.parent)

        if dry_run:
            logger.debug("Would write %s", dest)
            return dest

        try:
            with open(dest, 'w', encoding='utf-8', newline='\n') as f:
                f.write(output)
        except OSError as e:
            raise WriteError(f"could not write file: {e}", dest) from e

        logger.debug("Wrote %s", dest)
        return dest


def create_transcoder_from_config(config_path: Path, **overrides: Any) -> Transcoder:
    """Create a Transcoder from a YAML config file.

    Example config:
        source_root: ~/joplin
        destination_root: ~/site
        skip_dirs:
          - books
          - about

    Args:
        config_path: Path to the YAML config file
        **overrides: Values taking precedence over the file

    Returns:
        Configured Transcoder
    """
    return Transcoder(load_config(config_path, **overrides))
