"""Note discovery module for finding the notes to transcode."""

import logging
import os
from pathlib import Path
from typing import Iterator, List, Optional

from joplin_publisher.core.models import NoteContext, WalkError

logger = logging.getLogger(__name__)


class NoteDiscovery:
    """Walks a Joplin notebook export and yields the notes eligible for transcoding."""

    def __init__(
        self,
        notes_path: Path,
        skip_dirs: Optional[List[str]] = None,
    ):
        """Initialize NoteDiscovery.

        Args:
            notes_path: Root of the exported notebook tree
            skip_dirs: Top-level names whose entries are never transcoded.
                       Matched as a plain prefix of the relative path.
        """
        self.notes_path = Path(notes_path)
        self.skip_dirs = list(skip_dirs or [])

    def discover(self) -> Iterator[NoteContext]:
        """Walk the tree in sorted order, yielding every eligible note.

        Raises:
            WalkError: If the root or any directory below it cannot be listed
        """
        if not self.notes_path.is_dir():
            raise WalkError("notes directory not found", self.notes_path)

        def on_error(e: OSError) -> None:
            raise WalkError(f"could not walk directory: {e}", Path(e.filename or self.notes_path)) from e

        for root, dirs, files in os.walk(self.notes_path, onerror=on_error):
            root_path = Path(root)
            dirs.sort()
            dirs[:] = [
                d for d in dirs
                if not self.is_skipped(self._relative(root_path / d))
            ]

            for name in sorted(files):
                file_path = root_path / name
                relative = self._relative(file_path)
                if self.is_skipped(relative):
                    continue
                if not self.is_eligible(name):
                    logger.debug("Skipping internal file %s", relative)
                    continue
                yield NoteContext(path=file_path, relative_path=Path(relative))

    def is_skipped(self, relative: str) -> bool:
        """Check whether a relative path falls under a skipped directory."""
        return any(relative.startswith(d) for d in self.skip_dirs)

    def is_eligible(self, filename: str) -> bool:
        """Files starting with '_' are Joplin internals, not notes."""
        return not filename.startswith('_')

    def _relative(self, path: Path) -> str:
        return path.relative_to(self.notes_path).as_posix()
