"""Data models for Joplin Publisher."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional


class TranscodeError(Exception):
    """Base class for every error that aborts a transcoding run.

    Carries the path that was being handled when the error happened.
    """

    stage = "transcode"

    def __init__(self, message: str, path: Optional[Path] = None):
        super().__init__(message)
        self.message = message
        self.path = path

    def __str__(self) -> str:
        if self.path is None:
            return f"{self.stage}: {self.message}"
        return f"{self.stage}: {self.path}: {self.message}"


class ConfigError(TranscodeError):
    stage = "config"


class WalkError(TranscodeError):
    stage = "walk"


class ReadError(TranscodeError):
    stage = "read"


class HeaderParseError(TranscodeError):
    stage = "parse"


class HeaderSerializeError(TranscodeError):
    stage = "serialize"


class WriteError(TranscodeError):
    stage = "write"


class MissingResourceError(TranscodeError):
    stage = "missing resource"


class ResourceCopyError(TranscodeError):
    stage = "copy"


class CleanupError(TranscodeError):
    stage = "cleanup"


@dataclass
class NoteContext:
    """Location of a single note in the source tree.

    Content is only read on demand, one line at a time.
    """
    path: Path
    relative_path: Path

    @property
    def name(self) -> str:
        return self.path.name

    def read_lines(self) -> Iterator[str]:
        """Yield the file's lines without their line terminators."""
        try:
            with open(self.path, 'r', encoding='utf-8', newline='\n') as f:
                for line in f:
                    if line.endswith('\n'):
                        line = line[:-1]
                    if line.endswith('\r'):
                        line = line[:-1]
                    yield line
        except (OSError, UnicodeDecodeError) as e:
            raise ReadError(f"could not read file: {e}", self.path) from e


@dataclass
class ProcessedNote:
    """Result of transforming a note for Zola.

    frontmatter is the already-mapped Zola header; content is the body
    with resource links rewritten.
    """
    context: NoteContext
    frontmatter: Dict[str, Any]
    content: str
    referenced_resources: List[str]
    output_name: str

    @property
    def output_relative_path(self) -> Path:
        return self.context.relative_path.parent / self.output_name


@dataclass
class TranscodeResult:
    """Result of a transcoding run."""
    written_paths: List[Path] = field(default_factory=list)
    copied_resources: List[str] = field(default_factory=list)
    source_removed: bool = False
    dry_run: bool = False
