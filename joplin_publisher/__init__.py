"""
Joplin Publisher - Publish Joplin notebook exports to Zola

Converts a Joplin "Website" notebook export into Zola content:
- Frontmatter transformation (Joplin header to Zola header)
- Image link rewriting
- Image copying into the site's static directory
"""

from joplin_publisher.core.models import (
    CleanupError,
    ConfigError,
    HeaderParseError,
    HeaderSerializeError,
    MissingResourceError,
    NoteContext,
    ProcessedNote,
    ReadError,
    ResourceCopyError,
    TranscodeError,
    TranscodeResult,
    WalkError,
    WriteError,
)
from joplin_publisher.core.discovery import NoteDiscovery
from joplin_publisher.core.processor import ContentProcessor
from joplin_publisher.core.transcoder import Transcoder, TranscoderConfig

__version__ = "0.1.0"

__all__ = [
    "CleanupError",
    "ConfigError",
    "HeaderParseError",
    "HeaderSerializeError",
    "MissingResourceError",
    "NoteContext",
    "ProcessedNote",
    "ReadError",
    "ResourceCopyError",
    "TranscodeError",
    "TranscodeResult",
    "WalkError",
    "WriteError",
    "NoteDiscovery",
    "ContentProcessor",
    "Transcoder",
    "TranscoderConfig",
]
