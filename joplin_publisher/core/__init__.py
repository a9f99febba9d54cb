"""Core components for Joplin Publisher."""

from joplin_publisher.core.models import NoteContext, ProcessedNote, TranscodeError, TranscodeResult
from joplin_publisher.core.discovery import NoteDiscovery
from joplin_publisher.core.processor import ContentProcessor
from joplin_publisher.core.transcoder import (
    Transcoder,
    TranscoderConfig,
    create_transcoder_from_config,
    load_config,
)

__all__ = [
    "NoteContext",
    "ProcessedNote",
    "TranscodeError",
    "TranscodeResult",
    "NoteDiscovery",
    "ContentProcessor",
    "Transcoder",
    "TranscoderConfig",
    "create_transcoder_from_config",
    "load_config",
]
