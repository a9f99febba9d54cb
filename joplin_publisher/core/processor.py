"""Content processor for transforming Joplin notes."""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple
import yaml

from joplin_publisher.core.models import (
    HeaderParseError,
    HeaderSerializeError,
    NoteContext,
    ProcessedNote,
)
from joplin_publisher.transforms.filenames import output_filename
from joplin_publisher.transforms.frontmatter import FrontmatterTransform, zola_frontmatter
from joplin_publisher.transforms.resources import ResourceTransform, resource_rewriter

logger = logging.getLogger(__name__)

DELIMITER = '---'

TIMESTAMP_TAG = 'tag:yaml.org,2002:timestamp'

KEEP_ON_LOAD = ('tag:yaml.org,2002:null', 'tag:yaml.org,2002:merge')

SCALAR_FIELDS = ('title', 'created', 'updated')


def _is_scalar(value: Any) -> bool:
    return not isinstance(value, (dict, list, set))


class JoplinLoader(yaml.SafeLoader):
    """SafeLoader that resolves nothing but nulls.

    Dates, numbers and booleans come back as the text Joplin wrote.
    """


JoplinLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag in KEEP_ON_LOAD]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


class ZolaDumper(yaml.SafeDumper):
    """SafeDumper that writes date-like strings unquoted.

    Joplin dates are kept as text, and Zola reads an unquoted
    ``date: 2020-01-01`` as a date.
    """


ZolaDumper.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != TIMESTAMP_TAG]
    for first, resolvers in yaml.SafeDumper.yaml_implicit_resolvers.items()
}


class ContentProcessor:
    """Processes Joplin note content for Zola.

    Handles:
    - Splitting the YAML header from the body
    - Resource link rewriting and collection
    - Frontmatter transformation
    - Output filename slugging
    """

    def __init__(
        self,
        frontmatter_transform: Optional[FrontmatterTransform] = None,
        resource_transform: Optional[ResourceTransform] = None,
    ):
        """Initialize ContentProcessor.

        Args:
            frontmatter_transform: Transform from Joplin to output header
                                   (default: zola_frontmatter())
            resource_transform: Transform applied to every body line
                                (default: resource_rewriter())
        """
        self.frontmatter_transform = frontmatter_transform or zola_frontmatter()
        self.resource_transform = resource_transform or resource_rewriter()

    def process(self, note: NoteContext) -> ProcessedNote:
        """Process a note for publishing.

        Args:
            note: The note to process

        Returns:
            ProcessedNote with transformed header and body
        """
        header, body, resources = self.split(note)
        joplin_fm = self.parse_header(header, note.path)
        if resources:
            logger.debug("%s references %s", note.relative_path, ', '.join(resources))

        return ProcessedNote(
            context=note,
            frontmatter=self.frontmatter_transform(joplin_fm),
            content=body,
            referenced_resources=resources,
            output_name=output_filename(note.name),
        )

    def split(self, note: NoteContext) -> Tuple[str, str, List[str]]:
        """Split a note into header text and body text.

        The first '---' line opens the header and the next one closes it.
        Every other line is body, with resource links rewritten.

        Args:
            note: The note to split

        Returns:
            Tuple of (header text, body text, referenced resource names)
        """
        header_lines: List[str] = []
        body_lines: List[str] = []
        resources: List[str] = []
        seen_open = False
        in_header = False

        for line in note.read_lines():
            if line == DELIMITER and not seen_open:
                seen_open = True
                in_header = True
            elif line == DELIMITER and in_header:
                in_header = False
            elif in_header:
                header_lines.append(line + '\n')
            else:
                line, resource = self.resource_transform(line)
                if resource is not None and resource not in resources:
                    resources.append(resource)
                body_lines.append(line + '\n')

        if not seen_open:
            raise HeaderParseError("missing front-matter header", note.path)
        if in_header:
            raise HeaderParseError("front-matter header is not closed", note.path)

        return ''.join(header_lines), ''.join(body_lines), resources

    def parse_header(self, text: str, path: Optional[Path] = None) -> Dict[str, Any]:
        """Parse YAML header text, keeping every non-null scalar as a string.

        Args:
            text: Header text between the delimiters
            path: Note path, for error reporting

        Returns:
            Header mapping (empty if the header is empty)
        """
        try:
            data = yaml.load(text, Loader=JoplinLoader)
        except yaml.YAMLError as e:
            raise HeaderParseError(f"could not parse yaml: {e}", path) from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise HeaderParseError("front-matter header is not a mapping", path)

        for key in SCALAR_FIELDS:
            if not _is_scalar(data.get(key)):
                raise HeaderParseError(f"{key} must be a string", path)

        tags = data.get('tags')
        if isinstance(tags, list):
            if not all(_is_scalar(tag) for tag in tags):
                raise HeaderParseError("tags must be a list of strings", path)
        elif not _is_scalar(tags):
            raise HeaderParseError("tags must be a list of strings", path)

        return data

    def build_output(self, processed: ProcessedNote) -> str:
        """Build final markdown output with frontmatter.

        Args:
            processed: Processed note

        Returns:
            Complete markdown string with YAML frontmatter
        """
        try:
            frontmatter_str = yaml.dump(
                processed.frontmatter,
                Dumper=ZolaDumper,
                default_flow_style=False,
                allow_unicode=True,
                sort_keys=False,
            )
        except yaml.YAMLError as e:
            raise HeaderSerializeError(f"could not write yaml: {e}", processed.context.path) from e

        return f"{DELIMITER}\n{frontmatter_str}{DELIMITER}\n{processed.content}"
