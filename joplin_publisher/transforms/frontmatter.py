"""Frontmatter transform factories for Joplin Publisher.

These factories create transform functions that turn a parsed Joplin
note header into the header Zola expects.
"""

from typing import Any, Callable, Dict, List

FrontmatterTransform = Callable[[Dict[str, Any]], Dict[str, Any]]

JOPLIN_FIELDS = ('title', 'created', 'updated')


def _as_string(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _as_tags(value: Any) -> List[str]:
    if value is None or value == "":
        return []
    if isinstance(value, list):
        return [_as_string(tag) for tag in value]
    return [_as_string(value)]


def joplin_fields(raw: Dict[str, Any]) -> Dict[str, Any]:
    """Keep only the header fields Joplin writes, with missing ones filled in.

    Args:
        raw: Parsed header mapping

    Returns:
        Dict with title, created, updated (strings) and tags (list of strings)
    """
    fields: Dict[str, Any] = {key: _as_string(raw.get(key)) for key in JOPLIN_FIELDS}
    fields['tags'] = _as_tags(raw.get('tags'))
    return fields


def zola_frontmatter() -> FrontmatterTransform:
    """Create a transform that produces Zola frontmatter from a Joplin header.

    Output fields, in order: title, date (Joplin's created), updated,
    taxonomies.tags. Values are copied unchanged; any other Joplin field
    is dropped.

    Returns:
        A transform function joplin_fm -> zola_fm
    """
    def transform(fm: Dict[str, Any]) -> Dict[str, Any]:
        joplin = joplin_fields(fm)
        return {
            'title': joplin['title'],
            'date': joplin['created'],
            'updated': joplin['updated'],
            'taxonomies': {'tags': list(joplin['tags'])},
        }
    return transform
