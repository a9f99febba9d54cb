"""Resource link transform factories.

Joplin exports reference images relative to the note, e.g.
``![](../../_resources/abc123.png)``. Zola serves them from ``/images/``.
"""

import re
from typing import Callable, Optional, Tuple

ResourceTransform = Callable[[str], Tuple[str, Optional[str]]]

# Joplin resource ids are lowercase hex, but any lowercase alphanumeric name is accepted
RESOURCE_PATTERN = re.compile(r'[a-z0-9]+\.png')


def resource_rewriter(
    source_prefix: str = "../../_resources/",
    target_prefix: str = "/images/",
) -> ResourceTransform:
    """Create a transform that rewrites resource links in a single body line.

    Only lines containing a resource name are touched. The first resource
    name on the line is reported; every occurrence of source_prefix on the
    line is replaced with target_prefix.

    Args:
        source_prefix: Link prefix used by the exported notes
        target_prefix: Link prefix the site serves resources from

    Returns:
        A transform function line -> (line, resource name or None)
    """
    def transform(line: str) -> Tuple[str, Optional[str]]:
        match = RESOURCE_PATTERN.search(line)
        if match is None:
            return line, None
        return line.replace(source_prefix, target_prefix), match.group(0)
    return transform
