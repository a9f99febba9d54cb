"""Shared fixtures: a Joplin export next to a Zola site."""

from pathlib import Path

import pytest


@pytest.fixture
def png_bytes():
    return b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR"


MY_NOTE = """---
title: Hi
created: 2020-01-01
tags: [a, b]
---
![](../../_resources/x1.png)
"""


@pytest.fixture
def layout(tmp_path, png_bytes):
    """Create a minimal Joplin export and an empty Zola site.

    Returns a dict of the interesting paths.
    """
    joplin = tmp_path / "joplin"
    website = joplin / "Website"
    resources = joplin / "_resources"
    zola = tmp_path / "zola"
    content = zola / "content"
    images = zola / "static" / "images"

    for d in (website / "notes", website / "books", resources, content / "notes", images):
        d.mkdir(parents=True)

    (website / "notes" / "My Note.md").write_text(MY_NOTE, encoding="utf-8")
    (website / "notes" / "_index.md").write_text("---\ntitle: Notes\n---\n![](../../_resources/z9.png)\n")
    (website / "books" / "Book.md").write_text("---\ntitle: Book\n---\n![](../../_resources/y1.png)\n")
    (resources / "x1.png").write_bytes(png_bytes)

    return {
        "joplin": joplin,
        "website": website,
        "resources": resources,
        "zola": zola,
        "content": content,
        "images": images,
    }


@pytest.fixture
def write_note():
    """Return a helper that writes a note and returns its path."""
    def write(directory: Path, name: str, text: str) -> Path:
        path = directory / name
        path.write_text(text, encoding="utf-8")
        return path
    return write
