"""Tests for NoteDiscovery class."""

import os
import stat
from pathlib import Path

import pytest

from joplin_publisher.core.discovery import NoteDiscovery
from joplin_publisher.core.models import WalkError


class TestNoteDiscovery:
    """Tests for NoteDiscovery class."""

    @pytest.fixture
    def website(self, tmp_path):
        """Create a notebook tree with notes, skipped notebooks and internal files."""
        root = tmp_path / "Website"
        for d in ("notes/deep", "books", "bookshelf", "_sub"):
            (root / d).mkdir(parents=True)

        for rel in (
            "notes/B Note.md",
            "notes/a note.md",
            "notes/deep/inner.md",
            "notes/_draft.md",
            "books/Book.md",
            "bookshelf/Shelf.md",
            "about.md",
            "_index.md",
            "_sub/visible.md",
            "top.md",
        ):
            (root / rel).write_text("---\ntitle: x\n---\n")

        return root

    def _relative(self, discovery):
        return [n.relative_path.as_posix() for n in discovery.discover()]

    def test_discovers_all_without_skips(self, website):
        found = self._relative(NoteDiscovery(website))
        assert "books/Book.md" in found
        assert "about.md" in found
        assert "notes/deep/inner.md" in found

    def test_sorted_walk_order(self, website):
        found = self._relative(NoteDiscovery(website, skip_dirs=["books", "about"]))
        assert found == [
            "top.md",
            "_sub/visible.md",
            "notes/B Note.md",
            "notes/a note.md",
            "notes/deep/inner.md",
        ]

    def test_skip_dirs(self, website):
        found = self._relative(NoteDiscovery(website, skip_dirs=["books"]))
        assert not any(f.startswith("books/") for f in found)

    def test_skip_is_path_prefix(self, website):
        found = self._relative(NoteDiscovery(website, skip_dirs=["books", "about"]))
        assert "bookshelf/Shelf.md" not in found
        assert "about.md" not in found

    def test_underscore_files_skipped(self, website):
        found = self._relative(NoteDiscovery(website))
        assert "_index.md" not in found
        assert "notes/_draft.md" not in found

    def test_underscore_directories_descended(self, website):
        found = self._relative(NoteDiscovery(website))
        assert "_sub/visible.md" in found

    def test_context_paths(self, website):
        note = next(n for n in NoteDiscovery(website).discover() if n.name == "inner.md")
        assert note.path == website / "notes" / "deep" / "inner.md"
        assert note.relative_path == Path("notes/deep/inner.md")

    def test_is_eligible(self):
        discovery = NoteDiscovery(Path("."))
        assert discovery.is_eligible("note.md")
        assert not discovery.is_eligible("_index.md")

    def test_missing_root(self, tmp_path):
        with pytest.raises(WalkError):
            list(NoteDiscovery(tmp_path / "nope").discover())

    def test_walk_error_propagates(self, website, monkeypatch):
        def failing_walk(top, onerror=None):
            onerror(PermissionError(13, "Permission denied", str(top / "locked")))
            yield from ()

        monkeypatch.setattr("joplin_publisher.core.discovery.os.walk", failing_walk)

        with pytest.raises(WalkError) as exc_info:
            list(NoteDiscovery(website).discover())
        assert exc_info.value.path == website / "locked"

    @pytest.mark.skipif(
        not hasattr(os, "geteuid") or os.geteuid() == 0,
        reason="needs a non-root POSIX user for permission errors",
    )
    def test_unreadable_directory(self, website):
        locked = website / "notes" / "locked"
        locked.mkdir()
        (locked / "hidden.md").write_text("---\ntitle: x\n---\n")
        locked.chmod(0)
        try:
            with pytest.raises(WalkError) as exc_info:
                list(NoteDiscovery(website).discover())
        finally:
            locked.chmod(stat.S_IRWXU)

        assert exc_info.value.path == locked
