"""Output filename helpers."""


def slug(name: str) -> str:
    """Collapse every run of characters other than letters, numbers and '.' into '-'.

    Case is left alone; use output_filename() for the lowercased form.
    """
    out = []
    for ch in name:
        if ch.isalpha() or ch.isnumeric() or ch == '.':
            out.append(ch)
        elif not out or out[-1] != '-':
            out.append('-')
    return ''.join(out)


def output_filename(name: str) -> str:
    """Zola filename for a Joplin note filename, e.g. 'My Note.md' -> 'my-note.md'."""
    return slug(name.lower())
