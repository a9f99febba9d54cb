"""Transform factories for Joplin Publisher."""
