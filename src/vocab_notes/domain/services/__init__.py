"""Domain services package."""

from .note_reconciler import build_frontmatter, reconcile, resolve_note_path
from .part_of_speech import derive_part_of_speech
from .tag_generator import build_tags, slugify_tag

__all__ = [
    "build_frontmatter",
    "build_tags",
    "derive_part_of_speech",
    "reconcile",
    "resolve_note_path",
    "slugify_tag",
]
