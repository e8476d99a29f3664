"""Markdown note primitives: frontmatter, sections and vocabulary tables."""
