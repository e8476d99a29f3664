"""Tests for note file helpers."""

import pytest

from vocab_notes.utils.io import read_text_if_exists, write_text_atomic


class TestWriteTextAtomic:
    def test_creates_and_replaces(self, tmp_path) -> None:
        note = tmp_path / "dělat.md"

        write_text_atomic(note, "first")
        write_text_atomic(note, "druhý\n")

        assert note.read_text(encoding="utf-8") == "druhý\n"
        assert [p.name for p in tmp_path.iterdir()] == ["dělat.md"]

    def test_failed_write_leaves_no_staging_file(self, tmp_path) -> None:
        """A directory in place of the note makes the final rename fail."""
        blocked = tmp_path / "dělat.md"
        blocked.mkdir()

        with pytest.raises(OSError):
            write_text_atomic(blocked, "text")

        assert [p.name for p in tmp_path.iterdir()] == ["dělat.md"]
        assert blocked.is_dir()


def test_read_text_if_exists(tmp_path) -> None:
    note = tmp_path / "kniha.md"
    assert read_text_if_exists(note) is None

    note.write_text("kniha", encoding="utf-8")
    assert read_text_if_exists(note) == "kniha"
