"""Tests for heading-bounded section splicing."""

from vocab_notes.obsidian.sections import find_section, normalize_note, upsert_section


class TestUpsertSection:
    """Replacing and appending sections."""

    def test_missing_section_is_appended(self) -> None:
        result = upsert_section("# word\ntext", "##", "Grammar", "body")

        assert result == "# word\ntext\n\n## Grammar\nbody"

    def test_existing_section_is_replaced(self) -> None:
        document = "## Grammar\nold line\nold line 2\n\n## Notes\nmine"

        result = upsert_section(document, "##", "Grammar", "new")

        assert result == "## Grammar\nnew\n\n## Notes\nmine"

    def test_text_outside_the_section_is_untouched(self) -> None:
        before = "---\nslovo: \"a\"\n---\nintro   \n\n"
        after = "\n\n## Notes\n  indented user text\n"
        document = f"{before}## Flashcards\nold{after}"

        result = upsert_section(document, "##", "Flashcards", "new")

        assert result == f"{before}## Flashcards\nnew{after}"

    def test_tag_lines_are_not_headings(self) -> None:
        """``#flashcards/...`` lines belong to the section body."""
        document = (
            "## Flashcards\n"
            "#flashcards/czwords/all\n"
            "a ::: b\n"
            "\n"
            "## Grammar\n"
            "g"
        )

        result = upsert_section(document, "##", "Flashcards", "x")

        assert result == "## Flashcards\nx\n\n## Grammar\ng"

    def test_only_first_duplicate_heading_is_replaced(self) -> None:
        document = "## Grammar\nfirst\n\n## Grammar\nsecond"

        result = upsert_section(document, "##", "Grammar", "new")

        assert result == "## Grammar\nnew\n\n## Grammar\nsecond"

    def test_level_one_section_ends_at_level_two_heading(self) -> None:
        document = "# dělat\nold summary\n\n## Flashcards\ncards"

        result = upsert_section(document, "#", "dělat", "new summary")

        assert result == "# dělat\nnew summary\n\n## Flashcards\ncards"

    def test_heading_must_match_exactly(self) -> None:
        """A longer heading with the same prefix is a different section."""
        document = "## Grammar notes\nmine"

        result = upsert_section(document, "##", "Grammar", "new")

        assert result == "## Grammar notes\nmine\n\n## Grammar\nnew"

    def test_section_at_end_of_document(self) -> None:
        document = "# a\n\n## Grammar\nold\n\n"

        result = upsert_section(document, "##", "Grammar", "new")

        assert result == "# a\n\n## Grammar\nnew\n\n"


class TestFindSection:
    def test_span_excludes_trailing_blank_lines(self) -> None:
        lines = ["## A", "x", "", "", "## B"]

        assert find_section(lines, "## A") == (0, 2)

    def test_missing(self) -> None:
        assert find_section(["## A"], "## B") is None


class TestNormalizeNote:
    def test_blank_lines_after_frontmatter_are_collapsed(self) -> None:
        text = '---\nslovo: "a"\n---\n\n\n\n# a'

        assert normalize_note(text) == '---\nslovo: "a"\n---\n# a'

    def test_trailing_whitespace_is_trimmed(self) -> None:
        assert normalize_note("# a  \ntext\t\n") == "# a\ntext\n"
