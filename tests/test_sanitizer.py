"""Tests for the text sanitizer."""

import pytest

from jobdesc.formatting.sanitizer import (
    find_boilerplate_lines,
    is_boilerplate,
    sanitize,
    strip_markup,
)


class TestSanitizeMarkup:
    """Test markup and entity removal."""

    def test_html_paragraphs_and_cta(self):
        """A paragraph of HTML loses its tags and the call to action."""
        raw = "<p>We are looking for a <b>Rust</b> engineer.</p><p>Apply now!</p>"
        assert sanitize(raw) == "We are looking for a Rust engineer."

    def test_entities_decoded(self):
        assert sanitize("Fish &amp; Chips") == "Fish & Chips"
        assert sanitize("a&nbsp;&nbsp;b") == "a b"

    def test_escaped_html_is_decoded_then_stripped(self):
        """Feeds that double-encode HTML still come out as plain text."""
        assert sanitize("&lt;p&gt;Hello&lt;/p&gt;") == "Hello"

    def test_script_style_and_comments_removed(self):
        raw = "<style>.x{color:red}</style><script>alert(1)</script><!-- tracking --><p>Hello</p>"
        assert sanitize(raw) == "Hello"

    def test_list_items_become_bullet_lines(self):
        result = sanitize("<ul><li>One</li><li>Two</li></ul>")
        lines = [line for line in result.split("\n") if line]
        assert lines == ["• One", "• Two"]

    def test_table_cells_joined_on_one_line(self):
        raw = "<table><tr><td>Salary</td><td>$100k</td></tr></table>"
        assert sanitize(raw) == "Salary $100k"

    def test_zero_width_characters_removed(self):
        assert sanitize("Ru" + chr(0x200B) + "st") == "Rust"

    def test_strip_markup_keeps_inline_text(self):
        assert strip_markup("<b>Bold</b> text") == "Bold text"


class TestSanitizeWhitespace:
    """Test whitespace normalization."""

    def test_inline_whitespace_collapsed(self):
        assert sanitize("Remote   first\tteam") == "Remote first team"

    def test_non_breaking_space_collapsed(self):
        assert sanitize("Remote" + chr(0xA0) + chr(0xA0) + "first") == "Remote first"

    def test_crlf_normalized(self):
        assert sanitize("Line one\r\nLine two") == "Line one\nLine two"

    def test_blank_line_runs_collapsed(self):
        assert sanitize("First\n\n\n\n\nSecond") == "First\n\nSecond"

    def test_outer_whitespace_stripped(self):
        assert sanitize("\n\n  Hello  \n\n") == "Hello"


class TestSanitizeBoilerplate:
    """Test removal of boilerplate lines."""

    @pytest.mark.parametrize(
        "line",
        [
            "Apply now!",
            "Apply today",
            "Click here to apply",
            "Share this job",
            "Follow us on Twitter and LinkedIn",
            "Posted via Indeed",
            "Similar jobs",
            "Privacy Policy | Terms of Service",
            "[button]",
        ],
    )
    def test_boilerplate_line_removed(self, line):
        assert sanitize(f"Build payment APIs.\n{line}\nShip weekly.") == (
            "Build payment APIs.\nShip weekly."
        )

    def test_punctuation_only_lines_removed(self):
        assert sanitize("Hello\n---\n***\nWorld") == "Hello\nWorld"

    def test_trailing_cta_after_sentence_removed(self):
        assert sanitize("We hire remotely. Apply now!") == "We hire remotely."

    def test_cta_inside_sentence_kept(self):
        text = "Please apply now if you like Rust."
        assert sanitize(text) == text

    def test_is_boilerplate_only_matches_whole_lines(self):
        assert is_boilerplate("Apply now for this position")
        assert not is_boilerplate("Apply now to join a team of twelve engineers working on payments")
        assert not is_boilerplate("")

    def test_find_boilerplate_lines(self):
        text = "Great role.\nApply now!\nWe hire remotely. Apply today"
        assert find_boilerplate_lines(text) == ["Apply now!", "We hire remotely. Apply today"]
        assert find_boilerplate_lines(None) == []


class TestSanitizeEdgeCases:
    """Test totality and idempotence."""

    @pytest.mark.parametrize("value", [None, "", "   \n\t ", 123, b"bytes"])
    def test_empty_or_non_text_returns_empty_string(self, value):
        assert sanitize(value) == ""

    def test_clean_text_unchanged(self):
        text = (
            "Our team builds payment software for small shops in Lisbon. "
            "You would join four engineers and work on the billing service, mostly in Python."
        )
        assert sanitize(text) == text

    @pytest.mark.parametrize(
        "raw",
        [
            "<p>We are looking for a <b>Rust</b> engineer.</p><p>Apply now!</p>",
            "<h2>Requirements</h2><ul><li>Go</li><li>Postgres</li></ul>",
            "Plain text\n\n\nwith gaps\nShare this job",
        ],
    )
    def test_sanitize_is_idempotent(self, raw):
        once = sanitize(raw)
        assert sanitize(once) == once
