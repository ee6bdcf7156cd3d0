"""Unit tests for text measurement and the display list."""

import pytest
from reportlab.lib.units import mm
from reportlab.pdfbase.pdfmetrics import stringWidth

from folio.contexts.rendering.defaults import FONT_BOLD, FONT_REGULAR
from folio.contexts.rendering.typesetting import DrawOp, Typesetter, measure, text_runs, wrap_text
from folio.utils.pdf_processing import page_count

LOREM = (
    "Designed and operated the ingestion tier for a multi-tenant analytics platform, "
    "cutting p99 latency by forty percent while halving infrastructure cost across "
    "three regions and two cloud providers."
)


@pytest.mark.unit
class TestWrapText:
    """Greedy wrapping on font metrics."""

    def test_short_text_single_line(self):
        assert wrap_text("Built X", FONT_REGULAR, 10, 180) == ["Built X"]

    def test_internal_spacing_preserved(self):
        """Runs of spaces inside a line are kept verbatim."""
        assert wrap_text("SQL  •  Python", FONT_REGULAR, 10, 180) == ["SQL  •  Python"]

    def test_lines_fit_width(self):
        lines = wrap_text(LOREM, FONT_REGULAR, 10, 60)

        assert len(lines) > 1
        for line in lines:
            assert stringWidth(line, FONT_REGULAR, 10) <= 60 * mm

    def test_no_words_lost(self):
        lines = wrap_text(LOREM, FONT_REGULAR, 10, 60)
        assert " ".join(lines).split() == LOREM.split()

    def test_lines_do_not_start_or_end_with_break_whitespace(self):
        for line in wrap_text(LOREM, FONT_REGULAR, 10, 60):
            assert line == line.strip()

    def test_long_word_hard_broken(self):
        word = "x" * 200
        lines = wrap_text(word, FONT_REGULAR, 10, 20)

        assert len(lines) > 1
        assert "".join(lines) == word
        for line in lines:
            assert stringWidth(line, FONT_REGULAR, 10) <= 20 * mm

    def test_newline_forces_break(self):
        assert wrap_text("first\nsecond", FONT_REGULAR, 10, 180) == ["first", "second"]

    @pytest.mark.parametrize("text", ["", "   ", None])
    def test_blank_text(self, text):
        assert wrap_text(text, FONT_REGULAR, 10, 180) == []

    def test_measure_matches_wrap(self):
        assert measure(LOREM, FONT_REGULAR, 9, 52) == len(wrap_text(LOREM, FONT_REGULAR, 9, 52))


@pytest.mark.unit
class TestTypesetter:
    """Recording and replaying draw operations."""

    def test_starts_with_one_page(self):
        typesetter = Typesetter(210, 297)
        assert typesetter.page_count == 1

    def test_add_page_returns_index(self):
        typesetter = Typesetter(210, 297)
        assert typesetter.add_page() == 1
        assert typesetter.add_page() == 2
        assert typesetter.page_count == 3

    def test_records_operations_per_page(self):
        typesetter = Typesetter(210, 297)
        typesetter.add_page()
        typesetter.rect(1, 0, 0, 68, 297, "#ECF0F1")
        typesetter.text(0, 15, 20, "Jane Doe", FONT_BOLD, 24, "#FFFFFF")
        typesetter.text(1, 76, 15, "PROJECTS", FONT_BOLD, 12, "#2980B9")
        typesetter.rule(1, 76, 17, 122, "#2980B9", 0.6)

        assert typesetter.text_runs(page=0) == ["Jane Doe"]
        assert typesetter.text_runs(page=1) == ["PROJECTS"]
        assert typesetter.text_runs() == ["Jane Doe", "PROJECTS"]
        assert [op.kind for op in typesetter.pages[1]] == ["rect", "text", "rule"]

    def test_operations_in_page_order(self):
        """Content drawn onto an earlier page later still lists under that page."""
        typesetter = Typesetter(210, 297)
        typesetter.add_page()
        typesetter.text(1, 10, 10, "second page", FONT_REGULAR, 10, "#000000")
        typesetter.text(0, 10, 10, "first page", FONT_REGULAR, 10, "#000000")

        assert [op.page for op in typesetter.operations] == [0, 1]
        assert typesetter.text_runs() == ["first page", "second page"]

    def test_text_runs_from_recorded_operations(self):
        """Stored operations filter the same way as the live display list."""
        typesetter = Typesetter(210, 297)
        typesetter.add_page()
        typesetter.rect(1, 0, 0, 68, 297, "#ECF0F1")
        typesetter.text(1, 76, 15, "PROJECTS", FONT_BOLD, 12, "#2980B9")
        typesetter.text(0, 15, 20, "Jane Doe", FONT_BOLD, 24, "#FFFFFF")
        operations = list(typesetter.operations)

        for page in (None, 0, 1):
            assert text_runs(operations, page) == typesetter.text_runs(page)
        assert text_runs(operations, page=5) == []

    def test_render_pdf(self):
        typesetter = Typesetter(210, 297)
        typesetter.add_page()
        typesetter.text(0, 15, 20, "Jane Doe", FONT_BOLD, 24, "#2C3E50")

        pdf_bytes = typesetter.render_pdf(title="Jane Doe Resume", author="Jane Doe")

        assert pdf_bytes.startswith(b"%PDF")
        assert page_count(pdf_bytes) == 2

    def test_render_pdf_deterministic(self):
        def build():
            typesetter = Typesetter(210, 297)
            typesetter.rect(0, 0, 0, 210, 45, "#2980B9")
            typesetter.text(0, 15, 20, "Jane Doe", FONT_BOLD, 24, "#FFFFFF")
            return typesetter.render_pdf(title="Jane Doe Resume")

        assert build() == build()

    def test_unknown_operation_rejected(self):
        typesetter = Typesetter(210, 297)
        typesetter.pages[0].append(DrawOp("circle", 0, 10, 10))

        with pytest.raises(ValueError, match="circle"):
            typesetter.render_pdf()
