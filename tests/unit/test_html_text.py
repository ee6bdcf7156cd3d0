"""Unit tests for rich-text extraction (strip_html, extract_segments)."""

import pytest

from folio.utils.html_text import extract_segments, strip_html


@pytest.mark.unit
class TestStripHtml:
    """Tag removal and entity decoding without segmentation."""

    def test_removes_inline_tags(self):
        """Inline formatting tags disappear, text is kept."""
        assert strip_html("<p>Built <strong>fast</strong> systems</p>") == "Built fast systems"

    def test_decodes_supported_entities(self):
        """All five supported entities are decoded."""
        assert strip_html("a&nbsp;b &amp; c &lt;d&gt; &quot;e&quot;") == 'a b & c <d> "e"'

    def test_amp_decoded_before_lt(self):
        """&amp;lt; decodes to &lt; then to <, following the fixed decoding order."""
        assert strip_html("&amp;lt;") == "<"

    def test_trims_whitespace(self):
        """Result is trimmed."""
        assert strip_html("  <p> padded </p>  ") == "padded"

    @pytest.mark.parametrize("value", [None, ""])
    def test_empty_input(self, value):
        """None and empty string give an empty string without error."""
        assert strip_html(value) == ""


@pytest.mark.unit
class TestExtractSegments:
    """Segmenting editor HTML into paragraphs and list items."""

    def test_list_items_in_order(self):
        """Each <li> becomes one segment, in source order."""
        html = "<ul><li>Built X</li><li>Shipped Y</li></ul>"
        assert extract_segments(html) == ["Built X", "Shipped Y"]

    def test_paragraphs_before_list_items(self):
        """Paragraphs come first, then list items."""
        html = "<ul><li>Bullet</li></ul><p>Intro</p>"
        assert extract_segments(html) == ["Intro", "Bullet"]

    def test_tags_with_attributes_and_case(self):
        """Attributes and upper-case tags are matched."""
        html = '<P class="x">One</P><LI data-id="2">Two</LI>'
        assert extract_segments(html) == ["One", "Two"]

    def test_multiline_list_item(self):
        """A list item spanning lines stays one segment."""
        html = "<li>first line\nsecond line</li>"
        assert extract_segments(html) == ["first line\nsecond line"]

    def test_inner_markup_and_entities_stripped(self):
        """Segments are stripped of inner tags and decoded."""
        html = "<li><strong>R&amp;D</strong> lead</li>"
        assert extract_segments(html) == ["R&D lead"]

    def test_blank_blocks_dropped(self):
        """<p><br></p> spacer paragraphs produce no segment."""
        html = "<p>Kept</p><p><br></p><p>   </p>"
        assert extract_segments(html) == ["Kept"]

    def test_pre_and_link_tags_not_matched(self):
        """<pre> is not a paragraph; falls back to plain splitting."""
        html = "<pre>code</pre>"
        assert extract_segments(html) == ["code"]

    def test_plain_text_bullets(self):
        """Without block tags, text is split on bullet glyphs."""
        assert extract_segments("• Led team • Cut costs") == ["Led team", "Cut costs"]

    def test_plain_text_newlines(self):
        """Without block tags, text is split on newlines and empties dropped."""
        assert extract_segments("Led team\n\nCut costs\n") == ["Led team", "Cut costs"]

    def test_plain_sentence_is_one_segment(self):
        """A plain sentence is returned whole and never split further."""
        text = "Designed, built, and operated the ingestion tier."
        assert extract_segments(text) == [text]

    @pytest.mark.parametrize("value", [None, "", "<p></p>", "   "])
    def test_empty_input(self, value):
        """Empty or content-free input gives no segments."""
        assert extract_segments(value) == []
