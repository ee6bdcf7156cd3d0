"""
Rich-text extraction tools

Converts the HTML fragments produced by the profile editor (paragraphs, bullet
lists, inline bold/anchor tags) into plain-text segments that can be wrapped
independently by the renderer.

Self-contained module with no project dependencies.
"""

import re
from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class HTMLPatterns:
    """
    HTML pattern templates for segment extraction and stripping.

    Only the constrained tag set emitted by the rich-text editor is recognized.
    """

    # Block patterns (capture inner HTML)
    PARAGRAPH: str = r"<p(?:\s[^>]*)?>(.*?)</p>"  # Matches <p ...>...</p>, not <pre>
    LIST_ITEM: str = r"<li(?:\s[^>]*)?>(.*?)</li>"  # Matches <li ...>...</li>, not <link>

    # Stripping patterns
    ANY_TAG: str = r"<[^>]*>"  # Matches any opening, closing or self-closing tag
    BULLET_OR_NEWLINE: str = r"[•\n]"  # Separators used by plain-text bullet lists


# Decoding order matters: "&amp;lt;" becomes "&lt;" before "&lt;" is decoded
HTML_ENTITIES = (
    ("&nbsp;", " "),
    ("&amp;", "&"),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
)


def strip_html(html: Optional[str]) -> str:
    """
    Remove all tags and decode the supported entities, without segmentation.

    Used for fields rendered as a single paragraph (project and volunteer
    descriptions, summary fallback).

    Args:
        html: HTML fragment or plain text (None is treated as empty)

    Returns:
        Plain text, trimmed

    Example:
        >>> strip_html("<p>Built <strong>fast</strong> &amp; cheap</p>")
        'Built fast & cheap'
        >>> strip_html(None)
        ''
    """
    if not html:
        return ""

    result = re.sub(HTMLPatterns.ANY_TAG, "", html)
    for entity, char in HTML_ENTITIES:
        result = result.replace(entity, char)
    return result.strip()


def extract_segments(html: Optional[str]) -> List[str]:
    """
    Split a rich-text fragment into ordered plain-text segments.

    Process:
    1. Each <p> block becomes one segment (stripped, decoded, trimmed)
    2. Each <li> block is appended as one more segment
    3. If steps 1-2 produced anything, return it (paragraphs first, then list items)
    4. Otherwise strip the whole string and split it on bullet glyphs or newlines

    Segments are never split further; wrapping is the renderer's job.

    Args:
        html: HTML fragment or plain text (None is treated as empty)

    Returns:
        List of non-empty segments in document order

    Example:
        >>> extract_segments("<ul><li>Built X</li><li>Shipped Y</li></ul>")
        ['Built X', 'Shipped Y']
        >>> extract_segments("• Led team\\n• Cut costs")
        ['Led team', 'Cut costs']
    """
    if not html:
        return []

    segments = []
    for pattern in (HTMLPatterns.PARAGRAPH, HTMLPatterns.LIST_ITEM):
        for match in re.finditer(pattern, html, flags=re.IGNORECASE | re.DOTALL):
            text = strip_html(match.group(1))
            # Editors emit <p><br></p> for blank lines
            if text:
                segments.append(text)

    if segments:
        return segments

    plain = strip_html(html)
    return [part.strip() for part in re.split(HTMLPatterns.BULLET_OR_NEWLINE, plain) if part.strip()]
