"""Integration tests for the two-column (sidebar) layout."""

import json
from pathlib import Path

import pytest

from folio.contexts.rendering import render_resume
from folio.contexts.rendering.defaults import BULLET, TwoColumnSettings
from folio.contexts.rendering.sections import SECTION_HEADINGS

FIXTURES_PATH = Path(__file__).parent.parent / "fixtures"


def load_fixture(name: str) -> dict:
    return json.loads((FIXTURES_PATH / name).read_text())


def sidebar_rects(result):
    return [op for op in result.operations if op.kind == "rect"]


def text_op(result, text):
    return next(op for op in result.operations if op.kind == "text" and op.text == text)


@pytest.mark.integration
def test_filename():
    result = render_resume(load_fixture("jane_doe.json"), "two-column")
    assert result.filename == "Jane Doe_TwoColumn_Resume.pdf"


@pytest.mark.integration
def test_sidebar_background_first_on_page_one():
    settings = TwoColumnSettings()
    result = render_resume(load_fixture("jane_doe.json"), "two-column")
    first = result.operations[0]

    assert (first.kind, first.page, first.x, first.y, first.width, first.height) == (
        "rect", 0, 0, 0, settings.sidebar_width, settings.page_height
    )
    assert first.color == settings.palette.shade


@pytest.mark.integration
def test_sidebar_content():
    """Name, contact, skills and languages live in the sidebar, one bullet per item."""
    result = render_resume(load_fixture("jane_doe.json"), "two-column")
    runs = result.text_runs()

    assert runs[0] == "Jane Doe"
    assert runs.index("CONTACT") < runs.index("SKILLS") < runs.index("LANGUAGES")
    skills_start = runs.index("SKILLS") + 1
    assert runs[skills_start : skills_start + 4] == [BULLET, "SQL", BULLET, "Python"]
    languages_start = runs.index("LANGUAGES") + 1
    assert runs[languages_start : languages_start + 4] == [
        BULLET,
        "English (Native)",
        BULLET,
        "Spanish",
    ]
    assert "SQL  •  Python  •  Go  •  PostgreSQL  •  Kafka" not in runs

    for text in ["jane@example.com", "+1 555 0100", "Portland, OR", "linkedin.com/in/janedoe"]:
        assert text in runs


@pytest.mark.integration
def test_columns_do_not_overlap():
    settings = TwoColumnSettings()
    result = render_resume(load_fixture("jane_doe.json"), "two-column")

    sidebar_texts = ["Jane Doe", "CONTACT", "SKILLS", "SQL", "LANGUAGES", "Spanish"]
    main_texts = ["PROFESSIONAL SUMMARY", "PROFESSIONAL EXPERIENCE", "Senior Engineer", "INTERESTS"]

    for text in sidebar_texts:
        assert text_op(result, text).x < settings.sidebar_width
    for text in main_texts:
        assert text_op(result, text).x >= settings.main_x


@pytest.mark.integration
def test_main_column_order():
    runs = render_resume(load_fixture("jane_doe.json"), "two-column").text_runs()
    main_headings = [
        run
        for run in runs
        if run in SECTION_HEADINGS.values() and run not in ("CONTACT", "SKILLS", "LANGUAGES")
    ]

    assert main_headings == [
        "PROFESSIONAL SUMMARY",
        "PROFESSIONAL EXPERIENCE",
        "EDUCATION",
        "CERTIFICATIONS",
        "PROJECTS",
        "PUBLICATIONS",
        "AWARDS & HONORS",
        "VOLUNTEER WORK",
        "INTERESTS",
    ]
    assert "Climbing  •  Chess" in runs


@pytest.mark.integration
def test_columns_start_at_top_margin():
    settings = TwoColumnSettings()
    result = render_resume(load_fixture("jane_doe.json"), "two-column")

    assert text_op(result, "Jane Doe").y == settings.top_margin
    assert text_op(result, "PROFESSIONAL SUMMARY").y == settings.top_margin


@pytest.mark.integration
def test_sidebar_overflow_repaints_background():
    """Many skills push the sidebar onto a new page, which gets the same background."""
    data = {"full_name": "Jane Doe", "skills": [f"Skill {i}" for i in range(120)]}
    result = render_resume(data, "two-column")
    rects = sidebar_rects(result)

    assert result.page_count >= 2
    assert [rect.page for rect in rects] == list(range(result.page_count))
    for rect in rects:
        assert (rect.x, rect.y, rect.width, rect.height) == (
            rects[0].x, rects[0].y, rects[0].width, rects[0].height
        )

    # The background is painted before any text on every page
    for page in range(result.page_count):
        page_ops = [op for op in result.operations if op.page == page]
        assert page_ops[0].kind == "rect"

    # The sidebar continues at the top of page two
    page_two_texts = [op for op in result.operations if op.page == 1 and op.kind == "text"]
    assert page_two_texts
    assert all(op.x < TwoColumnSettings().sidebar_width for op in page_two_texts)


@pytest.mark.integration
def test_main_overflow_repaints_background():
    """Pages appended by the main column alone still carry the sidebar."""
    bullets = "".join(
        f"<li>Bullet {i} describing a long-running infrastructure initiative in detail</li>"
        for i in range(120)
    )
    data = {
        "full_name": "Jane Doe",
        "skills": ["SQL"],
        "experience": [{"position": "Engineer", "company": "Acme", "description": f"<ul>{bullets}</ul>"}],
    }
    result = render_resume(data, "two-column")

    assert result.page_count >= 2
    assert [rect.page for rect in sidebar_rects(result)] == list(range(result.page_count))


@pytest.mark.integration
def test_columns_paginate_independently():
    """A long sidebar does not push main column content to a later page."""
    data = {
        "skills": [f"Skill {i}" for i in range(120)],
        "experience": [{"position": "Engineer", "company": "Acme", "description": "<li>Built X</li>"}],
    }
    result = render_resume(data, "two-column")

    assert result.page_count >= 2
    assert text_op(result, "Built X").page == 0


@pytest.mark.integration
def test_name_fallback_and_wrapping():
    settings = TwoColumnSettings()
    assert render_resume({}, "two-column").text_runs()[0] == "Your Name"

    long_name = "Maximiliana Bartholomew-Worthington"
    result = render_resume({"full_name": long_name}, "two-column")
    name_ops = [op for op in result.operations if op.kind == "text" and op.size == settings.name_size]

    assert len(name_ops) >= 2
    # The hyphenated surname is wider than the sidebar and gets hard-broken
    assert "".join(op.text for op in name_ops) == long_name.replace(" ", "")
    assert name_ops[1].y - name_ops[0].y == settings.name_line_height


@pytest.mark.integration
def test_empty_sidebar_sections_omitted():
    runs = render_resume({"full_name": "Jane Doe", "interests": ["Chess"]}, "two-column").text_runs()

    for heading in ["CONTACT", "SKILLS", "LANGUAGES"]:
        assert heading not in runs
    assert "INTERESTS" in runs


@pytest.mark.integration
def test_idempotent():
    data = load_fixture("jane_doe.json")
    assert render_resume(data, "two-column").pdf_bytes == render_resume(data, "two-column").pdf_bytes
