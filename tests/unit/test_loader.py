"""Unit tests for loading resume data from JSON blobs and files."""

import json
from pathlib import Path

import pytest

from folio.contexts.profile import InvalidResumeDataError, load_resume_data, parse_resume_json

FIXTURES_PATH = Path(__file__).parent.parent / "fixtures"


@pytest.mark.unit
def test_parse_resume_json():
    """A stored JSON blob parses into ResumeData."""
    data = parse_resume_json(json.dumps({"full_name": "Jane Doe", "skills": ["SQL"]}))
    assert data.full_name == "Jane Doe"
    assert data.skills == ("SQL",)


@pytest.mark.unit
def test_parse_resume_json_malformed():
    """Malformed JSON raises InvalidResumeDataError, not JSONDecodeError."""
    with pytest.raises(InvalidResumeDataError, match="malformed"):
        parse_resume_json("{not json")


@pytest.mark.unit
def test_load_json_fixture():
    """The full JSON fixture loads with every section populated."""
    data = load_resume_data(FIXTURES_PATH / "jane_doe.json")

    assert data.full_name == "Jane Doe"
    assert len(data.experience) == 2
    assert data.education[0].school_name == "State University"
    assert [item.label for item in data.languages] == ["English (Native)", "Spanish"]
    assert data.volunteer_work[0].organization == "Code Club"


@pytest.mark.unit
def test_load_yaml_fixture():
    """YAML input goes through the same model."""
    data = load_resume_data(FIXTURES_PATH / "minimal.yaml")

    assert data.full_name == "Jane Doe"
    assert data.skills == ("SQL", "Python")
    assert data.experience[0].period == "2020 - 2023"


@pytest.mark.unit
def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_resume_data(tmp_path / "nope.json")


@pytest.mark.unit
def test_load_yaml_list_rejected(tmp_path):
    """A YAML document that is a list is not a resume."""
    path = tmp_path / "list.yaml"
    path.write_text("- Jane Doe\n- jane@x.com\n")

    with pytest.raises(InvalidResumeDataError):
        load_resume_data(path)
