"""
Profile Context

Responsibilities:
- Defines the structured resume data model handed to the renderer
- Loads resume data from JSON blobs and JSON/YAML files
- Rejects input that is not resume-shaped

Owns: ResumeData and its entry types, input parsing
Never: Makes layout or typesetting decisions
"""

from folio.contexts.profile.exceptions import InvalidResumeDataError
from folio.contexts.profile.loader import load_resume_data, parse_resume_json
from folio.contexts.profile.resume_data_structure import (
    EducationEntry,
    ExperienceEntry,
    ListItem,
    PlainItem,
    ProjectEntry,
    ResumeData,
    StructuredItem,
    VolunteerEntry,
)

__all__ = [
    # Data structure classes
    "ResumeData",
    "ExperienceEntry",
    "EducationEntry",
    "ProjectEntry",
    "VolunteerEntry",
    "PlainItem",
    "StructuredItem",
    "ListItem",
    # Loading
    "load_resume_data",
    "parse_resume_json",
    "InvalidResumeDataError",
]
