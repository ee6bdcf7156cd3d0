"""
Resume Data Structure

Defines the structured representation of a resume as handed to the renderer.
Instances are immutable for the duration of a render; sequences are tuples and
every entry type is a frozen dataclass.

Certifications, awards, publications and languages accept either plain strings
or objects in the input. They are modeled as a tagged variant (PlainItem |
StructuredItem) so the renderer branches on `kind` instead of inspecting
runtime types of raw input.
"""

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Sequence, Tuple, Union

from folio.contexts.profile.exceptions import InvalidResumeDataError
from folio.contexts.profile.logger import _log_debug


def _text(value: Any) -> Optional[str]:
    """Coerce a scalar field to a trimmed string, or None when absent/blank."""
    if value is None:
        return None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        value = str(value)
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None


def _join_period(start: Optional[str], end: Optional[str]) -> str:
    """'start - end' when both ends are known, else empty."""
    return f"{start} - {end}" if start and end else ""


def strip_scheme(url: str) -> str:
    """Drop the https:// prefix for display."""
    return url.replace("https://", "", 1)


# =============================================================================
# Union items (certifications, awards, publications, languages)
# =============================================================================


@dataclass(frozen=True)
class PlainItem:
    """A list element given as a bare string."""

    text: str
    kind: str = field(default="plain", init=False)

    @property
    def label(self) -> str:
        return self.text


@dataclass(frozen=True)
class StructuredItem:
    """
    A list element given as an object.

    Attributes:
        title: Display name (certification name, award/publication title, language)
        source: Issuer or publisher
        date: Date string as supplied
        proficiency: Language proficiency
        url: Optional link
    """

    title: str
    source: Optional[str] = None
    date: Optional[str] = None
    proficiency: Optional[str] = None
    url: Optional[str] = None
    kind: str = field(default="structured", init=False)

    @property
    def label(self) -> str:
        """Title with proficiency in parentheses when present, e.g. 'Spanish (Fluent)'."""
        return f"{self.title} ({self.proficiency})" if self.proficiency else self.title

    @property
    def detail_line(self) -> str:
        """Issuer/publisher and date joined with ' | ' (empty if neither is present)."""
        return " | ".join(part for part in (self.source, self.date) if part)


ListItem = Union[PlainItem, StructuredItem]


@dataclass(frozen=True)
class ItemSchema:
    """How one union section maps input object keys onto StructuredItem."""

    title_keys: Tuple[str, ...]
    fallback_title: str
    source_key: Optional[str] = None
    proficiency_key: Optional[str] = None


ITEM_SCHEMAS = {
    "certifications": ItemSchema(("name",), "Certification", source_key="issuer"),
    "awards": ItemSchema(("title", "name"), "Award", source_key="issuer"),
    "publications": ItemSchema(("title",), "Publication", source_key="publisher"),
    "languages": ItemSchema(("language",), "Language", proficiency_key="proficiency"),
}


def parse_list_item(value: Any, schema: ItemSchema) -> Optional[ListItem]:
    """
    Convert one raw union element into a PlainItem or StructuredItem.

    Returns None for blank strings and for values that are neither strings,
    numbers nor mappings.
    """
    if isinstance(value, Mapping):
        titles = [_text(value.get(key)) for key in schema.title_keys]
        title = next((t for t in titles if t), None)
        return StructuredItem(
            title=title or schema.fallback_title,
            source=_text(value.get(schema.source_key)) if schema.source_key else None,
            date=_text(value.get("date")),
            proficiency=_text(value.get(schema.proficiency_key)) if schema.proficiency_key else None,
            url=_text(value.get("url")),
        )

    text = _text(value)
    return PlainItem(text) if text else None


# =============================================================================
# Entry types
# =============================================================================


@dataclass(frozen=True)
class ExperienceEntry:
    company: str
    position: Optional[str] = None
    title: Optional[str] = None
    location: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    duration: Optional[str] = None
    description: Optional[str] = None

    @property
    def role(self) -> str:
        return self.position or self.title or "Position"

    @property
    def period(self) -> str:
        return self.duration or _join_period(self.start_date, self.end_date)

    @classmethod
    def from_dict(cls, raw: Mapping) -> "ExperienceEntry":
        return cls(
            company=_text(raw.get("company")) or "",
            position=_text(raw.get("position")),
            title=_text(raw.get("title")),
            location=_text(raw.get("location")),
            start_date=_text(raw.get("start_date")),
            end_date=_text(raw.get("end_date")),
            duration=_text(raw.get("duration")),
            description=raw.get("description") if isinstance(raw.get("description"), str) else None,
        )


@dataclass(frozen=True)
class EducationEntry:
    degree: str
    school: Optional[str] = None
    institution: Optional[str] = None
    location: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    year: Optional[str] = None
    field: Optional[str] = None

    @property
    def school_name(self) -> str:
        return self.school or self.institution or ""

    @property
    def period(self) -> str:
        return self.year or _join_period(self.start_date, self.end_date)

    @classmethod
    def from_dict(cls, raw: Mapping) -> "EducationEntry":
        return cls(
            degree=_text(raw.get("degree")) or "",
            school=_text(raw.get("school")),
            institution=_text(raw.get("institution")),
            location=_text(raw.get("location")),
            start_date=_text(raw.get("start_date")),
            end_date=_text(raw.get("end_date")),
            year=_text(raw.get("year")),
            field=_text(raw.get("field")),
        )


@dataclass(frozen=True)
class ProjectEntry:
    name: str
    description: Optional[str] = None
    url: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: Mapping) -> "ProjectEntry":
        return cls(
            name=_text(raw.get("name")) or "",
            description=raw.get("description") if isinstance(raw.get("description"), str) else None,
            url=_text(raw.get("url")),
        )


@dataclass(frozen=True)
class VolunteerEntry:
    role: str
    organization: str
    description: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: Mapping) -> "VolunteerEntry":
        return cls(
            role=_text(raw.get("role")) or "",
            organization=_text(raw.get("organization")) or "",
            description=raw.get("description") if isinstance(raw.get("description"), str) else None,
        )


# =============================================================================
# Document
# =============================================================================


def _sequence(data: Mapping, key: str) -> Sequence:
    """Fetch a list-valued field; None means absent, anything but a list is an error."""
    value = data.get(key)
    if value is None:
        return ()
    if isinstance(value, (list, tuple)):
        return value
    raise InvalidResumeDataError(f"'{key}' must be a list", field=key, value=value)


def _entries(data: Mapping, key: str, entry_cls) -> Tuple:
    entries = []
    for index, raw in enumerate(_sequence(data, key)):
        if not isinstance(raw, Mapping):
            _log_debug(f"Skipping {key}[{index}]: expected an object, got {type(raw).__name__}")
            continue
        entries.append(entry_cls.from_dict(raw))
    return tuple(entries)


def _strings(data: Mapping, key: str) -> Tuple[str, ...]:
    return tuple(text for text in (_text(v) for v in _sequence(data, key)) if text)


def _items(data: Mapping, key: str) -> Tuple[ListItem, ...]:
    schema = ITEM_SCHEMAS[key]
    items = (parse_list_item(value, schema) for value in _sequence(data, key))
    return tuple(item for item in items if item is not None)


@dataclass(frozen=True)
class ResumeData:
    """
    Complete resume as supplied by the profile store.

    Every field is optional. Blank strings are normalized to None and blank
    list elements are dropped, so an empty tuple or None always means
    "do not render this section".
    """

    full_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    linkedin_url: Optional[str] = None
    website_url: Optional[str] = None
    location: Optional[str] = None
    summary: Optional[str] = None
    skills: Tuple[str, ...] = ()
    experience: Tuple[ExperienceEntry, ...] = ()
    education: Tuple[EducationEntry, ...] = ()
    certifications: Tuple[ListItem, ...] = ()
    projects: Tuple[ProjectEntry, ...] = ()
    publications: Tuple[ListItem, ...] = ()
    awards: Tuple[ListItem, ...] = ()
    languages: Tuple[ListItem, ...] = ()
    volunteer_work: Tuple[VolunteerEntry, ...] = ()
    interests: Tuple[str, ...] = ()

    @property
    def contact_items(self) -> Tuple[str, ...]:
        """Email, phone and location in display order (absent ones skipped)."""
        return tuple(item for item in (self.email, self.phone, self.location) if item)

    @property
    def links(self) -> Tuple[str, ...]:
        """LinkedIn and website URLs without the https:// prefix."""
        return tuple(strip_scheme(url) for url in (self.linkedin_url, self.website_url) if url)

    @classmethod
    def from_dict(cls, data: Any) -> "ResumeData":
        """
        Build ResumeData from a parsed JSON/YAML mapping.

        Unknown keys are ignored. Malformed entries inside structured sections are
        skipped; a section that is not a list raises InvalidResumeDataError.

        Args:
            data: Mapping with resume fields (see module docstring)

        Returns:
            ResumeData instance

        Raises:
            InvalidResumeDataError: If data is not a mapping or a section is not a list
        """
        if isinstance(data, ResumeData):
            return data
        if not isinstance(data, Mapping):
            raise InvalidResumeDataError("Resume data must be a mapping", value=data)

        summary = data.get("summary")
        return cls(
            full_name=_text(data.get("full_name")),
            email=_text(data.get("email")),
            phone=_text(data.get("phone")),
            linkedin_url=_text(data.get("linkedin_url")),
            website_url=_text(data.get("website_url")),
            location=_text(data.get("location")),
            summary=summary if isinstance(summary, str) and summary.strip() else None,
            skills=_strings(data, "skills"),
            experience=_entries(data, "experience", ExperienceEntry),
            education=_entries(data, "education", EducationEntry),
            certifications=_items(data, "certifications"),
            projects=_entries(data, "projects", ProjectEntry),
            publications=_items(data, "publications"),
            awards=_items(data, "awards"),
            languages=_items(data, "languages"),
            volunteer_work=_entries(data, "volunteer_work", VolunteerEntry),
            interests=_strings(data, "interests"),
        )

