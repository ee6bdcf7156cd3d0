"""
Resume data loading.

The profile store persists resume data as a JSON blob; the CLI also accepts
JSON or YAML files. Both paths end in ResumeData.from_dict().
"""

import json
from pathlib import Path
from typing import Union

from omegaconf import OmegaConf

from folio.contexts.profile.exceptions import InvalidResumeDataError
from folio.contexts.profile.logger import _log_debug, _log_info
from folio.contexts.profile.resume_data_structure import ResumeData

YAML_SUFFIXES = (".yaml", ".yml")


def parse_resume_json(blob: str) -> ResumeData:
    """
    Parse a stored JSON blob into ResumeData.

    Args:
        blob: JSON text as saved by the profile page

    Returns:
        ResumeData instance

    Raises:
        InvalidResumeDataError: If the blob is not valid JSON or not resume-shaped
    """
    try:
        raw = json.loads(blob)
    except json.JSONDecodeError as e:
        raise InvalidResumeDataError(f"Resume JSON is malformed: {e.msg} (line {e.lineno})") from e
    return ResumeData.from_dict(raw)


def load_resume_data(path: Union[str, Path]) -> ResumeData:
    """
    Load resume data from a .json, .yaml or .yml file.

    Args:
        path: Path to the resume data file

    Returns:
        ResumeData instance

    Raises:
        FileNotFoundError: If path does not exist
        InvalidResumeDataError: If content is malformed or not resume-shaped
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Resume data file not found: {path}")

    if path.suffix.lower() in YAML_SUFFIXES:
        raw = OmegaConf.to_container(OmegaConf.load(path), resolve=True)
        data = ResumeData.from_dict(raw)
    else:
        data = parse_resume_json(path.read_text(encoding="utf-8"))

    _log_info(f"Loaded resume data: {path.name}")
    _log_debug(
        f"  Sections: experience={len(data.experience)}, education={len(data.education)}, "
        f"skills={len(data.skills)}, projects={len(data.projects)}"
    )
    return data
