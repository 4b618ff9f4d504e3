"""
Résumé Document Structure

Defines the résumé content model shared by every context. Documents arrive from
the content service (camelCase JSON), from YAML files, or from form input, and
are normalised here so downstream code can rely on every list field existing.
"""

import re
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from omegaconf import OmegaConf

# Wire (camelCase) name -> attribute name, for keys whose spelling differs
_WIRE_ALIASES = {
    "fullName": "full_name",
    "jobTitle": "job_title",
    "linkedIn": "linkedin",
    "experience": "experiences",
}

CONTACT_FIELDS = ("email", "phone", "location", "linkedin", "portfolio")


def _text(value: Any) -> str:
    """Coerce a possibly-missing scalar to a stripped string."""
    if value is None:
        return ""
    return str(value).strip()


def _string_list(value: Any, separator: str = ",") -> List[str]:
    """
    Coerce a list or delimited string to a list of non-empty strings.

    Examples:
        >>> _string_list("Python, SQL , ,Git")
        ['Python', 'SQL', 'Git']
        >>> _string_list(None)
        []
    """
    if value is None:
        return []
    if isinstance(value, str):
        items = value.split(separator)
    elif isinstance(value, (list, tuple)):
        items = value
    else:
        items = [value]
    return [_text(item) for item in items if _text(item)]


def split_responsibilities(text: str) -> List[str]:
    """Split a free-text responsibilities paragraph into sentence bullets."""
    return [part.strip() for part in re.split(r"\.(?:\s+|$)", text or "") if part.strip()]


def _mappings(value: Any) -> List[Dict[str, Any]]:
    """Entries of a list that are objects; anything else in the list is skipped."""
    if not isinstance(value, (list, tuple)):
        return []
    return [item for item in value if isinstance(item, dict)]


@dataclass
class Experience:
    role: str = ""
    company: str = ""
    duration: str = ""
    bullets: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Experience":
        bullets = data.get("bullets")
        if bullets is None and data.get("responsibilities"):
            bullets = split_responsibilities(_text(data["responsibilities"]))
        return cls(
            role=_text(data.get("role")),
            company=_text(data.get("company")),
            duration=_text(data.get("duration")),
            bullets=_string_list(bullets, separator="\n"),
        )


@dataclass
class Education:
    degree: str = ""
    institution: str = ""
    year: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Education":
        return cls(
            degree=_text(data.get("degree")),
            institution=_text(data.get("institution")),
            year=_text(data.get("year")),
        )


@dataclass
class Project:
    name: str = ""
    description: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Project":
        return cls(name=_text(data.get("name")), description=_text(data.get("description")))


@dataclass
class ResumeDocument:
    """
    Structured résumé content.

    Contact fields are optional strings (empty when absent). Every collection
    field always exists, possibly empty, so renderers never need to guard
    against missing lists.

    Attributes:
        full_name: Candidate name shown in the header
        job_title: Professional title under the name
        email, phone, location, linkedin, portfolio: Contact fields
        summary: Professional summary paragraph
        experiences: Work history, most recent first
        education: Degrees
        skills: Individual skill terms
        projects: Named projects with a description
        certifications: Free-text certifications line
        achievements: Optional achievement lines
        publications: Optional publication lines
    """

    full_name: str = ""
    job_title: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    linkedin: str = ""
    portfolio: str = ""
    summary: str = ""
    experiences: List[Experience] = field(default_factory=list)
    education: List[Education] = field(default_factory=list)
    skills: List[str] = field(default_factory=list)
    projects: List[Project] = field(default_factory=list)
    certifications: str = ""
    achievements: List[str] = field(default_factory=list)
    publications: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "ResumeDocument":
        """
        Build a document from wire-form or snake_case data.

        Missing keys and None values become empty strings/lists, and list entries
        that are not objects are skipped. Skills may be a list or a
        comma-separated string. Experiences may carry a free-text
        `responsibilities` paragraph instead of `bullets`.
        """
        if not isinstance(data, dict):
            data = {}
        data = {_WIRE_ALIASES.get(k, k): v for k, v in data.items()}

        return cls(
            full_name=_text(data.get("full_name")),
            job_title=_text(data.get("job_title")),
            **{name: _text(data.get(name)) for name in CONTACT_FIELDS},
            summary=_text(data.get("summary")),
            experiences=[Experience.from_dict(e) for e in _mappings(data.get("experiences"))],
            education=[Education.from_dict(e) for e in _mappings(data.get("education"))],
            skills=_string_list(data.get("skills")),
            projects=[Project.from_dict(p) for p in _mappings(data.get("projects"))],
            certifications=_text(data.get("certifications")),
            achievements=_string_list(data.get("achievements"), separator="\n"),
            publications=_string_list(data.get("publications"), separator="\n"),
        )

    @classmethod
    def from_yaml(cls, yaml_path: Union[str, Path]) -> "ResumeDocument":
        """
        Load a résumé from a YAML file.

        The file holds the document either at the root or under a `resume` key.

        Raises:
            FileNotFoundError: If yaml_path does not exist
        """
        yaml_path = Path(yaml_path)
        if not yaml_path.exists():
            raise FileNotFoundError(f"YAML file not found: {yaml_path}")

        data = OmegaConf.to_container(OmegaConf.load(yaml_path), resolve=True)
        if isinstance(data, dict) and "resume" in data:
            data = data["resume"]
        return cls.from_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        """Wire form (camelCase top-level keys) used by the content service and storage."""
        data = asdict(self)
        data["fullName"] = data.pop("full_name")
        data["jobTitle"] = data.pop("job_title")
        return data

    @property
    def contact_fields(self) -> Dict[str, str]:
        return {name: getattr(self, name) for name in CONTACT_FIELDS}

    @property
    def export_filename(self) -> str:
        """PDF file name for this résumé, e.g. "Jane_Doe_Resume.pdf"."""
        stem = re.sub(r"\s+", "_", self.full_name.strip()) or "Untitled"
        return f"{stem}_Resume.pdf"
