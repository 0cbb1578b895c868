from dataclasses import dataclass, field
from typing import Any


@dataclass
class CandidateForm:
    """In-memory state of the new-candidate form."""

    first_name: str = ""
    last_name: str = ""
    email: str = ""
    profile: str = ""
    parsed_cv: dict[str, Any] = field(default_factory=dict)
    error: str | None = None


@dataclass
class JobDescriptionForm:
    """In-memory state of the new-job-description form."""

    name: str = ""
    description: str = ""
    error: str | None = None
