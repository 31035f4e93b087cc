import uuid
from dataclasses import asdict, dataclass, field, fields
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

MATCH_FIELDS = ("match_score", "matched_skills", "missing_skills", "matched_preferred", "missing_preferred")


def _new_id() -> str:
    return str(uuid.uuid4())


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


def split_skills(skills: str) -> List[str]:
    """Split the stored comma-joined skill string back into labels."""
    return [skill.strip() for skill in skills.split(",") if skill.strip()]


@dataclass
class Candidate:
    """One parsed resume.

    Missing text fields are empty strings. The ``match_*`` fields stay ``None``
    until a job description has been applied; clearing a match resets them to
    ``None`` so "no JD" is never confused with a 0% match.
    """

    name: str = ""
    title: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    experience: str = ""
    skills: str = ""
    content: str = ""
    file_name: str = ""
    id: str = field(default_factory=_new_id)
    uploaded_at: str = field(default_factory=_utc_now)
    match_score: Optional[int] = None
    matched_skills: Optional[List[str]] = None
    missing_skills: Optional[List[str]] = None
    matched_preferred: Optional[List[str]] = None
    missing_preferred: Optional[List[str]] = None

    @property
    def skill_list(self) -> List[str]:
        return split_skills(self.skills)

    @property
    def is_matched(self) -> bool:
        return self.match_score is not None

    def clear_match(self) -> None:
        for name in MATCH_FIELDS:
            setattr(self, name, None)

    def to_dict(self) -> Dict[str, Any]:
        payload = asdict(self)
        for name in MATCH_FIELDS:
            if payload[name] is None:
                payload.pop(name)
        return payload

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "Candidate":
        known = {f.name for f in fields(cls)}
        values = {key: value for key, value in payload.items() if key in known}
        return cls(**values)
