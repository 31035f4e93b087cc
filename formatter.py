"""Line-by-line display classification of resume text.

This is presentation only; nothing here feeds back into field extraction.
"""

import re
from typing import List, NamedTuple

from extractors import EMAIL_RE, URL_RE, extract_phone

LINE_TYPES = ("heading", "subheading", "bullet", "date", "contact", "text", "empty")
CONTACT_SCAN_LINES = 8
SUBHEADING_MAX_CHARS = 65
CAPS_HEADING_MAX_CHARS = 40

SECTION_HEADINGS = {
    "summary", "professional summary", "career summary", "executive summary",
    "objective", "career objective", "profile", "professional profile", "about me",
    "experience", "work experience", "professional experience", "employment history",
    "work history", "career history", "relevant experience", "education",
    "academic background", "qualifications", "skills", "technical skills",
    "core skills", "key skills", "core competencies", "competencies", "projects",
    "personal projects", "academic projects", "key projects", "certifications",
    "certification", "licenses", "achievements", "accomplishments", "awards",
    "honors", "publications", "languages", "interests", "hobbies", "volunteer",
    "volunteering", "volunteer experience", "references", "contact",
    "contact information", "training", "internships", "extracurricular activities",
}

DECORATION_CHARS = " \t:-–—_=*#|•·~"
BULLET_RE = re.compile(r"^\s*(?:[•●▪◦‣∙·\-*–—>➢✓✔■□○]|\d{1,2}[.)])\s+(?P<body>.+)$")
MONTH_YEAR_RE = re.compile(
    r"\b(?:Jan(?:uary)?|Feb(?:ruary)?|Mar(?:ch)?|Apr(?:il)?|May|Jun(?:e)?|Jul(?:y)?|"
    r"Aug(?:ust)?|Sep(?:t|tember)?|Oct(?:ober)?|Nov(?:ember)?|Dec(?:ember)?)\.?,?\s+(?:19|20)\d{2}\b",
    re.IGNORECASE,
)
YEAR_RANGE_RE = re.compile(
    r"\b(?:19|20)\d{2}\s*(?:-|–|—|to)\s*(?:present|current|now|(?:19|20)\d{2})\b",
    re.IGNORECASE,
)
SENTENCE_BREAK_RE = re.compile(r"[.!?]\s+\S")


class FormattedLine(NamedTuple):
    type: str
    content: str


def _is_heading(line: str) -> bool:
    cleaned = line.strip(DECORATION_CHARS)
    if not cleaned:
        return False
    if cleaned.lower() in SECTION_HEADINGS:
        return True
    if BULLET_RE.match(line):
        return False
    letters = [ch for ch in cleaned if ch.isalpha()]
    return len(letters) >= 2 and cleaned.isupper() and len(cleaned) <= CAPS_HEADING_MAX_CHARS


def _is_contact(line: str) -> bool:
    return bool(EMAIL_RE.search(line) or URL_RE.search(line) or extract_phone(line))


def _is_subheading(line: str) -> bool:
    if len(line) >= SUBHEADING_MAX_CHARS or "@" in line:
        return False
    if not line[0].isupper() or line.endswith("."):
        return False
    return not SENTENCE_BREAK_RE.search(line)


def classify_line(line: str, position: int = 0) -> FormattedLine:
    """Classify one line; ``position`` counts the non-empty lines before it."""
    stripped = line.strip()
    if not stripped:
        return FormattedLine("empty", "")
    if _is_heading(stripped):
        return FormattedLine("heading", stripped.strip(DECORATION_CHARS))
    bullet = BULLET_RE.match(stripped)
    if bullet:
        return FormattedLine("bullet", bullet.group("body").strip())
    if MONTH_YEAR_RE.search(stripped) or YEAR_RANGE_RE.search(stripped):
        return FormattedLine("date", stripped)
    if position < CONTACT_SCAN_LINES and _is_contact(stripped):
        return FormattedLine("contact", stripped)
    if _is_subheading(stripped):
        return FormattedLine("subheading", stripped)
    return FormattedLine("text", stripped)


def format_resume(text: str) -> List[FormattedLine]:
    """One tag per input line, in order."""
    formatted: List[FormattedLine] = []
    position = 0
    for line in (text or "").splitlines():
        formatted.append(classify_line(line, position))
        if line.strip():
            position += 1
    return formatted
