"""Rule-based field extractors that turn raw resume text into a Candidate.

Every extractor is a pure ``text -> str`` function: it reads only its input
and the lexicon, never raises on malformed text, and returns ``""`` when
nothing is found. Location and title are cascades: an ordered list of
strategies where the first non-empty result wins.
"""

import re
from dataclasses import dataclass, field
from functools import cached_property
from typing import Callable, Dict, NamedTuple, Optional, Sequence, Tuple

from lexicon import CITY_CAPTURE, Lexicon, default_lexicon
from models import Candidate

UNKNOWN_CANDIDATE = "Unknown Candidate"
NAME_MAX_LENGTH = 60
TITLE_LABEL_SCAN_LINES = 30
HEADER_SCAN_LINES = 10
SHORT_TITLE_MAX_WORDS = 6
SHORT_TITLE_MAX_CHARS = 55

# --- Regex helpers ---------------------------------------------------------------

EMAIL_RE = re.compile(r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}")
URL_RE = re.compile(
    r"(?:https?://|www\.)\S+|\b(?:linkedin|github|gitlab)\.com/\S*",
    re.IGNORECASE,
)
# Most specific first so a formatted number is never cut short by a looser one.
# Separators are spaces or tabs only; a number never spans lines.
PHONE_PATTERNS = (
    re.compile(r"\+\d{1,3}[ \t.-]?\(?\d{3}\)?[ \t.-]?\d{3}[ \t.-]?\d{4}\b"),
    re.compile(r"\(\d{3}\)[ \t.-]?\d{3}[ \t.-]?\d{4}\b"),
    re.compile(r"\b\d{3}[ \t.-]\d{3}[ \t.-]\d{4}\b"),
    re.compile(r"\+\d{1,3}[ \t-]?\d{4,5}[ \t-]?\d{5,6}\b"),
    re.compile(r"\+?\d[\d \t-]{8,}\d"),
)
PHONE_FALLBACK_MIN_DIGITS = 9
ANY_PHONE_RE = re.compile(r"\+?\(?\d[\d \t().-]{7,}\d")
EXPERIENCE_RE = re.compile(r"\b\d+\+?\s?years?\b", re.IGNORECASE)
NAME_SEPARATORS_RE = re.compile(r"[|•·,]")

_REGION_TAIL = r"(?=[ \t]*(?:$|[^\w\s]|(?:USA|US|United States)\b))"
CITY_ABBR_RE = re.compile(rf"{CITY_CAPTURE}[ \t]*,[ \t]*(?P<region>[A-Z]{{2}})\b{_REGION_TAIL}")
CITY_ZIP_RE = re.compile(
    rf"{CITY_CAPTURE}[ \t]*,[ \t]*(?P<region>[A-Z]{{2}})[ \t]+(?P<zip>\d{{5}}(?:-\d{{4}})?)\b"
)
LOCATION_LABEL_RE = re.compile(
    r"^\s*(?:current\s+|home\s+)?(?:location|address|based\s+in|residence|city|lives\s+in)"
    r"\s*[:\-–]\s*(?P<value>.+?)\s*$",
    re.IGNORECASE,
)
LONG_DIGITS_RE = re.compile(r"^[\d\s+().-]{6,}$")
REMOTE_RE = re.compile(r"\b(?:remote|wfh|work\s+from\s+home|hybrid)\b", re.IGNORECASE)
COUNTRY_RE = re.compile(r"\b(?:USA|U\.S\.A\b\.?|United\s+States(?:\s+of\s+America)?)")

TITLE_LABEL_RE = re.compile(
    r"^\s*(?:current\s+|job\s+)?(?:title|role|designation|position|profession)"
    r"\s*[:\-–]\s*(?P<value>.+)$",
    re.IGNORECASE,
)
DESCRIPTION_SUFFIX_RE = re.compile(r"\s*\bdescription\s*:.*$", re.IGNORECASE)
TRAILING_SEPARATORS = " \t|,;:-–•·"
TITLE_SEGMENT_SPLIT_RE = re.compile(r"\s[|•·–-]\s|[|•·]")
SUMMARY_HEADING_RE = re.compile(
    r"^\s*(?:professional\s+|career\s+|executive\s+)?(?:summary|objective|profile|about\s+me)\b"
    r"\s*[:\-–]?\s*(?P<rest>.*)$",
    re.IGNORECASE,
)
NARRATIVE_LEADS = (
    "experienced", "skilled", "certified", "seasoned", "accomplished",
    "results-driven", "results driven", "motivated", "passionate", "dedicated",
)
NARRATIVE_ROLES = (
    "developer", "engineer", "analyst", "designer", "architect", "consultant",
    "scientist", "manager", "administrator", "specialist", "programmer",
)
NARRATIVE_TITLE_RE = re.compile(
    rf"\b(?:{'|'.join(re.escape(lead) for lead in NARRATIVE_LEADS)})\s+"
    rf"(?P<title>(?:[A-Za-z][A-Za-z+#.\-]*\s+){{0,3}}?(?:{'|'.join(NARRATIVE_ROLES)}))\b",
    re.IGNORECASE,
)


# --- Cascade plumbing ------------------------------------------------------------

@dataclass
class Document:
    """Resume (or JD) text plus the per-call views the cascades share."""

    text: str
    lexicon: Lexicon
    has_name_line: bool = True
    lines: Tuple[str, ...] = field(init=False)

    def __post_init__(self) -> None:
        self.lines = tuple(line.strip() for line in (self.text or "").splitlines() if line.strip())

    @property
    def body_lines(self) -> Tuple[str, ...]:
        return self.lines[1:] if self.has_name_line else self.lines

    @cached_property
    def excluded_context(self) -> bool:
        return self.lexicon.has_excluded_context(self.text or "")


def _always(doc: Document) -> bool:
    return True


def _no_excluded_context(doc: Document) -> bool:
    return not doc.excluded_context


class Strategy(NamedTuple):
    name: str
    extract: Callable[[Document], str]
    applies: Callable[[Document], bool] = _always


def run_cascade(strategies: Sequence[Strategy], doc: Document) -> str:
    for strategy in strategies:
        if not strategy.applies(doc):
            continue
        value = strategy.extract(doc)
        if value:
            return value
    return ""


# --- Simple fields ---------------------------------------------------------------

def extract_name(text: str) -> str:
    first_line = next((line for line in (text or "").splitlines() if line.strip()), "")
    cleaned = EMAIL_RE.sub(" ", first_line)
    cleaned = URL_RE.sub(" ", cleaned)
    cleaned = ANY_PHONE_RE.sub(" ", cleaned)
    cleaned = NAME_SEPARATORS_RE.sub(" ", cleaned)
    cleaned = re.sub(r"\s+", " ", cleaned).strip()
    cleaned = cleaned[:NAME_MAX_LENGTH].strip()
    if len(cleaned) < 2:
        return UNKNOWN_CANDIDATE
    return cleaned


def extract_email(text: str) -> str:
    match = EMAIL_RE.search(text or "")
    return match.group(0) if match else ""


def extract_phone(text: str) -> str:
    text = text or ""
    for pattern in PHONE_PATTERNS[:-1]:
        match = pattern.search(text)
        if match:
            return match.group(0).strip()
    for match in PHONE_PATTERNS[-1].finditer(text):
        candidate = match.group(0).strip()
        if sum(ch.isdigit() for ch in candidate) >= PHONE_FALLBACK_MIN_DIGITS:
            return candidate
    return ""


def extract_experience(text: str) -> str:
    match = EXPERIENCE_RE.search(text or "")
    return match.group(0) if match else ""


def extract_skills(text: str, lexicon: Optional[Lexicon] = None) -> str:
    lexicon = lexicon or default_lexicon()
    return ", ".join(lexicon.find_skills(text or ""))


# --- Location ----------------------------------------------------------------------

def _trim_city(raw: str, lexicon: Lexicon) -> str:
    """Drop leading words (a name, a street) until a registry city remains."""
    words = raw.split()
    for start in range(len(words)):
        candidate = " ".join(words[start:])
        if lexicon.known_city(candidate):
            return candidate
    return raw.strip()


def _plausible_city(city: str, lexicon: Lexicon) -> bool:
    lowered = city.lower()
    if lexicon.is_excluded_city(city):
        return False
    # "Excel, MS" and friends are skill lists, not places.
    return not any(skill == lowered for skill in lexicon.skills)


def location_from_city_abbreviation(doc: Document) -> str:
    lexicon = doc.lexicon
    for line in doc.lines:
        for match in CITY_ABBR_RE.finditer(line):
            code = match.group("region")
            if code not in lexicon.region_codes:
                continue
            city = _trim_city(match.group("city"), lexicon)
            if not _plausible_city(city, lexicon):
                continue
            if code in lexicon.ambiguous_region_codes and lexicon.known_city(city) != "target":
                continue
            return f"{city}, {code}"
    return ""


def location_from_city_region_name(doc: Document) -> str:
    lexicon = doc.lexicon
    for line in doc.lines:
        for match in lexicon.region_name_re.finditer(line):
            city = _trim_city(match.group("city"), lexicon)
            if not _plausible_city(city, lexicon):
                continue
            return f"{city}, {lexicon.region_code(match.group('region'))}"
    return ""


def location_from_postal_code(doc: Document) -> str:
    lexicon = doc.lexicon
    for line in doc.lines:
        for match in CITY_ZIP_RE.finditer(line):
            code = match.group("region")
            if code not in lexicon.region_codes:
                continue
            city = _trim_city(match.group("city"), lexicon)
            if not _plausible_city(city, lexicon):
                continue
            return f"{city}, {code} {match.group('zip')}"
    return ""


def location_from_label(doc: Document) -> str:
    lexicon = doc.lexicon
    for line in doc.lines:
        match = LOCATION_LABEL_RE.match(line)
        if not match:
            continue
        value = match.group("value").strip(TRAILING_SEPARATORS)
        if not value or lexicon.has_excluded_context(value):
            continue
        if LONG_DIGITS_RE.match(value) or EMAIL_RE.search(value):
            continue
        return value[:80].strip()
    return ""


def location_from_header_city(doc: Document) -> str:
    header = "\n".join(doc.lines[:HEADER_SCAN_LINES])
    if doc.lexicon.has_excluded_context(header):
        return ""
    return doc.lexicon.find_target_city(header)


def location_from_document_city(doc: Document) -> str:
    return doc.lexicon.find_target_city(doc.text)


def location_from_remote_keyword(doc: Document) -> str:
    match = REMOTE_RE.search(doc.text)
    if not match:
        return ""
    return "Hybrid" if match.group(0).lower() == "hybrid" else "Remote"


def location_from_country(doc: Document) -> str:
    return "United States" if COUNTRY_RE.search(doc.text) else ""


LOCATION_STRATEGIES = (
    Strategy("city_abbreviation", location_from_city_abbreviation),
    Strategy("city_region_name", location_from_city_region_name),
    Strategy("postal_code", location_from_postal_code),
    Strategy("label", location_from_label),
    Strategy("header_city", location_from_header_city),
    Strategy("document_city", location_from_document_city, _no_excluded_context),
    Strategy("remote", location_from_remote_keyword),
    Strategy("country", location_from_country, _no_excluded_context),
)


def extract_location(text: str, lexicon: Optional[Lexicon] = None) -> str:
    return run_cascade(LOCATION_STRATEGIES, Document(text or "", lexicon or default_lexicon()))


# --- Title -------------------------------------------------------------------------

def _is_short_title(value: str) -> bool:
    return len(value.split()) <= SHORT_TITLE_MAX_WORDS and len(value) <= SHORT_TITLE_MAX_CHARS


def _looks_like_contact(line: str) -> bool:
    return bool(EMAIL_RE.search(line) or URL_RE.search(line) or extract_phone(line))


def _looks_like_heading(line: str) -> bool:
    letters = [ch for ch in line if ch.isalpha()]
    if not letters or len(line) > 40:
        return False
    return line.isupper() or (line.endswith(":") and len(line.split()) <= 4)


def _title_case(value: str) -> str:
    return " ".join(word if any(ch.isupper() for ch in word) else word.capitalize() for word in value.split())


def title_from_label(doc: Document) -> str:
    for line in doc.lines[:TITLE_LABEL_SCAN_LINES]:
        match = TITLE_LABEL_RE.match(line)
        if not match:
            continue
        value = DESCRIPTION_SUFFIX_RE.sub("", match.group("value")).strip(TRAILING_SEPARATORS)
        if not value:
            continue
        if doc.lexicon.is_job_title(value) or _is_short_title(value):
            return value
    return ""


def title_from_header_lines(doc: Document) -> str:
    window = doc.lines[1:8] if doc.has_name_line else doc.lines[:8]
    for line in window:
        if _looks_like_contact(line):
            continue
        for segment in TITLE_SEGMENT_SPLIT_RE.split(line):
            segment = segment.strip(TRAILING_SEPARATORS)
            title = doc.lexicon.find_job_title(segment)
            if title:
                return segment if _is_short_title(segment) else title
    return ""


def title_from_summary(doc: Document) -> str:
    lines = doc.lines
    for index, line in enumerate(lines):
        match = SUMMARY_HEADING_RE.match(line)
        if not match:
            continue
        body = [match.group("rest")]
        for following in lines[index + 1:index + 9]:
            if _looks_like_heading(following):
                break
            body.append(following)
        title = doc.lexicon.find_job_title("\n".join(body))
        if title:
            return title
    return ""


def title_from_narrative(doc: Document) -> str:
    match = NARRATIVE_TITLE_RE.search(doc.text)
    if not match:
        return ""
    words = match.group("title").split()
    skip = set(NARRATIVE_LEADS) | doc.lexicon.stop_words
    while len(words) > 1 and words[0].lower() in skip:
        words.pop(0)
    return _title_case(" ".join(words))


def title_from_document(doc: Document) -> str:
    return doc.lexicon.find_job_title("\n".join(doc.body_lines), min_words=2)


TITLE_STRATEGIES = (
    Strategy("label", title_from_label),
    Strategy("header_lines", title_from_header_lines),
    Strategy("summary", title_from_summary),
    Strategy("narrative", title_from_narrative),
    Strategy("document", title_from_document),
)


def extract_title(text: str, lexicon: Optional[Lexicon] = None, has_name_line: bool = True) -> str:
    """Best-effort role title; ``has_name_line=False`` for job descriptions."""
    doc = Document(text or "", lexicon or default_lexicon(), has_name_line=has_name_line)
    return run_cascade(TITLE_STRATEGIES, doc)


# --- Whole resume ------------------------------------------------------------------

def extract_fields(text: str, lexicon: Optional[Lexicon] = None) -> Dict[str, str]:
    """All extracted attributes for ``text``; deterministic for a given input."""
    lexicon = lexicon or default_lexicon()
    text = text or ""
    return {
        "name": extract_name(text),
        "title": extract_title(text, lexicon),
        "email": extract_email(text),
        "phone": extract_phone(text),
        "location": extract_location(text, lexicon),
        "experience": extract_experience(text),
        "skills": extract_skills(text, lexicon),
    }


def parse_resume(text: str, file_name: str = "", lexicon: Optional[Lexicon] = None) -> Candidate:
    return Candidate(content=text, file_name=file_name, **extract_fields(text, lexicon))