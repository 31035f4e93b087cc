"""Rule-based job-description analysis and candidate match scoring."""

import re
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from extractors import extract_title
from lexicon import Lexicon, default_lexicon
from models import Candidate

# --- Constants & Regex helpers -------------------------------------------------

_HEADER_LEAD = r"^\s*(?:[-*>#]+\s*)?"
_HEADER_SUFFIX = r"(?:\s+(?:skills?|qualifications?|experience|requirements|technologies|tools))?"
_HEADER_TAIL = r"\s*(?:[:\-–]\s*(?P<rest>.*))?$"

REQUIRED_HEADER_RE = re.compile(
    _HEADER_LEAD
    + r"(?:required|requirements|must[\s-]haves?|mandatory|minimum\s+qualifications"
    r"|basic\s+qualifications|key\s+requirements|what\s+you(?:'ll|\s+will)?\s+need)"
    + _HEADER_SUFFIX
    + _HEADER_TAIL,
    re.IGNORECASE,
)
PREFERRED_HEADER_RE = re.compile(
    _HEADER_LEAD
    + r"(?:preferred|nice[\s-]to[\s-]haves?|good[\s-]to[\s-]haves?|bonus(?:\s+points)?|desired"
    r"|desirable|pluses)"
    + _HEADER_SUFFIX
    + _HEADER_TAIL,
    re.IGNORECASE,
)
BULLET_PREFIX_RE = re.compile(r"^\s*(?:[•●▪◦‣∙·*]|-\s|\d{1,2}[.)]\s)")
MARKDOWN_HEADING_RE = re.compile(r"^#{1,6}\s+\S")
HEADING_MAX_CHARS = 60
HEADING_MAX_WORDS = 6

TITLE_WEIGHTS = {"title": 0.30, "required": 0.45, "preferred": 0.15, "keyword": 0.10}
UNTITLED_WEIGHTS = {"title": 0.0, "required": 0.55, "preferred": 0.25, "keyword": 0.20}
ROLE_MISMATCH_FACTOR = 0.15
UNTITLED_CANDIDATE_CREDIT = 0.5
KEYWORD_MIN_LENGTH = 5

BAD_TITLE_THRESHOLD = 0.1
BAD_TITLE_CAP = 0.35
NO_REQUIRED_MATCH_CAP = 0.25
COMBINED_CAP = 0.15


@dataclass
class JDAnalysis:
    text: str = ""
    jd_title: str = ""
    required_skills: List[str] = field(default_factory=list)
    preferred_skills: List[str] = field(default_factory=list)
    all_jd_skills: List[str] = field(default_factory=list)
    required_text: str = ""
    preferred_text: str = ""
    has_sections: bool = False

    @property
    def is_empty(self) -> bool:
        return not self.text.strip()


@dataclass
class MatchResult:
    score: int = 0
    matched_skills: List[str] = field(default_factory=list)
    missing_skills: List[str] = field(default_factory=list)
    matched_preferred: List[str] = field(default_factory=list)
    missing_preferred: List[str] = field(default_factory=list)
    title_score: float = 0.0
    required_score: float = 0.0
    preferred_score: float = 0.0
    keyword_score: float = 0.0
    caps_applied: List[str] = field(default_factory=list)

    def apply_to(self, candidate: Candidate) -> Candidate:
        candidate.match_score = self.score
        candidate.matched_skills = list(self.matched_skills)
        candidate.missing_skills = list(self.missing_skills)
        candidate.matched_preferred = list(self.matched_preferred)
        candidate.missing_preferred = list(self.missing_preferred)
        return candidate


# --- JD analysis ---------------------------------------------------------------

def _looks_like_section_heading(line: str, lexicon: Lexicon) -> bool:
    if len(line) >= HEADING_MAX_CHARS or BULLET_PREFIX_RE.match(line):
        return False
    if MARKDOWN_HEADING_RE.match(line):
        return True
    if line.endswith(":") and len(line.split()) <= HEADING_MAX_WORDS:
        return True
    letters = [ch for ch in line if ch.isalpha()]
    # An all-caps skill list ("SQL, AWS") is content, not a heading.
    return len(letters) >= 3 and line.isupper() and "," not in line and not lexicon.find_skills(line)


def split_jd_sections(jd_text: str, lexicon: Optional[Lexicon] = None) -> Tuple[str, str, bool]:
    """Collect the text under required and preferred headers.

    Returns ``(required_text, preferred_text, headers_found)``.
    """
    lexicon = lexicon or default_lexicon()
    in_required = False
    in_preferred = False
    headers_found = False
    required: List[str] = []
    preferred: List[str] = []

    for raw_line in (jd_text or "").splitlines():
        line = raw_line.strip()
        if not line:
            continue

        required_match = REQUIRED_HEADER_RE.match(line)
        if required_match:
            in_required, in_preferred, headers_found = True, False, True
            if required_match.group("rest"):
                required.append(required_match.group("rest"))
            continue

        preferred_match = PREFERRED_HEADER_RE.match(line)
        if preferred_match:
            in_required, in_preferred, headers_found = False, True, True
            if preferred_match.group("rest"):
                preferred.append(preferred_match.group("rest"))
            continue

        if _looks_like_section_heading(line, lexicon):
            in_required = in_preferred = False
            continue

        if in_required:
            required.append(line)
        elif in_preferred:
            preferred.append(line)

    return "\n".join(required), "\n".join(preferred), headers_found


def analyze_jd(jd_text: str, lexicon: Optional[Lexicon] = None) -> JDAnalysis:
    lexicon = lexicon or default_lexicon()
    analysis = JDAnalysis(text=jd_text or "")
    if analysis.is_empty:
        return analysis

    required_text, preferred_text, headers_found = split_jd_sections(jd_text, lexicon)
    required = lexicon.find_skills(required_text)
    preferred = lexicon.find_skills(preferred_text)
    all_skills = lexicon.find_skills(jd_text)

    if not required and not preferred:
        # An unstructured JD is treated as entirely required.
        required = list(all_skills)

    analysis.jd_title = extract_title(jd_text, lexicon, has_name_line=False)
    analysis.required_skills = required
    analysis.preferred_skills = [skill for skill in preferred if skill not in required]
    analysis.all_jd_skills = all_skills
    analysis.required_text = required_text
    analysis.preferred_text = preferred_text
    analysis.has_sections = headers_found
    return analysis


# --- Scoring helpers -----------------------------------------------------------

def _content_words(text: str, lexicon: Lexicon) -> List[str]:
    words: List[str] = []
    for word in re.findall(r"[a-z0-9+#]+", text.lower()):
        if word not in lexicon.stop_words and word not in words:
            words.append(word)
    return words


def title_similarity(candidate_title: str, jd_title: str, candidate_text: str, lexicon: Lexicon) -> float:
    jd_lower = (jd_title or "").strip().lower()
    if not jd_lower:
        return 0.0
    candidate_lower = (candidate_title or "").strip().lower()
    if not candidate_lower:
        return UNTITLED_CANDIDATE_CREDIT if jd_lower in (candidate_text or "").lower() else 0.0

    if candidate_lower in jd_lower or jd_lower in candidate_lower:
        score = 1.0
    else:
        jd_words = _content_words(jd_lower, lexicon)
        candidate_words = set(_content_words(candidate_lower, lexicon))
        if jd_words:
            score = sum(1 for word in jd_words if word in candidate_words) / len(jd_words)
        else:
            score = 0.0

    jd_role = lexicon.core_role(jd_lower)
    candidate_role = lexicon.core_role(candidate_lower)
    if jd_role and candidate_role and jd_role != candidate_role:
        score *= ROLE_MISMATCH_FACTOR
    return score


def keyword_overlap(jd_text: str, candidate_text: str, lexicon: Lexicon) -> float:
    keywords = {
        word
        for word in re.split(r"\W+", (jd_text or "").lower())
        if len(word) >= KEYWORD_MIN_LENGTH and word not in lexicon.stop_words
    }
    if not keywords:
        return 0.0
    candidate_lower = (candidate_text or "").lower()
    return sum(1 for word in keywords if word in candidate_lower) / len(keywords)


def _ratio(hits: int, total: int) -> float:
    return hits / total if total else 0.0


# --- Match scoring -------------------------------------------------------------

def score_match(
    candidate_text: str,
    candidate_skills: Sequence[str],
    jd: JDAnalysis,
    lexicon: Optional[Lexicon] = None,
    candidate_title: Optional[str] = None,
) -> MatchResult:
    """Weighted title/required/preferred/keyword score with post-hoc caps."""
    if jd.is_empty:
        return MatchResult()

    lexicon = lexicon or default_lexicon()
    owned = {skill.strip().lower() for skill in candidate_skills if skill and skill.strip()}
    matched = [skill for skill in jd.required_skills if skill in owned]
    missing = [skill for skill in jd.required_skills if skill not in owned]
    matched_preferred = [skill for skill in jd.preferred_skills if skill in owned]
    missing_preferred = [skill for skill in jd.preferred_skills if skill not in owned]

    if candidate_title is None:
        candidate_title = extract_title(candidate_text or "", lexicon)

    has_jd_title = bool(jd.jd_title)
    weights = TITLE_WEIGHTS if has_jd_title else UNTITLED_WEIGHTS

    title_score = title_similarity(candidate_title, jd.jd_title, candidate_text, lexicon) if has_jd_title else 0.0
    required_score = _ratio(len(matched), len(jd.required_skills))
    preferred_score = _ratio(len(matched_preferred), len(jd.preferred_skills))
    keyword_score = keyword_overlap(jd.text, candidate_text, lexicon)

    combined = (
        weights["title"] * title_score
        + weights["required"] * required_score
        + weights["preferred"] * preferred_score
        + weights["keyword"] * keyword_score
    )

    caps: List[str] = []
    bad_title = has_jd_title and title_score < BAD_TITLE_THRESHOLD
    has_required = bool(jd.required_skills)

    if bad_title and combined > BAD_TITLE_CAP:
        combined = BAD_TITLE_CAP
        caps.append("title_mismatch")
    if has_required and not matched and combined > NO_REQUIRED_MATCH_CAP:
        combined = NO_REQUIRED_MATCH_CAP
        caps.append("no_required_skills")
    if bad_title and has_required and len(matched) <= 1 and combined > COMBINED_CAP:
        combined = COMBINED_CAP
        caps.append("title_and_skills_mismatch")

    score = max(0, min(100, int(round(combined * 100))))

    return MatchResult(
        score=score,
        matched_skills=matched,
        missing_skills=missing,
        matched_preferred=matched_preferred,
        missing_preferred=missing_preferred,
        title_score=round(title_score, 4),
        required_score=round(required_score, 4),
        preferred_score=round(preferred_score, 4),
        keyword_score=round(keyword_score, 4),
        caps_applied=caps,
    )


def match_candidate(candidate: Candidate, jd: JDAnalysis, lexicon: Optional[Lexicon] = None) -> MatchResult:
    return score_match(candidate.content, candidate.skill_list, jd, lexicon, candidate_title=candidate.title)


def rank_candidates(
    candidates: Sequence[Candidate],
    jd_text: str,
    lexicon: Optional[Lexicon] = None,
) -> List[Tuple[Candidate, MatchResult]]:
    """Score every candidate against one JD, best first (ties keep input order)."""
    lexicon = lexicon or default_lexicon()
    jd = analyze_jd(jd_text, lexicon)
    if jd.is_empty:
        return []
    results = [(candidate, match_candidate(candidate, jd, lexicon)) for candidate in candidates]
    results.sort(key=lambda pair: pair[1].score, reverse=True)
    return results
