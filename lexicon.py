"""Static reference vocabularies and the immutable lexicon built from them."""

import re
from dataclasses import dataclass, field
from functools import lru_cache
from itertools import product
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, List, Mapping, Optional, Pattern, Tuple

from skills import SKILL_LIST

# --- Job titles ------------------------------------------------------------------

TITLE_QUALIFIERS = (
    "senior", "sr", "junior", "jr", "lead", "staff", "principal", "chief",
    "head", "associate", "assistant", "trainee", "entry level",
)

TITLE_DOMAINS = (
    "software", "data", "cloud", "frontend", "front end", "backend", "back end",
    "full stack", "fullstack", "devops", "machine learning", "ml", "ai", "web",
    "mobile", "ios", "android", "qa", "test", "automation", "security",
    "network", "systems", "database", "business", "product", "project",
    "program", "marketing", "sales", "financial", "hr", "operations",
    "platform", "site reliability", "embedded", "ux", "ui", "graphic",
    "research", "solutions", "it", "technical", "application", "infrastructure",
)

CORE_ROLES = (
    "engineer", "developer", "analyst", "manager", "scientist", "architect",
    "designer", "consultant", "administrator", "specialist", "director",
    "programmer", "tester", "recruiter", "coordinator", "executive", "officer",
    "intern",
)

# Core roles that describe the same job; titles in one family never clash.
CORE_ROLE_FAMILIES = {
    "developer": "engineer",
    "programmer": "engineer",
}

IRREGULAR_TITLES = (
    "scrum master", "product owner", "tech lead", "team lead",
    "technical lead", "engineering manager", "vice president", "cto", "ceo",
    "cfo", "technical writer", "hr generalist", "talent acquisition specialist",
    "account manager", "customer success manager", "business development executive",
    "data entry operator", "accountant", "teacher", "nurse",
)

# --- Locations -------------------------------------------------------------------

US_STATES = {
    "alabama": "AL", "alaska": "AK", "arizona": "AZ", "arkansas": "AR",
    "california": "CA", "colorado": "CO", "connecticut": "CT", "delaware": "DE",
    "florida": "FL", "georgia": "GA", "hawaii": "HI", "idaho": "ID",
    "illinois": "IL", "indiana": "IN", "iowa": "IA", "kansas": "KS",
    "kentucky": "KY", "louisiana": "LA", "maine": "ME", "maryland": "MD",
    "massachusetts": "MA", "michigan": "MI", "minnesota": "MN",
    "mississippi": "MS", "missouri": "MO", "montana": "MT", "nebraska": "NE",
    "nevada": "NV", "new hampshire": "NH", "new jersey": "NJ",
    "new mexico": "NM", "new york": "NY", "north carolina": "NC",
    "north dakota": "ND", "ohio": "OH", "oklahoma": "OK", "oregon": "OR",
    "pennsylvania": "PA", "rhode island": "RI", "south carolina": "SC",
    "south dakota": "SD", "tennessee": "TN", "texas": "TX", "utah": "UT",
    "vermont": "VT", "virginia": "VA", "washington": "WA",
    "west virginia": "WV", "wisconsin": "WI", "wyoming": "WY",
    "district of columbia": "DC",
}

# US state codes that are also Indian state codes; they need a verified US city.
AMBIGUOUS_REGION_CODES = frozenset({"IN", "GA", "AR", "MN", "OR"})

TARGET_CITIES = frozenset({
    "New York", "New York City", "Los Angeles", "Chicago", "Houston", "Phoenix",
    "Philadelphia", "San Antonio", "San Diego", "Dallas", "San Jose", "Austin",
    "Jacksonville", "Fort Worth", "Columbus", "Charlotte", "San Francisco",
    "Indianapolis", "Seattle", "Denver", "Boston", "El Paso", "Nashville",
    "Detroit", "Oklahoma City", "Portland", "Las Vegas", "Memphis",
    "Louisville", "Baltimore", "Milwaukee", "Albuquerque", "Tucson", "Fresno",
    "Sacramento", "Kansas City", "Mesa", "Atlanta", "Omaha", "Colorado Springs",
    "Raleigh", "Long Beach", "Virginia Beach", "Miami", "Oakland",
    "Minneapolis", "Tulsa", "Tampa", "Arlington", "New Orleans", "Wichita",
    "Cleveland", "Bakersfield", "Aurora", "Anaheim", "Honolulu", "Santa Ana",
    "Riverside", "Corpus Christi", "Lexington", "Pittsburgh", "Anchorage",
    "Stockton", "Cincinnati", "Saint Paul", "St. Paul", "Toledo", "Newark",
    "Greensboro", "Plano", "Henderson", "Lincoln", "Buffalo", "Fort Wayne",
    "Jersey City", "Chula Vista", "Orlando", "St. Louis", "Saint Louis",
    "Madison", "Durham", "Lubbock", "Irvine", "Scottsdale", "Reno",
    "Boise", "Richmond", "Spokane", "Des Moines", "Salt Lake City",
    "Sunnyvale", "Mountain View", "Palo Alto", "Menlo Park", "Cupertino",
    "Redmond", "Bellevue", "Santa Clara", "Cambridge", "Hoboken",
    "Brooklyn", "Manhattan", "Ann Arbor", "Boulder", "Princeton",
})

EXCLUDED_CITIES = frozenset({
    "Mumbai", "Bombay", "Delhi", "New Delhi", "Bangalore", "Bengaluru",
    "Hyderabad", "Chennai", "Madras", "Kolkata", "Calcutta", "Pune",
    "Ahmedabad", "Jaipur", "Lucknow", "Kanpur", "Nagpur", "Indore", "Thane",
    "Bhopal", "Visakhapatnam", "Patna", "Vadodara", "Ghaziabad", "Ludhiana",
    "Agra", "Nashik", "Faridabad", "Meerut", "Rajkot", "Varanasi", "Noida",
    "Greater Noida", "Gurgaon", "Gurugram", "Chandigarh", "Coimbatore",
    "Kochi", "Cochin", "Thiruvananthapuram", "Trivandrum", "Mysore",
    "Mysuru", "Mangalore", "Bhubaneswar", "Guwahati", "Dehradun", "Surat",
    "Navi Mumbai", "Secunderabad",
})

OTHER_CITIES = frozenset({
    "London", "Manchester", "Birmingham", "Edinburgh", "Dublin", "Paris",
    "Berlin", "Munich", "Hamburg", "Frankfurt", "Amsterdam", "Rotterdam",
    "Brussels", "Zurich", "Geneva", "Vienna", "Madrid", "Barcelona", "Lisbon",
    "Rome", "Milan", "Stockholm", "Oslo", "Copenhagen", "Helsinki", "Warsaw",
    "Prague", "Toronto", "Vancouver", "Montreal", "Ottawa", "Calgary",
    "Sydney", "Melbourne", "Brisbane", "Auckland", "Singapore", "Tokyo",
    "Seoul", "Beijing", "Shanghai", "Hong Kong", "Dubai", "Abu Dhabi",
    "Karachi", "Lahore", "Dhaka", "Colombo", "Kathmandu", "Manila", "Jakarta",
    "Bangkok", "Kuala Lumpur", "Cairo", "Lagos", "Nairobi", "Johannesburg",
    "Cape Town", "Sao Paulo", "Mexico City", "Buenos Aires",
})

EXCLUDED_REGION_KEYWORDS = frozenset({
    "india", "bharat", "pincode", "pin code", "+91", "maharashtra",
    "karnataka", "tamil nadu", "telangana", "andhra pradesh", "kerala",
    "gujarat", "rajasthan", "uttar pradesh", "madhya pradesh", "west bengal",
    "haryana", "punjab", "odisha", "bihar", "ncr",
})

# --- Stop words ------------------------------------------------------------------

STOP_WORDS = frozenset({
    "the", "a", "an", "is", "are", "was", "were", "be", "been", "being",
    "have", "has", "had", "do", "does", "did", "will", "would", "could",
    "should", "may", "might", "shall", "can", "need", "to", "of", "in", "for",
    "on", "with", "at", "by", "from", "as", "into", "through", "during",
    "before", "after", "above", "below", "between", "out", "off", "over",
    "under", "again", "further", "then", "once", "here", "there", "when",
    "where", "why", "how", "all", "each", "every", "both", "few", "more",
    "most", "other", "some", "such", "no", "nor", "not", "only", "own",
    "same", "so", "than", "too", "very", "just", "now", "and", "but", "or",
    "if", "while", "about", "up", "it", "its", "they", "them", "their",
    "this", "that", "these", "those", "we", "you", "he", "she", "his", "her",
    "my", "your", "our", "what", "which", "who", "whom", "any", "also", "etc",
    "able", "must", "within", "across", "using", "including", "per",
    "ability", "work", "working", "experience", "experienced", "role",
    "position", "job", "candidate", "candidates", "looking", "required",
    "requirements", "preferred", "responsibilities", "responsible",
    "company", "team", "teams", "strong", "good", "well", "year", "years",
    "plus", "skills", "skill", "knowledge", "understanding", "excellent",
    "opportunity", "environment", "qualifications", "bonus", "ideal",
    "apply", "join", "looking", "senior", "junior",
})

_TITLE_WORD_RE = re.compile(r"[A-Za-z][A-Za-z+#.]*")

# One to four capitalised words, e.g. "San Francisco" or "St. Louis".
CITY_CAPTURE = r"(?P<city>[A-Z][A-Za-z.'\-]*(?:[ \t]+[A-Z][A-Za-z.'\-]*){0,3})"


def generate_job_titles(
    qualifiers: Iterable[str] = TITLE_QUALIFIERS,
    domains: Iterable[str] = TITLE_DOMAINS,
    roles: Iterable[str] = CORE_ROLES,
    irregular: Iterable[str] = IRREGULAR_TITLES,
) -> Tuple[str, ...]:
    """Cross qualifiers x domains x roles, dedupe, and sort longest-first."""
    qualifiers = tuple(qualifiers)
    domains = tuple(domains)
    roles = tuple(roles)
    titles = set(roles)
    titles.update(f"{domain} {role}" for domain, role in product(domains, roles))
    titles.update(f"{qual} {role}" for qual, role in product(qualifiers, roles))
    titles.update(
        f"{qual} {domain} {role}" for qual, domain, role in product(qualifiers, domains, roles)
    )
    titles.update(title.lower() for title in irregular)
    return tuple(sorted(titles, key=lambda title: (-len(title), title)))


NEVER_MATCHES = r"(?!)"


def _alternation(names: Iterable[str]) -> str:
    """Regex alternation, longest first; an empty table never matches."""
    ordered = sorted(set(names), key=lambda name: (-len(name), name))
    if not ordered:
        return NEVER_MATCHES
    return "|".join(re.escape(name) for name in ordered)


def _skill_pattern(skill: str) -> Pattern:
    # \b is unreliable next to ".", "+", "#" and "/", so those use containment.
    if re.fullmatch(r"[a-z0-9]+", skill):
        return re.compile(rf"\b{re.escape(skill)}\b")
    return re.compile(re.escape(skill))


@dataclass(frozen=True)
class Lexicon:
    skills: Tuple[str, ...]
    job_titles: Tuple[str, ...]
    core_roles: FrozenSet[str]
    core_role_families: Mapping[str, str]
    target_cities: FrozenSet[str]
    excluded_cities: FrozenSet[str]
    other_cities: FrozenSet[str]
    excluded_keywords: FrozenSet[str]
    region_abbreviations: Mapping[str, str]
    ambiguous_region_codes: FrozenSet[str]
    stop_words: FrozenSet[str]

    skill_patterns: Tuple[Tuple[str, Pattern], ...] = field(init=False, repr=False, compare=False)
    target_city_re: Pattern = field(init=False, repr=False, compare=False)
    excluded_city_re: Pattern = field(init=False, repr=False, compare=False)
    excluded_context_re: Pattern = field(init=False, repr=False, compare=False)
    region_name_re: Pattern = field(init=False, repr=False, compare=False)
    region_codes: FrozenSet[str] = field(init=False, repr=False, compare=False)
    _excluded_lower: FrozenSet[str] = field(init=False, repr=False, compare=False)
    _title_set: FrozenSet[str] = field(init=False, repr=False, compare=False)
    _max_title_words: int = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        set_attr = object.__setattr__
        set_attr(self, "skill_patterns", tuple((skill, _skill_pattern(skill)) for skill in self.skills))
        set_attr(self, "target_city_re", re.compile(rf"\b(?:{_alternation(self.target_cities)})\b"))
        set_attr(self, "excluded_city_re", re.compile(
            rf"\b(?:{_alternation(self.excluded_cities)})\b", re.IGNORECASE
        ))
        set_attr(self, "excluded_context_re", re.compile(
            rf"(?<![A-Za-z0-9])(?:{_alternation(self.excluded_keywords)})(?![A-Za-z0-9])",
            re.IGNORECASE,
        ))
        set_attr(self, "region_name_re", re.compile(
            rf"{CITY_CAPTURE}[ \t]*,[ \t]*(?P<region>(?i:{_alternation(self.region_abbreviations)}))\b"
        ))
        set_attr(self, "region_codes", frozenset(self.region_abbreviations.values()))
        set_attr(self, "_excluded_lower", frozenset(city.lower() for city in self.excluded_cities))
        set_attr(self, "_title_set", frozenset(self.job_titles))
        set_attr(self, "_max_title_words", max((len(t.split()) for t in self.job_titles), default=0))

    # --- Skills ------------------------------------------------------------------

    def find_skills(self, text: str) -> List[str]:
        """Return every lexicon skill mentioned in ``text``, in lexicon order."""
        if not text:
            return []
        lowered = text.lower()
        found: List[str] = []
        for skill, pattern in self.skill_patterns:
            if skill not in found and pattern.search(lowered):
                found.append(skill)
        return found

    # --- Titles ------------------------------------------------------------------

    def find_job_title(self, text: str, min_words: int = 1) -> str:
        """Leftmost, longest lexicon title in ``text`` with its original casing."""
        if not text or not self._max_title_words:
            return ""
        for line in text.splitlines():
            tokens = [
                (match.start(), match.end(), match.group().lower().rstrip("."))
                for match in _TITLE_WORD_RE.finditer(line)
            ]
            for start in range(len(tokens)):
                longest = min(self._max_title_words, len(tokens) - start)
                for size in range(longest, min_words - 1, -1):
                    window = tokens[start:start + size]
                    if not self._contiguous(line, window):
                        continue
                    if " ".join(token[2] for token in window) in self._title_set:
                        return line[window[0][0]:window[-1][1]].rstrip(".")
        return ""

    def is_job_title(self, text: str) -> bool:
        return bool(self.find_job_title(text))

    def core_role(self, title: str) -> Optional[str]:
        """The head role noun of a title (last one wins), folded by family."""
        role = None
        for word in re.findall(r"[a-z]+", title.lower()):
            if word in self.core_roles:
                role = word
        if role is None:
            return None
        return self.core_role_families.get(role, role)

    @staticmethod
    def _contiguous(line: str, window: List[Tuple[int, int, str]]) -> bool:
        for left, right in zip(window, window[1:]):
            gap = line[left[1]:right[0]]
            if gap.strip(" \t-"):
                return False
        return True

    # --- Locations ---------------------------------------------------------------

    def known_city(self, name: str) -> Optional[str]:
        """Which registry partition a city name belongs to, if any."""
        cleaned = name.strip()
        if cleaned in self.target_cities:
            return "target"
        if cleaned.lower() in self._excluded_lower:
            return "excluded"
        if cleaned in self.other_cities:
            return "other"
        return None

    def is_excluded_city(self, name: str) -> bool:
        return self.known_city(name) == "excluded"

    def has_excluded_context(self, text: str) -> bool:
        return bool(self.excluded_context_re.search(text) or self.excluded_city_re.search(text))

    def find_target_city(self, text: str) -> str:
        match = self.target_city_re.search(text)
        return match.group(0) if match else ""

    def region_code(self, region: str) -> str:
        """Abbreviation for a full region name or an existing code, else ''."""
        cleaned = region.strip()
        if cleaned.upper() in self.region_codes:
            return cleaned.upper()
        return self.region_abbreviations.get(cleaned.lower(), "")


def build_lexicon(
    skills: Iterable[str] = SKILL_LIST,
    job_titles: Optional[Iterable[str]] = None,
    core_roles: Iterable[str] = CORE_ROLES,
    core_role_families: Optional[Dict[str, str]] = None,
    target_cities: Iterable[str] = TARGET_CITIES,
    excluded_cities: Iterable[str] = EXCLUDED_CITIES,
    other_cities: Iterable[str] = OTHER_CITIES,
    excluded_keywords: Iterable[str] = EXCLUDED_REGION_KEYWORDS,
    region_abbreviations: Optional[Dict[str, str]] = None,
    ambiguous_region_codes: Iterable[str] = AMBIGUOUS_REGION_CODES,
    stop_words: Iterable[str] = STOP_WORDS,
) -> Lexicon:
    """Assemble a lexicon; any table can be substituted (tests, other markets)."""
    unique_skills: List[str] = []
    for skill in skills:
        label = skill.strip().lower()
        if label and label not in unique_skills:
            unique_skills.append(label)

    titles = generate_job_titles() if job_titles is None else tuple(
        sorted({t.lower() for t in job_titles}, key=lambda t: (-len(t), t))
    )
    families = CORE_ROLE_FAMILIES if core_role_families is None else core_role_families
    regions = US_STATES if region_abbreviations is None else region_abbreviations

    return Lexicon(
        skills=tuple(unique_skills),
        job_titles=titles,
        core_roles=frozenset(role.lower() for role in core_roles),
        core_role_families=MappingProxyType(dict(families)),
        target_cities=frozenset(target_cities),
        excluded_cities=frozenset(excluded_cities),
        other_cities=frozenset(other_cities),
        excluded_keywords=frozenset(k.lower() for k in excluded_keywords),
        region_abbreviations=MappingProxyType({k.lower(): v.upper() for k, v in regions.items()}),
        ambiguous_region_codes=frozenset(code.upper() for code in ambiguous_region_codes),
        stop_words=frozenset(stop_words),
    )


@lru_cache(maxsize=1)
def default_lexicon() -> Lexicon:
    """Build the shared lexicon once per process."""
    return build_lexicon()
