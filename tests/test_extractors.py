from extractors import (
    UNKNOWN_CANDIDATE,
    extract_email,
    extract_experience,
    extract_fields,
    extract_name,
    extract_phone,
    extract_skills,
    parse_resume,
)
from lexicon import default_lexicon

JANE = (
    "Jane Doe\n"
    "jane.doe@email.com\n"
    "(415) 555-0199\n"
    "San Francisco, CA\n"
    "5+ years Python, AWS, React experience"
)


def test_parses_a_typical_header_block():
    fields = extract_fields(JANE, default_lexicon())
    assert fields["name"] == "Jane Doe"
    assert fields["email"] == "jane.doe@email.com"
    assert fields["phone"] == "(415) 555-0199"
    assert fields["location"] == "San Francisco, CA"
    assert fields["experience"] == "5+ years"
    skills = fields["skills"].split(", ")
    for skill in ("python", "aws", "react"):
        assert skill in skills


def test_name_strips_contact_details_and_separators():
    assert extract_name("John Smith | john@x.com | +1 415 555 0199\nEngineer") == "John Smith"


def test_name_falls_back_when_missing():
    assert extract_name("") == UNKNOWN_CANDIDATE
    assert extract_name("\n\n   \n") == UNKNOWN_CANDIDATE
    assert extract_name("A") == UNKNOWN_CANDIDATE


def test_name_is_truncated():
    assert len(extract_name("X" * 100)) == 60


def test_email_keeps_plus_tags_and_subdomains():
    assert extract_email("Contact: first.last+tag@sub.example.co.uk today") == "first.last+tag@sub.example.co.uk"
    assert extract_email("no address here") == ""


def test_phone_prefers_international_format():
    assert extract_phone("Phone: 555-123-4567 or +1 (415) 555-0199") == "+1 (415) 555-0199"


def test_phone_recognises_indian_mobile_format():
    assert extract_phone("Mobile +91 98765 43210") == "+91 98765 43210"


def test_phone_ignores_year_ranges():
    assert extract_phone("Acme Corp 2015 - 2019") == ""


def test_phone_never_spans_lines():
    assert extract_phone("Jane Doe\nAcme Corp\n2015 - 2019\n2019 - 2022 Beta Inc") == ""
    assert extract_phone("Ref 415\n555 0199") == ""


def test_experience_phrases():
    assert extract_experience("Over 10+ Years of experience") == "10+ Years"
    assert extract_experience("Signed a 3 year contract") == "3 year"
    assert extract_experience("no numbers at all") == ""


def test_skills_respect_word_boundaries():
    skills = extract_skills("Built REST APIs with FastAPI and PostgreSQL on AWS").split(", ")
    for skill in ("rest api", "fastapi", "postgresql", "aws"):
        assert skill in skills
    assert "sql" not in skills


def test_extraction_is_deterministic():
    lexicon = default_lexicon()
    assert extract_fields(JANE, lexicon) == extract_fields(JANE, lexicon)


def test_adding_a_skill_never_removes_others():
    lexicon = default_lexicon()
    before = set(extract_skills(JANE, lexicon).split(", "))
    after = set(extract_skills(JANE + "\nStreaming with Kafka", lexicon).split(", "))
    assert before <= after
    assert "kafka" in after


def test_parse_resume_builds_an_unmatched_candidate():
    first = parse_resume(JANE, file_name="jane.pdf")
    second = parse_resume(JANE, file_name="jane.pdf")
    assert first.content == JANE
    assert first.file_name == "jane.pdf"
    assert first.name == "Jane Doe"
    assert first.match_score is None
    assert first.matched_skills is None
    assert first.id != second.id


def test_parse_resume_tolerates_garbage():
    candidate = parse_resume("\x00\x01 ::: ---")
    assert candidate.email == ""
    assert candidate.phone == ""
    assert candidate.skills == ""
