import dataclasses

import pytest

from extractors import extract_location
from lexicon import build_lexicon, default_lexicon, generate_job_titles


def test_generated_titles_are_deduplicated_and_longest_first():
    titles = generate_job_titles(
        qualifiers=("senior",),
        domains=("data",),
        roles=("engineer",),
        irregular=("Scrum Master", "engineer"),
    )
    assert titles[0] == "senior data engineer"
    assert set(titles) == {"senior data engineer", "senior engineer", "data engineer", "scrum master", "engineer"}
    assert len(titles) == len(set(titles))


def test_find_job_title_prefers_longest_phrase_and_keeps_casing():
    lexicon = default_lexicon()
    assert lexicon.find_job_title("Worked as a Senior Data Engineer at Acme") == "Senior Data Engineer"


def test_find_job_title_min_words_skips_bare_role():
    lexicon = default_lexicon()
    assert lexicon.find_job_title("Reported to the Manager", min_words=2) == ""
    assert lexicon.find_job_title("Reported to the Manager") == "Manager"


def test_core_role_folds_families():
    lexicon = default_lexicon()
    assert lexicon.core_role("Senior Software Developer") == "engineer"
    assert lexicon.core_role("Marketing Manager") == "manager"
    assert lexicon.core_role("Scrum Master") is None


def test_find_skills_handles_punctuated_and_multi_word_labels():
    lexicon = default_lexicon()
    found = lexicon.find_skills("Python, C++ and .NET; machine learning")
    assert found == ["python", "c++", ".net", "machine learning"]


def test_find_skills_uses_word_boundaries_for_single_tokens():
    lexicon = default_lexicon()
    assert "sql" not in lexicon.find_skills("PostgreSQL administrator")
    assert "excel" not in lexicon.find_skills("excellent communicator")


def test_build_lexicon_normalizes_and_dedupes_skills():
    lexicon = build_lexicon(skills=["Python", "python", " SQL "])
    assert lexicon.skills == ("python", "sql")
    assert lexicon.find_skills("sql and python") == ["python", "sql"]


def test_default_lexicon_is_shared_and_immutable():
    lexicon = default_lexicon()
    assert default_lexicon() is lexicon
    with pytest.raises(dataclasses.FrozenInstanceError):
        lexicon.skills = ()
    with pytest.raises(TypeError):
        lexicon.region_abbreviations["atlantis"] = "AT"


def test_region_code_lookup():
    lexicon = default_lexicon()
    assert lexicon.region_code("Texas") == "TX"
    assert lexicon.region_code("ny") == "NY"
    assert lexicon.region_code("Atlantis") == ""


def test_empty_tables_never_match():
    lexicon = build_lexicon(excluded_cities=(), excluded_keywords=(), region_abbreviations={})
    assert not lexicon.has_excluded_context("Sam Lee\nRelocated to Denver last year")
    assert lexicon.region_name_re.search("Austin, Texas") is None
    assert extract_location("Sam Lee\nRelocated to Denver last year", lexicon) == "Denver"


def test_excluded_context_detection():
    lexicon = default_lexicon()
    assert lexicon.has_excluded_context("Contact: +91 98765 43210")
    assert lexicon.has_excluded_context("Based in Bengaluru")
    assert not lexicon.has_excluded_context("Indianapolis, Indiana")
