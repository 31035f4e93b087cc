import pytest

from ingest import apply_job_description, clear_job_description, filter_candidates, ingest_files
from lexicon import default_lexicon
from models import Candidate
from parser import TextExtractionError
from store import CandidateStore

JANE = b"Jane Doe\njane@x.com\nData Engineer\nPython, SQL, AWS"
JOHN = b"John Roe\njohn@x.com\nMarketing Manager\nExcel and Salesforce"


@pytest.fixture
def store():
    return CandidateStore()


def test_blank_file_fails_without_stopping_the_batch(store):
    summary = ingest_files([("a.txt", JANE), ("b.txt", b"   \n  "), ("c.txt", JOHN)], store)
    assert summary.success_count == 2
    assert summary.failed == ["b.txt"]
    assert summary.reasons["b.txt"] == "no text extracted"
    assert [c.name for c in store.get_all()] == ["Jane Doe", "John Roe"]
    assert summary.message() == "2 resume(s) uploaded, 1 failed: b.txt"


def test_unsupported_and_oversized_files(store):
    summary = ingest_files([("photo.png", b"..."), ("big.txt", JANE)], store, max_bytes=10)
    assert summary.success_count == 0
    assert summary.reasons == {"photo.png": "unsupported file type", "big.txt": "file too large"}
    assert len(store) == 0


def test_extractor_errors_are_recorded(store):
    def flaky(data, filename):
        if filename == "broken.pdf":
            raise TextExtractionError("bad xref table")
        if filename == "weird.docx":
            raise RuntimeError("boom")
        return data.decode("utf-8")

    summary = ingest_files(
        [("broken.pdf", b""), ("weird.docx", b""), ("ok.txt", JANE)],
        store,
        extractor=flaky,
    )
    assert summary.success_count == 1
    assert summary.reasons["broken.pdf"] == "bad xref table"
    assert summary.reasons["weird.docx"] == "extraction error: boom"


def test_save_failures_are_recorded_per_file(tmp_path):
    # A directory as the store path makes every write fail.
    unwritable = CandidateStore(str(tmp_path))
    summary = ingest_files([("jane.txt", JANE), ("john.txt", JOHN)], unwritable)
    assert summary.success_count == 0
    assert summary.failed == ["jane.txt", "john.txt"]
    assert summary.reasons["jane.txt"].startswith("could not save:")
    assert len(unwritable) == 0


def test_ingested_candidates_keep_file_names(store):
    summary = ingest_files([("jane.txt", JANE)], store)
    candidate = summary.candidates[0]
    assert candidate.file_name == "jane.txt"
    assert candidate.content == JANE.decode("utf-8")
    assert summary.to_dict()["candidates"][0]["name"] == "Jane Doe"


def test_apply_job_description_ranks_and_persists(store):
    ingest_files([("john.txt", JOHN), ("jane.txt", JANE)], store)
    analysis, ranked = apply_job_description(store, "Data Engineer\nRequired:\nPython, SQL", default_lexicon())

    assert analysis.required_skills == ["python", "sql"]
    assert [c.name for c in ranked] == ["Jane Doe", "John Roe"]
    jane = next(c for c in store.get_all() if c.name == "Jane Doe")
    assert jane.matched_skills == ["python", "sql"]
    assert jane.missing_skills == []
    assert jane.match_score > 0


def test_blank_job_description_clears_matches(store):
    ingest_files([("jane.txt", JANE)], store)
    apply_job_description(store, "Required:\nPython")
    assert store.get_all()[0].is_matched

    analysis, candidates = apply_job_description(store, "   ")
    assert analysis.is_empty
    assert candidates[0].match_score is None


def test_clear_job_description(store):
    store.append(Candidate(name="Jane", match_score=40, matched_skills=["python"]))
    clear_job_description(store)
    candidate = store.get_all()[0]
    assert candidate.match_score is None
    assert candidate.matched_skills is None


def test_filter_candidates():
    jane = Candidate(name="Jane Doe", email="jane@x.com", skills="python, sql, aws")
    john = Candidate(name="John Roe", email="john@y.org", skills="excel, salesforce")
    people = [jane, john]

    assert filter_candidates(people, name="jane") == [jane]
    assert filter_candidates(people, email="Y.ORG") == [john]
    assert filter_candidates(people, skills="python, aws") == [jane]
    assert filter_candidates(people, skills="python, excel") == []
    assert filter_candidates(people) == people
