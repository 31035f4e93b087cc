"""Batch resume ingestion and bulk job-description matching."""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from analyzer import JDAnalysis, analyze_jd, match_candidate
from extractors import parse_resume
from lexicon import Lexicon, default_lexicon
from models import Candidate
from parser import TextExtractionError, UnsupportedFileTypeError, extract_text, is_supported
from store import CandidateStore

logger = logging.getLogger(__name__)

TextExtractor = Callable[[bytes, str], str]


@dataclass
class BatchSummary:
    candidates: List[Candidate] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)
    reasons: Dict[str, str] = field(default_factory=dict)

    @property
    def success_count(self) -> int:
        return len(self.candidates)

    @property
    def failure_count(self) -> int:
        return len(self.failed)

    def record_failure(self, filename: str, reason: str) -> None:
        self.failed.append(filename)
        self.reasons[filename] = reason

    def message(self) -> str:
        text = f"{self.success_count} resume(s) uploaded"
        if self.failed:
            text += f", {self.failure_count} failed: {', '.join(self.failed)}"
        return text

    def to_dict(self) -> Dict[str, object]:
        return {
            "success_count": self.success_count,
            "failed": list(self.failed),
            "reasons": dict(self.reasons),
            "message": self.message(),
            "candidates": [candidate.to_dict() for candidate in self.candidates],
        }


def ingest_files(
    files: Iterable[Tuple[str, bytes]],
    store: CandidateStore,
    extractor: TextExtractor = extract_text,
    lexicon: Optional[Lexicon] = None,
    max_bytes: Optional[int] = None,
) -> BatchSummary:
    """Parse and persist each ``(filename, data)`` pair, strictly one at a time.

    A failing file is recorded in the summary and never stops the batch.
    """
    lexicon = lexicon or default_lexicon()
    summary = BatchSummary()

    for filename, data in files:
        if not is_supported(filename):
            logger.warning("Skipping %s: unsupported file type", filename)
            summary.record_failure(filename, "unsupported file type")
            continue
        if max_bytes is not None and len(data) > max_bytes:
            logger.warning("Skipping %s: %d bytes exceeds limit of %d", filename, len(data), max_bytes)
            summary.record_failure(filename, "file too large")
            continue

        try:
            text = extractor(data, filename)
        except (UnsupportedFileTypeError, TextExtractionError) as exc:
            logger.warning("Skipping %s: %s", filename, exc)
            summary.record_failure(filename, str(exc))
            continue
        except Exception as exc:
            logger.exception("Unexpected error extracting %s", filename)
            summary.record_failure(filename, f"extraction error: {exc}")
            continue

        if not text or not text.strip():
            logger.warning("Skipping %s: no text could be extracted", filename)
            summary.record_failure(filename, "no text extracted")
            continue

        try:
            candidate = parse_resume(text, file_name=filename, lexicon=lexicon)
            store.append(candidate)
        except OSError as exc:
            logger.exception("Could not save %s", filename)
            summary.record_failure(filename, f"could not save: {exc}")
            continue
        except Exception as exc:
            logger.exception("Unexpected error parsing %s", filename)
            summary.record_failure(filename, f"parse error: {exc}")
            continue

        summary.candidates.append(candidate)
        logger.debug("Parsed %s as %s", filename, candidate.name)

    logger.info("Batch finished: %s", summary.message())
    return summary


def clear_job_description(store: CandidateStore) -> List[Candidate]:
    candidates = store.get_all()
    for candidate in candidates:
        candidate.clear_match()
    store.replace_all(candidates)
    return candidates


def apply_job_description(
    store: CandidateStore,
    jd_text: str,
    lexicon: Optional[Lexicon] = None,
) -> Tuple[JDAnalysis, List[Candidate]]:
    """Score every stored candidate against ``jd_text`` and persist the match fields.

    Returns the analysis and the candidates best-first. A blank JD clears
    all match fields instead.
    """
    lexicon = lexicon or default_lexicon()
    analysis = analyze_jd(jd_text, lexicon)
    if analysis.is_empty:
        return analysis, clear_job_description(store)

    candidates = store.get_all()
    for candidate in candidates:
        match_candidate(candidate, analysis, lexicon).apply_to(candidate)
    store.replace_all(candidates)
    logger.info(
        "Matched %d candidate(s) against JD (%d required, %d preferred skills)",
        len(candidates),
        len(analysis.required_skills),
        len(analysis.preferred_skills),
    )
    return analysis, sorted(candidates, key=lambda c: c.match_score or 0, reverse=True)


def filter_candidates(
    candidates: Sequence[Candidate],
    name: str = "",
    email: str = "",
    skills: str = "",
) -> List[Candidate]:
    """Case-insensitive substring filters; every listed skill must be present."""
    name = name.strip().lower()
    email = email.strip().lower()
    wanted_skills = [skill.strip().lower() for skill in skills.split(",") if skill.strip()]

    filtered: List[Candidate] = []
    for candidate in candidates:
        if name and name not in candidate.name.lower():
            continue
        if email and email not in candidate.email.lower():
            continue
        owned = candidate.skills.lower()
        if any(skill not in owned for skill in wanted_skills):
            continue
        filtered.append(candidate)
    return filtered
