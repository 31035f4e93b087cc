# api.py (rule-based ATS backend)
import logging
from typing import Dict, List

from fastapi import Depends, FastAPI, File, Form, HTTPException, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse, Response

from config import configure_logging, get_settings
from export import contact_links, to_clipboard_text, to_csv
from formatter import format_resume
from ingest import apply_job_description, clear_job_description, filter_candidates, ingest_files
from lexicon import default_lexicon
from models import Candidate
from store import CandidateStore

settings = get_settings()
configure_logging(settings)
logger = logging.getLogger(__name__)

app = FastAPI(title="ATS Resume Ranker")
app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

STORE = CandidateStore(settings.store_path)


def get_store() -> CandidateStore:
    return STORE


def _ranked(candidates: List[Candidate]) -> List[Candidate]:
    if any(candidate.is_matched for candidate in candidates):
        return sorted(candidates, key=lambda c: c.match_score or 0, reverse=True)
    return candidates


def _visible(store: CandidateStore, name: str, email: str, skills: str) -> List[Candidate]:
    return _ranked(filter_candidates(store.get_all(), name=name, email=email, skills=skills))


def _require(store: CandidateStore, candidate_id: str) -> Candidate:
    candidate = store.get(candidate_id)
    if candidate is None:
        raise HTTPException(status_code=404, detail=f"Candidate {candidate_id} not found")
    return candidate


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.post("/candidates/upload")
async def upload_resumes(
    files: List[UploadFile] = File(...),
    store: CandidateStore = Depends(get_store),
):
    payloads = []
    for upload in files:
        payloads.append((upload.filename or "unnamed", await upload.read()))
    summary = ingest_files(
        payloads,
        store,
        lexicon=default_lexicon(),
        max_bytes=settings.max_upload_bytes,
    )
    return summary.to_dict()


@app.get("/candidates")
async def list_candidates(
    name: str = "",
    email: str = "",
    skills: str = "",
    store: CandidateStore = Depends(get_store),
):
    visible = _visible(store, name, email, skills)
    return {"total": len(store), "count": len(visible), "candidates": [c.to_dict() for c in visible]}


@app.get("/candidates/{candidate_id}")
async def get_candidate(candidate_id: str, store: CandidateStore = Depends(get_store)):
    return _require(store, candidate_id).to_dict()


@app.get("/candidates/{candidate_id}/sections")
async def get_candidate_sections(candidate_id: str, store: CandidateStore = Depends(get_store)):
    candidate = _require(store, candidate_id)
    return {"id": candidate.id, "lines": [line._asdict() for line in format_resume(candidate.content)]}


@app.get("/candidates/{candidate_id}/links")
async def get_candidate_links(candidate_id: str, store: CandidateStore = Depends(get_store)) -> Dict[str, str]:
    return contact_links(_require(store, candidate_id))


@app.delete("/candidates/{candidate_id}")
async def delete_candidate(candidate_id: str, store: CandidateStore = Depends(get_store)):
    if not store.delete(candidate_id):
        raise HTTPException(status_code=404, detail=f"Candidate {candidate_id} not found")
    return {"deleted": candidate_id}


@app.delete("/candidates")
async def delete_all_candidates(store: CandidateStore = Depends(get_store)):
    removed = len(store)
    store.clear()
    return {"deleted": removed}


@app.post("/match")
async def match_job_description(
    jd_text: str = Form(""),
    store: CandidateStore = Depends(get_store),
):
    analysis, ranked = apply_job_description(store, jd_text, default_lexicon())
    return {
        "jd": {
            "title": analysis.jd_title,
            "required_skills": analysis.required_skills,
            "preferred_skills": analysis.preferred_skills,
            "all_skills": analysis.all_jd_skills,
            "has_sections": analysis.has_sections,
        },
        "candidates": [candidate.to_dict() for candidate in ranked],
    }


@app.delete("/match")
async def clear_match(store: CandidateStore = Depends(get_store)):
    cleared = clear_job_description(store)
    return {"cleared": len(cleared)}


@app.get("/export/csv")
async def export_csv(
    name: str = "",
    email: str = "",
    skills: str = "",
    store: CandidateStore = Depends(get_store),
):
    content = to_csv(_visible(store, name, email, skills))
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="candidates.csv"'},
    )


@app.get("/export/clipboard", response_class=PlainTextResponse)
async def export_clipboard(
    name: str = "",
    email: str = "",
    skills: str = "",
    store: CandidateStore = Depends(get_store),
):
    return to_clipboard_text(_visible(store, name, email, skills))
