import json
import logging
import os
from typing import List, Optional

from models import Candidate

logger = logging.getLogger(__name__)


class CandidateStore:
    """Candidate records keyed by id, optionally mirrored to a JSON file.

    Every mutation rewrites the whole file (last write wins). A missing or
    unreadable file simply starts the store empty.
    """

    def __init__(self, path: Optional[str] = None):
        self.path = path
        self._records: List[Candidate] = self._load()

    def _load(self) -> List[Candidate]:
        if not self.path or not os.path.exists(self.path):
            return []
        try:
            with open(self.path, "r", encoding="utf-8") as handle:
                payload = json.load(handle)
        except (OSError, ValueError) as exc:
            logger.warning("Could not read candidate store %s, starting empty: %s", self.path, exc)
            return []
        if not isinstance(payload, list):
            logger.warning("Candidate store %s is not a list, starting empty", self.path)
            return []
        return [Candidate.from_dict(item) for item in payload if isinstance(item, dict)]

    def _save(self, records: List[Candidate]) -> None:
        if not self.path:
            return
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as handle:
            json.dump([candidate.to_dict() for candidate in records], handle, indent=2)

    def _commit(self, records: List[Candidate]) -> None:
        # Memory only changes once the file write went through.
        self._save(records)
        self._records = records

    def get_all(self) -> List[Candidate]:
        return list(self._records)

    def get(self, candidate_id: str) -> Optional[Candidate]:
        return next((c for c in self._records if c.id == candidate_id), None)

    def append(self, candidate: Candidate) -> None:
        self._commit(self._records + [candidate])

    def replace_all(self, candidates: List[Candidate]) -> None:
        self._commit(list(candidates))

    def delete(self, candidate_id: str) -> bool:
        remaining = [c for c in self._records if c.id != candidate_id]
        removed = len(remaining) != len(self._records)
        if removed:
            self._commit(remaining)
        return removed

    def clear(self) -> None:
        self._commit([])

    def __len__(self) -> int:
        return len(self._records)
