"""CSV / clipboard exports and contact links for candidate records."""

import csv
import io
import re
from typing import List, Sequence
from urllib.parse import quote

from models import Candidate

NOT_AVAILABLE = "N/A"
BASE_COLUMNS = ("Name", "Title", "Email", "Phone", "Location", "Experience", "Skills")
MATCH_COLUMN = "Match %"


def display(value: str) -> str:
    """Missing fields render as 'N/A'."""
    return value if value and value.strip() else NOT_AVAILABLE


def _has_match(candidates: Sequence[Candidate]) -> bool:
    return any(candidate.is_matched for candidate in candidates)


def export_columns(candidates: Sequence[Candidate]) -> List[str]:
    columns = list(BASE_COLUMNS)
    if _has_match(candidates):
        columns.append(MATCH_COLUMN)
    return columns


def _row(candidate: Candidate, include_match: bool) -> List[str]:
    row = [
        display(candidate.name),
        display(candidate.title),
        display(candidate.email),
        display(candidate.phone),
        display(candidate.location),
        display(candidate.experience),
        display(candidate.skills),
    ]
    if include_match:
        row.append(f"{candidate.match_score}%" if candidate.is_matched else NOT_AVAILABLE)
    return row


def to_csv(candidates: Sequence[Candidate]) -> str:
    """Every field double-quoted; embedded quotes are doubled (RFC 4180)."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    include_match = _has_match(candidates)
    writer.writerow(export_columns(candidates))
    for candidate in candidates:
        writer.writerow(_row(candidate, include_match))
    return buffer.getvalue()


def to_clipboard_text(candidates: Sequence[Candidate]) -> str:
    """Tab-separated table with one header row."""
    include_match = _has_match(candidates)
    lines = ["\t".join(export_columns(candidates))]
    for candidate in candidates:
        cells = [re.sub(r"[\t\r\n]+", " ", cell) for cell in _row(candidate, include_match)]
        lines.append("\t".join(cells))
    return "\n".join(lines)


# --- Contact links -------------------------------------------------------------

def mailto_uri(email: str) -> str:
    email = (email or "").strip()
    return f"mailto:{quote(email, safe='@.+-_')}" if email else ""


def _dial_string(phone: str) -> str:
    phone = (phone or "").strip()
    digits = re.sub(r"\D", "", phone)
    if not digits:
        return ""
    return ("+" + digits) if phone.startswith("+") else digits


def tel_uri(phone: str) -> str:
    dial = _dial_string(phone)
    return f"tel:{dial}" if dial else ""


def whatsapp_uri(phone: str) -> str:
    digits = _dial_string(phone).lstrip("+")
    return f"https://wa.me/{digits}" if digits else ""


def contact_links(candidate: Candidate) -> dict:
    return {
        "mailto": mailto_uri(candidate.email),
        "tel": tel_uri(candidate.phone),
        "whatsapp": whatsapp_uri(candidate.phone),
    }
