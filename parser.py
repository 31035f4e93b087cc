import io
import logging
import os
import re
from typing import List

import docx
import fitz  # PyMuPDF
from pdfminer.high_level import extract_text as pdfminer_extract_text

PDF_TEXT_MIN_LENGTH = 80  # Heuristic threshold to trigger the pdfminer fallback
SUPPORTED_EXTENSIONS = (".pdf", ".docx", ".txt")

logger = logging.getLogger(__name__)


class UnsupportedFileTypeError(ValueError):
    """The file extension is not one we can read."""


class TextExtractionError(RuntimeError):
    """The file looked supported but could not be decoded."""


def normalize_extension(name_or_ext: str) -> str:
    """'resume.PDF', 'pdf' and '.pdf' all become '.pdf'."""
    ext = os.path.splitext(name_or_ext)[1] or name_or_ext
    ext = ext.strip().lower()
    if ext and not ext.startswith("."):
        ext = "." + ext
    return ext


def is_supported(name_or_ext: str) -> bool:
    return normalize_extension(name_or_ext) in SUPPORTED_EXTENSIONS


def extract_text(data: bytes, extension: str) -> str:
    """Extract text from PDF, DOCX, or TXT bytes."""
    ext = normalize_extension(extension)
    if ext not in SUPPORTED_EXTENSIONS:
        raise UnsupportedFileTypeError(f"Unsupported file type: {extension or '(none)'}")

    try:
        if ext == ".pdf":
            text = _extract_pdf_text(data)
        elif ext == ".docx":
            text = _extract_docx_text(data)
        else:
            text = _extract_txt_text(data)
    except TextExtractionError:
        raise
    except Exception as exc:
        raise TextExtractionError(f"Could not read {ext} content: {exc}") from exc

    return _normalize_text(text)


def _extract_pdf_text(data: bytes) -> str:
    """Attempt PyMuPDF page text, then its block layout, then pdfminer."""
    text = ""
    try:
        with fitz.open(stream=data, filetype="pdf") as doc:
            text = "\n".join(page.get_text("text", sort=True) for page in doc)

            if len(text.strip()) < PDF_TEXT_MIN_LENGTH:
                block_chunks: List[str] = []
                for page in doc:
                    for block in page.get_text("blocks"):
                        block_text = block[4]
                        if block_text:
                            block_chunks.append(block_text.strip())
                alt_text = "\n".join(block_chunks)
                if len(alt_text.strip()) > len(text.strip()):
                    text = alt_text
    except Exception as exc:
        logger.warning("PyMuPDF could not open PDF, trying pdfminer: %s", exc)

    if len(text.strip()) < PDF_TEXT_MIN_LENGTH:
        try:
            text = pdfminer_extract_text(io.BytesIO(data)) or text
        except Exception as exc:
            if not text.strip():
                raise TextExtractionError(f"Unable to extract text from PDF: {exc}") from exc
            logger.warning("pdfminer fallback failed, keeping PyMuPDF output: %s", exc)

    if len(text.strip()) < PDF_TEXT_MIN_LENGTH:
        logger.warning("PDF text extraction produced < %s characters", PDF_TEXT_MIN_LENGTH)
    return text


def _extract_docx_text(data: bytes) -> str:
    document = docx.Document(io.BytesIO(data))
    return "\n".join(para.text for para in document.paragraphs)


def _extract_txt_text(data: bytes) -> str:
    return data.decode("utf-8", errors="replace")


# Bullet glyphs and dashes fold to "-" so the formatter and JD section rules
# see one bullet shape.
_ASCII_FOLD = str.maketrans({
    "\u2022": "-",
    "\u25e6": "-",
    "\uf0b7": "-",
    "\u2013": "-",
    "\u2014": "-",
    "\u2019": "'",
    "\u201c": '"',
    "\u201d": '"',
    "\u00a0": " ",
    "\u00ad": "",
    "\ufeff": "",
})
_BLANK_RUN_RE = re.compile(r"\n{3,}")


def _normalize_text(text: str) -> str:
    """LF line endings, no trailing blanks, at most one empty line in a row."""
    lines = text.translate(_ASCII_FOLD).replace("\r\n", "\n").replace("\r", "\n").split("\n")
    return _BLANK_RUN_RE.sub("\n\n", "\n".join(line.rstrip(" \t") for line in lines))
