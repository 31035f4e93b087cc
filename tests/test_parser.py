import io

import docx
import pytest

from parser import (
    TextExtractionError,
    UnsupportedFileTypeError,
    extract_text,
    is_supported,
    normalize_extension,
)


def test_extension_normalisation():
    assert normalize_extension("Resume.PDF") == ".pdf"
    assert normalize_extension("docx") == ".docx"
    assert normalize_extension(".txt") == ".txt"
    assert is_supported("cv.docx")
    assert not is_supported("cv.png")


def test_txt_is_decoded_and_normalised():
    text = extract_text("Jane Doe  \r\n• Python\r\n".encode("utf-8"), "resume.txt")
    assert text == "Jane Doe\n- Python\n"


def test_unsupported_type_raises():
    with pytest.raises(UnsupportedFileTypeError):
        extract_text(b"data", "photo.png")


def test_docx_paragraphs():
    document = docx.Document()
    document.add_paragraph("Jane Doe")
    document.add_paragraph("Python, SQL")
    buffer = io.BytesIO()
    document.save(buffer)

    text = extract_text(buffer.getvalue(), ".docx")
    assert text.splitlines()[:2] == ["Jane Doe", "Python, SQL"]


def test_broken_docx_raises_extraction_error():
    with pytest.raises(TextExtractionError):
        extract_text(b"not a zip archive", "cv.docx")


def test_broken_pdf_never_leaks_backend_errors():
    try:
        text = extract_text(b"not a pdf", "cv.pdf")
    except TextExtractionError:
        return
    assert not text.strip()


def test_normalisation_folds_glyphs_and_collapses_blank_runs():
    raw = "Jane Doe\t\r\r\n\n\n\u25e6 Led \u2013 shipped\n\ufeffDone".encode("utf-8")
    assert extract_text(raw, ".txt") == "Jane Doe\n\n- Led - shipped\nDone"
