from extractors import extract_title

HOBBIES = "\n".join(f"Hobby line {i}" for i in range(1, 9))


def test_labelled_title_drops_description_suffix():
    text = "Jane Doe\nTitle: Senior Data Engineer Description: builds pipelines"
    assert extract_title(text) == "Senior Data Engineer"


def test_short_unrecognised_label_is_accepted():
    assert extract_title("Jane Doe\nRole: Growth Hacker") == "Growth Hacker"


def test_long_unrecognised_label_is_ignored():
    text = "Jane Doe\nRole: I did many different things across a whole lot of companies over time"
    assert extract_title(text) == ""


def test_header_segment_is_returned_whole_when_short():
    text = "Jane Doe\njane@x.com\nSenior Software Engineer | Cloud Enthusiast"
    assert extract_title(text) == "Senior Software Engineer"


def test_header_long_line_returns_matched_span():
    text = "Jane Doe\nI have spent years working as a Backend Developer for fintech startups worldwide"
    assert extract_title(text) == "Backend Developer"


def test_header_never_accepts_unrecognised_text():
    assert extract_title("Jane Doe\nPassionate about building things") == ""


def test_summary_section():
    text = (
        "Jane Doe\njane@x.com\n555-123-4567\nAustin, TX\nGitHub: github.com/jane\n"
        "Portfolio site\nReader of books\nCoffee lover\nSUMMARY\n"
        "Data Analyst with 4 years in retail analytics."
    )
    assert extract_title(text) == "Data Analyst"


def test_narrative_phrase():
    text = f"Jane Doe\n{HOBBIES}\nHighly skilled Golang engineer building APIs."
    assert extract_title(text) == "Golang Engineer"


def test_document_scan_needs_multi_word_title():
    text = f"Jane Doe\n{HOBBIES}\nPreviously worked as Site Reliability Engineer at Acme"
    assert extract_title(text) == "Site Reliability Engineer"
    assert extract_title(f"Jane Doe\n{HOBBIES}\nReported to the Manager weekly") == ""


def test_job_description_title_uses_first_line():
    assert extract_title("Senior Data Engineer\nWe need a builder", has_name_line=False) == "Senior Data Engineer"
