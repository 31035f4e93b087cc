import csv
import io

from export import contact_links, export_columns, mailto_uri, tel_uri, to_clipboard_text, to_csv, whatsapp_uri
from models import Candidate


def _jane(**overrides):
    values = dict(name='Jane "JD" Doe', email="jane@x.com", phone="+1 (415) 555-0199", skills="python, sql")
    values.update(overrides)
    return Candidate(**values)


def test_csv_quotes_every_field_and_doubles_quotes():
    content = to_csv([_jane()])
    header, row = content.splitlines()
    assert header == '"Name","Title","Email","Phone","Location","Experience","Skills"'
    assert row.startswith('"Jane ""JD"" Doe","N/A","jane@x.com"')
    assert '"python, sql"' in row


def test_csv_parses_back_to_the_same_values():
    rows = list(csv.reader(io.StringIO(to_csv([_jane()]))))
    assert rows[1][0] == 'Jane "JD" Doe'
    assert rows[1][6] == "python, sql"


def test_match_column_only_after_matching():
    unmatched = _jane()
    assert "Match %" not in export_columns([unmatched])

    matched = _jane(match_score=80)
    rows = list(csv.reader(io.StringIO(to_csv([matched, unmatched]))))
    assert rows[0][-1] == "Match %"
    assert rows[1][-1] == "80%"
    assert rows[2][-1] == "N/A"


def test_clipboard_is_tab_separated():
    text = to_clipboard_text([_jane(title="Data\tEngineer")])
    header, row = text.split("\n")
    assert header.split("\t")[0] == "Name"
    cells = row.split("\t")
    assert cells[1] == "Data Engineer"
    assert len(cells) == 7


def test_contact_links():
    assert mailto_uri("jane@x.com") == "mailto:jane@x.com"
    assert tel_uri("+1 (415) 555-0199") == "tel:+14155550199"
    assert tel_uri("(415) 555-0199") == "tel:4155550199"
    assert whatsapp_uri("+1 (415) 555-0199") == "https://wa.me/14155550199"
    assert contact_links(Candidate()) == {"mailto": "", "tel": "", "whatsapp": ""}
