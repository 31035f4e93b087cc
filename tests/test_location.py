from extractors import Document, extract_location, location_from_header_city, location_from_remote_keyword
from lexicon import default_lexicon

FILLER = "\n".join(f"Filler line number {i}" for i in range(12))


def test_city_and_state_code():
    assert extract_location("Jane Doe\nSan Francisco, CA") == "San Francisco, CA"


def test_ambiguous_code_accepted_with_known_us_city():
    assert extract_location("John Roe\nPortland, OR") == "Portland, OR"


def test_ambiguous_code_rejected_without_known_us_city():
    assert extract_location("Alex Poe\nSpringfield, IN") == ""


def test_excluded_city_is_never_returned():
    assert extract_location("Ravi Kumar\nMumbai, IN\nSoftware Engineer") == ""
    assert extract_location("Ravi Kumar\nMumbai, IN\nIndia\nSoftware Engineer") == ""


def test_full_region_name_is_abbreviated():
    assert extract_location("Dana White\nAustin, Texas") == "Austin, TX"


def test_postal_code_form():
    assert extract_location("Dana White\n123 Main St, Austin, TX 78701") == "Austin, TX 78701"


def test_labelled_location():
    assert extract_location("Dana White\nLocation: Berlin, Germany") == "Berlin, Germany"


def test_labelled_location_in_excluded_region():
    assert extract_location("Dana White\nLocation: Pune, India") == ""


def test_known_city_in_header():
    assert extract_location("Sam Lee\nsam@x.com\nBased out of Seattle area") == "Seattle"


def test_known_city_anywhere_only_without_excluded_context():
    text = f"Sam Lee\n{FILLER}\nRelocated to Denver last year"
    assert extract_location(text) == "Denver"
    assert extract_location(text + "\nWorked with teams in Bangalore") == ""


def test_remote_and_hybrid():
    assert extract_location("Sam Lee\nOpen to remote roles") == "Remote"
    assert extract_location("Sam Lee\nHybrid preferred") == "Hybrid"


def test_country_fallback():
    assert extract_location("Sam Lee\nCitizen of the USA") == "United States"
    assert extract_location("Sam Lee\nCitizen of the USA\nBorn in India") == ""


def test_skill_lists_are_not_places():
    assert extract_location("Sam Lee\nTools: Excel, MS") == ""


def test_strategies_can_be_called_individually():
    lexicon = default_lexicon()
    doc = Document("Sam Lee\nBoston based\nRemote friendly", lexicon)
    assert location_from_header_city(doc) == "Boston"
    assert location_from_remote_keyword(doc) == "Remote"
