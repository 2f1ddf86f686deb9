from portfolio.contact import build_mailto_url, encode_component


def test_fields_are_percent_encoded():
    url = build_mailto_url("mailto:me@example.com", [("subject", "Hi there"), ("body", "a&b=c")])
    assert url == "mailto:me@example.com?subject=Hi%20there&body=a%26b%3Dc"


def test_existing_query_uses_ampersand():
    url = build_mailto_url("mailto:me@example.com?cc=you@example.com", {"subject": "x"})
    assert url == "mailto:me@example.com?cc=you@example.com&subject=x"


def test_no_fields_keeps_action():
    assert build_mailto_url("mailto:me@example.com", []) == "mailto:me@example.com"


def test_encode_component_matches_browser_rules():
    assert encode_component("it's (fine)!") == "it's%20(fine)!"
    assert encode_component("é/?") == "%C3%A9%2F%3F"
