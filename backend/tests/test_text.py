"""Tests for address and markup helpers."""

import pytest

from storehours.utils.text import capitalize, clean_html_tags, extract_city


@pytest.mark.parametrize("address,city", [
    ("Ilica 1, 10000 Zagreb", "Zagreb"),
    ("Put Brodarice 6, 21000 Split", "Split"),
    ("Zagrebačka 12, Velika Gorica", "Velika Gorica"),
    ("Trg bana Jelačića 5, 10000 Zagreb, Grad Zagreb", "Grad Zagreb"),
    ("Osijek", "Osijek"),
    ("", ""),
])
def test_extract_city(address, city):
    assert extract_city(address) == city


def test_clean_html_tags():
    assert clean_html_tags("<strong>Ilica 1,</strong>\n  10000 Zagreb") == "Ilica 1, 10000 Zagreb"
    assert clean_html_tags("") == ""


def test_capitalize():
    assert capitalize("PONEDJELJAK") == "Ponedjeljak"
    assert capitalize(" četvrtak ") == "Četvrtak"
