"""Text helpers shared by the retailer scrapers."""
import re

from bs4 import BeautifulSoup

_POSTAL_CODE = re.compile(r"^\d{4,6}\s*")
_WHITESPACE = re.compile(r"\s+")


def extract_city(address: str) -> str:
    """
    City from a free-text address: the last comma-separated segment without
    its leading postal code.

    "Ilica 1, 10000 Zagreb" -> "Zagreb"
    """
    if not address:
        return ""
    segment = address.rsplit(",", 1)[-1].strip()
    return _POSTAL_CODE.sub("", segment).strip()


def clean_html_tags(html: str) -> str:
    """Text content of an HTML fragment with whitespace collapsed."""
    if not html:
        return ""
    text = BeautifulSoup(html, "lxml").get_text(" ")
    return collapse_whitespace(text)


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE.sub(" ", text or "").strip()


def capitalize(value: str) -> str:
    """Upper-case the first letter and lower-case the rest ("PONEDJELJAK" -> "Ponedjeljak")."""
    value = (value or "").strip()
    return value[:1].upper() + value[1:].lower()
