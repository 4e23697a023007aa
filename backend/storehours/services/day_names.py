"""
Croatian weekday names and their English translations.

Retailer pages spell weekdays in several ways: full names ("Ponedjeljak"),
without diacritics ("Cetvrtak"), three-letter ("pon", "čet"), two-letter
("po", "če") and adverbial forms ("subotom"). Every spelling resolves to the
canonical full name in WEEK_DAYS.
"""
import re
import unicodedata
from typing import Optional

WEEK_DAYS: tuple[str, ...] = (
    "Ponedjeljak",
    "Utorak",
    "Srijeda",
    "Četvrtak",
    "Petak",
    "Subota",
    "Nedjelja",
)

WEEK_DAYS_THREE_LETTER: tuple[str, ...] = ("pon", "uto", "sri", "čet", "pet", "sub", "ned")

WEEK_DAYS_TWO_LETTER: tuple[str, ...] = ("po", "ut", "sr", "če", "pe", "su", "ne")

DAY_TRANSLATIONS_EN = {
    "ponedjeljak": "Monday",
    "utorak": "Tuesday",
    "srijeda": "Wednesday",
    "četvrtak": "Thursday",
    "cetvrtak": "Thursday",
    "petak": "Friday",
    "subota": "Saturday",
    "nedjelja": "Sunday",
}

# Alternative spellings -> index into WEEK_DAYS
_ALIASES = {
    "cetvrtak": 3,
    "cet": 3,
    "ce": 3,
    "ponedjeljkom": 0,
    "utorkom": 1,
    "srijedom": 2,
    "četvrtkom": 3,
    "cetvrtkom": 3,
    "petkom": 4,
    "subotom": 5,
    "nedjeljom": 6,
}

_DAY_INDEX: dict[str, int] = {}
for _names in (WEEK_DAYS, WEEK_DAYS_THREE_LETTER, WEEK_DAYS_TWO_LETTER):
    for _i, _name in enumerate(_names):
        _DAY_INDEX[_name.lower()] = _i
_DAY_INDEX.update(_ALIASES)

# Trailing colons, dots and surrounding whitespace around a day token
_DAY_TOKEN_STRIP = re.compile(r"^[\s:.,]+|[\s:.,]+$")


def clean_day_token(token: str) -> str:
    """Strip punctuation and whitespace around a day token and lower-case it.

    Decomposed letters ("C" + combining caron) are composed first.
    """
    token = unicodedata.normalize("NFC", token or "")
    return _DAY_TOKEN_STRIP.sub("", token).lower()


def day_index(token: str) -> Optional[int]:
    """Weekday index (Monday=0 ... Sunday=6) for any known spelling, else None."""
    return _DAY_INDEX.get(clean_day_token(token))


def canonical_day(token: str) -> Optional[str]:
    """Canonical full Croatian name for any known spelling, else None."""
    index = day_index(token)
    return WEEK_DAYS[index] if index is not None else None


def translate_to_en(value: str) -> Optional[str]:
    """English name for a full Croatian weekday name (case-insensitive)."""
    return DAY_TRANSLATIONS_EN.get((value or "").strip().lower())
