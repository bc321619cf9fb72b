# 📄 File: plantscope/modules/plant_lookup/domain/services/name_cleaning.py
# 🧭 Purpose (Layman Explanation):
# Trims botanical author names, years and generic words like "disease" so picture searches use just the name
# 🧪 Purpose (Technical Summary):
# Name cleaning for image search: strips taxonomic authority strings from scientific names and
# generic suffixes / parenthetical qualifiers from disease names
# 🔗 Dependencies:
# re
# 🔄 Connected Modules / Calls From:
# image aggregator

import re

PARENTHETICAL_PATTERN = re.compile(r"\s*\([^)]*\)")
TRAILING_YEAR_PATTERN = re.compile(r"[\s,]+\d{4}\s*$")
TRAILING_ABBREVIATION_PATTERN = re.compile(r"\s+[A-Z]\.?\s*$")
DISEASE_SUFFIX_PATTERN = re.compile(r"\s+(disease|infection)$", re.IGNORECASE)
SEARCH_TERM_PATTERN = re.compile(r"[^\w\s]")

INFRASPECIFIC_MARKERS = {"subsp.", "ssp.", "var.", "f.", "x", "×", "cv."}


def _collapse(text: str) -> str:
    return " ".join(text.split())


def clean_scientific_name(name: str) -> str:
    """
    Strip authority citations from a scientific name.

    "Rosa gallica L." -> "Rosa gallica"
    "Foo bar (Smith) Jones, 1890" -> "Foo bar"
    """
    if not name:
        return ""

    text = PARENTHETICAL_PATTERN.sub(" ", name)
    text = TRAILING_YEAR_PATTERN.sub("", text)
    text = _collapse(text)

    tokens = [token.rstrip(",") for token in text.split(" ") if token.rstrip(",")]
    if len(tokens) < 2 or (not tokens[1][0].islower() and tokens[1] not in INFRASPECIFIC_MARKERS):
        # not a binomial (e.g. a common name); only drop a trailing initial
        return _collapse(TRAILING_ABBREVIATION_PATTERN.sub("", " ".join(tokens)))

    kept = [tokens[0]]
    for token in tokens[1:]:
        if token in INFRASPECIFIC_MARKERS:
            kept.append(token)
        elif token[0].islower() and not any(ch.isdigit() for ch in token) and "&" not in token:
            kept.append(token)
        else:
            break

    while len(kept) > 1 and kept[-1] in INFRASPECIFIC_MARKERS:
        kept.pop()

    return " ".join(kept)


def clean_disease_name(name: str) -> str:
    """
    "Powdery Mildew disease" -> "Powdery Mildew"
    "Leaf Spot (fungal) infection" -> "Leaf Spot"
    """
    if not name:
        return ""

    text = PARENTHETICAL_PATTERN.sub("", name)
    text = _collapse(text)
    text = DISEASE_SUFFIX_PATTERN.sub("", text)
    return text.strip()


def to_search_term(name: str) -> str:
    """Drop punctuation before building provider query strings."""
    return _collapse(SEARCH_TERM_PATTERN.sub("", name or ""))
