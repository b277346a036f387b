import re
import unicodedata
from typing import Optional

_NON_ALNUM_RE = re.compile(r"[^a-z0-9]+")


def strip_accents(s: str) -> str:
    return "".join(c for c in unicodedata.normalize("NFD", s) if unicodedata.category(c) != "Mn")


def slugify(name: Optional[str]) -> str:
    """
    Slug URL-friendly a partir del nombre.

    "Remeras & Más!" -> "remeras-mas"
    """
    if not name:
        return ""
    s = strip_accents(name.lower())
    s = _NON_ALNUM_RE.sub("-", s)
    return s.strip("-")
