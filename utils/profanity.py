import re
from typing import Tuple

BANNED_WORDS = ("kerfuffle", "sharbert", "fornax")
MASK = "****"

_pattern = re.compile("|".join(re.escape(w) for w in BANNED_WORDS), re.IGNORECASE)


def clean_body(body: str) -> Tuple[str, bool]:
    """Mask every case-insensitive occurrence of a banned word.
    Returns the cleaned text and whether anything was masked.
    """
    cleaned, count = _pattern.subn(MASK, body)
    return cleaned, count > 0
