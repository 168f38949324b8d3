"""
PhraseLink Normalizer
Canonicalizes phrase text into comparable lemma form
"""

import re
from typing import Callable, Optional, Sequence

from .errors import InvalidInputError

# lemma_of(word) -> candidate base forms, best first
LemmaOf = Callable[[str], Sequence[str]]

# Brackets, comma, period, parentheses, slashes and quotes.
# Deleting the apostrophe turns "insurer's" into "insurers".
_PUNCTUATION_RE = re.compile(r"[\[\]{},.()/\\'\"]")
_ACRONYM_RE = re.compile(r"[A-Z&]{2,}")


def is_acronym(word: str) -> bool:
    """True if word is made only of A-Z and '&' and has at least 2 characters"""
    return _ACRONYM_RE.fullmatch(word) is not None


def normalize(text: str, lemma_of: Optional[LemmaOf] = None) -> str:
    """
    Normalize text so that slightly different spellings compare equal

    Args:
        text: Raw phrase, meaning, category or query text
        lemma_of: Optional lemmatizer; the first candidate replaces each
            non-acronym word

    Returns:
        Text without punctuation, lowercased except for acronyms,
        single-space separated
    """
    if not isinstance(text, str):
        raise InvalidInputError(f"normalize expects text, got {type(text).__name__}")

    text = _PUNCTUATION_RE.sub("", text)

    words = []
    for word in text.split():
        word = word.strip()
        if not word:
            continue
        if is_acronym(word):
            words.append(word)
            continue

        word = word.lower()
        if lemma_of is not None:
            candidates = lemma_of(word)
            if candidates:
                word = candidates[0].lower()
        words.append(word)

    return " ".join(words).strip()
