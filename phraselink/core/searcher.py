"""
PhraseLink Reference Searcher
Finds every lookup entry referenced in a piece of normalized text
"""

import logging
import re
from typing import List, Sequence, Tuple

from .errors import InvalidInputError
from .models import LookupEntry, MatchLocation, MatchResult, SearchHit

logger = logging.getLogger(__name__)


def _find_all(text: str, needle: str) -> List[int]:
    """Start offsets of non-overlapping occurrences, scanning left to right"""
    indices = []
    pos = text.find(needle)
    while pos != -1:
        indices.append(pos)
        pos = text.find(needle, pos + len(needle))
    return indices


def _find_all_ignore_case(text: str, needle: str) -> List[int]:
    """Same scan as _find_all, with case-insensitive comparison"""
    pattern = re.compile(re.escape(needle), re.IGNORECASE)
    indices = []
    match = pattern.search(text)
    while match:
        indices.append(match.start())
        match = pattern.search(text, match.end())
    return indices


def _needles(entry: LookupEntry) -> List[Tuple[str, bool]]:
    """Things to look for, in order, with whether case is ignored"""
    needles = [(entry.phrase_lemma, False)]
    for acronym in entry.acronyms or []:
        needles.append((acronym, True))
    if entry.has_category:
        needles.append((entry.category_lemma, False))
    return needles


def search(text: str, entry: LookupEntry) -> List[SearchHit]:
    """
    Search normalized text for the phrase, acronyms and category of an entry

    Args:
        text: Text already passed through normalize()
        entry: Lookup entry to look for

    Returns:
        One SearchHit per needle that occurs at least once
    """
    if not isinstance(text, str):
        raise InvalidInputError(f"search expects text, got {type(text).__name__}")
    if not isinstance(entry, LookupEntry):
        raise InvalidInputError(f"search expects a LookupEntry, got {type(entry).__name__}")

    hits = []
    for needle, ignore_case in _needles(entry):
        if not needle:
            continue
        if ignore_case:
            indices = _find_all_ignore_case(text, needle)
        else:
            indices = _find_all(text, needle)
        if indices:
            hits.append(SearchHit(matched=needle, indices=tuple(indices), span=len(needle)))
    return hits


def find_matches(text: str, entries: Sequence[LookupEntry]) -> List[MatchResult]:
    """
    Find every lookup entry referenced in text

    Args:
        text: Text already passed through normalize()
        entries: Lookup entries to check, in store order

    Returns:
        MatchResult for each entry with at least one location
    """
    if not isinstance(text, str):
        raise InvalidInputError(f"find_matches expects text, got {type(text).__name__}")

    results = []
    for entry in entries:
        locations = [
            MatchLocation(index=index, span=hit.span)
            for hit in search(text, entry)
            for index in hit.indices
        ]
        if locations:
            results.append(MatchResult(lookup=entry, locations=locations))

    logger.debug(f"Found {len(results)} referenced entries in {len(text)} characters of text")
    return results
