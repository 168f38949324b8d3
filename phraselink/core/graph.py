"""
PhraseLink Connection Graph
Pairwise relation discovery between lookup entries
"""

import logging
from typing import List, Sequence

from .errors import DataIntegrityError
from .models import Connection, LookupEntry, PhraseRecord

logger = logging.getLogger(__name__)


def _shares_acronym(curr: LookupEntry, other: LookupEntry) -> bool:
    """Both entries carry acronyms and at least one is common to both"""
    if not curr.acronyms or not other.acronyms:
        return False
    return not set(curr.acronyms).isdisjoint(other.acronyms)


def _lemmas_overlap(curr: LookupEntry, other: LookupEntry) -> bool:
    """Any lemma of one entry is a substring of any lemma of the other"""
    # An empty lemma is contained in everything, so it never counts
    curr_lemmas = [lemma for lemma in curr.lemmas if lemma]
    other_lemmas = [lemma for lemma in other.lemmas if lemma]

    for a in curr_lemmas:
        for b in other_lemmas:
            if b in a or a in b:
                return True
    return False


def is_related(curr: LookupEntry, other: LookupEntry) -> bool:
    return _shares_acronym(curr, other) or _lemmas_overlap(curr, other)


def connect(entries: Sequence[LookupEntry], phrases: Sequence[PhraseRecord]) -> None:
    """
    Search for all first-degree connections between entries

    Every ordered pair is compared, so this is quadratic in the number of
    entries. It only runs in the offline build.

    Args:
        entries: Complete list of lookup entries, positionally aligned with phrases
        phrases: Phrase records, used for the display text of each connection

    Returns:
        None - connections are set on the entries in place
    """
    if len(entries) != len(phrases):
        raise DataIntegrityError(
            f"Cannot connect {len(entries)} lookup entries against {len(phrases)} phrases"
        )

    edge_count = 0
    for i, curr in enumerate(entries):
        connections: List[Connection] = []

        for j, other in enumerate(entries):
            if i == j:
                continue
            if is_related(curr, other):
                connections.append(Connection(index=j, phrase=phrases[j].phrase))

        if connections:
            curr.connections = connections
            edge_count += len(connections)
            logger.debug(f"Entry {i} connects to {[c.index for c in connections]}")
        else:
            curr.connections = None

    verify_reciprocity(entries)
    logger.info(f"Connected {len(entries)} entries with {edge_count} directed edges")


def verify_reciprocity(entries: Sequence[LookupEntry]) -> None:
    """Every edge i -> j must be matched by j -> i"""
    targets = [set(entry.connected_indices()) for entry in entries]
    for i, outgoing in enumerate(targets):
        for j in outgoing:
            if i == j:
                raise DataIntegrityError(f"Entry {i} is connected to itself")
            if i not in targets[j]:
                raise DataIntegrityError(f"Connection {i} -> {j} has no reverse edge")


def calc_relevance(entry: LookupEntry) -> int:
    """
    Additive relevance of a lookup entry

    Not a true measure of relevance, but close enough to pick a seed entry.
    """
    relevance = len(entry.lemmas)
    relevance += len(entry.acronyms or [])
    relevance += len(entry.connections or [])
    return relevance
