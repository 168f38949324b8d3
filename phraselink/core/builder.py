"""
PhraseLink Lookup Builder
Offline batch step turning phrase records into the lookup-entries document
"""

import json
import logging
from typing import List, Optional, Sequence

import yaml

from .graph import calc_relevance, connect
from .models import LookupEntry, PhraseRecord
from .normalizer import LemmaOf, normalize

logger = logging.getLogger(__name__)


class LookupBuilder:
    """
    Builds lookup entries for a full batch of phrase records

    Connections need the complete set of entries, so the build is a single
    monolithic pass rather than an incremental update.
    """

    def __init__(self, lemma_of: Optional[LemmaOf] = None):
        """
        Args:
            lemma_of: Optional lemmatizer applied while normalizing
        """
        self.lemma_of = lemma_of

    def make_entry(self, record: PhraseRecord, index: int) -> LookupEntry:
        """Normalize one phrase record, without connections or relevance"""
        lemmas = [
            normalize(record.phrase, self.lemma_of),
            normalize(record.meaning, self.lemma_of),
        ]
        if record.category is not None:
            lemmas.append(normalize(record.category, self.lemma_of))

        acronyms = list(record.acronyms) if record.acronyms is not None else None
        return LookupEntry(lemmas=lemmas, index=index, acronyms=acronyms)

    def build(self, phrases: Sequence[PhraseRecord]) -> List[LookupEntry]:
        """
        Generate the lookup entries for all phrase records

        Args:
            phrases: Every phrase record, in document order

        Returns:
            Complete list of lookup entries with connections and relevance
        """
        logger.info(f"Building lookup entries for {len(phrases)} phrases")

        entries = [self.make_entry(record, i) for i, record in enumerate(phrases)]

        connect(entries, phrases)

        for entry in entries:
            entry.relevance = calc_relevance(entry)

        best = most_relevant(entries)
        if best is not None:
            logger.info(f"Most relevant entry is {best.index} "
                        f"('{phrases[best.index].phrase}', relevance {best.relevance})")

        return entries


def most_relevant(entries: Sequence[LookupEntry]) -> Optional[LookupEntry]:
    """Entry with strictly the highest relevance; the first one wins ties"""
    best = None
    best_relevance = 0
    for entry in entries:
        relevance = entry.relevance if entry.relevance is not None else calc_relevance(entry)
        if best is None or relevance > best_relevance:
            best = entry
            best_relevance = relevance
    return best


def serialize_entries(entries: Sequence[LookupEntry], format: str = "json") -> str:
    """
    Convert lookup entries to document text for the operator to commit

    Args:
        entries: Built lookup entries
        format: "json" (one compact object per line) or "yaml"

    Returns:
        Serialized document
    """
    data = [entry.to_dict() for entry in entries]

    if format == "json":
        if not data:
            return "[]"
        lines = [json.dumps(datum, ensure_ascii=False, separators=(",", ":")) for datum in data]
        return "[\n  " + ",\n  ".join(lines) + "\n]"

    elif format == "yaml":
        return yaml.safe_dump(data, default_flow_style=False, allow_unicode=True, sort_keys=False)

    else:
        raise ValueError(f"Unknown format: {format}")


def regenerate(phrases: Sequence[PhraseRecord],
               format: str = "json",
               lemma_of: Optional[LemmaOf] = None) -> str:
    """
    Recompute the full lookup-entries document from the phrase records

    The result is only returned; persisting it is left to the operator.
    """
    entries = LookupBuilder(lemma_of=lemma_of).build(phrases)
    return serialize_entries(entries, format=format)
