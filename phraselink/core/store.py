"""
PhraseLink Stores
Read-only phrase and lookup tables, and the catalog that answers queries on them
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple, Union

from .builder import most_relevant, regenerate
from .config import PhraseLinkConfig
from .errors import DataIntegrityError, IndexOutOfRange, InvalidInputError
from .graph import calc_relevance, verify_reciprocity
from .models import LookupEntry, MatchResult, PhraseRecord
from .normalizer import LemmaOf, normalize
from .searcher import find_matches

logger = logging.getLogger(__name__)


def _read_document(path: Union[str, Path]) -> List[Any]:
    """Load a whole JSON document, which must be a list"""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"No document found at {path}")

    with open(path, 'r', encoding='utf-8') as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise DataIntegrityError(f"{path} is not valid JSON: {e}") from e

    if not isinstance(data, list):
        raise DataIntegrityError(f"{path} must contain a list of objects")
    return data


def _check_index(index: Any, length: int) -> int:
    if not isinstance(index, int) or isinstance(index, bool):
        raise InvalidInputError(f"Index must be an integer, got {type(index).__name__}")
    if index < 0 or index >= length:
        raise IndexOutOfRange(index, length)
    return index


class PhraseStore:
    """Immutable table of raw phrase records"""

    def __init__(self, records: Sequence[PhraseRecord]):
        self._records = tuple(records)

    @classmethod
    def from_list(cls, data: Sequence[Dict[str, Any]]) -> 'PhraseStore':
        return cls(PhraseRecord.from_dict(datum, i) for i, datum in enumerate(data))

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> 'PhraseStore':
        store = cls.from_list(_read_document(path))
        logger.info(f"Loaded {len(store)} phrase records from {path}")
        return store

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[PhraseRecord]:
        return iter(self._records)

    def __getitem__(self, index: int) -> PhraseRecord:
        return self._records[index]

    def fetch(self, index: int) -> PhraseRecord:
        """Phrase record at the given position"""
        return self._records[_check_index(index, len(self._records))]


class LookupStore:
    """
    Immutable table of lookup entries

    Entries are held as read-only copies; the caller's objects are left
    untouched. The most relevant entry is picked once, when the store is built.
    """

    def __init__(self, entries: Sequence[LookupEntry]):
        self._entries = self._validate(entries)
        self.most_relevant = most_relevant(self._entries)

    @staticmethod
    def _validate(entries: Sequence[LookupEntry]) -> Tuple[LookupEntry, ...]:
        length = len(entries)
        frozen = []
        for position, entry in enumerate(entries):
            if entry.index != position:
                raise DataIntegrityError(
                    f"Lookup entry at position {position} has index {entry.index}"
                )
            for target in entry.connected_indices():
                if target == position:
                    raise DataIntegrityError(f"Lookup entry {position} is connected to itself")
                if target < 0 or target >= length:
                    raise DataIntegrityError(
                        f"Lookup entry {position} is connected to missing entry {target}"
                    )
            if entry.relevance is None:
                logger.warning(f"Lookup entry {position} has no relevance, computing it")
            frozen.append(entry.read_only(relevance=calc_relevance(entry)))

        verify_reciprocity(frozen)
        return tuple(frozen)

    @classmethod
    def from_list(cls, data: Sequence[Dict[str, Any]]) -> 'LookupStore':
        return cls([LookupEntry.from_dict(datum, i) for i, datum in enumerate(data)])

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> 'LookupStore':
        store = cls.from_list(_read_document(path))
        logger.info(f"Loaded {len(store)} lookup entries from {path}")
        return store

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[LookupEntry]:
        return iter(self._entries)

    def __getitem__(self, index: int) -> LookupEntry:
        return self._entries[index]

    def fetch(self, index: int) -> LookupEntry:
        """Lookup entry at the given position"""
        return self._entries[_check_index(index, len(self._entries))]


class PhraseCatalog:
    """
    Query surface over the loaded phrase and lookup stores

    Both stores are loaded once and never modified afterwards.
    """

    def __init__(self,
                 phrases: PhraseStore,
                 lookups: LookupStore,
                 lemma_of: Optional[LemmaOf] = None):
        """
        Args:
            phrases: Raw phrase records
            lookups: Lookup entries, positionally aligned with phrases
            lemma_of: Lemmatizer the lookup entries were built with, if any
        """
        if len(phrases) != len(lookups):
            logger.error(f"Phrase document has {len(phrases)} records but lookup "
                         f"document has {len(lookups)} entries")
            raise DataIntegrityError(
                f"Phrase/lookup length mismatch: {len(phrases)} != {len(lookups)}"
            )

        self.phrases = phrases
        self.lookups = lookups
        self.lemma_of = lemma_of

    @classmethod
    def load(cls, config: Optional[PhraseLinkConfig] = None) -> 'PhraseCatalog':
        """Load both documents from the locations in the configuration"""
        config = config or PhraseLinkConfig()

        lemma_of = None
        if config.normalizer.lemmatize:
            from .lemmatizer import SpacyLemmatizer
            lemma_of = SpacyLemmatizer(config.normalizer.spacy_model)

        phrases = PhraseStore.from_file(config.data.phrases_path)
        lookups = LookupStore.from_file(config.data.lookup_path)
        return cls(phrases, lookups, lemma_of=lemma_of)

    def __len__(self) -> int:
        return len(self.phrases)

    @property
    def most_relevant_entry(self) -> Optional[LookupEntry]:
        """Highest-relevance entry, usable as a starting point"""
        return self.lookups.most_relevant

    def fetch_phrase(self, index: int) -> PhraseRecord:
        return self.phrases.fetch(index)

    def fetch_lookup(self, index: int) -> LookupEntry:
        return self.lookups.fetch(index)

    def normalize(self, text: str) -> str:
        return normalize(text, self.lemma_of)

    def find_matches(self, text: str) -> List[MatchResult]:
        """
        Find every cataloged entry referenced in text

        Args:
            text: Normalized text (see normalize())

        Returns:
            Matches in lookup order
        """
        return find_matches(text, self.lookups)

    def expand_connections(self, entry: Union[LookupEntry, int]) -> List[LookupEntry]:
        """
        Full lookup entries an entry is connected to, in edge order

        Args:
            entry: Lookup entry or its index

        Returns:
            Connected entries; empty when there are none
        """
        if not isinstance(entry, LookupEntry):
            entry = self.fetch_lookup(entry)
        return [self.lookups.fetch(c.index) for c in entry.connections or []]

    def search_phrases(self, query: str) -> List[PhraseRecord]:
        """
        Search for phrase records whose phrase or meaning contains query

        Args:
            query: Search query, compared case-insensitively

        Returns:
            Matching records, best first
        """
        if not isinstance(query, str):
            raise InvalidInputError(f"search_phrases expects text, got {type(query).__name__}")

        query_lower = query.lower().strip()
        if not query_lower:
            return []

        results = [
            record for record in self.phrases
            if query_lower in record.phrase.lower() or query_lower in record.meaning.lower()
        ]

        # Sort by relevance
        def sort_key(record):
            phrase_lower = record.phrase.lower()

            # Exact match gets highest priority
            if phrase_lower == query_lower:
                return (0, len(record.phrase))
            # Phrase starts with query
            elif phrase_lower.startswith(query_lower):
                return (1, len(record.phrase))
            # Query in phrase
            elif query_lower in phrase_lower:
                return (2, len(record.phrase))
            # Query in meaning
            else:
                return (3, len(record.phrase))

        results.sort(key=sort_key)
        return results

    def regenerate(self, format: str = "json") -> str:
        """Rebuild the lookup document from the loaded phrase records"""
        return regenerate(list(self.phrases), format=format, lemma_of=self.lemma_of)

    def get_stats(self) -> Dict[str, int]:
        """Get statistics about the catalog"""
        edges = sum(len(entry.connections or []) for entry in self.lookups)

        return {
            'total_phrases': len(self.phrases),
            'with_category': sum(1 for record in self.phrases if record.category is not None),
            'with_acronyms': sum(1 for record in self.phrases if record.acronyms),
            'connected_entries': sum(1 for entry in self.lookups if entry.connections),
            'connections': edges,
            'max_relevance': max((entry.relevance or 0 for entry in self.lookups), default=0)
        }
