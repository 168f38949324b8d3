"""
PhraseLink Data Models
Phrase records, lookup entries and search results
"""

from dataclasses import FrozenInstanceError, dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .errors import DataIntegrityError

# Positions inside LookupEntry.lemmas
PHRASE = 0
MEANING = 1
CATEGORY = 2


@dataclass(frozen=True)
class PhraseRecord:
    """One raw catalog entry, identified by its position in the phrase document"""
    phrase: str
    meaning: str
    category: Optional[str] = None
    acronyms: Optional[Tuple[str, ...]] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any], position: int) -> 'PhraseRecord':
        """
        Build a record from one object of the phrase-records document

        Args:
            data: Decoded JSON object
            position: Position in the document, used for error messages

        Returns:
            PhraseRecord
        """
        if not isinstance(data, dict):
            raise DataIntegrityError(f"Phrase record {position} is not an object")

        for key in ("phrase", "meaning"):
            if not isinstance(data.get(key), str):
                raise DataIntegrityError(f"Phrase record {position} has no text field '{key}'")

        category = data.get("category")
        if category is not None and not isinstance(category, str):
            raise DataIntegrityError(f"Phrase record {position} has a non-text category")

        acronyms = data.get("acronyms")
        if acronyms is not None:
            if not isinstance(acronyms, list) or not all(isinstance(a, str) for a in acronyms):
                raise DataIntegrityError(f"Phrase record {position} has malformed acronyms")
            acronyms = tuple(acronyms)

        return cls(
            phrase=data["phrase"],
            meaning=data["meaning"],
            category=category,
            acronyms=acronyms
        )

    def to_dict(self) -> Dict[str, Any]:
        data = {"phrase": self.phrase, "meaning": self.meaning}
        if self.category is not None:
            data["category"] = self.category
        if self.acronyms is not None:
            data["acronyms"] = list(self.acronyms)
        return data


@dataclass(frozen=True)
class Connection:
    """Edge from one lookup entry to another"""
    index: int
    phrase: str

    def to_dict(self) -> Dict[str, Any]:
        return {"index": self.index, "phrase": self.phrase}


@dataclass
class LookupEntry:
    """
    Normalized, cross-referenced derivative of a phrase record

    Entries are built and connected in place by the offline build. A loaded
    store only holds read-only copies (see read_only()).
    """
    lemmas: Sequence[str]
    index: int
    acronyms: Optional[Sequence[str]] = None
    connections: Optional[Sequence[Connection]] = None
    relevance: Optional[int] = None

    def __setattr__(self, name: str, value: Any):
        if getattr(self, "_read_only", False):
            raise FrozenInstanceError(
                f"cannot assign to field '{name}' of read-only lookup entry {self.index}"
            )
        super().__setattr__(name, value)

    @property
    def is_read_only(self) -> bool:
        return getattr(self, "_read_only", False)

    def read_only(self, relevance: Optional[int] = None) -> 'LookupEntry':
        """
        Immutable copy of this entry, with tuples in place of lists

        Args:
            relevance: Relevance to use when the entry has none

        Returns:
            New LookupEntry that rejects attribute assignment
        """
        entry = LookupEntry(
            lemmas=tuple(self.lemmas),
            index=self.index,
            acronyms=tuple(self.acronyms) if self.acronyms is not None else None,
            connections=tuple(self.connections) if self.connections is not None else None,
            relevance=self.relevance if self.relevance is not None else relevance
        )
        object.__setattr__(entry, "_read_only", True)
        return entry

    @property
    def phrase_lemma(self) -> str:
        return self.lemmas[PHRASE]

    @property
    def meaning_lemma(self) -> str:
        return self.lemmas[MEANING]

    @property
    def category_lemma(self) -> Optional[str]:
        if len(self.lemmas) > CATEGORY:
            return self.lemmas[CATEGORY]
        return None

    @property
    def has_category(self) -> bool:
        return len(self.lemmas) > CATEGORY

    def connected_indices(self) -> List[int]:
        return [c.index for c in self.connections or []]

    @classmethod
    def from_dict(cls, data: Dict[str, Any], position: int) -> 'LookupEntry':
        """
        Build an entry from one object of the lookup-entries document

        Args:
            data: Decoded JSON object
            position: Position in the document, used for error messages

        Returns:
            LookupEntry
        """
        if not isinstance(data, dict):
            raise DataIntegrityError(f"Lookup entry {position} is not an object")

        lemmas = data.get("lemmas")
        if (not isinstance(lemmas, list) or len(lemmas) not in (2, 3)
                or not all(isinstance(lemma, str) for lemma in lemmas)):
            raise DataIntegrityError(f"Lookup entry {position} must have 2 or 3 text lemmas")

        index = data.get("index")
        if not isinstance(index, int) or isinstance(index, bool):
            raise DataIntegrityError(f"Lookup entry {position} has no integer index")

        acronyms = data.get("acronyms")
        if acronyms is not None:
            if not isinstance(acronyms, list) or not all(isinstance(a, str) for a in acronyms):
                raise DataIntegrityError(f"Lookup entry {position} has malformed acronyms")
            acronyms = list(acronyms)

        connections = None
        if data.get("connections") is not None:
            connections = []
            for raw in data["connections"]:
                if not isinstance(raw, dict) or not isinstance(raw.get("index"), int):
                    raise DataIntegrityError(f"Lookup entry {position} has a malformed connection")
                connections.append(Connection(index=raw["index"], phrase=raw.get("phrase", "")))

        relevance = data.get("relevance")
        if relevance is not None and not isinstance(relevance, int):
            raise DataIntegrityError(f"Lookup entry {position} has a non-integer relevance")

        return cls(
            lemmas=list(lemmas),
            index=index,
            acronyms=acronyms,
            connections=connections,
            relevance=relevance
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize in the key order of the lookup-entries document"""
        data: Dict[str, Any] = {"lemmas": list(self.lemmas)}
        if self.acronyms is not None:
            data["acronyms"] = list(self.acronyms)
        data["index"] = self.index
        if self.connections is not None:
            data["connections"] = [c.to_dict() for c in self.connections]
        if self.relevance is not None:
            data["relevance"] = self.relevance
        return data


@dataclass(frozen=True)
class SearchHit:
    """All non-overlapping occurrences of one needle in a text"""
    matched: str
    indices: Tuple[int, ...]
    span: int

    def to_dict(self) -> Dict[str, Any]:
        return {"matched": self.matched, "indices": list(self.indices), "span": self.span}


@dataclass(frozen=True)
class MatchLocation:
    index: int
    span: int

    @property
    def end(self) -> int:
        return self.index + self.span


@dataclass
class MatchResult:
    """A lookup entry referenced by a text, with every location it was found at"""
    lookup: LookupEntry
    locations: List[MatchLocation] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "lookup": self.lookup.to_dict(),
            "locations": [{"index": loc.index, "span": loc.span} for loc in self.locations]
        }
