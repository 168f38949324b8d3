from .builder import LookupBuilder, regenerate, serialize_entries
from .config import PhraseLinkConfig
from .errors import DataIntegrityError, IndexOutOfRange, InvalidInputError, PhraseLinkError
from .graph import calc_relevance, connect
from .models import Connection, LookupEntry, MatchLocation, MatchResult, PhraseRecord, SearchHit
from .normalizer import is_acronym, normalize
from .searcher import find_matches, search
from .store import LookupStore, PhraseCatalog, PhraseStore

__all__ = [
    "Connection",
    "DataIntegrityError",
    "IndexOutOfRange",
    "InvalidInputError",
    "LookupBuilder",
    "LookupEntry",
    "LookupStore",
    "MatchLocation",
    "MatchResult",
    "PhraseCatalog",
    "PhraseLinkConfig",
    "PhraseLinkError",
    "PhraseRecord",
    "PhraseStore",
    "SearchHit",
    "calc_relevance",
    "connect",
    "find_matches",
    "is_acronym",
    "normalize",
    "regenerate",
    "search",
    "serialize_entries",
]
