"""Shared fixtures for the PhraseLink test suite"""

import json
from pathlib import Path

import pytest

from phraselink.core.builder import LookupBuilder
from phraselink.core.models import PhraseRecord
from phraselink.core.store import LookupStore, PhraseCatalog, PhraseStore

DATA_DIR = Path(__file__).parent.parent / "data"

INSURANCE_PHRASES = [
    {
        "phrase": "Errors and Omissions",
        "meaning": "professional liability coverage",
        "acronyms": ["E&O"]
    },
    {
        "phrase": "Professional Liability",
        "meaning": "coverage for errors and omissions",
        "category": "liability"
    },
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep PHRASELINK_* variables from the shell out of the tests"""
    for name in ("PHRASELINK_PHRASES_PATH", "PHRASELINK_LOOKUP_PATH", "PHRASELINK_LEMMATIZE",
                 "PHRASELINK_SPACY_MODEL", "PHRASELINK_LOG_LEVEL", "PHRASELINK_DEBUG"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def insurance_records():
    return [PhraseRecord.from_dict(datum, i) for i, datum in enumerate(INSURANCE_PHRASES)]


@pytest.fixture
def insurance_entries(insurance_records):
    return LookupBuilder().build(insurance_records)


@pytest.fixture
def sample_phrases_data():
    with open(DATA_DIR / "phrases.json", encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def sample_lookup_data():
    with open(DATA_DIR / "lookup.json", encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def sample_catalog(sample_phrases_data, sample_lookup_data):
    return PhraseCatalog(
        PhraseStore.from_list(sample_phrases_data),
        LookupStore.from_list(sample_lookup_data)
    )


@pytest.fixture
def document_paths(tmp_path, sample_phrases_data, sample_lookup_data):
    """Sample documents written to a temporary directory"""
    phrases_path = tmp_path / "phrases.json"
    lookup_path = tmp_path / "lookup.json"
    phrases_path.write_text(json.dumps(sample_phrases_data), encoding="utf-8")
    lookup_path.write_text(json.dumps(sample_lookup_data), encoding="utf-8")
    return phrases_path, lookup_path
