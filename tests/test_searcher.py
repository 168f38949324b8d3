"""Tests for reference search"""

import pytest

from phraselink.core.errors import InvalidInputError
from phraselink.core.models import LookupEntry, MatchLocation, SearchHit
from phraselink.core.searcher import find_matches, search


@pytest.fixture
def liability_entry():
    return LookupEntry(
        ["professional liability", "coverage for errors and omissions", "liability"], 0,
        acronyms=["PL"]
    )


class TestSearch:
    def test_non_overlapping(self):
        entry = LookupEntry(["aa", "double a"], 0)
        assert search("aaaa", entry) == [SearchHit(matched="aa", indices=(0, 2), span=2)]

    def test_non_overlapping_odd_length(self):
        entry = LookupEntry(["aa", "double a"], 0)
        assert search("aaaaa", entry)[0].indices == (0, 2)

    def test_needle_order(self, liability_entry):
        hits = search("professional liability uses PL", liability_entry)
        assert hits == [
            SearchHit(matched="professional liability", indices=(0,), span=22),
            SearchHit(matched="PL", indices=(28,), span=2),
            SearchHit(matched="liability", indices=(13,), span=9),
        ]

    def test_meaning_is_not_searched(self, liability_entry):
        assert search("coverage for errors and omissions", liability_entry) == []

    def test_missing_needles_omitted(self, liability_entry):
        hits = search("general liability", liability_entry)
        assert [hit.matched for hit in hits] == ["liability"]

    def test_acronym_ignores_case(self):
        entry = LookupEntry(["errors and omissions", "professional liability coverage"], 0,
                            acronyms=["E&O"])
        hits = search("coverage includes e&o", entry)
        assert hits == [SearchHit(matched="E&O", indices=(18,), span=3)]

    def test_lemma_is_case_sensitive(self):
        entry = LookupEntry(["errors", "mistakes"], 0)
        assert search("ERRORS", entry) == []

    def test_repeated_occurrences(self):
        entry = LookupEntry(["deductible", "amount"], 0)
        hits = search("deductible and another deductible", entry)
        assert hits[0].indices == (0, 23)

    def test_empty_needle_skipped(self):
        entry = LookupEntry(["", "meaning", ""], 0)
        assert search("anything", entry) == []

    def test_empty_text(self, liability_entry):
        assert search("", liability_entry) == []

    def test_rejects_non_text(self, liability_entry):
        with pytest.raises(InvalidInputError):
            search(None, liability_entry)

    def test_rejects_non_entry(self):
        with pytest.raises(InvalidInputError):
            search("text", {"lemmas": ["a", "b"], "index": 0})


class TestFindMatches:
    def test_insurance_end_to_end(self, insurance_entries):
        results = find_matches("coverage includes e&o and professional liability issues",
                               insurance_entries)

        assert [result.lookup.index for result in results] == [0, 1]
        assert results[0].locations == [MatchLocation(index=18, span=3)]
        assert results[1].locations == [
            MatchLocation(index=26, span=22),
            MatchLocation(index=39, span=9),
        ]

    def test_entries_without_locations_dropped(self, insurance_entries):
        results = find_matches("a policy about errors and omissions", insurance_entries)
        assert [result.lookup.index for result in results] == [0]

    def test_no_matches(self, insurance_entries):
        assert find_matches("nothing relevant here", insurance_entries) == []

    def test_location_order_follows_needles(self, liability_entry):
        results = find_matches("liability then professional liability", [liability_entry])
        assert results[0].locations == [
            MatchLocation(index=15, span=22),
            MatchLocation(index=0, span=9),
            MatchLocation(index=28, span=9),
        ]

    def test_location_end(self):
        assert MatchLocation(index=4, span=3).end == 7

    def test_rejects_non_text(self, insurance_entries):
        with pytest.raises(InvalidInputError):
            find_matches(b"bytes", insurance_entries)
