"""Tests for the prefix and A-number lookups and their materialize-once contract."""

import logging

import pytest

from sequence_statistics.catalog import SequenceEntry, PersistenceFailure
from sequence_statistics.sequence_lookup import (
    SequenceLookup, PersistencePolicy, NotFound, AmbiguousResult, make_prefix_pattern, escape_like
)

from conftest import FakeRepository


class TestPrefixPattern:

    def test_trailing_delimiter_and_wildcard(self):
        assert make_prefix_pattern(["1", "1", "2"]) == "1,1,2,%"

    def test_single_term(self):
        assert make_prefix_pattern(["-4"]) == "-4,%"

    def test_like_metacharacters_are_escaped(self):
        assert escape_like("5%_\\") == "5\\%\\_\\\\"
        assert make_prefix_pattern(["1_0", "%"]) == "1\\_0,\\%,%"


class TestFindByPrefix:

    def test_matches_whole_terms_only(self, repository, materializer):
        lookup = SequenceLookup(repository, materializer)
        found = lookup.find_by_prefix(["1", "1", "2"])
        assert [entry.a_id for entry in found] == ["A000108", "A000110", "A000142"]

    def test_keeps_repository_order_and_limit(self, repository, materializer):
        lookup = SequenceLookup(repository, materializer)
        found = lookup.find_by_prefix(["1", "1"], limit=2)
        assert [entry.a_id for entry in found] == ["A000108", "A000110"]
        assert repository.patterns == ["1,1,%"]

    def test_default_limit_is_six(self, materializer):
        entries = [SequenceEntry("A{:06d}".format(i), ["7", str(i)]) for i in range(10)]
        lookup = SequenceLookup(FakeRepository(entries), materializer)
        assert len(lookup.find_by_prefix(["7"])) == 6

    def test_every_result_has_data(self, repository, materializer):
        lookup = SequenceLookup(repository, materializer)
        found = lookup.find_by_prefix(["1"])
        assert len(found) == 4
        assert all(entry.data is not None for entry in found)

    def test_materializes_only_missing_data(self, repository, materializer):
        lookup = SequenceLookup(repository, materializer)
        found = lookup.find_by_prefix(["1", "1", "2", "5"])
        assert materializer.calls == ["A000108"]
        assert repository.committed == ["A000108"]
        assert found[1].data == {"N": ["Bell or exponential numbers"]}

    def test_second_lookup_does_not_materialize_again(self, repository, materializer):
        lookup = SequenceLookup(repository, materializer)
        lookup.find_by_prefix(["1", "1", "2"], limit=6)
        assert len(materializer.calls) == 2
        lookup.find_by_prefix(["1", "1", "2"], limit=6)
        assert len(materializer.calls) == 2
        assert repository.committed == ["A000108", "A000142"]

    def test_no_match(self, repository, materializer):
        lookup = SequenceLookup(repository, materializer)
        assert lookup.find_by_prefix(["9", "9", "9"]) == []
        assert materializer.calls == []

    def test_limit_must_be_positive(self, repository, materializer):
        lookup = SequenceLookup(repository, materializer)
        with pytest.raises(ValueError):
            lookup.find_by_prefix(["1"], limit=0)

    def test_terms_must_be_strings(self, repository, materializer):
        lookup = SequenceLookup(repository, materializer)
        with pytest.raises(TypeError):
            lookup.find_by_prefix([1, 1, 2])
        assert repository.patterns == []


class TestFindById:

    def test_materializes_and_commits(self, repository, materializer):
        lookup = SequenceLookup(repository, materializer)
        entry = lookup.find_by_id("A000045")
        assert entry.a_id == "A000045"
        assert entry.data == {"N": ["Sequence A000045"], "S": ["0,1,1,2,3,5,8,13"]}
        assert repository.committed == ["A000045"]

    def test_cached_data_is_not_recomputed(self, repository, materializer):
        lookup = SequenceLookup(repository, materializer)
        entry = lookup.find_by_id("A000110")
        assert entry.data == {"N": ["Bell or exponential numbers"]}
        assert materializer.calls == []
        assert repository.committed == []

    def test_not_found(self, repository, materializer):
        lookup = SequenceLookup(repository, materializer)
        with pytest.raises(NotFound):
            lookup.find_by_id("A999999")

    def test_ambiguous(self, entries, materializer):
        entries.append(SequenceEntry("A000045", ["0", "1", "1"]))
        lookup = SequenceLookup(FakeRepository(entries), materializer)
        with pytest.raises(AmbiguousResult):
            lookup.find_by_id("A000045")
        assert materializer.calls == []

    def test_empty_id(self, repository, materializer):
        lookup = SequenceLookup(repository, materializer)
        with pytest.raises(ValueError):
            lookup.find_by_id("")


class TestPersistencePolicy:

    def test_default_is_log(self, repository, materializer):
        assert SequenceLookup(repository, materializer).on_persistence_failure == PersistencePolicy.LOG

    @pytest.mark.parametrize("policy", [PersistencePolicy.LOG, PersistencePolicy.IGNORE])
    def test_swallowing_policies_apply_to_both_paths(self, entries, materializer, policy):
        lookup = SequenceLookup(FakeRepository(entries, fail_commit=True), materializer, policy)

        found = lookup.find_by_prefix(["0", "1"])
        assert [entry.a_id for entry in found] == ["A000045"]
        assert found[0].data is not None

        entry = lookup.find_by_id("A000032")
        assert entry.data is not None

    @pytest.mark.parametrize("policy", [PersistencePolicy.LOG, PersistencePolicy.IGNORE])
    def test_in_memory_data_survives_failed_commit(self, entries, materializer, policy):
        lookup = SequenceLookup(FakeRepository(entries, fail_commit=True), materializer, policy)
        lookup.find_by_prefix(["0", "1"])
        lookup.find_by_prefix(["0", "1"])
        assert materializer.calls == ["A000045"]

    def test_log_policy_warns(self, entries, materializer, caplog):
        lookup = SequenceLookup(FakeRepository(entries, fail_commit=True), materializer, PersistencePolicy.LOG)
        with caplog.at_level(logging.WARNING):
            lookup.find_by_id("A000045")
        assert "A000045" in caplog.text
        assert "read-only" in caplog.text

    def test_ignore_policy_is_silent(self, entries, materializer, caplog):
        lookup = SequenceLookup(FakeRepository(entries, fail_commit=True), materializer, PersistencePolicy.IGNORE)
        with caplog.at_level(logging.WARNING):
            lookup.find_by_id("A000045")
        assert caplog.records == []

    def test_propagate_policy_raises_on_both_paths(self, entries, materializer):
        lookup = SequenceLookup(FakeRepository(entries, fail_commit=True), materializer, PersistencePolicy.PROPAGATE)
        with pytest.raises(PersistenceFailure):
            lookup.find_by_prefix(["2", "1"])
        with pytest.raises(PersistenceFailure):
            lookup.find_by_id("A000045")
