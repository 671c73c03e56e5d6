"""
Search filter construction and hit reconciliation.
"""

import logging

import pytest
from embedstore.vector import filters
from embedstore.vector.reconcile import reconcile
from embedstore.vector.types import EngineHit, EqualityFilter, FieldMatch, SearchHit


class TestFilterBuilder:
    """Test cases for equality filter construction."""

    def test_build_one_clause_per_entry(self):
        query_filter = filters.build({"categories": "a", "location": "here"})

        assert set(query_filter.must) == {
            FieldMatch(key="categories", value="a"),
            FieldMatch(key="location", value="here"),
        }

    def test_build_is_order_independent(self):
        first = filters.build({"a": 1, "b": 2})
        second = filters.build({"b": 2, "a": 1})

        assert first == second

    def test_build_mixed_key_types(self):
        query_filter = filters.build({1: "x", "b": 2})

        assert set(query_filter.must) == {FieldMatch(key=1, value="x"), FieldMatch(key="b", value=2)}

    def test_build_empty_or_none(self):
        assert not filters.build({})
        assert not filters.build(None)
        assert filters.build(None) == EqualityFilter()

    def test_visibility_filter(self):
        query_filter = filters.visibility_filter()

        assert query_filter.must == (FieldMatch(key="allow_reference", value=True),)

    def test_combine_conjoins_and_deduplicates(self):
        combined = filters.combine(
            filters.visibility_filter(),
            filters.build({"categories": "a", "allow_reference": True}),
        )

        assert len(combined.must) == 2
        assert FieldMatch(key="allow_reference", value=True) in combined.must
        assert FieldMatch(key="categories", value="a") in combined.must


class TestFilterMatching:
    """Test cases for evaluating filters against payloads."""

    def test_scalar_equality(self):
        query_filter = filters.build({"location": "here"})

        assert filters.matches(query_filter, {"location": "here"})
        assert not filters.matches(query_filter, {"location": "there"})
        assert not filters.matches(query_filter, {})

    def test_list_field_matches_any_element(self):
        query_filter = filters.build({"categories": "b"})

        assert filters.matches(query_filter, {"categories": ["a", "b"]})
        assert not filters.matches(query_filter, {"categories": ["a"]})

    def test_bool_is_not_int(self):
        query_filter = filters.visibility_filter()

        assert filters.matches(query_filter, {"allow_reference": True})
        assert not filters.matches(query_filter, {"allow_reference": 1})
        assert not filters.matches(query_filter, {"allow_reference": False})

    def test_all_clauses_must_hold(self):
        query_filter = filters.build({"a": 1, "b": 2})

        assert filters.matches(query_filter, {"a": 1, "b": 2, "c": 3})
        assert not filters.matches(query_filter, {"a": 1, "b": 3})

    def test_empty_filter_matches_everything(self):
        assert filters.matches(EqualityFilter(), {"anything": 1})
        assert filters.matches(EqualityFilter(), None)


class TestReconcile:
    """Test cases for mapping engine hits back to caller ids."""

    def test_uses_original_id(self):
        hits = [
            EngineHit(id="uuid-1", score=0.9, payload={"original_id": "doc-1"}),
            EngineHit(id="uuid-2", score=0.5, payload={"original_id": "doc-2"}),
        ]

        results = reconcile(hits)

        assert results == [SearchHit(id="doc-1", score=0.9), SearchHit(id="doc-2", score=0.5)]

    def test_keeps_engine_order(self):
        hits = [
            EngineHit(id="u1", score=0.2, payload={"original_id": "low"}),
            EngineHit(id="u2", score=0.8, payload={"original_id": "high"}),
        ]

        results = reconcile(hits)

        assert [r.id for r in results] == ["low", "high"]

    def test_falls_back_to_internal_id(self, caplog):
        hits = [
            EngineHit(id="uuid-legacy", score=0.7, payload={"location": "old"}),
            EngineHit(id="uuid-none", score=0.6, payload=None),
        ]

        with caplog.at_level(logging.WARNING, logger="embedstore"):
            results = reconcile(hits)

        assert [r.id for r in results] == ["uuid-legacy", "uuid-none"]
        assert "degraded" in caplog.text

    def test_custom_id_field(self):
        hits = [EngineHit(id="u1", score=1.0, payload={"source_id": "s-1", "original_id": "o-1"})]

        assert reconcile(hits, id_field="source_id")[0].id == "s-1"

    def test_empty(self):
        assert reconcile([]) == []


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
