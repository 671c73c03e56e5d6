"""
In-memory vector engine - cosine search, overwrite on upsert, filters.
"""

import pytest
import numpy as np
from embedstore.core.exceptions import CollectionExistsError, CollectionNotFoundError
from embedstore.vector.engine import InMemoryVectorEngine, VectorEngine
from embedstore.vector.filters import build, visibility_filter
from embedstore.vector.types import EnginePoint


@pytest.fixture
def engine():
    """Engine with one 2-dimensional collection."""
    engine = InMemoryVectorEngine()
    engine.create_collection("test", 2)
    return engine


def test_engine_interface():
    """Test that InMemoryVectorEngine implements VectorEngine interface."""
    assert isinstance(InMemoryVectorEngine(), VectorEngine)


def test_create_and_list_collections():
    """Test collection creation and listing."""
    engine = InMemoryVectorEngine()
    assert engine.list_collections() == set()

    engine.create_collection("a", 3)
    engine.create_collection("b", 4)

    assert engine.list_collections() == {"a", "b"}


def test_duplicate_create_raises(engine):
    """Test that creating an existing collection raises CollectionExistsError."""
    with pytest.raises(CollectionExistsError):
        engine.create_collection("test", 2)


def test_search_similarity(engine):
    """Test that search returns results ordered by similarity."""
    engine.upsert("test", [
        EnginePoint(id="a", vector=[1.0, 0.0], payload={"text": "vector a"}),
        EnginePoint(id="b", vector=[0.0, 1.0], payload={"text": "vector b"}),
    ])

    hits = engine.search("test", [1.0, 0.0], limit=2)

    assert [hit.id for hit in hits] == ["a", "b"]
    assert hits[0].score == pytest.approx(1.0)
    assert hits[1].score == pytest.approx(0.0)
    assert hits[0].payload == {"text": "vector a"}


def test_search_respects_limit(engine):
    """Test that no more than limit hits are returned."""
    engine.upsert("test", [
        EnginePoint(id=str(i), vector=[1.0, float(i)], payload={}) for i in range(10)
    ])

    assert len(engine.search("test", [1.0, 0.0], limit=3)) == 3


def test_search_without_payload(engine):
    """Test that payload can be left out of hits."""
    engine.upsert("test", [EnginePoint(id="a", vector=[1.0, 0.0], payload={"k": "v"})])

    hits = engine.search("test", [1.0, 0.0], limit=1, with_payload=False)

    assert hits[0].payload is None


def test_upsert_replaces_point(engine):
    """Test that upserting an existing id replaces vector and payload."""
    engine.upsert("test", [EnginePoint(id="p", vector=[1.0, 0.0], payload={"key": "value", "old": True})])
    engine.upsert("test", [EnginePoint(id="p", vector=[0.0, 1.0], payload={"key": "updated_value"})])

    hits = engine.search("test", [0.0, 1.0], limit=5)

    assert len(hits) == 1
    assert hits[0].score == pytest.approx(1.0)
    assert hits[0].payload == {"key": "updated_value"}
    assert engine.count("test") == 1


def test_upsert_dimension_mismatch(engine):
    """Test that vectors of the wrong width are rejected."""
    with pytest.raises(ValueError):
        engine.upsert("test", [EnginePoint(id="p", vector=[1.0, 0.0, 0.0], payload={})])

    assert engine.count("test") == 0


def test_search_with_filter(engine):
    """Test that filters restrict the candidate set."""
    engine.upsert("test", [
        EnginePoint(id="visible", vector=[1.0, 0.0], payload={"allow_reference": True, "categories": ["a"]}),
        EnginePoint(id="hidden", vector=[1.0, 0.1], payload={"allow_reference": False, "categories": ["a"]}),
    ])

    visible = engine.search("test", [1.0, 0.0], limit=5, query_filter=visibility_filter())
    tagged = engine.search("test", [1.0, 0.0], limit=5, query_filter=build({"categories": "a"}))

    assert [hit.id for hit in visible] == ["visible"]
    assert {hit.id for hit in tagged} == {"visible", "hidden"}


def test_delete_point(engine):
    """Test deleting points, including ids that are not there."""
    engine.upsert("test", [EnginePoint(id="d", vector=[1.0, 0.0], payload={})])

    engine.delete("test", ["d", "never-stored"])

    assert engine.search("test", [1.0, 0.0], limit=1) == []


def test_missing_collection_raises():
    """Test that operations on a missing collection raise CollectionNotFoundError."""
    engine = InMemoryVectorEngine()

    with pytest.raises(CollectionNotFoundError):
        engine.search("missing", [1.0], limit=1)
    with pytest.raises(CollectionNotFoundError):
        engine.delete("missing", ["x"])
    with pytest.raises(CollectionNotFoundError):
        engine.upsert("missing", [EnginePoint(id="x", vector=[1.0], payload={})])


def test_zero_query_vector(engine):
    """Test that a zero query vector matches nothing."""
    engine.upsert("test", [EnginePoint(id="a", vector=[1.0, 0.0], payload={})])

    assert engine.search("test", np.zeros(2).tolist(), limit=1) == []


def test_clear():
    """Test clearing all collections."""
    engine = InMemoryVectorEngine()
    engine.create_collection("a", 2)

    engine.clear()

    assert engine.list_collections() == set()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
