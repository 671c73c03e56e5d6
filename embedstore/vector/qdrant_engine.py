"""
Qdrant-backed implementation of the vector engine port.
"""

import numbers
from typing import List, Optional, Set

from qdrant_client import QdrantClient
from qdrant_client.http.exceptions import UnexpectedResponse
from qdrant_client.models import (
    Distance,
    FieldCondition,
    Filter,
    MatchValue,
    PointIdsList,
    PointStruct,
    VectorParams,
)

from ..core.exceptions import CollectionExistsError, CollectionNotFoundError
from .engine import VectorEngine
from .types import EngineHit, EnginePoint, EqualityFilter

DISTANCES = {
    "cosine": Distance.COSINE,
    "dot": Distance.DOT,
    "euclid": Distance.EUCLID,
}


def to_qdrant_filter(query_filter: Optional[EqualityFilter]) -> Optional[Filter]:
    """Translate an equality filter into a Qdrant must-filter."""
    if not query_filter:
        return None
    return Filter(
        must=[
            FieldCondition(key=clause.key, match=MatchValue(value=_match_value(clause.value)))
            for clause in query_filter.must
        ]
    )


def _match_value(value):
    # MatchValue only accepts built-in int, not numpy integers
    if isinstance(value, numbers.Integral) and not isinstance(value, bool):
        return int(value)
    return value


def _is_already_exists(error: Exception) -> bool:
    if isinstance(error, UnexpectedResponse) and error.status_code == 409:
        return True
    return "already exists" in str(error)


def _is_not_found(error: Exception) -> bool:
    if isinstance(error, UnexpectedResponse):
        return error.status_code == 404
    return isinstance(error, ValueError) and "not found" in str(error)


class QdrantVectorEngine(VectorEngine):
    """Vector engine talking to a Qdrant server (or a local Qdrant client)."""

    def __init__(self, url: str = None, api_key: Optional[str] = None, timeout: int = 30,
                 client: Optional[QdrantClient] = None):
        """
        Initialize the Qdrant engine.

        Args:
            url: Qdrant endpoint, ignored when client is given
            api_key: Optional API key for Qdrant Cloud
            timeout: Request timeout in seconds, enforced by the client
            client: Pre-built client, e.g. QdrantClient(":memory:") in tests
        """
        if client is not None:
            self.client = client
        else:
            self.client = QdrantClient(url=url, api_key=api_key, timeout=timeout)

    def list_collections(self) -> Set[str]:
        return {collection.name for collection in self.client.get_collections().collections}

    def create_collection(self, name: str, dimension: int, distance: str = "cosine") -> None:
        try:
            self.client.create_collection(
                collection_name=name,
                vectors_config=VectorParams(size=dimension, distance=DISTANCES[distance]),
            )
        except (UnexpectedResponse, ValueError) as e:
            if _is_already_exists(e):
                raise CollectionExistsError(f"Collection {name} already exists") from e
            raise

    def upsert(self, collection: str, points: List[EnginePoint]) -> None:
        try:
            self.client.upsert(
                collection_name=collection,
                points=[
                    PointStruct(id=point.id, vector=list(point.vector), payload=point.payload)
                    for point in points
                ],
                wait=True,
            )
        except (UnexpectedResponse, ValueError) as e:
            if _is_not_found(e):
                raise CollectionNotFoundError(f"Collection {collection} not found") from e
            raise

    def search(self, collection: str, vector: List[float], limit: int,
               query_filter: Optional[EqualityFilter] = None,
               with_payload: bool = True, with_vector: bool = False) -> List[EngineHit]:
        try:
            response = self.client.query_points(
                collection_name=collection,
                query=list(vector),
                query_filter=to_qdrant_filter(query_filter),
                limit=limit,
                with_payload=with_payload,
                with_vectors=with_vector,
            )
        except (UnexpectedResponse, ValueError) as e:
            if _is_not_found(e):
                raise CollectionNotFoundError(f"Collection {collection} not found") from e
            raise

        return [
            EngineHit(id=str(point.id), score=float(point.score), payload=point.payload)
            for point in response.points
        ]

    def delete(self, collection: str, ids: List[str]) -> None:
        try:
            self.client.delete(
                collection_name=collection,
                points_selector=PointIdsList(points=list(ids)),
                wait=True,
            )
        except (UnexpectedResponse, ValueError) as e:
            if _is_not_found(e):
                raise CollectionNotFoundError(f"Collection {collection} not found") from e
            raise
