"""
Request and response models for the embedding HTTP routes.
"""

from pydantic import BaseModel, Field, field_validator
from typing import Optional, List, Dict, Any

from ..core.config import DEFAULT_SEARCH_LIMIT


class EmbeddingStoreRequest(BaseModel):
    id: str
    vector: List[float]
    payload: Dict[str, Any]

    @field_validator('id')
    @classmethod
    def id_must_not_be_empty(cls, v):
        if not v:
            raise ValueError('id cannot be empty')
        return v

    @field_validator('vector')
    @classmethod
    def vector_must_not_be_empty(cls, v):
        if not v:
            raise ValueError('vector cannot be empty')
        return v


class EmbeddingSearchRequest(BaseModel):
    vector: List[float]
    limit: int = DEFAULT_SEARCH_LIMIT
    filter: Optional[Dict[str, Any]] = None
    filter_mode: Optional[str] = None

    @field_validator('vector')
    @classmethod
    def vector_must_not_be_empty(cls, v):
        if not v:
            raise ValueError('vector cannot be empty')
        return v


class EmbeddingRef(BaseModel):
    id: str
    qdrantId: str
    message: str


class SearchHitModel(BaseModel):
    id: str
    score: float


class SearchResults(BaseModel):
    results: List[SearchHitModel]


class ApiResponse(BaseModel):
    success: bool
    data: Optional[Any] = None
    error: Optional[str] = None


class HealthResponse(BaseModel):
    status: str
    message: str
    version: str = Field(default="")
