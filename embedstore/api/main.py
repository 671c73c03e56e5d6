"""
HTTP routes for the embedding gateway. Thin adapter: request bodies in,
gateway calls, envelope responses out. No auth or transport policy here.
"""

import threading

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .schemas import (
    ApiResponse,
    EmbeddingRef,
    EmbeddingSearchRequest,
    EmbeddingStoreRequest,
    HealthResponse,
    SearchHitModel,
    SearchResults,
)
from ..core.config import VERSION, debug_enabled
from ..core.exceptions import EmbedStoreError, ValidationError
from ..core.gateway import VectorStoreGateway, build_gateway
from ..util.logging import logger

_gateway = None
_gateway_lock = threading.Lock()


def get_gateway() -> VectorStoreGateway:
    """Dependency returning the process-wide gateway, built on first use."""
    global _gateway
    if _gateway is None:
        with _gateway_lock:
            if _gateway is None:
                _gateway = build_gateway()
    return _gateway


router = APIRouter(prefix="/qdrant", tags=["qdrant"])


@router.post("/store", status_code=201, response_model=ApiResponse)
def store_embedding(request: EmbeddingStoreRequest, gateway: VectorStoreGateway = Depends(get_gateway)):
    """Store an embedding under the caller's id, replacing any previous one."""
    result = gateway.store(request.id, request.vector, request.payload)
    return ApiResponse(
        success=True,
        data=EmbeddingRef(
            id=result.external_id,
            qdrantId=result.internal_id,
            message="Embedding stored successfully",
        ),
    )


@router.post("/search", response_model=ApiResponse)
def search_embeddings(request: EmbeddingSearchRequest, gateway: VectorStoreGateway = Depends(get_gateway)):
    """Search for similar embeddings, returning caller ids with scores."""
    hits = gateway.search(request.vector, request.limit, request.filter, request.filter_mode)
    return ApiResponse(
        success=True,
        data=SearchResults(results=[SearchHitModel(id=hit.id, score=hit.score) for hit in hits]),
    )


@router.delete("/{id}", response_model=ApiResponse)
def delete_embedding(id: str, gateway: VectorStoreGateway = Depends(get_gateway)):
    """Delete an embedding by the caller's id."""
    result = gateway.delete(id)
    return ApiResponse(
        success=True,
        data=EmbeddingRef(
            id=result.external_id,
            qdrantId=result.internal_id,
            message="Embedding deleted successfully",
        ),
    )


# Initialize the FastAPI application
app = FastAPI(
    title="Embedding Store API",
    version=VERSION,
    description="Store and search embeddings by caller id over Qdrant",
    docs_url="/docs" if debug_enabled() else None,
    redoc_url="/redoc" if debug_enabled() else None
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Content-Type"],
    expose_headers=["Content-Type"],
)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'] if part != 'body')}: {error['msg']}"
        for error in exc.errors()
    )
    return JSONResponse(
        status_code=400,
        content=ApiResponse(success=False, error=f"Invalid request: {errors}").model_dump(),
    )


@app.exception_handler(ValidationError)
async def gateway_validation_handler(request: Request, exc: ValidationError):
    return JSONResponse(
        status_code=400,
        content=ApiResponse(success=False, error=exc.message).model_dump(),
    )


@app.exception_handler(EmbedStoreError)
async def gateway_error_handler(request: Request, exc: EmbedStoreError):
    logger.error(f"Error handling {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=500,
        content=ApiResponse(success=False, error=f"Server error: {exc.message}").model_dump(),
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content=ApiResponse(success=False, error=f"Server error: {exc}").model_dump(),
    )


@app.get("/", response_model=HealthResponse)
def health_check_endpoint():
    """Check that the server is running."""
    return HealthResponse(status="OK", message="Server is running", version=VERSION)


app.include_router(router)
