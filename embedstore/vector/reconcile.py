"""
Maps engine hits back to caller ids.
"""

from typing import Iterable, List

from ..core.config import ORIGINAL_ID_FIELD
from ..util.logging import logger
from .types import EngineHit, SearchHit


def reconcile(hits: Iterable[EngineHit], id_field: str = ORIGINAL_ID_FIELD) -> List[SearchHit]:
    """
    Translate engine hits into caller-facing results, keeping engine order.

    The caller id comes from payload[id_field]. Records written without it
    fall back to the raw engine id; that is logged as degraded, not raised.
    """
    results = []
    for hit in hits:
        payload = hit.payload or {}
        original_id = payload.get(id_field)
        if original_id:
            result_id = str(original_id)
        else:
            result_id = str(hit.id)
            logger.log_degraded_reconciliation(result_id, id_field)
        results.append(SearchHit(id=result_id, score=float(hit.score)))
    return results
