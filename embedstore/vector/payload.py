"""
Payload enrichment: every stored payload carries the caller's original id.
"""

from typing import Any, Dict, Mapping

from ..core.config import ORIGINAL_ID_FIELD
from ..util.logging import logger


def enrich(payload: Mapping[str, Any], external_id: str, id_field: str = ORIGINAL_ID_FIELD) -> Dict[str, Any]:
    """
    Return a copy of payload with id_field set to external_id.

    A caller-supplied value under id_field is overwritten, never rejected;
    the reserved key always holds the id the record was stored under.
    The input mapping is left untouched.
    """
    enriched = dict(payload)
    previous = enriched.get(id_field)
    if previous is not None and previous != external_id:
        logger.debug(f"Overwriting caller-supplied '{id_field}'={previous!r} with {external_id!r}")
    enriched[id_field] = external_id
    return enriched
