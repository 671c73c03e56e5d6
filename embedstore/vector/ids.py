"""
Deterministic translation of caller ids into UUID-shaped engine ids.
"""

import uuid
from typing import Union

from ..core.config import DEFAULT_ID_NAMESPACE


class IdentifierMapper:
    """Maps arbitrary string ids to UUID v5 strings under a fixed namespace.

    The mapping is a pure function: the same external id always yields the
    same internal id, and there is no way back. Payloads carry the original
    id so search results can be translated back.
    """

    def __init__(self, namespace: Union[str, uuid.UUID] = DEFAULT_ID_NAMESPACE):
        if isinstance(namespace, uuid.UUID):
            self.namespace = namespace
        else:
            self.namespace = uuid.UUID(namespace)

    def map_id(self, external_id: str) -> str:
        """Return the engine id for external_id."""
        return str(uuid.uuid5(self.namespace, external_id))


_default_mapper = IdentifierMapper()


def map_id(external_id: str) -> str:
    """Map external_id with the default namespace."""
    return _default_mapper.map_id(external_id)
