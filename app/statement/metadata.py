"""Per-report token metadata lookups."""

from __future__ import annotations

from typing import Dict, Optional, Protocol, Tuple

from app.core.logging import get_logger
from app.schemas.statement import TokenMetadata

log = get_logger("statement.metadata")


class TokenLookup(Protocol):
    def find_one(self, asset_id: int, is_collection: bool = False) -> Optional[TokenMetadata]:
        ...


class TokenMetadataResolver:
    """Memoizes token lookups for the lifetime of one report.

    Create one instance per report invocation and never share it between
    requests. Misses are not cached, so a token indexed mid-run still resolves.
    """

    def __init__(self, token_store: TokenLookup):
        self.token_store = token_store
        self._cache: Dict[Tuple[int, bool], TokenMetadata] = {}
        self.queries = 0

    def resolve(self, asset_id: int, is_collection: bool = False) -> Optional[TokenMetadata]:
        key = (asset_id, is_collection)
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        self.queries += 1
        token = self.token_store.find_one(asset_id, is_collection)
        if token is None:
            log.debug(f"No token metadata for {'collection' if is_collection else 'asset'} {asset_id}")
            return None

        self._cache[key] = token
        return token

    @property
    def cached(self) -> int:
        return len(self._cache)
