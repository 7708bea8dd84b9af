"""Pool bookkeeping: canonical pair ordering and reserve storage."""

from amm_engine.pools.ordering import CanonicalView, TokenPair, canonicalize, sort_tokens
from amm_engine.pools.reserves import ReserveStore

__all__ = ["TokenPair", "CanonicalView", "sort_tokens", "canonicalize", "ReserveStore"]
