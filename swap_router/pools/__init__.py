"""Pool snapshot management.

Provides PoolGraph, the adjacency structure route search runs over.
"""

from swap_router.amm.constant_product import Pool
from swap_router.pools.graph import PoolGraph

__all__ = ["Pool", "PoolGraph"]
