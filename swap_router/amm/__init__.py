"""AMM math: constant-product pools."""

from swap_router.amm.base import SwapResult
from swap_router.amm.constant_product import ConstantProductAMM, Pool, constant_product

__all__ = ["ConstantProductAMM", "Pool", "SwapResult", "constant_product"]
