"""Swap router - constant-product route search and price quoting."""

from swap_router.engine import QuoteEngine, get_default_engine
from swap_router.routing.search import RouteSearch

__version__ = "0.1.0"
__all__ = ["QuoteEngine", "RouteSearch", "get_default_engine", "__version__"]
