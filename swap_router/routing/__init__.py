"""Route discovery, evaluation and selection.

Module structure:
- types.py: Route, HopQuote and RouteQuote dataclasses
- pathfinding.py: PathFinder, depth-first candidate enumeration
- evaluation.py: RouteEvaluator, per-hop exact-input/exact-output quoting
- impact.py: price impact per hop and per route
- slippage.py: min-output / max-input bounds
- search.py: RouteSearch, the pure best-route entry point
"""

from swap_router.routing.evaluation import RouteEvaluator
from swap_router.routing.impact import hop_impact_bps, route_impact_bps
from swap_router.routing.pathfinding import PathFinder
from swap_router.routing.search import RouteSearch, validate_search
from swap_router.routing.slippage import SlippageBounds, max_amount_in, min_amount_out
from swap_router.routing.types import HopQuote, Route, RouteQuote

__all__ = [
    "HopQuote",
    "PathFinder",
    "Route",
    "RouteEvaluator",
    "RouteQuote",
    "RouteSearch",
    "SlippageBounds",
    "hop_impact_bps",
    "max_amount_in",
    "min_amount_out",
    "route_impact_bps",
    "validate_search",
]
