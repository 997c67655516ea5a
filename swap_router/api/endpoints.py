"""API endpoints for the swap router."""

import structlog
from fastapi import APIRouter, Depends

from swap_router.engine import QuoteEngine, get_default_engine
from swap_router.models.quote import SwapQuote, SwapQuoteRequest
from swap_router.models.types import short

logger = structlog.get_logger()

router = APIRouter()


def get_engine() -> QuoteEngine:
    """Dependency provider for the quote engine.

    Override this in tests to inject an engine over a static reader:
        app.dependency_overrides[get_engine] = lambda: engine

    Returns:
        The engine to quote with.
    """
    return get_default_engine()


@router.post("/quote", response_model_exclude_none=True, response_model_by_alias=True)
async def quote(
    request: SwapQuoteRequest,
    engine: QuoteEngine = Depends(get_engine),
) -> SwapQuote:
    """Quote the best route for a swap.

    Args:
        request: Tokens, exactly one of amountIn / amountOut, and limits
        engine: Injected engine (via FastAPI Depends)

    Returns:
        SwapQuote with the route, per-hop breakdown and slippage bound.
        None fields are omitted, so an exact-input quote carries
        minAmountOut and no maxAmountIn.

    Error Handling:
        - Invalid request schema: 422 Validation Error (Pydantic)
        - RouterError subclasses: rendered by the app's exception handler
          with the error's status_code
    """
    logger.info(
        "received_quote_request",
        token_in=short(request.token_in),
        token_out=short(request.token_out),
        exact_input=request.exact_input,
        max_hops=request.max_hops,
    )
    return await engine.quote(request)
