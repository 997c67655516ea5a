"""Base types for AMM implementations."""

from dataclasses import dataclass


@dataclass
class SwapResult:
    """Result of simulating a swap through one pool."""

    amount_in: int
    amount_out: int
    pool_id: str
    token_in: str
    token_out: str
    reserve_in: int
    reserve_out: int
