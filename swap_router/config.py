"""Engine configuration for the swap router."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from swap_router.constants import (
    DEFAULT_FACTORY,
    DEFAULT_LAUNCHER,
    DEFAULT_MAX_HOPS,
    DEFAULT_TOLERANCE_BPS,
    MAX_HOPS_LIMIT,
    validate_contract_address,
)

ENV_PREFIX = "SWAP_ROUTER_"

_TRUE_VALUES = ("true", "1", "yes")


@dataclass(frozen=True)
class EngineConfig:
    """Centralized configuration for the quote engine.

    Attributes:
        rpc_url: HTTP RPC endpoint. When None the engine has no chain reader
            of its own and one must be injected.
        factory: Pair factory whose pools form the routing graph
        launcher: Launch platform whose tokens get the creator fee tier
        max_hops: Default maximum hops when a request does not set one
        tolerance_bps: Default slippage tolerance (0.5%)
        max_concurrent_reads: Upper bound on in-flight chain reads
        quote_timeout_seconds: Overall time limit for one quote, or None
        rpc_timeout_seconds: Per-request HTTP timeout for the RPC client
        log_level: structlog filtering level name
        log_json: Render logs as JSON lines instead of console output
    """

    rpc_url: str | None = None
    factory: str = DEFAULT_FACTORY
    launcher: str = DEFAULT_LAUNCHER
    max_hops: int = DEFAULT_MAX_HOPS
    tolerance_bps: int = DEFAULT_TOLERANCE_BPS
    max_concurrent_reads: int = 16
    quote_timeout_seconds: float | None = 10.0
    rpc_timeout_seconds: float = 10.0
    log_level: str = "INFO"
    log_json: bool = False

    def __post_init__(self) -> None:
        if not 1 <= self.max_hops <= MAX_HOPS_LIMIT:
            raise ValueError(f"max_hops must be 1..{MAX_HOPS_LIMIT}, got {self.max_hops}")
        if not 0 <= self.tolerance_bps <= 10_000:
            raise ValueError(f"tolerance_bps must be 0..10000, got {self.tolerance_bps}")
        if self.max_concurrent_reads < 1:
            raise ValueError(
                f"max_concurrent_reads must be positive, got {self.max_concurrent_reads}"
            )
        if self.quote_timeout_seconds is not None and self.quote_timeout_seconds <= 0:
            raise ValueError(
                f"quote_timeout_seconds must be positive, got {self.quote_timeout_seconds}"
            )
        for name in ("factory", "launcher"):
            object.__setattr__(self, name, validate_contract_address(name, getattr(self, name)))

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> EngineConfig:
        """Build a config from SWAP_ROUTER_* environment variables.

        Unset variables keep their defaults. An empty
        SWAP_ROUTER_QUOTE_TIMEOUT_SECONDS (or "none") disables the timeout.

        Args:
            environ: Mapping to read instead of os.environ (for tests)

        Raises:
            ValueError: If a variable does not parse or is out of range
        """
        env = os.environ if environ is None else environ

        def get(name: str) -> str | None:
            return env.get(ENV_PREFIX + name)

        kwargs: dict[str, object] = {}
        if (rpc_url := get("RPC_URL")) is not None and rpc_url:
            kwargs["rpc_url"] = rpc_url
        if (factory := get("FACTORY")) is not None:
            kwargs["factory"] = factory
        if (launcher := get("LAUNCHER")) is not None:
            kwargs["launcher"] = launcher
        if (max_hops := get("MAX_HOPS")) is not None:
            kwargs["max_hops"] = int(max_hops)
        if (tolerance := get("TOLERANCE_BPS")) is not None:
            kwargs["tolerance_bps"] = int(tolerance)
        if (reads := get("MAX_CONCURRENT_READS")) is not None:
            kwargs["max_concurrent_reads"] = int(reads)
        if (timeout := get("QUOTE_TIMEOUT_SECONDS")) is not None:
            timeout = timeout.strip()
            kwargs["quote_timeout_seconds"] = (
                None if timeout.lower() in ("", "none") else float(timeout)
            )
        if (rpc_timeout := get("RPC_TIMEOUT_SECONDS")) is not None:
            kwargs["rpc_timeout_seconds"] = float(rpc_timeout)
        if (level := get("LOG_LEVEL")) is not None:
            kwargs["log_level"] = level.upper()
        if (log_json := get("LOG_JSON")) is not None:
            kwargs["log_json"] = log_json.lower() in _TRUE_VALUES

        return cls(**kwargs)  # type: ignore[arg-type]


__all__ = ["ENV_PREFIX", "EngineConfig"]
