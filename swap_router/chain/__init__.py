"""Chain-state readers (the I/O boundary of the quoting engine)."""

from swap_router.chain.reader import ChainReader, StaticChainReader, Web3ChainReader

__all__ = ["ChainReader", "StaticChainReader", "Web3ChainReader"]
