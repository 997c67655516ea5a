"""HTTP API for the swap router."""
