"""Application layer – use cases, ports and in-memory adapters."""
