"""HTTP API for the AMM engine."""
