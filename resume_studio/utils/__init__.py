"""Shared helpers: Redis access and the circuit breaker."""
